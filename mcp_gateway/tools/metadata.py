"""
工具生命周期元数据

ToolMetadata 是不可变值对象，状态变更时由注册表整体替换，
并发读取方永远看到完整的一份元数据。
"""

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class ToolStatus(str, Enum):
    """工具状态"""

    DRAFT = "DRAFT"
    PENDING_REVIEW = "PENDING_REVIEW"
    PUBLISHED = "PUBLISHED"
    OFFLINE = "OFFLINE"
    REJECTED = "REJECTED"

    @property
    def display_name(self) -> str:
        return _STATUS_DISPLAY_NAMES[self]


_STATUS_DISPLAY_NAMES = {
    ToolStatus.DRAFT: "草稿",
    ToolStatus.PENDING_REVIEW: "待审核",
    ToolStatus.PUBLISHED: "已发布",
    ToolStatus.OFFLINE: "已下架",
    ToolStatus.REJECTED: "已拒绝",
}


class ToolSourceType(str, Enum):
    """工具来源"""

    BUILTIN = "BUILTIN"
    DYNAMIC = "DYNAMIC"


SYSTEM_OPERATOR = "system"
BUILTIN_CATEGORY = "builtin"
DEFAULT_DYNAMIC_CATEGORY = "custom"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ToolMetadata:
    """工具元数据"""

    created_by: str
    created_at: datetime
    updated_by: str
    updated_at: datetime
    category: str
    status: ToolStatus
    source_type: ToolSourceType

    @classmethod
    def builtin_default(cls) -> "ToolMetadata":
        """内置工具：系统创建，直接发布"""
        now = utcnow()
        return cls(
            created_by=SYSTEM_OPERATOR,
            created_at=now,
            updated_by=SYSTEM_OPERATOR,
            updated_at=now,
            category=BUILTIN_CATEGORY,
            status=ToolStatus.PUBLISHED,
            source_type=ToolSourceType.BUILTIN,
        )

    @classmethod
    def for_dynamic_tool(cls, username: str, category: Optional[str] = None) -> "ToolMetadata":
        """动态注册工具：默认为草稿状态"""
        now = utcnow()
        return cls(
            created_by=username,
            created_at=now,
            updated_by=username,
            updated_at=now,
            category=category or DEFAULT_DYNAMIC_CATEGORY,
            status=ToolStatus.DRAFT,
            source_type=ToolSourceType.DYNAMIC,
        )

    def with_status(self, status: ToolStatus, operator: str) -> "ToolMetadata":
        """返回变更状态后的新元数据"""
        return replace(self, status=status, updated_by=operator, updated_at=utcnow())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "createdBy": self.created_by,
            "createdAt": self.created_at.isoformat(),
            "updatedBy": self.updated_by,
            "updatedAt": self.updated_at.isoformat(),
            "category": self.category,
            "status": self.status.value,
            "statusName": self.status.display_name,
            "sourceType": self.source_type.value,
        }
