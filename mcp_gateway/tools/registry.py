"""
工具注册表

进程内工具目录，按名称索引，是"工具是否存在"和"当前状态"的唯一来源。

并发约束：
- 所有写操作和多步读操作都在同一把 RLock 内完成
- 注册为"不存在才插入"，同名并发注册只有一个成功
- 状态更新与注销串行化：要么更新先于删除，要么更新发现工具已不存在
- 工具执行期间不持有锁
"""

import threading
from functools import lru_cache
from typing import Collection, Dict, Iterable, List, Optional, Tuple

import structlog

from mcp_gateway.core.errors import InvalidStatusTransitionError
from mcp_gateway.middleware.metrics import set_registered_tools
from mcp_gateway.tools.base import McpTool
from mcp_gateway.tools.builtin import load_builtin_tools
from mcp_gateway.tools.metadata import ToolStatus

logger = structlog.get_logger(__name__)


class ToolRegistry:
    """工具注册表"""

    def __init__(self, tools: Iterable[McpTool] = ()):
        self._tools: Dict[str, McpTool] = {}
        self._lock = threading.RLock()
        for tool in tools:
            self.register(tool)
        logger.info("tool_registry_initialized", tool_count=len(self))

    def register(self, tool: McpTool) -> bool:
        """
        注册工具

        同名工具已存在时不覆盖，返回 False 由调用方决定如何上报冲突。

        Returns:
            True 表示已插入，False 表示名称冲突
        """
        name = tool.name
        with self._lock:
            if name in self._tools:
                logger.warning("tool_already_registered", tool_name=name)
                return False
            self._tools[name] = tool
            count = len(self._tools)

        set_registered_tools(count)
        logger.info("tool_registered", tool_name=name)
        return True

    def get_tool(self, name: str) -> Optional[McpTool]:
        """获取工具，不存在返回 None"""
        with self._lock:
            return self._tools.get(name)

    def has_tool(self, name: str) -> bool:
        """检查工具是否存在"""
        with self._lock:
            return name in self._tools

    def get_all_tools(self) -> Tuple[McpTool, ...]:
        """所有工具的快照（不可修改）"""
        with self._lock:
            return tuple(self._tools.values())

    def unregister(self, name: str) -> bool:
        """
        注销工具

        不存在时静默忽略。

        Returns:
            是否确实移除了工具
        """
        with self._lock:
            removed = self._tools.pop(name, None)
            count = len(self._tools)

        if removed is None:
            return False

        set_registered_tools(count)
        logger.info("tool_unregistered", tool_name=name)
        return True

    def get_published_tools(self) -> List[McpTool]:
        """所有已发布的工具（清单使用）"""
        with self._lock:
            return [
                tool for tool in self._tools.values()
                if tool.metadata.status == ToolStatus.PUBLISHED
            ]

    def update_tool_status(
        self,
        name: str,
        status: ToolStatus,
        operator: str,
        allowed_from: Optional[Collection[ToolStatus]] = None,
    ) -> bool:
        """
        更新工具状态，同时记录操作人和更新时间

        Args:
            name: 工具名称
            status: 新状态
            operator: 操作人
            allowed_from: 允许的当前状态，None 表示不限制

        Returns:
            工具不存在返回 False，否则 True

        Raises:
            InvalidStatusTransitionError: 当前状态不在 allowed_from 中
        """
        with self._lock:
            tool = self._tools.get(name)
            if tool is None:
                return False

            current = tool.metadata.status
            if allowed_from is not None and current not in allowed_from:
                raise InvalidStatusTransitionError(name, current.value, status.value)

            tool.metadata = tool.metadata.with_status(status, operator)

        logger.info(
            "tool_status_updated",
            tool_name=name,
            from_status=current.value,
            status=status.value,
            operator=operator,
        )
        return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._tools)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._tools


def create_tool_registry(include_builtin: bool = True) -> ToolRegistry:
    """创建独立的注册表（测试可各自创建，互不影响）"""
    if not include_builtin:
        return ToolRegistry()

    return ToolRegistry(load_builtin_tools())


@lru_cache
def get_tool_registry() -> ToolRegistry:
    """获取进程级注册表"""
    return create_tool_registry()
