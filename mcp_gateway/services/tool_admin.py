"""
工具管理服务

负责动态工具的注册、注销和生命周期流转。

状态机（由注册表在同一把锁内校验并更新）：

    publish: DRAFT / PENDING_REVIEW / OFFLINE / PUBLISHED -> PUBLISHED
    offline: PUBLISHED / OFFLINE -> OFFLINE
    submit:  DRAFT / REJECTED -> PENDING_REVIEW
    reject:  DRAFT / PENDING_REVIEW -> REJECTED

注册校验全部在修改注册表之前完成。
"""

import re
from typing import Dict, FrozenSet, List, Optional, Tuple

import httpx
import structlog

from mcp_gateway.core.errors import InvalidParamError, ToolConflictError, ToolNotFoundError
from mcp_gateway.tools.base import McpTool
from mcp_gateway.tools.metadata import ToolStatus
from mcp_gateway.tools.proxy import DynamicProxyTool
from mcp_gateway.tools.registry import ToolRegistry
from mcp_gateway.tools.schemas import (
    AdminToolView,
    ToolRegisterRequest,
    ToolRegisterResponse,
)

logger = structlog.get_logger(__name__)

TOOL_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9_]*$")

# 操作 -> (允许的当前状态, 目标状态)
STATUS_TRANSITIONS: Dict[str, Tuple[FrozenSet[ToolStatus], ToolStatus]] = {
    "publish": (
        frozenset({
            ToolStatus.DRAFT,
            ToolStatus.PENDING_REVIEW,
            ToolStatus.OFFLINE,
            ToolStatus.PUBLISHED,
        }),
        ToolStatus.PUBLISHED,
    ),
    "offline": (
        frozenset({ToolStatus.PUBLISHED, ToolStatus.OFFLINE}),
        ToolStatus.OFFLINE,
    ),
    "submit": (
        frozenset({ToolStatus.DRAFT, ToolStatus.REJECTED}),
        ToolStatus.PENDING_REVIEW,
    ),
    "reject": (
        frozenset({ToolStatus.DRAFT, ToolStatus.PENDING_REVIEW}),
        ToolStatus.REJECTED,
    ),
}


def validate_register_request(request: ToolRegisterRequest) -> None:
    """
    校验注册请求

    Raises:
        InvalidParamError: name 或 endpoint 不合法
    """
    if not request.name or not request.name.strip():
        raise InvalidParamError("Tool name is required")

    if not TOOL_NAME_PATTERN.fullmatch(request.name):
        raise InvalidParamError(
            "Tool name must start with a lowercase letter and contain only "
            "lowercase letters, digits and underscores"
        )

    if not request.endpoint or not request.endpoint.strip():
        raise InvalidParamError("Endpoint is required")

    if not request.endpoint.startswith(("http://", "https://")):
        raise InvalidParamError("Endpoint must start with http:// or https://")


def to_admin_view(tool: McpTool) -> AdminToolView:
    """工具 -> 管理端视图"""
    endpoint = None
    method = None
    if isinstance(tool, DynamicProxyTool):
        endpoint = tool.endpoint
        method = tool.method

    return AdminToolView(
        name=tool.name,
        description=tool.description,
        input_schema=tool.input_schema,
        required_roles=sorted(tool.required_roles),
        endpoint=endpoint,
        method=method,
        metadata=tool.metadata.to_dict(),
    )


class ToolAdminService:
    """工具管理服务"""

    def __init__(
        self,
        registry: ToolRegistry,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Args:
            registry: 工具注册表
            transport: 传给动态代理工具的 httpx transport（测试用）
        """
        self.registry = registry
        self._transport = transport

    def register_dynamic_tool(
        self,
        request: ToolRegisterRequest,
        operator: str,
    ) -> ToolRegisterResponse:
        """
        注册动态工具

        Raises:
            InvalidParamError: 校验失败
            ToolConflictError: 同名工具已存在
        """
        validate_register_request(request)

        tool = DynamicProxyTool(request, created_by=operator, transport=self._transport)
        if not self.registry.register(tool):
            raise ToolConflictError(tool.name)

        logger.info(
            "dynamic_tool_registered",
            tool_name=tool.name,
            endpoint=tool.endpoint,
            method=tool.method,
            operator=operator,
        )

        return ToolRegisterResponse(
            name=tool.name,
            description=tool.description,
            endpoint=tool.endpoint,
            category=tool.metadata.category,
            status=tool.metadata.status.value,
            created_by=tool.metadata.created_by,
        )

    def list_tools(self) -> List[AdminToolView]:
        """所有工具（含未发布）"""
        return [to_admin_view(tool) for tool in self.registry.get_all_tools()]

    def get_tool_view(self, tool_name: str) -> AdminToolView:
        tool = self.registry.get_tool(tool_name)
        if tool is None:
            raise ToolNotFoundError(tool_name)
        return to_admin_view(tool)

    def unregister(self, tool_name: str, operator: str) -> None:
        """
        注销工具

        Raises:
            ToolNotFoundError: 工具不存在
        """
        if not self.registry.unregister(tool_name):
            raise ToolNotFoundError(tool_name)
        logger.info("tool_unregistered_by_admin", tool_name=tool_name, operator=operator)

    def change_status(self, tool_name: str, action: str, operator: str) -> AdminToolView:
        """
        执行生命周期操作

        Raises:
            InvalidParamError: 未知操作
            ToolNotFoundError: 工具不存在
            InvalidStatusTransitionError: 当前状态不允许此操作
        """
        transition = STATUS_TRANSITIONS.get(action)
        if transition is None:
            raise InvalidParamError(f"Unknown action: {action}")

        allowed_from, target = transition
        if not self.registry.update_tool_status(tool_name, target, operator, allowed_from):
            raise ToolNotFoundError(tool_name)

        return self.get_tool_view(tool_name)

    def publish(self, tool_name: str, operator: str) -> AdminToolView:
        return self.change_status(tool_name, "publish", operator)

    def offline(self, tool_name: str, operator: str) -> AdminToolView:
        return self.change_status(tool_name, "offline", operator)

    def submit(self, tool_name: str, operator: str) -> AdminToolView:
        return self.change_status(tool_name, "submit", operator)

    def reject(self, tool_name: str, operator: str) -> AdminToolView:
        return self.change_status(tool_name, "reject", operator)
