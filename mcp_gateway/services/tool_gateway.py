"""
工具网关服务

发现（清单）与执行的统一入口：
按名称解析工具，检查发布状态，再交给调用流水线执行。
"""

from typing import Any, Dict, List, Optional

import structlog

from mcp_gateway.core.errors import ForbiddenError, ToolNotFoundError
from mcp_gateway.core.permissions import Principal, caller_id
from mcp_gateway.tools.base import McpTool
from mcp_gateway.tools.metadata import ToolStatus
from mcp_gateway.tools.pipeline import invoke_tool
from mcp_gateway.tools.registry import ToolRegistry
from mcp_gateway.tools.schemas import ToolDefinition

logger = structlog.get_logger(__name__)


class ToolGatewayService:
    """工具网关服务"""

    def __init__(self, registry: ToolRegistry):
        self.registry = registry

    def manifest(self) -> List[ToolDefinition]:
        """已发布工具的清单"""
        return [
            ToolDefinition(
                name=tool.name,
                description=tool.description,
                input_schema=tool.input_schema,
            )
            for tool in self.registry.get_published_tools()
        ]

    def resolve(self, tool_name: str) -> McpTool:
        """
        解析可执行的工具

        Raises:
            ToolNotFoundError: 工具不存在
            ForbiddenError: 工具未发布
        """
        tool = self.registry.get_tool(tool_name)
        if tool is None:
            raise ToolNotFoundError(tool_name)

        if tool.metadata.status != ToolStatus.PUBLISHED:
            logger.info(
                "tool_not_available",
                tool_name=tool_name,
                status=tool.metadata.status.value,
            )
            raise ForbiddenError(f"Tool is not available: {tool_name}")

        return tool

    def execute(
        self,
        tool_name: str,
        arguments: Optional[Dict[str, Any]],
        principal: Optional[Principal],
    ) -> Any:
        """执行工具"""
        logger.debug("tool_execute_requested", tool_name=tool_name, user_id=caller_id(principal))
        tool = self.resolve(tool_name)
        return invoke_tool(tool, arguments, principal)
