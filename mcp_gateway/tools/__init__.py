"""
MCP 工具模块

- base: 工具协议与内置工具
- proxy: 动态代理工具
- registry: 工具注册表
- pipeline: 统一调用流水线
"""

from mcp_gateway.tools.base import McpTool, StaticTool
from mcp_gateway.tools.metadata import ToolMetadata, ToolSourceType, ToolStatus
from mcp_gateway.tools.pipeline import invoke_tool
from mcp_gateway.tools.proxy import DynamicProxyTool
from mcp_gateway.tools.registry import ToolRegistry, create_tool_registry, get_tool_registry

__all__ = [
    "McpTool",
    "StaticTool",
    "DynamicProxyTool",
    "ToolMetadata",
    "ToolSourceType",
    "ToolStatus",
    "ToolRegistry",
    "create_tool_registry",
    "get_tool_registry",
    "invoke_tool",
]
