"""
工具契约

任何满足 McpTool 协议的对象都可以注册到 ToolRegistry：
身份（name/description）、输入 schema、所需角色、生命周期元数据、核心执行逻辑 run()。

run() 只包含业务逻辑，日志、权限、计时、异常归一化由
mcp_gateway.tools.pipeline.invoke_tool 统一完成，工具实现不能绕过。
"""

from typing import Any, Callable, Dict, FrozenSet, Iterable, Optional, Protocol, runtime_checkable

from mcp_gateway.core.permissions import Principal
from mcp_gateway.tools.metadata import ToolMetadata

ToolHandler = Callable[[Dict[str, Any], Optional[Principal]], Any]


@runtime_checkable
class McpTool(Protocol):
    """工具协议"""

    name: str
    description: str
    input_schema: Dict[str, Any]
    required_roles: FrozenSet[str]
    metadata: ToolMetadata

    def run(self, arguments: Dict[str, Any], principal: Optional[Principal]) -> Any:
        """核心执行逻辑，返回可 JSON 序列化的结果"""
        ...


class StaticTool:
    """内置工具：业务逻辑嵌入在进程内的处理函数"""

    def __init__(
        self,
        name: str,
        description: str,
        input_schema: Dict[str, Any],
        handler: ToolHandler,
        required_roles: Iterable[str] = (),
        metadata: Optional[ToolMetadata] = None,
    ):
        self.name = name
        self.description = description
        self.input_schema = input_schema
        self.handler = handler
        self.required_roles = frozenset(required_roles)
        self.metadata = metadata or ToolMetadata.builtin_default()

    def run(self, arguments: Dict[str, Any], principal: Optional[Principal]) -> Any:
        return self.handler(arguments, principal)

    def __repr__(self) -> str:
        return f"<StaticTool(name={self.name}, status={self.metadata.status.value})>"
