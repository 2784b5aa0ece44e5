"""
MCP 工具执行 API

请求体即工具参数（JSON 对象），结果包装为 {"result": ...}
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body

from mcp_gateway.api.deps import CurrentPrincipal, GatewayService
from mcp_gateway.tools.schemas import SuccessResponse

router = APIRouter()


@router.post("/tools/{tool_name}", response_model=SuccessResponse)
def execute_tool(
    tool_name: str,
    principal: CurrentPrincipal,
    service: GatewayService,
    arguments: Optional[Dict[str, Any]] = Body(default=None),
) -> SuccessResponse:
    """执行工具"""
    result = service.execute(tool_name, arguments or {}, principal)
    return SuccessResponse(result=result)
