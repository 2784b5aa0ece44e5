"""
MCP 工具清单 API
"""

from fastapi import APIRouter

from mcp_gateway.api.deps import CurrentPrincipal, GatewayService
from mcp_gateway.tools.schemas import ManifestResponse

router = APIRouter()


@router.get("/manifest", response_model=ManifestResponse, response_model_by_alias=True)
def get_manifest(principal: CurrentPrincipal, service: GatewayService) -> ManifestResponse:
    """获取已发布工具的清单"""
    return ManifestResponse(tools=service.manifest())
