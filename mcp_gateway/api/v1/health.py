"""
健康检查 API
"""

from fastapi import APIRouter, Depends

from mcp_gateway import __version__
from mcp_gateway.api.deps import get_registry
from mcp_gateway.core.config import settings
from mcp_gateway.tools.registry import ToolRegistry

router = APIRouter()


@router.get("")
def health_check(registry: ToolRegistry = Depends(get_registry)):
    """
    健康检查

    返回服务状态和已注册工具数量
    """
    return {
        "status": "healthy",
        "service": settings.SERVICE_NAME,
        "version": __version__,
        "tools": len(registry),
    }


@router.get("/ready")
def readiness_check():
    """
    就绪检查

    用于 Kubernetes readiness probe
    """
    return {"ready": True}


@router.get("/live")
def liveness_check():
    """
    存活检查

    用于 Kubernetes liveness probe
    """
    return {"alive": True}
