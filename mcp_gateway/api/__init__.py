"""
API 路由模块

统一注册所有 API 路由
"""

from fastapi import APIRouter

from mcp_gateway.api.v1 import admin_tools, auth, health, manifest, tools

router = APIRouter()

# 健康检查
router.include_router(health.router, prefix="/health", tags=["健康检查"])

# 认证
router.include_router(auth.router, prefix="/auth", tags=["认证"])

# MCP 工具发现与执行
router.include_router(manifest.router, prefix="/mcp", tags=["MCP 工具"])
router.include_router(tools.router, prefix="/mcp", tags=["MCP 工具"])

# 工具管理
router.include_router(admin_tools.router, prefix="/admin/tools", tags=["工具管理"])
