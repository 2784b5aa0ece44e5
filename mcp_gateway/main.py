"""
MCP 工具网关 - 主入口

职责:
- 工具发现（清单）与执行
- 动态工具注册与生命周期管理
- JWT 认证与基于角色的工具权限
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mcp_gateway import __version__
from mcp_gateway.api import router as api_router
from mcp_gateway.core.config import settings
from mcp_gateway.core.errors import ErrorCode, McpToolError
from mcp_gateway.core.logging import setup_logging
from mcp_gateway.middleware import MetricsMiddleware, metrics_endpoint
from mcp_gateway.tools.registry import get_tool_registry

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理"""
    setup_logging()
    registry = get_tool_registry()
    logger.info(
        "mcp_gateway_started",
        env=settings.ENV,
        version=__version__,
        tool_count=len(registry),
    )
    yield
    logger.info("mcp_gateway_stopped")


def _error_response(error_code: str, message: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error_code, "message": message, "code": status_code},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """注册全局异常处理器，统一错误响应格式"""

    @app.exception_handler(McpToolError)
    async def mcp_tool_error_handler(request: Request, exc: McpToolError) -> JSONResponse:
        logger.warning(
            "request_failed",
            path=request.url.path,
            error_code=exc.error_code,
            status_code=exc.status_code,
            error=exc.message,
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        message = "; ".join(
            f"{'.'.join(str(loc) for loc in err.get('loc', ()))}: {err.get('msg')}"
            for err in errors
        ) or "Invalid request"
        logger.warning("request_validation_failed", path=request.url.path, errors=len(errors))
        return _error_response(ErrorCode.VALIDATION_ERROR, message, 400)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled_error", path=request.url.path, error_type=type(exc).__name__)
        return _error_response(ErrorCode.INTERNAL_ERROR, "Internal server error", 500)


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    app = FastAPI(
        title="MCP 工具网关",
        description="工具发现、执行与动态注册",
        version=__version__,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if settings.METRICS_ENABLED:
        app.add_middleware(MetricsMiddleware)
        app.add_route("/metrics", metrics_endpoint, methods=["GET"])

    register_exception_handlers(app)

    app.include_router(api_router)

    return app


app = create_app()
