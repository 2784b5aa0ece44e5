"""
Prometheus 指标中间件

采集 HTTP 请求、工具调用等核心指标
"""

import time
from typing import Callable

from fastapi import Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware


# ============================================================
# HTTP 请求指标
# ============================================================

HTTP_REQUESTS_TOTAL = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status_code"],
)

HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

HTTP_REQUESTS_IN_PROGRESS = Gauge(
    "http_requests_in_progress",
    "Number of HTTP requests in progress",
    ["method", "path"],
)


# ============================================================
# 工具调用指标
# ============================================================

TOOL_CALLS_TOTAL = Counter(
    "mcp_tool_calls_total",
    "Total MCP tool invocations",
    ["tool", "status"],  # status: success | error
)

TOOL_CALL_DURATION_SECONDS = Histogram(
    "mcp_tool_call_duration_seconds",
    "MCP tool invocation duration in seconds",
    ["tool"],
    buckets=[0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

REGISTERED_TOOLS = Gauge(
    "mcp_registered_tools",
    "Number of tools in the registry",
)


# ============================================================
# 中间件
# ============================================================

class MetricsMiddleware(BaseHTTPMiddleware):
    """Prometheus 指标采集中间件"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # 跳过 metrics 端点自身
        if request.url.path == "/metrics":
            return await call_next(request)

        method = request.method
        path = self._normalize_path(request.url.path)

        HTTP_REQUESTS_IN_PROGRESS.labels(method=method, path=path).inc()

        start_time = time.perf_counter()
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
        finally:
            duration = time.perf_counter() - start_time

            HTTP_REQUESTS_TOTAL.labels(
                method=method,
                path=path,
                status_code=status_code,
            ).inc()

            HTTP_REQUEST_DURATION_SECONDS.labels(
                method=method,
                path=path,
            ).observe(duration)

            HTTP_REQUESTS_IN_PROGRESS.labels(method=method, path=path).dec()

        return response

    def _normalize_path(self, path: str) -> str:
        """
        规范化路径，将工具名替换为占位符，避免标签基数随工具数量膨胀

        例如: /mcp/tools/get_warehouse_inventory -> /mcp/tools/{name}
              /admin/tools/foo/publish -> /admin/tools/{name}/publish
        """
        parts = [p for p in path.split("/") if p]

        for i in range(1, len(parts)):
            if parts[i - 1] == "tools":
                parts[i] = "{name}"
                break

        return "/" + "/".join(parts)


# ============================================================
# Metrics 端点
# ============================================================

async def metrics_endpoint(request: Request) -> Response:
    """Prometheus metrics 端点"""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )


# ============================================================
# 辅助函数
# ============================================================

def record_tool_call(tool_name: str, duration: float, success: bool = True) -> None:
    """记录工具调用"""
    TOOL_CALL_DURATION_SECONDS.labels(tool=tool_name).observe(duration)
    TOOL_CALLS_TOTAL.labels(
        tool=tool_name,
        status="success" if success else "error",
    ).inc()


def set_registered_tools(count: int) -> None:
    """更新注册工具数量"""
    REGISTERED_TOOLS.set(count)
