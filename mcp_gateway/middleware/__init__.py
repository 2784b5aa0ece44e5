"""
中间件模块

提供 Prometheus 指标中间件
"""

from mcp_gateway.middleware.metrics import MetricsMiddleware, metrics_endpoint, record_tool_call

__all__ = [
    "MetricsMiddleware",
    "metrics_endpoint",
    "record_tool_call",
]
