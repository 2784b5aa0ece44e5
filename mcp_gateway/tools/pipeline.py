"""
工具调用流水线

所有工具调用都经过同一个固定流程：

1. 记录调用日志（谁调用了什么工具，传了什么参数）
2. 检查调用方是否有权限执行此工具
3. 调用工具的 run() 执行具体业务逻辑并计时
4. 成功：记录耗时，原样返回结果
5. 业务异常（McpToolError）：记录后原样抛出
6. 其他异常：记录完整堆栈，包装为 ToolExecutionError(500)
"""

import time
from typing import Any, Dict, Optional

import structlog

from mcp_gateway.core.errors import McpToolError, ToolExecutionError
from mcp_gateway.core.permissions import Principal, caller_id, check_tool_permission
from mcp_gateway.middleware.metrics import record_tool_call
from mcp_gateway.tools.base import McpTool

logger = structlog.get_logger(__name__)


def invoke_tool(
    tool: McpTool,
    arguments: Optional[Dict[str, Any]],
    principal: Optional[Principal],
    role_prefix: Optional[str] = None,
) -> Any:
    """
    执行工具调用

    Args:
        tool: 满足 McpTool 协议的工具
        arguments: 调用参数
        principal: 调用方，None 视为匿名
        role_prefix: 角色前缀，默认取 settings.ROLE_PREFIX

    Returns:
        工具执行结果

    Raises:
        UnauthorizedError: 工具要求角色而调用方未认证
        ForbiddenError: 调用方角色不满足
        McpToolError: 工具抛出的业务异常
        ToolExecutionError: 其他执行失败
    """
    tool_name = tool.name
    user_id = caller_id(principal)
    args = arguments or {}

    log = logger.bind(tool_name=tool_name, user_id=user_id)
    log.info("tool_invoked", args=args)

    check_tool_permission(tool.required_roles, principal, role_prefix)

    start_time = time.perf_counter()
    try:
        result = tool.run(args, principal)
    except McpToolError as e:
        duration = time.perf_counter() - start_time
        record_tool_call(tool_name, duration, success=False)
        log.warning(
            "tool_error",
            error_code=e.error_code,
            status_code=e.status_code,
            error=e.message,
        )
        raise
    except Exception as e:
        duration = time.perf_counter() - start_time
        record_tool_call(tool_name, duration, success=False)
        log.exception("tool_error", error_type=type(e).__name__, error=str(e))
        raise ToolExecutionError(str(e), status_code=500) from e

    duration = time.perf_counter() - start_time
    record_tool_call(tool_name, duration, success=True)
    log.info("tool_success", duration_ms=int(duration * 1000))

    return result
