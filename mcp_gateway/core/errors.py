"""
错误码与异常

所有业务异常都携带错误码和建议的 HTTP 状态码，
由 main.py 中注册的异常处理器统一转换为错误响应：

    {"error": "<code>", "message": "<text>", "code": <http-status>}
"""

from typing import Any, Dict


class ErrorCode:
    """错误码常量"""

    # 认证相关
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"

    # 工具相关
    TOOL_NOT_FOUND = "tool_not_found"
    TOOL_EXECUTION_ERROR = "tool_execution_error"
    TOOL_CONFLICT = "tool_conflict"
    INVALID_STATUS_TRANSITION = "invalid_status_transition"

    # 参数相关
    INVALID_PARAM = "invalid_param"
    VALIDATION_ERROR = "validation_error"

    # 通用
    INTERNAL_ERROR = "internal_error"


class McpToolError(Exception):
    """工具调用异常基类"""

    def __init__(self, error_code: str, message: str, status_code: int = 500):
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """转换为错误响应体"""
        return {
            "error": self.error_code,
            "message": self.message,
            "code": self.status_code,
        }


class UnauthorizedError(McpToolError):
    """未认证"""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(ErrorCode.UNAUTHORIZED, message, 401)


class ForbiddenError(McpToolError):
    """已认证但权限不足，或工具未发布"""

    def __init__(self, message: str):
        super().__init__(ErrorCode.FORBIDDEN, message, 403)


class ToolNotFoundError(McpToolError):
    """工具不存在"""

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(ErrorCode.TOOL_NOT_FOUND, f"Tool not found: {tool_name}", 404)


class InvalidParamError(McpToolError):
    """参数错误"""

    def __init__(self, message: str):
        super().__init__(ErrorCode.INVALID_PARAM, message, 400)


class ToolConflictError(McpToolError):
    """同名工具已存在"""

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(ErrorCode.TOOL_CONFLICT, f"Tool already exists: {tool_name}", 409)


class InvalidStatusTransitionError(McpToolError):
    """生命周期状态不允许此操作"""

    def __init__(self, tool_name: str, current: str, target: str):
        self.tool_name = tool_name
        self.current = current
        self.target = target
        super().__init__(
            ErrorCode.INVALID_STATUS_TRANSITION,
            f"Cannot change tool '{tool_name}' from {current} to {target}",
            409,
        )


class ToolExecutionError(McpToolError):
    """工具执行失败（业务逻辑或远程调用）"""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(ErrorCode.TOOL_EXECUTION_ERROR, message, status_code)
