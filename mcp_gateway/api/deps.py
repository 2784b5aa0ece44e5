"""
API 依赖注入

提供注册表、服务、当前调用方等依赖。
测试通过 app.dependency_overrides 替换 get_registry 即可使用独立注册表。
"""

from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from mcp_gateway.core.errors import ForbiddenError, UnauthorizedError
from mcp_gateway.core.permissions import ADMIN_ROLE, Principal, normalize_roles
from mcp_gateway.core.security import decode_token
from mcp_gateway.core.users import UserDirectory, get_user_directory
from mcp_gateway.services.tool_admin import ToolAdminService
from mcp_gateway.services.tool_gateway import ToolGatewayService
from mcp_gateway.tools.registry import ToolRegistry, get_tool_registry

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


def get_registry() -> ToolRegistry:
    """进程级工具注册表"""
    return get_tool_registry()


def get_users() -> UserDirectory:
    return get_user_directory()


def get_optional_principal(
    token: Annotated[Optional[str], Depends(oauth2_scheme)],
    users: Annotated[UserDirectory, Depends(get_users)],
) -> Optional[Principal]:
    """
    获取当前调用方（可选）

    没有 token、token 无效或用户不存在时返回 None
    """
    if not token:
        return None

    payload = decode_token(token)
    if not payload:
        return None

    username = payload.get("sub")
    if not username:
        return None

    account = users.get(username)
    if account is None:
        return None

    return account.to_principal()


def get_current_principal(
    principal: Annotated[Optional[Principal], Depends(get_optional_principal)],
) -> Principal:
    """获取当前调用方，未认证抛出 401"""
    if principal is None:
        raise UnauthorizedError()
    return principal


def require_admin(
    principal: Annotated[Principal, Depends(get_current_principal)],
) -> Principal:
    """要求管理员角色"""
    if ADMIN_ROLE not in normalize_roles(principal.roles):
        raise ForbiddenError("Admin role required")
    return principal


def get_gateway_service(
    registry: Annotated[ToolRegistry, Depends(get_registry)],
) -> ToolGatewayService:
    return ToolGatewayService(registry)


def get_admin_service(
    registry: Annotated[ToolRegistry, Depends(get_registry)],
) -> ToolAdminService:
    return ToolAdminService(registry)


# 类型别名
CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
AdminPrincipal = Annotated[Principal, Depends(require_admin)]
GatewayService = Annotated[ToolGatewayService, Depends(get_gateway_service)]
AdminService = Annotated[ToolAdminService, Depends(get_admin_service)]
Users = Annotated[UserDirectory, Depends(get_users)]
