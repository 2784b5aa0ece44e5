"""
权限检查模块

基于角色的访问控制 (RBAC)

角色格式说明：
认证层授予的角色通常带有前缀（默认 "ROLE_"，如 "ROLE_ADMIN"），
比较前会去除前缀，所以工具声明所需角色时不需要加前缀。
"""

from dataclasses import dataclass, field
from typing import AbstractSet, FrozenSet, Iterable, Optional

from mcp_gateway.core.config import settings
from mcp_gateway.core.errors import ForbiddenError, UnauthorizedError

ANONYMOUS_USER_ID = "anonymous"

ADMIN_ROLE = "ADMIN"


@dataclass(frozen=True)
class Principal:
    """已认证的调用方"""

    user_id: str
    roles: FrozenSet[str] = field(default_factory=frozenset)
    authenticated: bool = True

    @property
    def is_authenticated(self) -> bool:
        return self.authenticated


# 未认证调用方
ANONYMOUS = Principal(user_id=ANONYMOUS_USER_ID, authenticated=False)


def caller_id(principal: Optional[Principal]) -> str:
    """调用方标识，未认证时为 anonymous"""
    if principal is None or not principal.is_authenticated:
        return ANONYMOUS_USER_ID
    return principal.user_id


def normalize_roles(roles: Iterable[str], prefix: Optional[str] = None) -> FrozenSet[str]:
    """去除角色前缀"""
    if prefix is None:
        prefix = settings.ROLE_PREFIX
    if not prefix:
        return frozenset(roles)
    return frozenset(
        role[len(prefix):] if role.startswith(prefix) else role
        for role in roles
    )


def has_any_role(
    principal: Optional[Principal],
    required_roles: AbstractSet[str],
    prefix: Optional[str] = None,
) -> bool:
    """检查调用方是否拥有任一所需角色"""
    if principal is None or not principal.is_authenticated:
        return False
    return not normalize_roles(principal.roles, prefix).isdisjoint(required_roles)


def check_tool_permission(
    required_roles: AbstractSet[str],
    principal: Optional[Principal],
    prefix: Optional[str] = None,
) -> None:
    """
    工具权限校验

    1. 工具没有角色要求，直接通过
    2. 调用方未认证，401
    3. 调用方角色（去前缀后）与所需角色无交集，403

    Raises:
        UnauthorizedError: 未认证
        ForbiddenError: 权限不足
    """
    if not required_roles:
        return

    if principal is None or not principal.is_authenticated:
        raise UnauthorizedError("Authentication required")

    if not has_any_role(principal, required_roles, prefix):
        readable_roles = ", ".join(sorted(required_roles))
        raise ForbiddenError(f"Required roles: [{readable_roles}]")
