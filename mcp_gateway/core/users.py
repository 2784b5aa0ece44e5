"""
用户目录

内存中的演示账号，真实部署应替换为外部身份服务。
角色沿用 "ROLE_" 前缀约定，比较时由权限模块去除。
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, FrozenSet, Iterable, List, Optional

import structlog

from mcp_gateway.core.permissions import Principal
from mcp_gateway.core.security import get_password_hash, verify_password

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class UserAccount:
    """用户账号"""

    username: str
    password_hash: str
    roles: FrozenSet[str]

    def to_principal(self) -> Principal:
        return Principal(user_id=self.username, roles=self.roles)


class UserDirectory:
    """用户目录（只读）"""

    def __init__(self, accounts: Iterable[UserAccount]):
        self._accounts: Dict[str, UserAccount] = {a.username: a for a in accounts}

    def get(self, username: str) -> Optional[UserAccount]:
        return self._accounts.get(username)

    def authenticate(self, username: str, password: str) -> Optional[UserAccount]:
        """校验用户名密码，失败返回 None"""
        account = self._accounts.get(username)
        if account is None or not verify_password(password, account.password_hash):
            logger.warning("login_failed", username=username)
            return None
        return account


def _demo_accounts() -> List[UserAccount]:
    return [
        UserAccount(
            username="admin",
            password_hash=get_password_hash("admin123"),
            roles=frozenset({"ROLE_ADMIN", "ROLE_USER"}),
        ),
        UserAccount(
            username="user",
            password_hash=get_password_hash("user123"),
            roles=frozenset({"ROLE_USER", "ROLE_WAREHOUSE_VIEWER"}),
        ),
    ]


@lru_cache
def get_user_directory() -> UserDirectory:
    """获取用户目录单例"""
    return UserDirectory(_demo_accounts())
