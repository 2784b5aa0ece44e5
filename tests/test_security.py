"""
认证与用户目录测试
"""

from datetime import timedelta

from jose import jwt

from mcp_gateway.core.config import settings
from mcp_gateway.core.security import (
    create_access_token,
    decode_token,
    get_password_hash,
    verify_password,
)
from mcp_gateway.core.users import get_user_directory


class TestToken:
    """JWT"""

    def test_round_trip(self):
        token = create_access_token("admin", roles=["ROLE_USER", "ROLE_ADMIN"])

        payload = decode_token(token)

        assert payload["sub"] == "admin"
        assert payload["roles"] == ["ROLE_ADMIN", "ROLE_USER"]
        assert payload["type"] == "access"

    def test_expired(self):
        token = create_access_token("admin", expires_delta=timedelta(minutes=-1))

        assert decode_token(token) is None

    def test_wrong_type(self):
        token = jwt.encode(
            {"sub": "admin", "type": "refresh"},
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )

        assert decode_token(token) is None

    def test_garbage(self):
        assert decode_token("garbage") is None


class TestUserDirectory:
    """用户目录"""

    def test_password_hash(self):
        hashed = get_password_hash("secret")

        assert hashed != "secret"
        assert verify_password("secret", hashed)
        assert not verify_password("other", hashed)

    def test_demo_accounts(self):
        users = get_user_directory()

        admin = users.authenticate("admin", "admin123")
        assert admin is not None
        assert admin.to_principal().roles == frozenset({"ROLE_ADMIN", "ROLE_USER"})

        user = users.authenticate("user", "user123")
        assert user is not None
        assert "ROLE_WAREHOUSE_VIEWER" in user.roles

    def test_authenticate_failures(self):
        users = get_user_directory()

        assert users.authenticate("admin", "wrong") is None
        assert users.authenticate("nobody", "admin123") is None
