"""
认证 API

用户名密码登录，签发访问令牌
"""

import structlog
from fastapi import APIRouter

from mcp_gateway.api.deps import Users
from mcp_gateway.core.errors import UnauthorizedError
from mcp_gateway.core.security import create_access_token
from mcp_gateway.tools.schemas import LoginRequest, LoginResponse

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
def login(request: LoginRequest, users: Users) -> LoginResponse:
    """
    用户登录

    成功返回 JWT 访问令牌和用户角色
    """
    account = users.authenticate(request.username, request.password)
    if account is None:
        raise UnauthorizedError("Invalid username or password")

    roles = sorted(account.roles)
    token = create_access_token(subject=account.username, roles=roles)

    logger.info("login_success", username=account.username)

    return LoginResponse(token=token, username=account.username, roles=roles)
