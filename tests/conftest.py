"""
测试配置和 fixtures
"""

from typing import Callable, Dict, Generator, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from mcp_gateway.api.deps import get_admin_service, get_registry
from mcp_gateway.core.permissions import Principal
from mcp_gateway.core.security import create_access_token
from mcp_gateway.main import app
from mcp_gateway.services.tool_admin import ToolAdminService
from mcp_gateway.tools.registry import ToolRegistry, create_tool_registry
from mcp_gateway.tools.schemas import ToolRegisterRequest


class RecordingTransport(httpx.MockTransport):
    """记录收到的请求，按 handler 返回响应"""

    def __init__(self, handler: Optional[Callable[[httpx.Request], httpx.Response]] = None):
        self.requests: List[httpx.Request] = []

        def _handle(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            if handler is None:
                return httpx.Response(200, json={"ok": True})
            return handler(request)

        super().__init__(_handle)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def registry() -> ToolRegistry:
    """独立注册表（含内置工具）"""
    return create_tool_registry()


@pytest.fixture
def empty_registry() -> ToolRegistry:
    """空注册表"""
    return create_tool_registry(include_builtin=False)


@pytest.fixture
def transport() -> RecordingTransport:
    """远程服务 Mock"""
    return RecordingTransport()


@pytest.fixture
def admin_principal() -> Principal:
    return Principal(user_id="admin", roles=frozenset({"ROLE_ADMIN", "ROLE_USER"}))


@pytest.fixture
def user_principal() -> Principal:
    return Principal(user_id="user", roles=frozenset({"ROLE_USER", "ROLE_WAREHOUSE_VIEWER"}))


@pytest.fixture
def make_request() -> Callable[..., ToolRegisterRequest]:
    """构造注册请求"""

    def _make(**overrides) -> ToolRegisterRequest:
        data = {
            "name": "weather_query",
            "description": "查询天气",
            "endpoint": "http://remote.test/weather",
            "method": "POST",
            "params": [{"name": "city", "type": "string", "required": True}],
        }
        data.update(overrides)
        return ToolRegisterRequest.model_validate(data)

    return _make


@pytest.fixture
def client(registry: ToolRegistry, transport: RecordingTransport) -> Generator[TestClient, None, None]:
    """测试客户端，注册表和远程服务均为测试替身"""
    app.dependency_overrides[get_registry] = lambda: registry
    app.dependency_overrides[get_admin_service] = lambda: ToolAdminService(registry, transport=transport)

    yield TestClient(app, raise_server_exceptions=False)

    app.dependency_overrides.clear()


def bearer(username: str, roles: List[str]) -> Dict[str, str]:
    """构造 Authorization 请求头"""
    token = create_access_token(subject=username, roles=roles)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers() -> Dict[str, str]:
    return bearer("admin", ["ROLE_ADMIN", "ROLE_USER"])


@pytest.fixture
def user_headers() -> Dict[str, str]:
    return bearer("user", ["ROLE_USER", "ROLE_WAREHOUSE_VIEWER"])
