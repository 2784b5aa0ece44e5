"""
动态代理工具测试

远程服务全部使用 httpx.MockTransport，不访问真实网络
"""

import json

import httpx
import pytest

from conftest import RecordingTransport
from mcp_gateway.core.errors import InvalidParamError, ToolExecutionError
from mcp_gateway.tools.base import McpTool
from mcp_gateway.tools.metadata import ToolSourceType, ToolStatus
from mcp_gateway.tools.proxy import DynamicProxyTool, build_url_with_params
from mcp_gateway.tools.schemas import ToolRegisterRequest


def make_tool(transport: httpx.BaseTransport, **overrides) -> DynamicProxyTool:
    data = {
        "name": "remote_tool",
        "description": "远程工具",
        "endpoint": "http://x/y",
        "method": "POST",
    }
    data.update(overrides)
    return DynamicProxyTool(ToolRegisterRequest.model_validate(data), "admin", transport=transport)


class TestConstruction:
    """构造"""

    def test_metadata_and_schema(self, transport):
        tool = make_tool(
            transport,
            params=[{"name": "city", "type": "string", "required": True, "description": "城市"}],
            requiredRoles=["WEATHER"],
        )

        assert isinstance(tool, McpTool)
        assert tool.metadata.status == ToolStatus.DRAFT
        assert tool.metadata.source_type == ToolSourceType.DYNAMIC
        assert tool.metadata.category == "custom"
        assert tool.metadata.created_by == "admin"
        assert tool.required_roles == frozenset({"WEATHER"})
        assert tool.input_schema == {
            "type": "object",
            "properties": {"city": {"type": "string", "description": "城市"}},
            "required": ["city"],
        }

    def test_schema_is_cached(self, transport):
        tool = make_tool(transport)
        assert tool.input_schema is tool.input_schema


class TestRequestMapping:
    """请求映射"""

    def test_get_uses_query_and_no_body(self, transport):
        tool = make_tool(transport, method="GET")

        tool.run({"a": "1"}, None)

        request = transport.last_request
        assert request.method == "GET"
        assert str(request.url) == "http://x/y?a=1"
        assert request.content == b""

    def test_post_uses_json_body(self, transport):
        tool = make_tool(transport, method="post")

        tool.run({"a": "1"}, None)

        request = transport.last_request
        assert request.method == "POST"
        assert str(request.url) == "http://x/y"
        assert json.loads(request.content) == {"a": "1"}

    def test_put_uses_json_body(self, transport):
        make_tool(transport, method="PUT").run({"a": 1}, None)

        assert transport.last_request.method == "PUT"
        assert json.loads(transport.last_request.content) == {"a": 1}

    def test_delete_uses_query(self, transport):
        make_tool(transport, method="DELETE", endpoint="http://x/y?v=2").run({"id": "7"}, None)

        request = transport.last_request
        assert request.method == "DELETE"
        assert str(request.url) == "http://x/y?v=2&id=7"

    def test_headers(self, transport):
        tool = make_tool(transport, headers={"X-Api-Key": "secret"})

        tool.run({}, None)

        headers = transport.last_request.headers
        assert headers["content-type"] == "application/json"
        assert headers["accept"] == "application/json"
        assert headers["x-api-key"] == "secret"

    def test_configured_header_overrides_default(self, transport):
        """自定义头不区分大小写覆盖默认头"""
        tool = make_tool(transport, headers={"content-type": "text/plain", "ACCEPT": "text/csv"})

        tool.run({}, None)

        headers = transport.last_request.headers
        assert headers.get_list("content-type") == ["text/plain"]
        assert headers.get_list("accept") == ["text/csv"]

    def test_configured_timeout_reaches_client(self, transport):
        """timeout（毫秒）作用于连接、读、写、连接池各阶段"""
        make_tool(transport, timeout=10).run({}, None)

        assert transport.last_request.extensions["timeout"] == {
            "connect": 0.01,
            "read": 0.01,
            "write": 0.01,
            "pool": 0.01,
        }

    def test_unsupported_method_rejected_before_network(self, transport):
        tool = make_tool(transport, method="PATCH")

        with pytest.raises(InvalidParamError):
            tool.run({"a": "1"}, None)

        assert transport.requests == []


class TestQueryEncoding:
    """查询参数编码"""

    def test_value_types(self):
        url = build_url_with_params(
            "http://x/y",
            {"flag": True, "off": False, "empty": None, "tags": ["a", "b"], "q": "a b&c"},
        )

        assert url == "http://x/y?flag=true&off=false&empty=&tags=a&tags=b&q=a+b%26c"

    def test_dict_json_encoded(self):
        url = build_url_with_params("http://x/y", {"filter": {"k": 1}})

        assert url == "http://x/y?filter=%7B%22k%22%3A1%7D"

    def test_no_params(self):
        assert build_url_with_params("http://x/y", {}) == "http://x/y"


class TestResponseMapping:
    """响应映射"""

    def test_json_returned_verbatim(self):
        transport = RecordingTransport(lambda request: httpx.Response(200, json={"temp": 21, "items": [1, 2]}))

        assert make_tool(transport).run({}, None) == {"temp": 21, "items": [1, 2]}

    def test_empty_body_returns_empty_object(self):
        transport = RecordingTransport(lambda request: httpx.Response(204))

        assert make_tool(transport).run({}, None) == {}

    def test_text_body_returned_as_text(self):
        transport = RecordingTransport(lambda request: httpx.Response(200, text="pong"))

        assert make_tool(transport).run({}, None) == "pong"

    def test_non_2xx_keeps_remote_status(self):
        transport = RecordingTransport(lambda request: httpx.Response(503, text="unavailable"))

        with pytest.raises(ToolExecutionError) as exc_info:
            make_tool(transport).run({}, None)

        assert exc_info.value.status_code == 503
        assert exc_info.value.message == "Remote service returned: 503"

    def test_timeout_maps_to_502(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(ToolExecutionError) as exc_info:
            make_tool(RecordingTransport(handler), timeout=10).run({}, None)

        assert exc_info.value.status_code == 502
        assert exc_info.value.message.startswith("Failed to call remote service:")

    def test_connect_error_maps_to_502(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ToolExecutionError) as exc_info:
            make_tool(RecordingTransport(handler)).run({}, None)

        assert exc_info.value.status_code == 502
        assert "connection refused" in exc_info.value.message
