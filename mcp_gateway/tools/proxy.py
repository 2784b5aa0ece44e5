"""
动态代理工具

根据注册请求动态创建的工具，执行时将参数转发到配置的第三方服务端点，
并把第三方的响应（或失败）转换为工具结果/错误。

工作原理：
1. 管理员通过 API 传入工具配置
2. 系统创建 DynamicProxyTool 实例（输入 schema 只生成一次并缓存）
3. 调用工具时，将参数转发到配置的 endpoint
4. 将第三方服务的响应返回给调用者

请求映射：
- GET/DELETE: 参数拼接到 URL 查询串，不发送请求体
- POST/PUT: 参数作为 JSON 请求体
- 其他方法：在发起网络请求前抛出 invalid_param

响应映射：
- 2xx: 响应体原样返回，无响应体返回 {}
- 非 2xx: tool_execution_error，状态码沿用远程状态码
- 网络层失败（连接拒绝、超时、DNS）: tool_execution_error，502
"""

import json
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlencode

import httpx
import structlog

from mcp_gateway.core.config import settings
from mcp_gateway.core.errors import InvalidParamError, ToolExecutionError
from mcp_gateway.core.permissions import Principal
from mcp_gateway.tools.metadata import ToolMetadata
from mcp_gateway.tools.schema_builder import build_input_schema
from mcp_gateway.tools.schemas import ToolRegisterRequest

logger = structlog.get_logger(__name__)

QUERY_METHODS = ("GET", "DELETE")
BODY_METHODS = ("POST", "PUT")
SUPPORTED_METHODS = QUERY_METHODS + BODY_METHODS

BAD_GATEWAY = 502


def _query_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return str(value)


def build_url_with_params(base_url: str, params: Optional[Dict[str, Any]]) -> str:
    """
    构建带参数的 URL（GET/DELETE 使用）

    URL 已含 "?" 时用 "&" 追加，否则用 "?"。
    列表参数展开为重复的 key，对象参数编码为 JSON 字符串。
    """
    if not params:
        return base_url

    pairs: List[Tuple[str, str]] = []
    for key, value in params.items():
        if isinstance(value, (list, tuple)):
            pairs.extend((key, _query_value(item)) for item in value)
        else:
            pairs.append((key, _query_value(value)))

    separator = "&" if "?" in base_url else "?"
    return f"{base_url}{separator}{urlencode(pairs)}"


class DynamicProxyTool:
    """动态代理工具"""

    def __init__(
        self,
        config: ToolRegisterRequest,
        created_by: str,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Args:
            config: 工具配置（已通过注册校验）
            created_by: 注册人
            transport: 自定义 httpx transport（测试时注入 MockTransport）
        """
        self.config = config
        self.name: str = config.name or ""
        self.description = config.description
        self.required_roles = frozenset(config.required_roles)
        self.metadata = ToolMetadata.for_dynamic_tool(created_by, config.category)
        self._transport = transport

        # 缓存的 JSON Schema，避免每次调用重复生成
        self.input_schema: Dict[str, Any] = build_input_schema(config.params)

    @property
    def endpoint(self) -> str:
        return self.config.endpoint or ""

    @property
    def method(self) -> str:
        return self.config.method.upper()

    def _build_headers(self) -> httpx.Headers:
        """构建请求头：JSON 默认头 + 配置的自定义头（不区分大小写覆盖默认头）"""
        headers = httpx.Headers({
            "Content-Type": "application/json",
            "Accept": "application/json",
        })
        headers.update(self.config.headers)
        return headers

    def _build_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.config.timeout / 1000),
            follow_redirects=settings.PROXY_FOLLOW_REDIRECTS,
            transport=self._transport,
        )

    def run(self, arguments: Dict[str, Any], principal: Optional[Principal]) -> Any:
        """执行工具：调用第三方服务"""
        method = self.method
        if method not in SUPPORTED_METHODS:
            raise InvalidParamError(f"Unsupported HTTP method: {method}")

        log = logger.bind(tool_name=self.name, endpoint=self.endpoint, method=method)
        log.info("dynamic_tool_request")

        headers = self._build_headers()

        try:
            with self._build_client() as client:
                if method in QUERY_METHODS:
                    response = client.request(
                        method,
                        build_url_with_params(self.endpoint, arguments),
                        headers=headers,
                    )
                else:
                    response = client.request(
                        method,
                        self.endpoint,
                        headers=headers,
                        content=json.dumps(arguments, ensure_ascii=False).encode("utf-8"),
                    )
        except httpx.HTTPError as e:
            log.error("dynamic_tool_transport_error", error_type=type(e).__name__, error=str(e))
            cause = str(e) or type(e).__name__
            raise ToolExecutionError(
                f"Failed to call remote service: {cause}",
                status_code=BAD_GATEWAY,
            ) from e

        if not response.is_success:
            log.warning("dynamic_tool_remote_error", status_code=response.status_code)
            raise ToolExecutionError(
                f"Remote service returned: {response.status_code}",
                status_code=response.status_code,
            )

        log.info("dynamic_tool_response", status_code=response.status_code)
        return self._parse_body(response)

    @staticmethod
    def _parse_body(response: httpx.Response) -> Any:
        """2xx 响应体：JSON 原样返回，空响应体返回 {}，非 JSON 返回文本"""
        if not response.content or not response.content.strip():
            return {}
        try:
            return response.json()
        except ValueError:
            return response.text

    def __repr__(self) -> str:
        return (
            f"<DynamicProxyTool(name={self.name}, method={self.method}, "
            f"endpoint={self.endpoint}, status={self.metadata.status.value})>"
        )
