"""
工具服务 Schema 定义

请求/响应模型通过 Pydantic v2 校验。
对外 JSON 字段沿用 camelCase（inputSchema、requiredRoles、createdBy），
请求体同时接受 snake_case。
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from mcp_gateway.core.config import settings

ParamType = Literal["string", "integer", "number", "boolean", "array", "object"]


class ParamDefinition(BaseModel):
    """简化的参数定义"""

    name: str = Field(..., description="参数名")
    type: ParamType = Field("string", description="参数类型")
    required: bool = Field(False, description="是否必填")
    description: Optional[str] = Field(None, description="参数描述")
    default_value: Optional[Any] = Field(
        None,
        validation_alias=AliasChoices("default", "defaultValue", "default_value"),
        description="默认值",
    )


class ToolRegisterRequest(BaseModel):
    """
    动态工具注册请求（远程工具配置）

    name/endpoint 的格式在 ToolAdminService 中校验，
    以便统一返回 invalid_param 错误。
    """

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = Field(None, description="工具名称，^[a-z][a-z0-9_]*$")
    description: str = Field("", description="工具描述")
    endpoint: Optional[str] = Field(None, description="第三方服务地址（http/https）")
    method: str = Field("POST", description="GET/POST/PUT/DELETE")
    params: List[ParamDefinition] = Field(default_factory=list, description="参数定义")
    headers: Dict[str, str] = Field(default_factory=dict, description="自定义请求头")
    timeout: int = Field(
        default_factory=lambda: settings.PROXY_DEFAULT_TIMEOUT_MS,
        gt=0,
        description="超时时间（毫秒）",
    )
    required_roles: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("required_roles", "requiredRoles"),
        description="所需角色（不带前缀）",
    )
    category: Optional[str] = Field(None, description="工具分类，默认 custom")


class ToolDefinition(BaseModel):
    """清单中的工具定义"""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str
    input_schema: Dict[str, Any] = Field(..., alias="inputSchema")


class ManifestResponse(BaseModel):
    """工具清单响应"""

    tools: List[ToolDefinition]


class SuccessResponse(BaseModel):
    """工具执行成功响应"""

    result: Any


class ErrorResponse(BaseModel):
    """错误响应"""

    error: str
    message: str
    code: int


class ToolRegisterResponse(BaseModel):
    """工具注册响应"""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str
    endpoint: str
    category: str
    status: str
    created_by: str = Field(..., alias="createdBy")


class AdminToolView(BaseModel):
    """管理端工具视图（含完整元数据）"""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str
    input_schema: Dict[str, Any] = Field(..., alias="inputSchema")
    required_roles: List[str] = Field(default_factory=list, alias="requiredRoles")
    endpoint: Optional[str] = None
    method: Optional[str] = None
    metadata: Dict[str, Any]


class AdminToolListResponse(BaseModel):
    """管理端工具列表"""

    tools: List[AdminToolView]
    total: int


class ToolActionResponse(BaseModel):
    """管理操作结果"""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    tool_name: str = Field(..., alias="toolName")


class LoginRequest(BaseModel):
    """登录请求"""

    username: str
    password: str


class LoginResponse(BaseModel):
    """登录响应"""

    success: bool = True
    token: str
    username: str
    roles: List[str]
