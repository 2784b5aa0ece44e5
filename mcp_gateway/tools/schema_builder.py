"""
JSON Schema 构建

- build_input_schema: 将简化参数定义转换为 object schema（动态工具使用）
- JsonObjectSchema: 链式构建 schema（内置工具手写 schema 使用）
"""

import copy
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from mcp_gateway.tools.schemas import ParamDefinition

ParamLike = Union[ParamDefinition, Mapping[str, Any]]


def _as_param(param: ParamLike) -> ParamDefinition:
    if isinstance(param, ParamDefinition):
        return param
    return ParamDefinition.model_validate(dict(param))


def build_input_schema(params: Optional[Iterable[ParamLike]]) -> Dict[str, Any]:
    """
    将简化的参数定义转换为 JSON Schema

    纯函数：相同输入得到相同输出，每次返回新的 dict。

    Example:
        >>> build_input_schema([{"name": "sku", "type": "string", "required": True}])
        {'type': 'object', 'properties': {'sku': {'type': 'string'}}, 'required': ['sku']}
    """
    properties: Dict[str, Any] = {}
    required: List[str] = []

    for raw in params or ():
        param = _as_param(raw)

        prop: Dict[str, Any] = {"type": param.type}
        if param.description is not None:
            prop["description"] = param.description
        if param.default_value is not None:
            prop["default"] = copy.deepcopy(param.default_value)
        properties[param.name] = prop

        if param.required:
            required.append(param.name)

    return {
        "type": "object",
        "properties": properties,
        "required": required,
    }


class JsonObjectSchema:
    """
    object 类型 JSON Schema 的链式构建器

    用法：
        JsonObjectSchema()
            .add_string_property("sku", "商品SKU编码")
            .set_required(["sku"])
            .to_dict()
    """

    def __init__(self) -> None:
        self._properties: Dict[str, Dict[str, Any]] = {}
        self._required: List[str] = []

    def _add(self, name: str, type_: str, description: str) -> "JsonObjectSchema":
        self._properties[name] = {"type": type_, "description": description}
        return self

    def add_string_property(self, name: str, description: str) -> "JsonObjectSchema":
        return self._add(name, "string", description)

    def add_integer_property(self, name: str, description: str) -> "JsonObjectSchema":
        return self._add(name, "integer", description)

    def add_number_property(self, name: str, description: str) -> "JsonObjectSchema":
        return self._add(name, "number", description)

    def add_boolean_property(self, name: str, description: str) -> "JsonObjectSchema":
        return self._add(name, "boolean", description)

    def set_required(self, required: Iterable[str]) -> "JsonObjectSchema":
        self._required = list(required)
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {k: dict(v) for k, v in self._properties.items()},
            "required": list(self._required),
        }
