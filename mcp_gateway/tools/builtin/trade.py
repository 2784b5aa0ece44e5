"""
贸易数据查询工具（示例）

支持按日期范围和贸易类型筛选，返回 Mock 数据
"""

from datetime import date
from typing import Any, Dict, List, Optional

from mcp_gateway.core.errors import InvalidParamError
from mcp_gateway.core.permissions import Principal
from mcp_gateway.tools.base import StaticTool
from mcp_gateway.tools.schema_builder import JsonObjectSchema

TOOL_NAME = "query_trade_data"

TRADE_TYPES = ("export", "import", "all")

_TRADE_RECORDS: List[Dict[str, Any]] = [
    {
        "tradeId": "TR20240101001",
        "date": "2024-01-15",
        "type": "export",
        "product": "电子产品",
        "amount": 150000.00,
        "currency": "USD",
        "destination": "美国",
    },
    {
        "tradeId": "TR20240101002",
        "date": "2024-01-20",
        "type": "import",
        "product": "原材料",
        "amount": 80000.00,
        "currency": "USD",
        "source": "德国",
    },
]


def _parse_date(arguments: Dict[str, Any], key: str) -> date:
    value = arguments.get(key)
    if not isinstance(value, str):
        raise InvalidParamError(f"{key} is required")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise InvalidParamError(f"{key} must be formatted as yyyy-MM-dd")


def query_trade_data(arguments: Dict[str, Any], principal: Optional[Principal]) -> Dict[str, Any]:
    """查询贸易数据"""
    start_date = _parse_date(arguments, "startDate")
    end_date = _parse_date(arguments, "endDate")
    if start_date > end_date:
        raise InvalidParamError("startDate must not be after endDate")

    trade_type = arguments.get("tradeType") or "all"
    if trade_type not in TRADE_TYPES:
        raise InvalidParamError(f"tradeType must be one of {', '.join(TRADE_TYPES)}")

    records = [
        record for record in _TRADE_RECORDS
        if start_date <= date.fromisoformat(record["date"]) <= end_date
        and (trade_type == "all" or record["type"] == trade_type)
    ]

    return {
        "query": {
            "startDate": start_date.isoformat(),
            "endDate": end_date.isoformat(),
            "tradeType": trade_type,
        },
        "totalCount": len(records),
        "totalAmount": sum(record["amount"] for record in records),
        "records": records,
    }


def build_tool() -> StaticTool:
    return StaticTool(
        name=TOOL_NAME,
        description="查询贸易数据，支持按日期范围和贸易类型筛选",
        input_schema=(
            JsonObjectSchema()
            .add_string_property("startDate", "开始日期，格式：yyyy-MM-dd")
            .add_string_property("endDate", "结束日期，格式：yyyy-MM-dd")
            .add_string_property("tradeType", "贸易类型：export(出口)/import(进口)/all(全部)")
            .set_required(["startDate", "endDate"])
            .to_dict()
        ),
        handler=query_trade_data,
    )
