"""
仓库库存查询工具（示例）

返回 Mock 数据，实际项目中应查询库存服务
"""

from typing import Any, Dict, Optional

from mcp_gateway.core.errors import InvalidParamError
from mcp_gateway.core.permissions import Principal
from mcp_gateway.tools.base import StaticTool
from mcp_gateway.tools.schema_builder import JsonObjectSchema

TOOL_NAME = "get_warehouse_inventory"


def get_warehouse_inventory(arguments: Dict[str, Any], principal: Optional[Principal]) -> Dict[str, Any]:
    """查询仓库库存"""
    sku = arguments.get("sku")
    if not isinstance(sku, str) or not sku:
        raise InvalidParamError("sku is required")

    inventory = [
        {
            "sku": sku,
            "warehouseId": "WH001",
            "warehouseName": "北京仓",
            "quantity": 150,
            "availableQuantity": 120,
        },
        {
            "sku": sku,
            "warehouseId": "WH002",
            "warehouseName": "上海仓",
            "quantity": 200,
            "availableQuantity": 180,
        },
    ]

    return {
        "sku": sku,
        "totalQuantity": sum(item["quantity"] for item in inventory),
        "warehouses": inventory,
    }


def build_tool() -> StaticTool:
    return StaticTool(
        name=TOOL_NAME,
        description="查询仓库库存",
        input_schema=(
            JsonObjectSchema()
            .add_string_property("sku", "商品SKU编码")
            .set_required(["sku"])
            .to_dict()
        ),
        handler=get_warehouse_inventory,
    )
