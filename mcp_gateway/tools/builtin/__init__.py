"""
内置工具

进程启动时创建一次，直接处于 PUBLISHED 状态
"""

from typing import List

from mcp_gateway.tools.base import StaticTool
from mcp_gateway.tools.builtin import trade, warehouse


def load_builtin_tools() -> List[StaticTool]:
    """创建全部内置工具（每次调用返回新实例）"""
    return [
        warehouse.build_tool(),
        trade.build_tool(),
    ]


__all__ = ["load_builtin_tools"]
