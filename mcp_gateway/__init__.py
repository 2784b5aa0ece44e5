"""
MCP 工具网关
"""

__version__ = "0.1.0"
