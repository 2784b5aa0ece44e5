"""
业务服务：工具发现/执行、工具管理
"""
