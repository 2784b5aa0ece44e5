"""
应用配置

使用 pydantic-settings 管理环境变量配置
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """应用配置类"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # 基础配置
    ENV: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False
    SERVICE_NAME: str = "mcp-gateway"

    # 服务配置
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # CORS 配置
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8080"]

    # JWT 配置
    JWT_SECRET_KEY: str = "default-secret-key-for-development-only-change-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440  # 24 小时

    # 角色前缀（比较角色前去除，工具声明角色时无需携带）
    ROLE_PREFIX: str = "ROLE_"

    # 动态代理工具配置
    PROXY_DEFAULT_TIMEOUT_MS: int = 30000
    PROXY_FOLLOW_REDIRECTS: bool = True

    # 功能开关
    METRICS_ENABLED: bool = True


@lru_cache
def get_settings() -> Settings:
    """获取配置单例"""
    return Settings()


settings = get_settings()
