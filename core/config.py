"""
配置文件 - 共享库配置管理
"""
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """共享库配置（宿主服务可通过环境变量或 .env 覆盖）"""

    # 基础配置
    PROJECT_NAME: str = Field(default="acid-web-core")
    VERSION: str = Field(default="1.0.0")
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="development")
    LOG_LEVEL: Optional[str] = Field(default=None, description="覆盖日志级别，如 INFO/DEBUG")

    # 分页配置（支持环境变量覆盖）
    DEFAULT_PAGE_SIZE: int = Field(default=20, ge=1)
    MAX_PAGE_SIZE: int = Field(default=100, ge=1)

    # 国际化
    DEFAULT_LOCALE: str = Field(default="en")

    # 认证响应
    TOKEN_TYPE: str = Field(default="Bearer")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _normalize_log_level(cls, v):
        if isinstance(v, str):
            v = v.strip().upper()
            return v or None
        return v


settings = Settings()
