"""
数据传输对象（DTO）- 认证响应、分页参数与审计字段的对外形态
"""
from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, Field

from core.config import settings
from core.response import ApiModel, ModelPage


class JwtAuthenticationResponse(ApiModel):
    """认证成功后返回的令牌信息（签发与校验由宿主安全层负责）"""
    access_token: str = Field(..., min_length=1)
    token_type: str = Field(default_factory=lambda: settings.TOKEN_TYPE)
    expires_in: Optional[int] = Field(None, ge=0, description="访问令牌有效期（秒）")
    refresh_token: Optional[str] = None

    @classmethod
    def bearer(
        cls,
        access_token: str,
        expires_in: Optional[int] = None,
        refresh_token: Optional[str] = None,
    ) -> "JwtAuthenticationResponse":
        return cls(
            access_token=access_token,
            token_type=settings.TOKEN_TYPE,
            expires_in=expires_in,
            refresh_token=refresh_token,
        )

    @property
    def authorization_header(self) -> str:
        return f"{self.token_type} {self.access_token}"


class PaginationParams(ApiModel):
    """分页参数（页码/每页大小），自动派生 offset/limit"""
    page: int = Field(1, ge=1, description="页码，从1开始")
    size: int = Field(
        default_factory=lambda: settings.DEFAULT_PAGE_SIZE,
        ge=1,
        le=settings.MAX_PAGE_SIZE,
        description="每页大小",
    )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.size

    @property
    def limit(self) -> int:
        return self.size

    def to_page(self, content: list, total_count: int) -> ModelPage:
        """在调用方完成分页查询后构造 ModelPage"""
        return ModelPage.of(
            content,
            page_number=self.page,
            page_size=self.size,
            total_count=total_count,
        )


class AuditFieldsDTO(ApiModel):
    """审计字段DTO"""
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    last_modified_by: Optional[str] = None
    last_modified_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
