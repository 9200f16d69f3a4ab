"""
统一响应格式定义
"""
from typing import Any, Callable, Generic, Optional, TypeVar
from datetime import datetime, timezone

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializationInfo,
    model_serializer,
    model_validator,
)
from pydantic.alias_generators import to_camel

from core.i18n import t
from shared.codes import ApiErrorCode


T = TypeVar("T")
U = TypeVar("U")


def _to_utc_z(value: datetime) -> str:
    ts = value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


class ApiModel(BaseModel):
    """Base for wire models: camelCase JSON keys, immutable, UTC-Z datetimes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    @model_serializer(mode="wrap")
    def _serialize_model(self, handler, info: SerializationInfo):  # type: ignore[override]
        data = handler(self)
        if not info.mode_is_json():
            return data

        def convert(value):
            if isinstance(value, datetime):
                return _to_utc_z(value)
            if isinstance(value, list):
                return [convert(v) for v in value]
            if isinstance(value, tuple):
                return tuple(convert(v) for v in value)
            if isinstance(value, dict):
                return {k: convert(v) for k, v in value.items()}
            return value

        return convert(data)

    def to_json_dict(self) -> dict[str, Any]:
        """External JSON shape (aliased keys, JSON-safe values)."""
        return self.model_dump(mode="json", by_alias=True)


class ApiResponse(ApiModel, Generic[T]):
    """统一响应模型

    A success carries ``data`` and no error code or message; a failure
    carries an error code and message and never ``data``.
    """
    success: bool = True
    data: Optional[T] = None
    error_code: Optional[ApiErrorCode] = None
    message: Optional[str] = None
    details: Optional[dict[str, Any]] = None
    request_id: Optional[str] = None

    @model_validator(mode="after")
    def _check_outcome(self):
        if self.success:
            if self.error_code is not None:
                raise ValueError("successful response must not carry an error code")
            if self.message is not None:
                raise ValueError("successful response must not carry a message")
            if self.details is not None:
                raise ValueError("successful response must not carry error details")
        else:
            if self.error_code is None:
                raise ValueError("failed response requires an error code")
            if self.data is not None:
                raise ValueError("failed response must not carry data")
        return self

    @property
    def is_error(self) -> bool:
        return not self.success

    @classmethod
    def ok(cls, data: Optional[T] = None) -> "ApiResponse[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(
        cls,
        code: ApiErrorCode,
        message: str,
        details: Optional[dict[str, Any]] = None,
        request_id: Optional[str] = None,
    ) -> "ApiResponse[T]":
        return cls(
            success=False,
            error_code=code,
            message=message,
            details=details,
            request_id=request_id,
        )


class ModelPage(ApiModel, Generic[T]):
    """分页数据模型

    ``page_number`` is 1-indexed; ``total_count`` is the size of the whole
    result set, not of this page.
    """
    page_number: int = Field(..., ge=1)
    page_size: int = Field(..., gt=0)
    content: list[T] = Field(default_factory=list)
    total_count: int = Field(..., ge=0)

    @model_validator(mode="after")
    def _check_content_fits(self):
        if len(self.content) > self.page_size:
            raise ValueError(
                f"page content has {len(self.content)} items, more than page size {self.page_size}"
            )
        return self

    @classmethod
    def of(
        cls,
        content: list[T],
        *,
        page_number: int,
        page_size: int,
        total_count: int,
    ) -> "ModelPage[T]":
        return cls(
            page_number=page_number,
            page_size=page_size,
            content=list(content),
            total_count=total_count,
        )

    @property
    def total_pages(self) -> int:
        return (self.total_count + self.page_size - 1) // self.page_size

    @property
    def has_next(self) -> bool:
        return self.page_number < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page_number > 1

    @property
    def offset(self) -> int:
        return (self.page_number - 1) * self.page_size

    def map(self, fn: Callable[[T], U]) -> "ModelPage[U]":
        """Same page metadata, content transformed item by item."""
        return ModelPage(
            page_number=self.page_number,
            page_size=self.page_size,
            content=[fn(item) for item in self.content],
            total_count=self.total_count,
        )


def success_response(data: Any = None) -> ApiResponse:
    """
    创建成功响应（成功响应不携带 message）

    Args:
        data: 返回数据

    Returns:
        ApiResponse: 统一响应对象
    """
    return ApiResponse.ok(data=data)


def error_response(
    code: ApiErrorCode,
    message: Optional[str] = None,
    details: Optional[dict] = None,
    request_id: Optional[str] = None,
    locale: Optional[str] = None,
) -> ApiResponse:
    """
    创建错误响应

    Args:
        code: 错误码
        message: 错误消息；为空时按错误码 label 从消息目录解析
        details: 错误详情
        request_id: 请求ID
        locale: 解析默认消息时使用的语言

    Returns:
        ApiResponse: 统一响应对象
    """
    code = ApiErrorCode(code)
    if message is None:
        message = t(code.label, locale=locale)
    return ApiResponse.fail(code, message, details=details, request_id=request_id)


def paginated_response(
    items: list,
    total: int,
    page: int,
    size: int,
) -> ApiResponse[ModelPage]:
    """
    创建分页响应

    Args:
        items: 当前页数据
        total: 总数
        page: 当前页（从1开始）
        size: 每页大小

    Returns:
        ApiResponse: 包含 ModelPage 的统一响应对象
    """
    page_data = ModelPage.of(items, page_number=page, page_size=size, total_count=total)
    return ApiResponse.ok(data=page_data)
