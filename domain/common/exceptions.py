"""领域层业务异常定义，按 ApiErrorCode 分类。

核心（core）层仅负责把这些异常映射为统一响应，领域层不反向依赖核心层。
"""
from __future__ import annotations

from typing import Optional

from shared.codes import ApiErrorCode


class ApiException(Exception):
    """业务异常基类

    An explicit ``message`` is reported as given; otherwise ``message_key``
    (defaulting to the code's label) is looked up in the message catalog.
    """

    code: ApiErrorCode = ApiErrorCode.GENERAL_ERROR

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        code: Optional[ApiErrorCode] = None,
        details: Optional[dict] = None,
        message_key: Optional[str] = None,
        format_params: Optional[dict] = None,
    ) -> None:
        if code is not None:
            self.code = ApiErrorCode(code)
        self.message = message
        self.message_key = message_key or self.code.label
        self.details = details
        self.format_params = format_params
        super().__init__(message or self.message_key)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code.value!r}, message={self.message!r})"


class InputErrorException(ApiException):
    code = ApiErrorCode.INPUT_ERROR


class PermissionDeniedException(ApiException):
    code = ApiErrorCode.PERMISSION_ERROR


class ValidationException(ApiException):
    code = ApiErrorCode.VALIDATION_ERROR

    def __init__(self, message: Optional[str] = None, *, field: Optional[str] = None, **kwargs) -> None:
        if field is not None:
            details = dict(kwargs.pop("details", None) or {})
            details.setdefault("field", field)
            kwargs["details"] = details
        super().__init__(message, **kwargs)


class SystemErrorException(ApiException):
    code = ApiErrorCode.SYSTEM_ERROR


class NotFoundException(ApiException):
    code = ApiErrorCode.NOT_FOUND

    def __init__(self, resource: Optional[str] = None, identifier: Optional[object] = None, **kwargs) -> None:
        if resource is not None and "details" not in kwargs:
            details = {"resource": resource}
            if identifier is not None:
                details["id"] = str(identifier)
            kwargs["details"] = details
        super().__init__(kwargs.pop("message", None), **kwargs)


class UnauthorizedException(ApiException):
    code = ApiErrorCode.UNAUTHORIZED


class GeneralErrorException(ApiException):
    code = ApiErrorCode.GENERAL_ERROR
