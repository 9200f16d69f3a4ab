"""
Shared codes used across layers (Domain/Core/API).

This package exposes ApiErrorCode at `shared.codes` and keeps the
soft-delete flag under `shared.codes.delete_flag`.
"""
from enum import Enum

from .delete_flag import DeleteFlag


# Prefix of every message key; existing resource bundles depend on it.
LABEL_NAMESPACE = "apierrorcode"


class ApiErrorCode(str, Enum):
    """Closed set of API error codes (single source of truth)."""

    INPUT_ERROR = "INPUT_ERROR"
    PERMISSION_ERROR = "PERMISSION_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    SYSTEM_ERROR = "SYSTEM_ERROR"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    GENERAL_ERROR = "GENERAL_ERROR"

    @property
    def label(self) -> str:
        """Message-catalog key, e.g. ``apierrorcode.not_found``."""
        return f"{LABEL_NAMESPACE}.{self.name.lower()}"

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self]

    @classmethod
    def from_http_status(cls, status_code: int) -> "ApiErrorCode":
        """Pick the code a host should report for a bare HTTP error status."""
        code = _FROM_HTTP_STATUS.get(status_code)
        if code is not None:
            return code
        if status_code >= 500:
            return cls.SYSTEM_ERROR
        return cls.GENERAL_ERROR

    def __str__(self) -> str:
        return self.value


_HTTP_STATUS = {
    ApiErrorCode.INPUT_ERROR: 400,
    ApiErrorCode.PERMISSION_ERROR: 403,
    ApiErrorCode.VALIDATION_ERROR: 422,
    ApiErrorCode.SYSTEM_ERROR: 500,
    ApiErrorCode.NOT_FOUND: 404,
    ApiErrorCode.UNAUTHORIZED: 401,
    ApiErrorCode.GENERAL_ERROR: 400,
}

_FROM_HTTP_STATUS = {
    400: ApiErrorCode.INPUT_ERROR,
    401: ApiErrorCode.UNAUTHORIZED,
    403: ApiErrorCode.PERMISSION_ERROR,
    404: ApiErrorCode.NOT_FOUND,
    422: ApiErrorCode.VALIDATION_ERROR,
    500: ApiErrorCode.SYSTEM_ERROR,
}


__all__ = ["ApiErrorCode", "DeleteFlag", "LABEL_NAMESPACE"]
