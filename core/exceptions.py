"""
全局异常处理器：把异常翻译为统一响应（供 FastAPI 宿主服务按需注册）
"""
import traceback
import uuid
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette import status as http_status
from starlette.exceptions import HTTPException as StarletteHTTPException

from .response import error_response
from core.i18n import t, get_locale
from core.logging_config import get_logger
from domain.common.exceptions import ApiException
from shared.codes import ApiErrorCode


def _request_id(request: Request) -> str:
    return getattr(getattr(request, "state", object()), "request_id", None) or str(uuid.uuid4())


def _render_message(exc: ApiException, locale: str) -> str:
    """Explicit messages are reported as given; otherwise the message key is resolved."""
    params = exc.format_params if isinstance(exc.format_params, dict) else {}
    return t(exc.message or exc.message_key, locale=locale, **params)


def _validation_details(errors) -> dict:
    return {"errors": jsonable_encoder(errors)}


def _first_error_reason(errors) -> str:
    first = errors[0] if errors else {}
    return first.get("msg", "unknown")


def _envelope(status_code: int, response, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=response.to_json_dict(), headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """
    注册全局异常处理器

    Args:
        app: FastAPI应用实例
    """

    logger = get_logger(__name__)

    @app.exception_handler(ApiException)
    async def api_exception_handler(request: Request, exc: ApiException):
        """处理业务异常"""
        request_id = _request_id(request)
        locale = get_locale()
        response = error_response(
            code=exc.code,
            message=_render_message(exc, locale),
            details=exc.details,
            request_id=request_id,
        )
        status_code = exc.code.http_status
        headers = {"WWW-Authenticate": "Bearer"} if status_code == http_status.HTTP_401_UNAUTHORIZED else None
        logger.info(
            "api_exception",
            request_id=request_id,
            code=exc.code.value,
            status_code=status_code,
        )
        return _envelope(status_code, response, headers)

    async def _validation_failed(request: Request, errors) -> JSONResponse:
        request_id = _request_id(request)
        locale = get_locale()
        response = error_response(
            code=ApiErrorCode.VALIDATION_ERROR,
            message=t("validation.failed", locale=locale, reason=_first_error_reason(errors)),
            details=_validation_details(errors),
            request_id=request_id,
        )
        return _envelope(http_status.HTTP_422_UNPROCESSABLE_ENTITY, response)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """处理请求参数验证异常"""
        return await _validation_failed(request, exc.errors())

    @app.exception_handler(ValidationError)
    async def model_validation_handler(request: Request, exc: ValidationError):
        """处理模型构造时的验证异常（如非法分页参数）"""
        return await _validation_failed(request, exc.errors(include_url=False))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """处理HTTP异常"""
        request_id = _request_id(request)
        code = ApiErrorCode.from_http_status(exc.status_code)
        response = error_response(
            code=code,
            message=str(exc.detail) if exc.detail else None,
            details={"status_code": exc.status_code},
            request_id=request_id,
            locale=get_locale(),
        )
        return _envelope(exc.status_code, response, getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """处理所有未捕获的异常"""
        request_id = _request_id(request)

        # 在开发环境可以返回详细错误信息
        details = None
        if app.debug:
            details = {
                "exception": str(exc),
                "traceback": traceback.format_exc(),
            }

        response = error_response(
            code=ApiErrorCode.SYSTEM_ERROR,
            details=details,
            request_id=request_id,
            locale=get_locale(),
        )

        logger.error(
            "unhandled_exception",
            request_id=request_id,
            error=str(exc),
            exc_info=True,
        )

        return _envelope(http_status.HTTP_500_INTERNAL_SERVER_ERROR, response)
