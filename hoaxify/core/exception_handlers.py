"""全局异常处理器注册

错误响应统一为 {path, timestamp, message, validationErrors?}，
message 按请求语言本地化。
"""

import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from hoaxify.core.exceptions import ApiError, ForbiddenError, ValidationError
from hoaxify.core.i18n import request_locale, translate
from hoaxify.schemas.response import ErrorResponse


def error_response(
    request: Request,
    status_code: int,
    message_key: str,
    validation_errors: dict[str, str] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    locale = request_locale(request)
    path = request.url.path
    if request.url.query:
        path = f"{path}?{request.url.query}"
    body = ErrorResponse(
        path=path,
        timestamp=int(time.time() * 1000),
        message=translate(message_key, locale),
        validation_errors=(
            {field: translate(key, locale) for field, key in validation_errors.items()}
            if validation_errors is not None
            else None
        ),
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
        headers=headers,
    )


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    """业务异常处理"""
    reason = exc.reason if isinstance(exc, ForbiddenError) else None
    logger.warning(
        "Business error: {} | code={} reason={} detail={} path={}",
        exc.message_key,
        exc.code,
        reason,
        exc.detail,
        request.url.path,
    )
    validation_errors = exc.failures if isinstance(exc, ValidationError) else None
    return error_response(request, exc.status_code, exc.message_key, validation_errors)


async def validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """请求体/参数格式错误（如非法 JSON、字段类型错误）"""
    logger.info("Request rejected: {} errors={}", request.url.path, exc.errors())
    return error_response(request, 400, "invalid_request")


async def http_error_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """HTTP 异常处理"""
    key_map = {
        400: "invalid_request",
        404: "resource_not_found",
        500: "internal_error",
    }
    message_key = key_map.get(exc.status_code, str(exc.detail))
    return error_response(
        request, exc.status_code, message_key, headers=dict(exc.headers or {}) or None
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """未捕获异常处理"""
    logger.exception(
        "Unhandled exception {method} {path}", method=request.method, path=request.url.path
    )
    return error_response(request, 500, "internal_error")


def setup_exception_handlers(app: FastAPI) -> None:
    """注册全局异常处理器"""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
