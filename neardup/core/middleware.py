"""
中间件模块 - 全局错误处理
统一的错误响应格式: {"error": {"code", "message", "details", "request_id"}}
"""
from uuid import uuid4

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse

from neardup.core.errors import BaseApplicationError
from neardup.core.logging import get_logger

logger = get_logger(__name__)


def _error_response(status_code: int, code: str, message: str, details: dict = None) -> JSONResponse:
    request_id = str(uuid4())
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details or {},
                "request_id": request_id,
            }
        },
        headers={"X-Request-ID": request_id},
    )


async def application_error_handler(request: Request, exc: BaseApplicationError) -> JSONResponse:
    """应用异常 -> 对应的HTTP状态码"""
    logger.warning(
        "request_failed",
        path=request.url.path,
        error_code=exc.error_code.value,
        message=exc.message,
    )
    return _error_response(exc.status_code, exc.error_code.value, exc.message, exc.details)


async def error_handler(request: Request, exc: Exception) -> JSONResponse:
    """全局错误处理"""
    if isinstance(exc, BaseApplicationError):
        return await application_error_handler(request, exc)
    if isinstance(exc, HTTPException):
        return _error_response(exc.status_code, "HTTP_ERROR", str(exc.detail))

    logger.error("unhandled_error", path=request.url.path, error=str(exc), exc_info=True)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        "An unexpected error occurred",
        {"type": type(exc).__name__},
    )
