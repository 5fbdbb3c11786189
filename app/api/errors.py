"""
Exception handlers: AppError taxonomy -> JSON body
{ code, error, message, retryable }.
StorageError -> 503 retryable, so the client shows «retry», not «share to unlock».
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.core.errors import AppError, StorageError, ValidationError

logger = logging.getLogger(__name__)


def _error_response(exc: AppError) -> JSONResponse:
    body = {
        "code": exc.status_code,
        "error": exc.code,
        "message": exc.message,
        "retryable": exc.retryable,
    }
    if exc.details:
        body["details"] = exc.details
    headers = {"Retry-After": "1"} if exc.retryable else None
    return JSONResponse(status_code=exc.status_code, content=body, headers=headers)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "request_failed",
            extra={"path": request.url.path, "method": request.method, "error_code": exc.code},
        )
    return _error_response(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {"field": ".".join(str(p) for p in err.get("loc", ())[1:]), "message": err.get("msg", "")}
        for err in exc.errors()
    ]
    return _error_response(ValidationError("Request validation failed", details=details))


async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception(
        "database_error",
        extra={"path": request.url.path, "method": request.method, "error": type(exc).__name__},
    )
    return _error_response(StorageError())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_error_handler)
