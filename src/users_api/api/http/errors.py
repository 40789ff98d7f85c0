"""Translation of exceptions into HTTP error responses.

Error bodies have the shape ``{"message": ..., "request_id": ...}``. Details of
unexpected failures are logged and never returned to the caller.
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from src.users_api.core.exceptions import UsersApiError, ValidationError

INTERNAL_ERROR_MESSAGE = "Internal Server Error"


def error_response(
    request: Request, status_code: int, message: str, **extra: Any
) -> JSONResponse:
    request_id = getattr(request.state, "request_id", "-")
    return JSONResponse(
        status_code=status_code,
        content={"message": message, "request_id": request_id, **extra},
        headers={"X-Request-ID": request_id},
    )


async def handle_api_error(request: Request, exc: UsersApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.opt(exception=exc).error("request.error")
        return error_response(request, exc.status_code, INTERNAL_ERROR_MESSAGE)

    logger.info("{} {}: {}", exc.status_code, type(exc).__name__, exc.message)
    if isinstance(exc, ValidationError) and exc.errors:
        return error_response(request, exc.status_code, exc.message, errors=exc.errors)
    return error_response(request, exc.status_code, exc.message)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = [
        {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
        for error in exc.errors()
    ]
    logger.info("400 request validation failed: {}", errors)
    return error_response(request, 400, "Invalid request", errors=errors)


async def handle_persistence_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.opt(exception=exc).error("request.persistence_error")
    return error_response(request, 500, INTERNAL_ERROR_MESSAGE)


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    response = error_response(request, exc.status_code, str(exc.detail))
    response.headers.update(exc.headers or {})
    return response


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(UsersApiError, handle_api_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(SQLAlchemyError, handle_persistence_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
