"""Exception handlers shared by every route.

All status-code mapping goes through ``to_api_error`` so the same failure
produces the same response no matter which endpoint raised it.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError, ResponseValidationError
from loguru import logger
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.responses import JSONResponse

from src.advocates.core.errors import (
    ApiError,
    InternalError,
    ValidationError,
    to_api_error,
)
from src.advocates.runtime.context import get_config


def _field_name(loc: tuple) -> str:
    # ("query", "limit") -> "limit"
    parts = [str(part) for part in loc if part not in ("query", "path", "body")]
    return ".".join(parts) or "request"


def _classify(exc: Exception) -> ApiError:
    if isinstance(exc, RequestValidationError):
        return ValidationError(
            [f"{_field_name(err['loc'])}: {err['msg']}" for err in exc.errors()]
        )
    if isinstance(exc, ResponseValidationError):
        return InternalError(details=[f"Response validation failed: {exc}"])
    return to_api_error(exc)


def error_response(exc: Exception, request_id: str | None = None) -> JSONResponse:
    """Log ``exc`` at a level matching its class and render it as JSON."""
    err = _classify(exc)

    if err.status_code >= 500:
        logger.opt(exception=exc).bind(
            status_code=err.status_code, error_type=type(exc).__name__
        ).error("request.failed: {}", err.error)
    else:
        logger.bind(
            status_code=err.status_code, error_type=type(exc).__name__
        ).info("request.rejected: {}", err.error)

    include_details = (
        not isinstance(err, InternalError)
        or get_config().app.environment != "production"
    )
    headers = {"X-Request-ID": request_id} if request_id else None
    return JSONResponse(
        status_code=err.status_code,
        content=err.to_payload(include_details=include_details),
        headers=headers,
    )


async def handle_exception(request: Request, exc: Exception) -> JSONResponse:
    return error_response(exc, request.headers.get("X-Request-ID"))


def register_exception_handlers(app: FastAPI) -> None:
    for exc_class in (
        ApiError,
        SQLAlchemyError,
        PydanticValidationError,
        RequestValidationError,
        ResponseValidationError,
    ):
        app.add_exception_handler(exc_class, handle_exception)
