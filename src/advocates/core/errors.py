"""Error taxonomy shared by every HTTP endpoint.

Routes raise ``ApiError`` subclasses (or let storage exceptions propagate);
``to_api_error`` is the single place where an arbitrary exception is mapped
to a status code and response body.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import exc as sa_exc


class ApiError(Exception):
    """Base class for errors that translate directly into an HTTP response."""

    status_code: int = 500
    error: str = "Internal server error"

    def __init__(
        self,
        message: str | None = None,
        *,
        error: str | None = None,
        details: list[str] | None = None,
    ) -> None:
        super().__init__(message or error or self.error)
        self.message = message
        self.details = details
        if error is not None:
            self.error = error

    def to_payload(self, *, include_details: bool = True) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.error}
        if self.message is not None:
            payload["message"] = self.message
        if self.details is not None and include_details:
            payload["details"] = self.details
        return payload


class ValidationError(ApiError):
    """Malformed or out-of-range input. Always lists every offending field."""

    status_code = 400
    error = "Validation error"

    def __init__(self, details: list[str]) -> None:
        super().__init__(details=list(details))


class NotFoundError(ApiError):
    status_code = 404
    error = "Not found"


class ConflictError(ApiError):
    status_code = 409
    error = "Resource already exists"


class UnavailableError(ApiError):
    status_code = 503
    error = "Database connection error"


class InternalError(ApiError):
    """Unexpected failure; ``details`` are only exposed outside production."""

    status_code = 500
    error = "Internal server error"


_CONNECTIVITY_ERRORS = (
    sa_exc.OperationalError,
    sa_exc.InterfaceError,
    sa_exc.DisconnectionError,
    sa_exc.TimeoutError,
)


def is_connectivity_error(exc: BaseException) -> bool:
    if isinstance(exc, _CONNECTIVITY_ERRORS):
        return True
    return isinstance(exc, sa_exc.DBAPIError) and exc.connection_invalidated


def to_api_error(exc: BaseException) -> ApiError:
    """Classify ``exc`` into the error taxonomy."""
    if isinstance(exc, ApiError):
        return exc
    if isinstance(exc, sa_exc.IntegrityError):
        return ConflictError(str(exc.orig) if exc.orig is not None else str(exc))
    if is_connectivity_error(exc):
        return UnavailableError()
    if isinstance(exc, PydanticValidationError):
        # Request input never reaches pydantic unparsed, so this is an
        # outgoing envelope that failed its own schema.
        return InternalError(details=[f"Response validation failed: {exc}"])
    return InternalError(details=[str(exc)])
