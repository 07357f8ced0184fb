"""Exception handlers translating Helpdesk errors into JSON responses."""

from datetime import UTC, datetime

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .exceptions import (
    DuplicateIdentityError,
    HelpdeskError,
    InvalidCredentialsError,
    NotFoundError,
    TokenExpiredError,
    TokenInvalidError,
    TokenMissingError,
    ValidationError,
)

logger = structlog.get_logger("helpdesk")

EXCEPTION_MAPPING = {
    ValidationError: (400, "VALIDATION_ERROR"),
    DuplicateIdentityError: (400, "DUPLICATE_IDENTITY"),
    InvalidCredentialsError: (401, "INVALID_CREDENTIALS"),
    TokenMissingError: (401, "TOKEN_MISSING"),
    TokenExpiredError: (401, "TOKEN_EXPIRED"),
    TokenInvalidError: (403, "TOKEN_INVALID"),
    NotFoundError: (404, "NOT_FOUND"),
}


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error_type: str
    error_code: str
    timestamp: datetime


def _error_response(status_code: int, message: str, error_type: str, error_code: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            message=message,
            error_type=error_type,
            error_code=error_code,
            timestamp=datetime.now(UTC),
        ).model_dump(mode="json"),
    )


def helpdesk_error_handler(request: Request, exc: HelpdeskError):
    """Handle Helpdesk exceptions and return the mapped HTTP response."""
    status_code, error_code = EXCEPTION_MAPPING.get(type(exc), (500, "HELPDESK_ERROR"))
    if status_code >= 500:
        logger.error("unmapped_helpdesk_error", error_type=type(exc).__name__, path=request.url.path)
        return _error_response(status_code, "Internal server error", type(exc).__name__, error_code)
    return _error_response(status_code, exc.message, type(exc).__name__, error_code)


def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report malformed or missing request fields as 400 instead of FastAPI's 422."""
    fields = sorted({".".join(str(p) for p in err["loc"][1:]) or "body" for err in exc.errors()})
    message = f"Missing or invalid fields: {', '.join(fields)}" if fields else "Invalid request body"
    return _error_response(400, message, "ValidationError", "VALIDATION_ERROR")


def internal_error_response() -> JSONResponse:
    return _error_response(500, "Internal server error", "InternalServerError", "INTERNAL_SERVER_ERROR")


def general_exception_handler(request: Request, exc: Exception):
    """Log unexpected failures server-side and hide the details from the caller.

    Route errors are answered by `RequestLoggingMiddleware`; this catches what escapes
    the outer middleware stack.
    """
    logger.exception("unhandled_exception", path=request.url.path, method=request.method, exc_info=exc)
    return internal_error_response()


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(HelpdeskError, helpdesk_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, general_exception_handler)
