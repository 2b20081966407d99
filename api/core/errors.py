"""Application error taxonomy and the handlers that render it.

Every error reaching the request boundary is returned as ``{"error": message}``.
Messages are client-safe; internal causes are only logged.
"""

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.logger import get_logger
from core.wide_event import set_wide_event_fields

logger = get_logger(__name__)


class AppError(Exception):
    """Base class for errors that map to an HTTP status."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(AppError):
    """Raised when a request field is missing or cannot be coerced."""

    status_code = 400

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class NotFoundError(AppError):
    """Raised when a referenced record does not exist."""

    status_code = 404


class UserNotFoundError(NotFoundError):
    """Raised when a user id has no matching user."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__("User not found")


class StoreError(AppError):
    """Raised when a store read or write fails."""

    status_code = 500


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def app_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render AppError subclasses with their status and message."""
    if not isinstance(exc, AppError):
        return error_response(500, "Internal server error")

    set_wide_event_fields(error_type=type(exc).__name__, error=exc.message)
    if exc.status_code >= 500:
        logger.error(
            "request.store_error",
            path=request.url.path,
            method=request.method,
            error=exc.message,
            exc_info=exc.__cause__ or exc,
        )
    return error_response(exc.status_code, exc.message)


async def validation_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Handler for FastAPI request validation errors."""
    if not isinstance(exc, RequestValidationError):
        return error_response(500, "Internal server error")

    errors = exc.errors()
    logger.warning(
        "request.validation_error",
        path=request.url.path,
        method=request.method,
        error_count=len(errors),
    )
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ())[1:])
    message = first.get("msg", "Invalid request")
    return error_response(400, f"{field}: {message}" if field else message)


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render framework HTTP errors (unknown routes, 503s) in the same envelope."""
    if not isinstance(exc, StarletteHTTPException):
        return error_response(500, "Internal server error")

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler for unhandled exceptions."""
    logger.exception(
        "unhandled.exception",
        exc_type=type(exc).__name__,
        path=request.url.path,
        method=request.method,
    )
    return error_response(500, "Internal server error")
