from typing import Any, Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.platform.logger import get_logger
from app.platform.response import error_response

logger = get_logger(__name__)


class VerifyMeError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Any = None, **extra: Any):
        self.message = message or self.default_message
        self.details = details
        self.extra = extra
        super().__init__(self.message)


class ValidationError(VerifyMeError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation failed"


class NotFoundError(VerifyMeError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class AuthError(VerifyMeError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class ForbiddenError(VerifyMeError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied"


class StatusTransitionError(VerifyMeError):
    """Raised when a channel is asked to leave a terminal status."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Invalid status transition"


class InternalError(VerifyMeError):
    default_message = "Internal server error"


class DecryptError(InternalError):
    default_message = "Failed to decrypt value"


def add_exception_handlers(app):
    @app.exception_handler(VerifyMeError)
    async def verify_me_exception_handler(request: Request, exc: VerifyMeError):
        if exc.status_code >= 500:
            logger.error(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
        return error_response(
            exc.message,
            status_code=exc.status_code,
            details=exc.details,
            headers=headers,
            **exc.extra,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return error_response(
            str(exc.detail) or "Error",
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return error_response(
            "Validation failed",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=exc.errors(),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception: {exc}")
        return error_response(
            "Internal server error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
