# =============================================================================
# app/exceptions.py - Custom Exceptions and Error Responder
# =============================================================================
# Centralized exception handling for the API.
#
# Every error leaves the server in the same envelope:
#   {"error": {"message": "...", "code": "...", "data": ...}}
# with the HTTP status taken from the error (500 when it carries none).
#
# error_response() is the single translator; the exception handlers and the
# protected-routes middleware both go through it.
# =============================================================================

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ApiException(Exception):
    """
    Base exception for the API.

    All custom exceptions inherit from this class. Carries its own HTTP status,
    a machine-readable code and optional structured data for the client.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        data: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.data = data

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        return {
            "error": {
                "message": self.message,
                "code": self.code,
                "data": self.data,
            }
        }


# =============================================================================
# Authentication Exceptions
# =============================================================================

class AuthenticationError(ApiException):
    """Raised when a request to a protected route carries no usable credential."""

    headers = {"WWW-Authenticate": "Bearer"}

    def __init__(self, message: str, code: str, data: Any = None):
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_401_UNAUTHORIZED,
            data=data,
        )


class UnauthenticatedError(AuthenticationError):
    """Raised when no bearer token was sent."""

    def __init__(self, data: Any = None):
        super().__init__("unauthenticated", code="UNAUTHENTICATED", data=data)


class InvalidTokenError(AuthenticationError):
    """Raised when the token is malformed, badly signed or lacks a subject."""

    def __init__(self, data: Any = None):
        super().__init__("invalid token", code="INVALID_TOKEN", data=data)


class ExpiredTokenError(AuthenticationError):
    """Raised when the token's expiry time has passed."""

    def __init__(self, data: Any = None):
        super().__init__("expired token", code="EXPIRED_TOKEN", data=data)


# =============================================================================
# Error Responder
# =============================================================================

def error_response(exc: BaseException) -> JSONResponse:
    """
    Map any exception to the structured JSON error response.

    ApiException keeps its status, code and data. Anything else becomes a
    500 with the exception's message and code INTERNAL_ERROR.
    """
    if not isinstance(exc, ApiException):
        logger.error(f"Unhandled exception: {exc!r}", exc_info=exc)
        exc = ApiException(
            message=str(exc) or "Internal Server Error",
            code="INTERNAL_ERROR",
        )

    return JSONResponse(
        status_code=exc.status_code or status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=exc.to_dict(),
        headers=getattr(exc, "headers", None),
    )


# =============================================================================
# Exception Handlers
# =============================================================================

async def api_exception_handler(request: Request, exc: ApiException) -> JSONResponse:
    """Convert ApiException raised by a handler or dependency to JSON."""
    return error_response(exc)


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """
    Handle framework HTTP errors (404, 405, ...) in the same envelope.
    """
    error = ApiException(
        message=str(exc.detail),
        code=f"HTTP_{exc.status_code}",
        status_code=exc.status_code,
    )
    response = error_response(error)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    The individual errors are passed back as the data payload.
    """
    logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")
    error = ApiException(
        message="Validation error",
        code="VALIDATION_ERROR",
        status_code=422,
        data=[
            {
                "field": ".".join(str(loc) for loc in err.get("loc", ())),
                "message": err.get("msg", "Invalid value"),
                "type": err.get("type"),
            }
            for err in exc.errors()
        ],
    )
    return error_response(error)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unexpected exceptions."""
    logger.error(f"Unhandled exception on {request.method} {request.url.path}")
    return error_response(exc)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(ApiException, api_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
