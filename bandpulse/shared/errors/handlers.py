"""
Centralized error handling for FastAPI.

The error middleware is the last stage of the request pipeline.
For every error it writes one log entry and exactly one JSON response.
Routes and use cases never format error responses themselves.
"""

import logging
import traceback
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from bandpulse.shared.errors.base import AppError
from bandpulse.shared.errors.classification import (
    ClassifiedError,
    OperationalFailure,
    UnknownFailure,
    ValidationFailure,
    classify_error,
    error_message,
)

logger = logging.getLogger(__name__)

VALIDATION_ERROR = "Validation error"
INTERNAL_SERVER_ERROR = "Internal server error"


def render_error(classified: ClassifiedError, production: bool) -> tuple[int, dict[str, Any]]:
    """Build the status code and JSON body for a classified error.

    Args:
        classified: Output of ``classify_error``.
        production: Redact messages of unknown errors when True.

    Returns:
        Tuple of (status_code, body).
    """
    match classified:
        case ValidationFailure(issues=issues, status_code=status_code):
            return status_code, {
                "error": VALIDATION_ERROR,
                "details": [{"path": i.path, "message": i.message} for i in issues],
            }
        case OperationalFailure(message=message, status_code=status_code):
            return status_code, {"error": message}
        case UnknownFailure(message=message, status_code=status_code):
            return status_code, {"error": INTERNAL_SERVER_ERROR if production else message}
    raise TypeError(f"Unclassified error: {classified!r}")


class ErrorMiddleware:
    """Exception handler shared by every error type the app can raise.

    Args:
        production: When True, messages of unexpected errors are
            replaced with a fixed string so internals never leak.
    """

    def __init__(self, production: bool) -> None:
        self._production = production

    async def __call__(self, request: Request, exc: Exception) -> JSONResponse:
        classified = classify_error(exc)
        message = error_message(exc)

        logger.error(
            "%s %s - %s",
            request.method,
            request.url.path,
            message,
            extra={
                "method": request.method,
                "path": request.url.path,
                "error_message": message,
                "stack": "".join(
                    traceback.format_exception(type(exc), exc, exc.__traceback__)
                ),
                "status_code": classified.status_code,
            },
        )

        status_code, body = render_error(classified, production=self._production)
        return JSONResponse(
            status_code=status_code,
            content=body,
            headers=getattr(exc, "headers", None),
        )


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """Answers exceptions no exception handler claimed.

    Runs innermost, below CORS and the security headers, and never
    re-raises: an unexpected error ends with one response.
    """

    def __init__(self, app: ASGIApp, handler: ErrorMiddleware) -> None:
        super().__init__(app)
        self._handler = handler

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return await self._handler(request, exc)


def register_error_handlers(app: FastAPI, production: bool) -> None:
    """Register the error middleware for every error type on the app.

    Must run before any other middleware is added, so that the catch-all
    ends up innermost and its responses still pass through CORS and the
    security headers.

    Args:
        app: The FastAPI application instance.
        production: Injected environment mode, see ``ErrorMiddleware``.
    """
    handler = ErrorMiddleware(production=production)

    app.add_exception_handler(RequestValidationError, handler)
    app.add_exception_handler(ValidationError, handler)
    app.add_exception_handler(AppError, handler)
    app.add_exception_handler(StarletteHTTPException, handler)
    app.add_middleware(UnhandledErrorMiddleware, handler=handler)
