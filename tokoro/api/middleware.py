"""API middleware: CORS, request logging and error rendering.

Every failure leaves the API as the same JSON envelope,
``{"message": ..., "status": ...}`` (:class:`ErrorResponse`):

    TokoroError subclasses      → ErrorHandlingMiddleware (status per type)
    anything else raised        → ErrorHandlingMiddleware (500, generic text)
    HTTPException (incl. 404s)  → http_exception_handler
    request body/param errors   → validation_exception_handler (422)

The framework's bare "Not Found" for unknown paths is rewritten to
``Resource not found: <path>``.  Statuses of 500 and above are logged at
error level; client errors at info.

# ─── MIDDLEWARE EXECUTION ORDER ───────────────────────────────────────
#
# Starlette middleware is a stack (LIFO: last added, first executed):
#
#   In main.py:
#     app.add_middleware(ErrorHandlingMiddleware)   # added 1st → inner
#     app.add_middleware(RequestLoggingMiddleware)  # added 2nd → outer
#
#   Request flow:
#     Client → RequestLogging → ErrorHandling → route handler
#
# So RequestLoggingMiddleware sees the final status code, including the
# ones ErrorHandlingMiddleware produced.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import time

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from tokoro.api.schemas import ErrorResponse
from tokoro.utils.errors import (
    InvalidInputError,
    NotFoundError,
    ProviderUnavailableError,
    TokoroError,
)
from tokoro.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

_STATUS_BY_ERROR: tuple[tuple[type[TokoroError], int], ...] = (
    (NotFoundError, 404),
    (InvalidInputError, 400),
    (ProviderUnavailableError, 503),
)

_GENERIC_FAILURE = "An unexpected error occurred"


# ---------------------------------------------------------------------------
# Envelope helpers
# ---------------------------------------------------------------------------


def status_for(exc: TokoroError) -> int:
    """Return the HTTP status an application error is rendered with."""
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status
    return 500


def friendly_message(message: str, status: int, path: str) -> str:
    """Rewrite the framework's bare 404 text into one naming the path."""
    if status == 404 and message == "Not Found":
        return f"Resource not found: {path}"
    return message


def error_response(message: str, status: int) -> JSONResponse:
    body = ErrorResponse(message=message, status=status)
    return JSONResponse(status_code=status, content=body.model_dump())


def _log_failure(status: int, path: str, **fields: object) -> None:
    if status >= 500:
        _logger.error("request_failed", status=status, path=path, **fields)
    else:
        _logger.info("request_rejected", status=status, path=path, **fields)


# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------


def configure_cors(app: FastAPI, *, allowed_origins: list[str] | None = None) -> None:
    """Add CORS middleware to the FastAPI application.

    Parameters
    ----------
    app:
        The FastAPI application instance.
    allowed_origins:
        Explicit list of allowed origins.  Defaults to ``["*"]`` for
        development; override with specific origins in production.
    """
    origins = allowed_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


# ---------------------------------------------------------------------------
# Request Logging
# ---------------------------------------------------------------------------


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every HTTP request with method, path, status code, and duration."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()
        response: Response | None = None

        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            status_code = response.status_code if response else 500
            _logger.info(
                "http_request",
                method=request.method,
                path=str(request.url.path),
                status=status_code,
                duration_ms=duration_ms,
            )


# ---------------------------------------------------------------------------
# Error Handling
# ---------------------------------------------------------------------------


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Render exceptions escaping a route as :class:`ErrorResponse` JSON.

    ``TokoroError`` subclasses keep their message and get the status from
    :func:`status_for`.  Any other exception is logged with its traceback
    and answered with a generic 500 so internals never reach the client.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        path = str(request.url.path)
        try:
            return await call_next(request)
        except TokoroError as exc:
            status = status_for(exc)
            _log_failure(
                status,
                path,
                error_type=type(exc).__name__,
                message=exc.message,
                provider=exc.provider_name,
            )
            return error_response(exc.message, status)
        except Exception:
            _logger.exception("unhandled_error", path=path)
            return error_response(_GENERIC_FAILURE, 500)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    path = str(request.url.path)
    message = friendly_message(str(exc.detail), exc.status_code, path)
    _log_failure(exc.status_code, path, message=message)
    return error_response(message, exc.status_code)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"{location}: {first.get('msg', 'invalid value')}"
    else:
        message = "Invalid request"
    _log_failure(422, str(request.url.path), message=message, errors=len(errors))
    return error_response(message, 422)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the HTTPException and validation handlers on *app*."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
