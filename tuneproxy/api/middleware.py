"""API middleware for CORS, request logging and error handling.

Request validation failures (bad ``limit``/``offset`` values and the like)
are rendered by :func:`validation_error_handler`, which ``create_app``
registers as an exception handler, so every error body has the same
``{"error": message}`` shape.

Starlette runs middleware as a stack (last added, first executed).  In
``main.create_app`` the error handler is added before the request logger,
so the request flow is::

    Client -> RequestLogging -> ErrorHandling -> route handler

and RequestLoggingMiddleware sees the final status code even when
ErrorHandlingMiddleware turned an exception into a JSON error.
"""

from __future__ import annotations

import time
import uuid

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from tuneproxy.api.schemas import ErrorResponse
from tuneproxy.utils.errors import ProxyError
from tuneproxy.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


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
        Explicit list of allowed origins.  Defaults to ``["*"]``.
    """
    origins = allowed_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers reject credentialed requests against a wildcard origin.
        allow_credentials=origins != ["*"],
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )


# ---------------------------------------------------------------------------
# Request Logging
# ---------------------------------------------------------------------------


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Emit one ``http_request`` line per request and tag its log context.

    Every request gets a short ``request_id`` (taken from an incoming
    ``X-Request-ID`` header when present) bound into structlog's context
    vars, so provider and service lines logged while handling the request
    carry the same id.  The id is echoed back in the response header.
    Query strings are not logged; the route decides what is safe to record.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            log = _logger.warning if status_code >= 500 else _logger.info
            log(
                "http_request",
                method=request.method,
                path=request.url.path,
                status=status_code,
                duration_ms=duration_ms,
            )
            structlog.contextvars.clear_contextvars()


# ---------------------------------------------------------------------------
# Error Handling
# ---------------------------------------------------------------------------


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Convert ``ProxyError`` subclasses into ``{"error": message}`` bodies.

    The HTTP status comes from the exception class (400 for missing
    parameters, 500 for upstream failures).  Anything that is not a
    ProxyError falls through to FastAPI's default 500 handler.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except ProxyError as exc:
            log = _logger.warning if exc.status_code < 500 else _logger.error
            log(
                "application_error",
                error_type=type(exc).__name__,
                message=exc.message,
                provider=exc.provider_name,
                upstream_status=getattr(exc, "upstream_status", None),
                path=str(request.url.path),
            )
            body = ErrorResponse(error=exc.message)
            return JSONResponse(status_code=exc.status_code, content=body.model_dump())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render FastAPI's request validation failures as ``{"error": message}``.

    Only the first failing field is reported, e.g.
    ``Invalid query parameter 'limit': Input should be less than or equal to 50``.
    """
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = [str(part) for part in first.get("loc", ())]
        source = location[0] if location else "request"
        name = ".".join(location[1:]) or source
        message = f"Invalid {source} parameter '{name}': {first.get('msg', 'invalid value')}"
    else:
        message = "Invalid request"

    _logger.warning(
        "request_validation_failed",
        path=request.url.path,
        message=message,
        error_count=len(errors),
    )
    body = ErrorResponse(error=message)
    return JSONResponse(status_code=400, content=body.model_dump())
