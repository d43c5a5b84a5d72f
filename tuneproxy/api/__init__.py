"""tuneproxy API layer: routes, schemas and middleware."""

from tuneproxy.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
    validation_error_handler,
)
from tuneproxy.api.routes import router
from tuneproxy.api.schemas import (
    AlbumDetailResponse,
    ErrorResponse,
    HealthResponse,
    TokenResponse,
)

__all__ = [
    "AlbumDetailResponse",
    "ErrorHandlingMiddleware",
    "ErrorResponse",
    "HealthResponse",
    "RequestLoggingMiddleware",
    "TokenResponse",
    "configure_cors",
    "router",
    "validation_error_handler",
]
