"""Utility modules for tuneproxy.

- **errors** -- exception hierarchy rooted at ProxyError; each error class
  knows the HTTP status it maps to at the route boundary.
- **logging** -- structlog setup: coloured console output in development,
  structured JSON in production.
"""

from tuneproxy.utils.errors import (
    MissingParameterError,
    ProxyError,
    UpstreamAuthError,
    UpstreamRequestError,
)
from tuneproxy.utils.logging import configure_logging, get_logger

__all__ = [
    "MissingParameterError",
    "ProxyError",
    "UpstreamAuthError",
    "UpstreamRequestError",
    "configure_logging",
    "get_logger",
]
