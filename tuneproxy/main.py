"""tuneproxy FastAPI application entry point.

Builds the shared HTTP client and the provider/service graph on startup,
stores them on ``app.state`` for the route dependencies, and closes the
client on shutdown.  Running this module (or ``python -m tuneproxy``)
starts uvicorn on ``APP_HOST:PORT``.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from tuneproxy import __version__
from tuneproxy.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
    validation_error_handler,
)
from tuneproxy.api.routes import router as api_router
from tuneproxy.config import settings
from tuneproxy.config.settings import Settings
from tuneproxy.providers.auth.spotify_token_provider import SpotifyTokenProvider
from tuneproxy.providers.catalog.spotify_catalog_provider import SpotifyCatalogProvider
from tuneproxy.services.catalog_service import CatalogService
from tuneproxy.utils.logging import configure_logging, get_logger

# ---------------------------------------------------------------------------
# Module-level logging
# ---------------------------------------------------------------------------

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# DI assembly
# ---------------------------------------------------------------------------


def _build_all(app_settings: Settings) -> dict[str, Any]:
    """Construct the shared client, providers and service.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    http_client = httpx.AsyncClient(timeout=app_settings.http_timeout)

    token_provider = SpotifyTokenProvider(settings=app_settings, http_client=http_client)
    catalog = SpotifyCatalogProvider(settings=app_settings, http_client=http_client)
    catalog_service = CatalogService(token_provider=token_provider, catalog=catalog)

    return {
        "http_client": http_client,
        "token_provider": token_provider,
        "catalog_service": catalog_service,
    }


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


def _make_lifespan(app_settings: Settings):  # noqa: ANN202
    @asynccontextmanager
    async def _lifespan(application: FastAPI):  # noqa: ANN202
        components = _build_all(app_settings)
        for key, value in components.items():
            setattr(application.state, key, value)

        if not app_settings.has_spotify_credentials():
            _logger.warning(
                "spotify_credentials_missing",
                msg="SPOTIFY_CLIENT_ID / SPOTIFY_CLIENT_SECRET not set; token fetches will fail.",
            )

        _logger.info(
            "app_startup",
            version=__version__,
            environment=app_settings.app_env,
            port=app_settings.port,
        )

        yield

        http_client: httpx.AsyncClient = components["http_client"]
        await http_client.aclose()
        _logger.info("app_shutdown", message="HTTP client closed")

    return _lifespan


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build and configure the FastAPI application."""
    s = app_settings or settings
    application = FastAPI(
        title="tuneproxy",
        version=__version__,
        description=(
            "Backend proxy that holds the Spotify client credentials, caches an "
            "app access token, and forwards read-only catalog queries."
        ),
        lifespan=_make_lifespan(s),
    )

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application, allowed_origins=s.get_cors_origins())
    application.add_exception_handler(RequestValidationError, validation_error_handler)

    application.include_router(api_router)
    return application


app = create_app()


def run() -> None:
    """Console-script entry point: serve the app with uvicorn."""
    uvicorn.run(
        "tuneproxy.main:app",
        host=settings.app_host,
        port=settings.port,
        reload=(settings.app_env == "development"),
    )


if __name__ == "__main__":
    run()
