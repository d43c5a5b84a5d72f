"""FastAPI routes for the catalog proxy.

Endpoint                 Method  Description
-----------------------------------------------------------------------
/                        GET     Plain-text liveness message
/health                  GET     Health check + credential status
/token                   GET     Diagnostic: current token and remaining lifetime
/search?q=...            GET     Catalog search, upstream JSON relayed verbatim
/album/{album_id}        GET     Album metadata + track listing (parallel fetch)

Services are resolved from ``app.state`` (populated in ``main._lifespan``)
through ``Depends`` helpers.  Failures are raised as ``ProxyError``
subclasses and rendered by ``ErrorHandlingMiddleware``.
"""

from __future__ import annotations

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from tuneproxy import __version__
from tuneproxy.api.schemas import AlbumDetailResponse, HealthResponse, TokenResponse
from tuneproxy.interfaces.token_provider import ITokenProvider
from tuneproxy.services.catalog_service import CatalogService
from tuneproxy.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter()

_LIVENESS_MESSAGE = "Backend server is running!"


def _get_token_provider(request: Request) -> ITokenProvider:
    return request.app.state.token_provider


def _get_catalog_service(request: Request) -> CatalogService:
    return request.app.state.catalog_service


TokenProviderDep = Annotated[ITokenProvider, Depends(_get_token_provider)]
CatalogServiceDep = Annotated[CatalogService, Depends(_get_catalog_service)]


@router.get("/", response_class=PlainTextResponse, summary="Liveness check")
async def liveness() -> str:
    return _LIVENESS_MESSAGE


@router.get("/health", response_model=HealthResponse, summary="Application health check")
async def health_check(token_provider: TokenProviderDep) -> HealthResponse:
    """Report whether upstream credentials are configured.

    Never contacts the upstream; a missing client id/secret is reported as
    ``degraded`` rather than failing the check.
    """
    configured = token_provider.is_configured()
    return HealthResponse(
        status="ok" if configured else "degraded",
        version=__version__,
        providers={token_provider.get_provider_name(): configured},
    )


@router.get("/token", response_model=TokenResponse, summary="Current access token")
async def get_token(token_provider: TokenProviderDep) -> TokenResponse:
    """Return the cached (or freshly fetched) token with its real remaining lifetime."""
    credential = await token_provider.get_token()
    return TokenResponse(
        access_token=credential.access_token,
        expires_in=token_provider.remaining_seconds(credential),
    )


@router.get("/search", response_model=None, summary="Search the catalog")
async def search(
    catalog_service: CatalogServiceDep,
    q: Annotated[str | None, Query(description="Free-text search term")] = None,
    type: Annotated[  # noqa: A002
        str | None, Query(description="Comma-separated item types, e.g. album,track")
    ] = None,
    limit: Annotated[int | None, Query(ge=1, le=50)] = None,
    offset: Annotated[int | None, Query(ge=0)] = None,
) -> JSONResponse:
    """Relay the upstream search response for *q* unchanged.

    The body is opaque JSON and may be any JSON value, so it bypasses
    response-model validation.
    """
    data = await catalog_service.search(q, search_type=type, limit=limit, offset=offset)
    return JSONResponse(content=data)


@router.get(
    "/album/{album_id}",
    response_model=AlbumDetailResponse,
    summary="Album metadata and track listing",
)
async def album_detail(album_id: str, catalog_service: CatalogServiceDep) -> AlbumDetailResponse:
    """Fetch album metadata and tracks concurrently; fail as a whole if either fails."""
    detail = await catalog_service.album_detail(album_id)
    _logger.debug("album_detail_served", album_id=album_id)
    return AlbumDetailResponse(album_data=detail["album"], tracks_data=detail["tracks"])
