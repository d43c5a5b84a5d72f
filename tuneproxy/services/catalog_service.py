"""Catalog proxy service: token acquisition plus upstream fan-out.

Each public method obtains a Credential from the token provider and then
issues the catalog call(s) with it.  ``album_detail`` fans out two requests
(album metadata and track listing) concurrently and joins them; if either
fails the whole operation fails with a single aggregated error.
"""

from __future__ import annotations

import asyncio
from typing import Any

import structlog

from tuneproxy.interfaces.catalog_provider import ICatalogProvider
from tuneproxy.interfaces.token_provider import ITokenProvider
from tuneproxy.utils.errors import MissingParameterError, UpstreamRequestError
from tuneproxy.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

_ALBUM_PARTS = ("album", "tracks")


class CatalogService:
    """Forwards catalog queries to the upstream provider with a bearer token."""

    def __init__(self, token_provider: ITokenProvider, catalog: ICatalogProvider) -> None:
        self._tokens = token_provider
        self._catalog = catalog

    async def search(
        self,
        term: str | None,
        search_type: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> Any:
        """Relay a catalog search for *term*.

        Raises
        ------
        MissingParameterError
            If *term* is absent or empty.  Checked before any token or
            network activity.
        UpstreamAuthError, UpstreamRequestError
            Propagated from the providers.
        """
        if not term:
            raise MissingParameterError("q", message="Search term (q) is required")

        credential = await self._tokens.get_token()
        return await self._catalog.search(
            credential, term, search_type=search_type, limit=limit, offset=offset
        )

    async def album_detail(self, album_id: str) -> dict[str, Any]:
        """Fetch album metadata and its track listing in parallel.

        Both requests share one Credential and are always awaited to
        completion.  No partial result is returned.

        Returns
        -------
        dict
            ``{"album": <album json>, "tracks": <tracks json>}``
        """
        credential = await self._tokens.get_token()

        results = await asyncio.gather(
            self._catalog.get_album(credential, album_id),
            self._catalog.get_album_tracks(credential, album_id),
            return_exceptions=True,
        )

        failures = [
            (part, result)
            for part, result in zip(_ALBUM_PARTS, results)
            if isinstance(result, BaseException)
        ]
        if failures:
            for part, exc in failures:
                # Only upstream failures are folded into the aggregate.
                if not isinstance(exc, UpstreamRequestError):
                    raise exc
                _logger.warning(
                    "album_detail_part_failed", album_id=album_id, part=part, error=exc.message
                )
            _, first = failures[0]
            raise UpstreamRequestError(
                message="Failed to fetch album details from Spotify: "
                + "; ".join(exc.message for _, exc in failures),
                provider_name=self._catalog.get_provider_name(),
                upstream_status=first.upstream_status,
            )

        album, tracks = results
        return {"album": album, "tracks": tracks}
