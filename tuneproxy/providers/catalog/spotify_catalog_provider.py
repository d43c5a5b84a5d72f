"""Spotify Web API catalog provider.

Implements ICatalogProvider with plain authorized GETs against
``api.spotify.com/v1``.  Response bodies are returned as-is; the proxy
never reshapes catalog data.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from tuneproxy.config.settings import Settings
from tuneproxy.interfaces.catalog_provider import ICatalogProvider
from tuneproxy.models.credential import Credential
from tuneproxy.utils.errors import UpstreamRequestError
from tuneproxy.utils.logging import get_logger

_PROVIDER_NAME = "spotify"
_ALBUM_TRACKS_PAGE_SIZE = 50


class SpotifyCatalogProvider(ICatalogProvider):
    """Catalog provider backed by the Spotify Web API.

    No pagination is followed: album track listings stop at the first page
    of 50 items.
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient) -> None:
        self._settings = settings
        self._http = http_client
        self._base_url = settings.spotify_api_base_url.rstrip("/")
        self._logger = get_logger(__name__)

    async def _get_json(
        self,
        path: str,
        credential: Credential,
        params: dict[str, Any] | None = None,
        failure_message: str = "Spotify request failed",
    ) -> Any:
        url = f"{self._base_url}{path}"
        try:
            response = await self._http.get(
                url, params=params, headers=credential.authorization_header()
            )
        except httpx.HTTPError as exc:
            self._logger.error("catalog_request_failed", path=path, error=str(exc))
            raise UpstreamRequestError(
                message=f"{failure_message}: {exc}",
                provider_name=_PROVIDER_NAME,
            ) from exc

        if not response.is_success:
            self._logger.warning(
                "catalog_request_rejected", path=path, status=response.status_code
            )
            raise UpstreamRequestError(
                message=f"{failure_message} (status {response.status_code})",
                provider_name=_PROVIDER_NAME,
                upstream_status=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamRequestError(
                message=f"{failure_message}: response was not valid JSON",
                provider_name=_PROVIDER_NAME,
                upstream_status=response.status_code,
            ) from exc

    # -- ICatalogProvider implementation ---------------------------------------

    async def search(
        self,
        credential: Credential,
        term: str,
        search_type: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> Any:
        """Search the Spotify catalog; httpx escapes *term* on the wire."""
        params: dict[str, Any] = {
            "q": term,
            "type": search_type or self._settings.spotify_search_types,
        }
        if limit is not None:
            params["limit"] = limit
        if offset is not None:
            params["offset"] = offset

        data = await self._get_json(
            "/search", credential, params=params, failure_message="Spotify search failed"
        )
        self._logger.debug("catalog_search_complete", type=params["type"])
        return data

    async def get_album(self, credential: Credential, album_id: str) -> Any:
        """Fetch album metadata for *album_id*."""
        return await self._get_json(
            f"/albums/{quote(album_id, safe='')}",
            credential,
            failure_message="Failed to fetch album from Spotify",
        )

    async def get_album_tracks(self, credential: Credential, album_id: str) -> Any:
        """Fetch the first page (50 items) of the album's track listing."""
        return await self._get_json(
            f"/albums/{quote(album_id, safe='')}/tracks",
            credential,
            params={"limit": _ALBUM_TRACKS_PAGE_SIZE},
            failure_message="Failed to fetch album tracks from Spotify",
        )

    def get_provider_name(self) -> str:
        """Return ``'spotify'``."""
        return _PROVIDER_NAME
