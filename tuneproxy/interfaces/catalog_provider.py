"""Abstract base class for music-catalog API providers.

Defines the read-only catalog calls the proxy forwards.  Bodies are
returned as opaque decoded JSON (any JSON value) so they can be relayed to clients verbatim.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from tuneproxy.models.credential import Credential


class ICatalogProvider(ABC):
    """Contract for catalog backends queried with a bearer credential."""

    @abstractmethod
    async def search(
        self,
        credential: Credential,
        term: str,
        search_type: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> Any:
        """Run a free-text catalog search for *term*.

        Parameters
        ----------
        credential:
            Bearer credential to authorize the request with.
        term:
            Search text, passed through unmodified (escaped on the wire).
        search_type:
            Comma-separated item types; implementations supply a default.
        limit, offset:
            Optional paging controls, forwarded only when given.

        Raises
        ------
        tuneproxy.utils.errors.UpstreamRequestError
            On a non-success status or transport failure.
        """

    @abstractmethod
    async def get_album(self, credential: Credential, album_id: str) -> Any:
        """Return album metadata for *album_id*."""

    @abstractmethod
    async def get_album_tracks(self, credential: Credential, album_id: str) -> Any:
        """Return the first page of the album's track listing."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for the upstream, e.g. ``'spotify'``."""
