"""Spotify client-credentials token provider.

Implements ITokenProvider by exchanging the proxy's own client id and secret
for an app-level access token at the Spotify Accounts service.  The token is
memoized until its provider-reported lifetime runs out.

Cache discipline:

- A valid cached Credential is returned without awaiting anything.
- Refreshes are serialized by an ``asyncio.Lock``.  A caller that queued
  behind an in-flight refresh re-checks the cache once it holds the lock
  and reuses the token the first caller just stored.
- The cached reference is replaced in one assignment, and only after a
  fully parsed successful response.  Failures leave it untouched.
"""

from __future__ import annotations

import asyncio
import base64
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

import httpx

from tuneproxy.config.settings import Settings
from tuneproxy.interfaces.token_provider import ITokenProvider
from tuneproxy.models.credential import Credential
from tuneproxy.utils.errors import UpstreamAuthError
from tuneproxy.utils.logging import get_logger

_PROVIDER_NAME = "spotify"
_GRANT_BODY = {"grant_type": "client_credentials"}


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


class SpotifyTokenProvider(ITokenProvider):
    """Token provider backed by the Spotify Accounts ``/api/token`` endpoint.

    Parameters
    ----------
    settings:
        Supplies the client id, client secret and token URL.
    http_client:
        Shared async HTTP client (owned and closed by the application).
    clock:
        Returns the current timezone-aware instant.  Injected by tests.
    """

    def __init__(
        self,
        settings: Settings,
        http_client: httpx.AsyncClient,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._settings = settings
        self._http = http_client
        self._clock = clock
        self._credential: Credential | None = None
        self._refresh_lock = asyncio.Lock()
        self._logger = get_logger(__name__)

    # -- Private helpers -------------------------------------------------------

    def _basic_auth_header(self) -> str:
        raw = f"{self._settings.spotify_client_id}:{self._settings.spotify_client_secret}"
        return "Basic " + base64.b64encode(raw.encode("utf-8")).decode("ascii")

    def _cached_if_valid(self) -> Credential | None:
        credential = self._credential
        if credential is not None and credential.is_valid(self._clock()):
            return credential
        return None

    async def _request_token(self) -> dict[str, Any]:
        headers = {
            "Authorization": self._basic_auth_header(),
            "Content-Type": "application/x-www-form-urlencoded",
        }
        try:
            response = await self._http.post(
                self._settings.spotify_token_url, data=_GRANT_BODY, headers=headers
            )
        except httpx.HTTPError as exc:
            self._logger.error("spotify_token_request_failed", error=str(exc))
            raise UpstreamAuthError(
                message=f"Failed to fetch Spotify token: {exc}",
                provider_name=_PROVIDER_NAME,
            ) from exc

        if not response.is_success:
            self._logger.error("spotify_token_rejected", status=response.status_code)
            raise UpstreamAuthError(
                message=f"Failed to fetch Spotify token (status {response.status_code})",
                provider_name=_PROVIDER_NAME,
                upstream_status=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamAuthError(
                message="Spotify token response was not valid JSON",
                provider_name=_PROVIDER_NAME,
                upstream_status=response.status_code,
            ) from exc

    def _parse_credential(self, payload: dict[str, Any], issued_at: datetime) -> Credential:
        try:
            access_token = payload["access_token"]
            expires_in = float(payload["expires_in"])
        except (KeyError, TypeError, ValueError) as exc:
            raise UpstreamAuthError(
                message="Spotify token response is missing access_token or expires_in",
                provider_name=_PROVIDER_NAME,
            ) from exc
        if not isinstance(access_token, str) or not access_token:
            raise UpstreamAuthError(
                message="Spotify token response carried an empty access_token",
                provider_name=_PROVIDER_NAME,
            )
        return Credential.issued(
            access_token=access_token,
            expires_in=expires_in,
            now=issued_at,
            token_type=payload.get("token_type") or "Bearer",
        )

    # -- ITokenProvider implementation -----------------------------------------

    async def get_token(self) -> Credential:
        """Return the cached Credential, refreshing it when absent or expired."""
        cached = self._cached_if_valid()
        if cached is not None:
            return cached

        async with self._refresh_lock:
            cached = self._cached_if_valid()
            if cached is not None:
                return cached

            # Expiry counts from when the request went out, not when it came back.
            issued_at = self._clock()
            payload = await self._request_token()
            credential = self._parse_credential(payload, issued_at)
            self._credential = credential

        self._logger.info(
            "spotify_token_refreshed",
            expires_at=credential.expires_at.isoformat(),
        )
        return credential

    def invalidate(self) -> None:
        self._credential = None

    def remaining_seconds(self, credential: Credential) -> int:
        """Seconds left on *credential*, measured with the injected clock."""
        return credential.remaining_seconds(self._clock())

    @property
    def cached_credential(self) -> Credential | None:
        """The last stored Credential, valid or not (diagnostics only)."""
        return self._credential

    def get_provider_name(self) -> str:
        """Return ``'spotify'``."""
        return _PROVIDER_NAME

    def is_configured(self) -> bool:
        """Return ``True`` if client id and secret are configured."""
        return self._settings.has_spotify_credentials()
