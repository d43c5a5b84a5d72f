"""Custom exception hierarchy for tuneproxy.

All application exceptions inherit from :class:`ProxyError`, which carries
an optional ``provider_name`` (the upstream service that caused the failure)
and a class-level ``status_code`` that the error-handling middleware uses to
pick the outward HTTP status.

    ProxyError  (base -- 500)
    +-- MissingParameterError  (client input error -- 400)
    +-- UpstreamAuthError      (token endpoint rejected us or was unreachable)
    +-- UpstreamRequestError   (catalog endpoint failed or was unreachable)

Upstream errors also record the upstream HTTP status when one was received
(``None`` for transport failures such as connection resets).
"""

from __future__ import annotations


class ProxyError(Exception):
    """Base exception for all tuneproxy errors.

    The ``__str__`` method prefixes the provider name in brackets for
    structured log output, e.g. ``[spotify] Spotify search failed``.
    The ``message`` property is the un-prefixed text returned to clients.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Client errors
# ---------------------------------------------------------------------------

class MissingParameterError(ProxyError):
    """Raised when a required request parameter is absent or empty."""

    status_code = 400

    def __init__(self, parameter: str, message: str | None = None) -> None:
        self._parameter = parameter
        super().__init__(message=message or f"Query parameter '{parameter}' is required")

    @property
    def parameter(self) -> str:
        return self._parameter


# ---------------------------------------------------------------------------
# Upstream errors
# ---------------------------------------------------------------------------

class _UpstreamError(ProxyError):
    """Shared shape for failures talking to the upstream provider."""

    def __init__(
        self,
        message: str,
        provider_name: str | None = None,
        upstream_status: int | None = None,
    ) -> None:
        self._upstream_status = upstream_status
        super().__init__(message=message, provider_name=provider_name)

    @property
    def upstream_status(self) -> int | None:
        return self._upstream_status


class UpstreamAuthError(_UpstreamError):
    """Raised when the token endpoint rejects the proxy's credentials.

    Also raised when the endpoint is unreachable or returns a body without
    an access token.  The token cache is never touched on this path.
    """

    def __init__(
        self,
        message: str = "Failed to fetch access token",
        provider_name: str | None = None,
        upstream_status: int | None = None,
    ) -> None:
        super().__init__(
            message=message, provider_name=provider_name, upstream_status=upstream_status
        )


class UpstreamRequestError(_UpstreamError):
    """Raised when a catalog request (search, album) fails upstream."""

    def __init__(
        self,
        message: str = "Upstream catalog request failed",
        provider_name: str | None = None,
        upstream_status: int | None = None,
    ) -> None:
        super().__init__(
            message=message, provider_name=provider_name, upstream_status=upstream_status
        )
