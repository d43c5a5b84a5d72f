"""Abstract base class for access-token providers.

Defines the contract the routes and services rely on to obtain a bearer
credential for upstream calls.  Implementations decide how tokens are
fetched and for how long they are reused.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from tuneproxy.models.credential import Credential


class ITokenProvider(ABC):
    """Contract for services that hand out upstream bearer credentials."""

    @abstractmethod
    async def get_token(self) -> Credential:
        """Return a Credential that is valid at the time of the call.

        Returns
        -------
        Credential
            A cached credential when one is still valid, otherwise a freshly
            issued one.

        Raises
        ------
        tuneproxy.utils.errors.UpstreamAuthError
            If the token endpoint rejects the request or cannot be reached.
        """

    @abstractmethod
    def invalidate(self) -> None:
        """Drop any cached credential so the next call fetches a new one."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for the upstream, e.g. ``'spotify'``."""

    @abstractmethod
    def is_configured(self) -> bool:
        """Return ``True`` if client credentials are present."""

    @abstractmethod
    def remaining_seconds(self, credential: Credential) -> int:
        """Return whole seconds left on *credential* by this provider's clock."""
