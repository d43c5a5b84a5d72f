"""Bearer credential issued by the upstream token endpoint.

A :class:`Credential` pairs the opaque access token with the absolute
instant at which it stops being usable.  Instances are frozen: renewal
builds a new Credential and swaps the reference, so a reader holding the
old one never sees a half-updated token.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta

from pydantic import BaseModel, ConfigDict, Field


class Credential(BaseModel):
    """Cached client-credentials access token plus its expiry instant."""

    model_config = ConfigDict(frozen=True)

    access_token: str = Field(min_length=1)
    token_type: str = "Bearer"
    # Always timezone-aware UTC (issue time + provider-reported lifetime).
    expires_at: datetime

    @classmethod
    def issued(
        cls,
        access_token: str,
        expires_in: float,
        now: datetime,
        token_type: str = "Bearer",
    ) -> Credential:
        """Build a Credential issued at *now* that lives *expires_in* seconds."""
        return cls(
            access_token=access_token,
            token_type=token_type,
            expires_at=now + timedelta(seconds=expires_in),
        )

    def is_valid(self, now: datetime) -> bool:
        """Return ``True`` while *now* is strictly before the expiry instant."""
        return now < self.expires_at

    def remaining_seconds(self, now: datetime) -> int:
        """Whole seconds left before expiry, never negative."""
        remaining = (self.expires_at - now).total_seconds()
        return max(0, math.floor(remaining))

    def authorization_header(self) -> dict[str, str]:
        """Return the ``Authorization`` header carrying this token."""
        return {"Authorization": f"Bearer {self.access_token}"}
