"""Pydantic response schemas for the proxy's HTTP surface.

Search results are relayed verbatim and have no schema here; only the
proxy-shaped bodies are modelled.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TokenResponse(BaseModel):
    """Diagnostic view of the currently cached access token."""

    access_token: str
    expires_in: int = Field(ge=0, description="Seconds until the token expires")


class AlbumDetailResponse(BaseModel):
    """Album metadata and its first page of tracks, as returned upstream.

    Serialized with the camelCase field names the frontend expects.
    """

    model_config = ConfigDict(populate_by_name=True)

    album_data: Any = Field(alias="albumData")
    tracks_data: Any = Field(alias="tracksData")


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    providers: dict[str, bool]


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str
