"""Shared pytest fixtures for the tuneproxy test suite."""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

import httpx
import pytest

from tuneproxy.config.settings import Settings

TOKEN_URL = "https://accounts.example.test/api/token"
API_BASE_URL = "https://api.example.test/v1"


def make_settings(**overrides: Any) -> Settings:
    defaults: dict[str, Any] = {
        "spotify_client_id": "client-id",
        "spotify_client_secret": "client-secret",
        "spotify_token_url": TOKEN_URL,
        "spotify_api_base_url": API_BASE_URL,
        "spotify_search_types": "album,artist,track",
        "app_env": "test",
    }
    defaults.update(overrides)
    return Settings(**defaults)


class FakeClock:
    """Manually advanced UTC clock for expiry tests."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class UpstreamStub:
    """Routes httpx requests to canned responses and records every call.

    ``routes`` maps a URL path to either a ``(status, body)`` tuple or a
    callable taking the request and returning an ``httpx.Response``.
    Unknown paths answer 404.
    """

    def __init__(self) -> None:
        self.routes: dict[str, tuple[int, Any] | Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"error": {"status": 404, "message": "Not found"}})
        if callable(route):
            return route(request)
        status, body = route
        if isinstance(body, (dict, list)):
            return httpx.Response(status, content=json.dumps(body).encode(), headers={"Content-Type": "application/json"})
        return httpx.Response(status, text=body)

    def calls_to(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


def token_body(token: str = "token-1", expires_in: int = 3600) -> dict[str, Any]:
    return {"access_token": token, "token_type": "Bearer", "expires_in": expires_in}


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def upstream() -> UpstreamStub:
    stub = UpstreamStub()
    stub.routes["/api/token"] = (200, token_body())
    return stub


@pytest.fixture
def sample_search_body() -> dict[str, Any]:
    return {
        "albums": {
            "href": f"{API_BASE_URL}/search?query=test&type=album",
            "items": [{"id": "4aawyAB9vmqN3uQ7FjRGTy", "name": "Global Warming"}],
            "limit": 20,
            "offset": 0,
            "total": 1,
        }
    }


@pytest.fixture
def sample_album_body() -> dict[str, Any]:
    return {"id": "4aawyAB9vmqN3uQ7FjRGTy", "name": "Global Warming", "total_tracks": 2}


@pytest.fixture
def sample_tracks_body() -> dict[str, Any]:
    return {
        "items": [
            {"id": "t1", "name": "Global Warming", "track_number": 1},
            {"id": "t2", "name": "Feel This Moment", "track_number": 2},
        ],
        "limit": 50,
        "next": None,
        "total": 2,
    }
