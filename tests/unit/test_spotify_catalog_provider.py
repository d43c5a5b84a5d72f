"""Unit tests for SpotifyCatalogProvider request building and error mapping."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import httpx
import pytest

from conftest import UpstreamStub, make_settings
from tuneproxy.models.credential import Credential
from tuneproxy.providers.catalog.spotify_catalog_provider import SpotifyCatalogProvider
from tuneproxy.utils.errors import UpstreamRequestError


@pytest.fixture()
def credential() -> Credential:
    return Credential(
        access_token="bearer-abc",
        expires_at=datetime.now(tz=timezone.utc) + timedelta(hours=1),
    )


def _provider(upstream: UpstreamStub) -> SpotifyCatalogProvider:
    return SpotifyCatalogProvider(settings=make_settings(), http_client=upstream.client())


class TestSearch:
    @pytest.mark.asyncio
    async def test_returns_body_verbatim(
        self,
        upstream: UpstreamStub,
        credential: Credential,
        sample_search_body: dict[str, Any],
    ) -> None:
        upstream.routes["/v1/search"] = (200, sample_search_body)

        result = await _provider(upstream).search(credential, "test")

        assert result == sample_search_body

    @pytest.mark.asyncio
    async def test_sends_bearer_token_and_default_type(
        self, upstream: UpstreamStub, credential: Credential
    ) -> None:
        upstream.routes["/v1/search"] = (200, {})

        await _provider(upstream).search(credential, "test")

        request = upstream.calls_to("/v1/search")[0]
        assert request.method == "GET"
        assert request.headers["Authorization"] == "Bearer bearer-abc"
        assert request.url.params["q"] == "test"
        assert request.url.params["type"] == "album,artist,track"
        assert "limit" not in request.url.params

    @pytest.mark.asyncio
    async def test_term_is_escaped_as_query_parameter(
        self, upstream: UpstreamStub, credential: Credential
    ) -> None:
        upstream.routes["/v1/search"] = (200, {})

        await _provider(upstream).search(credential, "AC/DC & friends?type=x")

        request = upstream.calls_to("/v1/search")[0]
        assert request.url.params["q"] == "AC/DC & friends?type=x"
        assert request.url.params.get_list("type") == ["album,artist,track"]
        assert b"%26" in request.url.query

    @pytest.mark.asyncio
    async def test_forwards_optional_type_limit_offset(
        self, upstream: UpstreamStub, credential: Credential
    ) -> None:
        upstream.routes["/v1/search"] = (200, {})

        await _provider(upstream).search(
            credential, "test", search_type="track", limit=5, offset=10
        )

        params = upstream.calls_to("/v1/search")[0].url.params
        assert params["type"] == "track"
        assert params["limit"] == "5"
        assert params["offset"] == "10"

    @pytest.mark.asyncio
    async def test_non_success_raises_with_status(
        self, upstream: UpstreamStub, credential: Credential
    ) -> None:
        upstream.routes["/v1/search"] = (401, {"error": {"status": 401}})

        with pytest.raises(UpstreamRequestError) as exc_info:
            await _provider(upstream).search(credential, "test")

        assert exc_info.value.upstream_status == 401
        assert "Spotify search failed" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_transport_error_raises(self, credential: Credential) -> None:
        def boom(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        provider = SpotifyCatalogProvider(
            settings=make_settings(),
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(boom)),
        )

        with pytest.raises(UpstreamRequestError) as exc_info:
            await provider.search(credential, "test")

        assert exc_info.value.upstream_status is None


class TestAlbum:
    @pytest.mark.asyncio
    async def test_get_album(
        self,
        upstream: UpstreamStub,
        credential: Credential,
        sample_album_body: dict[str, Any],
    ) -> None:
        upstream.routes["/v1/albums/4aawyAB9vmqN3uQ7FjRGTy"] = (200, sample_album_body)

        result = await _provider(upstream).get_album(credential, "4aawyAB9vmqN3uQ7FjRGTy")

        assert result == sample_album_body
        request = upstream.requests[0]
        assert request.headers["Authorization"] == "Bearer bearer-abc"

    @pytest.mark.asyncio
    async def test_get_album_tracks_caps_page_at_fifty(
        self,
        upstream: UpstreamStub,
        credential: Credential,
        sample_tracks_body: dict[str, Any],
    ) -> None:
        upstream.routes["/v1/albums/abc/tracks"] = (200, sample_tracks_body)

        result = await _provider(upstream).get_album_tracks(credential, "abc")

        assert result == sample_tracks_body
        assert upstream.requests[0].url.params["limit"] == "50"

    @pytest.mark.asyncio
    async def test_album_id_cannot_escape_the_album_path(
        self, upstream: UpstreamStub, credential: Credential
    ) -> None:
        with pytest.raises(UpstreamRequestError):
            await _provider(upstream).get_album(credential, "../me")

        assert upstream.requests[0].url.path != "/v1/me"

    @pytest.mark.asyncio
    async def test_missing_album_raises(
        self, upstream: UpstreamStub, credential: Credential
    ) -> None:
        with pytest.raises(UpstreamRequestError) as exc_info:
            await _provider(upstream).get_album(credential, "missing")

        assert exc_info.value.upstream_status == 404

    def test_get_provider_name(self, upstream: UpstreamStub) -> None:
        assert _provider(upstream).get_provider_name() == "spotify"
