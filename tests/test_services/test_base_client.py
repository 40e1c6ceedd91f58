"""Tests for the backend HTTP client."""

from collections.abc import Iterator
from contextlib import contextmanager
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from nusong_client import __version__
from nusong_client.services.base import (
    APIError,
    AuthenticationError,
    NotFoundError,
    RateLimitError,
    TransportError,
    ValidationError,
)
from nusong_client.services.client import NuSongClient


@pytest.fixture
def api_client() -> NuSongClient:
    """Create a NuSong client for testing."""
    return NuSongClient(base_url="http://test/", timeout=5)


@contextmanager
def returning(api_client: NuSongClient, response: httpx.Response) -> Iterator[AsyncMock]:
    """Patch the client so every request returns response."""
    with patch.object(api_client, "_get_client") as mock_get_client:
        mock_client = AsyncMock()
        mock_client.request.return_value = response
        mock_get_client.return_value = mock_client
        yield mock_client


class TestClientInit:
    def test_explicit_arguments(self, api_client: NuSongClient) -> None:
        assert api_client.base_url == "http://test"
        assert api_client.timeout == 5

    def test_defaults_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("API_BASE_URL", "https://api.nusong.app")
        monkeypatch.setenv("REQUEST_TIMEOUT", "12")

        client = NuSongClient()

        assert client.base_url == "https://api.nusong.app"
        assert client.timeout == 12

    def test_default_headers(self, api_client: NuSongClient) -> None:
        headers = api_client.default_headers
        assert headers["Accept"] == "application/json"
        assert headers["User-Agent"] == f"nusong-client/{__version__}"


class TestRequests:
    async def test_get_returns_json(self, api_client: NuSongClient) -> None:
        with returning(api_client, httpx.Response(200, json={"ok": True})) as mock_client:
            result = await api_client.get("api/albums", params={"page": 2})

        assert result == {"ok": True}
        call_args = mock_client.request.call_args
        assert call_args.kwargs["method"] == "GET"
        assert call_args.kwargs["url"] == "/api/albums"
        assert call_args.kwargs["params"] == {"page": 2}

    async def test_post_sends_json_body(self, api_client: NuSongClient) -> None:
        with returning(api_client, httpx.Response(201, json={"id": "a1"})) as mock_client:
            await api_client.post("/api/albums", json={"name": "Demos"})

        assert mock_client.request.call_args.kwargs["json"] == {"name": "Demos"}

    @pytest.mark.parametrize("status", [200, 204])
    async def test_empty_body_returns_none(self, api_client: NuSongClient, status: int) -> None:
        with returning(api_client, httpx.Response(status)):
            assert await api_client.delete("/api/generation/g1") is None

    async def test_invalid_json_raises(self, api_client: NuSongClient) -> None:
        with returning(api_client, httpx.Response(200, content=b"<html>")):
            with pytest.raises(APIError, match="Invalid JSON"):
                await api_client.get("/api/albums")


class TestErrorHandling:
    async def test_not_found(self, api_client: NuSongClient) -> None:
        response = httpx.Response(404, json={"message": "Album not found"})
        with returning(api_client, response):
            with pytest.raises(NotFoundError, match="Album not found"):
                await api_client.get("/api/albums/missing")

    async def test_rate_limit(self, api_client: NuSongClient) -> None:
        response = httpx.Response(429, json={"message": "Slow down"}, headers={"Retry-After": "30"})
        with returning(api_client, response):
            with pytest.raises(RateLimitError) as exc_info:
                await api_client.get("/api/community/tracks")

        assert exc_info.value.retry_after == 30
        assert exc_info.value.status_code == 429

    async def test_validation_error_carries_field_errors(self, api_client: NuSongClient) -> None:
        body = {
            "message": "Invalid input",
            "errors": [{"path": ["tags"], "message": "Tags are required"}],
        }
        with returning(api_client, httpx.Response(400, json=body)):
            with pytest.raises(ValidationError) as exc_info:
                await api_client.post("/api/generate-text-to-music", json={})

        assert str(exc_info.value) == "Invalid input"
        assert exc_info.value.errors == {"tags": "Tags are required"}

    async def test_unauthorized_without_interceptor(self, api_client: NuSongClient) -> None:
        with returning(api_client, httpx.Response(401, json={"message": "No session"})):
            with pytest.raises(AuthenticationError) as exc_info:
                await api_client.get("/api/my-generations")

        assert exc_info.value.status_code == 401

    async def test_server_error(self, api_client: NuSongClient) -> None:
        with returning(api_client, httpx.Response(500, json={"error": "boom"})):
            with pytest.raises(APIError, match="API error: boom") as exc_info:
                await api_client.get("/api/albums")

        assert exc_info.value.status_code == 500

    async def test_connection_error_is_transport_error(self, api_client: NuSongClient) -> None:
        with patch.object(api_client, "_get_client") as mock_get_client:
            mock_client = AsyncMock()
            mock_client.request.side_effect = httpx.ConnectError("refused")
            mock_get_client.return_value = mock_client

            with pytest.raises(TransportError, match="Request failed"):
                await api_client.get("/api/albums")

    async def test_timeout_is_transport_error(self, api_client: NuSongClient) -> None:
        with patch.object(api_client, "_get_client") as mock_get_client:
            mock_client = AsyncMock()
            mock_client.request.side_effect = httpx.ReadTimeout("slow")
            mock_get_client.return_value = mock_client

            with pytest.raises(TransportError, match="timed out"):
                await api_client.get("/api/albums")


class TestLifecycle:
    async def test_context_manager_closes_client(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json=[]))
        async with NuSongClient(base_url="http://test", transport=transport) as client:
            assert await client.get("/api/albums") == []
            inner = client._client

        assert inner is not None and inner.is_closed
        assert client._client is None
