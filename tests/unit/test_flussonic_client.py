"""Unit tests for FlussonicClient."""

import base64
import json
from unittest.mock import patch

import httpx
import pytest

from app.core.exceptions import FlussonicAPIError
from app.services.flussonic_client import FlussonicClient


def _client(handler, **kwargs) -> FlussonicClient:
    return FlussonicClient(
        base_url=kwargs.pop("base_url", "http://flussonic.local:8080"),
        username=kwargs.pop("username", "admin"),
        password=kwargs.pop("password", "secret"),
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


class TestFlussonicClient:
    """Tests for FlussonicClient."""

    @pytest.mark.asyncio
    async def test_play_posts_source_to_stream_playout(self):
        """Test play sends the source to the stream's playout endpoint."""
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"status": "playing"})

        client = _client(handler)
        result = await client.play("news", "vod/headlines.mp4")

        assert result == {"status": "playing"}
        request = requests[0]
        assert request.method == "POST"
        assert str(request.url) == "http://flussonic.local:8080/api/v1/streams/news/playout"
        assert json.loads(request.content) == {"sources": ["vod/headlines.mp4"], "mode": "vod"}
        expected = base64.b64encode(b"admin:secret").decode()
        assert request.headers["Authorization"] == f"Basic {expected}"

    @pytest.mark.asyncio
    async def test_start_playout_and_stop_stream(self):
        """Test playout and stream commands hit their endpoints."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append((request.method, request.url.path))
            return httpx.Response(204)

        client = _client(handler)
        assert await client.start_playout("news", "morning") == {}
        await client.stop_playout("news")
        await client.stop_stream("news")

        assert calls == [
            ("POST", "/api/v1/streams/news/playout"),
            ("DELETE", "/api/v1/streams/news/playout"),
            ("POST", "/api/v1/streams/news/stop"),
        ]

    @pytest.mark.asyncio
    async def test_stream_queries_and_start(self):
        """Test stream listing, lookup and start."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append((request.method, request.url.path))
            if request.url.path == "/api/v1/streams":
                return httpx.Response(200, json={"streams": [{"name": "news"}]})
            return httpx.Response(200, json={"name": "news", "alive": True})

        client = _client(handler)

        assert await client.list_streams() == {"streams": [{"name": "news"}]}
        assert (await client.get_stream("news"))["alive"] is True
        await client.start_stream("news")

        assert calls == [
            ("GET", "/api/v1/streams"),
            ("GET", "/api/v1/streams/news"),
            ("POST", "/api/v1/streams/news/start"),
        ]

    @pytest.mark.asyncio
    async def test_test_connection_reports_success(self):
        """Test test_connection returns the server status."""

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/v1/server/status"
            return httpx.Response(200, json={"uptime": 42})

        result = await _client(handler).test_connection()

        assert result == {"success": True, "status": {"uptime": 42}}

    @pytest.mark.asyncio
    async def test_error_response_raises(self):
        """Test an error status surfaces the server message."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"message": "stream not found"})

        client = _client(handler)

        with pytest.raises(FlussonicAPIError) as exc_info:
            await client.get_playout_status("missing")

        assert exc_info.value.status_code == 502
        assert exc_info.value.detail == "Flussonic API error: stream not found"

    @pytest.mark.asyncio
    async def test_connection_error_raises(self):
        """Test transport failures are wrapped."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = _client(handler)

        with pytest.raises(FlussonicAPIError) as exc_info:
            await client.play("news", "vod/headlines.mp4")

        assert "Connection error" in exc_info.value.detail

    @pytest.mark.asyncio
    async def test_test_connection_reports_failure(self):
        """Test test_connection returns a result instead of raising."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, text="unauthorized")

        result = await _client(handler).test_connection()

        assert result == {"success": False, "error": "Flussonic API error: unauthorized"}

    def test_defaults_come_from_settings(self):
        """Test unset arguments fall back to settings."""
        with patch("app.services.flussonic_client.settings") as mock_settings:
            mock_settings.FLUSSONIC_API_URL = "http://media.example.com/"
            mock_settings.FLUSSONIC_API_USER = ""
            mock_settings.FLUSSONIC_API_PASSWORD = ""
            mock_settings.FLUSSONIC_TIMEOUT_SECONDS = 12.5

            client = FlussonicClient()

        assert client.base_url == "http://media.example.com"
        assert client.auth is None
        assert client.timeout == 12.5
