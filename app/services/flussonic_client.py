"""HTTP client for the Flussonic media server API."""

import logging
from typing import Any

import httpx

from app.config import settings
from app.core.exceptions import FlussonicAPIError

logger = logging.getLogger(__name__)


class FlussonicClient:
    """HTTP client for communicating with a Flussonic server."""

    def __init__(
        self,
        base_url: str | None = None,
        username: str | None = None,
        password: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.FLUSSONIC_API_URL).rstrip("/")
        user = username if username is not None else settings.FLUSSONIC_API_USER
        secret = password if password is not None else settings.FLUSSONIC_API_PASSWORD
        self.auth = (user, secret) if user else None
        self.timeout = timeout if timeout is not None else settings.FLUSSONIC_TIMEOUT_SECONDS
        self._transport = transport
        logger.debug(
            f"FlussonicClient initialized: base_url={self.base_url}, auth={'set' if self.auth else 'none'}"
        )

    async def _request(
        self,
        method: str,
        path: str,
        **kwargs,
    ) -> dict[str, Any]:
        """Make an HTTP request to the Flussonic API."""
        url = f"{self.base_url}{path}"
        logger.info(f"Flussonic API request: {method} {url}")

        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            try:
                response = await client.request(
                    method,
                    url,
                    auth=self.auth,
                    **kwargs,
                )

                logger.info(f"Flussonic API response: {response.status_code}")

                if response.status_code >= 400:
                    logger.error(f"Flussonic API error: {response.status_code} - {response.text}")
                    raise FlussonicAPIError(self._error_message(response))

                if not response.content:
                    return {}
                return response.json()

            except httpx.RequestError as e:
                logger.error(f"Flussonic API connection error: {e}")
                raise FlussonicAPIError(f"Connection error: {e}")

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or f"HTTP {response.status_code}"
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return response.text

    # Streams

    async def list_streams(self) -> dict[str, Any]:
        """List streams configured on the server."""
        return await self._request("GET", "/api/v1/streams")

    async def get_stream(self, stream_name: str) -> dict[str, Any]:
        """Get a stream's configuration."""
        return await self._request("GET", f"/api/v1/streams/{stream_name}")

    async def start_stream(self, stream_name: str) -> dict[str, Any]:
        """Start a stream."""
        return await self._request("POST", f"/api/v1/streams/{stream_name}/start")

    async def stop_stream(self, stream_name: str) -> dict[str, Any]:
        """Stop a stream."""
        return await self._request("POST", f"/api/v1/streams/{stream_name}/stop")

    # Playout

    async def start_playout(self, stream_name: str, playlist_name: str) -> dict[str, Any]:
        """Start VOD playout of a server-side playlist on a stream."""
        return await self._request(
            "POST",
            f"/api/v1/streams/{stream_name}/playout",
            json={"playlist": playlist_name, "mode": "vod"},
        )

    async def stop_playout(self, stream_name: str) -> dict[str, Any]:
        """Stop playout on a stream."""
        return await self._request("DELETE", f"/api/v1/streams/{stream_name}/playout")

    async def get_playout_status(self, stream_name: str) -> dict[str, Any]:
        """Get playout status of a stream."""
        return await self._request("GET", f"/api/v1/streams/{stream_name}/playout")

    async def play(self, stream_name: str, source_url: str) -> dict[str, Any]:
        """Play a single source on a stream now."""
        return await self._request(
            "POST",
            f"/api/v1/streams/{stream_name}/playout",
            json={"sources": [source_url], "mode": "vod"},
        )

    # Server

    async def get_server_status(self) -> dict[str, Any]:
        """Get server status."""
        return await self._request("GET", "/api/v1/server/status")

    async def test_connection(self) -> dict[str, Any]:
        """Check that the server is reachable with the configured credentials."""
        try:
            status = await self.get_server_status()
            return {"success": True, "status": status}
        except FlussonicAPIError as e:
            return {"success": False, "error": e.detail}
