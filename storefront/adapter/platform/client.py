"""HTTP client for the commerce platform API."""

from typing import Any

import httpx
import logfire

from storefront.adapter.error import PlatformError
from storefront.config import PlatformSettings


class PlatformClient:
    """Thin JSON client over the platform's REST API.

    Owns one ``httpx.AsyncClient``; call ``aclose`` on shutdown.
    """

    def __init__(
        self,
        settings: PlatformSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize platform client.

        Args:
            settings: Platform connection settings
            transport: Optional transport (for tests)
        """
        self.settings = settings
        self._client = httpx.AsyncClient(
            base_url=settings.base_url,
            headers={"api_key": settings.api_key, "Accept": "application/json"},
            timeout=settings.timeout_seconds,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        allow_not_found: bool = False,
    ) -> Any:
        """Send a request and decode the JSON body.

        Args:
            method: HTTP method
            path: Path relative to the platform base URL
            json: Optional JSON body
            allow_not_found: Return None on 404/204 instead of raising

        Returns:
            Decoded JSON, or None for empty/not-found responses

        Raises:
            PlatformError: On transport errors and unexpected statuses
        """
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.HTTPError as e:
            logfire.error("Platform request failed", method=method, path=path, error=str(e))
            raise PlatformError(f"HTTP error calling platform: {e}") from e

        if response.status_code in (204, 404) and allow_not_found:
            return None

        if response.status_code >= 400:
            logfire.error(
                "Platform returned error",
                method=method,
                path=path,
                status_code=response.status_code,
                error=response.text,
            )
            raise PlatformError(
                f"Platform request {method} {path} failed: {response.status_code}",
                status_code=response.status_code,
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise PlatformError(f"Invalid JSON from platform: {e}") from e

    async def get(self, path: str, allow_not_found: bool = False) -> Any:
        return await self.request("GET", path, allow_not_found=allow_not_found)

    async def post(self, path: str, json: Any = None) -> Any:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, json: Any = None) -> Any:
        return await self.request("PUT", path, json=json)
