"""Mapbox Static Images client used by the proxy server."""

from dataclasses import dataclass
from typing import Protocol

import httpx

MAP_STYLE = "mapbox/streets-v11"
MAP_ZOOM = 13
MAP_SIZE = "500x300"


class MapboxClient(Protocol):
    """Interface for rendering static map images."""

    async def static_map(self, lat: str, lng: str) -> bytes:
        """Return PNG bytes for a map with a pin at the point."""


@dataclass
class HttpxMapboxClient(MapboxClient):
    """HTTPX-backed Mapbox client."""

    access_token: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, access_token: str, base_url: str) -> "HttpxMapboxClient":
        """Create a Mapbox client with a managed httpx session."""
        return cls(
            access_token=access_token,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
        )

    def static_map_url(self, lat: str, lng: str) -> str:
        """Return the Static Images URL without the access token."""
        return (
            f"{self.base_url}/styles/v1/{MAP_STYLE}/static/"
            f"pin-s+ff0000({lng},{lat})/{lng},{lat},{MAP_ZOOM}/{MAP_SIZE}"
        )

    async def static_map(self, lat: str, lng: str) -> bytes:
        """Download a static map image."""
        response = await self.http_client.get(
            self.static_map_url(lat, lng),
            params={"access_token": self.access_token},
            timeout=20,
        )
        response.raise_for_status()
        return response.content

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
