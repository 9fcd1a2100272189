"""HTTP client for the maps proxy server."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class MapsProxyClient(Protocol):
    """Interface for the proxy's geocode, food bank and map endpoints."""

    async def geocode(self, address: str) -> dict[str, object]:
        """Geocode a free-text address and return raw upstream data."""

    async def search_food_banks(self, lat: float, lng: float) -> dict[str, object]:
        """Return raw food bank search data around a point."""

    async def directions(
        self, start_lat: float, start_lng: float, end_lat: float, end_lng: float
    ) -> dict[str, object]:
        """Return the raw driving route between two points."""

    async def static_map(self, lat: float, lng: float) -> bytes:
        """Return PNG bytes of a map centered on a point."""

    def static_map_url(self, lat: float, lng: float) -> str:
        """Return the proxy URL that serves the static map."""


@dataclass
class HttpxMapsProxyClient(MapsProxyClient):
    """HTTPX-backed proxy client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 10

    @classmethod
    def create(cls, base_url: str, timeout: float = 10) -> "HttpxMapsProxyClient":
        """Create a proxy client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def geocode(self, address: str) -> dict[str, object]:
        """Geocode an address through the proxy."""
        return await self._get_json("/api/geocode", {"address": address})

    async def search_food_banks(self, lat: float, lng: float) -> dict[str, object]:
        """Search food banks near a point."""
        return await self._get_json("/api/foodbanks", {"lat": lat, "lng": lng})

    async def directions(
        self, start_lat: float, start_lng: float, end_lat: float, end_lng: float
    ) -> dict[str, object]:
        """Fetch driving directions."""
        return await self._get_json(
            "/api/directions",
            {
                "startLat": start_lat,
                "startLng": start_lng,
                "endLat": end_lat,
                "endLng": end_lng,
            },
        )

    async def static_map(self, lat: float, lng: float) -> bytes:
        """Download the static map image."""
        response = await self.http_client.get(
            f"{self.base_url}/api/staticmap",
            params={"lat": lat, "lng": lng},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.content

    def static_map_url(self, lat: float, lng: float) -> str:
        return f"{self.base_url}/api/staticmap?lat={lat}&lng={lng}"

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _get_json(
        self, path: str, params: dict[str, object]
    ) -> dict[str, object]:
        response = await self.http_client.get(
            f"{self.base_url}{path}", params=params, timeout=self.timeout
        )
        response.raise_for_status()
        return response.json()
