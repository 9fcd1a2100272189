"""Google Maps web services client used by the proxy server."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class GoogleMapsClient(Protocol):
    """Interface for Google geocoding and directions."""

    async def geocode(self, address: str) -> dict[str, object]:
        """Geocode an address and return raw API data."""

    async def directions(
        self, origin: tuple[str, str], destination: tuple[str, str]
    ) -> dict[str, object]:
        """Return raw driving directions between two ``(lat, lng)`` pairs."""


@dataclass
class HttpxGoogleMapsClient(GoogleMapsClient):
    """HTTPX-backed Google Maps client."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, api_key: str, base_url: str) -> "HttpxGoogleMapsClient":
        """Create a Google Maps client with a managed httpx session."""
        return cls(api_key=api_key, base_url=base_url, http_client=httpx.AsyncClient())

    async def geocode(self, address: str) -> dict[str, object]:
        """Geocode a free-text address."""
        response = await self.http_client.get(
            f"{self.base_url}/geocode/json",
            params={"address": address, "key": self.api_key},
            timeout=15,
        )
        response.raise_for_status()
        return response.json()

    async def directions(
        self, origin: tuple[str, str], destination: tuple[str, str]
    ) -> dict[str, object]:
        """Fetch driving directions."""
        response = await self.http_client.get(
            f"{self.base_url}/directions/json",
            params={
                "origin": ",".join(origin),
                "destination": ",".join(destination),
                "key": self.api_key,
            },
            timeout=15,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
