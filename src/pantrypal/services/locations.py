"""Location resolution and food bank search."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from pantrypal.adapters.proxy_client import MapsProxyClient
from pantrypal.domain.food_banks import (
    FoodBank,
    FoodBankSearchResult,
    LocationError,
    LocationResult,
    Route,
    RouteStep,
)
from pantrypal.domain.geo import (
    Coordinates,
    format_miles,
    haversine_miles,
    parse_coordinates,
)
from pantrypal.domain.results import ApiResult
from pantrypal.services.auth import SessionProvider
from pantrypal.services.preferences import PreferencesRepository

_logger = logging.getLogger(__name__)


class DeviceLocator(Protocol):
    """Interface to the device's location services."""

    async def request_permission(self) -> bool:
        """Ask for foreground location permission."""

    async def current_position(self) -> Coordinates | None:
        """Return the current fix, or None when none is available."""


@dataclass
class LocationService:
    """Resolves pickup search origins and queries nearby food banks."""

    session_provider: SessionProvider
    preferences_repository: PreferencesRepository
    proxy_client: MapsProxyClient
    device_locator: DeviceLocator

    async def resolve_preferred_location(self) -> LocationResult:
        """Return coordinates for the user's saved location.

        Free-text addresses are geocoded once and the coordinates are
        written back, so later calls skip the geocoder.
        """
        try:
            user_id = self.session_provider.current_user_id()
            if not user_id:
                return LocationResult.failed(LocationError.NO_SESSION)

            try:
                stored = self.preferences_repository.get_location(user_id)
            except Exception:
                _logger.exception("Preferences read failed", extra={"user_id": user_id})
                return LocationResult.failed(LocationError.SERVER_ERROR)
            if not stored:
                _logger.warning("No location found in preferences for %s", user_id)
                return LocationResult.failed(LocationError.NO_PREFERENCES)

            coordinates = parse_coordinates(stored)
            if coordinates is not None:
                return LocationResult(lat=coordinates.lat, lng=coordinates.lng)
            if not isinstance(stored, str) or not stored.strip():
                _logger.error("Location format not recognized: %r", stored)
                return LocationResult.failed(LocationError.NO_LOCATION)

            return await self._geocode_and_store(user_id, stored.strip())
        except Exception:
            _logger.exception("Error getting user location")
            return LocationResult.failed(LocationError.NETWORK_ERROR)

    async def resolve_current_location(self) -> LocationResult:
        """Return the device's current coordinates."""
        try:
            if not await self.device_locator.request_permission():
                return LocationResult.failed(LocationError.PERMISSION_DENIED)
            position = await self.device_locator.current_position()
        except Exception:
            _logger.exception("Error getting current location")
            return LocationResult.failed(LocationError.NO_LOCATION)
        if position is None:
            return LocationResult.failed(LocationError.NO_LOCATION)
        return LocationResult(lat=position.lat, lng=position.lng)

    async def search_nearby_food_banks(
        self,
        search_lat: float,
        search_lng: float,
        current_lat: float | None = None,
        current_lng: float | None = None,
    ) -> FoodBankSearchResult:
        """Search food banks near a point in the order the proxy returns.

        When a current position is given, each result is annotated with
        its great-circle distance from it.
        """
        if not search_lat or not search_lng:
            return FoodBankSearchResult(error="Invalid location coordinates")

        try:
            payload = await self.proxy_client.search_food_banks(search_lat, search_lng)
        except httpx.HTTPStatusError as exc:
            _logger.warning("Food bank search failed: %s", exc.response.status_code)
            return FoodBankSearchResult(error="Failed to fetch food banks")
        except Exception:
            _logger.exception("Error searching food banks")
            return FoodBankSearchResult(error="Network error while fetching food banks")

        status = payload.get("status")
        results = payload.get("results")
        if not isinstance(results, list) or status == "ZERO_RESULTS":
            return FoodBankSearchResult(error="No food banks found in your area")
        if status == "REQUEST_DENIED":
            return FoodBankSearchResult(error="API request was denied")

        origin = None
        if current_lat and current_lng:
            origin = Coordinates(lat=current_lat, lng=current_lng)
        food_banks = []
        for raw in results:
            food_bank = _parse_food_bank(raw, origin)
            if food_bank is None:
                _logger.warning("Skipping malformed food bank result: %r", raw)
                continue
            food_banks.append(food_bank)
        return FoodBankSearchResult(food_banks=food_banks)

    async def get_directions(
        self, start: Coordinates, end: Coordinates
    ) -> ApiResult[Route]:
        """Fetch a driving route between two points through the proxy."""
        if not (start.lat and start.lng and end.lat and end.lng):
            return ApiResult.failure("bad-data", "Invalid coordinates")
        try:
            payload = await self.proxy_client.directions(
                start.lat, start.lng, end.lat, end.lng
            )
        except httpx.HTTPStatusError as exc:
            _logger.warning("Directions request failed: %s", exc.response.status_code)
            return ApiResult.failure("server", "Failed to fetch directions")
        except Exception:
            _logger.exception("Error getting directions")
            return ApiResult.failure(
                "server", "Network error while fetching directions"
            )

        route = _parse_route(payload.get("route"))
        if route is None:
            return ApiResult.failure("bad-data", "Failed to fetch directions")
        return ApiResult.success(route)

    async def get_static_map_url(self, lat: float, lng: float) -> ApiResult[str]:
        """Check the proxy can render a map and return its URL."""
        if not lat or not lng:
            return ApiResult.failure("bad-data", "Invalid location coordinates")
        try:
            await self.proxy_client.static_map(lat, lng)
        except httpx.HTTPStatusError:
            return ApiResult.failure("server", "Failed to generate map image")
        except Exception:
            _logger.exception("Error generating map image")
            return ApiResult.failure("server", "Network error while generating map")
        return ApiResult.success(self.proxy_client.static_map_url(lat, lng))

    async def _geocode_and_store(self, user_id: str, address: str) -> LocationResult:
        try:
            data = await self.proxy_client.geocode(address)
        except Exception:
            _logger.exception("Geocoding error", extra={"address": address})
            return LocationResult.failed(LocationError.GEOCODING_ERROR)

        if data.get("status") == "REQUEST_DENIED":
            _logger.error("Geocoding request denied: %s", data.get("error_message"))
            return LocationResult.failed(LocationError.API_KEY_ERROR)
        coordinates = _first_geocode_location(data)
        if data.get("status") != "OK" or coordinates is None:
            _logger.warning("No geocoding result for %s", address)
            return LocationResult.failed(LocationError.GEOCODING_ERROR)

        try:
            self.preferences_repository.update_location(user_id, coordinates)
        except Exception:
            _logger.exception("Error updating coordinates", extra={"user_id": user_id})
            return LocationResult.failed(LocationError.SERVER_ERROR)
        _logger.info("Stored geocoded coordinates for %s", user_id)
        return LocationResult(lat=coordinates.lat, lng=coordinates.lng)


def directions_url(origin: Coordinates, destination: Coordinates) -> str:
    """Return a Google Maps deep link for driving directions."""
    return (
        "https://www.google.com/maps/dir/?api=1"
        f"&origin={origin.lat},{origin.lng}"
        f"&destination={destination.lat},{destination.lng}"
        "&travelmode=driving"
    )


def _first_geocode_location(data: dict[str, object]) -> Coordinates | None:
    results = data.get("results")
    if not isinstance(results, list) or not results:
        return None
    first = results[0]
    if not isinstance(first, dict):
        return None
    geometry = first.get("geometry")
    if not isinstance(geometry, dict):
        return None
    return parse_coordinates(geometry.get("location"))


def _parse_food_bank(raw: object, origin: Coordinates | None) -> FoodBank | None:
    if not isinstance(raw, dict):
        return None
    geometry = raw.get("geometry")
    if not isinstance(geometry, dict):
        return None
    location = parse_coordinates(geometry.get("location"))
    place_id = raw.get("place_id")
    name = raw.get("name")
    if location is None or not isinstance(place_id, str) or not isinstance(name, str):
        return None
    distance = None
    if origin is not None:
        miles = haversine_miles(origin.lat, origin.lng, location.lat, location.lng)
        distance = format_miles(miles)
    return FoodBank(
        place_id=place_id,
        name=name,
        vicinity=str(raw.get("vicinity") or ""),
        location=location,
        distance=distance,
    )


def _parse_route(raw: object) -> Route | None:
    if not isinstance(raw, dict):
        return None
    try:
        steps = [
            RouteStep(
                instruction=str(step["instruction"]),
                distance=int(step["distance"]),
                duration=int(step["duration"]),
            )
            for step in raw.get("steps") or []
        ]
        return Route(
            distance=int(raw["distance"]),
            duration=int(raw["duration"]),
            eta=str(raw.get("eta") or ""),
            steps=steps,
        )
    except (KeyError, TypeError, ValueError):
        _logger.warning("Malformed route payload: %r", raw)
        return None
