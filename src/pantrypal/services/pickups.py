"""Pickup planning on top of location resolution and food bank search."""

import logging
from dataclasses import dataclass

from pantrypal.domain.food_banks import FoodBank, LocationError
from pantrypal.domain.geo import Coordinates, haversine_miles
from pantrypal.domain.results import ApiResult, ResultKind
from pantrypal.services.locations import LocationService

_logger = logging.getLogger(__name__)

_LOCATION_ERROR_KINDS: dict[LocationError, ResultKind] = {
    LocationError.NO_SESSION: "unauthorized",
    LocationError.NO_PREFERENCES: "not-found",
    LocationError.NO_LOCATION: "not-found",
    LocationError.GEOCODING_ERROR: "bad-data",
}

_SEARCH_ERROR_KINDS: dict[str, ResultKind] = {
    "Invalid location coordinates": "bad-data",
    "No food banks found in your area": "not-found",
    "API request was denied": "unauthorized",
}


@dataclass(frozen=True)
class PickupPlan:
    """Nearest food bank to the search origin plus the ranked alternatives."""

    origin: Coordinates
    current_location: Coordinates | None
    food_bank: FoodBank
    ranked: list[FoodBank]


@dataclass(frozen=True)
class PickupSelection:
    """A chosen food bank and pickup time."""

    food_bank: FoodBank
    time: str


def rank_food_banks(food_banks: list[FoodBank], origin: Coordinates) -> list[FoodBank]:
    """Sort food banks by great-circle distance from ``origin``."""
    return sorted(
        food_banks,
        key=lambda bank: haversine_miles(
            origin.lat, origin.lng, bank.location.lat, bank.location.lng
        ),
    )


@dataclass
class PickupService:
    """Chooses where and when a user picks up groceries."""

    location_service: LocationService

    async def plan_pickup(self) -> ApiResult[PickupPlan]:
        """Find the nearest food bank to the user's preferred location."""
        preferred = await self.location_service.resolve_preferred_location()
        origin = preferred.coordinates
        if preferred.error is not None or origin is None:
            error = preferred.error or LocationError.NO_LOCATION
            kind = _LOCATION_ERROR_KINDS.get(error, "server")
            return ApiResult.failure(kind, str(error))

        current = await self.location_service.resolve_current_location()
        if current.error is not None:
            _logger.info("Planning pickup without device location: %s", current.error)
        current_location = current.coordinates

        search = await self.location_service.search_nearby_food_banks(
            origin.lat,
            origin.lng,
            current_location.lat if current_location else None,
            current_location.lng if current_location else None,
        )
        if search.error is not None:
            kind = _SEARCH_ERROR_KINDS.get(search.error, "server")
            return ApiResult.failure(kind, search.error)
        if not search.food_banks:
            return ApiResult.failure("not-found", "No food banks found in your area")

        ranked = rank_food_banks(search.food_banks, origin)
        return ApiResult.success(
            PickupPlan(
                origin=origin,
                current_location=current_location,
                food_bank=ranked[0],
                ranked=ranked,
            )
        )

    def choose_slot(self, food_bank: FoodBank, time: str) -> ApiResult[PickupSelection]:
        """Validate a pickup time against the food bank's availability."""
        if time not in food_bank.available_times:
            return ApiResult.failure("bad-data", f"{time} is not an available time")
        return ApiResult.success(PickupSelection(food_bank=food_bank, time=time))
