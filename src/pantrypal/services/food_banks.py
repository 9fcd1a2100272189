"""Synthetic food bank search served by the proxy."""

import math
import random
from dataclasses import dataclass, field

from pantrypal.domain.food_banks import FoodBank
from pantrypal.domain.geo import Coordinates

FOOD_BANK_NAMES = (
    "Second Harvest Food Bank",
    "Community Food Share",
    "Local Food Assistance Center",
    "Hope Food Pantry",
    "Neighborhood Food Bank",
)
MILES_PER_DEGREE = 69
SEARCH_RADIUS_MILES = 5


@dataclass
class MockFoodBankSearch:
    """Places a fixed set of food banks at random points near the origin."""

    rng: random.Random = field(default_factory=random.Random)

    def search(self, lat: float, lng: float) -> list[FoodBank]:
        """Return food banks within the search radius, nearest first."""
        radius = SEARCH_RADIUS_MILES / MILES_PER_DEGREE
        placed: list[tuple[float, FoodBank]] = []
        for index, name in enumerate(FOOD_BANK_NAMES):
            lat_offset = (self.rng.random() - 0.5) * radius * 2
            lng_offset = (self.rng.random() - 0.5) * radius * 2
            distance = offset_miles(lat, lat_offset, lng_offset)
            food_bank = FoodBank(
                place_id=f"fb_{index + 1}",
                name=name,
                vicinity=f"{_format_tenths(distance)} miles from location",
                location=Coordinates(lat=lat + lat_offset, lng=lng + lng_offset),
            )
            placed.append((distance, food_bank))
        placed.sort(key=lambda pair: pair[0])
        return [food_bank for _, food_bank in placed]


def offset_miles(lat: float, lat_offset: float, lng_offset: float) -> float:
    """Flat-earth distance of a small degree offset at latitude ``lat``."""
    north = lat_offset * MILES_PER_DEGREE
    east = lng_offset * MILES_PER_DEGREE * math.cos(math.radians(lat))
    return math.sqrt(north**2 + east**2)


def _format_tenths(value: float) -> str:
    # Half-up rounding; whole numbers print without a decimal point.
    rounded = math.floor(value * 10 + 0.5) / 10
    if rounded.is_integer():
        return str(int(rounded))
    return str(rounded)
