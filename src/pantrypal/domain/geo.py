"""Geographic helpers for food bank matching."""

import json
import math
from dataclasses import dataclass

EARTH_RADIUS_MILES = 3959


@dataclass(frozen=True)
class Coordinates:
    """A latitude/longitude pair in decimal degrees."""

    lat: float
    lng: float

    def to_dict(self) -> dict[str, float]:
        """Serialize to the {lat, lng} shape stored in preferences."""
        return {"lat": self.lat, "lng": self.lng}


def haversine_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Return the great-circle distance between two points in miles."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = math.sin(d_lat / 2) * math.sin(d_lat / 2) + math.cos(
        math.radians(lat1)
    ) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) * math.sin(d_lon / 2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def format_miles(distance: float) -> str:
    """Format a distance for display, e.g. ``2.4 miles``."""
    return f"{distance:.1f} miles"


def parse_coordinates(value: object) -> Coordinates | None:
    """Return coordinates from a stored location, if it holds any.

    Stored locations are either free-text addresses or ``{lat, lng}``
    objects, the latter sometimes serialized as JSON text.
    """
    if isinstance(value, str):
        text = value.strip()
        if not text.startswith("{"):
            return None
        try:
            value = json.loads(text)
        except json.JSONDecodeError:
            return None
    if not isinstance(value, dict):
        return None
    lat = value.get("lat")
    lng = value.get("lng")
    if _is_number(lat) and _is_number(lng):
        return Coordinates(lat=float(lat), lng=float(lng))
    return None


def _is_number(value: object) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)
