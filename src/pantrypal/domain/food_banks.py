"""Domain models for food banks, locations and routes."""

from dataclasses import dataclass, field
from enum import StrEnum

from pantrypal.domain.geo import Coordinates

DEFAULT_PICKUP_TIMES = ("7:30pm", "7:45pm", "8:00pm", "8:15pm")


class LocationError(StrEnum):
    """Reasons a location could not be resolved."""

    NO_SESSION = "NO_SESSION"
    NO_PREFERENCES = "NO_PREFERENCES"
    NO_LOCATION = "NO_LOCATION"
    SERVER_ERROR = "SERVER_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    GEOCODING_ERROR = "GEOCODING_ERROR"
    API_KEY_ERROR = "API_KEY_ERROR"
    PERMISSION_DENIED = "PERMISSION_DENIED"


@dataclass(frozen=True)
class LocationResult:
    """Resolved coordinates, or the reason resolution failed."""

    lat: float = 0.0
    lng: float = 0.0
    error: LocationError | None = None

    @classmethod
    def failed(cls, error: LocationError) -> "LocationResult":
        """Build a failed result with zeroed coordinates."""
        return cls(error=error)

    @property
    def coordinates(self) -> Coordinates | None:
        """Return coordinates when resolution succeeded."""
        if self.error is not None:
            return None
        return Coordinates(lat=self.lat, lng=self.lng)


@dataclass(frozen=True)
class FoodBank:
    """A pickup location returned by the food bank search."""

    place_id: str
    name: str
    vicinity: str
    location: Coordinates
    available_times: tuple[str, ...] = DEFAULT_PICKUP_TIMES
    distance: str | None = None

    def to_payload(self) -> dict[str, object]:
        """Serialize to the wire shape used by the proxy server."""
        payload: dict[str, object] = {
            "place_id": self.place_id,
            "name": self.name,
            "vicinity": self.vicinity,
            "geometry": {"location": self.location.to_dict()},
            "available_times": list(self.available_times),
        }
        if self.distance is not None:
            payload["distance"] = self.distance
        return payload


@dataclass(frozen=True)
class FoodBankSearchResult:
    """Food banks found near a point, or a user-facing error."""

    food_banks: list[FoodBank] = field(default_factory=list)
    error: str | None = None


@dataclass(frozen=True)
class RouteStep:
    """Single turn-by-turn instruction."""

    instruction: str
    distance: int
    duration: int


@dataclass(frozen=True)
class Route:
    """Driving route summary between two points."""

    distance: int
    duration: int
    eta: str
    steps: list[RouteStep]

    def to_payload(self) -> dict[str, object]:
        """Serialize to the proxy server's ``route`` object."""
        return {
            "distance": self.distance,
            "duration": self.duration,
            "eta": self.eta,
            "steps": [
                {
                    "instruction": step.instruction,
                    "distance": step.distance,
                    "duration": step.duration,
                }
                for step in self.steps
            ],
        }
