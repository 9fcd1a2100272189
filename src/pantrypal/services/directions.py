"""Driving directions summarized for pickup confirmation."""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

from pantrypal.adapters.google_maps_client import GoogleMapsClient
from pantrypal.domain.food_banks import Route, RouteStep

_logger = logging.getLogger(__name__)

_TAG_PATTERN = re.compile(r"<[^>]*>")


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


def strip_html(text: str) -> str:
    """Remove markup tags from an instruction."""
    return _TAG_PATTERN.sub("", text)


def format_eta(moment: datetime) -> str:
    """Format a time as ``h:mm AM/PM``."""
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {suffix}"


def build_route(payload: dict[str, object], now: datetime) -> Route | None:
    """Summarize the first leg of the first route, or None if there is none."""
    routes = payload.get("routes")
    if payload.get("status") != "OK" or not isinstance(routes, list) or not routes:
        return None
    leg = routes[0]["legs"][0]
    duration = int(leg["duration"]["value"])
    steps = [
        RouteStep(
            instruction=strip_html(step["html_instructions"]),
            distance=int(step["distance"]["value"]),
            duration=int(step["duration"]["value"]),
        )
        for step in leg.get("steps", [])
    ]
    return Route(
        distance=int(leg["distance"]["value"]),
        duration=duration,
        eta=format_eta(now + timedelta(seconds=duration)),
        steps=steps,
    )


@dataclass
class DirectionsService:
    """Fetches routes from Google and reports arrival in a local timezone."""

    maps_client: GoogleMapsClient
    timezone: str = "UTC"
    clock: Callable[[], datetime] = field(default=_utcnow)

    async def get_route(
        self, origin: tuple[str, str], destination: tuple[str, str]
    ) -> Route | None:
        """Return the route between two points; upstream errors propagate."""
        payload = await self.maps_client.directions(origin, destination)
        now = self.clock().astimezone(ZoneInfo(self.timezone))
        route = build_route(payload, now)
        if route is None:
            _logger.info("No route found, upstream status %s", payload.get("status"))
        return route
