"""Device location backed by a configured fix."""

from dataclasses import dataclass

from pantrypal.domain.geo import Coordinates
from pantrypal.services.locations import DeviceLocator


@dataclass
class ConfiguredDeviceLocator(DeviceLocator):
    """Reports the position given in settings, for hosts without GPS."""

    permission_granted: bool
    latitude: float | None = None
    longitude: float | None = None

    async def request_permission(self) -> bool:
        return self.permission_granted

    async def current_position(self) -> Coordinates | None:
        if self.latitude is None or self.longitude is None:
            return None
        return Coordinates(lat=self.latitude, lng=self.longitude)
