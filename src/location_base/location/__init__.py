"""Location capture: provider interface, concrete providers and the capture service."""

from location_base.location.base import LocationProvider, PermissionStatus
from location_base.location.providers import DeviceLocationProvider, FixedLocationProvider, build_provider
from location_base.location.service import LocationService

__all__ = [
    "LocationProvider", "PermissionStatus",
    "DeviceLocationProvider", "FixedLocationProvider", "build_provider",
    "LocationService",
]
