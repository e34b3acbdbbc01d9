"""
Concrete location providers.

DeviceLocationProvider talks to the platform GPS through plyer, requesting
Android runtime permissions first when running on Android.
FixedLocationProvider reports a configured coordinate, for desktop use
and development.
"""

import asyncio
from typing import Optional

from plyer import gps
from plyer.utils import platform

from location_base.config import LocationSettings, settings
from location_base.data.models import Coordinate
from location_base.location.base import LocationProvider, PermissionStatus
from location_base.logging_config import get_logger
from location_base.exceptions import InvalidCoordinateError, LocationUnavailableError

logger = get_logger(__name__)


class FixedLocationProvider(LocationProvider):
    """Always reports the same coordinate."""

    name = "fixed"

    def __init__(
        self,
        latitude: float = 0.0,
        longitude: float = 0.0,
        permission: PermissionStatus = PermissionStatus.GRANTED,
    ):
        self.coordinate = Coordinate(latitude=latitude, longitude=longitude)
        self.permission = PermissionStatus(permission)

    async def request_foreground_permission(self) -> PermissionStatus:
        return self.permission

    async def get_current_position(self) -> Coordinate:
        return self.coordinate


class DeviceLocationProvider(LocationProvider):
    """
    Platform GPS via plyer.

    plyer reports fixes through callbacks, possibly from another thread;
    the first usable fix resolves an asyncio future and the GPS is stopped.
    """

    name = "device"

    ANDROID_PERMISSIONS = ("ACCESS_FINE_LOCATION", "ACCESS_COARSE_LOCATION")

    def __init__(self, min_time_ms: int = 1000, min_distance_m: float = 0.0):
        self.min_time_ms = min_time_ms
        self.min_distance_m = min_distance_m

    # ─── Permission ─────────────────────────────────────────

    async def request_foreground_permission(self) -> PermissionStatus:
        if platform != "android":
            # Desktop platforms have no runtime location permission
            return PermissionStatus.GRANTED

        from android.permissions import Permission, check_permission, request_permissions

        wanted = [getattr(Permission, name) for name in self.ANDROID_PERMISSIONS]
        if all(check_permission(p) for p in wanted):
            return PermissionStatus.GRANTED

        loop = asyncio.get_running_loop()
        future: asyncio.Future[PermissionStatus] = loop.create_future()

        def _on_result(permissions, grant_results):
            status = PermissionStatus.GRANTED if any(grant_results) else PermissionStatus.DENIED
            loop.call_soon_threadsafe(_resolve, future, status)

        request_permissions(wanted, _on_result)
        status = await future
        logger.info("Location permission resolved: %s", status.value)
        return status

    # ─── Single fix ─────────────────────────────────────────

    async def get_current_position(self) -> Coordinate:
        loop = asyncio.get_running_loop()
        future: asyncio.Future[Coordinate] = loop.create_future()

        def _on_location(**kwargs):
            lat = kwargs.get("lat", kwargs.get("latitude"))
            lon = kwargs.get("lon", kwargs.get("longitude"))
            if lat is None or lon is None:
                # Ignore incomplete fix
                return
            try:
                coordinate = Coordinate.from_fix(lat, lon)
            except InvalidCoordinateError as e:
                loop.call_soon_threadsafe(_fail, future, e)
                return
            loop.call_soon_threadsafe(_resolve, future, coordinate)

        def _on_status(status_type, status):
            logger.debug("GPS status %s: %s", status_type, status)
            if status_type == "provider-disabled":
                loop.call_soon_threadsafe(
                    _fail,
                    future,
                    LocationUnavailableError(
                        message="Location provider is disabled",
                        details={"provider": status},
                    ),
                )

        try:
            gps.configure(on_location=_on_location, on_status=_on_status)
            gps.start(minTime=self.min_time_ms, minDistance=self.min_distance_m)
        except NotImplementedError as e:
            raise LocationUnavailableError(
                message=f"GPS is not supported on platform '{platform}'",
                details={"platform": str(platform)},
            ) from e
        except Exception as e:
            raise LocationUnavailableError(
                message=f"Failed to start GPS: {e}",
                details={"platform": str(platform)},
            ) from e

        try:
            return await future
        finally:
            self._stop()

    def _stop(self) -> None:
        try:
            gps.stop()
        except Exception as e:
            logger.warning("Failed to stop GPS: %s", e)


def _resolve(future: asyncio.Future, value) -> None:
    if not future.done():
        future.set_result(value)


def _fail(future: asyncio.Future, error: BaseException) -> None:
    if not future.done():
        future.set_exception(error)


def build_provider(location_settings: Optional[LocationSettings] = None) -> LocationProvider:
    """Create the provider selected in settings."""
    cfg = location_settings or settings.location
    if cfg.provider == "fixed":
        logger.info(
            "Using fixed location provider (%s, %s)", cfg.fixed_latitude, cfg.fixed_longitude
        )
        return FixedLocationProvider(
            latitude=cfg.fixed_latitude,
            longitude=cfg.fixed_longitude,
            permission=PermissionStatus(cfg.fixed_permission),
        )
    logger.info("Using device location provider on platform '%s'", platform)
    return DeviceLocationProvider(min_time_ms=cfg.min_time_ms, min_distance_m=cfg.min_distance_m)
