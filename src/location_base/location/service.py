"""
Location capture service.

Thin layer over a LocationProvider: every provider failure is normalized
to LocationUnavailableError so callers handle one error type per step.
"""

from location_base.data.models import Coordinate
from location_base.location.base import LocationProvider, PermissionStatus
from location_base.logging_config import get_logger
from location_base.exceptions import LocationUnavailableError

logger = get_logger(__name__)


class LocationService:
    """Requests permission and reads one coordinate. No timeout, no retry."""

    def __init__(self, provider: LocationProvider):
        self.provider = provider

    async def request_permission(self) -> PermissionStatus:
        """
        Ask the provider for foreground location permission.

        Raises:
            LocationUnavailableError: If the permission request itself fails.
        """
        try:
            status = PermissionStatus(await self.provider.request_foreground_permission())
        except LocationUnavailableError:
            raise
        except Exception as e:
            logger.error("Permission request failed on %s provider: %s", self.provider.name, e)
            raise LocationUnavailableError(
                message=f"Could not request location permission: {e}",
                details={"provider": self.provider.name, "step": "permission"},
            ) from e

        logger.debug("Permission status from %s provider: %s", self.provider.name, status.value)
        return status

    async def get_current_coordinate(self) -> Coordinate:
        """
        Wait for one fix from the provider.

        Raises:
            LocationUnavailableError: For any failure to produce a fix.
        """
        try:
            coordinate = await self.provider.get_current_position()
        except LocationUnavailableError:
            raise
        except Exception as e:
            logger.error("Fix failed on %s provider: %s", self.provider.name, e)
            raise LocationUnavailableError(
                message=f"Could not obtain location: {e}",
                details={"provider": self.provider.name, "step": "fix"},
            ) from e

        logger.info("Got fix (%s, %s)", coordinate.latitude, coordinate.longitude)
        return coordinate
