"""
Location provider interface.

A provider answers two questions, both asynchronously:
- may we read the device location (foreground permission)?
- where is the device right now (one fix)?

Subclasses must implement both:
    - request_foreground_permission() → PermissionStatus
    - get_current_position() → Coordinate
"""

import abc
import enum

from location_base.data.models import Coordinate


class PermissionStatus(str, enum.Enum):
    """Resolved foreground location permission."""
    GRANTED = "granted"
    DENIED = "denied"

    @property
    def granted(self) -> bool:
        return self is PermissionStatus.GRANTED


class LocationProvider(abc.ABC):
    """Abstract base class for all location providers."""

    name: str = ""

    @abc.abstractmethod
    async def request_foreground_permission(self) -> PermissionStatus:
        """
        Ask for foreground location permission.

        The platform decides whether a prompt is shown; nothing is cached
        here beyond what the platform itself remembers.
        """
        ...

    @abc.abstractmethod
    async def get_current_position(self) -> Coordinate:
        """
        Wait for one coordinate fix.

        Raises:
            LocationUnavailableError: If no fix can be obtained.
        """
        ...
