"""
SQLAlchemy ORM model and value types for captured locations.

The table shape matches the on-device schema exactly:

    locations(id INTEGER PRIMARY KEY AUTOINCREMENT, latitude REAL, longitude REAL)
"""

import math
from dataclasses import dataclass

from sqlalchemy import Integer, REAL
from sqlalchemy.orm import Mapped, mapped_column

from location_base.data.database import Base
from location_base.exceptions import InvalidCoordinateError


class Location(Base):
    """One captured coordinate row."""
    __tablename__ = "locations"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    latitude: Mapped[float] = mapped_column(REAL, nullable=True)
    longitude: Mapped[float] = mapped_column(REAL, nullable=True)

    def __repr__(self) -> str:
        return f"<Location(id={self.id}, latitude={self.latitude}, longitude={self.longitude})>"


@dataclass(frozen=True)
class Coordinate:
    """A single provider fix, not yet persisted."""
    latitude: float
    longitude: float

    @classmethod
    def from_fix(cls, latitude, longitude) -> "Coordinate":
        """Build from raw provider values, rejecting anything that is not a finite float pair."""
        try:
            lat = float(latitude)
            lon = float(longitude)
        except (TypeError, ValueError) as e:
            raise InvalidCoordinateError(latitude, longitude) from e
        if not (math.isfinite(lat) and math.isfinite(lon)):
            raise InvalidCoordinateError(latitude, longitude)
        return cls(latitude=lat, longitude=lon)


@dataclass(frozen=True)
class LocationRecord:
    """Immutable, session-independent copy of a stored location."""
    id: int
    latitude: float
    longitude: float

    @classmethod
    def from_row(cls, row: Location) -> "LocationRecord":
        return cls(id=row.id, latitude=row.latitude, longitude=row.longitude)

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(latitude=self.latitude, longitude=self.longitude)
