"""Data layer: database handle, ORM model, repository and preference store."""

from location_base.data.database import Base, Database, create_db_engine, create_session_factory, init_db
from location_base.data.models import Coordinate, Location, LocationRecord
from location_base.data.preferences import PreferenceStore
from location_base.data.repository import LocationRepository

__all__ = [
    "Base", "Database", "create_db_engine", "create_session_factory", "init_db",
    "Coordinate", "Location", "LocationRecord",
    "PreferenceStore", "LocationRepository",
]
