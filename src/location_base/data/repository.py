"""
Repository layer, the only code that touches the locations table.

The record set is append-only: rows are inserted and read back, never
updated or deleted.
"""

from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError

from location_base.data.database import Database, init_db
from location_base.data.models import Coordinate, Location, LocationRecord
from location_base.logging_config import get_logger
from location_base.exceptions import (
    RecordReadError,
    RecordWriteError,
    SchemaError,
)

logger = get_logger(__name__)


class LocationRepository:
    """
    All database operations for captured locations.

    Usage:
        db = Database().open()
        repo = LocationRepository(db)
        repo.ensure_schema()
        repo.append(Coordinate(latitude=10.5, longitude=-20.25))
        records = repo.load_all()
    """

    def __init__(self, database: Database):
        self.database = database

    def ensure_schema(self) -> None:
        """Create the locations table if it does not exist. Idempotent."""
        try:
            init_db(self.database.engine)
        except SQLAlchemyError as e:
            raise SchemaError(
                message=f"Failed to create locations table: {e}",
                details={"table": Location.__tablename__},
            ) from e

    def append(self, coordinate: Coordinate) -> LocationRecord:
        """
        Insert one record; storage assigns the id.

        Ranges are not validated; any float pair is stored as given.
        The insert runs in its own transaction, so a failure stores nothing.
        """
        try:
            with self.database.session() as session, session.begin():
                row = Location(latitude=coordinate.latitude, longitude=coordinate.longitude)
                session.add(row)
                session.flush()
                record = LocationRecord.from_row(row)
        except SQLAlchemyError as e:
            raise RecordWriteError(
                message=f"Failed to save location: {e}",
                details={"latitude": coordinate.latitude, "longitude": coordinate.longitude},
            ) from e

        logger.debug("Saved location %d (%s, %s)", record.id, record.latitude, record.longitude)
        return record

    def load_all(self) -> list[LocationRecord]:
        """
        Return every stored record in insertion order.

        No pagination: cost grows linearly with the number of captures.
        """
        try:
            with self.database.session() as session:
                rows = session.scalars(select(Location).order_by(Location.id))
                records = [LocationRecord.from_row(row) for row in rows]
        except SQLAlchemyError as e:
            raise RecordReadError(message=f"Failed to load locations: {e}") from e

        logger.debug("Loaded %d locations", len(records))
        return records

    def count(self) -> int:
        """Number of stored records."""
        try:
            with self.database.session() as session:
                return session.scalar(select(func.count()).select_from(Location)) or 0
        except SQLAlchemyError as e:
            raise RecordReadError(message=f"Failed to count locations: {e}") from e
