"""
Database engine and session management.

The local store is SQLite by default, selected via DATABASE_URL.
`Database` is an explicitly constructed handle: it is opened once when the
application starts and closed when it stops.
"""

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session, DeclarativeBase
from sqlalchemy.pool import StaticPool

from location_base.config import settings
from location_base.logging_config import get_logger
from location_base.exceptions import DatabaseConnectionError

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


def _is_sqlite(url: str) -> bool:
    """Check if the database URL is SQLite."""
    return url.startswith("sqlite")


def _is_memory(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:")


def create_db_engine(database_url: str | None = None) -> Engine:
    """
    Create a SQLAlchemy engine based on the database URL.

    Args:
        database_url: Override the URL from settings. Useful for testing.

    Returns:
        SQLAlchemy Engine instance
    """
    url = database_url or settings.database.url
    logger.info("Creating database engine — %s", url.split("@")[-1])

    try:
        if _is_sqlite(url):
            kwargs = {"connect_args": {"check_same_thread": False}, "echo": False}
            if _is_memory(url):
                # One shared connection, otherwise every checkout sees an empty database
                kwargs["poolclass"] = StaticPool
            engine = create_engine(url, **kwargs)

            @event.listens_for(engine, "connect")
            def _set_sqlite_pragma(dbapi_conn, connection_record):
                cursor = dbapi_conn.cursor()
                if not _is_memory(url):
                    cursor.execute("PRAGMA journal_mode=WAL")
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()
        else:
            engine = create_engine(url, pool_pre_ping=True, echo=False)

        # Verify connection
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database connection verified successfully")

        return engine

    except Exception as e:
        raise DatabaseConnectionError(
            message=f"Failed to connect to database: {e}",
            details={"url": url.split("@")[-1] if "@" in url else url},  # Hide credentials
        ) from e


def create_session_factory(engine: Engine | None = None) -> sessionmaker[Session]:
    """
    Create a session factory bound to the given engine.

    Args:
        engine: SQLAlchemy engine. If None, creates one from settings.

    Returns:
        Configured sessionmaker
    """
    if engine is None:
        engine = create_db_engine()
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


def init_db(engine: Engine | None = None) -> None:
    """
    Initialize the database — create all tables that don't exist yet.

    Safe to call on every startup.

    Args:
        engine: SQLAlchemy engine. If None, creates one from settings.
    """
    if engine is None:
        engine = create_db_engine()

    # Import all models so they register with Base.metadata
    import location_base.data.models  # noqa: F401

    Base.metadata.create_all(bind=engine, checkfirst=True)
    logger.info("Database tables ensured")


class Database:
    """
    Owned handle to the local database.

    Usage:
        db = Database("sqlite:///./data/locations.db")
        db.open()
        with db.session() as session:
            ...
        db.close()
    """

    def __init__(self, url: str | None = None):
        self.url = url or settings.database.url
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise DatabaseConnectionError(
                message="Database is not open",
                details={"url": self.url},
            )
        return self._engine

    def open(self) -> "Database":
        """Create the engine. Opening an already open handle is a no-op."""
        if self._engine is None:
            self._engine = create_db_engine(self.url)
            self._session_factory = create_session_factory(self._engine)
        return self

    def session(self) -> Session:
        """Return a new session; use it as a context manager."""
        if self._session_factory is None:
            raise DatabaseConnectionError(
                message="Database is not open",
                details={"url": self.url},
            )
        return self._session_factory()

    def close(self) -> None:
        """Dispose of the engine and its pooled connections."""
        if self._engine is not None:
            self._engine.dispose()
            logger.info("Database closed")
        self._engine = None
        self._session_factory = None

    def __enter__(self) -> "Database":
        return self.open()

    def __exit__(self, *exc) -> None:
        self.close()
