"""
Custom exception hierarchy for My Location BASE.

Each failure category that can abort a user action has its own type,
so the controller can log and report it with a matching alert.
"""


class LocationBaseError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str = "", details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# --- Location Exceptions ---


class PermissionDeniedError(LocationBaseError):
    """Raised when the user refuses foreground location permission."""

    def __init__(self, status: str = "denied"):
        super().__init__(
            message="Permissão para localização foi negada.",
            details={"status": status},
        )


class LocationUnavailableError(LocationBaseError):
    """Raised when the platform cannot produce a coordinate fix."""
    pass


# --- Storage Exceptions ---


class StorageError(LocationBaseError):
    """Base exception for local storage errors."""
    pass


class DatabaseConnectionError(StorageError):
    """Raised when the database cannot be opened."""
    pass


class SchemaError(StorageError):
    """Raised when the locations table cannot be created."""
    pass


class RecordWriteError(StorageError):
    """Raised when a location record cannot be inserted."""
    pass


class RecordReadError(StorageError):
    """Raised when location records cannot be queried."""
    pass


class PreferenceStoreError(StorageError):
    """Raised when the preference file cannot be read or written."""
    pass


# --- Validation Exceptions ---


class ValidationError(LocationBaseError):
    """Base exception for input validation errors."""
    pass


class InvalidCoordinateError(ValidationError):
    """Raised when a provider reports a coordinate that is not a finite float pair."""

    def __init__(self, latitude, longitude):
        super().__init__(
            message=f"Invalid coordinate: latitude={latitude!r}, longitude={longitude!r}",
            details={"latitude": latitude, "longitude": longitude},
        )
