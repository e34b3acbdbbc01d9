"""
Tests for the exception hierarchy.

Validates that all exception classes are properly structured
and can carry relevant context information.
"""

import pytest

from location_base.exceptions import (
    LocationBaseError,
    PermissionDeniedError,
    LocationUnavailableError,
    StorageError,
    DatabaseConnectionError,
    SchemaError,
    RecordWriteError,
    RecordReadError,
    PreferenceStoreError,
    ValidationError,
    InvalidCoordinateError,
)


class TestExceptionHierarchy:
    """Tests that the exception hierarchy is correct."""

    def test_all_inherit_from_base(self):
        exception_classes = [
            PermissionDeniedError,
            LocationUnavailableError,
            StorageError,
            DatabaseConnectionError,
            SchemaError,
            RecordWriteError,
            RecordReadError,
            PreferenceStoreError,
            ValidationError,
            InvalidCoordinateError,
        ]
        for exc_class in exception_classes:
            assert issubclass(exc_class, LocationBaseError), (
                f"{exc_class.__name__} should inherit from LocationBaseError"
            )

    def test_storage_hierarchy(self):
        """Database and preference failures are all storage failures."""
        for exc_class in (DatabaseConnectionError, SchemaError, RecordWriteError,
                          RecordReadError, PreferenceStoreError):
            assert issubclass(exc_class, StorageError)

    def test_location_errors_are_not_storage_errors(self):
        assert not issubclass(PermissionDeniedError, StorageError)
        assert not issubclass(LocationUnavailableError, StorageError)

    def test_validation_hierarchy(self):
        assert issubclass(InvalidCoordinateError, ValidationError)


class TestExceptionDetails:
    """Tests that exceptions carry proper context."""

    def test_base_exception_with_message(self):
        exc = LocationBaseError("Something went wrong")
        assert str(exc) == "Something went wrong"
        assert exc.message == "Something went wrong"

    def test_base_exception_with_details(self):
        exc = LocationBaseError("Error", details={"key": "value"})
        assert exc.details == {"key": "value"}

    def test_permission_denied(self):
        exc = PermissionDeniedError("denied")
        assert "negada" in str(exc)
        assert exc.details["status"] == "denied"

    def test_invalid_coordinate(self):
        exc = InvalidCoordinateError(float("nan"), 1.0)
        assert "latitude=nan" in str(exc)
        assert exc.details["longitude"] == 1.0

    def test_catch_by_category(self):
        with pytest.raises(StorageError):
            raise RecordWriteError("disk full")

        with pytest.raises(ValidationError):
            raise InvalidCoordinateError(None, None)

    def test_catch_by_base(self):
        errors = [
            PermissionDeniedError(),
            LocationUnavailableError("no fix"),
            SchemaError("no table"),
            InvalidCoordinateError("x", "y"),
        ]
        for error in errors:
            with pytest.raises(LocationBaseError):
                raise error
