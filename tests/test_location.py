"""
Tests for location providers and the capture service.

The platform GPS is replaced with an in-test fake that fires callbacks
the way plyer does.
"""

import asyncio
import sys
import threading
import types

import pytest

from location_base.config import LocationSettings
from location_base.data.models import Coordinate
from location_base.location import providers
from location_base.location.base import LocationProvider, PermissionStatus
from location_base.location.providers import (
    DeviceLocationProvider,
    FixedLocationProvider,
    build_provider,
)
from location_base.location.service import LocationService
from location_base.exceptions import InvalidCoordinateError, LocationUnavailableError


class FakeGPS:
    """Stands in for plyer.gps; replays queued fixes on start()."""

    def __init__(self, fixes=(), statuses=(), start_error=None):
        self.fixes = list(fixes)
        self.statuses = list(statuses)
        self.start_error = start_error
        self.started_with = None
        self.stopped = False

    def configure(self, on_location, on_status=None):
        self.on_location = on_location
        self.on_status = on_status

    def start(self, minTime=1000, minDistance=1):
        if self.start_error is not None:
            raise self.start_error
        self.started_with = (minTime, minDistance)
        for status in self.statuses:
            self.on_status(*status)
        for fix in self.fixes:
            self.on_location(**fix)

    def stop(self):
        self.stopped = True


@pytest.fixture
def fake_gps(monkeypatch):
    def _install(**kwargs):
        gps = FakeGPS(**kwargs)
        monkeypatch.setattr(providers, "gps", gps)
        monkeypatch.setattr(providers, "platform", "linux")
        return gps
    return _install


class FakeAndroidPermissions:
    """Stands in for android.permissions; the OS answers from another thread."""

    def __init__(self, already_granted=False, grant_results=(True, True)):
        self.already_granted = already_granted
        self.grant_results = list(grant_results)
        self.requested = None
        self.Permission = types.SimpleNamespace(
            ACCESS_FINE_LOCATION="android.permission.ACCESS_FINE_LOCATION",
            ACCESS_COARSE_LOCATION="android.permission.ACCESS_COARSE_LOCATION",
        )

    def check_permission(self, permission):
        return self.already_granted

    def request_permissions(self, permissions, callback):
        self.requested = list(permissions)
        thread = threading.Thread(target=callback, args=(permissions, self.grant_results))
        thread.start()
        thread.join()


@pytest.fixture
def fake_android(monkeypatch):
    def _install(**kwargs):
        fake = FakeAndroidPermissions(**kwargs)
        module = types.ModuleType("android.permissions")
        module.Permission = fake.Permission
        module.check_permission = fake.check_permission
        module.request_permissions = fake.request_permissions
        package = types.ModuleType("android")
        package.permissions = module
        monkeypatch.setitem(sys.modules, "android", package)
        monkeypatch.setitem(sys.modules, "android.permissions", module)
        monkeypatch.setattr(providers, "platform", "android")
        return fake
    return _install


class BrokenProvider(LocationProvider):
    name = "broken"

    def __init__(self, error, permission_error=None):
        self.error = error
        self.permission_error = permission_error

    async def request_foreground_permission(self):
        if self.permission_error is not None:
            raise self.permission_error
        return PermissionStatus.GRANTED

    async def get_current_position(self):
        raise self.error


# ─── Fixed provider ─────────────────────────────────────────


class TestFixedLocationProvider:

    def test_returns_configured_coordinate(self):
        provider = FixedLocationProvider(latitude=10.5, longitude=-20.25)
        assert asyncio.run(provider.get_current_position()) == Coordinate(10.5, -20.25)

    def test_permission_configurable(self):
        provider = FixedLocationProvider(permission="denied")
        assert asyncio.run(provider.request_foreground_permission()) is PermissionStatus.DENIED


# ─── Device provider ────────────────────────────────────────


class TestDeviceLocationProvider:

    def test_first_fix_resolves(self, fake_gps):
        """The first complete fix wins and the GPS is stopped."""
        gps = fake_gps(fixes=[{"lat": 10.5, "lon": -20.25}, {"lat": 1.0, "lon": 1.0}])
        provider = DeviceLocationProvider(min_time_ms=500, min_distance_m=0)

        coordinate = asyncio.run(provider.get_current_position())

        assert coordinate == Coordinate(10.5, -20.25)
        assert gps.started_with == (500, 0)
        assert gps.stopped is True

    def test_incomplete_fix_ignored(self, fake_gps):
        fake_gps(fixes=[{"lat": None, "lon": 3.0}, {"latitude": 4.0, "longitude": 5.0}])
        coordinate = asyncio.run(DeviceLocationProvider().get_current_position())
        assert coordinate == Coordinate(4.0, 5.0)

    def test_invalid_fix_fails(self, fake_gps):
        gps = fake_gps(fixes=[{"lat": float("nan"), "lon": 3.0}])
        with pytest.raises(InvalidCoordinateError):
            asyncio.run(DeviceLocationProvider().get_current_position())
        assert gps.stopped is True

    def test_unsupported_platform(self, fake_gps):
        """A GPS facade without implementation means no fix is obtainable."""
        fake_gps(start_error=NotImplementedError())
        with pytest.raises(LocationUnavailableError) as exc_info:
            asyncio.run(DeviceLocationProvider().get_current_position())
        assert exc_info.value.details["platform"] == "linux"

    def test_provider_disabled(self, fake_gps):
        fake_gps(statuses=[("provider-disabled", "gps")])
        with pytest.raises(LocationUnavailableError):
            asyncio.run(DeviceLocationProvider().get_current_position())

    def test_desktop_permission_granted(self, fake_gps):
        fake_gps()
        status = asyncio.run(DeviceLocationProvider().request_foreground_permission())
        assert status is PermissionStatus.GRANTED


class TestAndroidPermission:

    def test_already_granted_skips_prompt(self, fake_android):
        android = fake_android(already_granted=True)
        status = asyncio.run(DeviceLocationProvider().request_foreground_permission())
        assert status is PermissionStatus.GRANTED
        assert android.requested is None

    def test_prompt_granted(self, fake_android):
        """The OS callback resolves the awaited status from its own thread."""
        android = fake_android(grant_results=[True, False])
        status = asyncio.run(DeviceLocationProvider().request_foreground_permission())
        assert status is PermissionStatus.GRANTED
        assert android.requested == [
            "android.permission.ACCESS_FINE_LOCATION",
            "android.permission.ACCESS_COARSE_LOCATION",
        ]

    def test_prompt_denied(self, fake_android):
        fake_android(grant_results=[False, False])
        status = asyncio.run(DeviceLocationProvider().request_foreground_permission())
        assert status is PermissionStatus.DENIED
        assert not status.granted


# ─── Provider selection ─────────────────────────────────────


class TestBuildProvider:

    def test_fixed(self):
        cfg = LocationSettings(provider="fixed", fixed_latitude=1.0, fixed_longitude=2.0, fixed_permission="denied")
        provider = build_provider(cfg)
        assert isinstance(provider, FixedLocationProvider)
        assert provider.coordinate == Coordinate(1.0, 2.0)
        assert provider.permission is PermissionStatus.DENIED

    def test_device(self):
        provider = build_provider(LocationSettings(provider="device", min_time_ms=250))
        assert isinstance(provider, DeviceLocationProvider)
        assert provider.min_time_ms == 250


# ─── Service ────────────────────────────────────────────────


class TestLocationService:

    def test_request_permission(self):
        service = LocationService(FixedLocationProvider(permission=PermissionStatus.DENIED))
        status = asyncio.run(service.request_permission())
        assert status is PermissionStatus.DENIED
        assert not status.granted

    def test_get_current_coordinate(self):
        service = LocationService(FixedLocationProvider(latitude=10.5, longitude=-20.25))
        assert asyncio.run(service.get_current_coordinate()) == Coordinate(10.5, -20.25)

    @pytest.mark.parametrize(
        "error",
        [RuntimeError("hardware"), OSError("io"), ValueError("bad"), TypeError("bad fix"), KeyError("lat")],
    )
    def test_failures_normalized(self, error):
        """Any provider failure surfaces as LocationUnavailableError."""
        service = LocationService(BrokenProvider(error))
        with pytest.raises(LocationUnavailableError) as exc_info:
            asyncio.run(service.get_current_coordinate())
        assert exc_info.value.__cause__ is error
        assert exc_info.value.details["provider"] == "broken"

    def test_unavailable_passes_through(self):
        error = LocationUnavailableError("no fix")
        service = LocationService(BrokenProvider(error))
        with pytest.raises(LocationUnavailableError) as exc_info:
            asyncio.run(service.get_current_coordinate())
        assert exc_info.value is error

    @pytest.mark.parametrize("error", [RuntimeError("permission service died"), AttributeError("jnius")])
    def test_permission_failure_normalized(self, error):
        service = LocationService(BrokenProvider(None, permission_error=error))
        with pytest.raises(LocationUnavailableError) as exc_info:
            asyncio.run(service.request_permission())
        assert exc_info.value.__cause__ is error
        assert exc_info.value.details == {"provider": "broken", "step": "permission"}
