"""
Application controller: the single screen's state and its two actions.

Holds the transient UI state (loading flag, in-memory record list, active
theme) and orchestrates the preference store, the location service and the
location repository.

Scheduling is cooperative: every storage call and provider call is awaited
in sequence, so controller state only changes between suspension points.
Storage calls run through asyncio.to_thread so the event loop never blocks
on disk I/O.

Error policy: any failure that aborts a user action is logged and reported
exactly once through the alert sink. Nothing is retried.
"""

import asyncio
import enum
from dataclasses import dataclass
from typing import Callable, Optional

from location_base.config import Settings, settings as default_settings
from location_base.data.database import Database
from location_base.data.models import LocationRecord
from location_base.data.preferences import PreferenceStore
from location_base.data.repository import LocationRepository
from location_base.location.providers import build_provider
from location_base.location.service import LocationService
from location_base.logging_config import get_logger
from location_base.theme import Theme
from location_base.exceptions import (
    LocationBaseError,
    LocationUnavailableError,
    PermissionDeniedError,
    StorageError,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class Alert:
    """A user-facing modal message."""
    title: str
    message: str


AlertSink = Callable[[Alert], None]

PERMISSION_DENIED_ALERT = Alert("Permissão negada", "Permissão para localização foi negada.")
LOCATION_UNAVAILABLE_ALERT = Alert("Localização indisponível", "Não foi possível obter a localização.")
STORAGE_ALERT = Alert("Erro de armazenamento", "Não foi possível acessar as localizações salvas.")
PREFERENCE_ALERT = Alert("Erro de armazenamento", "Não foi possível salvar o modo escuro.")


class CaptureOutcome(str, enum.Enum):
    CAPTURED = "captured"
    PERMISSION_DENIED = "permission_denied"
    LOCATION_UNAVAILABLE = "location_unavailable"
    STORAGE_FAILED = "storage_failed"
    BUSY = "busy"


@dataclass(frozen=True)
class CaptureResult:
    """What one capture action did."""
    outcome: CaptureOutcome
    record: Optional[LocationRecord] = None
    error: Optional[LocationBaseError] = None

    @property
    def ok(self) -> bool:
        return self.outcome is CaptureOutcome.CAPTURED


class AppController:
    """
    Orchestrates storage, preferences and location capture for the screen.

    Usage:
        controller = AppController.from_settings(settings)
        await controller.start()
        await controller.capture_location()
        await controller.toggle_theme()
        controller.close()
    """

    def __init__(
        self,
        repository: LocationRepository,
        preferences: PreferenceStore,
        location_service: LocationService,
        alert_sink: Optional[AlertSink] = None,
    ):
        self.repository = repository
        self.preferences = preferences
        self.location_service = location_service
        self.alert_sink = alert_sink

        self.is_loading: bool = False
        self.locations: list[LocationRecord] = []
        self.theme: Theme = Theme.for_mode(False)
        self.last_alert: Optional[Alert] = None

    @classmethod
    def from_settings(
        cls, app_settings: Optional[Settings] = None, alert_sink: Optional[AlertSink] = None
    ) -> "AppController":
        """Wire a controller from configuration. Storage is opened by start()."""
        cfg = app_settings or default_settings
        database = Database(cfg.database.url)
        preferences = PreferenceStore(
            path=cfg.preferences.file,
            dark_mode_key=cfg.preferences.dark_mode_key,
            lock_timeout=cfg.preferences.lock_timeout,
        )
        service = LocationService(build_provider(cfg.location))
        return cls(LocationRepository(database), preferences, service, alert_sink=alert_sink)

    @property
    def is_dark_mode(self) -> bool:
        return self.theme.dark

    # ─── Lifecycle ──────────────────────────────────────────

    async def start(self) -> None:
        """Open storage, ensure the schema, load the theme flag and all records."""
        dark = await asyncio.to_thread(self.preferences.load)
        if dark is not None:
            self.theme = Theme.for_mode(dark)

        try:
            await asyncio.to_thread(self.repository.database.open)
            await asyncio.to_thread(self.repository.ensure_schema)
        except StorageError as e:
            self._report(STORAGE_ALERT, e)
            return

        self.is_loading = True
        try:
            await self.reload()
        finally:
            self.is_loading = False
        logger.info(
            "Controller started: %d locations, dark_mode=%s", len(self.locations), self.is_dark_mode
        )

    def close(self) -> None:
        """Close the storage handle."""
        self.repository.database.close()

    # ─── Actions ────────────────────────────────────────────

    async def toggle_theme(self) -> Theme:
        """
        Flip dark mode and persist it.

        Flag and palette change together before the write is awaited.
        A failed write is reported but the new theme is kept.
        """
        self.theme = self.theme.toggled()
        logger.info("Dark mode %s", "on" if self.theme.dark else "off")

        saved = await asyncio.to_thread(self.preferences.save, self.theme.dark)
        if not saved:
            self._alert(PREFERENCE_ALERT)
        return self.theme

    async def capture_location(self) -> CaptureResult:
        """
        Permission → one fix → append → reload, strictly in that order.

        The loading flag is held for the whole flow and cleared on every exit
        path. A second capture while one is in flight is ignored.
        """
        if self.is_loading:
            logger.warning("Capture already in progress; ignoring request")
            return CaptureResult(CaptureOutcome.BUSY)

        self.is_loading = True
        record: Optional[LocationRecord] = None
        try:
            status = await self.location_service.request_permission()
            if not status.granted:
                raise PermissionDeniedError(status.value)

            coordinate = await self.location_service.get_current_coordinate()
            record = await asyncio.to_thread(self.repository.append, coordinate)
            self.locations = await asyncio.to_thread(self.repository.load_all)

            logger.info("Captured location %d", record.id)
            return CaptureResult(CaptureOutcome.CAPTURED, record=record)

        except PermissionDeniedError as e:
            self._report(PERMISSION_DENIED_ALERT, e, level="warning")
            return CaptureResult(CaptureOutcome.PERMISSION_DENIED, error=e)
        except LocationUnavailableError as e:
            self._report(LOCATION_UNAVAILABLE_ALERT, e)
            return CaptureResult(CaptureOutcome.LOCATION_UNAVAILABLE, error=e)
        except StorageError as e:
            self._report(STORAGE_ALERT, e)
            return CaptureResult(CaptureOutcome.STORAGE_FAILED, record=record, error=e)
        finally:
            self.is_loading = False

    async def reload(self) -> bool:
        """
        Rebuild the in-memory list from storage.

        On failure the previous list is kept as is.
        """
        try:
            records = await asyncio.to_thread(self.repository.load_all)
        except StorageError as e:
            self._report(STORAGE_ALERT, e)
            return False
        self.locations = records
        return True

    # ─── Alerts ─────────────────────────────────────────────

    def _report(self, alert: Alert, error: LocationBaseError, level: str = "error") -> None:
        getattr(logger, level)("%s: %s", alert.title, error.message or error)
        self._alert(alert)

    def _alert(self, alert: Alert) -> None:
        self.last_alert = alert
        if self.alert_sink is not None:
            self.alert_sink(alert)
