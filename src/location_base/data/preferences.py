"""
File-backed key-value preference store.

Values are stored as JSON-encoded strings under string keys in a single
JSON file, guarded by a file lock. The dark-mode flag is the only
preference the application persists.
"""

import json
from pathlib import Path
from typing import Any, Optional

from filelock import FileLock, Timeout

from location_base.config import settings
from location_base.logging_config import get_logger
from location_base.exceptions import PreferenceStoreError

logger = get_logger(__name__)


class PreferenceStore:
    """
    Thread- and process-safe key-value store.

    File layout:
        {"darkMode": "true"}
    """

    def __init__(
        self,
        path: str | None = None,
        dark_mode_key: str | None = None,
        lock_timeout: float | None = None,
    ):
        """
        Args:
            path: Override the preference file from settings.
            dark_mode_key: Override the key the theme flag is stored under.
            lock_timeout: Seconds to wait for the file lock.
        """
        self.path = Path(path or settings.preferences.file)
        self.dark_mode_key = dark_mode_key or settings.preferences.dark_mode_key
        timeout = settings.preferences.lock_timeout if lock_timeout is None else lock_timeout
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = FileLock(str(self.path) + ".lock", timeout=timeout)

    # ─── Raw key-value access ───────────────────────────────

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        if not isinstance(data, dict):
            raise PreferenceStoreError(
                message="Preference file does not hold an object",
                details={"path": str(self.path)},
            )
        return data

    def _write(self, data: dict[str, str]) -> None:
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, indent=2), encoding="utf-8")
        tmp.replace(self.path)

    def get_item(self, key: str) -> Optional[str]:
        """Return the raw stored string for key, or None if never set."""
        try:
            with self._lock:
                return self._read().get(key)
        except (json.JSONDecodeError, OSError, Timeout) as e:
            raise PreferenceStoreError(
                message=f"Failed to read preference '{key}': {e}",
                details={"key": key, "path": str(self.path)},
            ) from e

    def set_item(self, key: str, value: str) -> None:
        """Store a raw string under key, overwriting any previous value."""
        try:
            with self._lock:
                data = self._read()
                data[key] = value
                self._write(data)
        except (json.JSONDecodeError, OSError, Timeout) as e:
            raise PreferenceStoreError(
                message=f"Failed to write preference '{key}': {e}",
                details={"key": key, "path": str(self.path)},
            ) from e

    def remove_item(self, key: str) -> bool:
        """Remove key. Returns True if it existed."""
        try:
            with self._lock:
                data = self._read()
                if key not in data:
                    return False
                del data[key]
                self._write(data)
                return True
        except (json.JSONDecodeError, OSError, Timeout) as e:
            raise PreferenceStoreError(
                message=f"Failed to remove preference '{key}': {e}",
                details={"key": key, "path": str(self.path)},
            ) from e

    def get_json(self, key: str) -> Any:
        """Decode the JSON value stored under key; None if absent."""
        raw = self.get_item(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise PreferenceStoreError(
                message=f"Preference '{key}' is not valid JSON",
                details={"key": key, "value": raw},
            ) from e

    def set_json(self, key: str, value: Any) -> None:
        self.set_item(key, json.dumps(value))

    # ─── Dark-mode flag ─────────────────────────────────────

    def load(self) -> Optional[bool]:
        """
        Read the persisted dark-mode flag.

        Returns:
            The stored flag, or None if it was never set or cannot be read.
            Read failures are logged, not raised.
        """
        try:
            value = self.get_json(self.dark_mode_key)
        except PreferenceStoreError as e:
            logger.error("Failed to load dark mode: %s", e)
            return None
        if value is None:
            return None
        if not isinstance(value, bool):
            logger.warning("Ignoring non-boolean dark mode value: %r", value)
            return None
        return value

    def save(self, value: bool) -> bool:
        """
        Overwrite the dark-mode flag.

        Returns:
            True on success, False if the write failed (logged, not retried).
        """
        try:
            self.set_json(self.dark_mode_key, bool(value))
        except PreferenceStoreError as e:
            logger.error("Failed to save dark mode: %s", e)
            return False
        logger.debug("Saved dark mode=%s", value)
        return True
