"""Settings store — explicit owner of the process-wide settings document.

Every catalog operation receives the store by reference instead of
reading global state. ``path=None`` keeps the store purely in memory.

Usage::

    store = SettingsStore(SETTINGS_DIR / SETTINGS_FILENAME)
    store.load()
    with store.lock:
        store.settings.languages.append(...)
        store.save()
"""

from __future__ import annotations

import copy
import json
import logging
import threading
from pathlib import Path

from localedesk.core.serializers import dict_to_settings, settings_to_dict
from localedesk.models.catalog import AppSettings

logger = logging.getLogger(__name__)

_SCALAR_FIELDS = frozenset({
    "server_port",
    "server_auto_start",
    "deepl_api_key",
})


class SettingsStore:
    """Holds AppSettings and persists it as JSON."""

    def __init__(
        self,
        path: Path | str | None = None,
        settings: AppSettings | None = None,
    ):
        self._path = Path(path) if path is not None else None
        self.settings = settings if settings is not None else AppSettings()
        self.lock = threading.RLock()

    @property
    def path(self) -> Path | None:
        return self._path

    def load(self) -> AppSettings:
        """Load settings from disk; a missing or corrupt file yields defaults."""
        with self.lock:
            if self._path is None or not self._path.exists():
                return self.settings
            try:
                data = json.loads(self._path.read_text(encoding="utf-8"))
                if not isinstance(data, dict):
                    raise ValueError("settings document is not an object")
                self.settings = dict_to_settings(data)
            except (OSError, ValueError) as e:
                logger.warning("Ignoring unreadable settings %s: %s", self._path, e)
                self.settings = AppSettings()
            return self.settings

    def save(self) -> AppSettings:
        """Persist the current settings and return a snapshot."""
        with self.lock:
            if self._path is not None:
                try:
                    self._path.parent.mkdir(parents=True, exist_ok=True)
                    self._path.write_text(
                        json.dumps(settings_to_dict(self.settings), indent=2),
                        encoding="utf-8",
                    )
                except OSError:
                    logger.exception("Failed to save settings to %s", self._path)
            return self.snapshot()

    def snapshot(self) -> AppSettings:
        """Deep copy safe to hand out across threads."""
        with self.lock:
            return copy.deepcopy(self.settings)

    def update(self, **fields) -> AppSettings:
        """Change scalar preferences (port, auto-start, API key) and persist."""
        unknown = set(fields) - _SCALAR_FIELDS
        if unknown:
            raise KeyError(f"Unknown settings field(s): {', '.join(sorted(unknown))}")
        with self.lock:
            for name, value in fields.items():
                setattr(self.settings, name, value)
            return self.save()
