"""Catalog controller — mediator between the catalog engine and the UI.

Owns the settings store, the mutation engine, the intake server and the
translator. All UI-triggered operations go through this controller,
which emits Qt signals so panels can refresh their projection.

Signals may be emitted from the intake server thread; connected slots on
the UI thread receive them through queued connections.
"""

from __future__ import annotations

from pathlib import Path

from PyQt6.QtCore import QObject, pyqtSignal

from localedesk.constants import (
    TRANSLATION_CACHE_FILENAME,
    TRANSLATION_USAGE_FILENAME,
)
from localedesk.core.catalog_editor import CatalogEditor
from localedesk.core.settings_store import SettingsStore
from localedesk.core.translator import DeepLTranslator
from localedesk.models.catalog import AppSettings, NamespaceData, ServerStatus
from localedesk.server.intake_server import IntakeServer


class CatalogController(QObject):
    """Facade exposing catalog reads, mutations and the intake server.

    Signals:
        keys_received(namespace, keys): keys added by the intake endpoint.
        translations_changed(): any structural change to the catalog.
        server_status_changed(ServerStatus): server started or stopped.
    """

    keys_received = pyqtSignal(str, list)
    translations_changed = pyqtSignal()
    server_status_changed = pyqtSignal(object)

    def __init__(self, store: SettingsStore, parent: QObject | None = None):
        super().__init__(parent)
        self._store = store
        self._editor = CatalogEditor(store)
        self._server = IntakeServer(
            self._editor,
            on_keys_received=self._on_keys_received,
            port=store.settings.server_port,
        )
        data_dir = store.path.parent if store.path is not None else Path.cwd()
        self._translator = DeepLTranslator(
            api_key_provider=lambda: self._store.settings.deepl_api_key,
            cache_path=data_dir / TRANSLATION_CACHE_FILENAME,
            usage_path=data_dir / TRANSLATION_USAGE_FILENAME,
        )

    @property
    def editor(self) -> CatalogEditor:
        return self._editor

    @property
    def translator(self) -> DeepLTranslator:
        return self._translator

    def _on_keys_received(self, namespace: str, keys: list[str]) -> None:
        self.keys_received.emit(namespace, list(keys))
        self.translations_changed.emit()

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def settings(self) -> AppSettings:
        return self._store.snapshot()

    def update_settings(self, **fields) -> AppSettings:
        return self._store.update(**fields)

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    def read_all(self) -> list[NamespaceData]:
        return self._editor.read_all()

    def update_key(self, namespace: str, key: str, lang_code: str, value: str) -> None:
        self._editor.update_key(namespace, key, lang_code, value)

    def add_key(self, namespace: str, key: str) -> None:
        self._editor.add_key(namespace, key)
        self.translations_changed.emit()

    def remove_key(self, namespace: str, key: str) -> None:
        self._editor.remove_key(namespace, key)
        self.translations_changed.emit()

    def import_folder(self, path: str | Path) -> AppSettings | None:
        settings = self._editor.import_folder(path)
        if settings is not None:
            self.translations_changed.emit()
        return settings

    def add_language(self, code: str) -> AppSettings:
        settings = self._editor.add_language(code)
        self.translations_changed.emit()
        return settings

    def remove_language(self, code: str) -> AppSettings:
        settings = self._editor.remove_language(code)
        self.translations_changed.emit()
        return settings

    def remove_file(self, code: str, absolute_path: str) -> AppSettings:
        settings = self._editor.remove_file(code, absolute_path)
        self.translations_changed.emit()
        return settings

    # ------------------------------------------------------------------
    # Intake server
    # ------------------------------------------------------------------

    def start_server(self, port: int | None = None) -> ServerStatus:
        """Start the intake server and remember the port in settings.

        Raises:
            OSError: If the port cannot be bound.
        """
        status = self._server.start(port)
        if self._store.settings.server_port != status.port:
            self._store.update(server_port=status.port)
        self.server_status_changed.emit(status)
        return status

    def stop_server(self) -> ServerStatus:
        status = self._server.stop()
        self.server_status_changed.emit(status)
        return status

    def server_status(self) -> ServerStatus:
        return self._server.status()

    def start_server_if_enabled(self) -> ServerStatus | None:
        """Auto-start at launch when the setting asks for it."""
        if not self._store.settings.server_auto_start:
            return None
        return self.start_server(self._store.settings.server_port)
