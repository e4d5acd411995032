"""Main window — key tree, detail editor, server and statistics docks.

Layout:
  Top:    Toolbar (import, languages, keys, refresh)
  Left:   KeyTreePanel
  Center: DetailPanel
  Bottom: Server / Languages / Statistics tabs (QDockWidget)
  Footer: QStatusBar
"""

import logging

from PyQt6.QtCore import QSettings, Qt
from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import (
    QDockWidget,
    QFileDialog,
    QInputDialog,
    QMainWindow,
    QMessageBox,
    QSplitter,
    QTabWidget,
    QToolBar,
)

from localedesk.constants import (
    APP_NAME,
    APP_VERSION,
    LOCALE_PATTERN,
    MIN_WINDOW_HEIGHT,
    MIN_WINDOW_WIDTH,
)
from localedesk.core.catalog_controller import CatalogController
from localedesk.core.tree_model import get_sibling_keys
from localedesk.models.catalog import NamespaceData
from localedesk.ui.panels.catalog_panel import CatalogPanel
from localedesk.ui.panels.detail_panel import DetailPanel
from localedesk.ui.panels.key_tree_panel import KeyTreePanel
from localedesk.ui.panels.server_panel import ServerPanel
from localedesk.ui.panels.statistics_panel import StatisticsPanel

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Application main window."""

    def __init__(self, controller: CatalogController):
        super().__init__()
        self.setWindowTitle(f"{APP_NAME} v{APP_VERSION}")
        self.setMinimumSize(MIN_WINDOW_WIDTH, MIN_WINDOW_HEIGHT)

        self._controller = controller
        self._namespaces: list[NamespaceData] = []
        self._selected: tuple[str, str] | None = None

        self._tree_panel = KeyTreePanel()
        self._detail_panel = DetailPanel(
            on_save=controller.update_key,
            translator=controller.translator,
        )
        splitter = QSplitter(Qt.Orientation.Horizontal)
        splitter.addWidget(self._tree_panel)
        splitter.addWidget(self._detail_panel)
        splitter.setStretchFactor(0, 2)
        splitter.setStretchFactor(1, 3)
        self.setCentralWidget(splitter)

        self._statistics_panel = StatisticsPanel()
        tabs = QTabWidget()
        tabs.addTab(ServerPanel(controller), "Server")
        tabs.addTab(CatalogPanel(controller), "Languages")
        tabs.addTab(self._statistics_panel, "Statistics")
        dock = QDockWidget("Tools", self)
        dock.setObjectName("tools_dock")
        dock.setWidget(tabs)
        self.addDockWidget(Qt.DockWidgetArea.BottomDockWidgetArea, dock)

        self._build_toolbar()

        self._tree_panel.key_selected.connect(self._select_key)
        self._detail_panel.key_selected.connect(self._select_key)
        self._detail_panel.remove_requested.connect(self._remove_key)
        controller.translations_changed.connect(self.refresh)
        controller.keys_received.connect(self._on_keys_received)

        self._restore_state()
        self.refresh()

    # ------------------------------------------------------------------
    # Toolbar
    # ------------------------------------------------------------------

    def _build_toolbar(self) -> None:
        toolbar = QToolBar("Main", self)
        toolbar.setObjectName("main_toolbar")
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        for text, slot in (
            ("Import folder…", self._import_folder),
            ("Add language…", self._add_language),
            ("Remove language…", self._remove_language),
            ("Add key…", self._add_key),
            ("Refresh", self.refresh),
        ):
            action = QAction(text, self)
            action.triggered.connect(slot)
            toolbar.addAction(action)

    def _import_folder(self) -> None:
        path = QFileDialog.getExistingDirectory(self, "Select translations folder")
        if not path:
            return
        settings = self._controller.import_folder(path)
        if settings is not None:
            self.statusBar().showMessage(
                f"Imported {len(settings.languages)} language(s) "
                f"({settings.folder_structure.value})", 5000)

    def _add_language(self) -> None:
        code, ok = QInputDialog.getText(self, "Add language", "Locale code (xx-XX):")
        code = code.strip()
        if not ok or not code:
            return
        if not LOCALE_PATTERN.match(code):
            QMessageBox.warning(self, "Add language", f"'{code}' is not a valid locale (xx-XX).")
            return
        self._controller.add_language(code)

    def _remove_language(self) -> None:
        codes = self._controller.settings().language_codes
        if not codes:
            return
        code, ok = QInputDialog.getItem(self, "Remove language", "Language:", codes, 0, False)
        if ok and code:
            self._controller.remove_language(code)

    def _add_key(self) -> None:
        namespaces = [ns.namespace for ns in self._namespaces]
        if not namespaces:
            return
        current = 0
        if self._selected and self._selected[0] in namespaces:
            current = namespaces.index(self._selected[0])
        namespace, ok = QInputDialog.getItem(
            self, "Add key", "Namespace:", namespaces, current, True)
        if not ok or not namespace:
            return
        prefix = ""
        if self._selected and "." in self._selected[1]:
            prefix = self._selected[1].rsplit(".", 1)[0] + "."
        key, ok = QInputDialog.getText(self, "Add key", "Key (dot-separated):", text=prefix)
        key = key.strip().strip(".")
        if not ok or not key:
            return
        self._controller.add_key(namespace, key)
        self._select_key(namespace, key)

    def _remove_key(self, namespace: str, key: str) -> None:
        answer = QMessageBox.question(
            self, "Remove key", f"Remove '{key}' from every language?")
        if answer != QMessageBox.StandardButton.Yes:
            return
        if self._selected == (namespace, key):
            self._selected = None
        self._controller.remove_key(namespace, key)

    # ------------------------------------------------------------------
    # Refresh
    # ------------------------------------------------------------------

    def refresh(self) -> None:
        """Re-read the catalog and update every view."""
        lang_codes = self._controller.settings().language_codes
        self._namespaces = self._controller.read_all()
        self._tree_panel.set_data(self._namespaces, lang_codes)
        self._statistics_panel.set_data(self._namespaces, lang_codes)
        if self._selected:
            self._show_detail(*self._selected)
        else:
            self._detail_panel.clear()

    def _select_key(self, namespace: str, key: str) -> None:
        self._selected = (namespace, key)
        self._tree_panel.expand_key(namespace, key)
        self._show_detail(namespace, key)

    def _show_detail(self, namespace: str, key: str) -> None:
        ns_data = next((ns for ns in self._namespaces if ns.namespace == namespace), None)
        if ns_data is None:
            self._selected = None
            self._detail_panel.clear()
            return
        siblings = get_sibling_keys(ns_data, key)
        self._detail_panel.show_key(
            namespace, key, siblings, self._controller.settings().language_codes)

    def _on_keys_received(self, namespace: str, keys: list) -> None:
        self.statusBar().showMessage(
            f"{len(keys)} new key(s) received in '{namespace}': {', '.join(keys)}", 8000)

    # ------------------------------------------------------------------
    # Window state
    # ------------------------------------------------------------------

    def closeEvent(self, event):
        self._save_state()
        self._detail_panel.clear()
        try:
            self._controller.stop_server()
        except OSError:
            logger.warning("Failed to stop key-intake server", exc_info=True)
        super().closeEvent(event)

    def _save_state(self):
        settings = QSettings()
        settings.setValue("mainwindow/geometry", self.saveGeometry())
        settings.setValue("mainwindow/state", self.saveState())

    def _restore_state(self):
        settings = QSettings()
        geometry = settings.value("mainwindow/geometry")
        if geometry:
            self.restoreGeometry(geometry)
        state = settings.value("mainwindow/state")
        if state:
            self.restoreState(state)
