"""Catalog panel — root folder, configured languages and their files.

Removing a file only drops it from the configuration; the JSON file
stays on disk. A language left without files disappears with it.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QPushButton,
    QTreeWidget,
    QTreeWidgetItem,
    QVBoxLayout,
    QWidget,
)

from localedesk.core.catalog_controller import CatalogController
from localedesk.ui.styles.colors import TEXT_PRIMARY, TEXT_SECONDARY

_FILE_ROLE = Qt.ItemDataRole.UserRole


class CatalogPanel(QWidget):
    """Languages tab: one top-level item per language, one child per file."""

    def __init__(self, controller: CatalogController, parent: QWidget | None = None):
        super().__init__(parent)
        self._controller = controller

        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)

        self._root_label = QLabel()
        self._root_label.setStyleSheet(f"color: {TEXT_PRIMARY};")
        self._root_label.setWordWrap(True)
        layout.addWidget(self._root_label)

        self._tree = QTreeWidget()
        self._tree.setHeaderLabels(["Language / namespace", "File"])
        self._tree.setColumnWidth(0, 200)
        self._tree.itemSelectionChanged.connect(self._update_buttons)
        layout.addWidget(self._tree, stretch=1)

        buttons = QHBoxLayout()
        self._remove_file_btn = QPushButton("Remove file")
        self._remove_file_btn.clicked.connect(self._remove_selected_file)
        buttons.addWidget(self._remove_file_btn)
        buttons.addStretch(1)
        hint = QLabel("Files stay on disk.")
        hint.setStyleSheet(f"color: {TEXT_SECONDARY}; font-size: 8pt;")
        buttons.addWidget(hint)
        layout.addLayout(buttons)

        controller.translations_changed.connect(self.refresh)
        self.refresh()

    def refresh(self) -> None:
        settings = self._controller.settings()
        if settings.root_folder:
            self._root_label.setText(
                f"Root: <b>{settings.root_folder}</b> ({settings.folder_structure.value})")
        else:
            self._root_label.setText("No translations folder imported.")

        self._tree.clear()
        for lang in settings.languages:
            lang_item = QTreeWidgetItem([lang.code, f"{len(lang.files)} file(s)"])
            for f in lang.files:
                file_item = QTreeWidgetItem([f.namespace, f.absolute_path])
                file_item.setData(0, _FILE_ROLE, [lang.code, f.absolute_path])
                file_item.setToolTip(1, f.absolute_path)
                lang_item.addChild(file_item)
            self._tree.addTopLevelItem(lang_item)
            lang_item.setExpanded(True)
        self._update_buttons()

    def select_file(self, lang_code: str, absolute_path: str) -> bool:
        """Select the item for one file; False if it is not listed."""
        for i in range(self._tree.topLevelItemCount()):
            lang_item = self._tree.topLevelItem(i)
            for j in range(lang_item.childCount()):
                item = lang_item.child(j)
                if item.data(0, _FILE_ROLE) == [lang_code, absolute_path]:
                    self._tree.setCurrentItem(item)
                    return True
        return False

    def _selected_file(self) -> tuple[str, str] | None:
        item = self._tree.currentItem()
        data = item.data(0, _FILE_ROLE) if item is not None else None
        return tuple(data) if data else None

    def _update_buttons(self) -> None:
        self._remove_file_btn.setEnabled(self._selected_file() is not None)

    def _remove_selected_file(self) -> None:
        selected = self._selected_file()
        if selected is None:
            return
        self._controller.remove_file(*selected)
