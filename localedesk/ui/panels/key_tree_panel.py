"""Key tree panel — searchable list of namespaces, branches and keys.

Renders the FlatRow projection from ``tree_model.build_rows``: clicking a
namespace or branch toggles it, clicking a leaf selects the key.
"""

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QBrush, QColor
from PyQt6.QtWidgets import (
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QVBoxLayout,
    QWidget,
)

from localedesk.constants import SEARCH_DEBOUNCE_MS
from localedesk.core.tree_model import build_rows, namespace_row_id
from localedesk.models.catalog import FlatRow, NamespaceData, RowKind
from localedesk.ui.styles.colors import TEXT_PRIMARY, TEXT_SECONDARY, WARNING
from localedesk.ui.widgets.debouncer import Debouncer

_INDENT = "    "
_ROW_ROLE = Qt.ItemDataRole.UserRole


def _row_id(row: FlatRow) -> str:
    if row.kind is RowKind.NAMESPACE:
        return namespace_row_id(row.namespace)
    return f"{row.namespace}:{row.full_key}"


def row_label(row: FlatRow) -> str:
    """Text shown for a row: indentation, arrow, segment, counts."""
    indent = _INDENT * row.depth
    if row.kind is RowKind.LEAF:
        return f"{indent}  {row.segment}"
    arrow = "▾" if row.expanded else "▸"
    total = row.completed_count + row.missing_count
    return f"{indent}{arrow} {row.segment}  ({row.completed_count}/{total})"


class KeyTreePanel(QWidget):
    """Left panel: search box and key list."""

    key_selected = pyqtSignal(str, str)   # namespace, key

    def __init__(self, parent: QWidget | None = None):
        super().__init__(parent)
        self._namespaces: list[NamespaceData] = []
        self._lang_codes: list[str] = []
        self._expanded: set[str] = set()
        self._selected: tuple[str, str] | None = None

        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(4)

        self._search = QLineEdit()
        self._search.setPlaceholderText("Search keys...")
        self._search.setClearButtonEnabled(True)
        layout.addWidget(self._search)

        self._search_debouncer = Debouncer(SEARCH_DEBOUNCE_MS, self._rebuild, self)
        self._search.textChanged.connect(lambda _: self._search_debouncer.call())

        self._list = QListWidget()
        self._list.setUniformItemSizes(True)
        self._list.itemClicked.connect(self._on_item_clicked)
        layout.addWidget(self._list, stretch=1)

        self._empty_label = QLabel("Import a translations folder to get started.")
        self._empty_label.setStyleSheet(f"color: {TEXT_SECONDARY}; padding: 8px;")
        self._empty_label.setWordWrap(True)
        layout.addWidget(self._empty_label)

    @property
    def selected(self) -> tuple[str, str] | None:
        return self._selected

    def set_data(self, namespaces: list[NamespaceData], lang_codes: list[str]) -> None:
        self._namespaces = namespaces
        self._lang_codes = lang_codes
        self._empty_label.setVisible(not lang_codes)
        self._rebuild()

    def expand_key(self, namespace: str, key: str) -> None:
        """Expand the namespace and every branch leading to ``key`` and select it."""
        self._selected = (namespace, key)
        self._expanded.add(namespace_row_id(namespace))
        parts = key.split(".")
        for i in range(1, len(parts)):
            self._expanded.add(f"{namespace}:{'.'.join(parts[:i])}")
        self._rebuild()

    def _rebuild(self) -> None:
        rows = build_rows(
            self._namespaces,
            self._lang_codes,
            search=self._search.text(),
            expanded=self._expanded,
        )
        self._list.clear()
        for row in rows:
            item = QListWidgetItem(row_label(row))
            item.setData(_ROW_ROLE, row)
            color = WARNING if row.has_missing else TEXT_PRIMARY
            if row.kind is not RowKind.LEAF:
                font = item.font()
                font.setBold(row.kind is RowKind.NAMESPACE)
                item.setFont(font)
            item.setForeground(QBrush(QColor(color)))
            self._list.addItem(item)
            if (row.kind is RowKind.LEAF and self._selected
                    == (row.namespace, row.full_key)):
                self._list.setCurrentItem(item)

    def _on_item_clicked(self, item: QListWidgetItem) -> None:
        row: FlatRow = item.data(_ROW_ROLE)
        if row.kind is RowKind.LEAF:
            self._selected = (row.namespace, row.full_key)
            self.key_selected.emit(row.namespace, row.full_key)
            return
        if self._search.text().strip():
            return  # everything is expanded while searching
        row_id = _row_id(row)
        if row_id in self._expanded:
            self._expanded.discard(row_id)
        else:
            self._expanded.add(row_id)
        self._rebuild()
