"""Detail panel — edit the selected key and its siblings in every language.

Edits are saved through a debouncer so typing produces one write per
pause. An empty value with a filled value in another language triggers
a machine-translation suggestion the user can accept with one click.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from PyQt6.QtCore import QCoreApplication, pyqtSignal
from PyQt6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from localedesk.constants import SAVE_DEBOUNCE_MS, SUGGESTION_DEBOUNCE_MS
from localedesk.models.catalog import KeyEntry
from localedesk.ui.styles.colors import ACCENT, INFO, TEXT_SECONDARY, WARNING
from localedesk.ui.widgets.debouncer import Debouncer
from localedesk.workers.suggestion_worker import SuggestionWorker

if TYPE_CHECKING:
    from localedesk.core.translator import DeepLTranslator

SaveCallback = Callable[[str, str, str, str], None]   # ns, key, lang, value


def pick_source_language(
    values: dict[str, str | None],
    lang_codes: list[str],
    target: str,
) -> str | None:
    """First other language with a non-blank value."""
    for code in lang_codes:
        value = values.get(code)
        if code != target and value and value.strip():
            return code
    return None


class LangInput(QWidget):
    """One language's value editor with debounced save and suggestion."""

    def __init__(
        self,
        namespace: str,
        entry: KeyEntry,
        lang_code: str,
        lang_codes: list[str],
        on_save: SaveCallback,
        translator: DeepLTranslator | None,
        parent: QWidget | None = None,
    ):
        super().__init__(parent)
        self._namespace = namespace
        self._entry = entry
        self._lang_code = lang_code
        self._on_save = on_save
        self._translator = translator
        self._worker: SuggestionWorker | None = None
        self._suggestion: str | None = None

        value = entry.values.get(lang_code)
        missing = value in (None, "")

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(2)

        header = QHBoxLayout()
        code_label = QLabel(f"<b>{lang_code}</b>")
        code_label.setStyleSheet(f"color: {TEXT_SECONDARY}; font-family: monospace;")
        header.addWidget(code_label)
        self._missing_label = QLabel("missing")
        self._missing_label.setStyleSheet(f"color: {WARNING}; font-size: 8pt;")
        self._missing_label.setVisible(missing)
        header.addWidget(self._missing_label)
        header.addStretch(1)
        self._suggest_btn = QPushButton()
        self._suggest_btn.setFlat(True)
        self._suggest_btn.setStyleSheet(f"color: {INFO}; font-size: 8pt;")
        self._suggest_btn.setVisible(False)
        self._suggest_btn.clicked.connect(self._accept_suggestion)
        header.addWidget(self._suggest_btn)
        layout.addLayout(header)

        self._edit = QLineEdit(value or "")
        if missing:
            self._edit.setPlaceholderText("Missing translation — type to create")
        layout.addWidget(self._edit)

        self._save_debouncer = Debouncer(SAVE_DEBOUNCE_MS, self._save, self)
        self._edit.textEdited.connect(self._save_debouncer.call)

        self._source_lang = pick_source_language(entry.values, lang_codes, lang_code)
        self._suggest_debouncer = Debouncer(SUGGESTION_DEBOUNCE_MS, self._fetch_suggestion, self)
        if missing and self._source_lang and translator is not None:
            self._suggest_debouncer.call()

    def _save(self, text: str) -> None:
        self._missing_label.setVisible(text == "")
        self._on_save(self._namespace, self._entry.key, self._lang_code, text)

    def _fetch_suggestion(self) -> None:
        source_text = self._entry.values.get(self._source_lang) or ""
        cache_key = f"{self._namespace}:{self._entry.key}:{self._source_lang}->{self._lang_code}"
        self._suggest_btn.setText("translating…")
        self._suggest_btn.setEnabled(False)
        self._suggest_btn.setVisible(True)
        worker = SuggestionWorker(self._translator, self)
        worker.setup(source_text, self._source_lang, self._lang_code, cache_key)
        worker.suggestion_ready.connect(self._on_suggestion)
        worker.error_occurred.connect(self._on_suggestion_error)
        worker.finished.connect(self._on_worker_finished)
        worker.finished.connect(worker.deleteLater)
        self._worker = worker
        worker.start()

    def _on_worker_finished(self) -> None:
        self._worker = None

    def _on_suggestion(self, _lang_code: str, text: str) -> None:
        if self._edit.text():
            self._suggest_btn.setVisible(False)
            return
        self._suggestion = text
        self._suggest_btn.setText("Use suggestion")
        self._suggest_btn.setToolTip(text)
        self._suggest_btn.setEnabled(True)

    def _on_suggestion_error(self, _message: str) -> None:
        self._suggestion = None
        self._suggest_btn.setVisible(False)

    def _accept_suggestion(self) -> None:
        if not self._suggestion:
            return
        self._edit.setText(self._suggestion)
        self._save_debouncer.cancel()
        self._save(self._suggestion)
        self._suggestion = None
        self._suggest_btn.setVisible(False)

    def flush(self) -> None:
        """Write a pending edit immediately (panel about to be rebuilt)."""
        self._save_debouncer.flush()
        self._suggest_debouncer.cancel()
        self._release_worker()

    def _release_worker(self) -> None:
        """Detach an in-flight worker so it outlives this widget."""
        worker, self._worker = self._worker, None
        if worker is None:
            return
        worker.suggestion_ready.disconnect(self._on_suggestion)
        worker.error_occurred.disconnect(self._on_suggestion_error)
        worker.finished.disconnect(self._on_worker_finished)
        # still deleted through finished -> deleteLater
        worker.setParent(QCoreApplication.instance())


class SiblingCard(QFrame):
    """Card for one key: last segment, remove button, one input per language."""

    selected = pyqtSignal(str)
    remove_requested = pyqtSignal(str)

    def __init__(
        self,
        namespace: str,
        entry: KeyEntry,
        lang_codes: list[str],
        active: bool,
        on_save: SaveCallback,
        translator: DeepLTranslator | None,
        parent: QWidget | None = None,
    ):
        super().__init__(parent)
        self._key = entry.key
        border = ACCENT if active else "#334155"
        self.setStyleSheet(f"SiblingCard {{ border: 1px solid {border}; border-radius: 6px; }}")

        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 6, 8, 8)

        header = QHBoxLayout()
        name = QLabel(entry.key.rsplit(".", 1)[-1])
        name.setStyleSheet(f"font-family: monospace; font-weight: bold;"
                           f" color: {ACCENT if active else TEXT_SECONDARY};")
        header.addWidget(name, 1)
        remove_btn = QPushButton("Remove")
        remove_btn.setFlat(True)
        remove_btn.clicked.connect(lambda: self.remove_requested.emit(self._key))
        header.addWidget(remove_btn)
        layout.addLayout(header)

        self.inputs = [
            LangInput(namespace, entry, code, lang_codes, on_save, translator, self)
            for code in lang_codes
        ]
        for w in self.inputs:
            layout.addWidget(w)

    def mousePressEvent(self, event):
        self.selected.emit(self._key)
        super().mousePressEvent(event)


class DetailPanel(QWidget):
    """Right panel listing the selected key's siblings."""

    key_selected = pyqtSignal(str, str)
    remove_requested = pyqtSignal(str, str)

    def __init__(
        self,
        on_save: SaveCallback,
        translator: DeepLTranslator | None = None,
        parent: QWidget | None = None,
    ):
        super().__init__(parent)
        self._on_save = on_save
        self._translator = translator
        self._cards: list[SiblingCard] = []

        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)

        self._title = QLabel()
        self._title.setStyleSheet(f"color: {TEXT_SECONDARY}; font-size: 8pt;")
        layout.addWidget(self._title)

        self._scroll = QScrollArea()
        self._scroll.setWidgetResizable(True)
        layout.addWidget(self._scroll, stretch=1)
        self.clear()

    def clear(self) -> None:
        self._flush_cards()
        self._cards = []
        self._title.setText("Select a key to edit its translations.")
        self._scroll.setWidget(QWidget())

    def show_key(
        self,
        namespace: str,
        selected_key: str,
        siblings: list[KeyEntry],
        lang_codes: list[str],
    ) -> None:
        self._flush_cards()
        parent = selected_key.rsplit(".", 1)[0] if "." in selected_key else ""
        self._title.setText(f"{namespace}  {parent}".strip())

        container = QWidget()
        column = QVBoxLayout(container)
        column.setSpacing(8)
        self._cards = []
        for entry in siblings:
            card = SiblingCard(namespace, entry, lang_codes, entry.key == selected_key,
                               self._on_save, self._translator, container)
            card.selected.connect(lambda key, ns=namespace: self.key_selected.emit(ns, key))
            card.remove_requested.connect(
                lambda key, ns=namespace: self.remove_requested.emit(ns, key))
            column.addWidget(card)
            self._cards.append(card)
        column.addStretch(1)
        self._scroll.setWidget(container)

    def _flush_cards(self) -> None:
        for card in self._cards:
            for w in card.inputs:
                w.flush()
