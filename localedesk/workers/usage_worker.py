"""Usage worker — fetches the DeepL character quota off the UI thread."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PyQt6.QtCore import QThread, pyqtSignal

if TYPE_CHECKING:
    from localedesk.core.translator import DeepLTranslator


class UsageWorker(QThread):
    """Emits usage_ready(Usage) once ``get_usage`` returns.

    ``get_usage`` falls back to the local counter on API errors, so there
    is no error signal.
    """

    usage_ready = pyqtSignal(object)

    def __init__(self, translator: DeepLTranslator, parent=None):
        super().__init__(parent)
        self._translator = translator

    def run(self) -> None:
        self.usage_ready.emit(self._translator.get_usage())
