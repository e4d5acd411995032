"""Suggestion worker — background thread for machine-translation requests.

Runs DeepLTranslator.translate off the UI thread so typing never blocks
on the network.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from PyQt6.QtCore import QThread, pyqtSignal

from localedesk.core.translator import TranslationServiceError

if TYPE_CHECKING:
    from localedesk.core.translator import DeepLTranslator


class SuggestionWorker(QThread):
    """Background thread fetching one translation suggestion.

    Emits suggestion_ready(lang_code, text) on success, error_occurred
    on failure.

    Usage:
        worker = SuggestionWorker(translator)
        worker.setup(text, "en-US", "fr-FR", "common:title:en-US->fr-FR")
        worker.suggestion_ready.connect(on_suggestion)
        worker.error_occurred.connect(on_error)
        worker.start()
    """

    suggestion_ready = pyqtSignal(str, str)
    error_occurred = pyqtSignal(str)

    def __init__(self, translator: DeepLTranslator, parent=None):
        super().__init__(parent)
        self._translator = translator
        self._text = ""
        self._from_lang = ""
        self._to_lang = ""
        self._cache_key = ""

    def setup(self, text: str, from_lang: str, to_lang: str, cache_key: str) -> None:
        """Configure the request. Must be called before start()."""
        self._text = text
        self._from_lang = from_lang
        self._to_lang = to_lang
        self._cache_key = cache_key

    def run(self) -> None:
        try:
            translation = self._translator.translate(
                self._text, self._from_lang, self._to_lang, self._cache_key
            )
        except TranslationServiceError as e:
            self.error_occurred.emit(e.message)
            return
        self.suggestion_ready.emit(self._to_lang, translation)
