"""Debouncer — trailing-edge timer coalescing rapid calls.

Each ``call`` restarts a single-shot QTimer; only the last arguments are
delivered once the delay elapses without a new call.
"""

from __future__ import annotations

from typing import Any, Callable

from PyQt6.QtCore import QObject, QTimer


class Debouncer(QObject):
    """Delay ``callback`` until ``delay_ms`` passed since the last call."""

    def __init__(self, delay_ms: int, callback: Callable[..., Any], parent: QObject | None = None):
        super().__init__(parent)
        self._callback = callback
        self._args: tuple = ()
        self._pending = False
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(delay_ms)
        self._timer.timeout.connect(self.flush)

    @property
    def pending(self) -> bool:
        return self._pending

    def call(self, *args) -> None:
        self._args = args
        self._pending = True
        self._timer.start()

    def cancel(self) -> None:
        self._timer.stop()
        self._pending = False
        self._args = ()

    def flush(self) -> None:
        """Deliver the pending call now, if any."""
        self._timer.stop()
        if not self._pending:
            return
        args, self._args, self._pending = self._args, (), False
        self._callback(*args)
