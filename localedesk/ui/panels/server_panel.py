"""Server panel — start/stop the key-intake server and edit its settings."""

from __future__ import annotations

from PyQt6.QtCore import QCoreApplication
from PyQt6.QtWidgets import (
    QCheckBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from localedesk.constants import MAX_PORT, MIN_PORT, SERVER_HOST
from localedesk.core.catalog_controller import CatalogController
from localedesk.core.translator import Usage
from localedesk.models.catalog import ServerStatus
from localedesk.ui.styles.colors import ERROR, SUCCESS, TEXT_DISABLED, TEXT_SECONDARY, WARNING
from localedesk.workers.usage_worker import UsageWorker


def format_usage(usage: Usage) -> str:
    percent = usage.character_count / usage.character_limit * 100 if usage.character_limit else 0.0
    return (f"{usage.character_count:,} / {usage.character_limit:,} characters"
            f" ({percent:.1f}%)")


class ServerPanel(QWidget):
    """Port, auto-start, DeepL key and start/stop controls."""

    def __init__(self, controller: CatalogController, parent: QWidget | None = None):
        super().__init__(parent)
        self._controller = controller
        settings = controller.settings()

        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)

        self._status_label = QLabel()
        layout.addWidget(self._status_label)

        form = QFormLayout()
        self._port_spin = QSpinBox()
        self._port_spin.setRange(MIN_PORT, MAX_PORT)
        self._port_spin.setValue(settings.server_port)
        form.addRow("Port:", self._port_spin)

        self._auto_start = QCheckBox("Start with the application")
        self._auto_start.setChecked(settings.server_auto_start)
        self._auto_start.toggled.connect(
            lambda checked: self._controller.update_settings(server_auto_start=checked))
        form.addRow("", self._auto_start)

        self._deepl_key = QLineEdit(settings.deepl_api_key)
        self._deepl_key.setEchoMode(QLineEdit.EchoMode.Password)
        self._deepl_key.setPlaceholderText("DeepL API key (optional)")
        self._deepl_key.editingFinished.connect(self._save_deepl_key)
        form.addRow("DeepL:", self._deepl_key)

        usage_row = QHBoxLayout()
        self._usage_label = QLabel()
        self._usage_label.setStyleSheet(f"color: {TEXT_SECONDARY};")
        usage_row.addWidget(self._usage_label, 1)
        self._usage_btn = QPushButton("Refresh usage")
        self._usage_btn.setFlat(True)
        self._usage_btn.clicked.connect(self.refresh_usage)
        usage_row.addWidget(self._usage_btn)
        form.addRow("Usage:", usage_row)
        layout.addLayout(form)

        buttons = QHBoxLayout()
        self._start_btn = QPushButton("Start")
        self._start_btn.clicked.connect(self._start)
        buttons.addWidget(self._start_btn)
        self._stop_btn = QPushButton("Stop")
        self._stop_btn.clicked.connect(self._stop)
        buttons.addWidget(self._stop_btn)
        buttons.addStretch(1)
        layout.addLayout(buttons)

        self._error_label = QLabel()
        self._error_label.setStyleSheet(f"color: {ERROR};")
        self._error_label.setWordWrap(True)
        layout.addWidget(self._error_label)

        hint = QLabel(
            "i18next backend: POST http://127.0.0.1:&lt;port&gt;/locales/{lng}/{ns}"
        )
        hint.setStyleSheet(f"color: {TEXT_SECONDARY}; font-size: 8pt;")
        hint.setWordWrap(True)
        layout.addWidget(hint)
        layout.addStretch(1)

        controller.server_status_changed.connect(self._show_status)
        self._show_status(controller.server_status())
        self._usage_worker: UsageWorker | None = None
        self.refresh_usage()

    def _start(self) -> None:
        self._error_label.clear()
        try:
            self._controller.start_server(self._port_spin.value())
        except OSError as e:
            self._error_label.setText(f"Could not start server: {e}")

    def _stop(self) -> None:
        self._error_label.clear()
        self._controller.stop_server()

    def _show_status(self, status: ServerStatus) -> None:
        if status.running:
            self._status_label.setText(f"● Running on http://{SERVER_HOST}:{status.port}")
            self._status_label.setStyleSheet(f"color: {SUCCESS};")
        else:
            self._status_label.setText("● Stopped")
            self._status_label.setStyleSheet(f"color: {TEXT_DISABLED};")
        self._start_btn.setEnabled(not status.running)
        self._stop_btn.setEnabled(status.running)
        self._port_spin.setEnabled(not status.running)

    # ------------------------------------------------------------------
    # DeepL usage
    # ------------------------------------------------------------------

    def _save_deepl_key(self) -> None:
        key = self._deepl_key.text().strip()
        if key == self._controller.settings().deepl_api_key:
            return
        self._controller.update_settings(deepl_api_key=key)
        self.refresh_usage()

    def refresh_usage(self) -> None:
        """Fetch the character quota in the background (no key: no request)."""
        if not self._controller.settings().deepl_api_key:
            self._usage_label.setText("No DeepL API key configured")
            self._usage_btn.setEnabled(False)
            return
        if self._usage_worker is not None:
            return
        self._usage_label.setText("Fetching…")
        self._usage_btn.setEnabled(False)
        # owned by the application so the thread outlives this panel
        worker = UsageWorker(self._controller.translator, QCoreApplication.instance())
        worker.usage_ready.connect(self._show_usage)
        worker.finished.connect(self._on_usage_finished)
        worker.finished.connect(worker.deleteLater)
        self._usage_worker = worker
        worker.start()

    def _on_usage_finished(self) -> None:
        self._usage_worker = None
        self._usage_btn.setEnabled(True)

    def _show_usage(self, usage: Usage) -> None:
        self._usage_label.setText(format_usage(usage))
        near_limit = usage.character_count >= 0.9 * usage.character_limit
        self._usage_label.setStyleSheet(f"color: {WARNING if near_limit else TEXT_SECONDARY};")
