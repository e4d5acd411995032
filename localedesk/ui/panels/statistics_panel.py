"""Statistics panel — overview figures, completion chart, missing keys."""

from PyQt6.QtWidgets import (
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from localedesk.core import statistics
from localedesk.models.catalog import NamespaceData
from localedesk.ui.charts.completion_chart import CompletionChartWidget
from localedesk.ui.styles.colors import TEXT_PRIMARY, TEXT_SECONDARY


class StatisticsPanel(QWidget):
    def __init__(self, parent: QWidget | None = None):
        super().__init__(parent)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)

        summary_row = QHBoxLayout()
        self._summary_labels: dict[str, QLabel] = {}
        for name in ("Keys", "Languages", "Namespaces", "Completion"):
            label = QLabel()
            label.setStyleSheet(f"color: {TEXT_PRIMARY}; padding: 4px 12px;")
            summary_row.addWidget(label)
            self._summary_labels[name] = label
        summary_row.addStretch(1)
        layout.addLayout(summary_row)

        body = QHBoxLayout()
        self._chart = CompletionChartWidget()
        body.addWidget(self._chart, stretch=1)

        self._missing_table = QTableWidget(0, 3)
        self._missing_table.setHorizontalHeaderLabels(["Namespace", "Key", "Missing in"])
        self._missing_table.horizontalHeader().setSectionResizeMode(
            QHeaderView.ResizeMode.Stretch)
        self._missing_table.verticalHeader().setVisible(False)
        self._missing_table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        body.addWidget(self._missing_table, stretch=1)
        layout.addLayout(body, stretch=1)

        self._footer = QLabel()
        self._footer.setStyleSheet(f"color: {TEXT_SECONDARY}; font-size: 8pt;")
        layout.addWidget(self._footer)

    def set_data(self, data: list[NamespaceData], lang_codes: list[str]) -> None:
        summary = statistics.summarize(data, lang_codes)
        self._summary_labels["Keys"].setText(f"Keys: <b>{summary.total_keys}</b>")
        self._summary_labels["Languages"].setText(f"Languages: <b>{summary.total_languages}</b>")
        self._summary_labels["Namespaces"].setText(f"Namespaces: <b>{summary.total_namespaces}</b>")
        self._summary_labels["Completion"].setText(
            f"Completion: <b>{summary.completion_percent:.1f}%</b>")

        self._chart.set_data(statistics.language_completion(data, lang_codes))

        missing = statistics.missing_translations(data, lang_codes)
        self._missing_table.setRowCount(len(missing))
        for row, item in enumerate(missing):
            self._missing_table.setItem(row, 0, QTableWidgetItem(item.namespace))
            self._missing_table.setItem(row, 1, QTableWidgetItem(item.key))
            self._missing_table.setItem(row, 2, QTableWidgetItem(", ".join(item.missing_languages)))

        longest, _shortest = statistics.string_lengths(data, lang_codes, top_n=1)
        if longest:
            top = longest[0]
            self._footer.setText(
                f"Longest string: {top.key} [{top.language}], {top.length} characters")
        else:
            self._footer.clear()
