"""Completion chart — completed vs missing keys per language."""

import numpy as np
from PyQt6.QtWidgets import QWidget

from localedesk.core.statistics import LanguageCompletion
from localedesk.ui.charts.base_chart import BaseChart
from localedesk.ui.styles.colors import COMPLETED_COLOR, MISSING_COLOR


class CompletionChartWidget(BaseChart):
    """Stacked bars: completed (bottom) and missing (top) per language."""

    def __init__(self, parent: QWidget | None = None):
        super().__init__(
            title="Completion by language",
            y_label="Keys",
            parent=parent,
        )

    def set_data(self, completion: list[LanguageCompletion]) -> None:
        self.clear_bars()
        if not completion:
            self.set_categories([])
            return
        completed = np.array([c.completed for c in completion], dtype=float)
        missing = np.array([c.missing for c in completion], dtype=float)
        self.set_categories([f"{c.language} ({c.percent:.0f}%)" for c in completion])
        self.add_bars(completed, name="Completed", color=COMPLETED_COLOR)
        self.add_bars(missing, name="Missing", color=MISSING_COLOR, y0=completed)
