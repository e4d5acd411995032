"""Charts — pyqtgraph visualization widgets."""

from localedesk.ui.charts.base_chart import BaseChart
from localedesk.ui.charts.completion_chart import CompletionChartWidget

__all__ = [
    "BaseChart",
    "CompletionChartWidget",
]
