"""Base chart widget — pyqtgraph-based with dark theme.

Common API for bar charts with categorical x labels.
"""

import numpy as np
import pyqtgraph as pg
from PyQt6.QtWidgets import QVBoxLayout, QWidget

from localedesk.ui.styles.colors import BACKGROUND, BORDER, PANEL_BG, TEXT_SECONDARY


class BaseChart(QWidget):
    """pyqtgraph PlotWidget wrapper with dark theme and bar helpers."""

    def __init__(
        self,
        title: str = "",
        x_label: str = "",
        y_label: str = "",
        parent: QWidget | None = None,
    ):
        super().__init__(parent)
        self._bars: list[pg.BarGraphItem] = []

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.plot_widget = pg.PlotWidget()
        self.plot_widget.setBackground(BACKGROUND)
        self.plot_widget.showGrid(x=False, y=True, alpha=0.15)
        layout.addWidget(self.plot_widget)

        plot_item = self.plot_widget.getPlotItem()
        if title:
            plot_item.setTitle(title, color=TEXT_SECONDARY, size="10pt")
        if x_label:
            plot_item.setLabel("bottom", x_label, color=TEXT_SECONDARY)
        if y_label:
            plot_item.setLabel("left", y_label, color=TEXT_SECONDARY)

        for axis_name in ("bottom", "left"):
            axis = plot_item.getAxis(axis_name)
            axis.setPen(pg.mkPen(BORDER))
            axis.setTextPen(pg.mkPen(TEXT_SECONDARY))

        self._legend = plot_item.addLegend(
            offset=(10, 10),
            labelTextColor=TEXT_SECONDARY,
            brush=pg.mkBrush(PANEL_BG),
            pen=pg.mkPen(BORDER),
        )

    def set_categories(self, labels: list[str]) -> None:
        """Label x positions 0..n-1 with ``labels``."""
        axis = self.plot_widget.getPlotItem().getAxis("bottom")
        axis.setTicks([list(enumerate(labels))])

    def add_bars(
        self,
        heights: np.ndarray,
        name: str = "",
        color: str = "#22C55E",
        width: float = 0.6,
        y0: np.ndarray | None = None,
    ) -> pg.BarGraphItem:
        """Add a bar series at x = 0..n-1 (stacked on ``y0`` if given)."""
        x = np.arange(len(heights), dtype=float)
        kwargs = {"x": x, "height": heights, "width": width,
                  "brush": pg.mkBrush(color), "pen": pg.mkPen(None)}
        if y0 is not None:
            kwargs["y0"] = y0
        bars = pg.BarGraphItem(**kwargs)
        self.plot_widget.addItem(bars)
        if name:
            self._legend.addItem(bars, name)
        self._bars.append(bars)
        return bars

    def clear_bars(self) -> None:
        for bars in self._bars:
            self.plot_widget.removeItem(bars)
        self._bars.clear()
        self._legend.clear()
