"""
Chart Widget for live series visualization.

Responsibility: Embed the SeriesChart in a Tk container and redraw it
when the series in the state store changes.
"""

import logging
import tkinter as tk

import matplotlib
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg, NavigationToolbar2Tk
from matplotlib.figure import Figure

from ..models.series import Series
from ..models.state_store import DashboardState
from .series_chart import SeriesChart

matplotlib.use("TkAgg")

logger = logging.getLogger(__name__)


class ChartWidget:
    """
    Tk wrapper around SeriesChart.

    Only redraws when the series object actually changed.
    """

    def __init__(self, parent_container: tk.Widget, padding: float = 0.3):
        self.parent = parent_container

        self.figure = Figure(figsize=(10, 4), dpi=80, facecolor="white")
        self.chart = SeriesChart(self.figure, padding=padding)

        self.canvas = FigureCanvasTkAgg(self.figure, self.parent)
        self.canvas.get_tk_widget().pack(fill=tk.BOTH, expand=True)

        self.toolbar = NavigationToolbar2Tk(self.canvas, self.parent)
        self.toolbar.update()

        self._rendered_series = None
        self.update_count = 0

        self.update_chart(())

        logger.info("ChartWidget initialized")

    def on_state_changed(self, state: DashboardState):
        """State store listener."""
        if state.series is not self._rendered_series:
            self.update_chart(state.series)

    def update_chart(self, series: Series):
        try:
            self.chart.render(series)
            self.figure.tight_layout(pad=1.5)
            self.canvas.draw_idle()
            self._rendered_series = series
            self.update_count += 1
        except Exception as e:
            logger.error(f"Chart update error: {e}")
