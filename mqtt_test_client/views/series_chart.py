"""
Series chart rendering.

Responsibility: Draw a sample series onto a matplotlib Figure -
min/max as bars, average as a line. Independent of Tk so it works
with any backend (the Tk widget embeds it, tests use Agg).
"""

import logging
from typing import Dict, Optional, Sequence, Tuple

import numpy as np
from matplotlib.figure import Figure
from matplotlib.ticker import FormatStrFormatter, MaxNLocator

from ..models.sample import Sample

logger = logging.getLogger(__name__)

COLORS = {
    "min": "#3b82f6",
    "max": "#ef4444",
    "average": "#22c55e",
}

BAR_WIDTH = 0.4


def series_arrays(samples: Sequence[Sample]) -> Dict[str, np.ndarray]:
    """Column arrays for plotting."""
    return {
        "min": np.array([s.min for s in samples], dtype=np.float64),
        "max": np.array([s.max for s in samples], dtype=np.float64),
        "average": np.array([s.average for s in samples], dtype=np.float64),
    }


def compute_y_domain(samples: Sequence[Sample], padding: float = 0.3) -> Optional[Tuple[float, float]]:
    """
    Tight y-range over all values, padded and rounded to 0.1.

    Returns:
        (low, high) or None when there is no finite value
    """
    if not samples:
        return None

    arrays = series_arrays(samples)
    values = np.concatenate([arrays["min"], arrays["max"], arrays["average"]])
    values = values[np.isfinite(values)]
    if values.size == 0:
        return None

    low = np.floor((values.min() - padding) * 10) / 10
    high = np.ceil((values.max() + padding) * 10) / 10
    return float(low), float(high)


def tick_count(domain: Tuple[float, float]) -> int:
    """Number of y ticks: one per 0.1 of range, clamped to 6..20."""
    low, high = domain
    return int(min(20, max(6, round((high - low) * 10) + 1)))


def time_labels(samples: Sequence[Sample]) -> list:
    """Local time-of-day labels."""
    return [s.time.astimezone().strftime("%H:%M:%S") for s in samples]


class SeriesChart:
    """
    Composed bar/line chart of a sample series.

    The figure holds a single axes; render() clears and redraws it.
    """

    def __init__(self, figure: Figure, padding: float = 0.3):
        self.figure = figure
        self.padding = padding
        self.ax = self.figure.add_subplot(1, 1, 1)
        self._configure_axes()

    def _configure_axes(self):
        self.ax.set_xlabel("Time")
        self.ax.grid(True, linestyle="--", alpha=0.5)
        self.ax.yaxis.set_major_formatter(FormatStrFormatter("%.1f"))

    def render(self, samples: Sequence[Sample]):
        """Redraws the axes for the given samples."""
        self.ax.clear()
        self._configure_axes()

        if not samples:
            self.ax.text(0.5, 0.5, "Waiting for data...", ha="center", va="center",
                         transform=self.ax.transAxes, color="gray")
            return

        arrays = series_arrays(samples)
        x = np.arange(len(samples))

        self.ax.bar(x - BAR_WIDTH / 2, arrays["min"], BAR_WIDTH, label="Min", color=COLORS["min"])
        self.ax.bar(x + BAR_WIDTH / 2, arrays["max"], BAR_WIDTH, label="Max", color=COLORS["max"])
        self.ax.plot(x, arrays["average"], label="Average", color=COLORS["average"], linewidth=3)

        labels = time_labels(samples)
        # First and last label are always shown
        step = max(1, len(samples) // 10)
        ticks = sorted(set(list(range(0, len(samples), step)) + [len(samples) - 1]))
        self.ax.set_xticks(ticks)
        self.ax.set_xticklabels([labels[i] for i in ticks], rotation=30, ha="right", fontsize=8)

        domain = compute_y_domain(samples, self.padding)
        if domain:
            self.ax.yaxis.set_major_locator(MaxNLocator(nbins=tick_count(domain)))

        self.ax.legend(loc="upper left", fontsize=8)
