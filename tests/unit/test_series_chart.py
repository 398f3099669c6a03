"""
Unit tests for the series chart rendering (Agg backend, no display).
"""

import unittest
from datetime import datetime, timedelta

import matplotlib

matplotlib.use("Agg")

from matplotlib.figure import Figure  # noqa: E402

from mqtt_test_client.models.sample import Sample  # noqa: E402
from mqtt_test_client.views.series_chart import (  # noqa: E402
    COLORS,
    SeriesChart,
    compute_y_domain,
    series_arrays,
    tick_count,
)

T0 = datetime(2024, 5, 1, 12, 0, 0)


def make_series(values):
    return tuple(
        Sample(time=T0 + timedelta(seconds=i), min=lo, max=hi, average=avg)
        for i, (avg, lo, hi) in enumerate(values)
    )


class TestChartHelpers(unittest.TestCase):

    def test_series_arrays(self):
        arrays = series_arrays(make_series([(95, 40, 150), (96, 41, 151)]))
        self.assertEqual(arrays["min"].tolist(), [40.0, 41.0])
        self.assertEqual(arrays["max"].tolist(), [150.0, 151.0])
        self.assertEqual(arrays["average"].tolist(), [95.0, 96.0])

    def test_y_domain_padded(self):
        low, high = compute_y_domain(make_series([(95, 40, 150)]), padding=0.5)
        self.assertAlmostEqual(low, 39.5)
        self.assertAlmostEqual(high, 150.5)

    def test_y_domain_empty(self):
        self.assertIsNone(compute_y_domain(()))

    def test_tick_count_clamped(self):
        self.assertEqual(tick_count((39.5, 150.5)), 20)
        self.assertEqual(tick_count((1.0, 1.2)), 6)
        self.assertEqual(tick_count((1.0, 2.0)), 11)


class TestSeriesChart(unittest.TestCase):

    def setUp(self):
        self.figure = Figure()
        self.chart = SeriesChart(self.figure)

    def test_render_bars_and_line(self):
        series = make_series([(95, 40, 150), (96, 41, 151), (97, 42, 152)])
        self.chart.render(series)

        ax = self.chart.ax
        self.assertEqual(len(ax.containers), 2)  # min and max bars
        self.assertEqual(len(ax.patches), 6)
        self.assertEqual(len(ax.lines), 1)
        self.assertEqual(ax.lines[0].get_ydata().tolist(), [95.0, 96.0, 97.0])
        self.assertEqual(ax.lines[0].get_color(), COLORS["average"])

        labels = [t.get_text() for t in ax.get_legend().get_texts()]
        self.assertEqual(sorted(labels), ["Average", "Max", "Min"])

    def test_time_labels_include_first_and_last(self):
        series = make_series([(1, 0, 2)] * 25)
        self.chart.render(series)

        labels = [t.get_text() for t in self.chart.ax.get_xticklabels()]
        self.assertEqual(labels[0], "12:00:00")
        self.assertEqual(labels[-1], "12:00:24")

    def test_render_empty(self):
        self.chart.render(())

        self.assertEqual(len(self.chart.ax.patches), 0)
        texts = [t.get_text() for t in self.chart.ax.texts]
        self.assertIn("Waiting for data...", texts)

    def test_rerender_replaces_content(self):
        self.chart.render(make_series([(95, 40, 150)]))
        self.chart.render(make_series([(95, 40, 150), (96, 41, 151)]))
        self.assertEqual(len(self.chart.ax.patches), 4)
        self.assertEqual(len(self.chart.ax.lines), 1)


if __name__ == "__main__":
    unittest.main()
