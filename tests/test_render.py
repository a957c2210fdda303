"""Tests for chart and statistics-card helpers in render.py"""

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import pytest

from rocket_telemetry.domain import DEFAULT_WINDOW, InferenceStats, SummaryStatistics
from rocket_telemetry.render import (
    METRIC_GROUPS,
    format_time,
    make_metric_figure,
    make_performance_figure,
    stats_card_items,
    stats_title,
)


@pytest.fixture
def frame():
    n = 20
    t = 1010000.0 + np.arange(n) * 0.1
    data = {"timestamp": t, "system_active": np.ones(n), "inference_time_us": np.full(n, 400.0)}
    for group in METRIC_GROUPS.values():
        for metric in group.metrics:
            data[metric] = np.sin(t)
    return pd.DataFrame(data)


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


class TestFormatting:
    """Tests for time and card formatting."""

    def test_format_time(self):
        """Times render as T+<seconds> with two decimals."""
        assert format_time(12.345) == "T+12.35s"

    def test_stats_title(self):
        """The card title names the analysis window."""
        assert stats_title(DEFAULT_WINDOW) == "Flight Statistics (T+1009591.94s to T+1020308.51s)"

    def test_card_items_two_decimals(self):
        """Every card value is shown with two decimals and its unit."""
        stats = SummaryStatistics(
            flight_time=10.0,
            max_altitude=12.5,
            max_velocity=5.0,
            max_acceleration=9.81,
            inference_stats=InferenceStats(min=1.0, max=5.0, avg=3.0, median=3.0),
        )
        assert stats_card_items(stats) == [
            ("Flight Time", "10.00s"),
            ("Max Altitude", "12.50m"),
            ("Max Velocity", "5.00m/s"),
            ("Max Acceleration", "9.81m/s²"),
            ("Avg Inference Time", "3.00μs"),
            ("Max Inference Time", "5.00μs"),
        ]

    def test_card_items_without_stats(self):
        """No statistics means an empty card."""
        assert stats_card_items(None) == []

    def test_card_items_missing_aggregates(self):
        """Aggregates without numeric input show N/A."""
        stats = SummaryStatistics(0.0, None, None, None, None)
        items = dict(stats_card_items(stats))
        assert items["Max Altitude"] == "N/A"
        assert items["Avg Inference Time"] == "N/A"


class TestMetricGroups:
    """Tests for the chart group definitions."""

    def test_expected_groups(self):
        """All six chart groups are defined."""
        assert set(METRIC_GROUPS) == {"acceleration", "gyroscope", "position", "velocity", "control", "servos"}

    def test_one_color_per_metric(self):
        """Each metric line has its own colour."""
        for group in METRIC_GROUPS.values():
            assert len(group.colors) == len(group.metrics)


class TestFigures:
    """Tests for figure builders."""

    @pytest.mark.parametrize("name", list(METRIC_GROUPS))
    def test_one_line_per_metric(self, frame, name):
        """Each metric of the group is drawn as one labelled line."""
        group = METRIC_GROUPS[name]
        fig = make_metric_figure(frame, group)
        ax = fig.axes[0]
        assert [line.get_label() for line in ax.get_lines()] == list(group.metrics)
        assert ax.get_title() == group.title

    def test_missing_columns_are_skipped(self, frame):
        """Metrics absent from the frame are not drawn."""
        fig = make_metric_figure(frame[["timestamp", "pos_z"]], METRIC_GROUPS["position"])
        assert [line.get_label() for line in fig.axes[0].get_lines()] == ["pos_z"]

    def test_empty_frame(self):
        """An empty frame still yields a figure."""
        fig = make_metric_figure(pd.DataFrame(), METRIC_GROUPS["velocity"])
        assert len(fig.axes[0].get_lines()) == 0

    def test_performance_figure(self, frame):
        """Bars for inference time and a 0..1 line for system_active."""
        fig = make_performance_figure(frame)
        ax_inf, ax_active = fig.axes
        assert len(ax_inf.patches) == len(frame)
        assert [line.get_label() for line in ax_active.get_lines()] == ["System Active"]
        assert ax_active.get_ylim() == (0.0, 1.0)

    def test_performance_figure_empty(self):
        """An empty frame still yields both axes."""
        fig = make_performance_figure(pd.DataFrame())
        assert len(fig.axes) == 2
