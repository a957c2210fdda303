from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional
import matplotlib.pyplot as plt
from matplotlib.ticker import FuncFormatter
import numpy as np
import pandas as pd

from .domain import SummaryStatistics, TimeWindow


@dataclass(frozen=True)
class MetricGroup:
    title: str
    metrics: tuple[str, ...]
    colors: tuple[str, ...]


METRIC_GROUPS: Dict[str, MetricGroup] = {
    "acceleration": MetricGroup(
        title="Acceleration",
        metrics=("accel_x", "accel_y", "accel_z"),
        colors=("#8884d8", "#82ca9d", "#ffc658"),
    ),
    "gyroscope": MetricGroup(
        title="Angular Velocity",
        metrics=("gyro_x", "gyro_y", "gyro_z"),
        colors=("#ff7300", "#00c49f", "#0088fe"),
    ),
    "position": MetricGroup(
        title="3D Position",
        metrics=("pos_x", "pos_y", "pos_z"),
        colors=("#413ea0", "#ff7300", "#00c49f"),
    ),
    "velocity": MetricGroup(
        title="Velocity",
        metrics=("vel_x", "vel_y", "vel_z"),
        colors=("#8884d8", "#82ca9d", "#ffc658"),
    ),
    "control": MetricGroup(
        title="Control Parameters",
        metrics=("curr_alpha", "curr_beta", "output_alpha", "output_beta"),
        colors=("#8884d8", "#82ca9d", "#ff7300", "#00c49f"),
    ),
    "servos": MetricGroup(
        title="Servo Positions",
        metrics=("servo1_pos", "servo2_pos"),
        colors=("#8884d8", "#82ca9d"),
    ),
}


def format_time(t: float) -> str:
    return f"T+{t:.2f}s"


def stats_title(window: TimeWindow) -> str:
    return f"Flight Statistics ({format_time(window.start)} to {format_time(window.end)})"


def _fmt(value: Optional[float], unit: str) -> str:
    return f"{value:.2f}{unit}" if value is not None else "N/A"


def stats_card_items(stats: Optional[SummaryStatistics]) -> list[tuple[str, str]]:
    """(label, formatted value) pairs for the statistics card; empty when there are no stats."""
    if stats is None:
        return []
    inf = stats.inference_stats
    return [
        ("Flight Time", _fmt(stats.flight_time, "s")),
        ("Max Altitude", _fmt(stats.max_altitude, "m")),
        ("Max Velocity", _fmt(stats.max_velocity, "m/s")),
        ("Max Acceleration", _fmt(stats.max_acceleration, "m/s²")),
        ("Avg Inference Time", _fmt(inf.avg if inf else None, "μs")),
        ("Max Inference Time", _fmt(inf.max if inf else None, "μs")),
    ]


def _time_axis(ax, t: np.ndarray) -> None:
    ax.set_xlabel("Time (s)")
    ax.xaxis.set_major_formatter(FuncFormatter(lambda x, _pos: format_time(x)))
    finite = t[np.isfinite(t)]
    if len(finite) > 0 and finite.min() < finite.max():
        ax.set_xlim(finite.min(), finite.max())
    ax.grid(True, alpha=0.2, linestyle="--")


def make_metric_figure(frame: pd.DataFrame, group: MetricGroup):
    """One line per metric of `group` against timestamp. Missing columns are skipped."""
    fig, ax = plt.subplots(figsize=(8, 4))
    t = frame["timestamp"].to_numpy(float) if "timestamp" in frame.columns else np.empty(0)

    for metric, color in zip(group.metrics, group.colors):
        if metric not in frame.columns:
            continue
        ax.plot(t, frame[metric].to_numpy(float), color=color, linewidth=1.5, label=metric)

    ax.set_title(group.title)
    _time_axis(ax, t)
    if ax.get_lines():
        ax.legend(loc="upper right")

    fig.tight_layout()
    return fig


def make_performance_figure(frame: pd.DataFrame):
    """Inference time as bars (left axis) and system_active as a line on a 0..1 right axis."""
    fig, ax_inf = plt.subplots(figsize=(10, 4))
    ax_active = ax_inf.twinx()
    t = frame["timestamp"].to_numpy(float) if "timestamp" in frame.columns else np.empty(0)

    if "inference_time_us" in frame.columns and len(t) > 0:
        # bar width from median sample spacing so bars do not overlap
        dts = np.diff(t)
        dts = dts[dts > 0]
        width = float(np.median(dts)) * 0.8 if len(dts) > 0 else 0.8
        ax_inf.bar(t, frame["inference_time_us"].to_numpy(float), width=width, color="#8884d8", label="Inference Time")

    if "system_active" in frame.columns:
        ax_active.plot(t, frame["system_active"].to_numpy(float), color="#82ca9d", linewidth=1.5, label="System Active")

    ax_inf.set_ylabel("Inference Time (μs)")
    ax_active.set_ylim(0, 1)
    _time_axis(ax_inf, t)

    handles, labels = [], []
    for ax in (ax_inf, ax_active):
        h, lab = ax.get_legend_handles_labels()
        handles += h
        labels += lab
    if handles:
        ax_inf.legend(handles, labels, loc="upper right")

    ax_inf.set_title("System Performance")
    fig.tight_layout()
    return fig
