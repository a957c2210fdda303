"""Summary statistics over a filtered telemetry sequence."""

from __future__ import annotations
from typing import Iterable, Optional, Sequence

import numpy as np

from .domain import InferenceStats, SummaryStatistics, TelemetryRecord


VELOCITY_AXES = ("vel_x", "vel_y", "vel_z")
ACCEL_AXES = ("accel_x", "accel_y", "accel_z")


def _numeric(records: Iterable[TelemetryRecord], name: str) -> np.ndarray:
    values = [r.number(name) for r in records]
    return np.array([v for v in values if v is not None], dtype=float)


def _max_or_none(x: np.ndarray) -> Optional[float]:
    return float(np.max(x)) if len(x) > 0 else None


def vector_magnitudes(records: Iterable[TelemetryRecord], axes: Sequence[str]) -> np.ndarray:
    """
    Euclidean norm across `axes` for every record that has all of them numeric.

    Records with any text/missing axis are skipped rather than counted as zero.
    """
    rows = []
    for r in records:
        components = [r.number(a) for a in axes]
        if all(c is not None for c in components):
            rows.append(components)
    if not rows:
        return np.empty(0, dtype=float)
    return np.sqrt(np.sum(np.square(np.array(rows, dtype=float)), axis=1))


def compute_inference_stats(values: Sequence[float]) -> Optional[InferenceStats]:
    """
    min / max / mean / median of inference times.

    The median is the element at index n // 2 of the sorted values, which is
    the upper-middle element for even n: [1, 2, 3, 4] -> 3, not 2.5.

    Returns None for no values.
    """
    if len(values) == 0:
        return None
    ordered = np.sort(np.asarray(values, dtype=float))
    return InferenceStats(
        min=float(ordered[0]),
        max=float(ordered[-1]),
        avg=float(np.mean(ordered)),
        median=float(ordered[len(ordered) // 2]),
    )


def compute_statistics(records: Sequence[TelemetryRecord]) -> Optional[SummaryStatistics]:
    """
    Reduce a record sequence to SummaryStatistics.

    Records are assumed to be in ascending timestamp order (they are not sorted
    here); flight time is last minus first. Non-numeric cells are ignored, and
    an aggregate with no numeric input is None instead of NaN.

    Returns:
        None when `records` is empty, otherwise the statistics
    """
    if len(records) == 0:
        return None

    first_t = records[0].timestamp
    last_t = records[-1].timestamp
    flight_time = last_t - first_t if first_t is not None and last_t is not None else None

    return SummaryStatistics(
        flight_time=flight_time,
        max_altitude=_max_or_none(_numeric(records, "pos_z")),
        max_velocity=_max_or_none(vector_magnitudes(records, VELOCITY_AXES)),
        max_acceleration=_max_or_none(vector_magnitudes(records, ACCEL_AXES)),
        inference_stats=compute_inference_stats(_numeric(records, "inference_time_us")),
    )
