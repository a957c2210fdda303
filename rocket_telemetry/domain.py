from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Union


# -----------------------------
# Analysis window (same units as the "timestamp" column)
# -----------------------------
START_TIME = 1009591.94
END_TIME = 1020308.51


# A parsed CSV cell: number, the original (trimmed) text, or missing when the row was short
FieldValue = Union[float, str, None]


TELEMETRY_FIELDS: tuple[str, ...] = (
    "timestamp",
    "system_active",
    "accel_x", "accel_y", "accel_z",
    "gyro_x", "gyro_y", "gyro_z",
    "curr_alpha", "curr_beta",
    "vel_x", "vel_y", "vel_z",
    "pos_x", "pos_y", "pos_z",
    "output_alpha", "output_beta",
    "servo1_pos", "servo2_pos",
    "inference_time_us",
)


def is_number(value: object) -> bool:
    # bool is an int subclass; a flag column is still parsed as float, so never expect True/False here
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)     # immutable: start/end never change after construction
class TimeWindow:
    start: float = START_TIME
    end: float = END_TIME

    def contains(self, value: FieldValue) -> bool:
        """Inclusive range test. Text and missing values are never inside the window."""
        if not is_number(value):
            return False
        return self.start <= value <= self.end


DEFAULT_WINDOW = TimeWindow(START_TIME, END_TIME)


@dataclass(frozen=True)
class TelemetryRecord:
    """
    One timestamped sample, keyed by the CSV header names of its file.

    Values are kept exactly as coerced by the parser, so a record can hold
    extra columns that are not in TELEMETRY_FIELDS, and short rows keep the
    missing trailing headers with a None value.
    """
    values: Mapping[str, FieldValue] = field(default_factory=dict)

    def __post_init__(self):
        # freeze the mapping too, not just the attribute
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def __getitem__(self, name: str) -> FieldValue:
        return self.values[name]

    def __contains__(self, name: object) -> bool:
        return name in self.values

    def __len__(self) -> int:
        return len(self.values)

    def keys(self):
        return self.values.keys()

    def get(self, name: str, default: FieldValue = None) -> FieldValue:
        return self.values.get(name, default)

    def number(self, name: str) -> Optional[float]:
        """Value of `name` if it is numeric, else None."""
        value = self.values.get(name)
        return float(value) if is_number(value) else None

    @property
    def timestamp(self) -> Optional[float]:
        return self.number("timestamp")

    def unknown_fields(self) -> list[str]:
        return [k for k in self.values if k not in TELEMETRY_FIELDS]

    def as_dict(self) -> dict[str, FieldValue]:
        return dict(self.values)


@dataclass(frozen=True)
class InferenceStats:
    min: float
    max: float
    avg: float
    median: float   # upper-middle element for even lengths, see stats.compute_inference_stats


@dataclass(frozen=True)
class SummaryStatistics:
    flight_time: Optional[float]    # last timestamp - first timestamp (seconds)
    max_altitude: Optional[float]   # max pos_z (m)
    max_velocity: Optional[float]   # max |vel| (m/s)
    max_acceleration: Optional[float]   # max |accel| (m/s^2)
    inference_stats: Optional[InferenceStats]   # inference_time_us distribution (µs)

    def to_metrics(self) -> dict[str, float]:
        """Flatten into a JSON-friendly dict, skipping aggregates that had no numeric input."""
        metrics: dict[str, float] = {}
        for key, value in (
            ("flight_time_s", self.flight_time),
            ("max_altitude_m", self.max_altitude),
            ("max_velocity_mps", self.max_velocity),
            ("max_acceleration_mps2", self.max_acceleration),
        ):
            if value is not None:
                metrics[key] = float(value)

        if self.inference_stats is not None:
            metrics["inference_min_us"] = self.inference_stats.min
            metrics["inference_max_us"] = self.inference_stats.max
            metrics["inference_avg_us"] = self.inference_stats.avg
            metrics["inference_median_us"] = self.inference_stats.median
        return metrics
