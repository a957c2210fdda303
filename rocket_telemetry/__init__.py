"""
Rocket Telemetry - Flight Log Dashboard

Serves a rocket flight CSV log over HTTP and turns it into typed telemetry
records, filtered to the analysis time window, with summary statistics
(flight time, max altitude, max velocity/acceleration, inference timing)
and charts for a Streamlit dashboard.
"""

from .domain import (
    DEFAULT_WINDOW,
    END_TIME,
    START_TIME,
    TELEMETRY_FIELDS,
    InferenceStats,
    SummaryStatistics,
    TelemetryRecord,
    TimeWindow,
)
from .loader import TransportError, load_raw_text
from .parse import coerce_value, parse_records, filter_window, parse_and_filter, records_to_frame
from .stats import compute_statistics, compute_inference_stats, vector_magnitudes
from .analyze import analyze

__all__ = [
    # Domain models
    "DEFAULT_WINDOW",
    "END_TIME",
    "START_TIME",
    "TELEMETRY_FIELDS",
    "InferenceStats",
    "SummaryStatistics",
    "TelemetryRecord",
    "TimeWindow",
    # Loading
    "TransportError",
    "load_raw_text",
    # Parsing
    "coerce_value",
    "parse_records",
    "filter_window",
    "parse_and_filter",
    "records_to_frame",
    # Statistics
    "compute_statistics",
    "compute_inference_stats",
    "vector_magnitudes",
    # Pipeline
    "analyze",
]

__version__ = "0.1.0"
