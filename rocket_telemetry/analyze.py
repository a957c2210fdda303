"""Pipeline orchestration: load -> parse/filter -> statistics."""

from __future__ import annotations
from typing import Optional

from .config import DEFAULT_TIMEOUT_S
from .domain import DEFAULT_WINDOW, SummaryStatistics, TelemetryRecord, TimeWindow
from .loader import Source, TransportError, load_raw_text
from .parse import parse_and_filter
from .stats import compute_statistics


# Type alias for analysis result
AnalysisResult = tuple[list[TelemetryRecord], Optional[SummaryStatistics]]


def analyze(
    source: Source,
    window: TimeWindow = DEFAULT_WINDOW,
    timeout_s: float = DEFAULT_TIMEOUT_S,
) -> tuple[Optional[AnalysisResult], Optional[str]]:
    """
    Run the complete telemetry pipeline.

    1. Load raw CSV text (file path or /api/telemetry URL)
    2. Parse and keep rows inside the time window
    3. Compute summary statistics

    Args:
        source: CSV path or endpoint URL
        window: Inclusive timestamp window
        timeout_s: HTTP timeout when `source` is a URL

    Returns:
        Tuple of (result, error):
        - On success: ((records, statistics), None); statistics is None when no row survives
        - On load failure: (None, error_message)
    """
    try:
        raw_text = load_raw_text(source, timeout_s=timeout_s)
    except TransportError as e:
        return None, str(e)

    records = parse_and_filter(raw_text, window)
    return (records, compute_statistics(records)), None
