from __future__ import annotations
from typing import Iterable, Sequence
import logging
import re

import numpy as np
import pandas as pd

from .domain import DEFAULT_WINDOW, FieldValue, TelemetryRecord, TimeWindow

logger = logging.getLogger(__name__)

# -----------------------------
# Helpers
# -----------------------------

# Plain decimal numbers only: "12", "-0.5", ".5", "3.", "1e-3", "+Infinity".
# "NaN", hex, and underscore-grouped digits stay text.
_NUMBER_RE = re.compile(r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|Infinity)")


def coerce_value(text: str) -> FieldValue:
    """
    Turn one trimmed CSV cell into a number when it is one.

    The empty string is NOT a number: it is returned unchanged as "",
    so an empty cell never shows up as a 0.0 reading in the charts or stats.
    """
    if _NUMBER_RE.fullmatch(text):
        return float(text.replace("Infinity", "inf"))
    return text


def _split_line(line: str) -> list[str]:
    # no quoting support: an embedded comma shifts every following column
    return [v.strip() for v in line.split(",")]


def _build_record(headers: Sequence[str], values: Sequence[str]) -> TelemetryRecord:
    fields: dict[str, FieldValue] = {}
    for i, header in enumerate(headers):
        # later duplicate headers overwrite earlier ones; short rows leave None
        fields[header] = coerce_value(values[i]) if i < len(values) else None
    return TelemetryRecord(fields)


# -----------------------------
# Core pipeline
# -----------------------------
def parse_records(raw_text: str) -> list[TelemetryRecord]:
    """
    Parse CSV text into records, without any time filtering.

    The first line is the header. Blank lines (including the trailing newline
    artifact) are skipped. Values beyond the header count are dropped.
    Never raises on malformed rows: each cell is coerced on its own.

    Returns an empty list for empty or header-only input.
    """
    lines = raw_text.split("\n")
    if not lines or lines[0].strip() == "":
        return []

    headers = _split_line(lines[0])
    records = [
        _build_record(headers, _split_line(line))
        for line in lines[1:]
        if line.strip() != ""
    ]

    if records:
        unknown = records[0].unknown_fields()
        if unknown:
            logger.debug(f"Keeping unrecognised columns as extra values: {unknown}")
    return records


def filter_window(records: Iterable[TelemetryRecord], window: TimeWindow = DEFAULT_WINDOW) -> list[TelemetryRecord]:
    """Keep records whose numeric timestamp lies in the inclusive window, in input order."""
    return [r for r in records if window.contains(r.get("timestamp"))]


def parse_and_filter(raw_text: str, window: TimeWindow = DEFAULT_WINDOW) -> list[TelemetryRecord]:
    """
    CSV text -> ordered records inside `window`.

    Rows with a missing or non-numeric timestamp are dropped along with rows
    outside the window.
    """
    records = parse_records(raw_text)
    kept = filter_window(records, window)
    logger.debug(f"Parsed {len(records)} rows, {len(kept)} inside [{window.start}, {window.end}]")
    return kept


def records_to_frame(records: Sequence[TelemetryRecord]) -> pd.DataFrame:
    """
    Tabulate records for charting: one column per header in first-seen order.

    Text cells (including "") and missing cells become NaN, so plots show gaps
    instead of failing on mixed types.
    """
    if len(records) == 0:
        return pd.DataFrame()

    df = pd.DataFrame([r.as_dict() for r in records])
    for col in df.columns:
        df[col] = pd.to_numeric(df[col], errors="coerce").astype(float)
    df = df.replace([np.inf, -np.inf], np.nan)
    return df
