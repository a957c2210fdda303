"""Fetch raw telemetry CSV text from a file path or from the /api/telemetry endpoint."""

from __future__ import annotations
from pathlib import Path
from typing import Union
import logging

import httpx

from .config import DEFAULT_TIMEOUT_S

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Failed to load telemetry data"

Source = Union[str, Path]


class TransportError(Exception):
    """Raised when telemetry text could not be read. Always carries LOAD_ERROR_MESSAGE."""

    def __init__(self, message: str = LOAD_ERROR_MESSAGE):
        super().__init__(message)


def is_url(source: Source) -> bool:
    return isinstance(source, str) and source.startswith(("http://", "https://"))


def _read_file(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, ValueError) as e:   # ValueError: undecodable bytes or a NUL in the path
        logger.warning(f"Could not read telemetry file {path}: {e}")
        raise TransportError() from e


def _fetch_url(url: str, timeout_s: float, client: httpx.Client | None) -> str:
    try:
        if client is None:
            response = httpx.get(url, timeout=timeout_s)
        else:
            response = client.get(url, timeout=timeout_s)
        response.raise_for_status()
        payload = response.json()
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning(f"HTTP error fetching telemetry from {url}: {e}")
        raise TransportError() from e
    except ValueError as e:   # body is not JSON
        logger.warning(f"Malformed telemetry response from {url}: {e}")
        raise TransportError() from e

    data = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(data, str):
        logger.warning(f"Telemetry response from {url} has no 'data' text")
        raise TransportError()
    return data


def load_raw_text(
    source: Source,
    timeout_s: float = DEFAULT_TIMEOUT_S,
    client: httpx.Client | None = None,
) -> str:
    """
    Return the full CSV text behind `source`.

    Args:
        source: filesystem path, or an http(s) URL answering {"data": "<csv>"}
        timeout_s: HTTP timeout; unused for files
        client: optional httpx client to send the request through

    Raises:
        TransportError: on any read failure (single attempt, no partial data)
    """
    if is_url(source):
        return _fetch_url(str(source), timeout_s, client)
    return _read_file(Path(source))
