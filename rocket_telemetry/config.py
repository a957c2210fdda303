from __future__ import annotations
from pathlib import Path
from typing import Optional
import logging

from pydantic import PositiveFloat, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent

# The flight log served by GET /api/telemetry; repository-relative like the dashboard expects
DEFAULT_CSV_PATH = BASE_DIR.parent / "data" / "smallestbirdmk2.csv"
DEFAULT_TIMEOUT_S = 10.0

ENV_PREFIX = "ROCKET_TELEMETRY_"


def setup_logging(log_level: str | int = "INFO", log_file: Path | None = None) -> None:
    """Configure the root logger once: console always, file only when asked for."""
    level = (
        log_level
        if isinstance(log_level, int)
        else getattr(logging, str(log_level).upper(), logging.INFO)
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )

    log_path = Path(log_file).resolve() if log_file else None
    has_file_handler = False
    has_stream_handler = False

    for handler in root_logger.handlers:
        if isinstance(handler, logging.FileHandler):
            existing_path = Path(getattr(handler, "baseFilename", "")).resolve()
            if log_path is not None and existing_path == log_path:
                has_file_handler = True
        elif isinstance(handler, logging.StreamHandler):
            has_stream_handler = True

    if log_path is not None and not has_file_handler:
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    if not has_stream_handler:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        root_logger.addHandler(stream_handler)


class DashboardConfig(BaseSettings):
    """Runtime settings, read from ROCKET_TELEMETRY_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_ignore_empty=True,
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    csv_path: Path = DEFAULT_CSV_PATH   # file behind GET /api/telemetry
    api_url: Optional[str] = None   # when set, the dashboard fetches through the endpoint instead of reading csv_path
    timeout_s: PositiveFloat = DEFAULT_TIMEOUT_S
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    @field_validator("api_url", mode="before")
    @classmethod
    def _blank_url_is_unset(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, v):
        return str(v).strip().upper() or "INFO"

    @property
    def source(self) -> str:
        """What the dashboard loads from: the endpoint URL if configured, else the file."""
        return self.api_url if self.api_url else str(self.csv_path)


def load_config() -> DashboardConfig:
    """
    Build the config from the environment.

    Raises pydantic.ValidationError (a ValueError) for a timeout that is not a positive number.
    """
    return DashboardConfig()
