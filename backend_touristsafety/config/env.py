"""
Environment variable loading for the tourist safety engine.

- LOG_LEVEL / LOG_FORMAT: read by safety_logging when structlog is configured.
- HISTORY_WINDOW_SIZE: positions kept per tourist (default 10, minimum 4).
- ZONE_CATALOG_PATH: JSON file with zone definitions (default: built-in zones).
- LOCATION_ANOMALY_WEIGHT: movement anomaly penalty on the location subscore
  (default 0.0).
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

# Project root: config is backend_touristsafety/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_BACKEND_DIR = _CONFIG_DIR.parent
_ROOT = _BACKEND_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_HISTORY_WINDOW_SIZE = 10
# Erratic-movement detection needs three prior samples plus the current one
MIN_HISTORY_WINDOW_SIZE = 4
DEFAULT_LOCATION_ANOMALY_WEIGHT = 0.0


def load_safety_env() -> None:
    """Load .env from project root. Safe to call multiple times."""
    from dotenv import load_dotenv

    load_dotenv(_ENV_PATH)


def get_history_window_size() -> int:
    """Return HISTORY_WINDOW_SIZE, never below MIN_HISTORY_WINDOW_SIZE."""
    load_safety_env()
    raw = (os.getenv("HISTORY_WINDOW_SIZE") or "").strip()
    try:
        size = int(raw) if raw else DEFAULT_HISTORY_WINDOW_SIZE
    except ValueError:
        size = DEFAULT_HISTORY_WINDOW_SIZE
    return max(MIN_HISTORY_WINDOW_SIZE, size)


def get_zone_catalog_path() -> Path | None:
    """Return ZONE_CATALOG_PATH as a Path, or None to use built-in zones."""
    load_safety_env()
    raw = (os.getenv("ZONE_CATALOG_PATH") or "").strip()
    return Path(raw) if raw else None


def get_location_anomaly_weight() -> float:
    """Return LOCATION_ANOMALY_WEIGHT clamped to [0, 1]."""
    load_safety_env()
    raw = (os.getenv("LOCATION_ANOMALY_WEIGHT") or "").strip()
    try:
        weight = float(raw) if raw else DEFAULT_LOCATION_ANOMALY_WEIGHT
    except ValueError:
        weight = DEFAULT_LOCATION_ANOMALY_WEIGHT
    return max(0.0, min(1.0, weight))


def get_log_level() -> str:
    load_safety_env()
    return (os.getenv("LOG_LEVEL") or "INFO").strip().upper()


def get_log_format() -> str:
    """LOG_FORMAT: json (default) or console."""
    load_safety_env()
    return (os.getenv("LOG_FORMAT") or "json").strip().lower()
