"""
Application settings.

Responsibilities:
- Load configuration from environment variables and .env files.
- Provide defaults for optional settings.
- Expose typed settings for the service layer and tools.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from backend_touristsafety.config.env import (
    get_history_window_size,
    get_location_anomaly_weight,
    get_log_level,
    get_zone_catalog_path,
)


@dataclass(frozen=True)
class Settings:
    """Resolved configuration for one process."""

    history_window_size: int
    """Maximum positions kept per tourist for anomaly detection."""
    zone_catalog_path: Path | None
    """JSON zone catalog; None means the built-in reference zones."""
    location_anomaly_weight: float
    """Penalty per point of anomaly risk applied to the location subscore."""
    log_level: str


def get_settings() -> Settings:
    """
    Return the current application settings.

    Reads the environment on every call so tests can monkeypatch variables.
    """
    return Settings(
        history_window_size=get_history_window_size(),
        zone_catalog_path=get_zone_catalog_path(),
        location_anomaly_weight=get_location_anomaly_weight(),
        log_level=get_log_level(),
    )
