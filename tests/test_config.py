"""
Tests for environment-driven settings.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from backend_touristsafety.config.env import DEFAULT_HISTORY_WINDOW_SIZE, MIN_HISTORY_WINDOW_SIZE
from backend_touristsafety.config.settings import get_settings

_VARS = ("HISTORY_WINDOW_SIZE", "ZONE_CATALOG_PATH", "LOCATION_ANOMALY_WEIGHT", "LOG_LEVEL")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = get_settings()
    assert settings.history_window_size == DEFAULT_HISTORY_WINDOW_SIZE
    assert settings.zone_catalog_path is None
    assert settings.location_anomaly_weight == 0.0
    assert settings.log_level == "INFO"


@pytest.mark.parametrize("raw, expected", [("25", 25), ("2", MIN_HISTORY_WINDOW_SIZE), ("abc", DEFAULT_HISTORY_WINDOW_SIZE), ("", DEFAULT_HISTORY_WINDOW_SIZE)])
def test_history_window_size(monkeypatch, raw, expected):
    monkeypatch.setenv("HISTORY_WINDOW_SIZE", raw)
    assert get_settings().history_window_size == expected


@pytest.mark.parametrize("raw, expected", [("0.3", 0.3), ("5", 1.0), ("-1", 0.0), ("x", 0.0)])
def test_location_anomaly_weight(monkeypatch, raw, expected):
    monkeypatch.setenv("LOCATION_ANOMALY_WEIGHT", raw)
    assert get_settings().location_anomaly_weight == expected


def test_zone_catalog_path(monkeypatch):
    monkeypatch.setenv("ZONE_CATALOG_PATH", " /tmp/zones.json ")
    assert get_settings().zone_catalog_path == Path("/tmp/zones.json")


def test_log_level_normalized(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert get_settings().log_level == "DEBUG"
