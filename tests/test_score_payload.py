"""
Tests for the score_payload command-line tool.
"""

from __future__ import annotations

import json

import pytest

from backend_touristsafety.tools.score_payload import main

NOW = "2026-03-01T12:00:00+00:00"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("ZONE_CATALOG_PATH", raising=False)
    monkeypatch.delenv("LOCATION_ANOMALY_WEIGHT", raising=False)


def _write(tmp_path, payload, name="payload.json"):
    path = tmp_path / name
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


def _report(lat, minutes, accuracy=5):
    return {
        "tourist_id": "T1",
        "location": {"latitude": lat, "longitude": 77.2090, "accuracy": accuracy, "timestamp": f"2026-03-01T12:{minutes:02d}:00Z"},
        "device_info": {"device_id": "dev-1", "platform": "ios"},
    }


def test_score_mode(tmp_path, capsys):
    payload = {
        "tourist_id": "T1",
        "location_data": {"latitude": 28.6139, "longitude": 77.2090, "accuracy": 5, "timestamp": NOW},
    }
    assert main(["score", _write(tmp_path, payload), "--now", NOW]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["composite_score"] == 86
    assert out["risk_level"] == "low"
    assert out["insights"][0] == "Your safety score is 86/100 (low risk)"


def test_location_mode_list_builds_history(tmp_path, capsys):
    reports = [_report(28.6139, 0), _report(28.6139, 5)]
    assert main(["location", _write(tmp_path, reports), "--now", NOW]) == 0
    out = json.loads(capsys.readouterr().out)
    assert len(out) == 2
    assert all(r["in_safe_zone"] for r in out)
    assert out[1]["anomaly_detection"]["movement_pattern"] == "normal"


def test_location_mode_single_object(tmp_path, capsys):
    assert main(["location", _write(tmp_path, _report(28.6139, 0)), "--now", NOW]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["tourist_id"] == "T1"


def test_custom_zone_catalog(tmp_path, capsys):
    zones = _write(tmp_path, [], name="zones.json")
    assert main(["location", _write(tmp_path, _report(28.6139, 0)), "--zones", zones, "--now", NOW]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["geofence_status"]["inside_zones"] == []
    assert out["in_safe_zone"] is False


def test_validation_error_exit_code(tmp_path, capsys):
    assert main(["score", _write(tmp_path, {"tourist_id": "T1", "behavior_data": {"route_adherence": 101}})]) == 1
    out = json.loads(capsys.readouterr().out)
    assert out["error"] == "validation_error"
    assert out["details"][0]["field"] == "behavior_data.route_adherence"


def test_unreadable_payload(tmp_path):
    assert main(["score", str(tmp_path / "missing.json")]) == 2


def test_invalid_now(tmp_path):
    assert main(["score", _write(tmp_path, {"tourist_id": "T1"}), "--now", "yesterday"]) == 2


def test_bad_zone_catalog(tmp_path):
    zones = tmp_path / "zones.json"
    zones.write_text("{", encoding="utf-8")
    assert main(["score", _write(tmp_path, {"tourist_id": "T1"}), "--zones", str(zones)]) == 2
