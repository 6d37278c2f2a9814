"""
Tests for the validation boundary: field-level errors, enum and range checks,
timestamp normalization and conversion into engine dataclasses.
"""

from __future__ import annotations

from datetime import timezone

import pytest

from backend_touristsafety.analysis_engine.models import Level, TimeOfDay
from backend_touristsafety.core.exceptions import ValidationError
from backend_touristsafety.tracking.models import Platform, UpdateFrequency
from backend_touristsafety.validation import parse_location_update, parse_safety_score_request


def _location_payload(**overrides):
    payload = {
        "tourist_id": "T1",
        "location": {
            "latitude": 28.6139,
            "longitude": 77.2090,
            "accuracy": 5,
            "timestamp": "2026-03-01T12:00:00+00:00",
        },
        "device_info": {"device_id": "dev-1", "platform": "android", "battery_level": 80},
    }
    payload.update(overrides)
    return payload


def test_valid_location_update():
    update = parse_location_update(_location_payload())
    assert update.tourist_id == "T1"
    assert update.position.accuracy == 5
    assert update.position.timestamp.tzinfo is not None
    assert update.device_info.platform is Platform.ANDROID
    assert update.tracking_context is None
    assert update.behavior is None


def test_naive_timestamp_is_utc():
    payload = _location_payload()
    payload["location"]["timestamp"] = "2026-03-01T12:00:00"
    update = parse_location_update(payload)
    assert update.position.timestamp.tzinfo == timezone.utc
    assert update.position.timestamp.hour == 12


def test_offset_timestamp_converted_to_utc():
    payload = _location_payload()
    payload["location"]["timestamp"] = "2026-03-01T17:30:00+05:30"
    update = parse_location_update(payload)
    assert update.position.timestamp.hour == 12
    assert update.position.timestamp.utcoffset().total_seconds() == 0


@pytest.mark.parametrize("lat", [90.5, -91])
def test_latitude_out_of_range(lat):
    payload = _location_payload()
    payload["location"]["latitude"] = lat
    with pytest.raises(ValidationError) as exc_info:
        parse_location_update(payload)
    assert exc_info.value.fields == ["location.latitude"]


def test_reports_every_bad_field():
    payload = _location_payload()
    payload["location"]["longitude"] = 181
    payload["device_info"]["platform"] = "symbian"
    with pytest.raises(ValidationError) as exc_info:
        parse_location_update(payload)
    assert set(exc_info.value.fields) == {"location.longitude", "device_info.platform"}


def test_missing_tourist_id():
    payload = _location_payload()
    del payload["tourist_id"]
    with pytest.raises(ValidationError) as exc_info:
        parse_location_update(payload)
    assert "tourist_id" in exc_info.value.fields


def test_blank_tourist_id_rejected():
    with pytest.raises(ValidationError) as exc_info:
        parse_location_update(_location_payload(tourist_id="   "))
    assert exc_info.value.fields == ["tourist_id"]


def test_percentage_over_hundred_rejected():
    with pytest.raises(ValidationError) as exc_info:
        parse_safety_score_request({"tourist_id": "T1", "behavior_data": {"check_in_frequency": 120}})
    assert exc_info.value.fields == ["behavior_data.check_in_frequency"]


def test_unknown_enum_rejected():
    with pytest.raises(ValidationError) as exc_info:
        parse_safety_score_request({"tourist_id": "T1", "risk_factors": {"weather_conditions": "hail"}})
    assert exc_info.value.fields == ["risk_factors.weather_conditions"]


def test_non_object_payload():
    with pytest.raises(ValidationError) as exc_info:
        parse_location_update(["not", "an", "object"])
    assert exc_info.value.fields == ["__root__"]
    assert exc_info.value.message == "Invalid location data"


def test_error_to_dict():
    with pytest.raises(ValidationError) as exc_info:
        parse_safety_score_request({})
    out = exc_info.value.to_dict()
    assert out["error"] == "validation_error"
    assert out["message"] == "Invalid safety score data"
    assert out["details"][0]["field"] == "tourist_id"


def test_safety_score_request_sections():
    request = parse_safety_score_request(
        {
            "tourist_id": "T1",
            "location_data": {"latitude": 28.6, "longitude": 77.2, "timestamp": "2026-03-01T12:00:00Z"},
            "risk_factors": {"time_of_day": "night", "area_crime_rate": "very_high", "group_size": 3},
            "incident_history": {"minor_incidents": 1},
        }
    )
    assert request.location.latitude == 28.6
    assert request.behavior is None
    assert request.risk_factors.time_of_day is TimeOfDay.NIGHT
    assert request.risk_factors.area_crime_rate is Level.VERY_HIGH
    assert request.risk_factors.local_guide_present is None
    assert request.incident_history.minor_incidents == 1
    assert request.incident_history.major_incidents == 0
    assert request.incident_history.days_since_last_incident is None


def test_tracking_context_defaults():
    update = parse_location_update(_location_payload(tracking_context={"activity_type": "walking"}))
    assert update.tracking_context.update_frequency is UpdateFrequency.MEDIUM
    assert update.tracking_context.battery_optimization is True
