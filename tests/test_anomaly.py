"""
Tests for movement anomaly detection: jump, inactivity, erratic variance,
rule ordering and insufficient-history handling.
"""

from __future__ import annotations

from backend_touristsafety.analysis_engine.anomaly import AnomalyConfig, detect_movement_anomalies
from backend_touristsafety.analysis_engine.models import AnomalySeverity, AnomalyType, MovementPattern
from conftest import sample


def test_no_history_is_normal():
    result = detect_movement_anomalies(sample(), [])
    assert result.findings == []
    assert result.anomaly_risk == 0
    assert result.movement_pattern is MovementPattern.NORMAL
    assert not result.is_anomalous


def test_sudden_jump_within_four_minutes():
    """6 km in 4 minutes -> sudden_location_jump, +30, anomalous."""
    previous = sample(0, minutes=0)
    current = sample(6000, minutes=4)
    result = detect_movement_anomalies(current, [previous])
    assert [f.type for f in result.findings] == [AnomalyType.SUDDEN_LOCATION_JUMP]
    assert result.anomaly_risk == 30
    assert result.movement_pattern is MovementPattern.ANOMALOUS
    finding = result.findings[0]
    assert finding.severity is AnomalySeverity.MEDIUM
    assert finding.details["distance_moved_m"] == 6000
    assert finding.details["time_elapsed_sec"] == 240


def test_same_displacement_over_ten_minutes_is_not_a_jump():
    result = detect_movement_anomalies(sample(6000, minutes=10), [sample(0, minutes=0)])
    assert result.findings == []
    assert result.anomaly_risk == 0
    assert result.movement_pattern is MovementPattern.NORMAL


def test_jump_requires_more_than_5km():
    result = detect_movement_anomalies(sample(4900, minutes=1), [sample(0)])
    assert result.findings == []


def test_prolonged_inactivity():
    """Under 50 m in more than 2 hours -> stationary, +15."""
    result = detect_movement_anomalies(sample(10, minutes=180), [sample(0, minutes=0)])
    assert [f.type for f in result.findings] == [AnomalyType.PROLONGED_INACTIVITY]
    assert result.anomaly_risk == 15
    assert result.movement_pattern is MovementPattern.STATIONARY
    assert result.findings[0].severity is AnomalySeverity.LOW
    assert result.findings[0].details["duration_hours"] == 3


def test_exactly_two_hours_is_not_inactivity():
    result = detect_movement_anomalies(sample(0, minutes=120), [sample(0, minutes=0)])
    assert result.findings == []


def test_erratic_movement_needs_three_prior_samples():
    history = [sample(0, minutes=0), sample(100, minutes=10)]
    current = sample(10_100, minutes=20)
    result = detect_movement_anomalies(current, history)
    assert AnomalyType.ERRATIC_MOVEMENT not in [f.type for f in result.findings]


def test_erratic_movement_high_step_variance():
    """Steps of 100 m, 100 m, 10 km (10 minutes apart) -> variance ~2.2e7 m^2."""
    history = [sample(0, minutes=0), sample(100, minutes=10), sample(200, minutes=20)]
    current = sample(10_200, minutes=30)
    result = detect_movement_anomalies(current, history)
    assert [f.type for f in result.findings] == [AnomalyType.ERRATIC_MOVEMENT]
    assert result.anomaly_risk == 20
    assert result.movement_pattern is MovementPattern.ERRATIC
    assert result.findings[0].details["variance_m2"] > 10_000_000
    assert result.findings[0].details["steps_m"] == [100, 100, 10_000]


def test_steady_movement_is_not_erratic():
    history = [sample(0, minutes=0), sample(500, minutes=10), sample(1000, minutes=20)]
    result = detect_movement_anomalies(sample(1500, minutes=30), history)
    assert result.findings == []


def test_only_last_three_steps_count():
    """An old large step outside the window does not make movement erratic."""
    history = [
        sample(0, minutes=0),
        sample(20_000, minutes=60),
        sample(20_100, minutes=70),
        sample(20_200, minutes=80),
    ]
    result = detect_movement_anomalies(sample(20_300, minutes=90), history)
    assert result.findings == []


def test_jump_and_erratic_add_up_and_last_rule_wins():
    history = [sample(0, minutes=0), sample(100, minutes=10), sample(200, minutes=20)]
    current = sample(10_200, minutes=24)
    result = detect_movement_anomalies(current, history)
    assert [f.type for f in result.findings] == [
        AnomalyType.SUDDEN_LOCATION_JUMP,
        AnomalyType.ERRATIC_MOVEMENT,
    ]
    assert result.anomaly_risk == 50
    assert result.movement_pattern is MovementPattern.ERRATIC


def test_anomaly_risk_is_clamped():
    cfg = AnomalyConfig(jump_risk=90, erratic_risk=90)
    history = [sample(0, minutes=0), sample(100, minutes=10), sample(200, minutes=20)]
    result = detect_movement_anomalies(sample(10_200, minutes=24), history, cfg)
    assert result.anomaly_risk == 100


def test_history_is_not_mutated():
    history = [sample(0, minutes=0)]
    detect_movement_anomalies(sample(6000, minutes=1), history)
    assert len(history) == 1


def test_to_dict():
    result = detect_movement_anomalies(sample(6000, minutes=4), [sample(0)])
    out = result.to_dict()
    assert out["risk_score"] == 30
    assert out["movement_pattern"] == "anomalous"
    assert out["anomalies"][0]["type"] == "sudden_location_jump"


def test_out_of_order_sample_is_not_a_jump():
    """A far-away sample stamped before the previous one is replayed, not a jump."""
    result = detect_movement_anomalies(sample(6000, minutes=8), [sample(0, minutes=10)])
    assert result.findings == []
    assert result.movement_pattern is MovementPattern.NORMAL


def test_zero_elapsed_jump_still_flagged():
    result = detect_movement_anomalies(sample(6000, minutes=10), [sample(0, minutes=10)])
    assert [f.type for f in result.findings] == [AnomalyType.SUDDEN_LOCATION_JUMP]
