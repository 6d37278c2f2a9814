"""
Rule-based movement anomaly detection.

Flags sudden location jumps, prolonged inactivity and erratic movement from
a tourist's recent position history. Fully explainable: each finding has a
rule name, severity and the numeric evidence behind it. No ML; thresholds
are configurable.
"""

from __future__ import annotations

import statistics
from collections.abc import Sequence
from dataclasses import dataclass

from backend_touristsafety.analysis_engine.geo import haversine_m
from backend_touristsafety.analysis_engine.models import (
    AnomalyFinding,
    AnomalyResult,
    AnomalySeverity,
    AnomalyType,
    MovementPattern,
    PositionSample,
)
from backend_touristsafety.safety_logging import get_logger

logger = get_logger(__name__)

MAX_ANOMALY_RISK = 100.0


@dataclass
class AnomalyConfig:
    """
    Configurable thresholds for movement anomaly rules.

    Distances in meters, durations in seconds.
    """

    # Jump: farther than this from the previous sample...
    jump_distance_m: float = 5000.0
    # ...in less than this many seconds.
    jump_max_elapsed_sec: float = 300.0
    jump_risk: float = 30.0

    # Inactivity: closer than this to the previous sample...
    inactivity_distance_m: float = 50.0
    # ...after more than this many seconds.
    inactivity_min_elapsed_sec: float = 7200.0
    inactivity_risk: float = 15.0

    # Erratic: population variance of the last step distances (m^2).
    erratic_variance_m2: float = 10_000_000.0
    erratic_min_prior_samples: int = 3
    erratic_risk: float = 20.0


def _elapsed_sec(current: PositionSample, previous: PositionSample) -> float:
    return (current.timestamp - previous.timestamp).total_seconds()


def _distance_m(a: PositionSample, b: PositionSample) -> float:
    return haversine_m(a.latitude, a.longitude, b.latitude, b.longitude)


def _check_sudden_jump(
    current: PositionSample,
    history: Sequence[PositionSample],
    config: AnomalyConfig,
) -> AnomalyFinding | None:
    """
    Flag a large displacement from the previous sample in a short time.

    A sample older than the previous one (replayed or out of order) never
    counts as a jump.
    """
    if not history:
        return None
    previous = history[-1]
    distance = _distance_m(current, previous)
    elapsed = _elapsed_sec(current, previous)
    if distance > config.jump_distance_m and 0 <= elapsed < config.jump_max_elapsed_sec:
        return AnomalyFinding(
            type=AnomalyType.SUDDEN_LOCATION_JUMP,
            severity=AnomalySeverity.MEDIUM,
            message=(
                f"Unusual rapid movement: {distance:.0f} m in {elapsed:.0f} s "
                f"(threshold: {config.jump_distance_m:.0f} m within {config.jump_max_elapsed_sec:.0f} s)"
            ),
            rule_name="sudden_location_jump",
            details={
                "distance_moved_m": round(distance),
                "time_elapsed_sec": round(elapsed),
                "threshold_distance_m": config.jump_distance_m,
                "threshold_elapsed_sec": config.jump_max_elapsed_sec,
            },
        )
    return None


def _check_prolonged_inactivity(
    current: PositionSample,
    history: Sequence[PositionSample],
    config: AnomalyConfig,
) -> AnomalyFinding | None:
    """Flag no significant movement over an extended period."""
    if not history:
        return None
    previous = history[-1]
    distance = _distance_m(current, previous)
    elapsed = _elapsed_sec(current, previous)
    if distance < config.inactivity_distance_m and elapsed > config.inactivity_min_elapsed_sec:
        return AnomalyFinding(
            type=AnomalyType.PROLONGED_INACTIVITY,
            severity=AnomalySeverity.LOW,
            message=(
                f"No significant movement for {elapsed / 3600:.1f} h "
                f"({distance:.0f} m since last report)"
            ),
            rule_name="prolonged_inactivity",
            details={
                "distance_moved_m": round(distance),
                "time_elapsed_sec": round(elapsed),
                "duration_hours": round(elapsed / 3600),
                "threshold_distance_m": config.inactivity_distance_m,
                "threshold_elapsed_sec": config.inactivity_min_elapsed_sec,
            },
        )
    return None


def _recent_steps(current: PositionSample, history: Sequence[PositionSample], count: int) -> list[float]:
    """Distances of the last `count` steps ending at the current sample."""
    points = list(history[-count:]) + [current]
    return [_distance_m(points[i], points[i + 1]) for i in range(len(points) - 1)]


def _check_erratic_movement(
    current: PositionSample,
    history: Sequence[PositionSample],
    config: AnomalyConfig,
) -> AnomalyFinding | None:
    """Flag high variance across the most recent step distances."""
    if len(history) < config.erratic_min_prior_samples:
        return None
    steps = _recent_steps(current, history, config.erratic_min_prior_samples)
    if not steps:
        return None
    mean_step = statistics.fmean(steps)
    variance = statistics.pvariance(steps, mu=mean_step)
    if variance > config.erratic_variance_m2:
        return AnomalyFinding(
            type=AnomalyType.ERRATIC_MOVEMENT,
            severity=AnomalySeverity.MEDIUM,
            message=(
                f"Irregular movement pattern: step variance {variance:.0f} m^2 "
                f"(threshold: {config.erratic_variance_m2:.0f} m^2)"
            ),
            rule_name="erratic_movement",
            details={
                "variance_m2": round(variance),
                "mean_step_m": round(mean_step),
                "steps_m": [round(s) for s in steps],
                "threshold_variance_m2": config.erratic_variance_m2,
            },
        )
    return None


def detect_movement_anomalies(
    current: PositionSample,
    history: Sequence[PositionSample],
    config: AnomalyConfig | None = None,
) -> AnomalyResult:
    """
    Run the movement rules against the current sample and prior history.

    history holds earlier samples for the same tourist, oldest first, and
    must not include current. Rules run in a fixed order (jump, inactivity,
    erratic); each is checked independently, contributions add up and the
    total is clamped to [0, 100]. Each firing rule overwrites the movement
    pattern, so the last one wins. Rules lacking enough history are skipped.
    """
    cfg = config or AnomalyConfig()
    rules = (
        (_check_sudden_jump, cfg.jump_risk, MovementPattern.ANOMALOUS),
        (_check_prolonged_inactivity, cfg.inactivity_risk, MovementPattern.STATIONARY),
        (_check_erratic_movement, cfg.erratic_risk, MovementPattern.ERRATIC),
    )
    findings: list[AnomalyFinding] = []
    risk = 0.0
    pattern = MovementPattern.NORMAL

    for check, points, rule_pattern in rules:
        finding = check(current, history, cfg)
        if finding is None:
            continue
        findings.append(finding)
        risk += points
        pattern = rule_pattern

    if findings:
        logger.debug(
            "movement_anomalies_detected",
            tourist_id=current.tourist_id,
            anomaly_flags=[f.type.value for f in findings],
            anomaly_risk=risk,
        )

    return AnomalyResult(
        findings=findings,
        anomaly_risk=max(0.0, min(MAX_ANOMALY_RISK, risk)),
        movement_pattern=pattern,
    )
