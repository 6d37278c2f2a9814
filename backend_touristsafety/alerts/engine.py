"""
Alert engine: score thresholds and geofence/anomaly results to alerts.

Defines when to emit alerts (composite score below thresholds, weak location
or behavior subscore, high movement anomaly risk). Geofence violation alerts
are produced by the geofence evaluator and merged in first. Every call
returns a fresh, complete alert set for that instant.
"""

from __future__ import annotations

from dataclasses import dataclass

from backend_touristsafety.analysis_engine.geofence import GeofenceResult
from backend_touristsafety.analysis_engine.models import (
    Alert,
    AlertSeverity,
    AlertType,
    AnomalyResult,
)

DEFAULT_CRITICAL_SCORE_BELOW = 40.0
DEFAULT_LOW_SCORE_BELOW = 60.0
DEFAULT_LOCATION_RISK_BELOW = 40.0
DEFAULT_BEHAVIOR_ALERT_BELOW = 50.0
DEFAULT_MOVEMENT_ANOMALY_ABOVE = 50.0

CRITICAL_SCORE_ACTIONS = [
    "Contact emergency services",
    "Move to safe location",
    "Notify emergency contacts",
]
LOW_SCORE_ACTIONS = [
    "Increase check-in frequency",
    "Consider safer routes",
    "Stay in groups",
]
LOCATION_RISK_ACTIONS = [
    "Move to safer area",
    "Share location with contacts",
]
BEHAVIOR_ALERT_ACTIONS = [
    "Increase check-ins",
    "Use safety features more",
    "Follow planned routes",
]


@dataclass
class AlertConfig:
    """Configurable thresholds for the alert engine."""

    critical_score_below: float = DEFAULT_CRITICAL_SCORE_BELOW
    """critical_safety_score when the composite is below this."""
    low_score_below: float = DEFAULT_LOW_SCORE_BELOW
    """low_safety_score when the composite is below this (and not critical)."""
    location_risk_below: float = DEFAULT_LOCATION_RISK_BELOW
    behavior_alert_below: float = DEFAULT_BEHAVIOR_ALERT_BELOW
    movement_anomaly_above: float = DEFAULT_MOVEMENT_ANOMALY_ABOVE


def generate_alerts(
    composite_score: float,
    location_score: float,
    behavior_score: float,
    geofence: GeofenceResult | None = None,
    anomaly: AnomalyResult | None = None,
    config: AlertConfig | None = None,
) -> list[Alert]:
    """
    Build the alert list for one evaluation.

    Order: geofence violations, composite score alert (critical or low,
    never both), location risk, behavior, movement anomaly.
    """
    cfg = config or AlertConfig()
    alerts: list[Alert] = []

    if geofence is not None:
        alerts.extend(geofence.alerts)

    if composite_score < cfg.critical_score_below:
        alerts.append(
            Alert(
                type=AlertType.CRITICAL_SAFETY_SCORE,
                severity=AlertSeverity.HIGH,
                message="Safety score is critically low. Immediate action recommended.",
                action_required=True,
                actions=list(CRITICAL_SCORE_ACTIONS),
            )
        )
    elif composite_score < cfg.low_score_below:
        alerts.append(
            Alert(
                type=AlertType.LOW_SAFETY_SCORE,
                severity=AlertSeverity.MEDIUM,
                message="Safety score indicates elevated risk. Take precautions.",
                action_required=True,
                actions=list(LOW_SCORE_ACTIONS),
            )
        )

    if location_score < cfg.location_risk_below:
        alerts.append(
            Alert(
                type=AlertType.LOCATION_RISK,
                severity=AlertSeverity.MEDIUM,
                message="Current location has elevated risk factors",
                action_required=True,
                actions=list(LOCATION_RISK_ACTIONS),
            )
        )

    if behavior_score < cfg.behavior_alert_below:
        alerts.append(
            Alert(
                type=AlertType.BEHAVIOR_ALERT,
                severity=AlertSeverity.LOW,
                message="Consider improving safety behaviors",
                action_required=False,
                actions=list(BEHAVIOR_ALERT_ACTIONS),
            )
        )

    # Default AnomalyConfig tops out at 50 (jump 30 + erratic 20; jump and
    # inactivity exclude each other), so this needs raised rule weights or a
    # lower threshold to fire.
    if anomaly is not None and anomaly.anomaly_risk > cfg.movement_anomaly_above:
        alerts.append(
            Alert(
                type=AlertType.MOVEMENT_ANOMALY,
                severity=AlertSeverity.MEDIUM,
                message="Unusual movement pattern detected",
                action_required=False,
            )
        )

    return alerts
