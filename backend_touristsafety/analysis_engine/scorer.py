"""
Composite safety score: weighted aggregation, risk tier and recommendations.

Responsibilities:
- Combine the four subscores with fixed weights into one 0–100 score.
- Classify the score into a risk tier.
- Build a capped, prioritized recommendation list and the alert set.
"""

from __future__ import annotations

import math

from backend_touristsafety.alerts.engine import AlertConfig, generate_alerts
from backend_touristsafety.analysis_engine.geofence import GeofenceResult
from backend_touristsafety.analysis_engine.models import (
    AnomalyResult,
    BehaviorData,
    CompositeResult,
    IncidentHistory,
    LocationData,
    RiskFactors,
    RiskLevel,
    Subscore,
)
from backend_touristsafety.analysis_engine.subscores import (
    calculate_behavior_score,
    calculate_incident_score,
    calculate_location_score,
    calculate_risk_score,
    clamp_score,
)

COMPONENT_WEIGHTS = {
    "location": 0.25,
    "behavior": 0.35,
    "risk": 0.25,
    "incident": 0.15,
}

HIGH_RISK_BELOW = 40
MEDIUM_RISK_BELOW = 70

# Subscores below this get a component-specific recommendation
WEAK_SUBSCORE_BELOW = 60
MAX_RECOMMENDATIONS = 5

URGENT_RECOMMENDATIONS = [
    "Consider moving to a safer area",
    "Stay in contact with emergency contacts",
    "Consider returning to accommodation",
]
CAUTION_RECOMMENDATIONS = [
    "Enable more frequent check-ins",
    "Consider traveling in groups",
    "Share location with trusted contacts",
]
ROUTINE_RECOMMENDATIONS = [
    "Continue following safety protocols",
    "Maintain regular check-ins",
    "Keep exploring safely",
]
URGENT_RECOMMENDATIONS_BELOW = 50

COMPONENT_RECOMMENDATIONS = {
    "location": "Move to a well-lit, populated area",
    "behavior": "Improve check-in frequency",
    "risk": "Be extra cautious due to current conditions",
    "incident": "Review safety guidelines after recent incidents",
}


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def classify_risk(composite_score: float) -> RiskLevel:
    """Below 40 is high risk, below 70 medium, otherwise low."""
    if composite_score < HIGH_RISK_BELOW:
        return RiskLevel.HIGH
    if composite_score < MEDIUM_RISK_BELOW:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def weighted_contributions(
    location: Subscore,
    behavior: Subscore,
    risk: Subscore,
    incident: Subscore,
) -> dict[str, float]:
    scores = {
        "location": location.score,
        "behavior": behavior.score,
        "risk": risk.score,
        "incident": incident.score,
    }
    return {name: scores[name] * weight for name, weight in COMPONENT_WEIGHTS.items()}


def composite_score(
    location: Subscore,
    behavior: Subscore,
    risk: Subscore,
    incident: Subscore,
) -> int:
    """Weighted sum of the four subscores, rounded half up."""
    total = math.fsum(weighted_contributions(location, behavior, risk, incident).values())
    return round_half_up(clamp_score(total))


def build_recommendations(
    score: float,
    location: Subscore,
    behavior: Subscore,
    risk: Subscore,
    incident: Subscore,
) -> list[str]:
    """
    Tiered generic advice first, then one entry per weak subscore in the
    order location, behavior, risk, incident. Never more than five entries.
    """
    if score < URGENT_RECOMMENDATIONS_BELOW:
        recommendations = list(URGENT_RECOMMENDATIONS)
    elif score < MEDIUM_RISK_BELOW:
        recommendations = list(CAUTION_RECOMMENDATIONS)
    else:
        recommendations = list(ROUTINE_RECOMMENDATIONS)

    components = (
        ("location", location),
        ("behavior", behavior),
        ("risk", risk),
        ("incident", incident),
    )
    for name, subscore in components:
        if subscore.score < WEAK_SUBSCORE_BELOW:
            recommendations.append(COMPONENT_RECOMMENDATIONS[name])

    return recommendations[:MAX_RECOMMENDATIONS]


def combine_subscores(
    location: Subscore,
    behavior: Subscore,
    risk: Subscore,
    incident: Subscore,
) -> CompositeResult:
    """Composite score, tier, weighted contributions and recommendations (no alerts)."""
    score = composite_score(location, behavior, risk, incident)
    weighted = {
        name: round(value, 2)
        for name, value in weighted_contributions(location, behavior, risk, incident).items()
    }
    return CompositeResult(
        composite_score=score,
        risk_level=classify_risk(score),
        location=location,
        behavior=behavior,
        risk=risk,
        incident=incident,
        weighted_scores=weighted,
        recommendations=build_recommendations(score, location, behavior, risk, incident),
    )


def compute_safety_score(
    *,
    location: LocationData | None = None,
    hour: int | None = None,
    geofence: GeofenceResult | None = None,
    anomaly: AnomalyResult | None = None,
    behavior: BehaviorData | None = None,
    risk_factors: RiskFactors | None = None,
    incident_history: IncidentHistory | None = None,
    location_anomaly_weight: float = 0.0,
    alert_config: AlertConfig | None = None,
) -> CompositeResult:
    """
    Full evaluation: four subscores, composite, recommendations and alerts.

    Pure function of its arguments; hour must be supplied by the caller.
    Absent sections fall back to the calculator base scores.
    """
    location_sub = calculate_location_score(
        location,
        hour=hour,
        geofence=geofence,
        anomaly=anomaly,
        anomaly_weight=location_anomaly_weight,
    )
    behavior_sub = calculate_behavior_score(behavior)
    risk_sub = calculate_risk_score(risk_factors)
    incident_sub = calculate_incident_score(incident_history)

    result = combine_subscores(location_sub, behavior_sub, risk_sub, incident_sub)
    result.alerts = generate_alerts(
        result.composite_score,
        location_sub.score,
        behavior_sub.score,
        geofence=geofence,
        anomaly=anomaly,
        config=alert_config,
    )
    return result


def build_score_insights(result: CompositeResult) -> list[str]:
    """Short human-readable summary lines for a composite result."""
    strongest = max(result.weighted_scores.items(), key=lambda item: item[1])[0]
    if result.composite_score >= MEDIUM_RISK_BELOW:
        closing = "You're following good safety practices!"
    else:
        closing = "Consider following the recommendations to improve safety"
    return [
        f"Your safety score is {result.composite_score}/100 ({result.risk_level.value} risk)",
        f"Strongest factor: {strongest}",
        closing,
    ]
