"""
Analysis engine package — geofencing, movement anomalies and subscores.

Consumes validated position samples and tourist context, applies explainable
rule-based checks and produces subscores with factor breakdowns. The
composite scorer lives in analysis_engine.scorer (it depends on alerts).
"""

from backend_touristsafety.analysis_engine.models import (
    Alert,
    AlertSeverity,
    AlertType,
    AnomalyFinding,
    AnomalyResult,
    AnomalySeverity,
    AnomalyType,
    BehaviorData,
    CompositeResult,
    FactorName,
    GeofenceZone,
    IncidentHistory,
    Level,
    LocationData,
    MovementPattern,
    PositionSample,
    RiskFactors,
    RiskLevel,
    Subscore,
    TimeOfDay,
    TransportationMode,
    Weather,
    ZoneKind,
)
from backend_touristsafety.analysis_engine.geo import haversine_m
from backend_touristsafety.analysis_engine.geofence import (
    GeofenceResult,
    GeofenceViolation,
    ZoneHit,
    evaluate_geofences,
)
from backend_touristsafety.analysis_engine.anomaly import (
    AnomalyConfig,
    detect_movement_anomalies,
)
from backend_touristsafety.analysis_engine.subscores import (
    calculate_behavior_score,
    calculate_incident_score,
    calculate_location_score,
    calculate_risk_score,
)

__all__ = [
    "Alert",
    "AlertSeverity",
    "AlertType",
    "AnomalyFinding",
    "AnomalyResult",
    "AnomalySeverity",
    "AnomalyType",
    "BehaviorData",
    "CompositeResult",
    "FactorName",
    "GeofenceZone",
    "IncidentHistory",
    "Level",
    "LocationData",
    "MovementPattern",
    "PositionSample",
    "RiskFactors",
    "RiskLevel",
    "Subscore",
    "TimeOfDay",
    "TransportationMode",
    "Weather",
    "ZoneKind",
    "haversine_m",
    "GeofenceResult",
    "GeofenceViolation",
    "ZoneHit",
    "evaluate_geofences",
    "AnomalyConfig",
    "detect_movement_anomalies",
    "calculate_behavior_score",
    "calculate_incident_score",
    "calculate_location_score",
    "calculate_risk_score",
]
