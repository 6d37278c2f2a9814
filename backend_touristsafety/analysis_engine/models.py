"""
Data models for engine input and output.

Responsibilities:
- Zone reference data and position samples (inputs).
- Calculator input sections (location, behavior, risk factors, incidents).
- Explainable outputs: anomaly findings, subscores with ordered factor
  breakdowns, alerts, and the composite result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class ZoneKind(str, Enum):
    SAFE_ZONE = "safe_zone"
    RESTRICTED = "restricted"
    MEDICAL = "medical"
    RISK_ZONE = "risk_zone"
    TRANSPORT = "transport"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AnomalyType(str, Enum):
    SUDDEN_LOCATION_JUMP = "sudden_location_jump"
    PROLONGED_INACTIVITY = "prolonged_inactivity"
    ERRATIC_MOVEMENT = "erratic_movement"


class AnomalySeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class MovementPattern(str, Enum):
    NORMAL = "normal"
    ANOMALOUS = "anomalous"
    STATIONARY = "stationary"
    ERRATIC = "erratic"


class AlertType(str, Enum):
    GEOFENCE_VIOLATION = "geofence_violation"
    CRITICAL_SAFETY_SCORE = "critical_safety_score"
    LOW_SAFETY_SCORE = "low_safety_score"
    LOCATION_RISK = "location_risk"
    BEHAVIOR_ALERT = "behavior_alert"
    MOVEMENT_ANOMALY = "movement_anomaly"


class AlertSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class FactorName(str, Enum):
    """Closed vocabulary of named score adjustments."""

    # location
    GPS_ACCURACY = "gps_accuracy"
    TIME_OF_DAY = "time_of_day"
    SAFE_ZONE = "safe_zone"
    RISK_AREA = "risk_area"
    MOVEMENT_ANOMALY = "movement_anomaly"
    # behavior
    CHECK_IN_FREQUENCY = "check_in_frequency"
    ROUTE_ADHERENCE = "route_adherence"
    SAFETY_FEATURE_USAGE = "safety_feature_usage"
    RESPONSE_TIME = "response_time"
    FALSE_ALARMS = "false_alarms"
    EMERGENCY_CONTACT_UPDATES = "emergency_contact_updates"
    # risk context (time_of_day shared with location)
    WEATHER = "weather"
    CRIME_RATE = "crime_rate"
    TOURIST_DENSITY = "tourist_density"
    GROUP_SIZE = "group_size"
    LOCAL_GUIDE = "local_guide"
    TRANSPORTATION = "transportation"
    # incident history (false_alarms shared with behavior)
    MAJOR_INCIDENTS = "major_incidents"
    MINOR_INCIDENTS = "minor_incidents"
    RESOLVED_INCIDENTS = "resolved_incidents"
    INCIDENT_FREE_PERIOD = "incident_free_period"


class TimeOfDay(str, Enum):
    DAY = "day"
    EVENING = "evening"
    NIGHT = "night"
    DAWN = "dawn"


class Weather(str, Enum):
    CLEAR = "clear"
    RAIN = "rain"
    STORM = "storm"
    FOG = "fog"
    EXTREME = "extreme"


class Level(str, Enum):
    """Five-step scale used for area crime rate and tourist density."""

    VERY_LOW = "very_low"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very_high"


class TransportationMode(str, Enum):
    WALKING = "walking"
    TAXI = "taxi"
    PUBLIC_TRANSPORT = "public_transport"
    PRIVATE_VEHICLE = "private_vehicle"
    BIKE = "bike"


# -----------------------------------------------------------------------------
# Reference data and samples
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class GeofenceZone:
    """
    Named circular region with a risk classification.

    Immutable reference data owned by the zone catalog.
    """

    id: str
    name: str
    kind: ZoneKind
    center_latitude: float
    center_longitude: float
    radius_m: float
    """Radius in meters; membership is boundary-inclusive."""
    risk_level: RiskLevel
    entry_message: str = ""
    exit_message: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.kind.value,
            "center": {"latitude": self.center_latitude, "longitude": self.center_longitude},
            "radius": self.radius_m,
            "risk_level": self.risk_level.value,
            "entry_message": self.entry_message,
            "exit_message": self.exit_message,
        }


@dataclass(frozen=True)
class PositionSample:
    """One device position report. Never mutated after creation."""

    tourist_id: str
    latitude: float
    longitude: float
    timestamp: datetime
    accuracy: float | None = None
    """Horizontal accuracy in meters."""
    altitude: float | None = None
    heading: float | None = None
    speed: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "tourist_id": self.tourist_id,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "timestamp": self.timestamp.isoformat(),
            "accuracy": self.accuracy,
            "altitude": self.altitude,
            "heading": self.heading,
            "speed": self.speed,
        }


# -----------------------------------------------------------------------------
# Calculator inputs
# -----------------------------------------------------------------------------


@dataclass
class LocationData:
    latitude: float
    longitude: float
    accuracy: float | None = None
    timestamp: datetime | None = None


@dataclass
class BehaviorData:
    """Tourist behavior signals; percentages are on a 0–100 scale."""

    check_in_frequency: float | None = None
    """Share of expected check-ins completed."""
    route_adherence: float | None = None
    safety_feature_usage: float | None = None
    response_time: float | None = None
    """Average response time to safety notifications, in minutes."""
    panic_button_false_alarms: int = 0
    emergency_contact_updates: int | None = None


@dataclass
class RiskFactors:
    time_of_day: TimeOfDay | None = None
    weather_conditions: Weather | None = None
    area_crime_rate: Level | None = None
    tourist_density: Level | None = None
    transportation_mode: TransportationMode | None = None
    group_size: int | None = None
    local_guide_present: bool | None = None


@dataclass
class IncidentHistory:
    minor_incidents: int = 0
    """Lost items, minor injuries."""
    major_incidents: int = 0
    """Theft, assault, serious medical."""
    false_alarms: int = 0
    resolved_incidents: int = 0
    days_since_last_incident: float | None = None


# -----------------------------------------------------------------------------
# Outputs
# -----------------------------------------------------------------------------


@dataclass
class AnomalyFinding:
    """
    Single explainable movement anomaly.

    details carries the numeric evidence (distance, elapsed time or variance)
    alongside the threshold that was crossed.
    """

    type: AnomalyType
    severity: AnomalySeverity
    message: str
    rule_name: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "severity": self.severity.value,
            "message": self.message,
            "rule_name": self.rule_name,
            "details": self.details,
        }


@dataclass
class AnomalyResult:
    """Findings for one evaluation plus the aggregate risk contribution."""

    findings: list[AnomalyFinding]
    anomaly_risk: float
    """Sum of rule contributions, clamped to [0, 100]."""
    movement_pattern: MovementPattern

    @property
    def is_anomalous(self) -> bool:
        return len(self.findings) > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "anomalies": [f.to_dict() for f in self.findings],
            "risk_score": self.anomaly_risk,
            "movement_pattern": self.movement_pattern.value,
        }


@dataclass
class Subscore:
    """A 0–100 component score and the ordered adjustments that produced it."""

    score: float
    factors: list[tuple[FactorName, float]] = field(default_factory=list)

    def factor(self, name: FactorName) -> float | None:
        """Delta applied for name, or None when that adjustment was skipped."""
        for factor_name, delta in self.factors:
            if factor_name is name:
                return delta
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "factors": [{"name": n.value, "delta": d} for n, d in self.factors],
        }


@dataclass
class Alert:
    """Alert descriptor. Produced fresh per evaluation; never stored here."""

    type: AlertType
    severity: AlertSeverity
    message: str
    action_required: bool
    actions: list[str] = field(default_factory=list)
    zone_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "type": self.type.value,
            "severity": self.severity.value,
            "message": self.message,
            "action_required": self.action_required,
            "actions": list(self.actions),
        }
        if self.zone_id is not None:
            out["geofence_id"] = self.zone_id
        return out


@dataclass
class CompositeResult:
    composite_score: int
    risk_level: RiskLevel
    location: Subscore
    behavior: Subscore
    risk: Subscore
    incident: Subscore
    weighted_scores: dict[str, float]
    """Weighted contribution of each component to the composite."""
    recommendations: list[str]
    alerts: list[Alert] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "composite_score": self.composite_score,
            "risk_level": self.risk_level.value,
            "component_scores": {
                "location": self.location.to_dict(),
                "behavior": self.behavior.to_dict(),
                "risk": self.risk.to_dict(),
                "incident": self.incident.to_dict(),
            },
            "weighted_scores": dict(self.weighted_scores),
            "recommendations": list(self.recommendations),
            "alerts": [a.to_dict() for a in self.alerts],
        }
