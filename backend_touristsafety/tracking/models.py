"""
Request and record models for the two entry points: location update and
safety-score recompute. Instances are produced by the validation boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from backend_touristsafety.analysis_engine.geofence import GeofenceResult
from backend_touristsafety.analysis_engine.models import (
    Alert,
    AnomalyResult,
    BehaviorData,
    CompositeResult,
    IncidentHistory,
    LocationData,
    PositionSample,
    RiskFactors,
)


class Platform(str, Enum):
    ANDROID = "android"
    IOS = "ios"


class NetworkType(str, Enum):
    WIFI = "wifi"
    CELLULAR = "cellular"
    OFFLINE = "offline"


class LocationPermission(str, Enum):
    GRANTED = "granted"
    DENIED = "denied"
    RESTRICTED = "restricted"


class ActivityType(str, Enum):
    WALKING = "walking"
    DRIVING = "driving"
    STATIONARY = "stationary"
    CYCLING = "cycling"
    TRANSIT = "transit"
    UNKNOWN = "unknown"


class UpdateFrequency(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    EMERGENCY = "emergency"


@dataclass
class DeviceInfo:
    device_id: str
    platform: Platform
    battery_level: float | None = None
    network_type: NetworkType | None = None
    gps_enabled: bool = True
    location_permission: LocationPermission = LocationPermission.GRANTED

    def to_dict(self) -> dict[str, Any]:
        return {
            "device_id": self.device_id,
            "platform": self.platform.value,
            "battery_level": self.battery_level,
            "network_type": self.network_type.value if self.network_type else None,
            "gps_enabled": self.gps_enabled,
            "location_permission": self.location_permission.value,
        }


@dataclass
class TrackingContext:
    activity_type: ActivityType | None = None
    movement_confidence: float | None = None
    is_background_update: bool = False
    update_frequency: UpdateFrequency = UpdateFrequency.MEDIUM
    battery_optimization: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "activity_type": self.activity_type.value if self.activity_type else None,
            "movement_confidence": self.movement_confidence,
            "is_background_update": self.is_background_update,
            "update_frequency": self.update_frequency.value,
            "battery_optimization": self.battery_optimization,
        }


@dataclass
class LocationUpdate:
    """
    Validated device location report.

    behavior, risk_factors and incident_history are optional context the
    caller may already hold for this tourist; absent sections score at base.
    """

    position: PositionSample
    device_info: DeviceInfo
    tracking_context: TrackingContext | None = None
    behavior: BehaviorData | None = None
    risk_factors: RiskFactors | None = None
    incident_history: IncidentHistory | None = None

    @property
    def tourist_id(self) -> str:
        return self.position.tourist_id


@dataclass
class SafetyScoreRequest:
    tourist_id: str
    location: LocationData | None = None
    behavior: BehaviorData | None = None
    risk_factors: RiskFactors | None = None
    incident_history: IncidentHistory | None = None


@dataclass
class LocationRecord:
    """Outcome of one location update, handed to persistence/notification."""

    id: str
    position: PositionSample
    device_info: DeviceInfo
    tracking_context: TrackingContext | None
    geofence: GeofenceResult
    anomaly: AnomalyResult
    safety: CompositeResult
    insights: list[str]
    processed_at: datetime

    @property
    def alerts(self) -> list[Alert]:
        return self.safety.alerts

    @property
    def in_safe_zone(self) -> bool:
        return self.geofence.in_safe_zone

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "tourist_id": self.position.tourist_id,
            "coordinates": self.position.to_dict(),
            "device_info": self.device_info.to_dict(),
            "tracking_context": self.tracking_context.to_dict() if self.tracking_context else None,
            "geofence_status": self.geofence.to_dict(),
            "anomaly_detection": self.anomaly.to_dict(),
            "safety_analysis": self.safety.to_dict(),
            "insights": list(self.insights),
            "alerts": [a.to_dict() for a in self.alerts],
            "in_safe_zone": self.in_safe_zone,
            "processed_at": self.processed_at.isoformat(),
        }
