"""
Geofence evaluation: zone membership, safe/violation partitioning, and
containment alerts.

Membership is a deterministic function of geometry: a position is inside a
zone when its Haversine distance to the zone center is at most the radius.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from backend_touristsafety.analysis_engine.geo import haversine_m
from backend_touristsafety.analysis_engine.models import (
    Alert,
    AlertSeverity,
    AlertType,
    GeofenceZone,
    RiskLevel,
    ZoneKind,
)


@dataclass
class ZoneHit:
    """A zone containing the evaluated position."""

    zone: GeofenceZone
    distance_m: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.zone.id,
            "name": self.zone.name,
            "type": self.zone.kind.value,
            "risk_level": self.zone.risk_level.value,
            "distance_from_center": round(self.distance_m),
        }


@dataclass
class GeofenceViolation:
    zone: GeofenceZone

    def to_dict(self) -> dict[str, Any]:
        return {
            "geofence_id": self.zone.id,
            "geofence_name": self.zone.name,
            "violation_type": self.zone.kind.value,
            "risk_level": self.zone.risk_level.value,
            "message": self.zone.entry_message,
            "action_required": True,
            "severity": AlertSeverity.HIGH.value,
        }


@dataclass
class GeofenceResult:
    inside: list[ZoneHit] = field(default_factory=list)
    safe_zones: list[GeofenceZone] = field(default_factory=list)
    violations: list[GeofenceViolation] = field(default_factory=list)
    alerts: list[Alert] = field(default_factory=list)

    @property
    def in_safe_zone(self) -> bool:
        return len(self.safe_zones) > 0

    @property
    def in_other_zone_only(self) -> bool:
        """Inside at least one zone, none of them a safe zone."""
        return len(self.inside) > 0 and not self.safe_zones

    def to_dict(self) -> dict[str, Any]:
        return {
            "inside_zones": [h.to_dict() for h in self.inside],
            "violations": [v.to_dict() for v in self.violations],
            "safe_zones_count": len(self.safe_zones),
            "alerts": [a.to_dict() for a in self.alerts],
        }


def is_violation_zone(zone: GeofenceZone) -> bool:
    """Restricted zones and any high-risk zone count as violations."""
    return zone.kind is ZoneKind.RESTRICTED or zone.risk_level is RiskLevel.HIGH


def violation_alert(zone: GeofenceZone) -> Alert:
    return Alert(
        type=AlertType.GEOFENCE_VIOLATION,
        severity=AlertSeverity.HIGH,
        message=zone.entry_message,
        action_required=True,
        zone_id=zone.id,
    )


def evaluate_geofences(
    latitude: float,
    longitude: float,
    zones: Iterable[GeofenceZone],
) -> GeofenceResult:
    """
    Test the position against every zone in the catalog.

    Zones are visited in catalog order; each violation yields exactly one
    high-severity geofence_violation alert carrying the zone's entry message.
    """
    result = GeofenceResult()
    for zone in zones:
        distance = haversine_m(latitude, longitude, zone.center_latitude, zone.center_longitude)
        if distance > zone.radius_m:
            continue
        result.inside.append(ZoneHit(zone=zone, distance_m=distance))
        if zone.kind is ZoneKind.SAFE_ZONE:
            result.safe_zones.append(zone)
        if is_violation_zone(zone):
            result.violations.append(GeofenceViolation(zone=zone))
            result.alerts.append(violation_alert(zone))
    return result
