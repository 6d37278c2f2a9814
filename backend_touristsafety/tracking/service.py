"""
Safety service. Orchestrates the engine for the two entry points.

track_location: geofences + movement anomalies + composite score + alerts
for one device report, with the tourist's history read and appended under
that tourist's lock.

recompute_safety_score: composite score from whichever sections the caller
supplied; never touches position history.

The caller always passes the current time (now); nothing here reads the
clock.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from backend_touristsafety.alerts.engine import AlertConfig
from backend_touristsafety.analysis_engine.anomaly import AnomalyConfig, detect_movement_anomalies
from backend_touristsafety.analysis_engine.geofence import GeofenceResult, evaluate_geofences
from backend_touristsafety.analysis_engine.models import (
    AnomalyResult,
    CompositeResult,
    LocationData,
    MovementPattern,
    PositionSample,
)
from backend_touristsafety.analysis_engine.scorer import compute_safety_score
from backend_touristsafety.analysis_engine.subscores import hour_of_day_offset
from backend_touristsafety.config.settings import Settings, get_settings
from backend_touristsafety.safety_logging import bind_tourist
from backend_touristsafety.tracking.catalog import (
    InMemoryZoneCatalog,
    ZoneCatalog,
    load_zones_from_json,
)
from backend_touristsafety.tracking.history import (
    InMemoryPositionHistoryStore,
    PositionHistoryStore,
)
from backend_touristsafety.tracking.models import (
    LocationRecord,
    LocationUpdate,
    SafetyScoreRequest,
)

POOR_GPS_ACCURACY_M = 100


def build_location_insights(
    position: PositionSample,
    geofence: GeofenceResult,
    anomaly: AnomalyResult,
    hour: int,
) -> list[str]:
    """Human-readable notes about the tourist's current situation."""
    insights: list[str] = []
    if geofence.safe_zones:
        insights.append(f"You are in a safe zone: {geofence.safe_zones[0].name}")
    if geofence.violations:
        insights.append(f"Alert: You are in {geofence.violations[0].zone.name}")
    if anomaly.movement_pattern is MovementPattern.STATIONARY:
        insights.append("You have been stationary for a while. Consider checking in with emergency contacts.")
    if anomaly.movement_pattern is MovementPattern.ERRATIC:
        insights.append("Irregular movement detected. Are you okay?")
    if hour_of_day_offset(hour) < 0:
        insights.append("It's nighttime. Consider staying in well-lit areas.")
    if position.accuracy is not None and position.accuracy > POOR_GPS_ACCURACY_M:
        insights.append("GPS accuracy is low. Move to an open area for better location tracking.")
    return insights


class SafetyService:
    """Wires the engine to a zone catalog and a position history store."""

    def __init__(
        self,
        catalog: ZoneCatalog,
        history: PositionHistoryStore,
        *,
        anomaly_config: AnomalyConfig | None = None,
        alert_config: AlertConfig | None = None,
        location_anomaly_weight: float = 0.0,
    ) -> None:
        self._catalog = catalog
        self._history = history
        self._anomaly_config = anomaly_config or AnomalyConfig()
        self._alert_config = alert_config or AlertConfig()
        self._location_anomaly_weight = location_anomaly_weight

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> SafetyService:
        """Build a service with in-memory collaborators from env settings."""
        s = settings or get_settings()
        zones = load_zones_from_json(s.zone_catalog_path) if s.zone_catalog_path else None
        return cls(
            InMemoryZoneCatalog(zones),
            InMemoryPositionHistoryStore(s.history_window_size),
            location_anomaly_weight=s.location_anomaly_weight,
        )

    def track_location(self, update: LocationUpdate, *, now: datetime) -> LocationRecord:
        """Evaluate one location update and append it to the tourist's history."""
        position = update.position
        log = bind_tourist(position.tourist_id)

        with self._history.lock_for(position.tourist_id):
            prior = self._history.recent(position.tourist_id)
            anomaly = detect_movement_anomalies(position, prior, self._anomaly_config)
            self._history.append(position)

        geofence = evaluate_geofences(position.latitude, position.longitude, self._catalog.list_zones())
        safety = compute_safety_score(
            location=LocationData(
                latitude=position.latitude,
                longitude=position.longitude,
                accuracy=position.accuracy,
                timestamp=position.timestamp,
            ),
            hour=now.hour,
            geofence=geofence,
            anomaly=anomaly,
            behavior=update.behavior,
            risk_factors=update.risk_factors,
            incident_history=update.incident_history,
            location_anomaly_weight=self._location_anomaly_weight,
            alert_config=self._alert_config,
        )
        record = LocationRecord(
            id=f"LOC-{uuid.uuid4().hex[:12]}",
            position=position,
            device_info=update.device_info,
            tracking_context=update.tracking_context,
            geofence=geofence,
            anomaly=anomaly,
            safety=safety,
            insights=build_location_insights(position, geofence, anomaly, now.hour),
            processed_at=now,
        )

        log.info(
            "location_update_processed",
            record_id=record.id,
            prior_samples=len(prior),
            zones_inside=[h.zone.id for h in geofence.inside],
            anomaly_flags=[f.type.value for f in anomaly.findings],
            movement_pattern=anomaly.movement_pattern.value,
            composite_score=safety.composite_score,
            risk_level=safety.risk_level.value,
            alert_count=len(safety.alerts),
        )
        if geofence.violations:
            log.warning(
                "geofence_violation",
                zone_ids=[v.zone.id for v in geofence.violations],
            )
        return record

    def recompute_safety_score(self, request: SafetyScoreRequest, *, now: datetime) -> CompositeResult:
        """Composite score for the supplied sections; location is checked against the catalog."""
        log = bind_tourist(request.tourist_id)
        geofence = None
        hour = None
        if request.location is not None:
            geofence = evaluate_geofences(
                request.location.latitude,
                request.location.longitude,
                self._catalog.list_zones(),
            )
            hour = now.hour

        result = compute_safety_score(
            location=request.location,
            hour=hour,
            geofence=geofence,
            behavior=request.behavior,
            risk_factors=request.risk_factors,
            incident_history=request.incident_history,
            alert_config=self._alert_config,
        )
        log.info(
            "safety_score_computed",
            composite_score=result.composite_score,
            risk_level=result.risk_level.value,
            location_score=result.location.score,
            behavior_score=result.behavior.score,
            risk_score=result.risk.score,
            incident_score=result.incident.score,
            alert_types=[a.type.value for a in result.alerts],
        )
        return result
