"""
Validation boundary: request schemas for location updates and safety-score
recomputes.

Range and enum checks happen here, before anything reaches the engine.
Malformed input raises core.exceptions.ValidationError with one FieldError
per problem; valid input is converted to engine dataclasses.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from backend_touristsafety.analysis_engine.models import (
    BehaviorData,
    IncidentHistory,
    Level,
    LocationData,
    PositionSample,
    RiskFactors,
    TimeOfDay,
    TransportationMode,
    Weather,
)
from backend_touristsafety.core.exceptions import FieldError, ValidationError
from backend_touristsafety.tracking.models import (
    ActivityType,
    DeviceInfo,
    LocationPermission,
    LocationUpdate,
    NetworkType,
    Platform,
    SafetyScoreRequest,
    TrackingContext,
    UpdateFrequency,
)


class _Schema(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)


class PositionIn(_Schema):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    accuracy: float | None = Field(None, ge=0, description="Horizontal accuracy (m)")
    altitude: float | None = None
    heading: float | None = Field(None, ge=0, le=360)
    speed: float | None = Field(None, ge=0)
    timestamp: datetime


class DeviceInfoIn(_Schema):
    device_id: str = Field(..., min_length=1)
    platform: Platform
    battery_level: float | None = Field(None, ge=0, le=100)
    network_type: NetworkType | None = None
    gps_enabled: bool = True
    location_permission: LocationPermission = LocationPermission.GRANTED


class TrackingContextIn(_Schema):
    activity_type: ActivityType | None = None
    movement_confidence: float | None = Field(None, ge=0, le=1)
    is_background_update: bool = False
    update_frequency: UpdateFrequency = UpdateFrequency.MEDIUM
    battery_optimization: bool = True


class LocationDataIn(_Schema):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    accuracy: float | None = Field(None, ge=0)
    timestamp: datetime


class BehaviorDataIn(_Schema):
    check_in_frequency: float | None = Field(None, ge=0, le=100)
    route_adherence: float | None = Field(None, ge=0, le=100)
    emergency_contact_updates: int | None = Field(None, ge=0)
    safety_feature_usage: float | None = Field(None, ge=0, le=100)
    response_time: float | None = Field(None, ge=0, description="Minutes")
    panic_button_false_alarms: int = Field(0, ge=0)


class RiskFactorsIn(_Schema):
    time_of_day: TimeOfDay | None = None
    weather_conditions: Weather | None = None
    area_crime_rate: Level | None = None
    tourist_density: Level | None = None
    transportation_mode: TransportationMode | None = None
    group_size: int | None = Field(None, ge=0)
    local_guide_present: bool | None = None


class IncidentHistoryIn(_Schema):
    minor_incidents: int = Field(0, ge=0)
    major_incidents: int = Field(0, ge=0)
    false_alarms: int = Field(0, ge=0)
    resolved_incidents: int = Field(0, ge=0)
    days_since_last_incident: float | None = Field(None, ge=0)


class LocationUpdateIn(_Schema):
    tourist_id: str = Field(..., min_length=1)
    location: PositionIn
    device_info: DeviceInfoIn
    tracking_context: TrackingContextIn | None = None
    behavior_data: BehaviorDataIn | None = None
    risk_factors: RiskFactorsIn | None = None
    incident_history: IncidentHistoryIn | None = None


class SafetyScoreIn(_Schema):
    tourist_id: str = Field(..., min_length=1)
    location_data: LocationDataIn | None = None
    behavior_data: BehaviorDataIn | None = None
    risk_factors: RiskFactorsIn | None = None
    incident_history: IncidentHistoryIn | None = None


def _as_utc(value: datetime) -> datetime:
    """Naive timestamps are taken as UTC so history samples stay comparable."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _field_errors(exc: PydanticValidationError) -> list[FieldError]:
    return [
        FieldError(field=".".join(str(part) for part in err["loc"]) or "__root__", message=err["msg"])
        for err in exc.errors()
    ]


def _parse(schema: type[_Schema], payload: Any, label: str) -> Any:
    if not isinstance(payload, dict):
        raise ValidationError(f"Invalid {label}", [FieldError("__root__", "Expected a JSON object")])
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid {label}", _field_errors(e)) from e


def _behavior(data: BehaviorDataIn | None) -> BehaviorData | None:
    if data is None:
        return None
    return BehaviorData(**data.model_dump())


def _risk_factors(data: RiskFactorsIn | None) -> RiskFactors | None:
    if data is None:
        return None
    return RiskFactors(**data.model_dump())


def _incident_history(data: IncidentHistoryIn | None) -> IncidentHistory | None:
    if data is None:
        return None
    return IncidentHistory(**data.model_dump())


def parse_location_update(payload: Any) -> LocationUpdate:
    """Validate a location update payload. Raises ValidationError."""
    req: LocationUpdateIn = _parse(LocationUpdateIn, payload, "location data")
    loc = req.location
    position = PositionSample(
        tourist_id=req.tourist_id,
        latitude=loc.latitude,
        longitude=loc.longitude,
        timestamp=_as_utc(loc.timestamp),
        accuracy=loc.accuracy,
        altitude=loc.altitude,
        heading=loc.heading,
        speed=loc.speed,
    )
    tracking = TrackingContext(**req.tracking_context.model_dump()) if req.tracking_context else None
    return LocationUpdate(
        position=position,
        device_info=DeviceInfo(**req.device_info.model_dump()),
        tracking_context=tracking,
        behavior=_behavior(req.behavior_data),
        risk_factors=_risk_factors(req.risk_factors),
        incident_history=_incident_history(req.incident_history),
    )


def parse_safety_score_request(payload: Any) -> SafetyScoreRequest:
    """Validate a safety-score recompute payload. Raises ValidationError."""
    req: SafetyScoreIn = _parse(SafetyScoreIn, payload, "safety score data")
    location = None
    if req.location_data is not None:
        location = LocationData(
            latitude=req.location_data.latitude,
            longitude=req.location_data.longitude,
            accuracy=req.location_data.accuracy,
            timestamp=_as_utc(req.location_data.timestamp),
        )
    return SafetyScoreRequest(
        tourist_id=req.tourist_id,
        location=location,
        behavior=_behavior(req.behavior_data),
        risk_factors=_risk_factors(req.risk_factors),
        incident_history=_incident_history(req.incident_history),
    )
