"""
Subscore calculators for location, behavior, risk context and incident history.

Each calculator starts from a base score, applies a sequence of named
additive adjustments and clamps the result to [0, 100]. Absent sections
yield the base score; absent fields skip their adjustment. Every applied
adjustment is recorded as a (FactorName, delta) pair in application order.
"""

from __future__ import annotations

from backend_touristsafety.analysis_engine.geofence import GeofenceResult
from backend_touristsafety.analysis_engine.models import (
    AnomalyResult,
    BehaviorData,
    FactorName,
    IncidentHistory,
    Level,
    LocationData,
    RiskFactors,
    Subscore,
    TimeOfDay,
    TransportationMode,
    Weather,
)

MIN_SCORE = 0.0
MAX_SCORE = 100.0

LOCATION_BASE = 70.0
BEHAVIOR_BASE = 80.0
RISK_BASE = 80.0
INCIDENT_BASE = 85.0

# Risk-context offset tables
TIME_OF_DAY_OFFSETS = {
    TimeOfDay.DAY: 15,
    TimeOfDay.EVENING: 5,
    TimeOfDay.NIGHT: -15,
    TimeOfDay.DAWN: -5,
}
WEATHER_OFFSETS = {
    Weather.CLEAR: 10,
    Weather.RAIN: -5,
    Weather.STORM: -20,
    Weather.FOG: -10,
    Weather.EXTREME: -25,
}
CRIME_RATE_OFFSETS = {
    Level.VERY_LOW: 20,
    Level.LOW: 10,
    Level.MEDIUM: 0,
    Level.HIGH: -15,
    Level.VERY_HIGH: -30,
}
# More tourists around is safer
TOURIST_DENSITY_OFFSETS = {
    Level.VERY_HIGH: 15,
    Level.HIGH: 10,
    Level.MEDIUM: 5,
    Level.LOW: -5,
    Level.VERY_LOW: -15,
}
TRANSPORTATION_OFFSETS = {
    TransportationMode.PRIVATE_VEHICLE: 10,
    TransportationMode.TAXI: 8,
    TransportationMode.PUBLIC_TRANSPORT: 5,
    TransportationMode.BIKE: -5,
    TransportationMode.WALKING: -10,
}


def clamp_score(value: float) -> float:
    return max(MIN_SCORE, min(MAX_SCORE, value))


class _Adjustments:
    """Accumulates named deltas on top of a base score."""

    def __init__(self, base: float) -> None:
        self.score = base
        self.factors: list[tuple[FactorName, float]] = []

    def add(self, name: FactorName, delta: float) -> None:
        self.score += delta
        self.factors.append((name, delta))

    def result(self) -> Subscore:
        return Subscore(score=clamp_score(self.score), factors=self.factors)


def hour_of_day_offset(hour: int) -> int:
    """Daytime [6, 18] +15, evening [19, 21] +5, night otherwise -10."""
    if 6 <= hour <= 18:
        return 15
    if 19 <= hour <= 21:
        return 5
    return -10


def calculate_location_score(
    location: LocationData | None,
    *,
    hour: int | None = None,
    geofence: GeofenceResult | None = None,
    anomaly: AnomalyResult | None = None,
    anomaly_weight: float = 0.0,
) -> Subscore:
    """
    Location subscore from GPS accuracy, hour of day and zone membership.

    hour is supplied by the caller; the calculator never reads the clock.
    Zone membership: safe zone +20; otherwise inside some other zone -10;
    in no zone at all, no adjustment. When anomaly_weight > 0 the movement
    anomaly risk is subtracted at that rate.
    """
    adj = _Adjustments(LOCATION_BASE)
    if location is None:
        return adj.result()

    if location.accuracy is not None:
        if location.accuracy < 10:
            adj.add(FactorName.GPS_ACCURACY, 10)
        elif location.accuracy > 100:
            adj.add(FactorName.GPS_ACCURACY, -5)

    if hour is not None:
        adj.add(FactorName.TIME_OF_DAY, hour_of_day_offset(hour))

    if geofence is not None:
        if geofence.in_safe_zone:
            adj.add(FactorName.SAFE_ZONE, 20)
        elif geofence.in_other_zone_only:
            adj.add(FactorName.RISK_AREA, -10)

    if anomaly is not None and anomaly_weight > 0 and anomaly.anomaly_risk > 0:
        adj.add(FactorName.MOVEMENT_ANOMALY, -anomaly.anomaly_risk * anomaly_weight)

    return adj.result()


def calculate_behavior_score(behavior: BehaviorData | None) -> Subscore:
    """Behavior subscore; percentage inputs are centered on 50%."""
    adj = _Adjustments(BEHAVIOR_BASE)
    if behavior is None:
        return adj.result()

    if behavior.check_in_frequency is not None:
        adj.add(FactorName.CHECK_IN_FREQUENCY, (behavior.check_in_frequency / 100) * 25 - 12.5)
    if behavior.route_adherence is not None:
        adj.add(FactorName.ROUTE_ADHERENCE, (behavior.route_adherence / 100) * 15 - 7.5)
    if behavior.safety_feature_usage is not None:
        adj.add(FactorName.SAFETY_FEATURE_USAGE, (behavior.safety_feature_usage / 100) * 10 - 5)

    if behavior.response_time is not None:
        if behavior.response_time <= 5:
            adj.add(FactorName.RESPONSE_TIME, 10)
        elif behavior.response_time <= 15:
            adj.add(FactorName.RESPONSE_TIME, 5)
        else:
            adj.add(FactorName.RESPONSE_TIME, -10)

    if behavior.panic_button_false_alarms > 0:
        adj.add(FactorName.FALSE_ALARMS, -5 * behavior.panic_button_false_alarms)

    if behavior.emergency_contact_updates:
        adj.add(FactorName.EMERGENCY_CONTACT_UPDATES, min(10, 2 * behavior.emergency_contact_updates))

    return adj.result()


def calculate_risk_score(risk: RiskFactors | None) -> Subscore:
    """Risk-context subscore from time, weather, area, group and transport."""
    adj = _Adjustments(RISK_BASE)
    if risk is None:
        return adj.result()

    if risk.time_of_day is not None:
        adj.add(FactorName.TIME_OF_DAY, TIME_OF_DAY_OFFSETS[risk.time_of_day])
    if risk.weather_conditions is not None:
        adj.add(FactorName.WEATHER, WEATHER_OFFSETS[risk.weather_conditions])
    # medium crime rate is neutral and not listed as a factor
    if risk.area_crime_rate is not None and CRIME_RATE_OFFSETS[risk.area_crime_rate]:
        adj.add(FactorName.CRIME_RATE, CRIME_RATE_OFFSETS[risk.area_crime_rate])
    if risk.tourist_density is not None:
        adj.add(FactorName.TOURIST_DENSITY, TOURIST_DENSITY_OFFSETS[risk.tourist_density])

    if risk.group_size is not None:
        if risk.group_size == 0:
            adj.add(FactorName.GROUP_SIZE, -15)
        elif 2 <= risk.group_size <= 4:
            adj.add(FactorName.GROUP_SIZE, 10)
        elif risk.group_size > 4:
            adj.add(FactorName.GROUP_SIZE, 5)

    if risk.local_guide_present is True:
        adj.add(FactorName.LOCAL_GUIDE, 15)
    if risk.transportation_mode is not None:
        adj.add(FactorName.TRANSPORTATION, TRANSPORTATION_OFFSETS[risk.transportation_mode])

    return adj.result()


def calculate_incident_score(history: IncidentHistory | None) -> Subscore:
    """Incident-history subscore: starts high and is reduced by incidents."""
    adj = _Adjustments(INCIDENT_BASE)
    if history is None:
        return adj.result()

    if history.major_incidents > 0:
        adj.add(FactorName.MAJOR_INCIDENTS, -25 * history.major_incidents)
    if history.minor_incidents > 0:
        adj.add(FactorName.MINOR_INCIDENTS, -min(10 * history.minor_incidents, 30))
    if history.false_alarms > 0:
        adj.add(FactorName.FALSE_ALARMS, -min(5 * history.false_alarms, 20))
    if history.resolved_incidents > 0:
        adj.add(FactorName.RESOLVED_INCIDENTS, min(5 * history.resolved_incidents, 15))

    days = history.days_since_last_incident
    if days is not None:
        if days >= 30:
            adj.add(FactorName.INCIDENT_FREE_PERIOD, 15)
        elif days >= 7:
            adj.add(FactorName.INCIDENT_FREE_PERIOD, 8)
        elif days >= 1:
            adj.add(FactorName.INCIDENT_FREE_PERIOD, 3)

    return adj.result()
