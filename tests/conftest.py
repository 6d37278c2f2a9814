"""
Pytest fixtures for tourist safety engine tests.

Helpers build position samples at metric offsets so distance-based rules can
be exercised without hand-computing coordinates.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone

import pytest

from backend_touristsafety.analysis_engine.geo import EARTH_RADIUS_M
from backend_touristsafety.analysis_engine.models import (
    GeofenceZone,
    PositionSample,
    RiskLevel,
    ZoneKind,
)
from backend_touristsafety.tracking.catalog import InMemoryZoneCatalog
from backend_touristsafety.tracking.history import InMemoryPositionHistoryStore
from backend_touristsafety.tracking.service import SafetyService

BASE_LAT = 28.6139
BASE_LON = 77.2090
T0 = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

# Meters per degree of latitude on the Haversine sphere
METERS_PER_DEG_LAT = EARTH_RADIUS_M * math.pi / 180


def north_of(lat: float, meters: float) -> float:
    """Latitude `meters` due north of lat (exact along a meridian)."""
    return lat + meters / METERS_PER_DEG_LAT


def sample(
    north_m: float = 0.0,
    minutes: float = 0.0,
    tourist_id: str = "T1",
    accuracy: float | None = None,
) -> PositionSample:
    """Sample north_m meters north of the base point, minutes after T0."""
    return PositionSample(
        tourist_id=tourist_id,
        latitude=north_of(BASE_LAT, north_m),
        longitude=BASE_LON,
        timestamp=T0 + timedelta(minutes=minutes),
        accuracy=accuracy,
    )


def zone(
    zone_id: str,
    kind: ZoneKind,
    radius_m: float,
    risk_level: RiskLevel = RiskLevel.LOW,
    lat: float = BASE_LAT,
    lon: float = BASE_LON,
) -> GeofenceZone:
    return GeofenceZone(
        id=zone_id,
        name=zone_id.replace("_", " ").title(),
        kind=kind,
        center_latitude=lat,
        center_longitude=lon,
        radius_m=radius_m,
        risk_level=risk_level,
        entry_message=f"Entering {zone_id}",
        exit_message=f"Leaving {zone_id}",
    )


@pytest.fixture
def safe_zone():
    return zone("SAFE_1", ZoneKind.SAFE_ZONE, 2000)


@pytest.fixture
def restricted_zone():
    return zone("RESTRICTED_1", ZoneKind.RESTRICTED, 500, RiskLevel.HIGH, lat=north_of(BASE_LAT, 5000))


@pytest.fixture
def history_store():
    return InMemoryPositionHistoryStore(window_size=5)


@pytest.fixture
def service(safe_zone, restricted_zone, history_store):
    """SafetyService over a safe zone at the base point and a restricted zone 5 km north."""
    return SafetyService(InMemoryZoneCatalog([safe_zone, restricted_zone]), history_store)
