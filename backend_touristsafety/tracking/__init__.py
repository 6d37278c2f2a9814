# Collaborator interfaces (zone catalog, position history) and the service
# that runs the engine for location updates and safety-score recomputes.

from backend_touristsafety.tracking.catalog import (
    DEFAULT_ZONES,
    InMemoryZoneCatalog,
    ZoneCatalog,
    load_zones_from_json,
)
from backend_touristsafety.tracking.history import (
    InMemoryPositionHistoryStore,
    PositionHistoryStore,
)
from backend_touristsafety.tracking.models import (
    DeviceInfo,
    LocationRecord,
    LocationUpdate,
    SafetyScoreRequest,
    TrackingContext,
)
from backend_touristsafety.tracking.service import SafetyService, build_location_insights

__all__ = [
    "DEFAULT_ZONES",
    "InMemoryZoneCatalog",
    "ZoneCatalog",
    "load_zones_from_json",
    "InMemoryPositionHistoryStore",
    "PositionHistoryStore",
    "DeviceInfo",
    "LocationRecord",
    "LocationUpdate",
    "SafetyScoreRequest",
    "TrackingContext",
    "SafetyService",
    "build_location_insights",
]
