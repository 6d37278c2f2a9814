"""
Geofence zone catalog: reference zone definitions for evaluation.

The engine only reads zones; ownership and editing belong to the catalog
provider. InMemoryZoneCatalog serves a fixed list, optionally loaded from a
JSON file (a list of zone objects, same keys as GeofenceZone.to_dict()).
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Protocol

from backend_touristsafety.analysis_engine.models import GeofenceZone, RiskLevel, ZoneKind
from backend_touristsafety.core.exceptions import ZoneCatalogError
from backend_touristsafety.safety_logging import get_logger

logger = get_logger(__name__)


class ZoneCatalog(Protocol):
    def list_zones(self) -> list[GeofenceZone]:
        ...


DEFAULT_ZONES: tuple[GeofenceZone, ...] = (
    GeofenceZone(
        id="SAFE_ZONE_001",
        name="Tourist District",
        kind=ZoneKind.SAFE_ZONE,
        center_latitude=28.6139,
        center_longitude=77.2090,
        radius_m=2000,
        risk_level=RiskLevel.LOW,
        entry_message="Welcome to the safe tourist district",
        exit_message="You are leaving the safe tourist zone",
    ),
    GeofenceZone(
        id="RESTRICTED_001",
        name="Military Area",
        kind=ZoneKind.RESTRICTED,
        center_latitude=28.6200,
        center_longitude=77.2200,
        radius_m=500,
        risk_level=RiskLevel.HIGH,
        entry_message="WARNING: You are entering a restricted area",
        exit_message="You have left the restricted area",
    ),
    GeofenceZone(
        id="MEDICAL_001",
        name="Hospital District",
        kind=ZoneKind.MEDICAL,
        center_latitude=28.6100,
        center_longitude=77.2050,
        radius_m=1000,
        risk_level=RiskLevel.LOW,
        entry_message="Medical facilities are nearby",
        exit_message="You have left the medical district",
    ),
    GeofenceZone(
        id="RISK_ZONE_001",
        name="High Crime Area",
        kind=ZoneKind.RISK_ZONE,
        center_latitude=28.6300,
        center_longitude=77.1900,
        radius_m=1500,
        risk_level=RiskLevel.HIGH,
        entry_message="CAUTION: You are entering a high-risk area. Stay alert!",
        exit_message="You have left the high-risk area",
    ),
    GeofenceZone(
        id="TRANSPORT_001",
        name="Metro Station Area",
        kind=ZoneKind.TRANSPORT,
        center_latitude=28.6150,
        center_longitude=77.2100,
        radius_m=300,
        risk_level=RiskLevel.MEDIUM,
        entry_message="Metro station nearby - safe transportation available",
        exit_message="You have left the metro station area",
    ),
)


class InMemoryZoneCatalog:
    """Fixed zone list; zones are immutable so the list is shared read-only."""

    def __init__(self, zones: Iterable[GeofenceZone] | None = None) -> None:
        self._zones: tuple[GeofenceZone, ...] = tuple(DEFAULT_ZONES if zones is None else zones)

    def list_zones(self) -> list[GeofenceZone]:
        return list(self._zones)

    def get(self, zone_id: str) -> GeofenceZone | None:
        for zone in self._zones:
            if zone.id == zone_id:
                return zone
        return None


def zone_from_dict(raw: dict[str, Any]) -> GeofenceZone:
    """Build a GeofenceZone from a catalog entry. Raises ZoneCatalogError."""
    try:
        center = raw["center"]
        radius = float(raw["radius"])
        if radius < 0:
            raise ValueError(f"negative radius {radius}")
        return GeofenceZone(
            id=str(raw["id"]),
            name=str(raw.get("name") or raw["id"]),
            kind=ZoneKind(raw["type"]),
            center_latitude=float(center["latitude"]),
            center_longitude=float(center["longitude"]),
            radius_m=radius,
            risk_level=RiskLevel(raw.get("risk_level", RiskLevel.LOW.value)),
            entry_message=str(raw.get("entry_message", "")),
            exit_message=str(raw.get("exit_message", "")),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ZoneCatalogError(f"Invalid zone entry {raw.get('id', '?') if isinstance(raw, dict) else raw!r}: {e}") from e


def load_zones_from_json(path: Path) -> list[GeofenceZone]:
    """Load a JSON array of zone objects. Raises ZoneCatalogError."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ZoneCatalogError(f"Zone catalog not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ZoneCatalogError(f"Zone catalog is not valid JSON: {path}: {e}") from e
    if not isinstance(data, list):
        raise ZoneCatalogError(f"Zone catalog must be a JSON array: {path}")
    zones = [zone_from_dict(item) for item in data]
    logger.info("zone_catalog_loaded", path=str(path), zone_count=len(zones))
    return zones
