#!/usr/bin/env python3
"""
Evaluate a location-update or safety-score payload from a JSON file.

Validates the payload, runs it through SafetyService and prints the result
as JSON on stdout. Location mode accepts either one payload object or a JSON
array of payloads for the same tourist, evaluated in order so the movement
history builds up.

Usage:
  python -m backend_touristsafety.tools.score_payload score payload.json
  python -m backend_touristsafety.tools.score_payload location reports.json --now 2026-01-05T12:00:00+00:00
  python -m backend_touristsafety.tools.score_payload location reports.json --zones zones.json
"""

from __future__ import annotations

import argparse
import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from backend_touristsafety.analysis_engine.scorer import build_score_insights
from backend_touristsafety.config.settings import get_settings
from backend_touristsafety.core.exceptions import SafetyEngineError, ValidationError
from backend_touristsafety.safety_logging import get_logger
from backend_touristsafety.tracking.catalog import InMemoryZoneCatalog, load_zones_from_json
from backend_touristsafety.tracking.history import InMemoryPositionHistoryStore
from backend_touristsafety.tracking.service import SafetyService
from backend_touristsafety.validation import parse_location_update, parse_safety_score_request

logger = get_logger(__name__)


def _parse_now(raw: str | None) -> datetime:
    if not raw:
        return datetime.now(timezone.utc)
    value = datetime.fromisoformat(raw)
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _build_service(zones_path: Path | None) -> SafetyService:
    settings = get_settings()
    path = zones_path or settings.zone_catalog_path
    zones = load_zones_from_json(path) if path else None
    return SafetyService(
        InMemoryZoneCatalog(zones),
        InMemoryPositionHistoryStore(settings.history_window_size),
        location_anomaly_weight=settings.location_anomaly_weight,
    )


def run(mode: str, payload: Any, service: SafetyService, now: datetime) -> Any:
    if mode == "score":
        request = parse_safety_score_request(payload)
        result = service.recompute_safety_score(request, now=now)
        return {**result.to_dict(), "insights": build_score_insights(result)}
    items = payload if isinstance(payload, list) else [payload]
    records = [service.track_location(parse_location_update(item), now=now).to_dict() for item in items]
    return records if isinstance(payload, list) else records[0]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Evaluate a tourist safety payload")
    parser.add_argument("mode", choices=("location", "score"), help="Payload kind")
    parser.add_argument("payload", type=Path, help="JSON payload file")
    parser.add_argument("--zones", type=Path, default=None, help="Zone catalog JSON (default: built-in)")
    parser.add_argument("--now", default=None, help="Evaluation time, ISO 8601 (default: current UTC time)")
    args = parser.parse_args(argv)

    try:
        payload = json.loads(args.payload.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        print(f"[score_payload] cannot read {args.payload}: {e}", file=sys.stderr)
        return 2

    try:
        now = _parse_now(args.now)
    except ValueError as e:
        print(f"[score_payload] invalid --now: {e}", file=sys.stderr)
        return 2

    try:
        result = run(args.mode, payload, _build_service(args.zones), now)
    except ValidationError as e:
        print(json.dumps(e.to_dict(), indent=2))
        return 1
    except SafetyEngineError as e:
        logger.error("score_payload_failed", mode=args.mode, error=str(e))
        return 2

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
