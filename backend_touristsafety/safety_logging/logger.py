"""
Structured logging for the safety engine.

Every record is one JSON object on stderr with an ISO timestamp, level,
event_type and whatever context the caller binds (tourist_id, zone ids,
anomaly flags, scores). stdout is left to the CLI's JSON output.

Level and format come from LOG_LEVEL / LOG_FORMAT, read through config.env
so values in the project .env apply. config.env imports nothing from this
package, so there is no import cycle.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any

import structlog

from backend_touristsafety.config.env import get_log_format, get_log_level


def _add_timestamp(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    event_dict.setdefault("timestamp", datetime.now(timezone.utc).isoformat())
    return event_dict


def _event_type(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Engine events are snake_case identifiers; expose them as event_type."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    return event_dict


def configure_structlog(file: IO[str] | None = None) -> None:
    """
    (Re)configure structlog from the environment and .env.

    Runs once at import. Loggers bound before a reconfigure keep the old
    level filter.
    """
    level = logging.getLevelName(get_log_level())
    if not isinstance(level, int):
        level = logging.INFO
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.format_exc_info,
        _add_timestamp,
    ]
    if get_log_format() == "json":
        processors += [_event_type, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=file or sys.stderr),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Module logger. First positional argument is the event type:

        logger = get_logger(__name__)
        logger.info("safety_score_computed", tourist_id="T1", composite_score=86)
    """
    return structlog.get_logger(name).bind(logger=name)


def bind_tourist(tourist_id: str) -> structlog.BoundLogger:
    """Logger with tourist_id attached to every event of one evaluation."""
    return get_logger("backend_touristsafety").bind(tourist_id=tourist_id)
