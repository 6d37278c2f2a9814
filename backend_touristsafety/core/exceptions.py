"""
Application-level exceptions.

The scoring core is total on validated input and raises nothing; these
classes cover the boundary (request validation) and the collaborators
(zone catalog loading).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class SafetyEngineError(Exception):
    """Base class for all errors raised by backend_touristsafety."""

    code = "safety_engine_error"


@dataclass
class FieldError:
    """One rejected field: dotted path and a human-readable reason."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


class ValidationError(SafetyEngineError):
    """
    Malformed request rejected at the boundary.

    Carries field-level detail so callers can report every problem at once.
    Never retried automatically.
    """

    code = "validation_error"

    def __init__(self, message: str, errors: list[FieldError] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors: list[FieldError] = list(errors or [])

    @property
    def fields(self) -> list[str]:
        return [e.field for e in self.errors]

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "details": [e.to_dict() for e in self.errors],
        }


class ZoneCatalogError(SafetyEngineError):
    """Zone catalog file missing or malformed."""

    code = "zone_catalog_error"
