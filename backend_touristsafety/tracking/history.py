"""
Per-tourist position history: a bounded recent window with per-key locking.

Each evaluation reads and then appends to a tourist's history, so callers
hold that tourist's lock for the whole read-modify-write. Locks are per
tourist id; unrelated tourists never serialize on each other. A lock is
created on first use and lives as long as the store, so two evaluations of
one tourist can never hold different locks.
"""

from __future__ import annotations

import threading
from collections import deque
from typing import Protocol

from backend_touristsafety.analysis_engine.models import PositionSample
from backend_touristsafety.config.env import DEFAULT_HISTORY_WINDOW_SIZE, MIN_HISTORY_WINDOW_SIZE


class PositionHistoryStore(Protocol):
    def recent(self, tourist_id: str) -> list[PositionSample]:
        """Samples in the window, oldest first."""
        ...

    def append(self, sample: PositionSample) -> None:
        ...

    def lock_for(self, tourist_id: str) -> threading.Lock:
        ...


class InMemoryPositionHistoryStore:
    """Thread-safe bounded history. tourist_id -> deque(maxlen=window)."""

    def __init__(self, window_size: int = DEFAULT_HISTORY_WINDOW_SIZE) -> None:
        self._window = max(MIN_HISTORY_WINDOW_SIZE, window_size)
        self._histories: dict[str, deque[PositionSample]] = {}
        self._locks: dict[str, threading.Lock] = {}
        # guards the two dicts only, never held during an evaluation
        self._registry_lock = threading.Lock()

    @property
    def window_size(self) -> int:
        return self._window

    def lock_for(self, tourist_id: str) -> threading.Lock:
        with self._registry_lock:
            return self._locks.setdefault(tourist_id, threading.Lock())

    def recent(self, tourist_id: str) -> list[PositionSample]:
        with self._registry_lock:
            history = self._histories.get(tourist_id)
            return list(history) if history else []

    def append(self, sample: PositionSample) -> None:
        with self._registry_lock:
            history = self._histories.setdefault(sample.tourist_id, deque(maxlen=self._window))
            history.append(sample)

    def clear(self, tourist_id: str) -> None:
        """Drop the tourist's samples. The lock stays: a caller may already hold it."""
        with self._registry_lock:
            self._histories.pop(tourist_id, None)
