"""
Tests for the in-memory position history store: bounded window, ordering,
per-tourist isolation and per-tourist locks.
"""

from __future__ import annotations

from backend_touristsafety.tracking.history import InMemoryPositionHistoryStore
from conftest import sample


def test_empty_history():
    store = InMemoryPositionHistoryStore()
    assert store.recent("T1") == []


def test_window_is_bounded_oldest_dropped():
    store = InMemoryPositionHistoryStore(window_size=5)
    for i in range(8):
        store.append(sample(i * 10, minutes=i))
    recent = store.recent("T1")
    assert len(recent) == 5
    assert [s.timestamp.minute for s in recent] == [3, 4, 5, 6, 7]


def test_window_never_below_minimum():
    store = InMemoryPositionHistoryStore(window_size=1)
    assert store.window_size == 4


def test_tourists_are_isolated():
    store = InMemoryPositionHistoryStore()
    store.append(sample(tourist_id="A"))
    store.append(sample(tourist_id="B"))
    store.append(sample(10, minutes=1, tourist_id="B"))
    assert len(store.recent("A")) == 1
    assert len(store.recent("B")) == 2


def test_recent_returns_a_copy():
    store = InMemoryPositionHistoryStore()
    store.append(sample())
    snapshot = store.recent("T1")
    snapshot.clear()
    assert len(store.recent("T1")) == 1


def test_lock_per_tourist():
    store = InMemoryPositionHistoryStore()
    assert store.lock_for("A") is store.lock_for("A")
    assert store.lock_for("A") is not store.lock_for("B")


def test_lock_for_one_tourist_does_not_block_another():
    store = InMemoryPositionHistoryStore()
    with store.lock_for("A"):
        assert store.lock_for("B").acquire(blocking=False)
        store.lock_for("B").release()
        store.append(sample(tourist_id="B"))
    assert len(store.recent("B")) == 1


def test_clear():
    store = InMemoryPositionHistoryStore()
    store.append(sample())
    store.clear("T1")
    assert store.recent("T1") == []


def test_clear_keeps_the_lock():
    store = InMemoryPositionHistoryStore()
    lock = store.lock_for("T1")
    store.append(sample())
    with lock:
        store.clear("T1")
    assert store.lock_for("T1") is lock
