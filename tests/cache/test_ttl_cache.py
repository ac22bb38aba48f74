from __future__ import annotations

import gc
import threading
import time
import weakref

import pytest

from clinicore.llms import CacheConfigError, TTLCache


class _Clock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _cache(clock: _Clock, ttl_s: float = 10.0) -> TTLCache:
    return TTLCache(ttl_s, sweep_interval_s=None, clock=clock)


def test_get_returns_stored_value_with_identity():
    clock = _Clock()
    cache = _cache(clock)
    value = {"text": "hello"}
    cache.set("k", value)

    assert cache.get("k") is value
    assert cache.has("k")
    assert "k" in cache


def test_get_treats_expired_entry_as_absent_without_sweep():
    clock = _Clock()
    cache = _cache(clock, ttl_s=10.0)
    cache.set("k", "v")

    clock.advance(10.0)
    assert cache.get("k") == "v"

    clock.advance(0.001)
    assert cache.get("k") is None
    assert cache.has("k") is False
    assert cache.stats().size == 0


def test_per_entry_ttl_overrides_default():
    clock = _Clock()
    cache = _cache(clock, ttl_s=100.0)
    cache.set("short", 1, ttl_s=1.0)
    cache.set("long", 2)

    clock.advance(5.0)
    assert cache.get("short") is None
    assert cache.get("long") == 2


def test_overwrite_replaces_value_and_resets_age():
    clock = _Clock()
    cache = _cache(clock, ttl_s=10.0)
    cache.set("k", "v1")
    clock.advance(8.0)
    cache.set("k", "v2")
    clock.advance(8.0)

    assert cache.get("k") == "v2"


def test_stored_none_counts_as_present():
    clock = _Clock()
    cache = _cache(clock)
    cache.set("k", None)

    assert cache.has("k") is True
    sentinel = object()
    assert cache.get("k", sentinel) is None
    assert cache.get("missing", sentinel) is sentinel


def test_delete_reports_presence():
    cache = _cache(_Clock())
    cache.set("k", "v")

    assert cache.delete("k") is True
    assert cache.delete("k") is False
    assert cache.get("k") is None


def test_clear_and_stats_snapshot():
    cache = _cache(_Clock())
    cache.set("a", 1)
    cache.set("b", 2)
    cache.get("a")
    cache.get("missing")

    stats = cache.stats()
    assert stats.size == 2
    assert sorted(stats.keys) == ["a", "b"]
    assert stats.hits == 1
    assert stats.misses == 1
    assert len(cache) == 2

    cache.clear()
    stats = cache.stats()
    assert stats.size == 0
    assert stats.keys == []
    assert stats.hits == 0


def test_sweep_removes_only_expired_entries():
    clock = _Clock()
    cache = _cache(clock, ttl_s=10.0)
    cache.set("old", 1)
    clock.advance(6.0)
    cache.set("new", 2)
    clock.advance(6.0)

    assert cache.sweep() == 1
    assert cache.stats().keys == ["new"]


def test_destroy_is_idempotent_and_clears():
    cache = TTLCache(10.0, sweep_interval_s=60.0)
    cache.set("k", "v")

    cache.destroy()
    assert cache.stats().size == 0
    cache.destroy()
    assert cache.stats().size == 0


def test_background_sweeper_drops_expired_entries():
    clock = _Clock()
    cache = TTLCache(1.0, sweep_interval_s=0.01, clock=clock)
    try:
        cache.set("k", "v")
        clock.advance(2.0)

        deadline = time.monotonic() + 2.0
        while len(cache) and time.monotonic() < deadline:
            time.sleep(0.01)
        assert len(cache) == 0
    finally:
        cache.destroy()


def test_destroy_stops_sweeper_thread():
    cache = TTLCache(10.0, sweep_interval_s=0.01, name="stopcheck")
    cache.destroy()

    names = [t.name for t in threading.enumerate()]
    assert "clinicore-sweep-stopcheck" not in names


def test_abandoned_cache_is_collected_and_sweeper_exits():
    cache = TTLCache(10.0, sweep_interval_s=0.01, name="gccheck")
    ref = weakref.ref(cache)
    del cache
    gc.collect()

    deadline = time.monotonic() + 2.0
    while time.monotonic() < deadline:
        if all(t.name != "clinicore-sweep-gccheck" for t in threading.enumerate()):
            break
        time.sleep(0.01)

    assert ref() is None
    assert all(t.name != "clinicore-sweep-gccheck" for t in threading.enumerate())


def test_context_manager_destroys_cache():
    with TTLCache(10.0, sweep_interval_s=None) as cache:
        cache.set("k", "v")
    assert cache.stats().size == 0


def test_rejects_non_positive_default_ttl():
    with pytest.raises(CacheConfigError):
        TTLCache(0)
