"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

In-memory TTL cache with lazy expiry on read and a background sweeper.
"""

from __future__ import annotations

import logging
import threading
import time
import weakref
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from ..errors import CacheConfigError
from .base import CacheEntry, CacheStats

logger = logging.getLogger("clinicore.llms.cache")

V = TypeVar("V")

DEFAULT_TTL_S = 3600.0
DEFAULT_SWEEP_INTERVAL_S = 300.0


class TTLCache(Generic[V]):
    """
    Process-local key/value cache where every entry carries its own TTL.

    Expiry is enforced twice: `get`/`has` re-check age at read time, and a
    daemon sweeper thread periodically drops expired rows to bound memory.
    Reads never depend on the sweeper having run.

    All access to the entry store goes through one lock, so the cache can be
    shared between the event loop thread and worker threads.
    """

    def __init__(
        self,
        default_ttl_s: float = DEFAULT_TTL_S,
        *,
        sweep_interval_s: float | None = DEFAULT_SWEEP_INTERVAL_S,
        clock: Callable[[], float] = time.monotonic,
        name: str = "cache",
    ) -> None:
        if default_ttl_s <= 0:
            raise CacheConfigError("default_ttl_s must be positive")
        self.name = name
        self.default_ttl_s = float(default_ttl_s)
        self.sweep_interval_s = (
            float(sweep_interval_s)
            if sweep_interval_s is not None and sweep_interval_s > 0
            else None
        )
        self._clock = clock
        self._rows: dict[str, CacheEntry[V]] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

        self._stop = threading.Event()
        self._sweeper: threading.Thread | None = None
        if self.sweep_interval_s is not None:
            self._sweeper = threading.Thread(
                target=_sweep_loop,
                args=(weakref.ref(self), self._stop, self.sweep_interval_s),
                name=f"clinicore-sweep-{name}",
                daemon=True,
            )
            self._sweeper.start()
            # Wake the sweeper if the cache is collected without destroy().
            weakref.finalize(self, self._stop.set)
            logger.debug(
                "Started sweeper for %s (interval=%ss)", name, self.sweep_interval_s
            )

    def set(self, key: str, value: V, ttl_s: float | None = None) -> None:
        ttl = self.default_ttl_s if ttl_s is None else float(ttl_s)
        entry = CacheEntry(value=value, stored_at_s=self._clock(), ttl_s=ttl)
        with self._lock:
            self._rows[key] = entry

    def get(self, key: str, default: V | None = None) -> V | None:
        with self._lock:
            entry = self._live_entry(key)
            if entry is None:
                self._misses += 1
                return default
            self._hits += 1
            return entry.value

    def has(self, key: str) -> bool:
        with self._lock:
            return self._live_entry(key) is not None

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def __len__(self) -> int:
        with self._lock:
            return len(self._rows)

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._rows.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._rows.clear()
            self._hits = 0
            self._misses = 0

    def stats(self) -> CacheStats:
        with self._lock:
            keys = list(self._rows.keys())
            return CacheStats(
                size=len(keys),
                keys=keys,
                hits=self._hits,
                misses=self._misses,
            )

    def sweep(self) -> int:
        """Drop every expired entry now; return how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [key for key, row in self._rows.items() if row.is_expired(now)]
            for key in expired:
                del self._rows[key]
        if expired:
            logger.debug("Swept %d expired entries from %s", len(expired), self.name)
        return len(expired)

    def destroy(self) -> None:
        """Stop the sweeper and drop all entries. Safe to call repeatedly."""
        self._stop.set()
        sweeper, self._sweeper = self._sweeper, None
        if sweeper is not None and sweeper is not threading.current_thread():
            sweeper.join()
            logger.debug("Stopped sweeper for %s", self.name)
        self.clear()

    close = destroy

    def __enter__(self) -> "TTLCache[V]":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.destroy()

    def _live_entry(self, key: str) -> CacheEntry[V] | None:
        # Caller holds the lock.
        entry = self._rows.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            del self._rows[key]
            return None
        return entry


def _sweep_loop(
    ref: "weakref.ReferenceType[TTLCache[Any]]",
    stop: threading.Event,
    interval: float,
) -> None:
    # Holds only a weak reference so an abandoned cache can be collected.
    while not stop.wait(interval):
        cache = ref()
        if cache is None:
            return
        cache.sweep()
        del cache
