"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: cache/base.py.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Protocol, TypeVar

V = TypeVar("V")


@dataclass(frozen=True, slots=True)
class CacheEntry(Generic[V]):
    """One cached value with its storage time and time-to-live."""
    value: V
    stored_at_s: float
    ttl_s: float

    def is_expired(self, now_s: float) -> bool:
        return now_s - self.stored_at_s > self.ttl_s


@dataclass(frozen=True, slots=True)
class CacheStats:
    """Point-in-time snapshot of one cache."""
    size: int
    keys: list[str] = field(default_factory=list)
    hits: int = 0
    misses: int = 0


class CacheBackend(Protocol[V]):
    """Protocol implemented by caches consumed by the invoker."""

    def get(self, key: str, default: V | None = None) -> V | None: ...

    def set(self, key: str, value: V, ttl_s: float | None = None) -> None: ...

    def has(self, key: str) -> bool: ...

    def delete(self, key: str) -> bool: ...

    def clear(self) -> None: ...

    def stats(self) -> CacheStats: ...
