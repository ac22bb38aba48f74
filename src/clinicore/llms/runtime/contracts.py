"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Typed runtime policies for cached external-call execution.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import CacheConfigError


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """Retry semantics for one invocation path. Backoff is linear in the attempt index."""

    max_retries: int = 3
    retry_delay_s: float = 1.0

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise CacheConfigError("max_retries must be >= 0")
        if self.retry_delay_s < 0:
            raise CacheConfigError("retry_delay_s must be >= 0")

    def delay_for(self, attempt: int) -> float:
        return self.retry_delay_s * attempt


@dataclass(frozen=True, slots=True)
class CachePolicy:
    """Response cache controls. `ttl_s=None` defers to the cache default."""

    enabled: bool = True
    ttl_s: float | None = None


@dataclass(frozen=True, slots=True)
class CoalescingPolicy:
    """In-flight request deduplication controls."""

    enabled: bool = False
