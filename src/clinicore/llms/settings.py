"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Cache/runtime settings and explicit config loading.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .errors import CacheConfigError
from .runtime.contracts import CachePolicy, RetryPolicy


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as error:
        raise CacheConfigError(f"{name} must be a number, got {raw!r}") from error


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as error:
        raise CacheConfigError(f"{name} must be an integer, got {raw!r}") from error


@dataclass(frozen=True, slots=True)
class CacheSettings:
    """Explicit settings for the process-wide caches and invoker defaults."""

    llm_cache_ttl_s: float = 1800.0
    image_cache_ttl_s: float = 86400.0
    sweep_interval_s: float | None = 300.0

    max_retries: int = 3
    retry_delay_s: float = 1.0

    def __post_init__(self) -> None:
        if self.llm_cache_ttl_s <= 0 or self.image_cache_ttl_s <= 0:
            raise CacheConfigError("Cache TTLs must be positive")
        if self.max_retries < 0:
            raise CacheConfigError("max_retries must be >= 0")
        if self.retry_delay_s < 0:
            raise CacheConfigError("retry_delay_s must be >= 0")

    @staticmethod
    def from_env() -> "CacheSettings":
        """Load settings from environment variables."""
        sweep = _env_float("CLINICORE_CACHE_SWEEP_INTERVAL_S", 300.0)
        return CacheSettings(
            llm_cache_ttl_s=_env_float("CLINICORE_LLM_CACHE_TTL_S", 1800.0),
            image_cache_ttl_s=_env_float("CLINICORE_IMAGE_CACHE_TTL_S", 86400.0),
            sweep_interval_s=sweep if sweep > 0 else None,
            max_retries=_env_int("CLINICORE_LLM_MAX_RETRIES", 3),
            retry_delay_s=_env_float("CLINICORE_LLM_RETRY_DELAY_S", 1.0),
        )

    def retry_policy(self) -> RetryPolicy:
        """Build the default retry policy for invokers."""
        return RetryPolicy(
            max_retries=self.max_retries,
            retry_delay_s=self.retry_delay_s,
        )

    def cache_policy(self) -> CachePolicy:
        """Build the default cache policy for invokers."""
        return CachePolicy(enabled=True)
