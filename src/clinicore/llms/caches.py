"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Per-purpose cache instances created once at process start.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .cache.keys import CacheKeyBuilder
from .cache.ttl import TTLCache
from .runtime.invoker import RetryableInvoker
from .settings import CacheSettings


@dataclass(slots=True)
class RuntimeCaches:
    """
    Process-wide caches, one per purpose.

    `llm` holds chat-completion responses (short TTL), `image` holds
    generated image artifacts (long TTL). Build once with `from_settings`,
    pass the instance to consumers, and call `close()` on shutdown so the
    sweeper threads stop.
    """

    llm: TTLCache[Any]
    image: TTLCache[Any]
    settings: CacheSettings

    @classmethod
    def from_settings(cls, settings: CacheSettings | None = None) -> "RuntimeCaches":
        resolved = settings or CacheSettings.from_env()
        return cls(
            llm=TTLCache(
                resolved.llm_cache_ttl_s,
                sweep_interval_s=resolved.sweep_interval_s,
                name="llm",
            ),
            image=TTLCache(
                resolved.image_cache_ttl_s,
                sweep_interval_s=resolved.sweep_interval_s,
                name="image",
            ),
            settings=resolved,
        )

    def llm_invoker(self, **kwargs: Any) -> RetryableInvoker:
        """Build an invoker bound to the LLM response cache."""
        kwargs.setdefault("retry_policy", self.settings.retry_policy())
        kwargs.setdefault("cache_policy", self.settings.cache_policy())
        kwargs.setdefault("key_builder", CacheKeyBuilder("llm"))
        return RetryableInvoker(self.llm, label="LLM", **kwargs)

    def image_invoker(self, **kwargs: Any) -> RetryableInvoker:
        """Build an invoker bound to the generated-image cache."""
        kwargs.setdefault("retry_policy", self.settings.retry_policy())
        kwargs.setdefault("cache_policy", self.settings.cache_policy())
        kwargs.setdefault("key_builder", CacheKeyBuilder("image"))
        return RetryableInvoker(self.image, label="Image", **kwargs)

    def close(self) -> None:
        self.llm.destroy()
        self.image.destroy()

    def __enter__(self) -> "RuntimeCaches":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
