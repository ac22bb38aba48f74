"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Cache-first external-call runtime with bounded retry.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from ..cache.base import CacheBackend, CacheStats
from ..cache.keys import CacheKeyBuilder
from ..types import ExternalCall, InvocationRequest, InvocationResult
from ..utils import run_sync, short_key
from .coalescing import RequestCoalescer
from .contracts import CachePolicy, CoalescingPolicy, RetryPolicy
from .retry import call_with_retry

logger = logging.getLogger("clinicore.llms.invoker")

_MISSING: Any = object()


class RetryableInvoker:
    """
    Wrap one async external call with cache-first lookup and bounded retry.

    The cache is injected, so several invokers (or other consumers) can share
    one cache per purpose without module-level singletons.

    Concurrent identical requests are NOT collapsed unless coalescing is
    enabled: two callers that both miss will both perform the external call.
    Only completed calls populate the cache.
    """

    def __init__(
        self,
        cache: CacheBackend[Any],
        *,
        retry_policy: RetryPolicy | None = None,
        cache_policy: CachePolicy | None = None,
        coalescing_policy: CoalescingPolicy | None = None,
        key_builder: Callable[[InvocationRequest], str] | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        label: str = "LLM",
    ) -> None:
        self._cache = cache
        self._retry_policy = retry_policy or RetryPolicy()
        self._cache_policy = cache_policy or CachePolicy()
        self._coalescing_policy = coalescing_policy or CoalescingPolicy()
        self._key_builder = key_builder or CacheKeyBuilder()
        self._sleep = sleep
        self._label = label
        self._coalescer = RequestCoalescer()

    @property
    def cache(self) -> CacheBackend[Any]:
        """Expose the injected cache instance."""
        return self._cache

    async def invoke(
        self,
        request: InvocationRequest,
        call: ExternalCall,
        *,
        enable_cache: bool | None = None,
        max_retries: int | None = None,
        retry_delay_s: float | None = None,
        cache_key: str | None = None,
        cache_ttl_s: float | None = None,
    ) -> InvocationResult[Any]:
        """
        Execute `call(request)` with cache-first semantics.

        Per-call keyword arguments override the invoker's policies. Failures
        from `call` propagate unchanged once they are non-retryable or the
        retry budget is spent.
        """
        use_cache = self._cache_policy.enabled if enable_cache is None else enable_cache
        ttl_s = self._cache_policy.ttl_s if cache_ttl_s is None else cache_ttl_s
        policy = RetryPolicy(
            max_retries=self._retry_policy.max_retries if max_retries is None else max_retries,
            retry_delay_s=(
                self._retry_policy.retry_delay_s if retry_delay_s is None else retry_delay_s
            ),
        )

        key = cache_key or self._key_builder(request)

        if use_cache:
            cached = self._cache.get(key, _MISSING)
            if cached is not _MISSING:
                logger.info("[%s] Cache hit for key: %s", self._label, short_key(key))
                return InvocationResult(payload=cached, from_cache=True, retry_count=0)

        async def _attempt() -> Any:
            result = call(request)
            if inspect.isawaitable(result):
                result = await result
            return result

        def _on_retry(attempt: int, error: Exception) -> None:
            logger.warning(
                "[%s] Attempt %d failed, retrying: %s", self._label, attempt + 1, error
            )
            logger.info(
                "[%s] Retry attempt %d/%d", self._label, attempt + 1, policy.max_retries
            )

        async def _run() -> tuple[Any, int]:
            try:
                return await call_with_retry(
                    _attempt,
                    policy=policy,
                    sleep=self._sleep,
                    on_retry=_on_retry,
                )
            except Exception:
                logger.error(
                    "[%s] Invocation failed for key: %s",
                    self._label,
                    short_key(key),
                    exc_info=True,
                )
                raise

        if self._coalescing_policy.enabled:
            payload, attempt = await self._coalescer.run(key, _run)
        else:
            payload, attempt = await _run()

        if use_cache:
            self._cache.set(key, payload, ttl_s)
            logger.debug("[%s] Cached result for key: %s", self._label, short_key(key))

        return InvocationResult(payload=payload, from_cache=False, retry_count=attempt)

    def invoke_sync(
        self,
        request: InvocationRequest,
        call: ExternalCall,
        **options: Any,
    ) -> InvocationResult[Any]:
        """Synchronous wrapper around `invoke`."""
        return run_sync(self.invoke(request, call, **options))

    def clear_cache(self, key: str | None = None) -> None:
        """Delete one cached key, or every key when `key` is None."""
        if key:
            self._cache.delete(key)
            logger.info("[%s] Cleared cache for key: %s", self._label, short_key(key))
        else:
            self._cache.clear()
            logger.info("[%s] Cleared all cache", self._label)

    def cache_stats(self) -> CacheStats:
        return self._cache.stats()
