"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: __init__.py.
"""

from __future__ import annotations

from .cache import (
    CacheBackend,
    CacheEntry,
    CacheKeyBuilder,
    CacheStats,
    TTLCache,
    build_cache_key,
)
from .caches import RuntimeCaches
from .errors import (
    CacheConfigError,
    CacheKeyError,
    ClinicoreError,
    InvocationError,
    RetryableInvocationError,
)
from .runtime import (
    CachePolicy,
    CoalescingPolicy,
    RequestCoalescer,
    RetryableInvoker,
    RetryPolicy,
    call_with_retry,
    is_retryable_error,
)
from .settings import CacheSettings
from .types import (
    InvocationRequest,
    InvocationResult,
    JSONObject,
    JSONValue,
    Message,
)

__all__ = [
    "CacheBackend",
    "CacheEntry",
    "CacheKeyBuilder",
    "CacheStats",
    "TTLCache",
    "build_cache_key",
    "RuntimeCaches",
    "ClinicoreError",
    "CacheConfigError",
    "CacheKeyError",
    "InvocationError",
    "RetryableInvocationError",
    "CachePolicy",
    "CoalescingPolicy",
    "RequestCoalescer",
    "RetryableInvoker",
    "RetryPolicy",
    "call_with_retry",
    "is_retryable_error",
    "CacheSettings",
    "InvocationRequest",
    "InvocationResult",
    "JSONObject",
    "JSONValue",
    "Message",
]
