"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

clinicore: cached, retry-wrapped external calls for the clinic assistant backend.
"""

from .llms import (
    CacheSettings,
    InvocationRequest,
    InvocationResult,
    Message,
    RetryableInvoker,
    RuntimeCaches,
    TTLCache,
    build_cache_key,
)

__all__ = [
    "CacheSettings",
    "InvocationRequest",
    "InvocationResult",
    "Message",
    "RetryableInvoker",
    "RuntimeCaches",
    "TTLCache",
    "build_cache_key",
]
