"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: cache/__init__.py.
"""

from .base import CacheBackend, CacheEntry, CacheStats
from .keys import CacheKeyBuilder, build_cache_key
from .ttl import TTLCache

__all__ = [
    "CacheBackend",
    "CacheEntry",
    "CacheStats",
    "CacheKeyBuilder",
    "build_cache_key",
    "TTLCache",
]
