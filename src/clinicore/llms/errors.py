"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Error taxonomy for cache and invocation runtime.
"""

from __future__ import annotations


class ClinicoreError(Exception):
    """Base error for clinicore runtime failures."""


class CacheConfigError(ClinicoreError, ValueError):
    """Raised when cache or runtime settings are invalid."""


class CacheKeyError(ClinicoreError, ValueError):
    """Raised when a request cannot be fingerprinted into a cache key."""


class InvocationError(ClinicoreError):
    """Base error callers may raise from external-call functions."""


class RetryableInvocationError(InvocationError):
    """Transient external failure that is always eligible for retry."""
