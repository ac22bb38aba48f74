"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: runtime/__init__.py.
"""

from .coalescing import RequestCoalescer
from .contracts import CachePolicy, CoalescingPolicy, RetryPolicy
from .invoker import RetryableInvoker
from .retry import call_with_retry, is_retryable_error

__all__ = [
    "RetryableInvoker",
    "RequestCoalescer",
    "RetryPolicy",
    "CachePolicy",
    "CoalescingPolicy",
    "call_with_retry",
    "is_retryable_error",
]
