"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: runtime/retry.py.
"""

from __future__ import annotations

import asyncio
import re
from collections.abc import Awaitable, Callable
from typing import TypeVar

from ..errors import InvocationError, RetryableInvocationError
from .contracts import RetryPolicy

T = TypeVar("T")

RETRY_PHRASES = (
    "rate limit",
    "too many requests",
    "internal server error",
    "bad gateway",
    "service unavailable",
    "timeout",
    "timed out",
)
# Transient status codes only.
_STATUS_RE = re.compile(r"(?<!\d)(429|500|502|503|504)(?!\d)")

RetryCallback = Callable[[int, Exception], None]


def is_retryable_error(error: BaseException) -> bool:
    """Return True when `error` looks like a transient infrastructure failure."""
    if isinstance(error, RetryableInvocationError):
        return True
    if isinstance(error, (asyncio.TimeoutError, TimeoutError)):
        return True
    msg = str(error).lower()
    if _STATUS_RE.search(msg):
        return True
    return any(token in msg for token in RETRY_PHRASES)


async def call_with_retry(
    fn: Callable[[], Awaitable[T]],
    *,
    policy: RetryPolicy,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    on_retry: RetryCallback | None = None,
) -> tuple[T, int]:
    """
    Execute callable under bounded retry policy.

    Returns the result together with the attempt index that produced it.
    Non-retryable errors and the failure of the final attempt are re-raised
    unchanged.
    """
    for attempt in range(policy.max_retries + 1):
        if attempt > 0:
            await sleep(policy.delay_for(attempt))
        try:
            return await fn(), attempt
        except Exception as error:
            if not is_retryable_error(error) or attempt >= policy.max_retries:
                raise
            if on_retry is not None:
                on_retry(attempt, error)
    raise InvocationError("Retry loop exhausted")
