"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: runtime/coalescing.py.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any


@dataclass(slots=True)
class _InFlight:
    """One shared task plus the number of callers awaiting it."""

    task: asyncio.Task[Any]
    waiters: int = 0


class RequestCoalescer:
    """
    Deduplicate identical in-flight requests on one event loop.

    The shared task is cancelled once its last waiter leaves, so a call
    nobody awaits any more does not keep running.
    """

    def __init__(self) -> None:
        self._rows: dict[str, _InFlight] = {}

    def in_flight(self) -> list[str]:
        return sorted(self._rows.keys())

    async def run(self, key: str, factory: Callable[[], Awaitable[Any]]) -> Any:
        row = self._rows.get(key)
        if row is None:
            row = _InFlight(task=asyncio.ensure_future(factory()))
            self._rows[key] = row
            row.task.add_done_callback(lambda _t: self._forget(key, row))

        row.waiters += 1
        try:
            return await asyncio.shield(row.task)
        finally:
            row.waiters -= 1
            if row.waiters == 0 and not row.task.done():
                self._forget(key, row)
                row.task.cancel()

    def _forget(self, key: str, row: _InFlight) -> None:
        if self._rows.get(key) is row:
            del self._rows[key]
