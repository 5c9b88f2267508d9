"""Recurring task scheduling with an explicit cancellation handle.

``AsyncioScheduler`` runs callbacks on the event loop in real time.
``VirtualScheduler`` keeps its own clock that only moves when ``advance`` is
called, so expiry behaviour can be tested without waiting.
"""

import asyncio
import heapq
import itertools
import logging
import time
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)


class RecurringTask:
    """Handle for a callback that runs every ``interval`` seconds until cancelled."""

    def __init__(self, callback: Callable[[], object], interval: float):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.callback = callback
        self.interval = interval
        self.run_count = 0
        self._cancelled = False
        self._task: asyncio.Task[None] | None = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Stop future runs. Safe to call more than once."""
        self._cancelled = True
        if self._task is not None and not self._task.done():
            self._task.cancel()

    def run(self) -> None:
        """Run the callback once, logging (not raising) its errors."""
        self.run_count += 1
        try:
            self.callback()
        except Exception:
            logger.exception(f"Recurring task {self.callback!r} failed")


class Scheduler(Protocol):
    def time(self) -> float: ...

    def call_every(self, interval: float, callback: Callable[[], object]) -> RecurringTask: ...


class AsyncioScheduler:
    """Wall-clock scheduler; must be used from inside a running event loop."""

    def time(self) -> float:
        return time.time()

    def call_every(self, interval: float, callback: Callable[[], object]) -> RecurringTask:
        handle = RecurringTask(callback, interval)
        handle._task = asyncio.create_task(self._loop(handle))
        return handle

    async def _loop(self, handle: RecurringTask) -> None:
        while not handle.cancelled:
            try:
                await asyncio.sleep(handle.interval)
            except asyncio.CancelledError:
                break
            if not handle.cancelled:
                handle.run()


class VirtualScheduler:
    """Deterministic scheduler driven by ``advance``."""

    def __init__(self, start: float = 0.0):
        self._now = start
        self._queue: list[tuple[float, int, RecurringTask]] = []
        self._seq = itertools.count()

    def time(self) -> float:
        return self._now

    def call_every(self, interval: float, callback: Callable[[], object]) -> RecurringTask:
        handle = RecurringTask(callback, interval)
        heapq.heappush(self._queue, (self._now + interval, next(self._seq), handle))
        return handle

    def advance(self, seconds: float) -> None:
        """Move the clock forward, running every callback that falls due in order."""
        if seconds < 0:
            raise ValueError("cannot move time backwards")
        target = self._now + seconds
        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self._now = due
            handle.run()
            if not handle.cancelled:
                heapq.heappush(self._queue, (due + handle.interval, next(self._seq), handle))
        self._now = target

    @property
    def pending(self) -> int:
        return sum(1 for _, _, handle in self._queue if not handle.cancelled)
