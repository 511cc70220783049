"""Deterministic scheduler for tests.

``ManualScheduler`` implements the ``Scheduler`` protocol on a virtual
clock. Nothing happens until the test moves time forward::

    scheduler = ManualScheduler()
    notifications = NotificationService(document, scheduler)
    notifications.show("Saved")
    scheduler.advance(5.0)      # auto-dismiss starts the exit transition
    scheduler.advance(0.3)      # element removed

Background tasks from ``spawn()`` are collected and run by ``settle()``.
Unlike ``Runtime``, failures in timers and tasks propagate, so a broken
callback fails the test that triggered it.
"""

import heapq
import itertools
from collections.abc import Awaitable, Callable
from typing import Any

from marquee.runtime import Callback, FrameCallback, Handle


class ManualScheduler:
    __slots__ = ("_frame_interval", "_now", "_queue", "_sequence", "_tasks")

    def __init__(self, *, frame_interval: float = 1 / 60, start: float = 0.0) -> None:
        self._frame_interval = frame_interval
        self._now = start
        self._queue: list[tuple[float, int, Handle, Callback]] = []
        self._sequence = itertools.count()
        self._tasks: list[Awaitable[Any]] = []

    def now(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callback) -> Handle:
        handle = Handle()
        due = self._now + max(delay, 0.0)
        heapq.heappush(self._queue, (due, next(self._sequence), handle, callback))
        return handle

    def request_frame(self, callback: FrameCallback) -> Handle:
        return self.call_later(self._frame_interval, lambda: callback(self._now))

    def spawn(self, func: Callable[..., Awaitable[Any]], *args: Any) -> None:
        self._tasks.append(func(*args))

    # -- test controls --

    @property
    def pending(self) -> int:
        """Number of timers and frames still waiting to fire."""
        return sum(1 for _, _, handle, _ in self._queue if handle.pending)

    @property
    def pending_tasks(self) -> int:
        return len(self._tasks)

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing everything that comes due. Returns the count fired."""
        deadline = self._now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= deadline:
            due, _, handle, callback = heapq.heappop(self._queue)
            self._now = max(self._now, due)
            if not handle.pending:
                continue
            handle.fired = True
            callback()
            fired += 1
        self._now = deadline
        return fired

    def run_until_idle(self, *, limit: float = 60.0) -> None:
        """Advance until no timers remain, or *limit* virtual seconds pass."""
        end = self._now + limit
        while self._now < end:
            upcoming = [due for due, _, handle, _ in self._queue if handle.pending]
            if not upcoming:
                return
            self.advance(max(min(upcoming) - self._now, 0.0))

    async def settle(self) -> None:
        """Await every spawned task, including tasks spawned while settling."""
        while self._tasks:
            task = self._tasks.pop(0)
            await task
