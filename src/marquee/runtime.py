"""Cooperative scheduling — timers, animation frames, background tasks.

Every time-dependent component (notifications, counters, the contact
form) takes a ``Scheduler`` instead of touching an event loop directly.
Production code uses ``Runtime``, an anyio task group; tests use
``marquee.testing.ManualScheduler``, which advances a virtual clock.

Usage::

    async with Runtime() as runtime:
        site = Site(document, runtime).install()
        await page_closed.wait()

All callbacks run on the runtime's single event loop. A callback that
raises is logged and does not stop the loop, the same way a failing
event handler does not take down a page.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any, Protocol, Self

import anyio
from anyio.abc import TaskGroup

logger = logging.getLogger("marquee.runtime")

type Callback = Callable[[], None]
type FrameCallback = Callable[[float], None]


class Handle:
    """A pending timer or frame callback.

    ``cancel()`` is idempotent and a no-op once the callback has fired.
    """

    __slots__ = ("_scope", "cancelled", "fired")

    def __init__(self, scope: anyio.CancelScope | None = None) -> None:
        self._scope = scope
        self.cancelled = False
        self.fired = False

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)

    def cancel(self) -> None:
        if not self.pending:
            return
        self.cancelled = True
        if self._scope is not None:
            self._scope.cancel()


class Scheduler(Protocol):
    """What components need from the event loop."""

    def now(self) -> float:
        """Monotonic time in seconds."""
        ...

    def call_later(self, delay: float, callback: Callback) -> Handle: ...

    def request_frame(self, callback: FrameCallback) -> Handle:
        """Run *callback(timestamp)* before the next frame."""
        ...

    def spawn(self, func: Callable[..., Awaitable[Any]], *args: Any) -> None:
        """Run an async function in the background."""
        ...


def run_callback(callback: Callable[..., None], *args: Any) -> None:
    """Invoke a scheduled callback, logging instead of propagating failures."""
    try:
        callback(*args)
    except Exception:
        logger.exception("Scheduled callback %r failed", callback)


class Runtime:
    """anyio-backed ``Scheduler``.

    Owns a task group for its lifetime. Leaving the ``async with`` block
    cancels every pending timer, frame and background task, like a page
    unload.
    """

    __slots__ = ("_frame_interval", "_task_group")

    def __init__(self, *, frame_interval: float = 1 / 60) -> None:
        self._frame_interval = frame_interval
        self._task_group: TaskGroup | None = None

    async def __aenter__(self) -> Self:
        task_group = anyio.create_task_group()
        await task_group.__aenter__()
        self._task_group = task_group
        return self

    async def __aexit__(self, *exc_info: Any) -> bool | None:
        task_group, self._task_group = self._task_group, None
        if task_group is None:
            return None
        task_group.cancel_scope.cancel()
        return await task_group.__aexit__(*exc_info)

    def now(self) -> float:
        return anyio.current_time()

    def call_later(self, delay: float, callback: Callback) -> Handle:
        scope = anyio.CancelScope()
        handle = Handle(scope)
        self._group.start_soon(self._run_later, handle, scope, max(delay, 0.0), callback)
        return handle

    def request_frame(self, callback: FrameCallback) -> Handle:
        return self.call_later(self._frame_interval, lambda: callback(self.now()))

    def spawn(self, func: Callable[..., Awaitable[Any]], *args: Any) -> None:
        self._group.start_soon(self._run_task, func, args)

    @property
    def _group(self) -> TaskGroup:
        if self._task_group is None:
            msg = "Runtime is not running. Use 'async with Runtime() as runtime:'"
            raise RuntimeError(msg)
        return self._task_group

    async def _run_later(
        self, handle: Handle, scope: anyio.CancelScope, delay: float, callback: Callback
    ) -> None:
        with scope:
            await anyio.sleep(delay)
        if handle.cancelled:
            return
        handle.fired = True
        run_callback(callback)

    async def _run_task(self, func: Callable[..., Awaitable[Any]], args: tuple[Any, ...]) -> None:
        try:
            await func(*args)
        except Exception:
            logger.exception("Background task %r failed", func)
