"""Visibility triggers — "fire once when this scrolls into view".

The host supplies a ``VisibilityObserver`` (an intersection observer in a
browser, ``FakeVisibilityObserver`` in tests). ``reveal_once`` wraps it
into the one-shot shape the counters need: the first intersecting entry
runs the callback and the target is unobserved.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from marquee.events import Subscription


@dataclass(frozen=True, slots=True)
class VisibilityEntry:
    """One observation of a target's intersection with the viewport."""

    target: Any
    is_intersecting: bool
    ratio: float = 0.0


class VisibilityObserver(Protocol):
    def observe(
        self,
        target: Any,
        callback: Callable[[VisibilityEntry], None],
        *,
        threshold: float = 0.0,
    ) -> Subscription:
        """Report *target*'s visibility changes until the subscription is cancelled."""
        ...


def reveal_once(
    observer: VisibilityObserver,
    target: Any,
    callback: Callable[[], None],
    *,
    threshold: float = 0.5,
) -> Subscription:
    """Run *callback* the first time *target* intersects the viewport.

    The returned subscription is cancelled automatically right before the
    callback runs; cancelling it earlier disarms the trigger.
    """
    subscription: Subscription | None = None
    fired = False

    def on_entry(entry: VisibilityEntry) -> None:
        nonlocal fired
        if fired or not entry.is_intersecting:
            return
        fired = True
        if subscription is not None:
            subscription.cancel()
        callback()

    subscription = observer.observe(target, on_entry, threshold=threshold)
    return subscription
