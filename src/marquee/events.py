"""Event subscriptions with an explicit cleanup contract.

Every listener registration returns a ``Subscription``. Cancelling it
removes the listener; cancelling twice is a no-op. Components collect
their subscriptions in a ``SubscriptionGroup`` so teardown (and test
re-registration) is deterministic::

    group = SubscriptionGroup()
    group.add(form.add_listener("submit", on_submit))
    ...
    group.cancel()
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

type Handler = Callable[[Any], None]


class Subscription:
    """Handle for one registered listener.

    ``cancel()`` runs the removal callback at most once.
    """

    __slots__ = ("_on_cancel", "active")

    def __init__(self, on_cancel: Callable[[], None] | None = None) -> None:
        self._on_cancel = on_cancel
        self.active = True

    def cancel(self) -> None:
        if not self.active:
            return
        self.active = False
        on_cancel, self._on_cancel = self._on_cancel, None
        if on_cancel is not None:
            on_cancel()

    def __repr__(self) -> str:
        state = "active" if self.active else "cancelled"
        return f"<Subscription {state}>"


@dataclass(slots=True)
class _Entry:
    handler: Handler
    once: bool
    subscription: Subscription = field(init=False)


class Listeners:
    """Per-target listener registry, keyed by event type.

    Dispatch iterates over a snapshot, so handlers may add or cancel
    listeners while an event is being delivered. One-shot listeners are
    unregistered before they run.
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: dict[str, list[_Entry]] = {}

    def add(self, event_type: str, handler: Handler, *, once: bool = False) -> Subscription:
        entry = _Entry(handler=handler, once=once)
        entry.subscription = Subscription(lambda: self._discard(event_type, entry))
        self._entries.setdefault(event_type, []).append(entry)
        return entry.subscription

    def dispatch(self, event_type: str, event: Any) -> int:
        """Deliver *event* to every listener of *event_type*.

        Returns the number of handlers invoked.
        """
        invoked = 0
        for entry in list(self._entries.get(event_type, ())):
            if not entry.subscription.active:
                continue
            if entry.once:
                entry.subscription.cancel()
            entry.handler(event)
            invoked += 1
        return invoked

    def count(self, event_type: str) -> int:
        return len(self._entries.get(event_type, ()))

    def clear(self) -> None:
        for entries in list(self._entries.values()):
            for entry in list(entries):
                entry.subscription.cancel()
        self._entries.clear()

    def _discard(self, event_type: str, entry: _Entry) -> None:
        entries = self._entries.get(event_type)
        if entries is None:
            return
        try:
            entries.remove(entry)
        except ValueError:
            return
        if not entries:
            del self._entries[event_type]


class SubscriptionGroup:
    """A batch of subscriptions cancelled together."""

    __slots__ = ("_subscriptions",)

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    def add(self, subscription: Subscription) -> Subscription:
        self._subscriptions.append(subscription)
        return subscription

    def cancel(self) -> None:
        subscriptions, self._subscriptions = self._subscriptions, []
        for subscription in subscriptions:
            subscription.cancel()

    def __iter__(self) -> Iterator[Subscription]:
        return iter(self._subscriptions)

    def __len__(self) -> int:
        return len(self._subscriptions)
