"""DOM protocols — the page surface marquee drives.

Marquee never owns markup. It reaches the page through these structural
protocols, so the same components run against a real browser bridge or
the in-memory document in ``marquee.testing``.

Any object with the right shape works; nothing needs to subclass these.
"""

from __future__ import annotations

from collections.abc import Callable, MutableMapping
from dataclasses import dataclass
from typing import Any, Protocol

from marquee.events import Subscription


@dataclass(slots=True)
class Event:
    """A DOM event delivered to listeners.

    ``target`` is the element the event originated on. ``key`` is set
    for keyboard events.
    """

    type: str
    target: Any = None
    key: str | None = None
    default_prevented: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True


class ClassList(Protocol):
    def add(self, name: str) -> None: ...
    def remove(self, name: str) -> None: ...
    def __contains__(self, name: object) -> bool: ...


class Element(Protocol):
    """A node in the page.

    ``text`` mirrors ``textContent``; ``inner_html`` mirrors ``innerHTML``.
    ``remove()`` on a detached element is a no-op.
    """

    text: str
    inner_html: str
    disabled: bool

    @property
    def classes(self) -> ClassList: ...
    @property
    def style(self) -> MutableMapping[str, str]: ...
    @property
    def parent(self) -> Element | None: ...

    def get_attribute(self, name: str) -> str | None: ...
    def set_attribute(self, name: str, value: str) -> None: ...
    def query(self, selector: str) -> Element | None: ...
    def query_all(self, selector: str) -> list[Element]: ...
    def closest(self, selector: str) -> Element | None: ...
    def append(self, child: Element) -> None: ...
    def remove(self) -> None: ...
    def add_listener(
        self, event_type: str, handler: Callable[[Event], None], *, once: bool = False
    ) -> Subscription: ...


class FormElement(Element, Protocol):
    """A ``<form>`` element.

    ``values()`` returns the current value of every named control, the
    way ``new FormData(form)`` does. ``reset()`` restores the controls'
    initial values.
    """

    def values(self) -> dict[str, str]: ...
    def reset(self) -> None: ...


class Document(Protocol):
    @property
    def body(self) -> Element: ...

    def get_element_by_id(self, element_id: str) -> Element | None: ...
    def query(self, selector: str) -> Element | None: ...
    def query_all(self, selector: str) -> list[Element]: ...
    def create_element(self, tag: str) -> Element: ...
    def add_listener(
        self, event_type: str, handler: Callable[[Event], None], *, once: bool = False
    ) -> Subscription: ...
