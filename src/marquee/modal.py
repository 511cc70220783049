"""Success modal — the acknowledgement shown after a contact submission.

The modal element is static page markup; this component only toggles
its ``active`` class and locks page scrolling while it is open. It closes
from the close button, the OK button, a click on the overlay itself (not
on the dialog inside it), and the Escape key.
"""

from __future__ import annotations

from marquee.config import SiteConfig
from marquee.dom import Document, Element, Event
from marquee.events import SubscriptionGroup


class SuccessModal:
    """Open/close controller for the success modal."""

    __slots__ = ("_config", "_document", "_element", "_subscriptions")

    def __init__(
        self,
        document: Document,
        element: Element,
        *,
        config: SiteConfig | None = None,
    ) -> None:
        self._document = document
        self._element = element
        self._config = config or SiteConfig()
        self._subscriptions = SubscriptionGroup()

    @property
    def is_open(self) -> bool:
        return self._config.modal_active_class in self._element.classes

    def open(self) -> None:
        self._element.classes.add(self._config.modal_active_class)
        self._document.body.style["overflow"] = "hidden"

    def close(self) -> None:
        self._element.classes.remove(self._config.modal_active_class)
        self._document.body.style["overflow"] = "auto"

    def attach(self) -> SuccessModal:
        """Register the close triggers. Calling it again re-registers cleanly."""
        self.detach()
        for button_id in (self._config.modal_close_id, self._config.modal_ok_id):
            button = self._document.get_element_by_id(button_id)
            if button is not None:
                self._subscriptions.add(button.add_listener("click", self._on_button))
        self._subscriptions.add(self._element.add_listener("click", self._on_overlay_click))
        self._subscriptions.add(self._document.add_listener("keydown", self._on_keydown))
        return self

    def detach(self) -> None:
        self._subscriptions.cancel()

    def _on_button(self, event: Event) -> None:
        self.close()

    def _on_overlay_click(self, event: Event) -> None:
        if event.target is self._element:
            self.close()

    def _on_keydown(self, event: Event) -> None:
        if event.key == "Escape" and self.is_open:
            self.close()
