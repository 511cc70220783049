"""Inline validation feedback — the DOM side of a ``ValidationVerdict``.

``evaluate`` is pure; this adapter does the page work. For each failing
field it marks the field's ``.form-group`` with the ``error`` class,
appends an ``.error-message`` element with the rule message, and
registers a one-shot ``input`` listener that clears both on the next edit.

``clear()`` wipes all of that, including one-shot listeners that never
fired, so repeated submits never stack messages or listeners.
"""

import logging

from marquee.config import SiteConfig
from marquee.dom import Document, Element, Event, FormElement
from marquee.events import SubscriptionGroup
from marquee.validation import ValidationVerdict

logger = logging.getLogger("marquee.forms")


class FieldAnnotator:
    """Shows and clears per-field error messages inside one form."""

    __slots__ = ("_config", "_document", "_form", "_pending")

    def __init__(
        self,
        document: Document,
        form: FormElement,
        *,
        config: SiteConfig | None = None,
    ) -> None:
        self._document = document
        self._form = form
        self._config = config or SiteConfig()
        self._pending = SubscriptionGroup()

    def clear(self) -> None:
        """Remove every error state from the form."""
        self._pending.cancel()
        message_selector = f".{self._config.error_message_class}"
        for group in self._form.query_all(self._config.form_group_selector):
            group.classes.remove(self._config.error_class)
            for message in group.query_all(message_selector):
                message.remove()

    def annotate(self, verdict: ValidationVerdict) -> int:
        """Attach a message to every failing field. Returns how many were attached."""
        attached = 0
        for name, message in verdict.errors.items():
            field = self._form.query(f'[name="{name}"]')
            if field is None:
                logger.debug("No control named %r to annotate", name)
                continue
            group = field.closest(self._config.form_group_selector) or field.parent
            if group is None:
                continue
            self._attach(field, group, message)
            attached += 1
        return attached

    def _attach(self, field: Element, group: Element, message: str) -> None:
        group.classes.add(self._config.error_class)

        error = self._document.create_element("div")
        error.classes.add(self._config.error_message_class)
        error.set_attribute("role", "alert")
        error.text = message
        group.append(error)

        def on_input(event: Event) -> None:
            group.classes.remove(self._config.error_class)
            error.remove()

        self._pending.add(field.add_listener("input", on_input, once=True))
