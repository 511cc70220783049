"""Contact form wiring — intercept submit, validate, hand off.

Ties the pure pieces together on one ``<form>``::

    submit event
      → prevent_default()
      → FormSnapshot.capture(form)
      → evaluate(rules, snapshot)         # pure
      → FieldAnnotator.clear/annotate     # DOM side effects
      → scheduler.spawn(controller.submit, snapshot)   # only when valid

A submit while a previous one is still in flight is ignored; the button
is disabled during that window too.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from marquee.dom import Document, Event, FormElement
from marquee.events import Subscription
from marquee.forms.annotate import FieldAnnotator
from marquee.forms.controller import SubmissionController
from marquee.forms.snapshot import FormSnapshot
from marquee.runtime import Scheduler
from marquee.validation import CONTACT_RULES, FieldRule, ValidationVerdict, evaluate

logger = logging.getLogger("marquee.forms")


class ContactForm:
    """Binds validation and submission to a form's ``submit`` event."""

    __slots__ = (
        "_annotator",
        "_controller",
        "_form",
        "_in_flight",
        "_rules",
        "_scheduler",
        "_subscription",
    )

    def __init__(
        self,
        document: Document,
        form: FormElement,
        controller: SubmissionController,
        scheduler: Scheduler,
        *,
        rules: Iterable[FieldRule] = CONTACT_RULES,
        annotator: FieldAnnotator | None = None,
    ) -> None:
        self._form = form
        self._controller = controller
        self._scheduler = scheduler
        self._rules = tuple(rules)
        self._annotator = annotator or FieldAnnotator(document, form)
        self._subscription: Subscription | None = None
        self._in_flight = False

    @property
    def controller(self) -> SubmissionController:
        return self._controller

    def attach(self) -> Subscription:
        """Start intercepting submits. Re-attaching replaces the old listener."""
        self.detach()
        self._subscription = self._form.add_listener("submit", self._on_submit)
        return self._subscription

    def detach(self) -> None:
        if self._subscription is not None:
            self._subscription.cancel()
            self._subscription = None

    def validate(self, snapshot: FormSnapshot) -> ValidationVerdict:
        """Evaluate *snapshot* and refresh the inline messages."""
        self._annotator.clear()
        verdict = evaluate(self._rules, snapshot)
        if not verdict:
            self._annotator.annotate(verdict)
        return verdict

    def _on_submit(self, event: Event) -> None:
        event.prevent_default()
        if self._in_flight:
            logger.debug("Submit ignored: previous submission still in flight")
            return
        snapshot = FormSnapshot.capture(self._form)
        verdict = self.validate(snapshot)
        if not verdict:
            logger.debug("Contact form invalid: %s", ", ".join(verdict.errors))
            return
        self._in_flight = True
        self._scheduler.spawn(self._submit, snapshot)

    async def _submit(self, snapshot: FormSnapshot) -> None:
        try:
            await self._controller.submit(snapshot)
        finally:
            self._in_flight = False
