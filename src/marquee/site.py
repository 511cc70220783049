"""Site assembly — wire every component to one page.

``Site.install()`` looks up each mount point and sets up whatever the
page actually has: no contact form means no form wiring, no stats means
no counters. Nothing is an error at this level; the page decides.

Usage::

    async with Runtime() as runtime:
        site = Site(document, runtime, observer=observer).install()
        ...
        site.uninstall()
"""

from __future__ import annotations

import logging
from typing import cast

import httpx

from marquee.analytics import Analytics
from marquee.config import SiteConfig
from marquee.counters import RevealCounterAnimator
from marquee.dom import Document, FormElement
from marquee.forms import BusyState, ContactForm, FieldAnnotator, SubmissionController
from marquee.modal import SuccessModal
from marquee.notifications import NotificationService
from marquee.runtime import Scheduler
from marquee.validation import CONTACT_RULES
from marquee.visibility import VisibilityObserver

logger = logging.getLogger("marquee.site")


class Site:
    """The interaction layer for one page.

    Components are created by ``install()`` and exposed as attributes
    (``None`` when the page has no mount point for them).
    """

    __slots__ = (
        "_analytics",
        "_client",
        "_observer",
        "config",
        "contact_form",
        "counters",
        "document",
        "modal",
        "notifications",
        "scheduler",
    )

    def __init__(
        self,
        document: Document,
        scheduler: Scheduler,
        config: SiteConfig | None = None,
        *,
        observer: VisibilityObserver | None = None,
        client: httpx.AsyncClient | None = None,
        analytics: Analytics | None = None,
    ) -> None:
        self.document = document
        self.scheduler = scheduler
        self.config: SiteConfig = config or SiteConfig()
        self._observer = observer
        self._client = client
        self._analytics = analytics
        self.notifications: NotificationService | None = None
        self.modal: SuccessModal | None = None
        self.contact_form: ContactForm | None = None
        self.counters: RevealCounterAnimator | None = None

    def install(self) -> Site:
        """Set up every component whose mount point exists. Idempotent."""
        self.uninstall()
        config = self.config
        notifications = NotificationService(self.document, self.scheduler, config=config)
        self.notifications = notifications

        modal_element = self.document.get_element_by_id(config.success_modal_id)
        if modal_element is not None:
            self.modal = SuccessModal(self.document, modal_element, config=config).attach()

        form_element = self.document.get_element_by_id(config.contact_form_id)
        if form_element is not None:
            self._install_contact_form(cast(FormElement, form_element), notifications)

        counter_elements = self.document.query_all(config.counter_selector)
        if counter_elements:
            self.counters = RevealCounterAnimator(
                self.scheduler, observer=self._observer, config=config
            )
            container = self.document.query(config.counter_container_selector)
            self.counters.prime(counter_elements, container=container)

        logger.debug(
            "Installed: modal=%s contact_form=%s counters=%d",
            self.modal is not None,
            self.contact_form is not None,
            len(counter_elements),
        )
        return self

    def uninstall(self) -> None:
        """Remove every listener and pending trigger this site registered."""
        if self.modal is not None:
            self.modal.detach()
        if self.contact_form is not None:
            self.contact_form.detach()
        if self.counters is not None:
            self.counters.disarm()
        if self.notifications is not None:
            self.notifications.dismiss()
        self.modal = None
        self.contact_form = None
        self.counters = None
        self.notifications = None

    def _install_contact_form(
        self, form: FormElement, notifications: NotificationService
    ) -> None:
        config = self.config
        controller = SubmissionController(
            notifications,
            busy=BusyState(form.query(config.submit_button_selector), label=config.busy_label),
            client=self._client,
            acknowledge=self.modal.open if self.modal is not None else None,
            reset=form.reset,
            analytics=self._analytics,
            config=config,
        )
        self.contact_form = ContactForm(
            self.document,
            form,
            controller,
            self.scheduler,
            rules=CONTACT_RULES,
            annotator=FieldAnnotator(self.document, form, config=config),
        )
        self.contact_form.attach()
