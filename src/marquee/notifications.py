"""Notification surface — one transient message at a time.

``show()`` replaces whatever is on screen (remove, then insert; nothing
queues). A notification leaves on its own after
``SiteConfig.notification_timeout`` seconds, or earlier when the user
clicks its close button. Leaving always plays the exit transition first:
the ``visible`` class is dropped, ``leaving`` is added, and the element is
removed ``notification_exit_duration`` seconds later.

``dismiss()`` is idempotent. A timer that fires after a manual dismissal,
or after the notification was replaced, finds nothing to do.

Usage::

    notifications = NotificationService(document, runtime)
    notifications.show("Copied to clipboard", Severity.SUCCESS)
"""

import logging
from dataclasses import dataclass
from enum import StrEnum

from marquee.config import SiteConfig
from marquee.dom import Document, Element
from marquee.runtime import Handle, Scheduler
from marquee.templating import render_notification

logger = logging.getLogger("marquee.notifications")


class Severity(StrEnum):
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True, slots=True)
class NotificationRecord:
    """The message currently on the surface."""

    message: str
    severity: Severity
    created_at: float


@dataclass(slots=True)
class _Active:
    record: NotificationRecord
    element: Element
    timer: Handle | None = None
    exit_timer: Handle | None = None
    leaving: bool = False

    def cancel_timers(self) -> None:
        for handle in (self.timer, self.exit_timer):
            if handle is not None:
                handle.cancel()


class NotificationService:
    """Queue-of-one notification surface.

    State (the single active notification) lives on the instance, so
    separate services never interfere with each other.
    """

    __slots__ = ("_active", "_config", "_document", "_mount", "_scheduler")

    def __init__(
        self,
        document: Document,
        scheduler: Scheduler,
        *,
        mount: Element | None = None,
        config: SiteConfig | None = None,
    ) -> None:
        self._document = document
        self._scheduler = scheduler
        self._mount = mount
        self._config = config or SiteConfig()
        self._active: _Active | None = None

    @property
    def active(self) -> NotificationRecord | None:
        """The notification on the surface, including one that is leaving."""
        return self._active.record if self._active is not None else None

    @property
    def leaving(self) -> bool:
        return self._active is not None and self._active.leaving

    def show(self, message: str, severity: Severity | str = Severity.INFO) -> NotificationRecord:
        """Replace the current notification with *message*."""
        severity = Severity(severity)
        self._evict()

        record = NotificationRecord(message, severity, self._scheduler.now())
        active = _Active(record=record, element=self._build(record))
        self._active = active

        close = self._document.create_element("button")
        close.set_attribute("type", "button")
        close.set_attribute("aria-label", "Close notification")
        close.classes.add(f"{self._config.notification_class}-close")
        close.inner_html = "&times;"
        close.add_listener("click", lambda _event: self._dismiss(active))
        active.element.append(close)

        (self._mount or self._document.body).append(active.element)
        self._scheduler.request_frame(lambda _ts: self._enter(active))
        active.timer = self._scheduler.call_later(
            self._config.notification_timeout, lambda: self._dismiss(active)
        )
        logger.debug("Showing %s notification", severity)
        return record

    def dismiss(self) -> None:
        """Start the exit transition of the current notification, if any."""
        if self._active is not None:
            self._dismiss(self._active)

    # -- internals --

    def _build(self, record: NotificationRecord) -> Element:
        base = self._config.notification_class
        element = self._document.create_element("div")
        element.classes.add(base)
        element.classes.add(f"{base}-{record.severity}")
        urgent = record.severity in (Severity.ERROR, Severity.WARNING)
        element.set_attribute("role", "alert" if urgent else "status")

        body = self._document.create_element("div")
        body.classes.add(f"{base}-body")
        body.inner_html = render_notification(record.message, record.severity)
        element.append(body)
        return element

    def _enter(self, active: _Active) -> None:
        if active is self._active and not active.leaving:
            active.element.classes.add(self._config.notification_visible_class)

    def _dismiss(self, active: _Active) -> None:
        if active is not self._active or active.leaving:
            return
        active.leaving = True
        active.cancel_timers()
        active.element.classes.remove(self._config.notification_visible_class)
        active.element.classes.add(self._config.notification_leaving_class)
        active.exit_timer = self._scheduler.call_later(
            self._config.notification_exit_duration, lambda: self._finish(active)
        )

    def _finish(self, active: _Active) -> None:
        if active is not self._active:
            return
        self._active = None
        active.element.remove()

    def _evict(self) -> None:
        active, self._active = self._active, None
        if active is None:
            return
        active.cancel_timers()
        active.element.remove()
