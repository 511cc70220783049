"""Submission controller — send one snapshot, react to the outcome.

Pipeline for a single submit::

    1. Engage the busy state (button disabled, spinner shown)
    2. POST the snapshot as JSON to the contact endpoint (exactly once)
    3. Classify the response into a SubmissionOutcome
    4. Success  → reset the form, open the success modal, report analytics
       Failure  → log the reason, show one generic error notification
    5. Release the busy state, whatever happened above

The user never sees the server's or the transport's wording; both failure
kinds get ``SiteConfig.submission_error_message``.
"""

import logging
from collections.abc import Callable
from typing import Any

import httpx

from marquee.analytics import Analytics, track
from marquee.config import SiteConfig
from marquee.forms.busy import BusyState
from marquee.forms.outcome import NetworkFailure, ServerRejected, SubmissionOutcome, Success
from marquee.forms.snapshot import FormSnapshot
from marquee.notifications import NotificationService, Severity

logger = logging.getLogger("marquee.forms")

_DEFAULT_REJECTION = "Something went wrong"


class SubmissionController:
    """Orchestrates one contact submission at a time.

    Args:
        notifications: Surface for the failure message (and the success
            message when no modal is available).
        busy: Busy-state toggle for the submit button.
        client: Shared ``httpx.AsyncClient``. When omitted, a client is
            created per request from ``config.base_url``.
        acknowledge: Success acknowledgement, normally ``SuccessModal.open``.
        reset: Clears the form's inputs after a success.
        analytics: Optional ``(event, params)`` hook, called best-effort.
    """

    __slots__ = (
        "_acknowledge",
        "_analytics",
        "_busy",
        "_client",
        "_config",
        "_notifications",
        "_reset",
    )

    def __init__(
        self,
        notifications: NotificationService,
        *,
        busy: BusyState | None = None,
        client: httpx.AsyncClient | None = None,
        acknowledge: Callable[[], None] | None = None,
        reset: Callable[[], None] | None = None,
        analytics: Analytics | None = None,
        config: SiteConfig | None = None,
    ) -> None:
        self._config = config or SiteConfig()
        self._notifications = notifications
        self._busy = busy or BusyState(None, label=self._config.busy_label)
        self._client = client
        self._acknowledge = acknowledge
        self._reset = reset
        self._analytics = analytics

    @property
    def busy(self) -> bool:
        return self._busy.busy

    async def submit(self, snapshot: FormSnapshot) -> SubmissionOutcome:
        """Send *snapshot* and react to the outcome.

        The busy state is released on every path, including an unexpected
        exception from a success reaction.
        """
        self._busy.engage()
        try:
            outcome = await self.send(snapshot)
            self._react(outcome)
            return outcome
        finally:
            self._busy.release()

    async def send(self, snapshot: FormSnapshot) -> SubmissionOutcome:
        """Perform the HTTP exchange and classify it. No side effects on the page.

        Never raises: any exception from the exchange itself (a closed client
        included) becomes a ``NetworkFailure``.
        """
        payload = snapshot.to_payload()
        try:
            response = await self._post(payload)
        except httpx.RequestError as exc:
            return NetworkFailure(reason=str(exc) or type(exc).__name__)
        except Exception as exc:
            logger.exception("Unexpected error while sending the contact form")
            return NetworkFailure(reason=f"{type(exc).__name__}: {exc}")
        return classify(response)

    async def _post(self, payload: dict[str, str]) -> httpx.Response:
        endpoint = self._config.contact_endpoint
        if self._client is not None:
            return await self._client.post(endpoint, json=payload)
        async with httpx.AsyncClient(base_url=self._config.base_url) as client:
            return await client.post(endpoint, json=payload)

    def _react(self, outcome: SubmissionOutcome) -> None:
        match outcome:
            case Success():
                if self._reset is not None:
                    self._reset()
                self._acknowledge_success()
                track(
                    self._analytics,
                    self._config.analytics_event,
                    {
                        "event_category": self._config.analytics_category,
                        "event_label": self._config.analytics_label,
                    },
                )
            case ServerRejected(reason=reason) | NetworkFailure(reason=reason):
                logger.warning("Form submission error (%s): %s", type(outcome).__name__, reason)
                self._notifications.show(self._config.submission_error_message, Severity.ERROR)

    def _acknowledge_success(self) -> None:
        if self._acknowledge is not None:
            self._acknowledge()
        else:
            self._notifications.show(self._config.submission_success_message, Severity.SUCCESS)


def classify(response: httpx.Response) -> SubmissionOutcome:
    """Map an endpoint response to an outcome.

    - non-2xx status → ``ServerRejected``
    - body that is not a JSON object, or lacks a truthy ``success`` →
      ``ServerRejected`` carrying the body's ``error`` (if any)
    - otherwise → ``Success``
    """
    if not response.is_success:
        return ServerRejected(reason=f"HTTP {response.status_code}", status=response.status_code)
    try:
        body: Any = response.json()
    except ValueError:
        return ServerRejected(reason="Response body is not JSON", status=response.status_code)
    if not isinstance(body, dict):
        return ServerRejected(reason="Response body is not an object", status=response.status_code)
    if not body.get("success"):
        reason = body.get("error") or _DEFAULT_REJECTION
        return ServerRejected(reason=str(reason), status=response.status_code)
    return Success()
