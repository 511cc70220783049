"""Submission outcomes — the classified result of one network exchange.

Outcomes are values, not exceptions. ``SubmissionController`` matches on
them to decide which surface to show::

    match outcome:
        case Success():
            modal.open()
        case ServerRejected(reason=reason) | NetworkFailure(reason=reason):
            logger.warning("Form submission error: %s", reason)
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Success:
    """The endpoint accepted the submission."""

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class ServerRejected:
    """The endpoint answered but declined (non-2xx or ``success: false``).

    ``reason`` is diagnostic only; it is logged, never shown to the user.
    """

    reason: str
    status: int | None = None

    @property
    def ok(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class NetworkFailure:
    """The exchange failed at the transport level (DNS, connect, timeout)."""

    reason: str

    @property
    def ok(self) -> bool:
        return False


type SubmissionOutcome = Success | ServerRejected | NetworkFailure
