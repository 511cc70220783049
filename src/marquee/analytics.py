"""Best-effort analytics hook.

The host page may expose an event-reporting function (``gtag`` and
friends). Marquee calls it after a successful submission and never lets
it affect the outcome: a missing hook is skipped, a failing hook is
logged at DEBUG and forgotten.
"""

import logging
from collections.abc import Mapping
from typing import Any, Protocol

logger = logging.getLogger("marquee.analytics")


class Analytics(Protocol):
    """Protocol for analytics hooks.

    Any callable with this shape works::

        def gtag(event: str, params: Mapping[str, Any]) -> None:
            ...
    """

    def __call__(self, event: str, params: Mapping[str, Any]) -> None: ...


def track(hook: Analytics | None, event: str, params: Mapping[str, Any]) -> bool:
    """Report *event* through *hook*. Returns True if the hook accepted it."""
    if hook is None:
        return False
    try:
        hook(event, dict(params))
    except Exception:
        logger.debug("Analytics hook failed for %r", event, exc_info=True)
        return False
    return True
