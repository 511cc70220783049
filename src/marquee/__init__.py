"""Marquee — the interaction layer of a marketing site, without a browser.

Validates and submits the contact form, shows one notification at a
time, opens the success modal, and counts stat numbers up when they come
into view. The page is reached through small DOM protocols, time through
a ``Scheduler``.

Basic usage::

    from marquee import Runtime, Site

    async with Runtime() as runtime:
        site = Site(document, runtime, observer=observer).install()

Pure validation::

    from marquee.validation import CONTACT_RULES, evaluate
    verdict = evaluate(CONTACT_RULES, {"email": "bad"})
"""

__version__ = "0.1.0.dev0"
__all__ = [
    "ConfigurationError",
    "FieldRule",
    "FormSnapshot",
    "MarqueeError",
    "NotificationService",
    "RevealCounterAnimator",
    "Runtime",
    "Severity",
    "Site",
    "SiteConfig",
    "SubmissionController",
    "evaluate",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import marquee`` cheap: httpx and kida load on first use.
    """
    if name == "Site":
        from marquee.site import Site

        return Site

    if name == "SiteConfig":
        from marquee.config import SiteConfig

        return SiteConfig

    if name == "Runtime":
        from marquee.runtime import Runtime

        return Runtime

    if name in ("MarqueeError", "ConfigurationError"):
        from marquee import errors as _errors

        return getattr(_errors, name)

    if name in ("FieldRule", "evaluate"):
        from marquee import validation as _validation

        return getattr(_validation, name)

    if name in ("FormSnapshot", "SubmissionController"):
        from marquee import forms as _forms

        return getattr(_forms, name)

    if name in ("NotificationService", "Severity"):
        from marquee import notifications as _notifications

        return getattr(_notifications, name)

    if name == "RevealCounterAnimator":
        from marquee.counters import RevealCounterAnimator

        return RevealCounterAnimator

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
