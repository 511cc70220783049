"""Marquee exception hierarchy.

Submission outcomes are plain values (see ``marquee.forms.outcome``), so
the only exceptions here are programming and configuration errors.
"""


class MarqueeError(Exception):
    """Base for all marquee-specific errors."""


class ConfigurationError(MarqueeError):
    """Raised when a rule set or site configuration is malformed.

    Typically raised at startup, while building ``FieldRule`` objects or
    calling ``rule_set()``. Never produced during form evaluation.
    """
