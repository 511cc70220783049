"""Field rules for the contact form.

A ``FieldRule`` is a static descriptor: presence, pattern and minimum
length checks sharing one human-readable message. Internally each check
is a small validator with the signature::

    def check(value: str) -> str | None:
        '''Return error message, or None if valid.'''

The rule runs its validators in a fixed order (required, pattern,
min_length) and reports its own message for the first failure, so a
field never gets a compound message. Inside a rule a validator result is
only a pass/fail signal; the generic messages the validators return are
what callers see when they use them on their own, outside a ``FieldRule``.
"""

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from marquee.errors import ConfigurationError

# Type alias for a validator function
type Validator = Callable[[str], str | None]


# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------


def required(value: str) -> str | None:
    """Field must be present and not just whitespace."""
    if not value or not value.strip():
        return "This field is required"
    return None


def min_length(n: int) -> Validator:
    """Trimmed value must be at least *n* characters."""

    def check(value: str) -> str | None:
        if len(value.strip()) < n:
            return f"Must be at least {n} characters"
        return None

    return check


def matches(pattern: str | re.Pattern[str], message: str | None = None) -> Validator:
    """Value must contain a match for *pattern* (search semantics, not a full match)."""
    compiled = re.compile(pattern)

    def check(value: str) -> str | None:
        if not compiled.search(value):
            return message or f"Must match pattern: {compiled.pattern}"
        return None

    return check


# Something@something.something, no whitespace
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


# ---------------------------------------------------------------------------
# Rule descriptor
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FieldRule:
    """Validation rule for one form field.

    ``pattern`` accepts a string or a compiled pattern; it is compiled
    once here. Invalid rules raise ``ConfigurationError`` at construction,
    never during evaluation.

    Example::

        FieldRule("email", required=True, pattern=EMAIL_PATTERN,
                  message="Please enter a valid email address")
    """

    name: str
    message: str
    required: bool = False
    min_length: int | None = None
    pattern: re.Pattern[str] | str | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ConfigurationError("FieldRule name must be a non-empty string")
        if self.min_length is not None and self.min_length < 0:
            msg = f"FieldRule {self.name!r}: min_length must be non-negative, got {self.min_length}"
            raise ConfigurationError(msg)
        if isinstance(self.pattern, str):
            try:
                compiled = re.compile(self.pattern)
            except re.error as exc:
                msg = f"FieldRule {self.name!r}: invalid pattern {self.pattern!r}: {exc}"
                raise ConfigurationError(msg) from exc
            object.__setattr__(self, "pattern", compiled)

    def validators(self) -> list[Validator]:
        """The checks this rule runs, in evaluation order."""
        checks: list[Validator] = []
        if self.required:
            checks.append(required)
        if self.pattern is not None:
            checks.append(matches(self.pattern))
        if self.min_length:
            checks.append(min_length(self.min_length))
        return checks

    def check(self, value: str) -> str | None:
        """Return this rule's message if *value* fails any check."""
        for validator in self.validators():
            if validator(value) is not None:
                return self.message
        return None


def rule_set(*rules: FieldRule) -> tuple[FieldRule, ...]:
    """Freeze *rules* into an ordered rule set with unique field names."""
    _check_unique(rules)
    return rules


def _check_unique(rules: Iterable[FieldRule]) -> None:
    seen: set[str] = set()
    for rule in rules:
        if rule.name in seen:
            msg = f"Duplicate rule for field {rule.name!r}"
            raise ConfigurationError(msg)
        seen.add(rule.name)


# ---------------------------------------------------------------------------
# Contact form
# ---------------------------------------------------------------------------

CONTACT_RULES = rule_set(
    FieldRule(
        "name",
        required=True,
        min_length=2,
        message="Please enter your full name",
    ),
    FieldRule(
        "email",
        required=True,
        pattern=EMAIL_PATTERN,
        message="Please enter a valid email address",
    ),
    FieldRule(
        "message",
        required=True,
        min_length=10,
        message="Please tell us more about your project (minimum 10 characters)",
    ),
)
