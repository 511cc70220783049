"""Form validation — declarative field rules, pure evaluation.

Usage::

    from marquee.validation import CONTACT_RULES, evaluate

    verdict = evaluate(CONTACT_RULES, {"name": "", "email": "bad", "message": "hi"})
    if not verdict:
        # verdict.errors == {"name": "Please enter your full name", ...}
        ...

``evaluate`` has no side effects. Putting messages next to fields is the
job of ``marquee.forms.annotate.FieldAnnotator``.
"""

from collections.abc import Iterable, Mapping

from marquee.validation.result import ValidationVerdict
from marquee.validation.rules import (
    CONTACT_RULES,
    EMAIL_PATTERN,
    FieldRule,
    Validator,
    matches,
    min_length,
    required,
    rule_set,
)

__all__ = [
    "CONTACT_RULES",
    "EMAIL_PATTERN",
    "FieldRule",
    "ValidationVerdict",
    "Validator",
    "evaluate",
    "matches",
    "min_length",
    "required",
    "rule_set",
]


def evaluate(rules: Iterable[FieldRule], snapshot: Mapping[str, str]) -> ValidationVerdict:
    """Evaluate *snapshot* against *rules*.

    Args:
        rules: Field rules in declaration order.
        snapshot: Any mapping of field names to string values —
            a ``FormSnapshot`` or a plain ``dict``.

    Returns:
        A ``ValidationVerdict``. Fields with no entry in *snapshot* are
        skipped; each failing field carries exactly one message, from the
        first check it failed.
    """
    errors: dict[str, str] = {}
    checked: list[str] = []

    for rule in rules:
        if rule.name not in snapshot:
            continue
        checked.append(rule.name)
        message = rule.check(snapshot[rule.name] or "")
        if message is not None:
            errors[rule.name] = message

    return ValidationVerdict(errors=errors, checked=tuple(checked))
