"""Validation verdict — immutable outcome of evaluating one snapshot."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ValidationVerdict:
    """The outcome of evaluating a form snapshot against a rule set.

    ``is_valid`` is True when no evaluated field failed.
    The verdict is falsy when invalid, so you can write::

        verdict = evaluate(rules, snapshot)
        if not verdict:
            annotator.annotate(verdict)
            return

    ``errors`` maps each failing field to its single rule message::

        {"name": "Please enter your full name",
         "email": "Please enter a valid email address"}

    ``checked`` lists the fields that were evaluated, in rule order.
    Rules for fields missing from the snapshot are not listed.
    """

    errors: dict[str, str]
    checked: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        """True if every evaluated field passed."""
        return not self.errors

    def __bool__(self) -> bool:
        return self.is_valid
