"""Contact form pipeline — snapshot, validate, submit, react.

Usage::

    from marquee.forms import ContactForm, SubmissionController

    controller = SubmissionController(notifications, acknowledge=modal.open, reset=form.reset)
    ContactForm(document, form, controller, runtime).attach()
"""

from marquee.forms.annotate import FieldAnnotator
from marquee.forms.busy import BusyState
from marquee.forms.contact import ContactForm
from marquee.forms.controller import SubmissionController, classify
from marquee.forms.outcome import NetworkFailure, ServerRejected, SubmissionOutcome, Success
from marquee.forms.snapshot import FormSnapshot

__all__ = [
    "BusyState",
    "ContactForm",
    "FieldAnnotator",
    "FormSnapshot",
    "NetworkFailure",
    "ServerRejected",
    "SubmissionController",
    "SubmissionOutcome",
    "Success",
    "classify",
]
