"""Busy state for the submit button.

While a submission is in flight the button is disabled and shows a
spinner. ``release()`` restores the exact markup the button had before,
and is safe to call when the button is not busy.
"""

from marquee.dom import Element
from marquee.templating import render_busy


class BusyState:
    """Toggles a submit affordance between idle and busy."""

    __slots__ = ("_button", "_label", "_saved_html")

    def __init__(self, button: Element | None, *, label: str = "Sending...") -> None:
        self._button = button
        self._label = label
        self._saved_html: str | None = None

    @property
    def busy(self) -> bool:
        return self._saved_html is not None

    def engage(self) -> None:
        if self._button is None or self.busy:
            return
        self._saved_html = self._button.inner_html
        self._button.inner_html = render_busy(self._label)
        self._button.disabled = True

    def release(self) -> None:
        if self._button is None or self._saved_html is None:
            return
        self._button.inner_html = self._saved_html
        self._button.disabled = False
        self._saved_html = None
