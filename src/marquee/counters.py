"""Stat counters — count up from zero the first time the stats are seen.

Elements such as ``<span class="stat-number">₱50k</span>`` are parsed
once into a ``CounterTarget`` (the number plus how it is displayed). When
the stats container first scrolls into view the whole group animates
together over ``SiteConfig.counter_duration`` seconds with a quartic
ease-out, one frame at a time::

    p = min(elapsed / duration, 1)
    e = 1 - (1 - p) ** 4
    shown = floor(target * e), formatted like the original

The last frame writes the original text back verbatim, so formatting
drift can never leave ``₱50K`` or ``₱50000`` behind.

The group runs at most once per page lifecycle. Elements without digits
are left untouched.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from marquee.config import SiteConfig
from marquee.dom import Element
from marquee.events import SubscriptionGroup
from marquee.runtime import Handle, Scheduler
from marquee.visibility import VisibilityObserver, reveal_once

logger = logging.getLogger("marquee.counters")

# First number, with optional thousands separators: "1,200" → 1200
_NUMBER_RE = re.compile(r"\d{1,3}(?:,\d{3})+(?!\d)|\d+")
_CURRENCY_RE = re.compile(r"[₱$€£¥]")
_KILO_RE = re.compile(r"\d\s*([kK])(?![A-Za-z])")


class CounterFormat(StrEnum):
    PLAIN = "plain"
    PERCENTAGE = "percentage"
    SUFFIXED_PLUS = "suffixed-plus"
    CURRENCY = "currency"
    CURRENCY_KILO = "currency-kilo"
    KILO = "kilo"


def ease_out_quart(progress: float) -> float:
    return 1 - (1 - progress) ** 4


@dataclass(frozen=True, slots=True)
class CounterTarget:
    """Parsed counter: the number to reach and how to display it.

    ``original`` is the element's text exactly as captured (whitespace
    included); it is what the final frame shows.
    """

    value: int
    format: CounterFormat
    original: str
    symbol: str = ""
    suffix: str = "k"

    @classmethod
    def parse(cls, text: str) -> CounterTarget | None:
        """Parse *text*, or return None when it holds no digits."""
        stripped = text.strip()
        number = _NUMBER_RE.search(stripped)
        if number is None:
            return None
        value = int(number.group().replace(",", ""))

        currency = _CURRENCY_RE.search(stripped)
        kilo = _KILO_RE.search(stripped)
        if currency and kilo:
            fmt = CounterFormat.CURRENCY_KILO
        elif currency:
            fmt = CounterFormat.CURRENCY
        elif "%" in stripped:
            fmt = CounterFormat.PERCENTAGE
        elif stripped.endswith("+"):
            fmt = CounterFormat.SUFFIXED_PLUS
        elif kilo:
            fmt = CounterFormat.KILO
        else:
            fmt = CounterFormat.PLAIN

        return cls(
            value=value,
            format=fmt,
            original=text,
            symbol=currency.group() if currency else "",
            suffix=kilo.group(1) if kilo else "k",
        )

    def render(self, shown: int) -> str:
        """Format an intermediate value the way the original text is formatted."""
        match self.format:
            case CounterFormat.CURRENCY_KILO:
                return f"{self.symbol}{shown}{self.suffix}"
            case CounterFormat.CURRENCY:
                return f"{self.symbol}{shown}"
            case CounterFormat.PERCENTAGE:
                return f"{shown}%"
            case CounterFormat.SUFFIXED_PLUS:
                return f"{shown}+"
            case CounterFormat.KILO:
                return f"{shown}{self.suffix}"
            case _:
                return str(shown)

    def frame(self, progress: float) -> str:
        """Text for *progress* in ``[0, 1]``; the original text at 1."""
        if progress >= 1:
            return self.original
        return self.render(math.floor(self.value * ease_out_quart(max(progress, 0.0))))


class RevealCounterAnimator:
    """One-shot count-up animation for a group of stat elements.

    ``prime()`` registers the elements and arms the trigger; ``run()``
    animates the whole group, guarded by a latch so later triggers do
    nothing; ``animate()`` drives a single element.
    """

    __slots__ = (
        "_config",
        "_elements",
        "_has_run",
        "_observer",
        "_scheduler",
        "_subscriptions",
        "_timer",
    )

    def __init__(
        self,
        scheduler: Scheduler,
        *,
        observer: VisibilityObserver | None = None,
        config: SiteConfig | None = None,
    ) -> None:
        self._scheduler = scheduler
        self._observer = observer
        self._config = config or SiteConfig()
        self._elements: list[Element] = []
        self._has_run = False
        self._subscriptions = SubscriptionGroup()
        self._timer: Handle | None = None

    @property
    def has_run(self) -> bool:
        return self._has_run

    @property
    def elements(self) -> list[Element]:
        return list(self._elements)

    def prime(self, elements: Iterable[Element], *, container: Element | None = None) -> None:
        """Register *elements* and arm the trigger.

        With an observer and a *container*, the group runs
        ``counter_reveal_delay`` seconds after the container first becomes
        visible. Otherwise it runs after ``counter_fallback_delay``.
        """
        self.disarm()
        self._elements = list(elements)
        if not self._elements:
            return
        if container is not None and self._observer is not None:
            self._subscriptions.add(
                reveal_once(
                    self._observer,
                    container,
                    lambda: self._schedule(self._config.counter_reveal_delay),
                    threshold=self._config.visibility_threshold,
                )
            )
        else:
            self._schedule(self._config.counter_fallback_delay)

    def disarm(self) -> None:
        """Cancel a pending trigger. Animations already running finish."""
        self._subscriptions.cancel()
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def run(self) -> bool:
        """Animate every primed element. Returns False if the group already ran."""
        if self._has_run:
            return False
        self._has_run = True
        started = sum(1 for element in self._elements if self.animate(element) is not None)
        logger.debug("Animating %d of %d counters", started, len(self._elements))
        return True

    def animate(self, element: Element) -> CounterTarget | None:
        """Count *element* up from zero. Returns None (and does nothing) without digits."""
        target = CounterTarget.parse(element.text)
        if target is None:
            return None

        start = self._scheduler.now()
        duration = self._config.counter_duration

        def step(_timestamp: float) -> None:
            elapsed = self._scheduler.now() - start
            progress = min(elapsed / duration, 1.0) if duration > 0 else 1.0
            element.text = target.frame(progress)
            if progress < 1.0:
                self._scheduler.request_frame(step)

        step(start)
        return target

    def _schedule(self, delay: float) -> None:
        self._timer = self._scheduler.call_later(delay, self.run)
