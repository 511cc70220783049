"""Tests for marquee.counters — parsing, frames and the one-shot trigger."""

import pytest

from conftest import build_stats
from marquee.config import SiteConfig
from marquee.counters import CounterFormat, CounterTarget, RevealCounterAnimator, ease_out_quart
from marquee.testing import FakeElement, FakeVisibilityObserver, ManualScheduler

FRAME = 1 / 60


def play(scheduler: ManualScheduler, element: FakeElement, *, limit: int = 600) -> list[str]:
    """Advance frame by frame, recording the text after each frame."""
    frames = [element.text]
    for _ in range(limit):
        if scheduler.pending == 0:
            break
        scheduler.advance(FRAME)
        frames.append(element.text)
    return frames


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class TestCounterTarget:
    @pytest.mark.parametrize(
        ("text", "value", "fmt"),
        [
            ("98%", 98, CounterFormat.PERCENTAGE),
            ("500+", 500, CounterFormat.SUFFIXED_PLUS),
            ("1,200+", 1200, CounterFormat.SUFFIXED_PLUS),
            ("₱50k", 50, CounterFormat.CURRENCY_KILO),
            ("₱2,500", 2500, CounterFormat.CURRENCY),
            ("$10K", 10, CounterFormat.CURRENCY_KILO),
            ("10K", 10, CounterFormat.KILO),
            ("42", 42, CounterFormat.PLAIN),
            ("  7  ", 7, CounterFormat.PLAIN),
        ],
    )
    def test_parse(self, text: str, value: int, fmt: CounterFormat) -> None:
        target = CounterTarget.parse(text)
        assert target is not None
        assert target.value == value
        assert target.format is fmt
        assert target.original == text

    @pytest.mark.parametrize("text", ["", "Fast", "N/A", "∞"])
    def test_no_digits(self, text: str) -> None:
        assert CounterTarget.parse(text) is None

    def test_first_number_wins(self) -> None:
        target = CounterTarget.parse("24/7")
        assert target is not None
        assert target.value == 24

    def test_currency_symbol_is_kept(self) -> None:
        target = CounterTarget.parse("₱50k")
        assert target.symbol == "₱"
        assert target.render(12) == "₱12k"

    def test_kilo_suffix_case_is_kept(self) -> None:
        assert CounterTarget.parse("10K").render(3) == "3K"

    @pytest.mark.parametrize(
        ("text", "shown", "expected"),
        [
            ("98%", 40, "40%"),
            ("500+", 7, "7+"),
            ("₱2,500", 900, "₱900"),
            ("42", 5, "5"),
        ],
    )
    def test_render(self, text: str, shown: int, expected: str) -> None:
        assert CounterTarget.parse(text).render(shown) == expected

    def test_frame_endpoints(self) -> None:
        target = CounterTarget.parse("₱50k")
        assert target.frame(0.0) == "₱0k"
        assert target.frame(1.0) == "₱50k"

    def test_ease_out_quart(self) -> None:
        assert ease_out_quart(0.0) == 0.0
        assert ease_out_quart(1.0) == 1.0
        assert ease_out_quart(0.5) == pytest.approx(0.9375)


# ---------------------------------------------------------------------------
# Animation
# ---------------------------------------------------------------------------


class TestAnimate:
    def test_percentage_frames(self, scheduler: ManualScheduler) -> None:
        element = FakeElement("span", text="98%")
        RevealCounterAnimator(scheduler).animate(element)

        frames = play(scheduler, element)

        assert frames[0] == "0%"
        assert frames[-1] == "98%"
        values = [int(frame.rstrip("%")) for frame in frames]
        assert values == sorted(values)
        assert max(values) <= 98
        assert all(frame.endswith("%") for frame in frames)

    @pytest.mark.parametrize("text", ["₱50k", "1,200+", "  500+ ", "10K", "$3,000"])
    def test_terminal_frame_is_original_text(self, scheduler: ManualScheduler, text: str) -> None:
        element = FakeElement("span", text=text)
        RevealCounterAnimator(scheduler).animate(element)

        frames = play(scheduler, element)

        assert frames[-1] == text

    def test_duration(self, scheduler: ManualScheduler) -> None:
        element = FakeElement("span", text="100")
        RevealCounterAnimator(scheduler).animate(element)

        scheduler.advance(1.9)
        assert element.text != "100"

        scheduler.advance(0.2)
        assert element.text == "100"
        assert scheduler.pending == 0

    def test_zero_duration_jumps_to_final_text(self, scheduler: ManualScheduler) -> None:
        element = FakeElement("span", text="98%")
        animator = RevealCounterAnimator(scheduler, config=SiteConfig(counter_duration=0))
        animator.animate(element)
        assert element.text == "98%"
        assert scheduler.pending == 0

    def test_no_digits_untouched(self, scheduler: ManualScheduler) -> None:
        element = FakeElement("span", text="Fast")
        assert RevealCounterAnimator(scheduler).animate(element) is None
        assert element.text == "Fast"
        assert scheduler.pending == 0


# ---------------------------------------------------------------------------
# Triggering
# ---------------------------------------------------------------------------


class TestTrigger:
    def test_run_is_latched(self, scheduler: ManualScheduler) -> None:
        elements = [FakeElement("span", text="98%")]
        animator = RevealCounterAnimator(scheduler)
        animator.prime(elements)

        assert animator.run() is True
        assert animator.run() is False
        assert animator.has_run

    def test_group_animates_together(self, scheduler: ManualScheduler) -> None:
        stats = build_stats()
        numbers = stats.query_all(".trust-number, .stat-number")
        animator = RevealCounterAnimator(scheduler)
        animator.prime(numbers)

        animator.run()

        assert [n.text for n in numbers] == ["0%", "₱0k", "0+", "Fast"]
        scheduler.run_until_idle()
        assert [n.text for n in numbers] == ["98%", "₱50k", "500+", "Fast"]

    def test_visible_container_triggers_after_delay(
        self, scheduler: ManualScheduler, observer: FakeVisibilityObserver
    ) -> None:
        stats = build_stats()
        numbers = stats.query_all(".trust-number")
        animator = RevealCounterAnimator(scheduler, observer=observer)
        animator.prime(numbers, container=stats)

        scheduler.advance(5.0)
        assert not animator.has_run

        observer.scroll_into_view(stats)
        assert not observer.is_observing(stats)
        scheduler.advance(0.4)
        assert not animator.has_run

        scheduler.advance(0.2)
        assert animator.has_run

    def test_below_threshold_does_not_trigger(
        self, scheduler: ManualScheduler, observer: FakeVisibilityObserver
    ) -> None:
        stats = build_stats()
        animator = RevealCounterAnimator(scheduler, observer=observer)
        animator.prime(stats.query_all(".trust-number"), container=stats)

        observer.scroll_to(stats, 0.3)
        scheduler.advance(1.0)

        assert not animator.has_run
        assert observer.is_observing(stats)

    def test_repeat_visibility_animates_once(
        self, scheduler: ManualScheduler, observer: FakeVisibilityObserver
    ) -> None:
        stats = build_stats()
        number = stats.query(".trust-number")
        animator = RevealCounterAnimator(scheduler, observer=observer)
        animator.prime([number], container=stats)

        observer.scroll_into_view(stats)
        scheduler.run_until_idle()
        assert number.text == "98%"

        observer.scroll_into_view(stats)
        animator.run()
        assert number.text == "98%"
        assert scheduler.pending == 0

    def test_fallback_without_observer(self, scheduler: ManualScheduler) -> None:
        stats = build_stats()
        animator = RevealCounterAnimator(scheduler)
        animator.prime(stats.query_all(".trust-number"), container=stats)

        scheduler.advance(0.9)
        assert not animator.has_run
        scheduler.advance(0.2)
        assert animator.has_run

    def test_disarm_cancels_pending_trigger(
        self, scheduler: ManualScheduler, observer: FakeVisibilityObserver
    ) -> None:
        stats = build_stats()
        animator = RevealCounterAnimator(scheduler, observer=observer)
        animator.prime(stats.query_all(".trust-number"), container=stats)

        animator.disarm()

        assert not observer.is_observing(stats)
        observer.scroll_into_view(stats)
        scheduler.advance(2.0)
        assert not animator.has_run

    def test_prime_with_no_elements_arms_nothing(
        self, scheduler: ManualScheduler, observer: FakeVisibilityObserver
    ) -> None:
        container = FakeElement("div")
        RevealCounterAnimator(scheduler, observer=observer).prime([], container=container)
        assert not observer.is_observing(container)
        assert scheduler.pending == 0
