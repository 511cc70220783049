"""Test utilities for marquee.

An in-memory document, a virtual-clock scheduler and a scriptable
visibility observer. Together they run every component without a
browser or real time::

    from marquee.testing import FakeDocument, FakeElement, ManualScheduler
"""

from marquee.testing.clock import ManualScheduler
from marquee.testing.dom import FakeClassList, FakeDocument, FakeElement, parse_selector
from marquee.testing.visibility import FakeVisibilityObserver

__all__ = [
    "FakeClassList",
    "FakeDocument",
    "FakeElement",
    "FakeVisibilityObserver",
    "ManualScheduler",
    "parse_selector",
]
