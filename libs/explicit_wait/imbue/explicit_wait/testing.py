"""Test doubles for code that waits.

These are used by this library's own test suite and are also meant for callers that
want to unit-test their conditions and page objects without real sleeps.
"""

from collections.abc import Callable
from collections.abc import Sequence
from threading import Event

from imbue.explicit_wait.clock import Clock
from imbue.explicit_wait.conditions import ElementFinder
from imbue.explicit_wait.data_types import ProbeNotYetSatisfied
from imbue.explicit_wait.data_types import ProbeResult

_NANOSECONDS_PER_SECOND = 1_000_000_000


class FakeClock(Clock):
    """Clock whose time only moves when something sleeps on it.

    Time is kept in integer nanoseconds so that repeated sleeps do not accumulate float
    error (ten sleeps of 0.1 land exactly on 1.0).
    """

    def __init__(self, on_sleep: Callable[[float], None] | None = None) -> None:
        self._now_ns = 0
        self._on_sleep = on_sleep
        self.sleeps: list[float] = []

    def now(self) -> float:
        return self._now_ns / _NANOSECONDS_PER_SECOND

    def advance(self, seconds: float) -> None:
        self._now_ns += round(seconds * _NANOSECONDS_PER_SECOND)

    def sleep(self, seconds: float, cancel_event: Event) -> bool:
        # Mirrors Event.wait: an already-set event returns immediately without sleeping
        if cancel_event.is_set():
            return True
        self.sleeps.append(seconds)
        self.advance(seconds)
        if self._on_sleep is not None:
            self._on_sleep(seconds)
        return cancel_event.is_set()


class ScriptedCondition:
    """Condition that returns a fixed sequence of results, repeating the last one forever.

    Each result may also be a callable, which is invoked at that probe; this lets a test
    trigger side effects (like setting a cancel event) at a precise point in the loop.
    """

    def __init__(self, results: Sequence[ProbeResult | Callable[[], ProbeResult]]) -> None:
        self._results = list(results) or [ProbeNotYetSatisfied()]
        self.call_count = 0

    def __call__(self) -> ProbeResult:
        index = min(self.call_count, len(self._results) - 1)
        self.call_count += 1
        result = self._results[index]
        if callable(result):
            return result()
        return result


class FakeElement:
    def __init__(self, locator: str, is_visible: bool) -> None:
        self.locator = locator
        self.is_visible = is_visible

    def __repr__(self) -> str:
        return f"FakeElement({self.locator!r}, is_visible={self.is_visible})"


class FakeElementFinder(ElementFinder[FakeElement]):
    """In-memory finder where elements appear and become visible after a number of lookups.

    `appears_after` and `visible_after` map a locator to the lookup number (1-based) from
    which the element is found and visible, respectively. Locators missing from
    `appears_after` are never found. `errors` maps a locator to an exception raised on
    every lookup.
    """

    def __init__(
        self,
        appears_after: dict[str, int] | None = None,
        visible_after: dict[str, int] | None = None,
        errors: dict[str, BaseException] | None = None,
    ) -> None:
        self._appears_after = appears_after or {}
        self._visible_after = visible_after or {}
        self._errors = errors or {}
        self.lookup_counts: dict[str, int] = {}

    def find(self, locator: str) -> FakeElement | None:
        lookup_count = self.lookup_counts.get(locator, 0) + 1
        self.lookup_counts[locator] = lookup_count
        if locator in self._errors:
            raise self._errors[locator]
        appears_after = self._appears_after.get(locator)
        if appears_after is None or lookup_count < appears_after:
            return None
        visible_after = self._visible_after.get(locator, appears_after)
        return FakeElement(locator, is_visible=lookup_count >= visible_after)

    def is_visible(self, element: FakeElement) -> bool:
        return element.is_visible
