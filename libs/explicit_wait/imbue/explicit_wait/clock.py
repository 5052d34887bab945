import time
from abc import ABC
from abc import abstractmethod
from threading import Event


class Clock(ABC):
    """Source of time for the poll loop.

    Polling code only ever measures durations, so implementations need a monotonic
    reading, not wall-clock time.
    """

    @abstractmethod
    def now(self) -> float:
        """Return the current monotonic time in seconds."""
        ...

    @abstractmethod
    def sleep(self, seconds: float, cancel_event: Event) -> bool:
        """Suspend for up to `seconds`, waking early if cancel_event is set.

        Returns True if the sleep ended because cancel_event is set, False if the full
        duration elapsed.
        """
        ...


class SystemClock(Clock):
    """Clock backed by time.monotonic, sleeping on the cancel event so it can be interrupted."""

    def now(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float, cancel_event: Event) -> bool:
        return cancel_event.wait(timeout=seconds)
