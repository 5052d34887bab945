from abc import ABC
from abc import abstractmethod
from functools import partial
from threading import Event
from typing import Generic
from typing import TypeVar

from imbue.explicit_wait.clock import Clock
from imbue.explicit_wait.data_types import Condition
from imbue.explicit_wait.data_types import ProbeNotYetSatisfied
from imbue.explicit_wait.data_types import ProbeResult
from imbue.explicit_wait.data_types import ProbeSatisfied
from imbue.explicit_wait.data_types import ProbeUnrecoverable
from imbue.explicit_wait.data_types import WaitFailed
from imbue.explicit_wait.data_types import WaitSpec
from imbue.explicit_wait.errors import TargetNotReadyError
from imbue.explicit_wait.errors import UnrecoverableProbeError
from imbue.explicit_wait.logging import log_span
from imbue.explicit_wait.poller import wait_until

E = TypeVar("E")


class ElementFinder(ABC, Generic[E]):
    """Element-locating service supplied by the caller, usually a thin adapter over a browser driver.

    Implementations signal "try again later" by returning None from find() or by raising
    TargetNotReadyError (e.g. for a stale element). Any other exception is treated as an
    unrecoverable probe failure.
    """

    @abstractmethod
    def find(self, locator: str) -> E | None:
        """Return the element matching `locator`, or None if nothing matches right now."""
        ...

    @abstractmethod
    def is_visible(self, element: E) -> bool:
        """Return True if the element is currently rendered and visible."""
        ...


def probe_presence(finder: ElementFinder[E], locator: str) -> ProbeResult:
    """Perform a single lookup of `locator`. Satisfied with the element once it can be found."""
    try:
        element = finder.find(locator)
    except TargetNotReadyError as e:
        return ProbeNotYetSatisfied(reason=f"{locator} is not ready: {e}")
    except Exception as e:
        return ProbeUnrecoverable(cause=e)

    if element is None:
        return ProbeNotYetSatisfied(reason=f"{locator} was not found")
    return ProbeSatisfied(value=element)


def probe_visibility(finder: ElementFinder[E], locator: str) -> ProbeResult:
    """Perform a single lookup of `locator` and check that the element is visible.

    A missing element is not an error here: it is reported as not yet satisfied, exactly
    like an element that exists but is still hidden.
    """
    presence = probe_presence(finder, locator)
    if not isinstance(presence, ProbeSatisfied):
        return presence

    element = presence.value
    try:
        is_visible = finder.is_visible(element)
    except TargetNotReadyError as e:
        return ProbeNotYetSatisfied(reason=f"{locator} is not ready: {e}")
    except Exception as e:
        return ProbeUnrecoverable(cause=e)

    if not is_visible:
        return ProbeNotYetSatisfied(reason=f"{locator} is present but not visible")
    return presence


def until_locatable(finder: ElementFinder[E], locator: str) -> Condition:
    """Condition satisfied once `locator` can be found at all."""
    return partial(probe_presence, finder, locator)


def until_visible(finder: ElementFinder[E], locator: str) -> Condition:
    """Condition satisfied once `locator` can be found and is visible."""
    return partial(probe_visibility, finder, locator)


def is_displayed(
    finder: ElementFinder[E],
    locator: str,
    spec: WaitSpec | None = None,
    *,
    clock: Clock | None = None,
    cancel_event: Event | None = None,
) -> bool:
    """Return True if `locator` becomes visible within the wait budget, False otherwise.

    Intended for page objects that assert on transient UI state such as flash messages.
    Timeouts and cancellations give False; an unrecoverable probe failure raises
    UnrecoverableProbeError.
    """
    with log_span("Waiting for {} to be displayed", locator):
        outcome = wait_until(until_visible(finder, locator), spec, clock=clock, cancel_event=cancel_event)
    if isinstance(outcome, WaitFailed):
        raise UnrecoverableProbeError(outcome.cause) from outcome.cause
    return outcome.is_satisfied
