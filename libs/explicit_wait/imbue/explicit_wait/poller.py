from threading import Event
from typing import Any

from imbue.explicit_wait.clock import Clock
from imbue.explicit_wait.clock import SystemClock
from imbue.explicit_wait.data_types import Condition
from imbue.explicit_wait.data_types import DEFAULT_TIMEOUT_MESSAGE
from imbue.explicit_wait.data_types import ProbeNotYetSatisfied
from imbue.explicit_wait.data_types import ProbeSatisfied
from imbue.explicit_wait.data_types import ProbeUnrecoverable
from imbue.explicit_wait.data_types import WaitCancelled
from imbue.explicit_wait.data_types import WaitFailed
from imbue.explicit_wait.data_types import WaitOutcome
from imbue.explicit_wait.data_types import WaitSatisfied
from imbue.explicit_wait.data_types import WaitSpec
from imbue.explicit_wait.data_types import WaitTimedOut
from imbue.explicit_wait.defaults import get_default_wait_spec


def wait_until(
    condition: Condition,
    spec: WaitSpec | None = None,
    *,
    clock: Clock | None = None,
    cancel_event: Event | None = None,
) -> WaitOutcome:
    """Probe `condition` until it is satisfied, fails, the time budget runs out, or the wait is cancelled.

    Each iteration invokes the condition exactly once. A satisfied or unrecoverable probe
    ends the wait immediately; a not-yet-satisfied probe is retried after the poll interval
    for as long as the timeout allows. The sleep before the final probe is clamped to the
    remaining budget, so a timed-out wait never overshoots its timeout by more than one
    interval.

    Timing out and being cancelled are ordinary outcomes, not exceptions. Exceptions raised
    by the condition itself propagate unchanged: conditions must report unrecoverable
    failures through ProbeUnrecoverable.

    When `spec` is omitted the process-wide default from get_default_wait_spec() is used.
    """
    if spec is None:
        spec = get_default_wait_spec()
    if clock is None:
        clock = SystemClock()
    if cancel_event is None:
        cancel_event = Event()

    start_time = clock.now()
    probe_count = 0

    while True:
        if cancel_event.is_set():
            return WaitCancelled(probe_count=probe_count, elapsed_seconds=clock.now() - start_time)

        probe_count += 1
        result = condition()
        elapsed = clock.now() - start_time

        match result:
            case ProbeSatisfied():
                return WaitSatisfied(value=result.value, probe_count=probe_count, elapsed_seconds=elapsed)
            case ProbeUnrecoverable():
                return WaitFailed(cause=result.cause, probe_count=probe_count, elapsed_seconds=elapsed)
            case ProbeNotYetSatisfied():
                pass
            case _:
                raise TypeError(
                    f"Condition must return ProbeSatisfied, ProbeNotYetSatisfied or ProbeUnrecoverable, "
                    f"got {type(result).__name__}"
                )

        remaining = spec.timeout_seconds - elapsed
        if remaining <= 0:
            return WaitTimedOut(probe_count=probe_count, elapsed_seconds=elapsed)

        is_cancelled = clock.sleep(min(spec.poll_interval_seconds, remaining), cancel_event)
        if is_cancelled:
            return WaitCancelled(probe_count=probe_count, elapsed_seconds=clock.now() - start_time)


def wait_for_value(
    condition: Condition,
    spec: WaitSpec | None = None,
    *,
    clock: Clock | None = None,
    cancel_event: Event | None = None,
    error_message: str = DEFAULT_TIMEOUT_MESSAGE,
) -> Any:
    """Like wait_until, but return the satisfied value directly and raise for every other outcome.

    Raises WaitTimedOutError (a TimeoutError) with `error_message` on timeout,
    UnrecoverableProbeError on an unrecoverable probe, and WaitCancelledError on cancellation.
    """
    outcome = wait_until(condition, spec, clock=clock, cancel_event=cancel_event)
    return outcome.unwrap(timeout_message=error_message)
