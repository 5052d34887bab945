from abc import ABC
from abc import abstractmethod
from collections.abc import Callable
from typing import Any
from typing import Final
from typing import Generic
from typing import Self
from typing import TypeVar

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import model_validator

from imbue.explicit_wait.errors import UnrecoverableProbeError
from imbue.explicit_wait.errors import WaitCancelledError
from imbue.explicit_wait.errors import WaitConfigurationError
from imbue.explicit_wait.errors import WaitTimedOutError
from imbue.explicit_wait.primitives import NonNegativeFloat
from imbue.explicit_wait.primitives import NonNegativeInt
from imbue.explicit_wait.primitives import WaitOutcomeKind

T = TypeVar("T")

DEFAULT_TIMEOUT_MESSAGE: Final[str] = "Condition not met within timeout"


class FrozenModel(BaseModel):
    """Base class for immutable pydantic models.

    Arbitrary types are allowed because probe values and failure causes come from
    drivers this library knows nothing about.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        arbitrary_types_allowed=True,
    )


class WaitSpec(FrozenModel):
    """Time budget for one poll loop. All durations are in seconds."""

    timeout_seconds: float = Field(description="Total time budget before the wait times out")
    poll_interval_seconds: float = Field(description="Pause between two consecutive probes")

    @model_validator(mode="after")
    def _validate_bounds(self) -> Self:
        # Written as a negated chain so that NaN is rejected as well
        if not self.timeout_seconds > 0:
            raise WaitConfigurationError(f"timeout_seconds must be > 0, got {self.timeout_seconds}")
        if not self.poll_interval_seconds > 0:
            raise WaitConfigurationError(f"poll_interval_seconds must be > 0, got {self.poll_interval_seconds}")
        if not self.poll_interval_seconds < self.timeout_seconds:
            raise WaitConfigurationError(
                f"poll_interval_seconds ({self.poll_interval_seconds}) must be less than "
                f"timeout_seconds ({self.timeout_seconds})"
            )
        return self


# =============================================================================
# Probe results: what a condition reports after a single attempt
# =============================================================================


class ProbeSatisfied(FrozenModel, Generic[T]):
    """The condition holds. The wait ends with this value."""

    value: T


class ProbeNotYetSatisfied(FrozenModel):
    """The target is not ready yet. The poller retries while time remains."""

    reason: str | None = None


class ProbeUnrecoverable(FrozenModel):
    """The probe failed for a reason that waiting will not fix. The poller stops immediately."""

    cause: BaseException


ProbeResult = ProbeSatisfied | ProbeNotYetSatisfied | ProbeUnrecoverable

# A condition performs exactly one probe attempt per call.
Condition = Callable[[], ProbeResult]


# =============================================================================
# Wait outcomes: the terminal result of one wait_until invocation
# =============================================================================


class WaitOutcome(FrozenModel, ABC):
    """Terminal result of a single wait. Produced once, never updated."""

    probe_count: NonNegativeInt = Field(description="How many times the condition was invoked")
    elapsed_seconds: NonNegativeFloat = Field(description="Time between the start of the wait and its end")

    @property
    @abstractmethod
    def kind(self) -> WaitOutcomeKind: ...

    @property
    def is_satisfied(self) -> bool:
        return self.kind == WaitOutcomeKind.SATISFIED

    @abstractmethod
    def unwrap(self, timeout_message: str = DEFAULT_TIMEOUT_MESSAGE) -> Any:
        """Return the satisfied value, or raise the error matching this outcome."""
        ...


class WaitSatisfied(WaitOutcome, Generic[T]):
    value: T

    @property
    def kind(self) -> WaitOutcomeKind:
        return WaitOutcomeKind.SATISFIED

    def unwrap(self, timeout_message: str = DEFAULT_TIMEOUT_MESSAGE) -> T:
        return self.value


class WaitTimedOut(WaitOutcome):
    @property
    def kind(self) -> WaitOutcomeKind:
        return WaitOutcomeKind.TIMED_OUT

    def unwrap(self, timeout_message: str = DEFAULT_TIMEOUT_MESSAGE) -> Any:
        raise WaitTimedOutError(timeout_message, self.probe_count, self.elapsed_seconds)


class WaitFailed(WaitOutcome):
    cause: BaseException

    @property
    def kind(self) -> WaitOutcomeKind:
        return WaitOutcomeKind.FAILED

    def unwrap(self, timeout_message: str = DEFAULT_TIMEOUT_MESSAGE) -> Any:
        raise UnrecoverableProbeError(self.cause) from self.cause


class WaitCancelled(WaitOutcome):
    @property
    def kind(self) -> WaitOutcomeKind:
        return WaitOutcomeKind.CANCELLED

    def unwrap(self, timeout_message: str = DEFAULT_TIMEOUT_MESSAGE) -> Any:
        raise WaitCancelledError(f"Wait cancelled after {self.probe_count} probes")
