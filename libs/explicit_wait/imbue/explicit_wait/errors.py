class BaseExplicitWaitError(Exception):
    """Base exception for all explicit-wait errors."""


class WaitConfigurationError(BaseExplicitWaitError):
    """Raised when a wait is configured with invalid bounds, before any polling starts.

    Must not subclass ValueError, otherwise pydantic validators would wrap it in a
    ValidationError instead of letting it propagate from WaitSpec construction.
    """


class DefaultsAlreadyConfiguredError(WaitConfigurationError):
    """Raised when the process-wide default wait spec is set more than once."""


class TargetNotReadyError(BaseExplicitWaitError):
    """Raised by an element finder to signal that the target may appear if we keep polling.

    Finders for drivers that raise on a missing or stale element should translate those
    errors into this one. It is consumed by the probe steps and never reaches callers.
    """


class UnrecoverableProbeError(BaseExplicitWaitError):
    """Raised when unwrapping a wait whose probe failed for a reason waiting cannot fix."""

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"Probe failed unrecoverably: {type(cause).__name__}: {cause}")


class WaitTimedOutError(BaseExplicitWaitError, TimeoutError):
    """Raised when unwrapping a wait that exhausted its time budget."""

    def __init__(self, message: str, probe_count: int, elapsed_seconds: float) -> None:
        self.probe_count = probe_count
        self.elapsed_seconds = elapsed_seconds
        super().__init__(f"{message} (after {probe_count} probes in {elapsed_seconds:.3f} sec)")


class WaitCancelledError(BaseExplicitWaitError):
    """Raised when unwrapping a wait that was interrupted by its cancel event."""
