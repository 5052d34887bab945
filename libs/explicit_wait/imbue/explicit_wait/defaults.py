"""Process-wide default wait spec.

The default is set at most once per process, either explicitly through
configure_default_wait_spec() at startup or lazily from the environment on the first
wait that omits its spec. After that it is read-only.

Environment variables (durations accept '15', '0.5', '1500ms', '10s', '1m30s'):
- EXPLICIT_WAIT_TIMEOUT: total time budget for a wait.
- EXPLICIT_WAIT_POLL_INTERVAL: pause between probes.
"""

import os
from collections.abc import Mapping
from threading import Lock
from typing import Final

from loguru import logger

from imbue.explicit_wait.data_types import WaitSpec
from imbue.explicit_wait.duration import parse_duration_to_seconds
from imbue.explicit_wait.errors import DefaultsAlreadyConfiguredError

# Browser suites in the wild use anything from 1s to 15s here. Pick the value for your
# application under test with EXPLICIT_WAIT_TIMEOUT or configure_default_wait_spec().
DEFAULT_TIMEOUT_SECONDS: Final[float] = 15.0

DEFAULT_POLL_INTERVAL_SECONDS: Final[float] = 0.5

TIMEOUT_ENV_VAR: Final[str] = "EXPLICIT_WAIT_TIMEOUT"

POLL_INTERVAL_ENV_VAR: Final[str] = "EXPLICIT_WAIT_POLL_INTERVAL"

_default_wait_spec_lock: Final[Lock] = Lock()

_default_wait_spec: WaitSpec | None = None


def load_wait_spec_from_env(environ: Mapping[str, str] | None = None) -> WaitSpec:
    """Build a WaitSpec from environment variables, falling back to the documented constants."""
    if environ is None:
        environ = os.environ

    raw_timeout = environ.get(TIMEOUT_ENV_VAR)
    raw_poll_interval = environ.get(POLL_INTERVAL_ENV_VAR)

    timeout_seconds = parse_duration_to_seconds(raw_timeout) if raw_timeout is not None else DEFAULT_TIMEOUT_SECONDS
    poll_interval_seconds = (
        parse_duration_to_seconds(raw_poll_interval)
        if raw_poll_interval is not None
        else DEFAULT_POLL_INTERVAL_SECONDS
    )

    return WaitSpec(timeout_seconds=timeout_seconds, poll_interval_seconds=poll_interval_seconds)


def configure_default_wait_spec(spec: WaitSpec) -> None:
    """Set the process-wide default wait spec. May only happen once per process."""
    global _default_wait_spec
    with _default_wait_spec_lock:
        if _default_wait_spec is not None:
            raise DefaultsAlreadyConfiguredError(
                f"The default wait spec is already set to {_default_wait_spec!r} and cannot be changed"
            )
        _default_wait_spec = spec
    logger.debug("Configured default wait spec: {}", spec)


def get_default_wait_spec() -> WaitSpec:
    """Return the process-wide default wait spec, loading it from the environment on first use."""
    global _default_wait_spec
    with _default_wait_spec_lock:
        if _default_wait_spec is None:
            _default_wait_spec = load_wait_spec_from_env()
            logger.debug("Loaded default wait spec from environment: {}", _default_wait_spec)
        return _default_wait_spec
