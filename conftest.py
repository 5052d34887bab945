"""Root conftest: shared fixtures and the test suite time limit."""

import os
import time
from collections.abc import Mapping

import pytest

# Register fixture modules so pytest discovers fixtures defined in fixtures.py files.
# This must be in a top-level conftest.py (pytest disallows pytest_plugins in
# non-top-level conftest files).
pytest_plugins = [
    "imbue.explicit_wait.fixtures",
]

# Every wait in the unit tests runs on a FakeClock or with sub-second budgets,
# so the whole suite is expected to finish quickly.
_DEFAULT_MAX_SUITE_DURATION_SECONDS = 30.0

_CI_MAX_SUITE_DURATION_SECONDS = 60.0


def get_max_suite_duration_seconds(environ: Mapping[str, str]) -> float:
    """Return the allowed wall-clock duration for the whole test session."""
    # Explicit override, e.g. for generating test timings on a slow machine
    if "PYTEST_MAX_DURATION" in environ:
        return float(environ["PYTEST_MAX_DURATION"])
    if "CI" in environ:
        return _CI_MAX_SUITE_DURATION_SECONDS
    return _DEFAULT_MAX_SUITE_DURATION_SECONDS


@pytest.hookimpl(tryfirst=True)
def pytest_sessionstart(session: pytest.Session) -> None:
    setattr(session, "start_time", time.time())


@pytest.hookimpl(trylast=True)
def pytest_sessionfinish(session: pytest.Session, exitstatus: int) -> None:
    """Fail the run if the test session took longer than the configured limit."""
    if not hasattr(session, "start_time"):
        return

    duration = time.time() - session.start_time
    max_duration = get_max_suite_duration_seconds(os.environ)
    if duration > max_duration:
        pytest.exit(
            f"Test suite took {duration:.2f}s, exceeding the {max_duration}s limit",
            returncode=1,
        )
