from collections.abc import Generator

import pytest

from imbue.explicit_wait import defaults
from imbue.explicit_wait.testing import FakeClock


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(autouse=True)
def isolated_default_wait_spec(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Give every test a fresh, unset process-wide default and a clean wait environment."""
    monkeypatch.setattr(defaults, "_default_wait_spec", None)
    monkeypatch.delenv(defaults.TIMEOUT_ENV_VAR, raising=False)
    monkeypatch.delenv(defaults.POLL_INTERVAL_ENV_VAR, raising=False)
    yield
