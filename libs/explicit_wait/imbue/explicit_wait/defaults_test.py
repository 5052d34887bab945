from threading import Thread

import pytest

from imbue.explicit_wait.data_types import WaitSpec
from imbue.explicit_wait.defaults import DEFAULT_POLL_INTERVAL_SECONDS
from imbue.explicit_wait.defaults import DEFAULT_TIMEOUT_SECONDS
from imbue.explicit_wait.defaults import POLL_INTERVAL_ENV_VAR
from imbue.explicit_wait.defaults import TIMEOUT_ENV_VAR
from imbue.explicit_wait.defaults import configure_default_wait_spec
from imbue.explicit_wait.defaults import get_default_wait_spec
from imbue.explicit_wait.defaults import load_wait_spec_from_env
from imbue.explicit_wait.errors import DefaultsAlreadyConfiguredError
from imbue.explicit_wait.errors import WaitConfigurationError


def test_load_wait_spec_from_env_falls_back_to_documented_constants() -> None:
    spec = load_wait_spec_from_env({})

    assert spec.timeout_seconds == DEFAULT_TIMEOUT_SECONDS
    assert spec.poll_interval_seconds == DEFAULT_POLL_INTERVAL_SECONDS


def test_load_wait_spec_from_env_parses_durations() -> None:
    spec = load_wait_spec_from_env({TIMEOUT_ENV_VAR: "10000ms", POLL_INTERVAL_ENV_VAR: "250ms"})

    assert spec.timeout_seconds == 10.0
    assert spec.poll_interval_seconds == 0.25


def test_load_wait_spec_from_env_overrides_only_what_is_set() -> None:
    spec = load_wait_spec_from_env({TIMEOUT_ENV_VAR: "1m"})

    assert spec.timeout_seconds == 60.0
    assert spec.poll_interval_seconds == DEFAULT_POLL_INTERVAL_SECONDS


def test_load_wait_spec_from_env_rejects_interval_not_below_timeout() -> None:
    with pytest.raises(WaitConfigurationError, match="must be less than"):
        load_wait_spec_from_env({TIMEOUT_ENV_VAR: "1s", POLL_INTERVAL_ENV_VAR: "2s"})


def test_load_wait_spec_from_env_rejects_unparseable_values() -> None:
    with pytest.raises(WaitConfigurationError, match="Invalid duration"):
        load_wait_spec_from_env({TIMEOUT_ENV_VAR: "forever"})


def test_get_default_wait_spec_reads_the_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(TIMEOUT_ENV_VAR, "3")

    assert get_default_wait_spec().timeout_seconds == 3.0


def test_get_default_wait_spec_is_frozen_after_first_use(monkeypatch: pytest.MonkeyPatch) -> None:
    first = get_default_wait_spec()
    monkeypatch.setenv(TIMEOUT_ENV_VAR, "3")

    assert get_default_wait_spec() is first


def test_configure_default_wait_spec_sets_the_default() -> None:
    spec = WaitSpec(timeout_seconds=1.0, poll_interval_seconds=0.1)

    configure_default_wait_spec(spec)

    assert get_default_wait_spec() is spec


def test_configure_default_wait_spec_can_only_be_called_once() -> None:
    configure_default_wait_spec(WaitSpec(timeout_seconds=1.0, poll_interval_seconds=0.1))

    with pytest.raises(DefaultsAlreadyConfiguredError, match="already set"):
        configure_default_wait_spec(WaitSpec(timeout_seconds=10.0, poll_interval_seconds=0.1))


def test_configure_default_wait_spec_fails_after_default_was_loaded() -> None:
    get_default_wait_spec()

    with pytest.raises(DefaultsAlreadyConfiguredError):
        configure_default_wait_spec(WaitSpec(timeout_seconds=10.0, poll_interval_seconds=0.1))


def test_get_default_wait_spec_returns_one_instance_across_threads() -> None:
    specs: list[WaitSpec] = []

    threads = [Thread(target=lambda: specs.append(get_default_wait_spec())) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(specs) == 8
    assert all(spec is specs[0] for spec in specs)
