import re
from typing import Final

from imbue.explicit_wait.errors import WaitConfigurationError

_SECONDS_PER_UNIT: Final[dict[str, float]] = {
    "ms": 0.001,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_DURATION_PART_PATTERN: Final[re.Pattern[str]] = re.compile(r"(\d+(?:\.\d+)?)\s*(ms|s|m|h)", re.IGNORECASE)
_DURATION_PATTERN: Final[re.Pattern[str]] = re.compile(r"(?:\s*\d+(?:\.\d+)?\s*(?:ms|s|m|h))+", re.IGNORECASE)


def parse_duration_to_seconds(duration_str: str) -> float:
    """Parse a human-readable duration string into seconds.

    Plain numbers (integer or decimal) are treated as seconds. Otherwise the string is a
    sequence of number+unit parts using hours (h), minutes (m), seconds (s) and
    milliseconds (ms), e.g. '15', '0.5', '1500ms', '10s', '1m30s'.
    """
    stripped = duration_str.strip()
    if not stripped:
        raise WaitConfigurationError(f"Invalid duration: '{duration_str}' (empty string)")

    try:
        plain_seconds = float(stripped)
    except ValueError:
        plain_seconds = None

    if plain_seconds is not None:
        # float() also accepts 'nan' and 'inf', which the comparison below rejects
        if not 0 < plain_seconds < float("inf"):
            raise WaitConfigurationError(f"Invalid duration: '{duration_str}'. Duration must be greater than zero.")
        return plain_seconds

    if _DURATION_PATTERN.fullmatch(stripped) is None:
        raise WaitConfigurationError(
            f"Invalid duration: '{duration_str}'. Expected format like '15', '0.5', '1500ms', '10s', '1m30s'."
        )

    total_seconds = sum(
        float(amount) * _SECONDS_PER_UNIT[unit.lower()] for amount, unit in _DURATION_PART_PATTERN.findall(stripped)
    )

    if total_seconds == 0.0:
        raise WaitConfigurationError(f"Invalid duration: '{duration_str}'. Duration must be greater than zero.")

    return total_seconds
