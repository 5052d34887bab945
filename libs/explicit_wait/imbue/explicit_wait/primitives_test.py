import pytest

from imbue.explicit_wait.primitives import NonNegativeFloat
from imbue.explicit_wait.primitives import NonNegativeInt
from imbue.explicit_wait.primitives import WaitOutcomeKind


def test_wait_outcome_kind_uses_upper_case_values() -> None:
    assert [kind.value for kind in WaitOutcomeKind] == ["SATISFIED", "TIMED_OUT", "FAILED", "CANCELLED"]


def test_non_negative_int_accepts_zero() -> None:
    assert NonNegativeInt(0) == 0


def test_non_negative_int_rejects_negative() -> None:
    with pytest.raises(ValueError, match="must be >= 0"):
        NonNegativeInt(-1)


def test_non_negative_float_rejects_negative() -> None:
    with pytest.raises(ValueError, match="must be >= 0"):
        NonNegativeFloat(-0.5)
