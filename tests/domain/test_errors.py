"""Tests for the error taxonomy."""

import pytest

from signctl.domain.errors import (
    ConfigurationError,
    CryptoError,
    DegenerateRangeError,
    RandomnessUnavailableError,
)


@pytest.mark.parametrize(
    "exc_type", [ConfigurationError, RandomnessUnavailableError, DegenerateRangeError]
)
def test_all_faults_share_base(exc_type: type[Exception]) -> None:
    assert issubclass(exc_type, CryptoError)


def test_degenerate_range_is_value_error() -> None:
    err = DegenerateRangeError(7)
    assert isinstance(err, ValueError)
    assert err.value == 7
    assert "7" in str(err)
