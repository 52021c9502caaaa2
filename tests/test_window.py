# tests/test_window.py
import math

import pytest

from estimators.basic.stats.core import keep_x_seconds_of_data
from utils.samples.sample_input import Sample


def _ramp(n: int) -> list[Sample]:
    return [Sample(time=float(i), value=float(i)) for i in range(n)]


def test_empty_sequence_passes_through() -> None:
    assert keep_x_seconds_of_data([], 5.0) == []


def test_keeps_last_seconds_inclusive_of_cutoff() -> None:
    out = keep_x_seconds_of_data(_ramp(10), 3.0)
    assert [s.time for s in out] == [6.0, 7.0, 8.0, 9.0]


def test_zero_seconds_keeps_samples_at_last_timestamp() -> None:
    data = _ramp(5) + [Sample(time=4.0, value=-1.0)]
    out = keep_x_seconds_of_data(data, 0.0)
    assert [s.value for s in out] == [4.0, -1.0]


def test_longer_than_sequence_returns_independent_copy() -> None:
    data = _ramp(4)
    out = keep_x_seconds_of_data(data, 100.0)
    assert out == data
    assert out is not data
    out.pop()
    assert len(data) == 4


def test_reapplying_same_window_is_idempotent() -> None:
    once = keep_x_seconds_of_data(_ramp(50), 7.5)
    twice = keep_x_seconds_of_data(once, 7.5)
    assert once == twice


@pytest.mark.parametrize("seconds", [-0.1, math.nan])
def test_invalid_seconds_rejected(seconds: float) -> None:
    with pytest.raises(ValueError):
        keep_x_seconds_of_data(_ramp(3), seconds)
