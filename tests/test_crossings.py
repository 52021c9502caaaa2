# tests/test_crossings.py
import math

import pytest

from estimators.basic.stats.core import (
    StatsConfig,
    count_crossings,
    negative_zero_crossing_rate,
    zero_crossing_rate,
)
from scenarios.s1_synthetic.sine_wave import generate_sine_wave
from utils.samples.sample_input import Sample


def _seq(values: list[float]) -> list[Sample]:
    return [Sample(time=float(i), value=v) for i, v in enumerate(values)]


def test_alternating_signs() -> None:
    data = _seq([1.0, -1.0, 1.0, -1.0])
    assert count_crossings(data, "either") == 3
    assert count_crossings(data, "pos_to_neg") == 2
    assert zero_crossing_rate(data) == pytest.approx(1.0)
    assert negative_zero_crossing_rate(data) == pytest.approx(2.0 / 3.0)


def test_zero_counts_as_both_signs() -> None:
    # landing on zero then leaving it counts once
    assert count_crossings(_seq([1.0, 0.0, -1.0]), "either") == 1
    assert count_crossings(_seq([1.0, 0.0, -1.0]), "pos_to_neg") == 1
    assert count_crossings(_seq([-1.0, 0.0, 1.0]), "either") == 1
    assert count_crossings(_seq([-1.0, 0.0, 1.0]), "pos_to_neg") == 0
    # touching zero from above and bouncing back still counts
    assert count_crossings(_seq([1.0, 0.0, 1.0]), "either") == 1


def test_short_sequences_have_zero_rate() -> None:
    assert zero_crossing_rate([]) == 0.0
    assert negative_zero_crossing_rate([Sample(time=0.0, value=-1.0)]) == 0.0


def test_zero_duration_policy() -> None:
    data = [Sample(time=1.0, value=1.0), Sample(time=1.0, value=-1.0)]
    assert negative_zero_crossing_rate(data) == 0.0
    assert math.isnan(negative_zero_crossing_rate(data, StatsConfig(zero_duration="nan")))
    assert math.isnan(zero_crossing_rate(data, StatsConfig(zero_duration="nan")))


def test_unknown_mode_rejected() -> None:
    with pytest.raises(ValueError):
        count_crossings(_seq([1.0, -1.0]), "neg_to_pos")  # type: ignore[arg-type]


def test_nzcr_tracks_sine_frequency() -> None:
    data = generate_sine_wave(440, 1, 1, 1000)
    assert abs(negative_zero_crossing_rate(data) - 440.0) < 1.0


def test_zcr_is_twice_frequency() -> None:
    data = generate_sine_wave(100, 1, 1, 1000)
    assert abs(zero_crossing_rate(data) - 200.0) < 2.0
