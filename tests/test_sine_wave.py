# tests/test_sine_wave.py
import numpy as np
import pytest

from scenarios.s1_synthetic.amplitude_step import amplitude_step
from scenarios.s1_synthetic.sine_wave import (
    combine_channels,
    direct_sine_wave,
    generate_sine_wave,
)


def test_generate_sine_wave() -> None:
    frequency, amplitude, duration, sample_rate = 100.0, 5.0, 5.0, 2000
    data = generate_sine_wave(frequency, amplitude, duration, sample_rate)

    assert len(data) == 10000
    assert abs(data[0].value) < 1e-10
    assert data[0].time == 0.0
    assert data[1].time == pytest.approx(1.0 / sample_rate)

    max_amplitude = max(abs(s.value) for s in data)
    assert abs(max_amplitude - amplitude) < 1e-9

    # positive-going crossings per second
    crossings = sum(
        1 for a, b in zip(data, data[1:]) if a.value <= 0 and b.value > 0
    )
    assert abs(crossings / duration - frequency) < 1.0


def test_recurrence_tracks_direct_evaluation() -> None:
    rec = np.array([s.value for s in generate_sine_wave(100.0, 5.0, 5.0, 2000)])
    ref = np.array([s.value for s in direct_sine_wave(100.0, 5.0, 5.0, 2000)])
    assert rec.shape == ref.shape
    assert np.max(np.abs(rec - ref)) < 1e-8


def test_short_and_invalid_lengths() -> None:
    assert generate_sine_wave(50.0, 1.0, 0.0, 1000) == []
    one = generate_sine_wave(50.0, 1.0, 0.001, 1000)
    assert len(one) == 1 and one[0].value == 0.0
    with pytest.raises(ValueError):
        generate_sine_wave(50.0, 1.0, 1.0, 0)
    with pytest.raises(ValueError):
        generate_sine_wave(50.0, 1.0, -1.0, 1000)


def test_combine_channels() -> None:
    a = generate_sine_wave(10.0, 1.0, 0.1, 100)
    b = generate_sine_wave(20.0, 2.0, 0.1, 100)
    combined = combine_channels(a, b)
    assert len(combined) == len(a)
    assert combined[3].time == a[3].time
    assert combined[3].value == (a[3].value, b[3].value)
    with pytest.raises(ValueError):
        combine_channels(a, b[:-1])


def test_amplitude_step_truth() -> None:
    samples, rms_true = amplitude_step(f0=50.0, a0=1.0, a_step=2.0, t_step=1.0, t_back=2.0,
                                       duration=3.0, fs=1000)
    assert len(samples) == rms_true.size == 3000
    assert rms_true[500] == pytest.approx(1 / np.sqrt(2))
    assert rms_true[1500] == pytest.approx(2 / np.sqrt(2))
    assert rms_true[2500] == pytest.approx(1 / np.sqrt(2))
