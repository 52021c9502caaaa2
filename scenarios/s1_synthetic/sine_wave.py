# scenarios/s1_synthetic/sine_wave.py
from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from utils.samples.sample_input import MultiChannelSample, Sample


def _sample_count(duration: float, sample_rate: int) -> int:
    if sample_rate <= 0:
        raise ValueError("sample_rate must be > 0")
    if duration < 0.0:
        raise ValueError("duration must be >= 0")
    return int(duration * float(sample_rate))


def generate_sine_wave(
    frequency: float,
    amplitude: float,
    duration: float,
    sample_rate: int,
) -> list[Sample]:
    """
    Generate a sine wave starting at t = 0 with value 0.

    Values come from the second-order recurrence
        y[n] = 2*cos(w*dt) * y[n-1] - y[n-2]
    seeded with y[0] = 0 and y[1] = A*sin(w*dt), so only one sin/cos is
    evaluated per call. Floating-point drift grows with the number of
    samples; use `direct_sine_wave` as a reference for very long runs.

    Parameters
    ----------
    frequency : float
        Frequency [Hz].
    amplitude : float
        Peak amplitude.
    duration : float
        Length [s]; floor(duration * sample_rate) samples are produced.
    sample_rate : int
        Samples per second.
    """
    n = _sample_count(duration, sample_rate)
    if n == 0:
        return []

    angular_frequency = 2.0 * math.pi * frequency
    time_step = 1.0 / float(sample_rate)

    data: list[Sample] = [Sample(time=0.0, value=0.0)]
    if n > 1:
        data.append(Sample(time=time_step, value=amplitude * math.sin(angular_frequency * time_step)))

    c = 2.0 * math.cos(angular_frequency * time_step)
    y2, y1 = data[0].value, data[-1].value
    for i in range(2, n):
        y = c * y1 - y2
        data.append(Sample(time=float(i) * time_step, value=y))
        y2, y1 = y1, y

    return data


def direct_sine_wave(
    frequency: float,
    amplitude: float,
    duration: float,
    sample_rate: int,
) -> list[Sample]:
    """Same contract as `generate_sine_wave`, evaluating sin() at every sample."""
    n = _sample_count(duration, sample_rate)
    time_step = 1.0 / float(sample_rate)
    t = np.arange(n, dtype=float) * time_step
    x = amplitude * np.sin(2.0 * np.pi * frequency * t)
    return [Sample(time=ti, value=xi) for ti, xi in zip(t.tolist(), x.tolist())]


def combine_channels(*channels: Sequence[Sample]) -> list[MultiChannelSample]:
    """
    Zip equally long single-channel sequences into multi-channel samples.
    Timestamps are taken from the first channel.
    """
    if not channels:
        return []
    n = len(channels[0])
    if any(len(ch) != n for ch in channels):
        raise ValueError("all channels must have the same number of samples")
    return [
        MultiChannelSample(time=channels[0][k].time, value=tuple(ch[k].value for ch in channels))
        for k in range(n)
    ]
