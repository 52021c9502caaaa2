from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from utils.samples.sample_input import Sample


def amplitude_step(
    f0: float = 50.0,
    a0: float = 1.0,
    a_step: float = 2.0,
    t_step: float = 1.0,
    t_back: float = 2.0,
    duration: float = 3.0,
    fs: int = 5000,
) -> tuple[list[Sample], NDArray[np.float64]]:
    """
    Generate a sinusoid whose amplitude steps from a0 to a_step and back.

    Parameters
    ----------
    f0 : float
        Frequency (Hz).
    a0 : float
        Nominal peak amplitude.
    a_step : float
        Peak amplitude during the disturbance.
    t_step : float
        Time (s) when amplitude steps from a0 to a_step.
    t_back : float
        Time (s) when amplitude returns to a0.
    duration : float
        Total duration (s).
    fs : int
        Sampling frequency (Hz).

    Returns
    -------
    samples : list[Sample]
        Generated waveform.
    rms_true : np.ndarray
        Instantaneous true RMS (amplitude / sqrt(2)) per sample.
    """
    if fs <= 0:
        raise ValueError("fs must be > 0")
    n = int(float(duration) * float(fs))
    t = np.arange(n, dtype=float) / float(fs)

    # Piecewise amplitude profile
    a = np.full_like(t, float(a0), dtype=float)
    step_mask = (t >= float(t_step)) & (t < float(t_back))
    a[step_mask] = float(a_step)

    x = a * np.sin(2.0 * np.pi * f0 * t)
    samples = [Sample(time=ti, value=xi) for ti, xi in zip(t.tolist(), x.tolist())]
    return samples, a / math.sqrt(2.0)
