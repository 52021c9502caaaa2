from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from utils.samples.sample_input import MultiChannelSample, Sample, deinterleave

from .core import StatsConfig, as_arrays, crossing_rate_arrays, rms_arrays

logger = logging.getLogger(__name__)


def analyze_arrays(
    times: NDArray[np.float64],
    values: NDArray[np.float64],
    cfg: StatsConfig | None = None,
) -> tuple[float, float]:
    """`analyze` on parallel time/value arrays, oldest first."""
    zcr = crossing_rate_arrays(times, values, "pos_to_neg", cfg)
    return rms_arrays(times, values, zcr, cfg), zcr


def analyze(samples: Sequence[Sample], cfg: StatsConfig | None = None) -> tuple[float, float]:
    """
    RMS and negative zero-crossing rate of a single channel.

    The NZCR is computed first and used as the fundamental frequency that
    aligns the RMS window to whole cycles.

    Returns
    -------
    (rms, zcr): tuple[float, float]
    """
    return analyze_arrays(*as_arrays(samples), cfg)


def analyze_multi_channel(
    samples: Sequence[MultiChannelSample], cfg: StatsConfig | None = None
) -> tuple[list[float], list[float]]:
    """Per-channel `analyze`, returned as (rms_list, zcr_list) in channel order."""
    channels = deinterleave(samples)
    logger.debug("analyzing %d channels x %d samples", len(channels), len(samples))

    rms_out: list[float] = []
    zcr_out: list[float] = []
    for channel in channels:
        r, z = analyze(channel, cfg)
        rms_out.append(r)
        zcr_out.append(z)
    return rms_out, zcr_out
