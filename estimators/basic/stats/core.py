from __future__ import annotations
# estimators/basic/stats/core.py
# ---------------------------------------------------------------------
# Time-domain statistics core: whole-cycle RMS and zero-crossing rates.
# Intended to be imported by:
#   - estimators/basic/stats/analyze.py  (RMS + NZCR in one call)
#   - estimators/basic/stats/buffer.py   (rolling window buffer)
#   - estimators/basic/stats/single.py   (streaming, single channel)
#   - estimators/basic/stats/multi.py    (streaming, N channels)
#
# Provides:
#   - StatsConfig: policy knobs (cycle bounds, zero-duration handling)
#   - keep_x_seconds_of_data(): recency window selector
#   - count_crossings() / zero_crossing_rate() / negative_zero_crossing_rate()
#   - rms(): whole-cycle aligned quadratic mean
#   - *_arrays() variants on parallel time/value arrays (used by the buffer)
# ---------------------------------------------------------------------

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

import numpy as np
from numpy.typing import NDArray

from utils.samples.sample_input import Sample

logger = logging.getLogger(__name__)

# --------------------------- Config ----------------------------------

CrossingMode = Literal["pos_to_neg", "either"]
ZeroDurationPolicy = Literal["zero", "nan"]


@dataclass(frozen=True, slots=True)
class StatsConfig:
    """Runtime knobs for the RMS / ZCR core."""

    min_cycles: float = 1.0  # below this, RMS uses the whole sequence
    max_cycles: float = 1000.0  # cap on cycles in the RMS window
    zero_duration: ZeroDurationPolicy = "zero"  # rate when last.time == first.time

    def __post_init__(self) -> None:
        if not self.min_cycles >= 1.0:
            raise ValueError("StatsConfig requires min_cycles >= 1")
        if not self.max_cycles >= self.min_cycles:
            raise ValueError("StatsConfig requires max_cycles >= min_cycles")
        if self.zero_duration not in ("zero", "nan"):
            raise ValueError(f"unknown zero_duration policy: {self.zero_duration!r}")


# Module-level default (OK for B008)
DEFAULT_STATS_CFG = StatsConfig()


# ------------------------- Window selector ---------------------------


def keep_x_seconds_of_data(samples: Sequence[Sample], seconds: float) -> list[Sample]:
    """
    Return the longest suffix of `samples` whose first timestamp is no older
    than `last.time - seconds`. The result is always a new list.
    """
    if math.isnan(seconds) or seconds < 0.0:
        raise ValueError(f"seconds must be a non-negative number, got {seconds!r}")
    if not samples:
        return []

    cutoff = samples[-1].time - seconds

    # Linear scan from the oldest sample; the cutoff is usually near the start.
    for i, s in enumerate(samples):
        if s.time >= cutoff:
            return list(samples[i:])

    return []


# ---------------------------- Array layer ----------------------------
# Everything below works on parallel float arrays of times and values so a
# ring buffer can be analysed without materialising Sample objects.


def as_arrays(samples: Sequence[Sample]) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """(times, values) of a sample sequence as float64 arrays."""
    n = len(samples)
    times = np.fromiter((s.time for s in samples), dtype=np.float64, count=n)
    return times, _values(samples)


def _values(samples: Sequence[Sample]) -> NDArray[np.float64]:
    return np.fromiter((s.value for s in samples), dtype=np.float64, count=len(samples))


def _window_start(times: NDArray[np.float64], seconds: float) -> int:
    """First index whose time is >= times[-1] - seconds (len(times) if none)."""
    at_or_after = times >= times[-1] - seconds
    i = int(np.argmax(at_or_after))
    return i if at_or_after[i] else times.size


def _quadratic_mean(x: NDArray[np.float64]) -> float:
    if x.size == 0:
        return 0.0
    return float(np.sqrt(np.mean(x * x)))


# ------------------------- Crossing counter --------------------------


def count_crossings_array(values: NDArray[np.float64], mode: CrossingMode = "either") -> int:
    """
    Count sign transitions between consecutive values.

    Zero is treated as both non-negative and non-positive, so a sample that
    lands exactly on zero may be counted on both sides of it.

    mode
    ----
    "either"     : >=0 -> <0 and <=0 -> >0
    "pos_to_neg" : >=0 -> <0 only
    """
    if values.size < 2:
        return 0

    prev, curr = values[:-1], values[1:]
    crossed = (prev >= 0.0) & (curr < 0.0)
    if mode == "either":
        crossed |= (prev <= 0.0) & (curr > 0.0)
    elif mode != "pos_to_neg":
        raise ValueError(f"unknown crossing mode: {mode!r}")
    return int(np.count_nonzero(crossed))


def count_crossings(samples: Sequence[Sample], mode: CrossingMode = "either") -> int:
    """`count_crossings_array` over the values of a sample sequence."""
    if len(samples) < 2:
        return 0
    return count_crossings_array(_values(samples), mode)


def crossing_rate_arrays(
    times: NDArray[np.float64],
    values: NDArray[np.float64],
    mode: CrossingMode,
    cfg: StatsConfig | None = None,
) -> float:
    """Crossings per second between times[0] and times[-1]."""
    cfg = cfg or DEFAULT_STATS_CFG
    if values.size < 2:
        return 0.0

    crossings = count_crossings_array(values, mode)
    duration = float(times[-1] - times[0])
    if duration == 0.0:
        return 0.0 if cfg.zero_duration == "zero" else math.nan
    return float(crossings) / duration


def zero_crossing_rate(samples: Sequence[Sample], cfg: StatsConfig | None = None) -> float:
    """All sign changes per second."""
    if len(samples) < 2:
        return 0.0
    return crossing_rate_arrays(*as_arrays(samples), "either", cfg)


def negative_zero_crossing_rate(
    samples: Sequence[Sample], cfg: StatsConfig | None = None
) -> float:
    """Positive-to-negative sign changes per second (one per cycle of a sinusoid)."""
    if len(samples) < 2:
        return 0.0
    return crossing_rate_arrays(*as_arrays(samples), "pos_to_neg", cfg)


# --------------------------- RMS estimator ---------------------------


def calculate_rms(samples: Sequence[Sample]) -> float:
    """Quadratic mean of the sample values (0.0 when empty)."""
    return _quadratic_mean(_values(samples))


def calculate_rms_peak(samples: Sequence[Sample]) -> float:
    """Peak magnitude / sqrt(2); only meaningful for clean sinusoids."""
    if not samples:
        return 0.0
    return float(np.max(np.abs(_values(samples))) / math.sqrt(2.0))


def cycles_in_span(duration: float, frequency: float) -> float:
    """Number of complete periods of `frequency` that fit in `duration` seconds."""
    if frequency == 0.0 or not math.isfinite(frequency):
        return 0.0
    period = 1.0 / frequency
    return float(math.floor(duration / period))


def whole_cycles(samples: Sequence[Sample], frequency: float) -> float:
    """Number of complete periods of `frequency` spanned by `samples`."""
    if len(samples) < 2:
        return 0.0
    return cycles_in_span(samples[-1].time - samples[0].time, frequency)


def rms_arrays(
    times: NDArray[np.float64],
    values: NDArray[np.float64],
    frequency: float,
    cfg: StatsConfig | None = None,
) -> float:
    """
    RMS over the most recent whole number of cycles of `frequency`.

    Returns 0.0 for an empty sequence or a zero (or non-finite) frequency.
    With fewer than `cfg.min_cycles` whole cycles of history the whole
    sequence is used; otherwise at most `cfg.max_cycles` cycles are kept.
    """
    cfg = cfg or DEFAULT_STATS_CFG
    if values.size == 0:
        return 0.0
    if frequency == 0.0 or not math.isfinite(frequency):
        return 0.0

    period = 1.0 / frequency
    cycles = cycles_in_span(float(times[-1] - times[0]), frequency) if values.size > 1 else 0.0

    if cycles < cfg.min_cycles:
        logger.debug("only %.0f whole cycles at %.3f Hz; using full sequence", cycles, frequency)
        return _quadratic_mean(values)

    cycles_to_use = min(cycles, cfg.max_cycles)
    start = _window_start(times, cycles_to_use * period)
    return _quadratic_mean(values[start:])


def rms(
    samples: Sequence[Sample], frequency: float, cfg: StatsConfig | None = None
) -> float:
    """`rms_arrays` over a sample sequence."""
    if not samples:
        return 0.0
    return rms_arrays(*as_arrays(samples), frequency, cfg)
