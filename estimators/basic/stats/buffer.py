from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from estimators.base import _positive_int
from utils.samples.sample_input import Sample

from .analyze import analyze_arrays
from .core import StatsConfig

logger = logging.getLogger(__name__)


class CircularBuffer:
    """
    Fixed-capacity ring of the most recent samples.

    Backed by two preallocated float arrays (time, value) with an explicit
    write cursor `head` and fill `count`; nothing is reallocated after
    construction. Once full, each `update` overwrites the oldest sample.

    Not thread-safe: one writer at a time, snapshots taken between writes.
    """

    def __init__(self, capacity: int, cfg: StatsConfig | None = None) -> None:
        capacity = _positive_int(capacity, "CircularBuffer capacity")

        self.cfg: StatsConfig | None = cfg
        self._capacity: int = capacity
        self._times: NDArray[np.float64] = np.zeros(capacity, dtype=float)
        self._values: NDArray[np.float64] = np.zeros(capacity, dtype=float)
        self._head: int = 0
        self._count: int = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def count(self) -> int:
        return self._count

    @property
    def is_full(self) -> bool:
        return self._count == self._capacity

    def __len__(self) -> int:
        return self._count

    @property
    def span(self) -> float:
        """Seconds between the oldest and newest retained samples."""
        if self._count < 2:
            return 0.0
        newest = (self._head - 1) % self._capacity
        oldest = (self._head - self._count) % self._capacity
        return float(self._times[newest] - self._times[oldest])

    def clear(self) -> None:
        self._times.fill(0.0)
        self._values.fill(0.0)
        self._head = 0
        self._count = 0

    def update(self, sample: Sample) -> None:
        self._times[self._head] = sample.time
        self._values[self._head] = sample.value
        self._head = (self._head + 1) % self._capacity
        if self._count < self._capacity:
            self._count += 1
            if self._count == self._capacity:
                logger.debug("buffer full at %d samples; evicting oldest from now on", self._capacity)

    def _order(self) -> NDArray[np.intp]:
        # indices of the retained samples, oldest first
        start = (self._head - self._count) % self._capacity
        return (start + np.arange(self._count)) % self._capacity

    def arrays(self) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """(times, values) of the retained samples, oldest first, as fresh arrays."""
        idx = self._order()
        return self._times[idx], self._values[idx]

    def snapshot(self) -> list[Sample]:
        """Retained samples, oldest first, as a fresh list."""
        times, values = self.arrays()
        return [Sample(time=t, value=v) for t, v in zip(times.tolist(), values.tolist())]

    def analyze_buffer(self) -> tuple[float, float]:
        """(rms, zcr) of the current contents; (0.0, 0.0) when empty."""
        if self._count == 0:
            return 0.0, 0.0
        return analyze_arrays(*self.arrays(), self.cfg)
