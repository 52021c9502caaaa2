from __future__ import annotations

import math
from typing import Any

from estimators.base import EstimatorBase, _cfg_get, _positive_int
from utils.samples.sample_input import Sample
from utils.samples.stats_output import StatsOutput, StatsStatus

from .buffer import CircularBuffer
from .core import StatsConfig, cycles_in_span


def stats_config_from(config: Any) -> StatsConfig:
    """Build a StatsConfig from a mapping or attribute object."""
    return StatsConfig(
        min_cycles=float(_cfg_get(config, "min_cycles", 1.0)),
        max_cycles=float(_cfg_get(config, "max_cycles", 1000.0)),
        zero_duration=str(_cfg_get(config, "zero_duration", "zero")),  # type: ignore[arg-type]
    )


def window_status(buffer: CircularBuffer, zcr: float, cfg: StatsConfig) -> StatsStatus:
    """
    Status word for an analysis of `buffer` that produced rate `zcr`.

    The streaming estimators call this after every update, so they never see
    an empty buffer; EMPTY_WINDOW is reported to callers that drive a bare
    CircularBuffer and check it before the first sample arrives.
    """
    if buffer.count == 0:
        return StatsStatus.EMPTY_WINDOW
    status = StatsStatus.OK
    if not buffer.is_full:
        status |= StatsStatus.BUFFER_FILLING
    if not math.isfinite(zcr):
        status |= StatsStatus.NON_FINITE
    elif cycles_in_span(buffer.span, zcr) < cfg.min_cycles:
        status |= StatsStatus.PARTIAL_CYCLE
    return status


class RollingStats(EstimatorBase):
    """
    Streaming RMS / NZCR over a fixed-capacity window of recent samples.

    Config keys (with defaults):
      - capacity: int             (default 1000) samples kept in the window
      - analyze_every: int        (default 1) re-analyze on every N-th update
      - min_cycles: float         (default 1.0) see StatsConfig
      - max_cycles: float         (default 1000.0)
      - zero_duration: str        (default "zero") "zero" | "nan"
      - validate: bool            (default True) reject non-finite samples
    """

    sample_type = Sample

    def __init__(self, config: Any, name: str = "rolling_stats") -> None:
        super().__init__(config=config, name=name)

        capacity = _positive_int(_cfg_get(config, "capacity", 1000), "RollingStats capacity")

        self.analyze_every: int = _positive_int(
            _cfg_get(config, "analyze_every", 1), "RollingStats analyze_every"
        )

        self.validate: bool = bool(_cfg_get(config, "validate", True))
        self.cfg: StatsConfig = stats_config_from(config)
        self.buffer: CircularBuffer = CircularBuffer(capacity, self.cfg)

        self._updates: int = 0
        self._held: StatsOutput | None = None

    def reset(self) -> None:
        self.buffer.clear()
        self._updates = 0
        self._held = None
        super().reset()

    def _analyze(self, ts: float) -> StatsOutput:
        r, z = self.buffer.analyze_buffer()
        return StatsOutput(
            rms=r, zcr=z, timestamp=ts, status_word=window_status(self.buffer, z, self.cfg)
        )

    def _update(self, sample: Sample) -> StatsOutput:
        if self.validate:
            sample.validate()
        self.buffer.update(sample)

        self._updates += 1
        if self._held is None or self._updates % self.analyze_every == 0:
            self._held = self._analyze(sample.time)
            return self._held

        # between analyses: hold the last result, restamped
        return StatsOutput(
            rms=self._held.rms,
            zcr=self._held.zcr,
            timestamp=sample.time,
            status_word=self._held.status_word,
        )
