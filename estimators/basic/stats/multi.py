# estimators/basic/stats/multi.py
# ---------------------------------------------------------------------
# N-channel rolling statistics: one CircularBuffer per channel, all fed
# from the same time-aligned MultiChannelSample.
# ---------------------------------------------------------------------

from __future__ import annotations

from typing import Any

from estimators.base import EstimatorBase, _cfg_get, _positive_int
from utils.samples.sample_input import MultiChannelSample, Sample
from utils.samples.stats_output import MultiStatsOutput, StatsStatus

from .buffer import CircularBuffer
from .single import stats_config_from, window_status


class RollingStatsMulti(EstimatorBase):
    """
    Rolling RMS / NZCR for multi-channel samples.
    Config keys:
      - channels: int             (required) number of channels per sample
      - capacity, analyze_every, min_cycles, max_cycles, zero_duration,
        validate                  (as in RollingStats)
    """

    sample_type = MultiChannelSample

    def __init__(self, config: Any, name: str = "rolling_stats_multi") -> None:
        super().__init__(config=config, name=name)

        self.n_channels: int = _positive_int(
            _cfg_get(config, "channels", 0), "RollingStatsMulti channels"
        )

        capacity = _positive_int(_cfg_get(config, "capacity", 1000), "RollingStatsMulti capacity")

        self.analyze_every: int = _positive_int(
            _cfg_get(config, "analyze_every", 1), "RollingStatsMulti analyze_every"
        )

        self.validate: bool = bool(_cfg_get(config, "validate", True))
        self.cfg = stats_config_from(config)
        self.buffers: list[CircularBuffer] = [
            CircularBuffer(capacity, self.cfg) for _ in range(self.n_channels)
        ]

        self._updates: int = 0
        self._held: MultiStatsOutput | None = None

    def reset(self) -> None:
        for buf in self.buffers:
            buf.clear()
        self._updates = 0
        self._held = None
        super().reset()

    def _analyze(self, ts: float) -> MultiStatsOutput:
        rms_list: list[float] = []
        zcr_list: list[float] = []
        status = StatsStatus.OK
        for buf in self.buffers:
            r, z = buf.analyze_buffer()
            rms_list.append(r)
            zcr_list.append(z)
            status |= window_status(buf, z, self.cfg)
        return MultiStatsOutput(rms=rms_list, zcr=zcr_list, timestamp=ts, status_word=status)

    def _update(self, sample: MultiChannelSample) -> MultiStatsOutput:
        if sample.channel_count != self.n_channels:
            raise ValueError(
                f"expected {self.n_channels} channels, got {sample.channel_count}"
            )
        if self.validate:
            sample.validate()

        for buf, v in zip(self.buffers, sample.value):
            buf.update(Sample(time=sample.time, value=v))

        self._updates += 1
        if self._held is None or self._updates % self.analyze_every == 0:
            self._held = self._analyze(sample.time)
            return self._held

        return MultiStatsOutput(
            rms=list(self._held.rms),
            zcr=list(self._held.zcr),
            timestamp=sample.time,
            status_word=self._held.status_word,
        )
