# utils/samples/sample_input.py
from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

__all__ = ["Sample", "MultiChannelSample", "deinterleave"]


# ---- Data carriers ----------------------------------------------------------
@dataclass(frozen=True, slots=True)
class Sample:
    time: float  # seconds, non-decreasing across a sequence
    value: float

    def validate(self) -> None:
        if not np.isfinite([self.time, self.value]).all():
            raise ValueError("Non-finite value in input sample.")

    def to_dict(self) -> dict[str, float]:
        return {"time": float(self.time), "value": float(self.value)}

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> Sample:
        return cls(time=float(raw["time"]), value=float(raw["value"]))


@dataclass(frozen=True, slots=True)
class MultiChannelSample:
    """One time-aligned reading across several channels."""

    time: float
    value: tuple[float, ...]

    @property
    def channel_count(self) -> int:
        return len(self.value)

    def validate(self) -> None:
        if not np.isfinite([self.time, *self.value]).all():
            raise ValueError("Non-finite value in input sample.")

    def to_dict(self) -> dict[str, float | list[float]]:
        return {"time": float(self.time), "value": [float(v) for v in self.value]}

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> MultiChannelSample:
        return cls(time=float(raw["time"]), value=tuple(float(v) for v in raw["value"]))


def deinterleave(samples: Sequence[MultiChannelSample]) -> list[list[Sample]]:
    """
    Split a multi-channel sequence into one single-channel sequence per
    channel, in channel order. All channels share the input timestamps.
    """
    if not samples:
        return []

    n_channels = samples[0].channel_count
    channels: list[list[Sample]] = [[] for _ in range(n_channels)]
    for k, s in enumerate(samples):
        if s.channel_count != n_channels:
            raise ValueError(
                f"sample {k} has {s.channel_count} channels, expected {n_channels}"
            )
        for ch, v in enumerate(s.value):
            channels[ch].append(Sample(time=s.time, value=v))
    return channels
