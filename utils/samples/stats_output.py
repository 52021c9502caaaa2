# utils/samples/stats_output.py
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntFlag

__all__ = ["StatsStatus", "StatsOutput", "MultiStatsOutput"]


class StatsStatus(IntFlag):
    OK = 0x0000
    EMPTY_WINDOW = 0x0001  # bare buffer checked before any update
    BUFFER_FILLING = 0x0002
    PARTIAL_CYCLE = 0x0004  # fewer whole cycles than the configured minimum
    NON_FINITE = 0x0008


@dataclass(slots=True)
class StatsOutput:
    rms: float
    zcr: float
    timestamp: float
    status_word: StatsStatus = StatsStatus.OK

    def to_standard_dict(self) -> dict[str, float | int | None]:
        return {
            "TIMESTAMP": float(self.timestamp),
            "RMS": float(self.rms),
            # JSON has no NaN
            "NZCR_HZ": float(self.zcr) if math.isfinite(self.zcr) else None,
            "STATUS_WORD": int(self.status_word),
        }


@dataclass(slots=True)
class MultiStatsOutput:
    rms: list[float]
    zcr: list[float]
    timestamp: float
    status_word: StatsStatus = StatsStatus.OK

    def to_standard_dict(self) -> dict[str, float | int | None]:
        out: dict[str, float | int | None] = {
            "TIMESTAMP": float(self.timestamp),
            "STATUS_WORD": int(self.status_word),
        }
        for ch, (r, z) in enumerate(zip(self.rms, self.zcr)):
            out[f"CH{ch}_RMS"] = float(r)
            out[f"CH{ch}_NZCR_HZ"] = float(z) if math.isfinite(z) else None
        return out
