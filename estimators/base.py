from __future__ import annotations

from typing import Any, Dict

from utils.samples.sample_input import MultiChannelSample, Sample
from utils.samples.stats_output import MultiStatsOutput, StatsOutput


def _cfg_get(cfg: Any, key: str, default: Any) -> Any:
    """Fetch config value from object attribute or mapping key (fallback to default)."""
    if cfg is None:
        return default
    try:
        return getattr(cfg, key)
    except AttributeError:
        try:
            return cfg[key]
        except (KeyError, TypeError):
            return default


def _positive_int(value: Any, what: str) -> int:
    """Coerce an integral, strictly positive config value to int; reject anything else."""
    try:
        as_float = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{what} must be a positive integer, got {value!r}") from exc
    if isinstance(value, bool) or not as_float.is_integer() or as_float <= 0:
        raise ValueError(f"{what} must be a positive integer, got {value!r}")
    return int(as_float)


class EstimatorBase:
    """Base class for all streaming statistics estimators."""

    # sample type accepted by update(); narrowed in subclasses
    sample_type: type = Sample

    def __init__(self, config: Any, name: str = "") -> None:
        """
        :param config: mapping or attribute object with estimator knobs.
        :param name: label used in logs and benchmark output.
        """
        self.name: str = name
        self.memory: Dict[str, Any] = {}
        self.config: Any = config

    def reset(self) -> None:
        """Reset internal state (buffers, memory, held results, etc.)."""
        self.memory.clear()

    def update(self, sample: Sample | MultiChannelSample) -> StatsOutput | MultiStatsOutput:
        """
        Processes a single, time-tagged sample. The estimator buffers samples
        internally and returns its current statistics.
        """
        if not isinstance(sample, self.sample_type):
            raise TypeError(
                f"update() requires a single {self.sample_type.__name__}, "
                f"got {type(sample).__name__}"
            )
        return self._update(sample)

    def _update(self, sample: Any) -> Any:
        # Implementation in derived classes must handle buffering and processing.
        raise NotImplementedError
