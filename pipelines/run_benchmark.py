from __future__ import annotations

import json
import logging
import math
import time
from collections.abc import Callable, Sequence
from datetime import datetime
from pathlib import Path
from typing import Protocol, TypedDict

import matplotlib.pyplot as plt
import numpy as np

from estimators.basic.stats.analyze import analyze
from estimators.basic.stats.buffer import CircularBuffer
from estimators.basic.stats.multi import RollingStatsMulti
from estimators.basic.stats.single import RollingStats
from evaluation import metrics
from evaluation.plotting import plot_signal_and_stats
from scenarios.s1_synthetic.amplitude_step import amplitude_step
from scenarios.s1_synthetic.sine_wave import combine_channels, generate_sine_wave
from utils.logging import setup_logging
from utils.samples.sample_input import Sample
from utils.samples.stats_output import StatsOutput, StatsStatus

logger = logging.getLogger(__name__)


class Estimator(Protocol):
    """Estimator interface needed here."""

    def update(self, sample: Sample) -> StatsOutput:  # match concrete RollingStats
        ...


class RunResult(TypedDict):
    name: str
    n_samples: int
    rmse_rms: float
    rmse_zcr: float
    final_rms_rel_error: float
    final_zcr_rel_error: float
    rms_hat: list[float]
    zcr_hat: list[float]


class Scenario(TypedDict):
    samples: list[Sample]
    rms_true: np.ndarray
    f_true: float


def run_single(
    estimator: Estimator,
    samples: Sequence[Sample],
    rms_true: np.ndarray,
    f_true: float,
    name: str = "unknown",
) -> RunResult:
    """Feed samples to a streaming estimator and collect RMS / NZCR traces."""
    rms_vals: list[float] = []
    zcr_vals: list[float] = []
    out: StatsOutput | None = None
    for s in samples:
        out = estimator.update(s)
        # warm-up outputs are not scored
        if out.status_word & (StatsStatus.BUFFER_FILLING | StatsStatus.NON_FINITE):
            rms_vals.append(math.nan)
            zcr_vals.append(math.nan)
        else:
            rms_vals.append(out.rms)
            zcr_vals.append(out.zcr)

    rms_arr = np.asarray(rms_vals, dtype=float)
    zcr_arr = np.asarray(zcr_vals, dtype=float)
    rms_true = np.asarray(rms_true, dtype=float)[: rms_arr.shape[0]]

    # error of the last output against the truth at that instant
    if out is not None and rms_true.size:
        final_rms_err = metrics.relative_error(out.rms, float(rms_true[-1]))
        final_zcr_err = metrics.relative_error(out.zcr, float(f_true))
    else:
        final_rms_err = final_zcr_err = math.nan

    return {
        "name": name,
        "n_samples": len(samples),
        "rmse_rms": metrics.trace_error(rms_arr, rms_true),
        "rmse_zcr": metrics.trace_error(zcr_arr, np.full_like(zcr_arr, float(f_true))),
        "final_rms_rel_error": final_rms_err,
        "final_zcr_rel_error": final_zcr_err,
        "rms_hat": rms_arr.tolist(),
        "zcr_hat": zcr_arr.tolist(),
    }


def compare_buffer_vs_slice(
    n_updates: int = 20_000, capacity: int = 1000, every: int = 100
) -> dict[str, float]:
    """
    Time periodic analysis of the last `capacity` samples, kept either in a
    CircularBuffer or in a list that is re-sliced as it grows.
    """
    wave = generate_sine_wave(440.0, 1.0, 1.0, 1000)

    cb = CircularBuffer(capacity)
    t0 = time.perf_counter()
    for i in range(n_updates):
        cb.update(Sample(time=float(i), value=wave[i % len(wave)].value))
        if i % every == 0:
            cb.analyze_buffer()
    t_buffer = time.perf_counter() - t0

    data: list[Sample] = []
    t0 = time.perf_counter()
    for i in range(n_updates):
        data.append(Sample(time=float(i), value=wave[i % len(wave)].value))
        if i % every == 0:
            if len(data) > capacity:
                data = data[len(data) - capacity :]
            analyze(data)
    t_slice = time.perf_counter() - t0

    return {"circular_buffer_s": t_buffer, "slice_s": t_slice}


def _clean_sine(fs: int) -> Scenario:
    samples = generate_sine_wave(50.0, 1.0, 2.0, fs)
    return {
        "samples": samples,
        "rms_true": np.full(len(samples), 1.0 / math.sqrt(2.0)),
        "f_true": 50.0,
    }


def _amp_step(fs: int) -> Scenario:
    samples, rms_true = amplitude_step(f0=50.0, a0=1.0, a_step=2.0, duration=3.0, fs=fs)
    return {"samples": samples, "rms_true": rms_true, "f_true": 50.0}


def main() -> None:
    setup_logging("INFO")
    fs: int = 5000

    # RollingStats config: 0.2 s window at fs, re-analysed every 10 ms
    stats_config = {
        "capacity": 1000,
        "analyze_every": 50,
        "min_cycles": 1.0,
        "max_cycles": 1000.0,
    }
    estimators: dict[str, Callable[[], Estimator]] = {
        "Rolling": lambda: RollingStats(config=stats_config),
    }

    scenarios: dict[str, Callable[[], Scenario]] = {
        "s0_clean": lambda: _clean_sine(fs),
        "s1_amp_step": lambda: _amp_step(fs),
    }

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    root_dir = Path("data/results") / f"benchmark_{timestamp}"
    json_dir = root_dir / "jsons"
    plot_dir = root_dir / "plots"
    json_dir.mkdir(parents=True, exist_ok=True)
    plot_dir.mkdir(parents=True, exist_ok=True)

    all_results: dict[str, object] = {}

    for s_name, scenario_fn in scenarios.items():
        print(f"▶ Running scenario: {s_name}")
        sc = scenario_fn()

        results: list[RunResult] = []
        rms_estimates: dict[str, list[float]] = {}
        zcr_estimates: dict[str, list[float]] = {}

        for name, make_est in estimators.items():
            res = run_single(make_est(), sc["samples"], sc["rms_true"], sc["f_true"], name=name)
            logger.info(
                "%s/%s: rmse_rms=%.5f rmse_zcr=%.3f Hz final_rel_rms=%.2e final_rel_zcr=%.2e",
                s_name, name, res["rmse_rms"], res["rmse_zcr"],
                res["final_rms_rel_error"], res["final_zcr_rel_error"],
            )
            results.append(res)
            rms_estimates[name] = res["rms_hat"]
            zcr_estimates[name] = res["zcr_hat"]

        json_file = json_dir / f"{s_name}.json"
        with json_file.open("w", encoding="utf-8") as fh:
            json.dump(results, fh, indent=2)
        print(f"✅ JSON saved to {json_file}")

        t = np.array([s.time for s in sc["samples"]], dtype=float)
        x = np.array([s.value for s in sc["samples"]], dtype=float)
        fig = plot_signal_and_stats(
            t,
            x,
            sc["rms_true"],
            rms_estimates,
            zcr_estimates,
            sc["f_true"],
            title=s_name,
            zoom_windows_top=[(0.95, 1.05), (1.95, 2.05)],
        )
        plot_file = plot_dir / f"{s_name}.png"
        fig.savefig(plot_file, dpi=300, bbox_inches="tight")
        plt.close(fig)
        print(f"📈 Plot saved to {plot_file}")

        all_results[s_name] = [
            {k: v for k, v in r.items() if k not in ("rms_hat", "zcr_hat")} for r in results
        ]

    # two channels, one rolling buffer each
    print("▶ Running scenario: s2_two_channel")
    ch0 = generate_sine_wave(440.0, 1.0, 1.0, 2000)
    ch1 = generate_sine_wave(150.0, 2.0, 1.0, 2000)
    multi = RollingStatsMulti(config={"channels": 2, "capacity": 2000, "analyze_every": 2000})
    last = None
    for s in combine_channels(ch0, ch1):
        last = multi.update(s)
    if last is not None:
        all_results["s2_two_channel"] = last.to_standard_dict()
        logger.info("s2_two_channel: rms=%s nzcr=%s", last.rms, last.zcr)

    timings = compare_buffer_vs_slice()
    all_results["timings"] = timings
    logger.info("buffer vs slice: %s", timings)

    index_file = root_dir / "summary.json"
    with index_file.open("w", encoding="utf-8") as fh:
        json.dump(all_results, fh, indent=2)
    print(f"🗂 Summary saved to {index_file}")


if __name__ == "__main__":
    main()
