from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

import matplotlib.gridspec as gridspec
import matplotlib.pyplot as plt
import numpy as np
from brokenaxes import brokenaxes
from matplotlib.figure import Figure


def plot_signal_and_stats(
    t: np.ndarray,
    signal: np.ndarray,
    rms_true: np.ndarray,
    rms_estimates: Mapping[str, Sequence[float]],
    zcr_estimates: Mapping[str, Sequence[float]],
    f_true: float,
    title: str = "Scenario",
    zoom_windows_top: Iterable[tuple[float, float]] | None = None,
) -> Figure:
    t = np.asarray(t, dtype=float).ravel()
    signal = np.asarray(signal, dtype=float).ravel()
    rms_true = np.asarray(rms_true, dtype=float).ravel()

    fig = plt.figure(figsize=(6.0, 4.8))
    gs = gridspec.GridSpec(3, 1, height_ratios=[1, 2, 2], figure=fig)

    if zoom_windows_top:
        bax = brokenaxes(xlims=list(zoom_windows_top), hspace=0.05, fig=fig, subplot_spec=gs[0])
        for t0, t1 in zoom_windows_top:
            mask = (t >= t0) & (t <= t1)
            bax.plot(t[mask], signal[mask], linewidth=1.0, label=f"{t0}-{t1}s")
        bax.set_ylabel("Amplitude", fontsize=9)
        bax.legend(fontsize=7, loc="best", framealpha=0.9)
        bax.set_title(f"{title} — Signal (zoomed ranges)", fontsize=9)
    else:
        ax0 = fig.add_subplot(gs[0])
        ax0.plot(t, signal, linewidth=1.0)
        ax0.set_ylabel("Amplitude", fontsize=9)
        ax0.set_title(f"{title} — Signal (full)", fontsize=9)
        ax0.grid(True, which="both", linestyle="--", linewidth=0.5)

    ax1 = fig.add_subplot(gs[1])
    for name, r_hat in rms_estimates.items():
        r_arr = np.asarray(r_hat, dtype=float).ravel()
        ax1.plot(t[: r_arr.size], r_arr, linewidth=1.0, label=f"{name} RMS")
    ax1.plot(t[: rms_true.size], rms_true, linestyle="--", linewidth=1.2, label="True RMS")
    ax1.set_ylabel("RMS", fontsize=9)
    ax1.legend(fontsize=7, framealpha=0.9, loc="best")
    ax1.grid(True, which="both", linestyle="--", linewidth=0.5)

    ax2 = fig.add_subplot(gs[2], sharex=ax1)
    for name, z_hat in zcr_estimates.items():
        z_arr = np.asarray(z_hat, dtype=float).ravel()
        ax2.plot(t[: z_arr.size], z_arr, linewidth=1.0, label=f"{name} NZCR")
    ax2.axhline(f_true, linestyle="--", linewidth=1.2, color="k", label="True Frequency")
    ax2.set_xlabel("Time [s]", fontsize=9)
    ax2.set_ylabel("NZCR [Hz]", fontsize=9)
    ax2.legend(fontsize=7, framealpha=0.9, loc="best")
    ax2.grid(True, which="both", linestyle="--", linewidth=0.5)
    margin = 0.15 * f_true
    ax2.set_ylim(f_true - margin, f_true + margin)

    plt.tight_layout()
    return fig
