from __future__ import annotations

import numpy as np


def trace_error(estimate: np.ndarray, truth: np.ndarray) -> float:
    """
    Root-mean-square error between an estimate trace and the truth,
    elementwise. Positions where the estimate is NaN are skipped.
    Both arrays must be 1-D and same length.
    """
    est = np.asarray(estimate, dtype=float).ravel()
    tru = np.asarray(truth, dtype=float).ravel()
    if est.size != tru.size:
        raise ValueError("estimate and truth must have the same length")
    mask = ~np.isnan(est)
    if not np.any(mask):
        return float("nan")
    diff = est[mask] - tru[mask]
    return float(np.sqrt(np.mean(diff * diff)))


def relative_error(estimate: float, truth: float) -> float:
    """|estimate - truth| / |truth|; absolute error when truth is zero."""
    if truth == 0.0:
        return abs(float(estimate))
    return abs(float(estimate) - float(truth)) / abs(float(truth))
