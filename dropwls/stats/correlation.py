"""Pearson and weighted Pearson correlation."""

from __future__ import annotations

import numpy as np

from dropwls.core.utils import finite_1d, finite_2d, paired_1d


class DegenerateDataError(ValueError):
    """Input has too few rows or no spread for the requested estimate."""


class DegenerateWeightsError(DegenerateDataError):
    """Weights leave no usable spread (all zero, or too few weighted rows)."""


def pearson_corr(x: np.ndarray, y: np.ndarray) -> float:
    """Sample Pearson correlation via mean-centring and Bessel-corrected SDs."""
    xa, ya = paired_1d(x, y)
    n = xa.size
    if n < 2:
        raise DegenerateDataError("Pearson correlation needs at least two observations.")
    dx = xa - xa.mean()
    dy = ya - ya.mean()
    sx = np.sqrt(np.sum(dx * dx) / (n - 1))
    sy = np.sqrt(np.sum(dy * dy) / (n - 1))
    if sx <= 0.0 or sy <= 0.0:
        raise DegenerateDataError("Pearson correlation undefined for zero-variance input.")
    cov = np.sum(dx * dy) / (n - 1)
    return float(np.clip(cov / (sx * sy), -1.0, 1.0))


def correlation_matrix(data: np.ndarray) -> np.ndarray:
    arr = finite_2d("data", data)
    k = arr.shape[1]
    out = np.eye(k, dtype=float)
    for i in range(k):
        for j in range(i + 1, k):
            out[i, j] = out[j, i] = pearson_corr(arr[:, i], arr[:, j])
    return out


def check_weights(w: np.ndarray, n: int) -> np.ndarray:
    """Validate a row-weight vector of length `n`."""
    wa = finite_1d("weights", w)
    if wa.size != int(n):
        raise ValueError(f"weights length {wa.size} does not match {int(n)} observations.")
    if np.any(wa < 0.0):
        raise ValueError("weights must be non-negative.")
    if not np.any(wa > 0.0):
        raise DegenerateWeightsError("all weights are zero; weighted estimate undefined.")
    return wa


def weighted_corr(x: np.ndarray, y: np.ndarray, w: np.ndarray) -> float:
    """Weighted Pearson correlation with row weights `w`.

    With all-equal weights this reduces to `pearson_corr`.
    """
    xa, ya = paired_1d(x, y)
    wa = check_weights(w, xa.size)
    wn = wa / wa.sum()
    dx = xa - np.sum(wn * xa)
    dy = ya - np.sum(wn * ya)
    vx = np.sum(wn * dx * dx)
    vy = np.sum(wn * dy * dy)
    if vx <= 0.0 or vy <= 0.0:
        raise DegenerateWeightsError(
            f"weighted variance is zero ({int(np.count_nonzero(wa))} rows with positive weight)."
        )
    cov = np.sum(wn * dx * dy)
    return float(np.clip(cov / np.sqrt(vx * vy), -1.0, 1.0))


def weighted_correlation_matrix(data: np.ndarray, w: np.ndarray) -> np.ndarray:
    arr = finite_2d("data", data)
    k = arr.shape[1]
    out = np.eye(k, dtype=float)
    for i in range(k):
        for j in range(i + 1, k):
            out[i, j] = out[j, i] = weighted_corr(arr[:, i], arr[:, j], w)
    return out
