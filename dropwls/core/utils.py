"""Small pure helpers for core computations."""

from __future__ import annotations

import numpy as np


def finite_1d(name: str, values: np.ndarray) -> np.ndarray:
    arr = np.asarray(values, dtype=float).ravel()
    if arr.size == 0:
        raise ValueError(f"{name} must be non-empty.")
    if not np.isfinite(arr).all():
        raise ValueError(f"{name} must be finite.")
    return arr


def finite_2d(name: str, values: np.ndarray, n_cols: int | None = None) -> np.ndarray:
    arr = np.asarray(values, dtype=float)
    if arr.ndim != 2:
        raise ValueError(f"{name} must be 2D, got shape {arr.shape}.")
    if arr.shape[0] == 0:
        raise ValueError(f"{name} must have at least one row.")
    if n_cols is not None and arr.shape[1] != int(n_cols):
        raise ValueError(f"{name} must have {int(n_cols)} columns, got {arr.shape[1]}.")
    if not np.isfinite(arr).all():
        raise ValueError(f"{name} must be finite.")
    return arr


def paired_1d(x: np.ndarray, y: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    xa = finite_1d("x", x)
    ya = finite_1d("y", y)
    if xa.size != ya.size:
        raise ValueError(f"x and y must have same length, got {xa.size} and {ya.size}.")
    return xa, ya
