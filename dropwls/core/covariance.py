"""Population covariance and correlation setup."""

from __future__ import annotations

from typing import Sequence

import numpy as np


def build_covariance(variances: Sequence[float], covariance: float) -> np.ndarray:
    """Assemble and validate the 2x2 covariance matrix."""
    v = np.asarray(variances, dtype=float).ravel()
    if v.size != 2:
        raise ValueError(f"variances must have length 2, got {v.size}.")
    c = float(covariance)
    sigma = np.array([[v[0], c], [c, v[1]]], dtype=float)
    return validate_covariance(sigma)


def validate_covariance(sigma: np.ndarray) -> np.ndarray:
    """Return `sigma` as float array, raising if it is not a valid covariance.

    Requires a finite, square, symmetric matrix with positive diagonal that
    admits a Cholesky factorization (strictly positive definite).
    """
    arr = np.asarray(sigma, dtype=float)
    if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
        raise ValueError(f"covariance must be a square matrix, got shape {arr.shape}.")
    if not np.isfinite(arr).all():
        raise ValueError("covariance must be finite.")
    if not np.allclose(arr, arr.T):
        raise ValueError("covariance must be symmetric.")
    if np.any(np.diag(arr) <= 0.0):
        raise ValueError("covariance diagonal entries must be positive.")
    try:
        np.linalg.cholesky(arr)
    except np.linalg.LinAlgError as exc:
        raise ValueError(
            f"covariance is not positive definite (determinant={np.linalg.det(arr):.6g})."
        ) from exc
    return arr


def covariance_to_correlation(sigma: np.ndarray) -> np.ndarray:
    """rho = D^-1/2 sigma D^-1/2 with D = diag(sigma)."""
    arr = validate_covariance(sigma)
    d_inv = np.diag(1.0 / np.sqrt(np.diag(arr)))
    corr = d_inv @ arr @ d_inv
    np.fill_diagonal(corr, 1.0)
    return np.clip(corr, -1.0, 1.0)
