"""Closed-form ordinary and weighted least squares for y ~ 1 + x."""

from __future__ import annotations

import numpy as np

from dropwls.core.types import RegressionFit
from dropwls.core.utils import finite_1d, paired_1d
from dropwls.stats.correlation import DegenerateDataError, DegenerateWeightsError, check_weights

MIN_RELATIVE_SPREAD = 1e-20


class SingularMatrixError(np.linalg.LinAlgError):
    """Normal-equation matrix is singular: x has no weighted spread."""


def design_matrix(x: np.ndarray) -> np.ndarray:
    """Return the (n, 2) design matrix [1, x]."""
    xa = finite_1d("x", x)
    return np.column_stack([np.ones(xa.size, dtype=float), xa])


def _normal_inverse(x_bar: float, sxx: float, total_w: float) -> np.ndarray:
    """(X'WX)^-1 for X = [1, x], written in terms of centred moments."""
    return np.array(
        [
            [1.0 / total_w + x_bar * x_bar / sxx, -x_bar / sxx],
            [-x_bar / sxx, 1.0 / sxx],
        ]
    )


def _fit(x: np.ndarray, y: np.ndarray, w: np.ndarray | None) -> RegressionFit:
    xa, ya = paired_1d(x, y)
    weighted = w is not None
    wa = check_weights(w, xa.size) if weighted else np.ones(xa.size, dtype=float)
    n_obs = int(np.count_nonzero(wa > 0.0))
    if n_obs < 3:
        msg = f"least squares needs at least 3 observations with weight, got {n_obs}."
        if weighted:
            raise DegenerateWeightsError(msg)
        raise DegenerateDataError(msg)

    # Centred moments avoid cancellation when x sits far from zero.
    total_w = float(np.sum(wa))
    x_bar = float(np.sum(wa * xa) / total_w)
    y_bar = float(np.sum(wa * ya) / total_w)
    xc = xa - x_bar
    yc = ya - y_bar
    sxx = float(np.sum(wa * xc * xc))
    scale = float(np.sum(wa * xa * xa))
    if not sxx > MIN_RELATIVE_SPREAD * scale:
        raise SingularMatrixError(
            f"singular matrix: x has no weighted spread (sxx={sxx:.3g}, n_obs={n_obs})."
        )

    slope = float(np.sum(wa * xc * yc) / sxx)
    intercept = y_bar - slope * x_bar
    beta = np.array([intercept, slope], dtype=float)

    resid = yc - slope * xc
    rss = float(np.sum(wa * resid * resid))
    tss = float(np.sum(wa * yc * yc))
    r_squared = 1.0 - rss / tss if tss > 0.0 else 0.0

    dof = n_obs - 2
    sigma2 = rss / dof
    xtwx_inv = _normal_inverse(x_bar, sxx, total_w)
    stderr = np.sqrt(np.clip(np.diag(sigma2 * xtwx_inv), 0.0, None))
    return RegressionFit(
        intercept=float(intercept),
        slope=slope,
        coefficients=beta,
        stderr=np.asarray(stderr, dtype=float),
        r_squared=float(r_squared),
        sigma=float(np.sqrt(sigma2)),
        n_obs=n_obs,
        weighted=weighted,
    )


def ols_fit(x: np.ndarray, y: np.ndarray) -> RegressionFit:
    """beta = (X'X)^-1 X'y on X = [1, x]."""
    return _fit(x, y, None)


def wls_fit(x: np.ndarray, y: np.ndarray, w: np.ndarray) -> RegressionFit:
    """beta = (X'WX)^-1 X'Wy with W = diag(w).

    Zero-weight rows do not count toward `n_obs` or the residual degrees of
    freedom.
    """
    return _fit(x, y, w)
