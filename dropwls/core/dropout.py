"""Logistic dropout injection and dropout-aware row weights."""

from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd
from scipy.special import expit

from dropwls.core.types import DropoutResult
from dropwls.core.utils import finite_2d

DEFAULT_MIDPOINT = 3.0
DEFAULT_SCALE = 0.5


def dropout_probability(
    x: np.ndarray | float,
    midpoint: float = DEFAULT_MIDPOINT,
    scale: float = DEFAULT_SCALE,
) -> np.ndarray | float:
    """Decreasing logistic f(x) = 1 - 1/(1 + exp(-(x - midpoint)/scale)).

    Evaluated as expit(-(x - midpoint)/scale), which is algebraically identical
    and stays finite for any input. Output lies in (0, 1) for finite x.
    """
    if float(scale) <= 0.0:
        raise ValueError("scale must be positive.")
    arr = np.asarray(x, dtype=float)
    p = expit(-(arr - float(midpoint)) / float(scale))
    if np.isscalar(x):
        return float(p)
    return p


def inject_dropout(
    expression: np.ndarray,
    rng: np.random.Generator,
    *,
    midpoint: float = DEFAULT_MIDPOINT,
    scale: float = DEFAULT_SCALE,
) -> DropoutResult:
    """Drop each cell independently with probability f(|Z_ij|)."""
    z = finite_2d("expression", expression)
    prob = np.asarray(dropout_probability(np.abs(z), midpoint=midpoint, scale=scale))
    keep = rng.random(z.shape) < (1.0 - prob)
    indicator = keep.astype(np.int8)
    dropped = np.where(keep, z, 0.0)
    return DropoutResult(probability=prob, indicator=indicator, dropped=dropped)


def row_weights(
    indicator: np.ndarray,
    rng: np.random.Generator,
    a: float = 1.0,
    b: float = 0.1,
) -> np.ndarray:
    """Per-row weight: product of kept indicators times one Beta(a, b) draw.

    Rows with any dropped cell get weight zero.
    """
    ind = np.asarray(indicator)
    if ind.ndim != 2:
        raise ValueError(f"indicator must be 2D, got shape {ind.shape}.")
    if not np.isin(ind, (0, 1)).all():
        raise ValueError("indicator entries must be 0 or 1.")
    if float(a) <= 0.0 or float(b) <= 0.0:
        raise ValueError("Beta shape parameters must be positive.")
    complete = np.prod(ind.astype(float), axis=1)
    multiplier = rng.beta(float(a), float(b), size=ind.shape[0])
    return complete * multiplier


def dropout_summary(
    result: DropoutResult, labels: Sequence[str] | None = None
) -> pd.DataFrame:
    """Per-gene dropout rates, observed vs expected from the logistic curve."""
    n_cols = result.indicator.shape[1]
    names = list(labels) if labels is not None else [f"gene{j + 1}" for j in range(n_cols)]
    if len(names) != n_cols:
        raise ValueError("labels length must match number of columns.")
    rows = []
    for j, name in enumerate(names):
        kept = result.indicator[:, j].astype(bool)
        rows.append(
            {
                "gene": str(name),
                "n_cells": int(kept.size),
                "n_dropped": int((~kept).sum()),
                "observed_dropout": float(np.mean(~kept)),
                "expected_dropout": float(np.mean(result.probability[:, j])),
            }
        )
    return pd.DataFrame(rows)
