"""Typed configuration and result containers for dropout simulations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np


@dataclass(frozen=True)
class SimulationConfig:
    """Parameters of one bivariate dropout simulation."""

    mean: tuple[float, float] = (5.0, 12.0)
    variances: tuple[float, float] = (1.0, 16.0)
    covariance: float = 3.6
    n_samples: int = 1000
    seed: int | None = None
    dropout_midpoint: float = 3.0
    dropout_scale: float = 0.5
    weight_beta_a: float = 1.0
    weight_beta_b: float = 0.1
    gene_labels: tuple[str, str] = ("gene1", "gene2")

    def __post_init__(self) -> None:
        if len(self.mean) != 2:
            raise ValueError(f"mean must have length 2, got {len(self.mean)}.")
        if len(self.variances) != 2:
            raise ValueError(f"variances must have length 2, got {len(self.variances)}.")
        if len(self.gene_labels) != 2:
            raise ValueError("gene_labels must name exactly two genes.")
        if any(float(v) <= 0.0 for v in self.variances):
            raise ValueError("variances must be positive.")
        if int(self.n_samples) <= 0:
            raise ValueError("n_samples must be positive.")
        if float(self.dropout_scale) <= 0.0:
            raise ValueError("dropout_scale must be positive.")
        if float(self.weight_beta_a) <= 0.0 or float(self.weight_beta_b) <= 0.0:
            raise ValueError("Beta shape parameters must be positive.")


def _as_matrix(name: str, values: np.ndarray, shape: tuple[int, int]) -> None:
    if values.shape != shape:
        raise ValueError(f"{name} must have shape {shape}, got {values.shape}.")


@dataclass(frozen=True)
class DropoutResult:
    """Output of `inject_dropout`.

    - `probability`: dropout probability per cell, f(|Z|).
    - `indicator`: 1 where the reading was kept, 0 where it dropped out.
    - `dropped`: expression with dropped cells set to zero.
    """

    probability: np.ndarray
    indicator: np.ndarray
    dropped: np.ndarray

    def __post_init__(self) -> None:
        shape = self.probability.shape
        if self.probability.ndim != 2:
            raise ValueError(f"probability must be 2D, got shape {shape}.")
        _as_matrix("indicator", self.indicator, shape)
        _as_matrix("dropped", self.dropped, shape)


@dataclass(frozen=True)
class RegressionFit:
    """Closed-form linear fit of y on [1, x]."""

    intercept: float
    slope: float
    coefficients: np.ndarray
    stderr: np.ndarray
    r_squared: float
    sigma: float
    n_obs: int
    weighted: bool = False

    def as_dict(self) -> dict[str, Any]:
        return {
            "intercept": float(self.intercept),
            "slope": float(self.slope),
            "intercept_stderr": float(self.stderr[0]),
            "slope_stderr": float(self.stderr[1]),
            "r_squared": float(self.r_squared),
            "sigma": float(self.sigma),
            "n_obs": int(self.n_obs),
            "weighted": bool(self.weighted),
        }


@dataclass(frozen=True)
class SimulationResult:
    """Every array and estimate produced by one `run_simulation` call."""

    config: SimulationConfig
    covariance: np.ndarray
    correlation: np.ndarray
    expression: np.ndarray
    dropout: DropoutResult
    weights: np.ndarray
    corr_clean: np.ndarray
    corr_dropped: np.ndarray
    corr_weighted: np.ndarray
    ols_clean: RegressionFit
    ols_dropped: RegressionFit
    wls_dropped: RegressionFit
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        n = int(self.config.n_samples)
        _as_matrix("expression", self.expression, (n, 2))
        _as_matrix("dropout.probability", self.dropout.probability, (n, 2))
        if self.weights.shape != (n,):
            raise ValueError(f"weights must have shape ({n},), got {self.weights.shape}.")
        for name in ("covariance", "correlation", "corr_clean", "corr_dropped", "corr_weighted"):
            _as_matrix(name, getattr(self, name), (2, 2))

    @property
    def population_rho(self) -> float:
        return float(self.correlation[0, 1])
