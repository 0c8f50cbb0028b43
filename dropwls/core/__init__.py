"""Core simulation subpackage."""

from dropwls.core.covariance import (
    build_covariance,
    covariance_to_correlation,
    validate_covariance,
)
from dropwls.core.dropout import (
    dropout_probability,
    dropout_summary,
    inject_dropout,
    row_weights,
)
from dropwls.core.sampling import rng_from_seed, sample_expression, stable_seed
from dropwls.core.types import (
    DropoutResult,
    RegressionFit,
    SimulationConfig,
    SimulationResult,
)

__all__ = [
    "SimulationConfig",
    "DropoutResult",
    "RegressionFit",
    "SimulationResult",
    "build_covariance",
    "validate_covariance",
    "covariance_to_correlation",
    "rng_from_seed",
    "sample_expression",
    "stable_seed",
    "dropout_probability",
    "inject_dropout",
    "row_weights",
    "dropout_summary",
]
