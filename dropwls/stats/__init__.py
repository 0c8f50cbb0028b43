"""Statistical estimators for dropout simulations."""

from dropwls.stats.correlation import (
    DegenerateDataError,
    DegenerateWeightsError,
    check_weights,
    correlation_matrix,
    pearson_corr,
    weighted_corr,
    weighted_correlation_matrix,
)
from dropwls.stats.regression import (
    SingularMatrixError,
    design_matrix,
    ols_fit,
    wls_fit,
)

__all__ = [
    "DegenerateDataError",
    "DegenerateWeightsError",
    "SingularMatrixError",
    "check_weights",
    "pearson_corr",
    "correlation_matrix",
    "weighted_corr",
    "weighted_correlation_matrix",
    "design_matrix",
    "ols_fit",
    "wls_fit",
]
