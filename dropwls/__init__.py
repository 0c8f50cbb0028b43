"""dropwls public API."""

from dropwls._version import __version__
from dropwls.core.covariance import build_covariance, covariance_to_correlation
from dropwls.core.dropout import dropout_probability, inject_dropout, row_weights
from dropwls.core.sampling import rng_from_seed, sample_expression
from dropwls.core.types import SimulationConfig, SimulationResult
from dropwls.simulation import run_replicates, run_simulation
from dropwls.stats.correlation import pearson_corr, weighted_corr
from dropwls.stats.regression import ols_fit, wls_fit


def run_pipeline(*args, **kwargs):
    """Lazy wrapper to avoid importing plotting dependencies at import time."""
    from dropwls.pipeline.runner import run_pipeline as _run_pipeline

    return _run_pipeline(*args, **kwargs)


__all__ = [
    "__version__",
    "SimulationConfig",
    "SimulationResult",
    "build_covariance",
    "covariance_to_correlation",
    "rng_from_seed",
    "sample_expression",
    "dropout_probability",
    "inject_dropout",
    "row_weights",
    "pearson_corr",
    "weighted_corr",
    "ols_fit",
    "wls_fit",
    "run_simulation",
    "run_replicates",
    "run_pipeline",
]
