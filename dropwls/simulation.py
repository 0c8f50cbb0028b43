"""End-to-end dropout simulation: sample, drop out, estimate."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

import numpy as np
import pandas as pd

from dropwls.core.covariance import build_covariance, covariance_to_correlation
from dropwls.core.dropout import dropout_summary, inject_dropout, row_weights
from dropwls.core.sampling import rng_from_seed, sample_expression, stable_seed
from dropwls.core.types import SimulationConfig, SimulationResult
from dropwls.stats.correlation import (
    DegenerateDataError,
    correlation_matrix,
    weighted_correlation_matrix,
)
from dropwls.stats.regression import SingularMatrixError, ols_fit, wls_fit

_LOG = logging.getLogger("dropwls")

REPLICATE_COLUMNS = [
    "replicate",
    "seed",
    "rho",
    "corr_clean",
    "corr_dropped",
    "corr_weighted",
    "slope_ols_clean",
    "slope_ols_dropped",
    "slope_wls_dropped",
    "dropout_gene1",
    "dropout_gene2",
    "n_complete_rows",
    "status",
]


def run_simulation(
    config: SimulationConfig,
    rng: np.random.Generator | None = None,
    logger: logging.Logger | None = None,
) -> SimulationResult:
    """Run one simulation.

    The generator (built from `config.seed` when not supplied) is consumed in a
    fixed order: expression draw, dropout draw, Beta weights. The same seed
    therefore reproduces every array exactly.
    """
    log = logger or _LOG
    gen = rng if rng is not None else rng_from_seed(config.seed)

    sigma = build_covariance(config.variances, config.covariance)
    rho = covariance_to_correlation(sigma)
    z = sample_expression(config.mean, sigma, config.n_samples, gen)
    dropout = inject_dropout(
        z, gen, midpoint=config.dropout_midpoint, scale=config.dropout_scale
    )
    weights = row_weights(
        dropout.indicator, gen, a=config.weight_beta_a, b=config.weight_beta_b
    )
    n_complete = int(np.count_nonzero(weights > 0.0))
    log.info(
        "Simulated n=%d rows; dropped cells per gene=%s; complete rows=%d",
        config.n_samples,
        (1 - dropout.indicator).sum(axis=0).tolist(),
        n_complete,
    )

    corr_clean = correlation_matrix(z)
    corr_dropped = correlation_matrix(dropout.dropped)
    corr_weighted = weighted_correlation_matrix(dropout.dropped, weights)

    x_clean, y_clean = z[:, 0], z[:, 1]
    x_drop, y_drop = dropout.dropped[:, 0], dropout.dropped[:, 1]
    ols_clean = ols_fit(x_clean, y_clean)
    ols_dropped = ols_fit(x_drop, y_drop)
    wls_dropped = wls_fit(x_drop, y_drop, weights)

    meta: dict[str, Any] = {
        "seed": config.seed,
        "n_samples": int(config.n_samples),
        "n_complete_rows": n_complete,
        "n_dropped_cells": int((1 - dropout.indicator).sum()),
        "numpy_version": str(np.__version__),
    }
    return SimulationResult(
        config=config,
        covariance=sigma,
        correlation=rho,
        expression=z,
        dropout=dropout,
        weights=weights,
        corr_clean=corr_clean,
        corr_dropped=corr_dropped,
        corr_weighted=corr_weighted,
        ols_clean=ols_clean,
        ols_dropped=ols_dropped,
        wls_dropped=wls_dropped,
        metadata=meta,
    )


def _replicate_row(idx: int, seed: int, result: SimulationResult) -> dict[str, Any]:
    drop_frac = 1.0 - result.dropout.indicator.mean(axis=0)
    return {
        "replicate": idx,
        "seed": seed,
        "rho": result.population_rho,
        "corr_clean": float(result.corr_clean[0, 1]),
        "corr_dropped": float(result.corr_dropped[0, 1]),
        "corr_weighted": float(result.corr_weighted[0, 1]),
        "slope_ols_clean": result.ols_clean.slope,
        "slope_ols_dropped": result.ols_dropped.slope,
        "slope_wls_dropped": result.wls_dropped.slope,
        "dropout_gene1": float(drop_frac[0]),
        "dropout_gene2": float(drop_frac[1]),
        "n_complete_rows": int(result.metadata["n_complete_rows"]),
        "status": "ok",
    }


def run_replicates(
    config: SimulationConfig,
    n_replicates: int,
    master_seed: int = 0,
    logger: logging.Logger | None = None,
) -> pd.DataFrame:
    """Repeat `run_simulation` with stable per-replicate seeds.

    Replicates whose weighted estimators are degenerate are logged and kept as
    rows with NaN estimates and a `status` describing the failure.
    """
    log = logger or _LOG
    if int(n_replicates) <= 0:
        raise ValueError("n_replicates must be positive.")
    rho = float(covariance_to_correlation(build_covariance(config.variances, config.covariance))[0, 1])

    rows: list[dict[str, Any]] = []
    for i in range(int(n_replicates)):
        seed = stable_seed(int(master_seed), "replicate", i)
        cfg_i = replace(config, seed=seed)
        try:
            result = run_simulation(cfg_i, logger=log)
        except (SingularMatrixError, DegenerateDataError) as exc:
            log.warning("Replicate skipped: replicate=%d seed=%d reason=%s", i, seed, exc)
            row: dict[str, Any] = {col: np.nan for col in REPLICATE_COLUMNS}
            row.update({"replicate": i, "seed": seed, "rho": rho, "status": f"skipped: {exc}"})
            rows.append(row)
            continue
        rows.append(_replicate_row(i, seed, result))
    return pd.DataFrame(rows, columns=REPLICATE_COLUMNS)


def summarize_replicates(df: pd.DataFrame) -> pd.DataFrame:
    """Mean, SD and bias against rho for each correlation estimator."""
    if df.empty:
        raise ValueError("replicate table is empty.")
    ok = df[df["status"] == "ok"]
    rho = float(df["rho"].iloc[0])
    rows = []
    for col in ("corr_clean", "corr_dropped", "corr_weighted"):
        vals = ok[col].to_numpy(dtype=float)
        rows.append(
            {
                "estimator": col,
                "n_ok": int(vals.size),
                "mean": float(np.mean(vals)) if vals.size else np.nan,
                "sd": float(np.std(vals, ddof=1)) if vals.size > 1 else np.nan,
                "bias": float(np.mean(vals) - rho) if vals.size else np.nan,
                "rmse": float(np.sqrt(np.mean((vals - rho) ** 2))) if vals.size else np.nan,
            }
        )
    return pd.DataFrame(rows)


def result_tables(result: SimulationResult) -> dict[str, pd.DataFrame]:
    """Tabular views of one run, keyed by output file stem."""
    g1, g2 = result.config.gene_labels
    z = result.expression
    d = result.dropout
    cells = pd.DataFrame(
        {
            f"{g1}": z[:, 0],
            f"{g2}": z[:, 1],
            f"{g1}_p_dropout": d.probability[:, 0],
            f"{g2}_p_dropout": d.probability[:, 1],
            f"{g1}_kept": d.indicator[:, 0],
            f"{g2}_kept": d.indicator[:, 1],
            f"{g1}_observed": d.dropped[:, 0],
            f"{g2}_observed": d.dropped[:, 1],
            "weight": result.weights,
        }
    )
    rho = result.population_rho
    correlations = pd.DataFrame(
        [
            {"estimate": name, "corr": float(mat[0, 1]), "bias": float(mat[0, 1]) - rho}
            for name, mat in (
                ("population", result.correlation),
                ("clean", result.corr_clean),
                ("dropped", result.corr_dropped),
                ("weighted", result.corr_weighted),
            )
        ]
    )
    fits = pd.DataFrame(
        [
            {"model": name, **fit.as_dict()}
            for name, fit in (
                ("ols_clean", result.ols_clean),
                ("ols_dropped", result.ols_dropped),
                ("wls_dropped", result.wls_dropped),
            )
        ]
    )
    return {
        "cells": cells,
        "correlations": correlations,
        "fits": fits,
        "dropout": dropout_summary(d, labels=result.config.gene_labels),
    }


def result_summary(result: SimulationResult) -> dict[str, Any]:
    """JSON-serializable summary of one run."""
    cfg = result.config
    return {
        "config": {
            "mean": [float(v) for v in cfg.mean],
            "variances": [float(v) for v in cfg.variances],
            "covariance": float(cfg.covariance),
            "n_samples": int(cfg.n_samples),
            "seed": cfg.seed,
            "dropout_midpoint": float(cfg.dropout_midpoint),
            "dropout_scale": float(cfg.dropout_scale),
            "weight_beta": [float(cfg.weight_beta_a), float(cfg.weight_beta_b)],
            "gene_labels": list(cfg.gene_labels),
        },
        "covariance": result.covariance.tolist(),
        "correlation": result.correlation.tolist(),
        "corr_clean": result.corr_clean.tolist(),
        "corr_dropped": result.corr_dropped.tolist(),
        "corr_weighted": result.corr_weighted.tolist(),
        "ols_clean": result.ols_clean.as_dict(),
        "ols_dropped": result.ols_dropped.as_dict(),
        "wls_dropped": result.wls_dropped.as_dict(),
        "metadata": dict(result.metadata),
    }
