from __future__ import annotations

from dataclasses import replace

import numpy as np
import pandas as pd
import pytest

from dropwls.core.types import SimulationConfig
from dropwls.simulation import (
    REPLICATE_COLUMNS,
    result_summary,
    result_tables,
    run_replicates,
    run_simulation,
    summarize_replicates,
)


def test_default_config_values():
    cfg = SimulationConfig()
    assert cfg.mean == (5.0, 12.0)
    assert cfg.variances == (1.0, 16.0)
    assert cfg.covariance == 3.6
    assert cfg.n_samples == 1000
    assert cfg.seed is None


def test_config_validation():
    with pytest.raises(ValueError, match="n_samples"):
        SimulationConfig(n_samples=0)
    with pytest.raises(ValueError, match="variances"):
        SimulationConfig(variances=(1.0, -1.0))
    with pytest.raises(ValueError, match="mean"):
        SimulationConfig(mean=(1.0,))
    with pytest.raises(ValueError, match="Beta"):
        SimulationConfig(weight_beta_b=0.0)


def test_end_to_end_is_bit_reproducible_with_seed():
    cfg = SimulationConfig(seed=2024)
    a = run_simulation(cfg)
    b = run_simulation(cfg)
    assert np.array_equal(a.expression, b.expression)
    assert np.array_equal(a.dropout.probability, b.dropout.probability)
    assert np.array_equal(a.dropout.indicator, b.dropout.indicator)
    assert np.array_equal(a.dropout.dropped, b.dropout.dropped)
    assert np.array_equal(a.weights, b.weights)
    assert np.array_equal(a.corr_clean, b.corr_clean)
    assert np.array_equal(a.corr_dropped, b.corr_dropped)
    assert np.array_equal(a.corr_weighted, b.corr_weighted)
    assert np.array_equal(a.wls_dropped.coefficients, b.wls_dropped.coefficients)

    c = run_simulation(replace(cfg, seed=2025))
    assert not np.array_equal(a.expression, c.expression)


def test_explicit_generator_matches_config_seed():
    cfg = SimulationConfig(n_samples=300, seed=5)
    a = run_simulation(cfg)
    b = run_simulation(replace(cfg, seed=None), rng=np.random.default_rng(5))
    assert np.array_equal(a.dropout.dropped, b.dropout.dropped)
    assert np.array_equal(a.weights, b.weights)


def test_simulation_result_contents():
    res = run_simulation(SimulationConfig(seed=11))
    n = res.config.n_samples
    assert res.expression.shape == (n, 2)
    assert res.weights.shape == (n,)
    assert np.isclose(res.population_rho, 0.9)
    assert abs(res.corr_clean[0, 1] - 0.9) < 0.05
    assert np.isfinite(res.corr_dropped[0, 1])
    assert np.isfinite(res.corr_weighted[0, 1])

    incomplete = res.dropout.indicator.min(axis=1) == 0
    assert np.all(res.weights[incomplete] == 0.0)
    assert res.wls_dropped.n_obs == int(np.count_nonzero(res.weights > 0.0))
    assert res.wls_dropped.weighted
    assert res.ols_dropped.n_obs == n
    assert abs(res.ols_clean.slope - 3.6) < 0.5
    assert res.metadata["n_complete_rows"] == res.wls_dropped.n_obs


def test_result_tables_and_summary():
    res = run_simulation(SimulationConfig(n_samples=250, seed=3))
    tables = result_tables(res)
    assert set(tables) == {"cells", "correlations", "fits", "dropout"}
    assert len(tables["cells"]) == 250
    assert "gene1_observed" in tables["cells"].columns
    assert tables["correlations"]["estimate"].tolist() == [
        "population",
        "clean",
        "dropped",
        "weighted",
    ]
    assert tables["fits"]["model"].tolist() == ["ols_clean", "ols_dropped", "wls_dropped"]

    summary = result_summary(res)
    assert summary["config"]["seed"] == 3
    assert np.isclose(summary["correlation"][0][1], 0.9)
    assert summary["wls_dropped"]["weighted"] is True


def test_replicates_deterministic_and_summarized():
    cfg = SimulationConfig(n_samples=200)
    a = run_replicates(cfg, 4, master_seed=1)
    b = run_replicates(cfg, 4, master_seed=1)
    pd.testing.assert_frame_equal(a, b)
    assert list(a.columns) == REPLICATE_COLUMNS
    assert len(a) == 4
    assert a["seed"].nunique() == 4
    assert (a["status"] == "ok").all()

    summary = summarize_replicates(a)
    assert summary["estimator"].tolist() == ["corr_clean", "corr_dropped", "corr_weighted"]
    assert (summary["n_ok"] == 4).all()
    assert np.all(np.isfinite(summary["bias"]))


def test_replicates_reject_non_positive_count():
    with pytest.raises(ValueError, match="n_replicates"):
        run_replicates(SimulationConfig(), 0)
