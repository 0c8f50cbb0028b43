from __future__ import annotations

import logging

import numpy as np
import pytest

from dropwls import simulation
from dropwls.core.types import SimulationConfig
from dropwls.stats.correlation import DegenerateDataError, DegenerateWeightsError
from dropwls.stats.regression import SingularMatrixError


def test_replicate_expected_error_warns_and_continues(monkeypatch, caplog):
    caplog.set_level(logging.WARNING)
    real_run = simulation.run_simulation
    calls: list[int] = []

    def _flaky(config, *args, **kwargs):
        calls.append(1)
        if len(calls) == 2:
            raise DegenerateWeightsError("all weights are zero")
        return real_run(config, *args, **kwargs)

    monkeypatch.setattr(simulation, "run_simulation", _flaky)
    df = simulation.run_replicates(
        SimulationConfig(n_samples=150), 3, master_seed=0, logger=logging.getLogger("test")
    )
    assert len(df) == 3
    assert df["status"].tolist()[0] == "ok"
    assert df["status"].tolist()[1].startswith("skipped")
    assert np.isnan(df.loc[1, "corr_weighted"])
    assert np.isclose(df.loc[1, "rho"], 0.9)
    assert "Replicate skipped" in caplog.text
    assert "all weights are zero" in caplog.text

    summary = simulation.summarize_replicates(df)
    assert (summary["n_ok"] == 2).all()


def test_replicate_singular_design_is_recorded(monkeypatch, caplog):
    caplog.set_level(logging.WARNING)

    def _singular(*_args, **_kwargs):
        raise SingularMatrixError("singular matrix: degenerate")

    monkeypatch.setattr(simulation, "run_simulation", _singular)
    df = simulation.run_replicates(SimulationConfig(), 2, logger=logging.getLogger("test"))
    assert (df["status"] != "ok").all()
    assert "singular matrix" in caplog.text


def test_high_dropout_replicates_never_abort(caplog):
    caplog.set_level(logging.WARNING)
    cfg = SimulationConfig(mean=(2.0, 2.0), variances=(0.3, 0.3), covariance=0.2, n_samples=30)
    frames = [
        simulation.run_replicates(cfg, 3, master_seed=ms, logger=logging.getLogger("test"))
        for ms in range(10)
    ]
    status = [s for df in frames for s in df["status"]]
    assert len(status) == 30
    assert all(s == "ok" or s.startswith("skipped") for s in status)
    assert any(s != "ok" for s in status)
    assert "Replicate skipped" in caplog.text

    summary = simulation.summarize_replicates(frames[0])
    assert list(summary["estimator"]) == ["corr_clean", "corr_dropped", "corr_weighted"]


def test_degenerate_data_is_a_value_error():
    assert issubclass(DegenerateWeightsError, DegenerateDataError)
    assert issubclass(DegenerateDataError, ValueError)
    with pytest.raises(DegenerateDataError, match="zero-variance"):
        simulation.correlation_matrix(np.column_stack([np.zeros(10), np.arange(10.0)]))


def test_replicate_unexpected_error_propagates(monkeypatch):
    def _raise_runtime(*_args, **_kwargs):
        raise RuntimeError("unexpected")

    monkeypatch.setattr(simulation, "run_simulation", _raise_runtime)
    with pytest.raises(RuntimeError, match="unexpected"):
        simulation.run_replicates(SimulationConfig(), 2, logger=logging.getLogger("test"))


def test_invalid_covariance_propagates_from_run_simulation():
    cfg = SimulationConfig(variances=(1.0, 1.0), covariance=3.0, seed=0)
    with pytest.raises(ValueError, match="positive definite"):
        simulation.run_simulation(cfg)
