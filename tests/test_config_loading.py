from __future__ import annotations

import json
from pathlib import Path

import pytest

from dropwls.config import load_json_config, simulation_config_from_dict
from dropwls.core.types import SimulationConfig


def test_load_project_config():
    root = Path(__file__).resolve().parents[1]
    cfg = load_json_config(root / "configs" / "dropout_wls.json")
    assert "simulation" in cfg
    assert "n_replicates" in cfg
    sim = simulation_config_from_dict(cfg["simulation"])
    assert isinstance(sim, SimulationConfig)
    assert sim.mean == (5.0, 12.0)
    assert sim.variances == (1.0, 16.0)
    assert sim.covariance == 3.6
    assert sim.gene_labels == ("gene1", "gene2")


def test_simulation_config_unknown_key_rejected():
    with pytest.raises(KeyError, match="n_genes"):
        simulation_config_from_dict({"n_genes": 5})


def test_simulation_config_defaults_from_empty_block():
    assert simulation_config_from_dict({}) == SimulationConfig()


def test_missing_config_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_json_config(tmp_path / "nope.json")


def test_invalid_json_reports_line_and_column(tmp_path: Path):
    bad = tmp_path / "bad.json"
    bad.write_text('{"a": 1,}\n', encoding="utf-8")
    with pytest.raises(ValueError, match=r"line \d+, column \d+"):
        load_json_config(bad)


def test_non_object_json_config_rejected(tmp_path: Path):
    bad = tmp_path / "list.json"
    bad.write_text(json.dumps([1, 2, 3]), encoding="utf-8")
    with pytest.raises(ValueError, match="expected JSON object"):
        load_json_config(bad)


def test_non_json_extension_rejected(tmp_path: Path):
    bad = tmp_path / "cfg.yaml"
    bad.write_text("{}", encoding="utf-8")
    with pytest.raises(ValueError, match="Use a .json config file"):
        load_json_config(bad)
