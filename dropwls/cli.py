"""Command-line interface for dropout simulations."""

from __future__ import annotations

import argparse
from typing import Any, Iterable

import numpy as np

from dropwls.core.types import RegressionFit
from dropwls.pipeline.runner import run_pipeline


def _fmt_matrix(mat: np.ndarray) -> str:
    return np.array2string(np.asarray(mat, dtype=float), precision=4, suppress_small=True)


def _fmt_fit(name: str, fit: RegressionFit) -> str:
    return (
        f"{name}: intercept={fit.intercept:.4f} (se {fit.stderr[0]:.4f}) "
        f"slope={fit.slope:.4f} (se {fit.stderr[1]:.4f}) "
        f"R2={fit.r_squared:.4f} n={fit.n_obs}"
    )


def simulate_main(argv: Iterable[str] | None = None) -> int:
    """Run the dropout simulation and print estimates.

    Args:
        argv: Command-line arguments (if None, uses sys.argv).

    Returns:
        Exit code (0 for success).
    """
    parser = argparse.ArgumentParser(description="Dropout correlation simulation")
    parser.add_argument("--config", default=None, help="Path to .json config")
    parser.add_argument("--outdir", default=None, help="Output directory root")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for the main run")
    parser.add_argument("--n-samples", type=int, default=None, help="Rows to simulate")
    parser.add_argument(
        "--replicates", type=int, default=None, help="Number of replicate runs (0 disables)"
    )
    parser.add_argument("--no-plots", action="store_true", help="Skip figure output")
    args = parser.parse_args(list(argv) if argv is not None else None)

    overrides: dict[str, Any] = {}
    sim: dict[str, Any] = {}
    if args.outdir is not None:
        overrides["outdir"] = args.outdir
    if args.replicates is not None:
        overrides["n_replicates"] = int(args.replicates)
    if args.no_plots:
        overrides["make_plots"] = False
    if args.seed is not None:
        sim["seed"] = int(args.seed)
    if args.n_samples is not None:
        sim["n_samples"] = int(args.n_samples)
    if sim:
        overrides["simulation"] = sim

    out = run_pipeline(args.config, overrides=overrides)
    res = out.result

    print("covariance=")
    print(_fmt_matrix(res.covariance))
    print("population_correlation=")
    print(_fmt_matrix(res.correlation))
    print("clean_correlation=")
    print(_fmt_matrix(res.corr_clean))
    print("dropped_correlation=")
    print(_fmt_matrix(res.corr_dropped))
    print("weighted_correlation=")
    print(_fmt_matrix(res.corr_weighted))
    print(_fmt_fit("ols_clean", res.ols_clean))
    print(_fmt_fit("ols_dropped", res.ols_dropped))
    print(_fmt_fit("wls_dropped", res.wls_dropped))
    print(f"results_dir={out.results_dir.as_posix()}")
    return 0


if __name__ == "__main__":
    raise SystemExit(simulate_main())
