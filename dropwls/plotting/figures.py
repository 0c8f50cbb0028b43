"""Figure factories bound to precomputed simulation results."""

from __future__ import annotations

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from dropwls.core.dropout import dropout_probability
from dropwls.core.types import RegressionFit, SimulationResult
from dropwls.plotting.styles import DEFAULT_PLOT_STYLE, PlotStyle


def _add_fit_line(
    ax: plt.Axes, fit: RegressionFit, x: np.ndarray, *, color: str, label: str, ls: str = "-"
) -> None:
    grid = np.linspace(float(np.min(x)), float(np.max(x)), 100)
    ax.plot(grid, fit.intercept + fit.slope * grid, color=color, ls=ls, label=label)


def plot_fit_scatter(
    result: SimulationResult,
    *,
    style: PlotStyle = DEFAULT_PLOT_STYLE,
) -> tuple[plt.Figure, tuple[plt.Axes, plt.Axes]]:
    """Clean (left) and dropped (right) scatter with fitted lines.

    Uses the fits stored on `result`; nothing is re-estimated.
    """
    g1, g2 = result.config.gene_labels
    z = result.expression
    zd = result.dropout.dropped
    complete = result.dropout.indicator.all(axis=1)

    fig, (ax_l, ax_r) = plt.subplots(1, 2, figsize=style.figsize_scatter, sharey=True)
    ax_l.scatter(z[:, 0], z[:, 1], s=style.s_point, alpha=style.alpha_point, color=style.color_kept, linewidths=0)
    _add_fit_line(
        ax_l,
        result.ols_clean,
        z[:, 0],
        color=style.color_ols,
        label=f"OLS slope={result.ols_clean.slope:.2f}",
    )
    ax_l.set_title(f"Clean data (r={result.corr_clean[0, 1]:.3f})")

    ax_r.scatter(
        zd[complete, 0],
        zd[complete, 1],
        s=style.s_point,
        alpha=style.alpha_point,
        color=style.color_kept,
        linewidths=0,
        label="complete rows",
    )
    ax_r.scatter(
        zd[~complete, 0],
        zd[~complete, 1],
        s=style.s_point,
        alpha=min(1.0, 2 * style.alpha_point),
        color=style.color_dropped,
        linewidths=0,
        label="rows with dropout",
    )
    _add_fit_line(
        ax_r,
        result.ols_dropped,
        zd[:, 0],
        color=style.color_ols,
        label=f"OLS slope={result.ols_dropped.slope:.2f}",
    )
    _add_fit_line(
        ax_r,
        result.wls_dropped,
        zd[:, 0],
        color=style.color_wls,
        ls="--",
        label=f"WLS slope={result.wls_dropped.slope:.2f}",
    )
    ax_r.set_title(
        f"With dropout (r={result.corr_dropped[0, 1]:.3f}, "
        f"weighted r={result.corr_weighted[0, 1]:.3f})"
    )

    for ax in (ax_l, ax_r):
        ax.set_xlabel(g1)
        ax.legend(loc="upper left", frameon=False)
    ax_l.set_ylabel(g2)
    fig.tight_layout()
    return fig, (ax_l, ax_r)


def plot_dropout_curve(
    result: SimulationResult,
    *,
    style: PlotStyle = DEFAULT_PLOT_STYLE,
) -> tuple[plt.Figure, plt.Axes]:
    """Logistic dropout curve with per-cell drop outcomes as a rug."""
    cfg = result.config
    absz = np.abs(result.expression).ravel()
    dropped = result.dropout.indicator.ravel() == 0

    x_max = max(float(np.max(absz)), cfg.dropout_midpoint * 2.0)
    grid = np.linspace(0.0, x_max, 400)
    curve = dropout_probability(grid, midpoint=cfg.dropout_midpoint, scale=cfg.dropout_scale)

    fig, ax = plt.subplots(figsize=style.figsize_curve)
    ax.plot(grid, curve, color=style.color_ols, label="f(|x|)")
    ax.scatter(
        absz[~dropped],
        np.zeros(int((~dropped).sum())),
        marker="|",
        s=40,
        color=style.color_kept,
        alpha=style.alpha_point,
        label="kept",
    )
    ax.scatter(
        absz[dropped],
        np.ones(int(dropped.sum())),
        marker="|",
        s=40,
        color=style.color_dropped,
        alpha=style.alpha_point,
        label="dropped",
    )
    ax.axvline(cfg.dropout_midpoint, color="gray", ls=":", lw=1.0)
    ax.set_xlabel("|expression|")
    ax.set_ylabel("P(dropout)")
    ax.set_ylim(-0.05, 1.05)
    ax.set_title("Dropout probability")
    ax.legend(loc="center right", frameon=False)
    fig.tight_layout()
    return fig, ax


def plot_replicate_estimates(
    replicates: pd.DataFrame,
    *,
    style: PlotStyle = DEFAULT_PLOT_STYLE,
) -> tuple[plt.Figure, plt.Axes]:
    """Box plot of correlation estimates across replicates against rho."""
    cols = ["corr_clean", "corr_dropped", "corr_weighted"]
    missing = [c for c in cols + ["rho"] if c not in replicates.columns]
    if missing:
        raise KeyError(f"replicate table missing columns: {', '.join(missing)}")
    data = [replicates[c].dropna().to_numpy(dtype=float) for c in cols]
    rho = float(replicates["rho"].iloc[0])

    fig, ax = plt.subplots(figsize=style.figsize_replicates)
    ax.boxplot(data, showfliers=False)
    ax.set_xticks(range(1, len(cols) + 1))
    ax.set_xticklabels(["clean", "dropped", "weighted"])
    ax.axhline(rho, color=style.color_truth, ls="--", label=f"population rho={rho:.2f}")
    ax.set_ylabel("correlation")
    ax.set_title(f"Correlation estimates over {len(replicates)} replicates")
    ax.legend(loc="lower left", frameon=False)
    fig.tight_layout()
    return fig, ax
