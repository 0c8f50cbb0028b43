"""Figure defaults for simulation plots, and the manifest recorded with them."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

import matplotlib


@dataclass(frozen=True)
class PlotStyle:
    """Sizes, colours and marker settings shared by the simulation figures."""

    dpi: int = 200
    figsize_scatter: tuple[float, float] = (11.0, 5.0)
    figsize_curve: tuple[float, float] = (6.0, 4.5)
    figsize_replicates: tuple[float, float] = (7.0, 4.5)
    s_point: float = 8.0
    alpha_point: float = 0.45
    color_kept: str = "#1f4e79"
    color_dropped: str = "#c0392b"
    color_ols: str = "black"
    color_wls: str = "#e67e22"
    color_truth: str = "#2e8b57"
    line_width: float = 1.8
    legend_fontsize: int = 8
    axis_label_fontsize: int = 10
    title_fontsize: int = 11


DEFAULT_PLOT_STYLE = PlotStyle()


def style_rc_params(style: PlotStyle = DEFAULT_PLOT_STYLE) -> dict[str, Any]:
    """rcParams derived from `style`."""
    return {
        "figure.dpi": style.dpi,
        "savefig.dpi": style.dpi,
        "savefig.facecolor": "white",
        "lines.linewidth": style.line_width,
        "axes.titlesize": style.title_fontsize,
        "axes.labelsize": style.axis_label_fontsize,
        "legend.fontsize": style.legend_fontsize,
        "axes.spines.top": False,
        "axes.spines.right": False,
    }


def apply_plot_style(style: PlotStyle = DEFAULT_PLOT_STYLE) -> None:
    matplotlib.rcParams.update(style_rc_params(style))


def plot_style_manifest(style: PlotStyle = DEFAULT_PLOT_STYLE) -> dict[str, Any]:
    """Style, derived rcParams and the active backend, for summary.json."""
    return {
        "style": asdict(style),
        "rc_params": style_rc_params(style),
        "backend": str(matplotlib.get_backend()),
        "matplotlib_version": str(matplotlib.__version__),
    }
