"""Plotting API for dropout simulation results."""

from dropwls.plotting.figures import (
    plot_dropout_curve,
    plot_fit_scatter,
    plot_replicate_estimates,
)
from dropwls.plotting.styles import (
    DEFAULT_PLOT_STYLE,
    PlotStyle,
    apply_plot_style,
    plot_style_manifest,
    style_rc_params,
)
from dropwls.plotting.utils import save_figure

__all__ = [
    "PlotStyle",
    "DEFAULT_PLOT_STYLE",
    "apply_plot_style",
    "plot_style_manifest",
    "style_rc_params",
    "save_figure",
    "plot_fit_scatter",
    "plot_dropout_curve",
    "plot_replicate_estimates",
]
