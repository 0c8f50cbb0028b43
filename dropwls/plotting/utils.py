"""Shared plotting utilities used by figure factories."""

from __future__ import annotations

from pathlib import Path

import matplotlib.figure
import matplotlib.pyplot as plt

from dropwls.plotting.styles import DEFAULT_PLOT_STYLE, PlotStyle


def save_figure(
    fig: matplotlib.figure.Figure,
    out_path: str | Path,
    *,
    style: PlotStyle = DEFAULT_PLOT_STYLE,
    bbox_tight: bool = False,
    close: bool = True,
) -> Path:
    """Save figure deterministically and optionally close it."""
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    save_kwargs: dict[str, object] = {
        "dpi": style.dpi,
        "facecolor": "white",
        "pad_inches": 0.02,
    }
    if bbox_tight:
        save_kwargs["bbox_inches"] = "tight"
    fig.savefig(out, **save_kwargs)
    if close:
        plt.close(fig)
    return out
