"""
Score-layer heatmaps for gotohalign.

plot_gotoh_matrices draws the three layers of a session side by side and
marks the traceback path of an AlignmentResult on them.
"""

from typing import Dict, Optional, Tuple

import numpy as np
import matplotlib.pyplot as plt
import seaborn as sns

from ..default import SENTINEL
from ..tracebacks import AlignmentResult
from .colors import NT_COLOR, HEATMAP_COLORMAPS

grid_color_map = HEATMAP_COLORMAPS['diverging']

# Panels are drawn as [Yg, M, Xg]; path states already use that order
PANELS = (
    ("Yg", "Yg (gap in x)"),
    ("M",  "M (match/substitution)"),
    ("Xg", "Xg (gap in y)"),
)


def plot_gotoh_matrices(
    result: AlignmentResult,
    nt_color_map: Optional[Dict[str, str]] = None,
    figsize: Tuple[int, int] = (14, 6),
    marker_size: int = 18,
    marker_color: str = "#00ff2f",
    marker_width: int = 2,
    show_bg_path: bool = True,
    marker_bg_color: str = "black",
    marker_style: str = 's',
    annotate: bool = True,
    colormap: str = grid_color_map,
) -> plt.Figure:
    """
    Plot the three Gotoh score layers (Yg, M, Xg) as heatmaps with the
    traceback path overlaid.

    Cells at or below the unreachable sentinel are drawn as missing.

    Parameters
    ----------
    result : AlignmentResult
        Result produced with return_data=True.
    nt_color_map : dict, optional
        Mapping symbols to colors for axis labels.
    figsize : tuple
        Figure size.
    marker_size, marker_color, marker_width, marker_style
        Appearance of the path markers on the panel of their state.
    show_bg_path : bool
        Show faded path markers on all panels.
    marker_bg_color : str
        Color for background path markers.
    annotate : bool
        Write the score in each cell.

    Returns
    -------
    fig : matplotlib.Figure
    """
    session = result.data
    if session is None:
        raise ValueError("plot_gotoh_matrices needs a result built with return_data=True")
    if nt_color_map is None:
        nt_color_map = NT_COLOR

    matrices = [getattr(session.data, name).astype(float) for name, _ in PANELS]
    for mat in matrices:
        mat[mat <= SENTINEL] = np.nan

    finite_vals = np.concatenate([mat[np.isfinite(mat)] for mat in matrices])
    vmin, vmax = (finite_vals.min(), finite_vals.max()) if finite_vals.size else (-1.0, 1.0)

    cmap = sns.color_palette(colormap, as_cmap=True)
    cmap.set_bad(color="grey")

    xticklabels = [""] + list(session.Y)
    yticklabels = [""] + list(session.X)

    fig, axes = plt.subplots(
        1, 3, figsize=figsize, sharex=True, sharey=True, constrained_layout=False
    )

    for ax, mat, (_, title) in zip(axes, matrices, PANELS):
        sns.heatmap(
            mat,
            ax=ax,
            cmap=cmap,
            center=0,
            vmin=vmin,
            vmax=vmax,
            square=True,
            cbar=False,
            annot=annotate,
            fmt=".0f",
            xticklabels=xticklabels,
            yticklabels=yticklabels,
        )
        ax.set_title(title)
        ax.set_xlabel("y (columns)")
        ax.tick_params(top=True, bottom=False, labeltop=True, labelbottom=False)
        ax.xaxis.set_label_position("top")

        for tick, lab in zip(ax.get_xticklabels(), xticklabels):
            tick.set_rotation(0)
            tick.set_va("center")
            tick.set_color(nt_color_map.get(lab, "black"))
            tick.set_fontweight("bold")

    axes[0].set_ylabel("x (rows)")
    for tick, lab in zip(axes[0].get_yticklabels(), yticklabels):
        tick.set_rotation(0)
        tick.set_va("center")
        tick.set_color(nt_color_map.get(lab, "black"))
        tick.set_fontweight("bold")

    # Path overlay
    for (i, j, state) in result.path:
        x = j + 0.5
        y = i + 0.5

        if show_bg_path:
            for ax in axes:
                ax.plot(
                    x,
                    y,
                    marker=marker_style,
                    markersize=marker_size,
                    markeredgecolor=marker_bg_color,
                    markerfacecolor="none",
                    alpha=0.6,
                    markeredgewidth=marker_width,
                )

        axes[state].plot(
            x,
            y,
            marker=marker_style,
            markersize=marker_size,
            markeredgecolor=marker_color,
            markerfacecolor="none",
            alpha=0.9,
            markeredgewidth=marker_width,
        )

    fig.suptitle(f"{result.mode} alignment, score {result.score}")
    fig.tight_layout()
    return fig
