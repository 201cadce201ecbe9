"""
gotohalign plotting package.

Requires matplotlib and seaborn (pip install "gotohalign[plot]").

Example imports:
    from gotohalign.plot import plot_gotoh_matrices
    from gotohalign.plot.colors import NT_COLOR
"""

from .colors import NT_COLOR, HEATMAP_COLORMAPS
from .matrix import plot_gotoh_matrices

__all__ = [
    "NT_COLOR",
    "HEATMAP_COLORMAPS",
    "plot_gotoh_matrices",
]
