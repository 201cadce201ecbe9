"""
display.py — plain-text views of alignments and score layers

For debugging and teaching; nothing here is needed to compute an alignment.
"""

from typing import List

import numpy as np

from .dp_core import AlignmentSession
from .tracebacks import AlignmentResult

CELL_WIDTH = 4

LAYER_TITLES = (
    ("Yg", "Best scores ending with a gap in x"),
    ("Xg", "Best scores ending with a gap in y"),
    ("M",  "Best scores ending with a match/substitution"),
)


def format_alignment(result: AlignmentResult) -> str:
    """Four lines: X_aln, annotation, Y_aln and the score."""
    return "\n".join([
        result.X_aln,
        result.annotation,
        result.Y_aln,
        f"Score: {result.score}",
    ])


def format_matrix(layer: np.ndarray, X: str, Y: str, width: int = CELL_WIDTH) -> str:
    """
    Render one (n+1, m+1) layer as a fixed-width table.

    The header holds two blank cells then one cell per symbol of Y; each
    row starts with a blank (row 0) or the symbol of X for that row.
    """
    rows = " " + X
    cols = "  " + Y
    lines: List[str] = ["".join(f"{c:>{width}}" for c in cols)]
    for r, label in enumerate(rows):
        cells = "".join(f"{int(v):>{width}}" for v in layer[r])
        lines.append(f"{label:>{width}}" + cells)
    return "\n".join(lines)


def describe(session: AlignmentSession, width: int = CELL_WIDTH) -> str:
    """Dump all three score layers of a session, each under a title line."""
    blocks = []
    for name, title in LAYER_TITLES:
        layer = getattr(session.data, name)
        blocks.append(f"{title} ({name}):\n" + format_matrix(layer, session.X, session.Y, width))
    return "\n\n".join(blocks)
