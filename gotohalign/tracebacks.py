"""
tracebacks.py — reconstruct alignments from filled Gotoh layers

Three tracebacks share one walk:

  - traceback_global     : walk from (n, m) and complete any unconsumed
                           prefix with leading gaps.
  - traceback_semiglobal : pick the better end cell on the last row or last
                           column of M, emit the trailing gap run, walk,
                           then emit the leading gap run.
  - traceback_local      : walk from the best M cell anywhere, stopping as
                           soon as every state at the current cell is
                           negative; the untouched prefix and suffix of each
                           sequence are added as unscored padding.

At every cell the walk takes the largest of Yg, Xg, M, preferring a gap in
X, then a gap in Y, then a match/substitution on ties.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from .dp_core import AlignmentSession, GotohData, check_mode

logger = logging.getLogger(__name__)

# Path states, as in the layer order Yg, M, Xg
GAP_IN_X = 0
MATCH = 1
GAP_IN_Y = 2

GAP_CHAR = "-"
PAD_CHAR = " "


@dataclass(frozen=True)
class AlignmentResult:
    """
    Result of one traceback.

    Attributes
    ----------
    score : int
        Value of M at the cell the walk started from.

    X_aln, Y_aln : str
        Aligned sequences ('-' for gaps, ' ' for local padding).

    annotation : str
        One character per column: '|' identical symbols, ':' substitution,
        ' ' gap or padding column.

    mode : str
        "global", "semiglobal" or "local".

    path : tuple of (i, j, state)
        Every column that consumes sequence symbols, left to right, with
        state in {0,1,2} for (gap in X, match, gap in Y).  Local padding
        columns are not on the path.

    core_start, core_end : int
        Column span [core_start, core_end) produced by the walk itself.

    data : AlignmentSession or None
        The session the result was traced from, if requested.
    """
    score: int
    X_aln: str
    Y_aln: str
    annotation: str
    mode: str
    path: Tuple[Tuple[int, int, int], ...] = ()
    core_start: int = 0
    core_end: int = 0
    data: Optional[AlignmentSession] = field(default=None, compare=False, repr=False)

    def __len__(self) -> int:
        return len(self.annotation)

    def core(self) -> Tuple[str, str, str]:
        """Return (X_aln, annotation, Y_aln) restricted to the walked columns."""
        s, e = self.core_start, self.core_end
        return self.X_aln[s:e], self.annotation[s:e], self.Y_aln[s:e]

    def to_tuple(self) -> Tuple[int, str, str, str]:
        """
        Returns
        -------
        tuple
            (score, X_aln, Y_aln, annotation)
        """
        return (self.score, self.X_aln, self.Y_aln, self.annotation)


class _Columns:
    """Alignment columns collected right to left, reversed once at the end."""

    def __init__(self, session: AlignmentSession):
        self.X = session.X
        self.Y = session.Y
        self.x: List[str] = []
        self.y: List[str] = []
        self.ann: List[str] = []
        self.path: List[Tuple[int, int, int]] = []

    def __len__(self) -> int:
        return len(self.ann)

    def gap_in_x(self, i: int, j: int) -> None:
        self.x.append(GAP_CHAR)
        self.y.append(self.Y[j - 1])
        self.ann.append(" ")
        self.path.append((i, j, GAP_IN_X))

    def gap_in_y(self, i: int, j: int) -> None:
        self.x.append(self.X[i - 1])
        self.y.append(GAP_CHAR)
        self.ann.append(" ")
        self.path.append((i, j, GAP_IN_Y))

    def pair(self, i: int, j: int) -> None:
        a, b = self.X[i - 1], self.Y[j - 1]
        self.x.append(a)
        self.y.append(b)
        self.ann.append("|" if a == b else ":")  # match / substitution
        self.path.append((i, j, MATCH))

    def pad(self, xs: str, ys: str, leading: bool) -> None:
        """Unscored columns showing xs over ys, justified to a common width."""
        width = max(len(xs), len(ys))
        if leading:
            xs, ys = xs.rjust(width, PAD_CHAR), ys.rjust(width, PAD_CHAR)
        else:
            xs, ys = xs.ljust(width, PAD_CHAR), ys.ljust(width, PAD_CHAR)
        for k in range(width - 1, -1, -1):
            self.x.append(xs[k])
            self.y.append(ys[k])
            self.ann.append(PAD_CHAR)

    def finish(
        self,
        session: AlignmentSession,
        score: int,
        walk: Tuple[int, int],
        return_data: bool,
    ) -> AlignmentResult:
        # walk holds (start, end) offsets in collection (right-to-left) order
        total = len(self.ann)
        return AlignmentResult(
            score=int(score),
            X_aln="".join(reversed(self.x)),
            Y_aln="".join(reversed(self.y)),
            annotation="".join(reversed(self.ann)),
            mode=session.mode,
            path=tuple(reversed(self.path)),
            core_start=total - walk[1],
            core_end=total - walk[0],
            data=session if return_data else None,
        )


# ---------------------------------------------------------------------------
# Shared walk
# ---------------------------------------------------------------------------

def _walk(cols: _Columns, data: GotohData, i: int, j: int, local: bool = False) -> Tuple[int, int]:
    """
    Walk back from (i, j) until a boundary row or column is reached.

    With local=True the walk also stops at the first cell where all three
    states are negative.  Returns the cell where the walk stopped.
    """
    Yg, M, Xg = data.Yg, data.M, data.Xg

    while i > 0 and j > 0:
        best = max(Yg[i, j], Xg[i, j], M[i, j])
        if local and best < 0:
            break

        if best == Yg[i, j]:
            cols.gap_in_x(i, j)
            j -= 1
        elif best == Xg[i, j]:
            cols.gap_in_y(i, j)
            i -= 1
        else:
            cols.pair(i, j)
            i -= 1
            j -= 1

    return i, j


def _leading_gaps(cols: _Columns, i: int, j: int) -> None:
    """Consume whatever prefix the walk left, opposite gaps."""
    if j > 0:
        for t in range(j, 0, -1):
            cols.gap_in_x(0, t)
    elif i > 0:
        for t in range(i, 0, -1):
            cols.gap_in_y(t, 0)


# ---------------------------------------------------------------------------
# Mode tracebacks
# ---------------------------------------------------------------------------

def traceback_global(session: AlignmentSession, return_data: bool = False) -> AlignmentResult:
    """
    Global traceback from (n, m).

    The reported score is M[n, m].  The boundary forces the first column to
    be a match, so the walk normally ends at (0, 0); if it stops on row 0 or
    column 0 earlier, the rest of the other sequence is emitted opposite
    gaps so that both sequences are consumed end to end.
    """
    data = session.data
    cols = _Columns(session)
    i, j = session.n, session.m
    score = data.M[i, j]

    start = len(cols)
    i, j = _walk(cols, data, i, j)
    walk = (start, len(cols))
    _leading_gaps(cols, i, j)

    return cols.finish(session, score, walk, return_data)


def traceback_semiglobal(session: AlignmentSession, return_data: bool = False) -> AlignmentResult:
    """
    Semiglobal traceback: free-standing gap runs only at the outer ends.

    The best M value on the last row (at column max_col) and on the last
    column (at row max_row) are compared; the first index wins ties within
    each.  If the last-column candidate is strictly worse, the alignment
    ends at (n, max_col) with Y[max_col:] opposite gaps; otherwise it ends
    at (max_row, m) with X[max_row:] opposite gaps.  The middle is a global
    walk and any remaining prefix becomes a leading gap run.
    """
    data = session.data
    M = data.M
    n, m = session.n, session.m
    cols = _Columns(session)

    max_col = int(np.argmax(M[n, :]))
    max_row = int(np.argmax(M[:, m]))

    if M[max_row, m] < M[n, max_col]:
        # trailing gap run in X, opposite the end of Y
        i, j = n, max_col
        for t in range(m, max_col, -1):
            cols.gap_in_x(n, t)
    else:
        # trailing gap run in Y, opposite the end of X
        i, j = max_row, m
        for t in range(n, max_row, -1):
            cols.gap_in_y(t, m)

    logger.debug("Semiglobal traceback starts at (%d, %d)", i, j)
    score = M[i, j]

    start = len(cols)
    i, j = _walk(cols, data, i, j)
    walk = (start, len(cols))
    _leading_gaps(cols, i, j)

    return cols.finish(session, score, walk, return_data)


def traceback_local(session: AlignmentSession, return_data: bool = False) -> AlignmentResult:
    """
    Local traceback from the best M cell.

    The best cell is the first maximum of M in row-major order; its value
    is the score.  The walk stops early once max(Yg, Xg, M) < 0 at the
    current cell.  Sequence text outside the walked segment is shown
    verbatim as padding: the suffixes after the end cell are left-justified,
    the prefixes before the stop cell are right-justified.
    """
    data = session.data
    M = data.M
    X, Y = session.X, session.Y
    cols = _Columns(session)

    i, j = (int(k) for k in np.unravel_index(np.argmax(M), M.shape))
    logger.debug("Local traceback starts at (%d, %d)", i, j)
    score = M[i, j]

    cols.pad(X[i:], Y[j:], leading=False)

    start = len(cols)
    i, j = _walk(cols, data, i, j, local=True)
    walk = (start, len(cols))

    cols.pad(X[:i], Y[:j], leading=True)

    return cols.finish(session, score, walk, return_data)


_TRACEBACKS = {
    "global": traceback_global,
    "semiglobal": traceback_semiglobal,
    "local": traceback_local,
}


def run_traceback(session: AlignmentSession, return_data: bool = False) -> AlignmentResult:
    """Dispatch to the traceback matching session.mode."""
    return _TRACEBACKS[check_mode(session.mode)](session, return_data=return_data)
