"""
dp_core.py — three-state Gotoh dynamic programming core

This module implements the affine-gap (Gotoh) dynamic program shared by
the global, semiglobal and local aligners: mode-specific boundary
initialization, the forward recurrence over three score layers, and the
immutable session object that the tracebacks consume.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping

import numpy as np
from numpy.typing import NDArray

from .default import ALPHABET_TO_INDEX, GAP_EXTEND, GAP_OPEN, MODES, SENTINEL

logger = logging.getLogger(__name__)


class OutOfRangeError(IndexError):
    """A sequence symbol has no row/column in the substitution matrix."""


def check_mode(mode: str) -> str:
    if mode not in MODES:
        raise ValueError(f"Unknown mode: {mode!r} (expected one of {', '.join(MODES)})")
    return mode


def encode_sequence(seq: str, alphabet_to_index: Mapping[str, int] = ALPHABET_TO_INDEX) -> NDArray[np.intp]:
    """
    Encode a sequence into matrix indices using alphabet_to_index.

    Each symbol is uppercased on its own.  A symbol outside the alphabet,
    including one whose case mapping is not a plain one-to-one letter
    change (e.g. "\u00df" -> "SS"), raises OutOfRangeError carrying the
    symbol and its 0-based position.
    """
    codes = np.empty(len(seq), dtype=np.intp)
    for pos, ch in enumerate(seq):
        sym = ch.upper()
        code = alphabet_to_index.get(sym) if sym.lower() == ch.lower() else None
        if code is None:
            raise OutOfRangeError(
                f"Symbol {ch!r} at position {pos} is outside the supported alphabet"
            )
        codes[pos] = code
    return codes


# ---------------------------------------------------------------------------
# DP state containers
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class GotohData:
    """
    The three Gotoh score layers, each of shape (n+1, m+1).

    Yg : gap in X (horizontal move)
        Best score of X[0:i] vs Y[0:j] whose last column places Y[j-1]
        opposite a gap.
    M : match/substitution (diagonal move)
        Best score whose last column pairs X[i-1] with Y[j-1].
    Xg : gap in Y (vertical move)
        Best score whose last column places X[i-1] opposite a gap.
    """

    Yg: NDArray[np.int64]
    M : NDArray[np.int64]
    Xg: NDArray[np.int64]

    @property
    def shape(self):
        return self.M.shape

    def copy(self) -> "GotohData":
        return GotohData(Yg=self.Yg.copy(), M=self.M.copy(), Xg=self.Xg.copy())

    def freeze(self) -> "GotohData":
        """Mark all three layers read-only and return self."""
        for layer in (self.Yg, self.M, self.Xg):
            layer.flags.writeable = False
        return self


@dataclass(frozen=True, eq=False)
class AlignmentSession:
    """
    One alignment request: the two (uppercased) sequences, the mode and
    the filled score layers.  Built fresh by build_session and never
    mutated afterwards.
    """

    X: str
    Y: str
    mode: str
    data: GotohData

    @property
    def n(self) -> int:
        return len(self.X)

    @property
    def m(self) -> int:
        return len(self.Y)


# ---------------------------------------------------------------------------
# Initialization
# ---------------------------------------------------------------------------

def init_matrices(n: int, m: int, mode: str) -> GotohData:
    """
    Allocate the three layers and set row 0 and column 0 for `mode`.

    global:
        every boundary cell is SENTINEL except M[0,0] = 0, so the first
        aligned column is forced to be a match/substitution.
    semiglobal:
        Yg and Xg hold -GAP_OPEN - GAP_EXTEND*(k-1) at boundary index
        k >= 1 and 0 at k = 0; M boundary is SENTINEL.
    local:
        Yg and Xg are 0 along the whole boundary; M boundary is SENTINEL.

    Interior cells are left at SENTINEL until forward_pass fills them.
    """
    check_mode(mode)

    Yg = np.full((n + 1, m + 1), SENTINEL, dtype=np.int64)
    M  = np.full((n + 1, m + 1), SENTINEL, dtype=np.int64)
    Xg = np.full((n + 1, m + 1), SENTINEL, dtype=np.int64)

    if mode == "semiglobal":
        for i in range(n + 1):
            cost = 0 if i == 0 else -GAP_OPEN - GAP_EXTEND * (i - 1)
            Yg[i, 0] = cost
            Xg[i, 0] = cost
        for j in range(m + 1):
            cost = 0 if j == 0 else -GAP_OPEN - GAP_EXTEND * (j - 1)
            Yg[0, j] = cost
            Xg[0, j] = cost
    elif mode == "local":
        Yg[:, 0] = 0
        Xg[:, 0] = 0
        Yg[0, :] = 0
        Xg[0, :] = 0

    # aligning two empty prefixes
    M[0, 0] = 0

    return GotohData(Yg=Yg, M=M, Xg=Xg)


# ---------------------------------------------------------------------------
# Forward recurrence
# ---------------------------------------------------------------------------

def forward_pass(
    data: GotohData,
    X_codes: NDArray[np.integer],
    Y_codes: NDArray[np.integer],
    score_matrix: NDArray[np.number],
) -> GotohData:
    """
    Fill the interior of the three layers with the Gotoh recurrence.

    The input layers are not modified; a filled copy is returned, so
    calling this twice on the same boundaries gives identical layers.

    Continuing a gap of the same kind costs GAP_EXTEND; entering a gap
    from another state costs GAP_OPEN + GAP_EXTEND.  The recurrence is
    the same in every mode.
    """
    out = data.copy()
    Yg, M, Xg = out.Yg, out.M, out.Xg
    go, ge = GAP_OPEN, GAP_EXTEND
    n, m = len(X_codes), len(Y_codes)

    for i in range(1, n + 1):
        xi = X_codes[i - 1]
        for j in range(1, m + 1):
            s = int(score_matrix[xi, Y_codes[j - 1]])

            # Yg: gap in X (move left, same row)
            Yg[i, j] = max(
                Yg[i, j - 1],       # extend
                Xg[i, j - 1] - go,  # open from Xg
                M [i, j - 1] - go,  # open from M
            ) - ge

            # Xg: gap in Y (move down, from row i-1)
            Xg[i, j] = max(
                Yg[i - 1, j] - go,  # open from Yg
                Xg[i - 1, j],       # extend
                M [i - 1, j] - go,  # open from M
            ) - ge

            # M: match/substitution (diagonal)
            M[i, j] = max(
                Yg[i - 1, j - 1],
                Xg[i - 1, j - 1],
                M [i - 1, j - 1],
            ) + s

    return out


# ---------------------------------------------------------------------------
# Session construction
# ---------------------------------------------------------------------------

def build_session(
    X: str,
    Y: str,
    mode: str,
    score_matrix: NDArray[np.number],
    alphabet_to_index: Mapping[str, int] = ALPHABET_TO_INDEX,
) -> AlignmentSession:
    """
    Validate the inputs, initialize the boundaries for `mode` and run the
    forward pass.

    Parameters
    ----------
    X, Y : str
        Sequences to align (rows, columns).  Uppercased before use.
    mode : {"global", "semiglobal", "local"}
        Boundary regime.
    score_matrix : (K, K) array
        Substitution matrix indexed by alphabet_to_index[symbol].
    alphabet_to_index : mapping str -> int
        Maps each symbol to a row/column of score_matrix.

    Returns
    -------
    AlignmentSession
        Sequences, mode and read-only score layers.
    """
    check_mode(mode)
    if score_matrix is None:
        raise ValueError("A substitution score matrix is required before aligning")
    score_matrix = np.asarray(score_matrix)

    X_codes = encode_sequence(X, alphabet_to_index)
    Y_codes = encode_sequence(Y, alphabet_to_index)
    X, Y = X.upper(), Y.upper()

    logger.debug("Building %s session for %d x %d layers", mode, len(X) + 1, len(Y) + 1)
    data = forward_pass(init_matrices(len(X), len(Y), mode), X_codes, Y_codes, score_matrix)
    return AlignmentSession(X=X, Y=Y, mode=mode, data=data.freeze())
