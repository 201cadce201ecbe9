"""
validation.py — independent baseline and checks for gotohalign

This module provides an independent pure-Python fill of the three Gotoh
layers (gotoh_reference), the score each mode reports from those layers
(reference_score), structural checks on AlignmentResult objects, and
random sequence helpers for randomized tests.

gotoh_reference shares no code with dp_core: it works on nested lists
and looks symbols up directly, so a bug in one cannot mask a bug in the
other.
"""

from typing import List, Mapping, Tuple

import numpy as np
from numpy.typing import NDArray

from . import default
from .dp_core import AlignmentSession
from .tracebacks import AlignmentResult

DEFAULT_BASES = default.BASES
DEFAULT_ALPHABET_TO_INDEX = default.ALPHABET_TO_INDEX
DEFAULT_SCORE_MATRIX = default.SCORE_MATRIX

Layers = Tuple[List[List[int]], List[List[int]], List[List[int]]]


def gotoh_reference(
    X: str,
    Y: str,
    mode: str,
    score_matrix: NDArray[np.number] = DEFAULT_SCORE_MATRIX,
    alphabet_to_index: Mapping[str, int] = DEFAULT_ALPHABET_TO_INDEX,
) -> Layers:
    """
    Fill (Yg, M, Xg) for (X, Y) under `mode` with plain lists.
    """
    if mode not in default.MODES:
        raise ValueError(f"Unknown mode: {mode!r}")
    X, Y = X.upper(), Y.upper()
    n, m = len(X), len(Y)
    go, ge, NEG = default.GAP_OPEN, default.GAP_EXTEND, default.SENTINEL

    def edge(k: int) -> int:
        if mode == "global":
            return NEG
        if mode == "local" or k == 0:
            return 0
        return -go - ge * (k - 1)

    Yg = [[NEG] * (m + 1) for _ in range(n + 1)]
    M  = [[NEG] * (m + 1) for _ in range(n + 1)]
    Xg = [[NEG] * (m + 1) for _ in range(n + 1)]

    for i in range(n + 1):
        Yg[i][0] = Xg[i][0] = edge(i)
    for j in range(m + 1):
        Yg[0][j] = Xg[0][j] = edge(j)
    M[0][0] = 0

    for i in range(1, n + 1):
        for j in range(1, m + 1):
            s = int(score_matrix[alphabet_to_index[X[i - 1]], alphabet_to_index[Y[j - 1]]])
            Yg[i][j] = max(Yg[i][j - 1], Xg[i][j - 1] - go, M[i][j - 1] - go) - ge
            Xg[i][j] = max(Yg[i - 1][j] - go, Xg[i - 1][j], M[i - 1][j] - go) - ge
            M[i][j] = max(Yg[i - 1][j - 1], Xg[i - 1][j - 1], M[i - 1][j - 1]) + s

    return Yg, M, Xg


def reference_score(
    X: str,
    Y: str,
    mode: str,
    score_matrix: NDArray[np.number] = DEFAULT_SCORE_MATRIX,
    alphabet_to_index: Mapping[str, int] = DEFAULT_ALPHABET_TO_INDEX,
) -> int:
    """
    Score each mode reports, read off the reference layers:

        global     : M[n][m]
        semiglobal : best of the last row and last column of M
        local      : best cell of M
    """
    _, M, _ = gotoh_reference(X, Y, mode, score_matrix, alphabet_to_index)
    n, m = len(X), len(Y)
    if mode == "global":
        return M[n][m]
    if mode == "semiglobal":
        return max(max(M[n]), max(row[m] for row in M))
    return max(max(row) for row in M)


def check_forward_pass_vs_reference(
    session: AlignmentSession,
    score_matrix: NDArray[np.number] = DEFAULT_SCORE_MATRIX,
    alphabet_to_index: Mapping[str, int] = DEFAULT_ALPHABET_TO_INDEX,
) -> Tuple[bool, str]:
    """
    Compare the layers of a session against gotoh_reference.

    Returns
    -------
    valid : bool
        True if all three layers agree cell for cell.
    message : str
        The first disagreeing layer, or a summary.
    """
    ref = gotoh_reference(session.X, session.Y, session.mode, score_matrix, alphabet_to_index)
    data = session.data
    for name, ours, theirs in zip(("Yg", "M", "Xg"), (data.Yg, data.M, data.Xg), ref):
        if not np.array_equal(ours, np.asarray(theirs)):
            return False, f"Layer {name} differs from the reference fill"
    return True, f"All layers agree on shape {data.shape}"


def check_alignment_validity(result: AlignmentResult, X: str, Y: str) -> Tuple[bool, str]:
    """
    Check that an AlignmentResult is well formed.

    Verifies that:
    - X_aln, Y_aln and annotation have the same length,
    - no column of the walked segment is a double gap,
    - annotation marks are consistent with the columns ('|' for identical
      symbols, ':' for a substitution, ' ' for a gap) and are blank
      outside the walked segment,
    - dropping gaps and padding recovers X and Y.

    Returns
    -------
    valid : bool
    message : str
    """
    X_aln, Y_aln, ann = result.X_aln, result.Y_aln, result.annotation

    if not (len(X_aln) == len(Y_aln) == len(ann)):
        return False, f"Length mismatch: X_aln={len(X_aln)}, Y_aln={len(Y_aln)}, annotation={len(ann)}"

    for k, (x, a, y) in enumerate(zip(X_aln, ann, Y_aln)):
        if not (result.core_start <= k < result.core_end):
            if a != " ":
                return False, f"Non-blank annotation {a!r} outside walked segment at column {k}"
            continue
        if x == "-" and y == "-":
            return False, f"Double gap found in alignment at column {k}"
        if x == "-" or y == "-":
            expected = " "
        else:
            expected = "|" if x == y else ":"
        if a != expected:
            return False, f"Annotation {a!r} at column {k} should be {expected!r}"

    for label, aln, seq in (("X", X_aln, X), ("Y", Y_aln, Y)):
        recovered = aln.replace("-", "").replace(" ", "")
        if recovered != seq.upper():
            return False, f"{label} not recovered: {recovered} != {seq.upper()}"

    return True, f"Valid alignment of length {len(ann)}"


# ---------------------------------------------------------------------------
# Random sequence helpers
# ---------------------------------------------------------------------------

def random_sequence(length: int, rng: np.random.Generator, alphabet=DEFAULT_BASES) -> str:
    """
    Generate a random sequence of a given length over `alphabet`.

    Parameters
    ----------
    length : int
        Length of the sequence to generate.
    rng : np.random.Generator
        NumPy random generator instance.
    alphabet : array-like of str
        Symbols to draw from (default: all 26 letters).
    """
    return "".join(rng.choice(np.asarray(alphabet), size=length))


def mutate_sequence(
    seq: str,
    rng: np.random.Generator,
    sub_rate: float = 0.1,
    indel_rate: float = 0.05,
    alphabet=DEFAULT_BASES,
) -> str:
    """
    Apply random substitutions, insertions and deletions to a sequence.

    Parameters
    ----------
    seq : str
        Input sequence.
    rng : numpy random generator
        Random number generator (e.g., np.random.default_rng(seed)).
    sub_rate : float
        Per-symbol substitution probability (default 0.1).
    indel_rate : float
        Per-symbol insertion/deletion probability (default 0.05).
    alphabet : array-like of str
        Symbols used for substitutions and insertions.
    """
    symbols = list(alphabet)
    result = []

    for base in seq:
        # Deletion
        if rng.random() < indel_rate:
            continue

        # Substitution
        if rng.random() < sub_rate:
            others = [b for b in symbols if b != base]
            base = str(rng.choice(others))

        result.append(base)

        # Insertion (after current symbol)
        if rng.random() < indel_rate:
            result.append(str(rng.choice(symbols)))

    return "".join(result)
