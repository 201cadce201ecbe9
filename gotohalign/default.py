"""
default.py — Default parameters for gotohalign

Provides the fixed 26-letter alphabet, the affine gap constants, the
unreachable-state sentinel, and a +1/-1 substitution matrix used
throughout examples and tests.
"""

import string
from typing import Mapping, Optional, Tuple

import numpy as np

# Alphabet: the 26 uppercase letters
BASES = np.array(list(string.ascii_uppercase))
ALPHABET_TO_INDEX = {b: i for i, b in enumerate(BASES)}

## Affine gap penalties (subtracted in the recurrence)
GAP_OPEN = 12
GAP_EXTEND = 2

## Marks a DP state as unreachable
SENTINEL = -99

MODES = ("global", "semiglobal", "local")


def make_score_matrix(match: int = 1, mismatch: int = -1) -> np.ndarray:
    """
    Build a (26, 26) substitution matrix with `match` on the diagonal
    and `mismatch` everywhere else.
    """
    K = len(BASES)
    mat = np.full((K, K), mismatch, dtype=np.int64)
    np.fill_diagonal(mat, match)
    return mat


def score_matrix_from_pairs(
    pairs: Mapping[Tuple[str, str], int],
    default: Optional[int] = None,
) -> np.ndarray:
    """
    Build a (26, 26) substitution matrix from a {(a, b): score} mapping.

    Symbols are uppercased.  Pairs absent from the mapping take `default`;
    if `default` is None every ordered pair over the alphabet must be
    present, otherwise KeyError is raised for the first missing one.
    """
    K = len(BASES)
    table = {(a.upper(), b.upper()): s for (a, b), s in pairs.items()}
    mat = np.zeros((K, K), dtype=np.int64)
    for a, ai in ALPHABET_TO_INDEX.items():
        for b, bi in ALPHABET_TO_INDEX.items():
            if (a, b) in table:
                mat[ai, bi] = table[(a, b)]
            elif default is not None:
                mat[ai, bi] = default
            else:
                raise KeyError(f"No score for symbol pair ({a!r}, {b!r})")
    return mat


# Substitution matrix: +1 for identical symbols, -1 otherwise
SCORE_MATRIX = make_score_matrix(1, -1)


def align_params() -> dict:
    """
    Bundle default scoring parameters into a dict for easy unpacking.

    Usage:
        result = align_local(X, Y, **align_params())
    """
    return {
        "score_matrix": SCORE_MATRIX,
        "alphabet_to_index": ALPHABET_TO_INDEX,
    }


def get_default_scoring():
    """
    Convenience helper returning the default scoring components:

        score_matrix, gap_open, gap_extend, alphabet_to_index
    """
    return (
        SCORE_MATRIX,
        GAP_OPEN,
        GAP_EXTEND,
        ALPHABET_TO_INDEX,
    )
