"""
aligners.py — User-facing alignment helpers for gotohalign

Each function builds a fresh AlignmentSession for the requested mode
(boundary initialization + forward pass), runs the matching traceback and
returns an AlignmentResult.

Gap penalties are fixed (default.GAP_OPEN, default.GAP_EXTEND); only the
substitution matrix is supplied by the caller.
"""

from __future__ import annotations

import logging
from typing import Dict, Mapping

import numpy as np
from numpy.typing import NDArray

from .default import ALPHABET_TO_INDEX, MODES
from .dp_core import build_session
from .tracebacks import AlignmentResult, run_traceback

logger = logging.getLogger(__name__)


def align_with_mode(
    X: str,
    Y: str,
    mode: str,
    score_matrix: NDArray[np.number],
    alphabet_to_index: Mapping[str, int] = ALPHABET_TO_INDEX,
    return_data: bool = False,
) -> AlignmentResult:
    """
    Align (X, Y) under the boundary regime named by `mode`.

    Parameters
    ----------
    X, Y : str
        Sequences over the 26-letter alphabet; case is ignored.

    mode : {"global", "semiglobal", "local"}
        Boundary regime and traceback to use.

    score_matrix : (K, K) array
        Substitution matrix, indexed by alphabet_to_index[symbol].

    alphabet_to_index : mapping str -> int
        Maps symbols to indices in score_matrix.

    return_data : bool, default False
        If True, attach the AlignmentSession (sequences and score layers)
        to the result.

    Returns
    -------
    AlignmentResult
        Aligned strings, annotation, score and traceback path.

    Raises
    ------
    ValueError
        Unknown mode, or no score matrix.
    OutOfRangeError
        A symbol outside alphabet_to_index.
    """
    session = build_session(X, Y, mode, score_matrix, alphabet_to_index)
    result = run_traceback(session, return_data=return_data)
    logger.debug("%s alignment of %d x %d: score %d", mode, session.n, session.m, result.score)
    return result


def align_global(
    X: str,
    Y: str,
    score_matrix: NDArray[np.number],
    alphabet_to_index: Mapping[str, int] = ALPHABET_TO_INDEX,
    return_data: bool = False,
) -> AlignmentResult:
    """
    Global alignment: both sequences consumed end to end, first column
    forced to be a match/substitution.
    """
    return align_with_mode(X, Y, "global", score_matrix, alphabet_to_index, return_data)


def align_semiglobal(
    X: str,
    Y: str,
    score_matrix: NDArray[np.number],
    alphabet_to_index: Mapping[str, int] = ALPHABET_TO_INDEX,
    return_data: bool = False,
) -> AlignmentResult:
    """
    Semi-global alignment: unmatched runs allowed at the outer ends of one
    sequence (overlap/containment).
    """
    return align_with_mode(X, Y, "semiglobal", score_matrix, alphabet_to_index, return_data)


def align_local(
    X: str,
    Y: str,
    score_matrix: NDArray[np.number],
    alphabet_to_index: Mapping[str, int] = ALPHABET_TO_INDEX,
    return_data: bool = False,
) -> AlignmentResult:
    """
    Local alignment: best-scoring segment pair, Smith-Waterman style with
    affine gaps.  The rest of each sequence is shown as unscored padding.
    """
    return align_with_mode(X, Y, "local", score_matrix, alphabet_to_index, return_data)


def align_all(
    X: str,
    Y: str,
    score_matrix: NDArray[np.number],
    alphabet_to_index: Mapping[str, int] = ALPHABET_TO_INDEX,
    return_data: bool = False,
) -> Dict[str, AlignmentResult]:
    """
    Run global, semiglobal and local alignment of (X, Y).

    Each mode gets its own session; nothing is shared between them.

    Returns
    -------
    dict
        {mode: AlignmentResult} in the order of default.MODES.
    """
    return {
        mode: align_with_mode(X, Y, mode, score_matrix, alphabet_to_index, return_data)
        for mode in MODES
    }
