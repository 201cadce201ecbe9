"""
gotohalign: pairwise alignment with affine gaps (Gotoh) in global,
semiglobal and local modes.
"""

import logging

# =============================================================================
# CORE ALIGNMENT
# =============================================================================

from .aligners import (
    align_with_mode,
    align_global,
    align_semiglobal,
    align_local,
    align_all,
)

from .dp_core import (
    AlignmentSession,
    GotohData,
    OutOfRangeError,
    build_session,
    encode_sequence,
    forward_pass,
    init_matrices,
)

from .tracebacks import (
    AlignmentResult,
    run_traceback,
    traceback_global,
    traceback_semiglobal,
    traceback_local,
)

from .default import (
    GAP_OPEN,
    GAP_EXTEND,
    SENTINEL,
    MODES,
    SCORE_MATRIX,
    ALPHABET_TO_INDEX,
    make_score_matrix,
    score_matrix_from_pairs,
    align_params,
    get_default_scoring,
)


# =============================================================================
# DISPLAY AND VALIDATION
# =============================================================================

from .display import format_alignment, format_matrix, describe

from .validation import (
    gotoh_reference,
    reference_score,
    check_forward_pass_vs_reference,
    check_alignment_validity,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())


# =============================================================================
# PLOTTING (requires both matplotlib and seaborn -- install with pip install gotohalign[plot])
# =============================================================================
def _missing_plot_dep(func_name: str) -> ImportError:
    return ImportError(
        f"{func_name} requires plotting dependencies.\n"
        'Install with: pip install "gotohalign[plot]"'
    )

try:
    from .plot import plot_gotoh_matrices
    PLOT_AVAILABLE = True
except ImportError:
    # Raises ImportError if accessed without matplotlib/seaborn
    def plot_gotoh_matrices(*args, **kwargs):
        raise _missing_plot_dep("plot_gotoh_matrices")
    PLOT_AVAILABLE = False


__all__ = [
    # Core alignment
    "AlignmentResult",
    "align_with_mode",
    "align_global",
    "align_semiglobal",
    "align_local",
    "align_all",
    # DP core
    "AlignmentSession",
    "GotohData",
    "OutOfRangeError",
    "build_session",
    "encode_sequence",
    "forward_pass",
    "init_matrices",
    # Tracebacks
    "run_traceback",
    "traceback_global",
    "traceback_semiglobal",
    "traceback_local",
    # Defaults
    "GAP_OPEN",
    "GAP_EXTEND",
    "SENTINEL",
    "MODES",
    "SCORE_MATRIX",
    "ALPHABET_TO_INDEX",
    "make_score_matrix",
    "score_matrix_from_pairs",
    "align_params",
    "get_default_scoring",
    # Display
    "format_alignment",
    "format_matrix",
    "describe",
    # Validation
    "gotoh_reference",
    "reference_score",
    "check_forward_pass_vs_reference",
    "check_alignment_validity",
    # Plotting
    "PLOT_AVAILABLE",
    "plot_gotoh_matrices",
]
