"""
conftest.py — Shared pytest fixtures for the gotohalign test suite

Provides the +1/-1 scoring matrix, alphabet mapping, and seeded random
number generators used across all test modules.
"""

import pytest
import numpy as np
from numpy.typing import NDArray

from gotohalign import default


# ---------------------------------------------------------------------------
# Default scoring fixtures (match default.py)
# ---------------------------------------------------------------------------

@pytest.fixture
def alphabet_to_index() -> dict:
    """Mapping from letter to matrix index."""
    return dict(default.ALPHABET_TO_INDEX)


@pytest.fixture
def score_matrix() -> NDArray[np.integer]:
    """Simple identity matrix: +1 on diagonal, -1 off-diagonal."""
    mat = np.full((26, 26), -1, dtype=np.int64)
    np.fill_diagonal(mat, 1)
    return mat


@pytest.fixture
def scoring_params(score_matrix, alphabet_to_index):
    """Bundle scoring parameters into a dict for easy unpacking."""
    return {
        "score_matrix": score_matrix,
        "alphabet_to_index": alphabet_to_index,
    }


@pytest.fixture
def dna() -> NDArray:
    """DNA alphabet, for tests that want frequent matches."""
    return np.array(["A", "C", "G", "T"])


# ---------------------------------------------------------------------------
# Random number generator fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def rng():
    """Seeded random generator for reproducible tests."""
    return np.random.default_rng(888)


@pytest.fixture
def rng_alt():
    """Alternative seed for diversity in randomized tests."""
    return np.random.default_rng(123)


# ---------------------------------------------------------------------------
# Sequence generation helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def random_dna_factory(dna):
    """Factory fixture returning a function to generate random DNA strings."""
    def _random_dna(length: int, rng: np.random.Generator) -> str:
        return "".join(rng.choice(dna, size=length))
    return _random_dna
