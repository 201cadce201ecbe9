"""
test_dp_core.py — Tests for boundary initialization, the forward pass and
session construction.
"""

import dataclasses

import numpy as np
import pytest

from gotohalign.default import GAP_EXTEND, GAP_OPEN, SENTINEL
from gotohalign.dp_core import (
    OutOfRangeError,
    build_session,
    encode_sequence,
    forward_pass,
    init_matrices,
)
from gotohalign.validation import check_forward_pass_vs_reference


class TestInitMatrices:
    """Row 0 and column 0 for each mode."""

    @pytest.mark.parametrize("mode", ["global", "semiglobal", "local"])
    def test_origin_is_zero_match(self, mode):
        data = init_matrices(3, 2, mode)
        assert data.M[0, 0] == 0
        assert data.shape == (4, 3)

    @pytest.mark.parametrize("mode", ["global", "semiglobal", "local"])
    def test_match_boundary_unreachable(self, mode):
        data = init_matrices(3, 2, mode)
        assert np.all(data.M[1:, 0] == SENTINEL)
        assert np.all(data.M[0, 1:] == SENTINEL)

    def test_global_gaps_unreachable(self):
        data = init_matrices(3, 2, "global")
        for layer in (data.Yg, data.Xg):
            assert np.all(layer[:, 0] == SENTINEL)
            assert np.all(layer[0, :] == SENTINEL)

    def test_semiglobal_gap_boundary(self):
        data = init_matrices(3, 2, "semiglobal")
        expected_col = [0, -12, -14, -16]
        expected_row = [0, -12, -14]
        for layer in (data.Yg, data.Xg):
            assert layer[:, 0].tolist() == expected_col
            assert layer[0, :].tolist() == expected_row

    def test_semiglobal_formula(self):
        data = init_matrices(6, 0, "semiglobal")
        for k in range(1, 7):
            assert data.Xg[k, 0] == -GAP_OPEN - GAP_EXTEND * (k - 1)

    def test_local_gap_boundary_free(self):
        data = init_matrices(3, 2, "local")
        for layer in (data.Yg, data.Xg):
            assert np.all(layer[:, 0] == 0)
            assert np.all(layer[0, :] == 0)

    def test_unknown_mode(self):
        pytest.raises(ValueError, init_matrices, 2, 2, "glocal")


class TestForwardPass:
    """Recurrence values and purity of the forward pass."""

    def test_single_cell_global(self, score_matrix):
        data = forward_pass(init_matrices(1, 1, "global"), encode_sequence("A"), encode_sequence("A"), score_matrix)
        assert data.M[1, 1] == 1
        assert data.Yg[1, 1] == SENTINEL - 2
        assert data.Xg[1, 1] == SENTINEL - 2

    def test_gap_open_then_extend(self, score_matrix):
        """A gap opened after a match pays open+extend, then extend only."""
        data = forward_pass(init_matrices(1, 3, "global"), encode_sequence("A"), encode_sequence("AAA"), score_matrix)
        assert data.Yg[1, 2] == 1 - GAP_OPEN - GAP_EXTEND
        assert data.Yg[1, 3] == 1 - GAP_OPEN - 2 * GAP_EXTEND

    def test_input_not_modified(self, score_matrix):
        init = init_matrices(3, 3, "local")
        before = init.copy()
        forward_pass(init, encode_sequence("CAT"), encode_sequence("CAT"), score_matrix)
        for a, b in zip((init.Yg, init.M, init.Xg), (before.Yg, before.M, before.Xg)):
            assert np.array_equal(a, b)

    @pytest.mark.parametrize("mode", ["global", "semiglobal", "local"])
    def test_idempotent(self, mode, score_matrix):
        init = init_matrices(7, 7, mode)
        X, Y = encode_sequence("GATTACA"), encode_sequence("GCATGCU")
        first = forward_pass(init, X, Y, score_matrix)
        second = forward_pass(init, X, Y, score_matrix)
        for a, b in zip((first.Yg, first.M, first.Xg), (second.Yg, second.M, second.Xg)):
            assert np.array_equal(a, b)

    @pytest.mark.parametrize("mode", ["global", "semiglobal", "local"])
    def test_matches_reference(self, mode, rng, random_dna_factory, scoring_params):
        for nX, nY in [(1, 1), (5, 9), (12, 4), (20, 20)]:
            X = random_dna_factory(nX, rng)
            Y = random_dna_factory(nY, rng)
            session = build_session(X, Y, mode, **scoring_params)
            valid, msg = check_forward_pass_vs_reference(session, **scoring_params)
            assert valid, msg


class TestEncodeSequence:

    def test_uppercases(self):
        assert encode_sequence("acz").tolist() == [0, 2, 25]

    def test_empty(self):
        assert len(encode_sequence("")) == 0

    @pytest.mark.parametrize("seq", ["AC1T", "A C", "ACGÜ", "AC-T", "straße", "\ufb01x", "\u0131"])
    def test_out_of_range(self, seq):
        with pytest.raises(OutOfRangeError):
            encode_sequence(seq)

    def test_case_mapping_does_not_change_length(self):
        """The sharp s uppercases to "SS"; it is reported, not expanded."""
        with pytest.raises(OutOfRangeError, match="position 4"):
            encode_sequence("stra\u00dfe")

    def test_out_of_range_is_index_error(self):
        with pytest.raises(IndexError, match="position 2"):
            encode_sequence("AC*")


class TestBuildSession:

    def test_sequences_uppercased(self, scoring_params):
        session = build_session("gat", "Gca", "global", **scoring_params)
        assert (session.X, session.Y) == ("GAT", "GCA")
        assert (session.n, session.m) == (3, 3)

    def test_layers_read_only(self, scoring_params):
        session = build_session("GAT", "GCA", "local", **scoring_params)
        with pytest.raises(ValueError):
            session.data.M[1, 1] = 100

    def test_session_frozen(self, scoring_params):
        session = build_session("GAT", "GCA", "local", **scoring_params)
        with pytest.raises(dataclasses.FrozenInstanceError):
            session.X = "AAA"

    def test_fresh_session_per_request(self, scoring_params):
        first = build_session("GAT", "GCA", "local", **scoring_params)
        second = build_session("GAT", "GCA", "local", **scoring_params)
        assert first.data.M is not second.data.M

    def test_missing_score_matrix(self, alphabet_to_index):
        with pytest.raises(ValueError):
            build_session("GAT", "GCA", "global", None, alphabet_to_index)

    def test_undersized_score_matrix(self, alphabet_to_index):
        small = np.ones((4, 4), dtype=int)
        with pytest.raises(IndexError):
            build_session("AZ", "AZ", "global", small, alphabet_to_index)

    def test_bad_symbol_rejected_before_fill(self, scoring_params):
        with pytest.raises(OutOfRangeError):
            build_session("GAT", "GC4", "global", **scoring_params)

    def test_non_alphabet_letter_not_rewritten(self, scoring_params):
        with pytest.raises(OutOfRangeError):
            build_session("stra\u00dfe", "STRASSE", "global", **scoring_params)

    def test_unknown_mode(self, scoring_params):
        with pytest.raises(ValueError, match="Unknown mode"):
            build_session("GAT", "GCA", "overlap", **scoring_params)
