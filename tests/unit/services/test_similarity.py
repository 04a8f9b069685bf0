"""Unit tests for similarity scoring and the pairwise matrix."""

import numpy as np
import pytest

from neardup.core.config import ScoringMode
from neardup.core.errors import InvalidInputError
from neardup.services.ranking import rank_pairs
from neardup.services.similarity import (
    build_score_matrices,
    build_similarity_matrix,
    score_common_substrings,
    similarity_score,
)
from neardup.services.substring_extractor import find_common_substrings
from neardup.services.types import CommonSubstrings, DocumentPair


class TestSimilarityScore:
    def test_empty_documents_score_zero(self):
        assert similarity_score("", "hello", 5) == 0.0
        assert similarity_score("", "", 5) == 0.0

    def test_sum_mode_is_clamped_to_one(self):
        # "abc" + "abcd" = 7 > 6
        assert similarity_score("abcdef", "xabcdy", 3) == 1.0

    def test_coverage_mode_counts_covered_positions(self):
        score = similarity_score("abcdef", "xabcdy", 3, mode=ScoringMode.COVERAGE)
        assert score == pytest.approx(4 / 6)

    def test_mode_accepts_plain_strings(self):
        assert similarity_score("abcdef", "xabcdy", 3, mode="coverage") == pytest.approx(4 / 6)

    def test_unknown_mode_is_rejected(self):
        with pytest.raises(InvalidInputError):
            similarity_score("abc", "abc", 1, mode="jaccard")

    def test_no_common_substring_scores_zero(self):
        assert similarity_score("abcdefgh", "ijklmnop", 2) == 0.0

    @pytest.mark.parametrize("mode", list(ScoringMode))
    def test_identical_documents_score_one(self, mode):
        assert similarity_score("hello world", "hello world", 5, mode=mode) == 1.0

    def test_score_from_precomputed_result(self):
        common = CommonSubstrings(
            substrings=frozenset({"abcde"}),
            min_length=5,
            left_length=10,
            right_length=20,
            left_covered=5,
            right_covered=5,
        )
        assert score_common_substrings(common) == pytest.approx(0.25)
        assert score_common_substrings(common, ScoringMode.COVERAGE) == pytest.approx(0.25)


class TestSimilarityMatrix:
    def test_matrix_is_symmetric_with_zero_diagonal(self, small_corpus):
        matrix = build_similarity_matrix(small_corpus, 3)

        assert matrix.shape == (4, 4)
        assert np.array_equal(matrix, matrix.T)
        assert np.all(np.diag(matrix) == 0.0)
        assert np.all((matrix >= 0.0) & (matrix <= 1.0))

    def test_identical_documents_fill_off_diagonal_with_one(self):
        matrix = build_similarity_matrix(["same text"] * 3, 5)

        expected = np.ones((3, 3)) - np.eye(3)
        assert np.array_equal(matrix, expected)

    def test_cells_match_pairwise_scores(self, small_corpus):
        matrix = build_similarity_matrix(small_corpus, 4, mode=ScoringMode.COVERAGE)

        assert matrix[0, 1] == similarity_score(small_corpus[0], small_corpus[1], 4, ScoringMode.COVERAGE)
        assert matrix[2, 3] == similarity_score(small_corpus[2], small_corpus[3], 4, ScoringMode.COVERAGE)

    def test_parallel_build_matches_sequential(self, small_corpus):
        sequential = build_similarity_matrix(small_corpus, 3)
        parallel = build_similarity_matrix(small_corpus, 3, max_workers=3)

        assert np.array_equal(sequential, parallel)

    @pytest.mark.parametrize("documents", [[], ["only one"]])
    def test_degenerate_corpus(self, documents):
        matrix = build_similarity_matrix(documents, 5)
        assert matrix.shape == (len(documents), len(documents))
        assert not matrix.any()

    def test_invalid_arguments(self):
        with pytest.raises(InvalidInputError):
            build_similarity_matrix(["a", "b"], 0)
        with pytest.raises(InvalidInputError):
            build_similarity_matrix(["a", "b"], 1, max_workers=0)
        with pytest.raises(InvalidInputError):
            build_similarity_matrix(["a", b"b"], 1)


class TestRankingScores:
    def test_unclamped_ratio(self):
        common = find_common_substrings("abcdef", "xabcdy", 3)

        assert score_common_substrings(common, clamp=False) == pytest.approx(7 / 6)
        assert score_common_substrings(common) == 1.0

    def test_ranking_matrix_separates_saturated_scores(self):
        # runs abc..abcdef against abc..abcdefgh
        documents = ["abcdefgh", "zabcdefz", "abcdefgh"]

        scores, ranking = build_score_matrices(documents, 3)

        assert scores[0, 1] == scores[0, 2] == 1.0
        assert ranking[0, 2] > ranking[0, 1] > 1.0
        assert np.array_equal(scores, build_similarity_matrix(documents, 3))
        assert rank_pairs(ranking, 1) == [DocumentPair(0, 2)]
        assert rank_pairs(scores, 1) == [DocumentPair(0, 1)]
