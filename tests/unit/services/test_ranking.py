"""Unit tests for pair ranking."""

import numpy as np
import pytest

from neardup.core.errors import InvalidInputError
from neardup.services.ranking import rank_pairs
from neardup.services.types import DocumentPair


@pytest.fixture
def matrix():
    return np.array(
        [
            [0.0, 0.5, 0.2, 0.1],
            [0.5, 0.0, 0.9, 0.5],
            [0.2, 0.9, 0.0, 0.3],
            [0.1, 0.5, 0.3, 0.0],
        ]
    )


def test_pairs_sorted_by_score_with_lexicographic_ties(matrix):
    ranked = [pair.as_tuple() for pair in rank_pairs(matrix, 10)]

    assert ranked == [(1, 2), (0, 1), (1, 3), (2, 3), (0, 2), (0, 3)]


def test_output_is_descending(matrix):
    scores = [matrix[pair.left, pair.right] for pair in rank_pairs(matrix, 6)]
    assert scores == sorted(scores, reverse=True)


@pytest.mark.parametrize("top_k,expected", [(0, 0), (2, 2), (6, 6), (50, 6)])
def test_length_is_min_of_k_and_pair_count(matrix, top_k, expected):
    assert len(rank_pairs(matrix, top_k)) == expected


def test_all_tied_pairs_keep_index_order():
    matrix = np.ones((3, 3)) - np.eye(3)

    assert rank_pairs(matrix, 10) == [DocumentPair(0, 1), DocumentPair(0, 2), DocumentPair(1, 2)]


@pytest.mark.parametrize("size", [0, 1])
def test_no_pairs_for_tiny_corpus(size):
    assert rank_pairs(np.zeros((size, size)), 10) == []


def test_invalid_input():
    with pytest.raises(InvalidInputError):
        rank_pairs(np.zeros((2, 3)), 1)
    with pytest.raises(InvalidInputError):
        rank_pairs(np.zeros((3, 3)), -1)


def test_pair_requires_ordered_indices():
    with pytest.raises(InvalidInputError):
        DocumentPair(2, 1)
    with pytest.raises(InvalidInputError):
        DocumentPair(1, 1)
