"""Unit tests for the Levenshtein distance calculator."""

import itertools

import pytest

from neardup.core.errors import InvalidInputError
from neardup.services.edit_distance import edit_distance


@pytest.mark.parametrize(
    "left,right,expected",
    [
        ("abcdef", "xabcdy", 3),
        ("kitten", "sitting", 3),
        ("flaw", "lawn", 2),
        ("", "hello", 5),
        ("hello", "", 5),
        ("", "", 0),
        ("same", "same", 0),
        ("abc", "cba", 2),
        ("a", "b", 1),
        (b"abc", b"abd", 1),
    ],
)
def test_known_distances(left, right, expected):
    assert edit_distance(left, right) == expected


def test_distance_properties(sample_texts):
    for left, right in itertools.product(sample_texts, repeat=2):
        distance = edit_distance(left, right)
        assert distance == edit_distance(right, left)
        assert 0 <= distance <= max(len(left), len(right))
        assert distance <= len(left) + len(right)
    for text in sample_texts:
        assert edit_distance(text, text) == 0


def test_non_text_input_is_rejected():
    with pytest.raises(InvalidInputError):
        edit_distance("abc", None)
