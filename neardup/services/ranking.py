"""Order document pairs by similarity and keep the top K."""
from __future__ import annotations

from itertools import combinations
from typing import List

import numpy as np

from neardup.core.errors import InvalidInputError
from neardup.services.types import DocumentPair


def rank_pairs(matrix: np.ndarray, top_k: int) -> List[DocumentPair]:
    """Return up to ``top_k`` pairs sorted by score, highest first.

    Equal scores keep lexicographic ``(left, right)`` order.
    """
    matrix = np.asarray(matrix)
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise InvalidInputError("Similarity matrix must be square", field="matrix", value=matrix.shape)
    if isinstance(top_k, bool) or not isinstance(top_k, int) or top_k < 0:
        raise InvalidInputError("top_k must be a non-negative integer", field="top_k", value=top_k)

    pairs = list(combinations(range(matrix.shape[0]), 2))
    # list.sort is stable and pairs are generated in lexicographic order
    pairs.sort(key=lambda pair: -float(matrix[pair]))
    return [DocumentPair(i, j) for i, j in pairs[:top_k]]
