"""Common-substring similarity scoring and the pairwise similarity matrix."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from itertools import combinations
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from neardup.core.config import ScoringMode
from neardup.core.deadline import Deadline
from neardup.core.errors import InvalidInputError
from neardup.services.sequences import validate_documents, validate_min_length
from neardup.services.substring_extractor import find_common_substrings
from neardup.services.types import CommonSubstrings, Text


def resolve_scoring_mode(mode: Union[ScoringMode, str]) -> ScoringMode:
    try:
        return ScoringMode(mode)
    except ValueError:
        raise InvalidInputError(f"Unknown scoring mode '{mode}'", field="scoring_mode", value=mode) from None


def score_common_substrings(
    common: CommonSubstrings,
    mode: Union[ScoringMode, str] = ScoringMode.SUM,
    clamp: bool = True,
) -> float:
    """Normalise a common-substring result by the longer side's length.

    ``sum`` adds up the lengths of all distinct common substrings. Nested
    runs are counted once each, so the raw ratio can go past 1.0 and is
    clamped unless ``clamp`` is False. ``coverage`` counts covered positions
    instead and never exceeds 1.0.
    """
    mode = resolve_scoring_mode(mode)
    longest = max(common.left_length, common.right_length)
    if longest == 0:
        return 0.0

    if mode is ScoringMode.COVERAGE:
        raw = max(common.left_covered, common.right_covered)
    else:
        raw = common.total_length
    ratio = raw / longest
    return min(1.0, ratio) if clamp else ratio


def similarity_score(
    left: Text,
    right: Text,
    min_length: int,
    mode: Union[ScoringMode, str] = ScoringMode.SUM,
    deadline: Optional[Deadline] = None,
    max_code_units: Optional[int] = None,
) -> float:
    """Similarity of two documents in [0, 1]; 0.0 when both are empty."""
    common = find_common_substrings(left, right, min_length, deadline=deadline, max_code_units=max_code_units)
    return score_common_substrings(common, mode)


def _partition(pairs: List[Tuple[int, int]], parts: int) -> List[List[Tuple[int, int]]]:
    # round-robin keeps long and short documents spread across workers
    return [chunk for chunk in (pairs[k::parts] for k in range(parts)) if chunk]


def build_score_matrices(
    documents: Sequence[Text],
    min_length: int,
    mode: Union[ScoringMode, str] = ScoringMode.SUM,
    max_workers: int = 1,
    deadline: Optional[Deadline] = None,
    max_code_units: Optional[int] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """Score every unordered pair once and mirror it into two n x n matrices.

    Returns ``(scores, ranking)``. ``scores`` holds the reported values in
    [0, 1]; ``ranking`` holds the unclamped ratios, which keep exact copies
    ahead of pairs whose ``sum`` score merely saturates. The diagonals stay 0.
    With ``max_workers > 1`` the pair list is split across a thread pool;
    every task writes only the cells of its own pairs.
    """
    validate_min_length(min_length)
    mode = resolve_scoring_mode(mode)
    if max_workers < 1:
        raise InvalidInputError("max_workers must be >= 1", field="max_workers", value=max_workers)

    docs = validate_documents(documents)
    size = len(docs)
    scores = np.zeros((size, size), dtype=np.float64)
    ranking = np.zeros((size, size), dtype=np.float64)
    pairs = list(combinations(range(size), 2))

    def evaluate(chunk: List[Tuple[int, int]]) -> None:
        for i, j in chunk:
            common = find_common_substrings(
                docs[i], docs[j], min_length, deadline=deadline, max_code_units=max_code_units
            )
            ratio = score_common_substrings(common, mode, clamp=False)
            scores[i, j] = scores[j, i] = min(1.0, ratio)
            ranking[i, j] = ranking[j, i] = ratio

    if max_workers == 1 or len(pairs) < 2:
        evaluate(pairs)
        return scores, ranking

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(evaluate, chunk) for chunk in _partition(pairs, max_workers)]
        for future in as_completed(futures):
            future.result()

    return scores, ranking


def build_similarity_matrix(
    documents: Sequence[Text],
    min_length: int,
    mode: Union[ScoringMode, str] = ScoringMode.SUM,
    max_workers: int = 1,
    deadline: Optional[Deadline] = None,
    max_code_units: Optional[int] = None,
) -> np.ndarray:
    """Symmetric matrix of reported similarity scores with a zero diagonal."""
    scores, _ = build_score_matrices(documents, min_length, mode, max_workers, deadline, max_code_units)
    return scores
