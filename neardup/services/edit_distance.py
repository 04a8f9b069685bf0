"""Levenshtein distance with unit insertion, deletion and substitution costs."""
from __future__ import annotations

from typing import Optional

import numpy as np

from neardup.core.deadline import Deadline
from neardup.services.sequences import to_codes, validate_pair
from neardup.services.types import Text


def edit_distance(left: Text, right: Text, deadline: Optional[Deadline] = None) -> int:
    """Return the Levenshtein distance between ``left`` and ``right``.

    Rows are computed with numpy. Substitution and deletion come from the
    previous row; the insertion chain ``cur[j] = cur[j-1] + 1`` is resolved
    with a running minimum over ``tmp[k] - k``.
    """
    validate_pair(left, right)

    if left == right:
        return 0
    if not left or not right:
        return max(len(left), len(right))

    # the Python-level loop runs over the shorter side
    if len(left) > len(right):
        left, right = right, left

    left_codes = to_codes(left)
    right_codes = to_codes(right)
    n = len(right)
    offsets = np.arange(n + 1, dtype=np.int64)

    previous = offsets.copy()
    for i in range(1, len(left) + 1):
        if deadline is not None:
            deadline.check("edit_distance")

        cost = (right_codes != left_codes[i - 1]).astype(np.int64)
        candidate = np.empty(n + 1, dtype=np.int64)
        candidate[0] = i
        candidate[1:] = np.minimum(previous[1:] + 1, previous[:-1] + cost)
        previous = np.minimum.accumulate(candidate - offsets) + offsets

    return int(previous[n])
