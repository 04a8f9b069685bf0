"""Common-substring extraction via the longest-common-suffix DP."""
from __future__ import annotations

from typing import Optional, Set

import numpy as np

from neardup.core.deadline import Deadline
from neardup.core.errors import ResourceLimitError
from neardup.core.logging import get_logger, LogEvent
from neardup.services.sequences import to_codes, validate_min_length, validate_pair
from neardup.services.types import CommonSubstrings, Text

logger = get_logger(__name__)


def find_common_substrings(
    left: Text,
    right: Text,
    min_length: int,
    deadline: Optional[Deadline] = None,
    max_code_units: Optional[int] = None,
) -> CommonSubstrings:
    """Collect every distinct substring of length >= ``min_length`` shared by both sides.

    ``dp[i][j]`` is the length of the longest common suffix of ``left[:i]``
    and ``right[:j]``. Each cell that reaches ``min_length`` contributes
    ``left[i - dp[i][j]:i]``, so nested and overlapping runs are all kept.
    Only the previous row of the table is held in memory.

    The stored runs can add up to far more text than both documents hold.
    ``max_code_units`` caps their summed length and raises
    ResourceLimitError once it is passed.
    """
    validate_pair(left, right)
    validate_min_length(min_length)

    m, n = len(left), len(right)
    if m == 0 or n == 0 or min_length > min(m, n):
        return CommonSubstrings(frozenset(), min_length, m, n)

    left_codes = to_codes(left)
    right_codes = to_codes(right)

    found: Set[Text] = set()
    stored = 0
    left_mask = np.zeros(m, dtype=bool)
    right_mask = np.zeros(n, dtype=bool)
    previous = np.zeros(n + 1, dtype=np.int64)

    for i in range(1, m + 1):
        if deadline is not None:
            deadline.check("common_substrings")

        current = np.zeros(n + 1, dtype=np.int64)
        current[1:] = np.where(right_codes == left_codes[i - 1], previous[:-1] + 1, 0)

        hits = np.flatnonzero(current >= min_length)
        if hits.size:
            # a run longer than min_length was already covered up to i - 1
            left_mask[i - 1] = True
            right_mask[hits - 1] = True
            for j in hits[current[hits] == min_length]:
                left_mask[i - min_length:i] = True
                right_mask[j - min_length:j] = True
            for j in hits:
                run = left[i - int(current[j]):i]
                if run not in found:
                    found.add(run)
                    stored += len(run)
            if max_code_units is not None and stored > max_code_units:
                logger.warning(
                    LogEvent.RESOURCE_LIMIT,
                    stage="common_substrings",
                    left_length=m,
                    right_length=n,
                    code_units=stored,
                    limit=max_code_units,
                )
                raise ResourceLimitError("common substring set", max_code_units, stored)

        previous = current

    return CommonSubstrings(
        substrings=frozenset(found),
        min_length=min_length,
        left_length=m,
        right_length=n,
        left_covered=int(left_mask.sum()),
        right_covered=int(right_mask.sum()),
    )
