"""Broder-style containment over the full set of contiguous substrings."""
from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from neardup.core.deadline import Deadline
from neardup.core.errors import ResourceLimitError
from neardup.core.logging import get_logger, LogEvent
from neardup.services.sequences import to_codes, validate_pair
from neardup.services.types import Text

logger = get_logger(__name__)

# Two polynomial hashes with prime moduli below 2**31, so every product fits in int64
_MODULI = (2_147_483_647, 1_000_000_007)
_BASES = (911_382_323, 972_663_749)


def substring_count(length: int, max_length: Optional[int] = None) -> int:
    """Number of (start, end) substrings of a sequence, optionally capped in length."""
    span = length if max_length is None else min(length, max_length)
    # lengths 1..span, (length - k + 1) substrings each
    return span * (length + 1) - span * (span + 1) // 2


class _WindowHasher:
    """Rabin-Karp prefix hashes of one document, queried one window length at a time."""

    def __init__(self, text: Text, max_length: int):
        codes = to_codes(text)
        self.length = len(codes)
        self._prefixes = []
        self._powers = []
        for modulus, base in zip(_MODULI, _BASES):
            prefix = [0]
            for code in codes.tolist():
                prefix.append((prefix[-1] * base + code) % modulus)
            powers = [1]
            for _ in range(max_length):
                powers.append((powers[-1] * base) % modulus)
            self._prefixes.append(np.array(prefix, dtype=np.int64))
            self._powers.append(np.array(powers, dtype=np.int64))

    def distinct(self, k: int) -> np.ndarray:
        """Sorted unique fingerprints of the windows of length ``k``."""
        if k > self.length:
            return np.empty(0, dtype=np.int64)
        parts = []
        for modulus, prefix, powers in zip(_MODULI, self._prefixes, self._powers):
            parts.append(np.mod(prefix[k:] - prefix[:-k] * powers[k], modulus))
        return np.unique(parts[0] * _MODULI[1] + parts[1])


def _check_limit(sides: Tuple[Tuple[str, Text], ...], span: int, max_substrings: int) -> None:
    for side, text in sides:
        needed = substring_count(len(text), span)
        if needed > max_substrings:
            logger.warning(
                LogEvent.RESOURCE_LIMIT,
                stage="containment",
                side=side,
                length=len(text),
                substrings=needed,
                limit=max_substrings,
            )
            raise ResourceLimitError(
                resource=f"containment substring set ({side})",
                limit=max_substrings,
                actual=needed,
            )


def containment(
    left: Text,
    right: Text,
    max_substrings: Optional[int] = None,
    deadline: Optional[Deadline] = None,
) -> float:
    """Fraction of ``left``'s distinct substrings that also occur in ``right``.

    The score is asymmetric. An empty ``left`` scores 0.0. When either side
    has more than ``max_substrings`` substrings a ResourceLimitError is
    raised before any hashing starts.

    Substrings are compared by 62-bit fingerprints one length at a time,
    so memory stays linear in the document length.
    """
    validate_pair(left, right)
    if not left:
        return 0.0

    # substrings of right longer than left can never match
    span = len(left)
    if max_substrings is not None:
        _check_limit((("left", left), ("right", right)), span, max_substrings)

    left_hashes = _WindowHasher(left, span)
    right_hashes = _WindowHasher(right, span)

    total = 0
    contained = 0
    for k in range(1, span + 1):
        if deadline is not None:
            deadline.check("containment")
        left_set = left_hashes.distinct(k)
        total += left_set.size
        right_set = right_hashes.distinct(k)
        if right_set.size:
            contained += np.intersect1d(left_set, right_set, assume_unique=True).size
    return contained / total
