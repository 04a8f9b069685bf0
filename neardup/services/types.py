"""Shared dataclasses used across services."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Sequence, Union

import numpy as np

from neardup.core.errors import InvalidInputError

# Documents are compared code unit by code unit, either characters or bytes.
Text = Union[str, bytes]


@dataclass(frozen=True, slots=True)
class DocumentPair:
    """Unordered document pair, stored with left < right."""

    left: int
    right: int

    def __post_init__(self) -> None:
        if self.left < 0 or self.left >= self.right:
            raise InvalidInputError(
                "Pair indices must satisfy 0 <= left < right",
                field="pair",
                value=(self.left, self.right),
            )

    def as_tuple(self) -> tuple[int, int]:
        return (self.left, self.right)


@dataclass(frozen=True, slots=True)
class CommonSubstrings:
    """Distinct common substrings of two sequences, computed once per pair.

    ``left_covered``/``right_covered`` count the positions of each side that
    lie inside some matching run of at least ``min_length`` code units.
    """

    substrings: FrozenSet[Text]
    min_length: int
    left_length: int
    right_length: int
    left_covered: int = 0
    right_covered: int = 0

    @property
    def total_length(self) -> int:
        return sum(len(s) for s in self.substrings)

    @property
    def longest(self) -> int:
        return max((len(s) for s in self.substrings), default=0)

    def __len__(self) -> int:
        return len(self.substrings)

    def __contains__(self, item: object) -> bool:
        return item in self.substrings


@dataclass(frozen=True, slots=True)
class HighlightSpan:
    """Half-open character span [start, end) marked as shared."""

    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(slots=True)
class Highlight:
    """Spans and marked-up copies of both sides of a pair."""

    left_spans: List[HighlightSpan]
    right_spans: List[HighlightSpan]
    left_marked: Text
    right_marked: Text


@dataclass(slots=True)
class ReportEntry:
    """Per-pair result handed to the report renderer."""

    rank: int
    pair: DocumentPair
    similarity: float
    edit_distance: int
    containment: float
    reverse_containment: float
    highlight: Highlight
    left_name: Optional[str] = None
    right_name: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        return {
            "rank": self.rank,
            "left": self.pair.left,
            "right": self.pair.right,
            "left_name": self.left_name,
            "right_name": self.right_name,
            "similarity": round(self.similarity, 4),
            "edit_distance": self.edit_distance,
            "containment": round(self.containment, 4),
            "reverse_containment": round(self.reverse_containment, 4),
            "left_spans": [(s.start, s.end) for s in self.highlight.left_spans],
            "right_spans": [(s.start, s.end) for s in self.highlight.right_spans],
        }


@dataclass(slots=True)
class DetectionReport:
    """Everything produced by one detection run."""

    document_count: int
    min_length: int
    top_k: int
    scoring_mode: str
    matrix: np.ndarray
    entries: List[ReportEntry]
    names: Sequence[str] = field(default_factory=list)
    stage_timings: Dict[str, float] = field(default_factory=dict)

    @property
    def pair_count(self) -> int:
        return self.document_count * (self.document_count - 1) // 2
