"""Mark the shared segments of a document pair."""
from __future__ import annotations

from typing import Iterable, List, Optional

from neardup.core.deadline import Deadline
from neardup.services.sequences import validate_pair
from neardup.services.substring_extractor import find_common_substrings
from neardup.services.types import CommonSubstrings, Highlight, HighlightSpan, Text

OPEN_MARKER = "<mark>"
CLOSE_MARKER = "</mark>"


class HighlightService:
    """Locate the first occurrence of every common substring on both sides.

    Substrings are visited longest first, then in lexicographic order. Each
    first occurrence is searched in the unmarked original, and overlapping
    or touching spans are merged, so the output never nests markers.
    """

    def __init__(self, open_marker: str = OPEN_MARKER, close_marker: str = CLOSE_MARKER):
        self.open_marker = open_marker
        self.close_marker = close_marker

    def highlight(self, left: Text, right: Text, common: CommonSubstrings) -> Highlight:
        validate_pair(left, right)
        ordered = self.ordered_substrings(common.substrings)

        left_spans = self._merge_overlapping_spans(self._first_occurrences(left, ordered))
        right_spans = self._merge_overlapping_spans(self._first_occurrences(right, ordered))

        return Highlight(
            left_spans=left_spans,
            right_spans=right_spans,
            left_marked=self.apply_markers(left, left_spans),
            right_marked=self.apply_markers(right, right_spans),
        )

    @staticmethod
    def ordered_substrings(substrings: Iterable[Text]) -> List[Text]:
        return sorted(substrings, key=lambda s: (-len(s), s))

    def _first_occurrences(self, text: Text, substrings: List[Text]) -> List[HighlightSpan]:
        spans = []
        for substring in substrings:
            position = text.find(substring)
            if position < 0:
                # not present on this side, nothing to mark
                continue
            spans.append(HighlightSpan(position, position + len(substring)))
        return spans

    def _merge_overlapping_spans(self, spans: List[HighlightSpan]) -> List[HighlightSpan]:
        """合并重叠或相邻的span"""
        if not spans:
            return []

        ordered = sorted(spans, key=lambda span: (span.start, span.end))
        merged = [ordered[0]]

        for current in ordered[1:]:
            last = merged[-1]
            if current.start <= last.end:
                merged[-1] = HighlightSpan(last.start, max(last.end, current.end))
            else:
                merged.append(current)

        return merged

    def apply_markers(self, text: Text, spans: List[HighlightSpan]) -> Text:
        open_marker, close_marker = self.open_marker, self.close_marker
        if isinstance(text, bytes):
            open_marker, close_marker = open_marker.encode("utf-8"), close_marker.encode("utf-8")

        pieces = []
        cursor = 0
        for span in spans:
            pieces.append(text[cursor:span.start])
            pieces.append(open_marker)
            pieces.append(text[span.start:span.end])
            pieces.append(close_marker)
            cursor = span.end
        pieces.append(text[cursor:])
        return text[:0].join(pieces)


def highlight(
    left: Text,
    right: Text,
    min_length: int,
    common: Optional[CommonSubstrings] = None,
    deadline: Optional[Deadline] = None,
) -> Highlight:
    """Highlight a pair, reusing ``common`` when it was already computed."""
    if common is None:
        common = find_common_substrings(left, right, min_length, deadline=deadline)
    return HighlightService().highlight(left, right, common)
