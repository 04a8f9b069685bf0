"""HTML rendering of a detection report."""
from __future__ import annotations

import html
from pathlib import Path
from typing import List, Union

from neardup.core.logging import get_logger, LogEvent
from neardup.services.types import DetectionReport, HighlightSpan, ReportEntry, Text

logger = get_logger(__name__)

_STYLE = """
body { font-family: sans-serif; margin: 2em; }
h2 { margin-top: 2em; font-size: 1.1em; }
p.text { white-space: pre-wrap; border: 1px solid #ddd; padding: 0.8em; }
mark { background: #ffe066; }
"""


def _as_str(text: Text) -> str:
    if isinstance(text, bytes):
        return text.decode("utf-8", errors="replace")
    return text


def _is_continuation(data: bytes, index: int) -> bool:
    return index < len(data) and (data[index] & 0xC0) == 0x80


def align_to_characters(data: bytes, spans: List[HighlightSpan]) -> List[HighlightSpan]:
    """Widen byte spans so that no UTF-8 character is split across a <mark>.

    Widened spans that now overlap or touch are merged.
    """
    aligned: List[HighlightSpan] = []
    for span in spans:
        start, end = span.start, span.end
        while start > 0 and _is_continuation(data, start):
            start -= 1
        while _is_continuation(data, end):
            end += 1
        if aligned and start <= aligned[-1].end:
            aligned[-1] = HighlightSpan(aligned[-1].start, max(aligned[-1].end, end))
        else:
            aligned.append(HighlightSpan(start, end))
    return aligned


def render_marked_text(text: Text, spans: List[HighlightSpan]) -> str:
    """Escape ``text`` and wrap every span in <mark>.

    Spans index the raw text (byte offsets for bytes). Byte spans are first
    aligned to UTF-8 character boundaries, then each slice is decoded and
    escaped on its own.
    """
    if isinstance(text, bytes):
        spans = align_to_characters(text, spans)
    parts = []
    cursor = 0
    for span in spans:
        parts.append(html.escape(_as_str(text[cursor:span.start])))
        parts.append(f"<mark>{html.escape(_as_str(text[span.start:span.end]))}</mark>")
        cursor = span.end
    parts.append(html.escape(_as_str(text[cursor:])))
    return "".join(parts)


def render_entry(entry: ReportEntry, left: Text, right: Text) -> str:
    left_label = html.escape(entry.left_name or f"document {entry.pair.left}")
    right_label = html.escape(entry.right_name or f"document {entry.pair.right}")
    return (
        f"<h2>Pair {entry.rank}: {left_label} / {right_label} "
        f"(similarity: {entry.similarity:.2f}, "
        f"edit distance: {entry.edit_distance}, "
        f"containment: {entry.containment:.2f})</h2>"
        f"<h3>{left_label}</h3><p class=\"text\">{render_marked_text(left, entry.highlight.left_spans)}</p>"
        f"<h3>{right_label}</h3><p class=\"text\">{render_marked_text(right, entry.highlight.right_spans)}</p>"
    )


def render_html(report: DetectionReport, documents: List[Text], title: str = "Most Similar Texts") -> str:
    """Render the ranked entries of ``report`` as a standalone HTML page."""
    sections = [
        render_entry(entry, documents[entry.pair.left], documents[entry.pair.right])
        for entry in report.entries
    ]
    if not sections:
        sections.append("<p>No document pairs to compare.</p>")

    return (
        "<!DOCTYPE html>"
        f"<html><head><meta charset=\"utf-8\"><title>{html.escape(title)}</title>"
        f"<style>{_STYLE}</style></head><body>"
        f"<h1>Top {len(report.entries)} Most Similar Text Pairs</h1>"
        f"<p>{report.document_count} documents, {report.pair_count} pairs, "
        f"minimum common substring length {report.min_length}, scoring: {html.escape(report.scoring_mode)}</p>"
        + "".join(sections)
        + "</body></html>"
    )


def write_report(
    report: DetectionReport,
    documents: List[Text],
    path: Union[str, Path],
    title: str = "Most Similar Texts",
) -> Path:
    output = Path(path)
    if output.parent and not output.parent.exists():
        output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(render_html(report, documents, title=title), encoding="utf-8")
    logger.info(LogEvent.REPORT_WRITTEN, path=str(output), entries=len(report.entries))
    return output
