"""Tests for the HTML report renderer."""

import pytest

from neardup.services.detection_pipeline import DetectionPipeline
from neardup.services.report_renderer import align_to_characters, render_html, render_marked_text, write_report
from neardup.services.types import HighlightSpan


@pytest.fixture
def pipeline(settings):
    return DetectionPipeline(settings)


class TestRenderMarkedText:
    def test_spans_are_wrapped_and_text_escaped(self):
        assert render_marked_text("a<b>c", [HighlightSpan(0, 1)]) == "<mark>a</mark>&lt;b&gt;c"

    def test_escapes_inside_marks(self):
        assert render_marked_text("x&y", [HighlightSpan(0, 3)]) == "<mark>x&amp;y</mark>"

    def test_no_spans(self):
        assert render_marked_text("plain", []) == "plain"

    def test_bytes_are_decoded(self):
        assert render_marked_text(b"ab<", [HighlightSpan(0, 2)]) == "<mark>ab</mark>&lt;"

    def test_byte_spans_never_split_a_character(self):
        # "é" is two bytes; the span ends between them
        data = "héllo".encode("utf-8")

        assert render_marked_text(data, [HighlightSpan(0, 2)]) == "<mark>hé</mark>llo"
        assert render_marked_text(data, [HighlightSpan(2, 4)]) == "h<mark>él</mark>lo"

    def test_widened_byte_spans_merge(self):
        data = "aéb".encode("utf-8")

        assert align_to_characters(data, [HighlightSpan(0, 2), HighlightSpan(3, 4)]) == [HighlightSpan(0, 4)]


class TestRenderHtml:
    def test_page_lists_ranked_pairs(self, pipeline):
        documents = ["<b>shared text</b>", "<b>shared text</b>!"]
        report = pipeline.run(documents, names=["a.txt", "b.txt"])

        page = render_html(report, documents)

        assert page.startswith("<!DOCTYPE html>")
        assert "Top 1 Most Similar Text Pairs" in page
        assert "Pair 1: a.txt / b.txt (similarity: 1.00, edit distance: 1, containment: 1.00)" in page
        assert "<mark>" in page
        assert "<b>shared" not in page
        assert "&lt;b&gt;shared" in page

    def test_empty_report(self, pipeline):
        report = pipeline.run(["alone"])
        page = render_html(report, ["alone"])

        assert "Top 0 Most Similar Text Pairs" in page
        assert "No document pairs to compare." in page

    def test_title_is_escaped(self, pipeline):
        report = pipeline.run(["alone"])
        assert "<title>a &amp; b</title>" in render_html(report, ["alone"], title="a & b")


def test_write_report_creates_parent_directories(pipeline, small_corpus, tmp_path):
    report = pipeline.run(small_corpus, top_k=2)
    target = tmp_path / "reports" / "similar.html"

    written = write_report(report, small_corpus, target)

    assert written == target
    content = target.read_text(encoding="utf-8")
    assert "Pair 1: document 0 / document 1" in content
    assert "Pair 2:" in content
