"""Tests for corpus loading and the plain text reader."""

import pytest

from neardup.core.errors import CorpusNotFoundError, ResourceLimitError
from neardup.tools.readers import TextParser, load_corpus


class TestLoadCorpus:
    def test_files_are_loaded_in_name_order(self, dataset_dir, small_corpus):
        documents = load_corpus(dataset_dir)

        assert [doc.name for doc in documents] == ["doc_0.txt", "doc_1.txt", "doc_2.txt", "doc_3.txt"]
        assert [doc.text for doc in documents] == small_corpus
        assert [doc.index for doc in documents] == [0, 1, 2, 3]

    def test_subdirectories_are_ignored(self, dataset_dir):
        nested = dataset_dir / "nested"
        nested.mkdir()
        (nested / "inner.txt").write_text("hidden", encoding="utf-8")

        assert len(load_corpus(dataset_dir)) == 4

    def test_empty_directory(self, tmp_path):
        assert load_corpus(tmp_path) == []

    def test_missing_directory(self, tmp_path):
        with pytest.raises(CorpusNotFoundError):
            load_corpus(tmp_path / "missing")

    def test_file_instead_of_directory(self, dataset_dir):
        with pytest.raises(CorpusNotFoundError):
            load_corpus(dataset_dir / "doc_0.txt")

    def test_document_count_limit(self, dataset_dir):
        with pytest.raises(ResourceLimitError) as excinfo:
            load_corpus(dataset_dir, max_documents=3)
        assert excinfo.value.details["actual"] == 4

    def test_document_length_limit(self, dataset_dir):
        with pytest.raises(ResourceLimitError):
            load_corpus(dataset_dir, max_document_length=20)

    def test_unreadable_files_are_skipped(self, dataset_dir):
        class FailingOnSecond(TextParser):
            def parse(self, file_path):
                if file_path.endswith("doc_1.txt"):
                    return None
                return super().parse(file_path)

        documents = load_corpus(dataset_dir, parser=FailingOnSecond())

        assert [doc.name for doc in documents] == ["doc_0.txt", "doc_2.txt", "doc_3.txt"]
        assert [doc.index for doc in documents] == [0, 1, 2]


class TestTextParser:
    def test_utf8_with_bom(self, tmp_path):
        path = tmp_path / "bom.txt"
        path.write_bytes("\ufeffcafé".encode("utf-8"))

        assert TextParser().parse(str(path)) == "café"

    def test_falls_back_to_legacy_encoding(self, tmp_path):
        path = tmp_path / "legacy.txt"
        path.write_bytes("café".encode("cp1252"))

        assert TextParser().parse(str(path)) == "café"

    def test_text_is_not_normalized(self, tmp_path):
        path = tmp_path / "spaces.txt"
        path.write_bytes(b"  two  spaces\r\n")

        assert TextParser().parse(str(path)) == "  two  spaces\r\n"

    def test_missing_file_returns_none(self, tmp_path):
        assert TextParser().parse(str(tmp_path / "nope.txt")) is None

    def test_undecodable_file_returns_none(self, tmp_path):
        path = tmp_path / "legacy.txt"
        path.write_bytes("café".encode("cp1252"))

        assert TextParser(encodings=("utf-8",)).parse(str(path)) is None
