"""
Pytest configuration and shared fixtures for the neardup test suite.

- Unit tests: the similarity core, one module per component
- Pipeline/CLI tests: small in-memory or tmp_path corpora
- API tests: FastAPI TestClient against neardup.main:app
"""

import os
import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so tests can import neardup.*
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from neardup.core.config import Settings, get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch):
    """Drop NEARDUP_* variables and the cached settings between tests."""
    for key in list(os.environ):
        if key.startswith("NEARDUP_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(min_length=3, top_k=10, _env_file=None)


@pytest.fixture
def sample_texts():
    """Strings used for property checks over every ordered pair."""
    return [
        "",
        "a",
        "abc",
        "abcdef",
        "xabcdy",
        "kitten",
        "sitting",
        "aaaaaa",
        "the quick brown fox",
        "the quick brown cat",
    ]


@pytest.fixture
def small_corpus():
    return [
        "the quick brown fox jumps over the lazy dog",
        "the quick brown fox leaps over the lazy cat",
        "lorem ipsum dolor sit amet",
        "completely unrelated words here",
    ]


@pytest.fixture
def dataset_dir(tmp_path, small_corpus):
    directory = tmp_path / "dataset"
    directory.mkdir()
    for index, text in enumerate(small_corpus):
        (directory / f"doc_{index}.txt").write_text(text, encoding="utf-8")
    return directory
