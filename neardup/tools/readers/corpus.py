"""Corpus loading: every regular file of a directory, read to a string."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from neardup.core.errors import CorpusNotFoundError, ResourceLimitError
from neardup.core.logging import get_logger, LogEvent
from .readers_base import BaseParser
from .readers_text import TextParser

logger = get_logger(__name__)


@dataclass(frozen=True)
class CorpusDocument:
    """A loaded document, identified by its position in the corpus."""
    index: int
    name: str
    path: Path
    text: str


def load_corpus(
    directory: Union[str, Path],
    *,
    max_documents: Optional[int] = None,
    max_document_length: Optional[int] = None,
    parser: Optional[BaseParser] = None,
) -> List[CorpusDocument]:
    """Read the files of ``directory`` in name order.

    Subdirectories are ignored and unreadable files are skipped. Limits are
    enforced while loading so an oversized corpus fails before any scoring.
    """
    root = Path(directory)
    if not root.is_dir():
        raise CorpusNotFoundError(str(root))

    parser = parser or TextParser()
    files = sorted((p for p in root.iterdir() if p.is_file()), key=lambda p: p.name)
    if max_documents is not None and len(files) > max_documents:
        raise ResourceLimitError("corpus size", max_documents, len(files))

    documents: List[CorpusDocument] = []
    for path in files:
        text = parser.parse(str(path))
        if text is None:
            logger.warning(LogEvent.DOCUMENT_SKIPPED, path=str(path))
            continue
        if max_document_length is not None and len(text) > max_document_length:
            raise ResourceLimitError(f"document length ({path.name})", max_document_length, len(text))
        documents.append(CorpusDocument(index=len(documents), name=path.name, path=path, text=text))

    logger.info(LogEvent.CORPUS_LOADED, directory=str(root), documents=len(documents))
    return documents
