"""Input validation and numpy views over documents."""
from __future__ import annotations

from typing import List, Sequence

import numpy as np

from neardup.core.errors import InvalidInputError
from neardup.services.types import Text


def to_codes(text: Text) -> np.ndarray:
    """Return the code units of ``text`` as a 1-D integer array."""
    if isinstance(text, (bytes, bytearray)):
        return np.frombuffer(bytes(text), dtype=np.uint8).astype(np.int64)
    return np.fromiter(map(ord, text), dtype=np.int64, count=len(text))


def validate_text(text: object, field: str) -> Text:
    if not isinstance(text, (str, bytes)):
        raise InvalidInputError(
            f"{field} must be str or bytes, got {type(text).__name__}",
            field=field,
        )
    return text


def validate_min_length(min_length: object) -> int:
    # bool is an int subclass, reject it explicitly
    if isinstance(min_length, bool) or not isinstance(min_length, int):
        raise InvalidInputError("min_length must be an integer", field="min_length", value=min_length)
    if min_length < 1:
        raise InvalidInputError("min_length must be >= 1", field="min_length", value=min_length)
    return min_length


def validate_pair(a: object, b: object) -> None:
    validate_text(a, "left")
    validate_text(b, "right")
    if type(a) is not type(b):
        raise InvalidInputError("Both documents must be of the same type (str or bytes)", field="right")


def validate_documents(documents: Sequence[Text]) -> List[Text]:
    docs = list(documents)
    for index, doc in enumerate(docs):
        validate_text(doc, f"documents[{index}]")
    if len({type(doc) for doc in docs}) > 1:
        raise InvalidInputError("Documents must all be str or all be bytes", field="documents")
    return docs
