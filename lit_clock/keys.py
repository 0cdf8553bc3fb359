"""Composite `$<book id>$<source link>$` keys for indexed paragraphs."""

from __future__ import annotations

from typing import Tuple

from .errors import KeyFormatError


DELIMITER = "$"


def encode_key(book_id: str, source_link: str) -> str:
    book_id = str(book_id)
    if not book_id or DELIMITER in book_id:
        raise KeyFormatError(f"book id {book_id!r} cannot be framed")
    return f"{DELIMITER}{book_id}{DELIMITER}{source_link}{DELIMITER}"


def decode_key(key: str) -> Tuple[str, str]:
    """Split a key back into (book_id, source_link).

    Book ids never contain the delimiter, so only the first inner one is a
    field boundary and links holding `$` survive intact.
    """
    if len(key) < 3 or not key.startswith(DELIMITER) or not key.endswith(DELIMITER):
        raise KeyFormatError(f"malformed paragraph key {key!r}")
    book_id, sep, source_link = key[1:-1].partition(DELIMITER)
    if not sep or not book_id:
        raise KeyFormatError(f"malformed paragraph key {key!r}")
    return book_id, source_link
