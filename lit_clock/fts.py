"""SQLite FTS5 paragraph index."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from .config import IndexConfig
from .errors import IndexFailure, KeyFormatError
from .keys import decode_key, encode_key
from .phrases import match_query
from .schemas import Paragraph, SearchHit


logger = logging.getLogger(__name__)

BULK_PRAGMAS = (
    "PRAGMA journal_mode = OFF;"
    "PRAGMA synchronous = 0;"
    "PRAGMA cache_size = 1000000;"
    "PRAGMA locking_mode = EXCLUSIVE;"
    "PRAGMA temp_store = MEMORY;"
)


class FullTextIndex:
    """Write-once, read-many paragraph index keyed by composite book/link keys."""

    def __init__(self, db_path: str, config: Optional[IndexConfig] = None, create: bool = False):
        self.db_path = db_path
        self.config = config or IndexConfig()
        if not create and not Path(db_path).exists():
            raise IndexFailure(f"full-text index not found: {db_path}")
        try:
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
            self.conn = sqlite3.connect(db_path)
            if create:
                self.conn.executescript(BULK_PRAGMAS)
                self.conn.execute(
                    "CREATE VIRTUAL TABLE IF NOT EXISTS paragraphs USING fts5(key UNINDEXED, text)"
                )
                self.conn.commit()
        except sqlite3.Error as exc:
            raise IndexFailure(f"cannot open full-text index {db_path}: {exc}") from exc

    def add_paragraphs(self, paragraphs: Iterable[Paragraph]) -> int:
        payload = [
            (encode_key(p.book_id, p.source_link), p.text)
            for p in paragraphs
        ]
        if not payload:
            return 0
        try:
            self.conn.executemany("INSERT INTO paragraphs(key, text) VALUES (?, ?)", payload)
            self.conn.commit()
        except sqlite3.Error as exc:
            raise IndexFailure(f"cannot write to full-text index: {exc}") from exc
        return len(payload)

    def search(self, phrases: Sequence[str]) -> List[SearchHit]:
        """Return every paragraph containing any of the phrases verbatim."""
        query = match_query(phrases)
        if not query:
            return []
        cfg = self.config
        sql = """
            SELECT key, text, snippet(paragraphs, 1, ?, ?, ?, ?)
            FROM paragraphs
            WHERE paragraphs MATCH ?
        """
        params = (
            cfg.highlight_open,
            cfg.highlight_close,
            cfg.snippet_ellipsis,
            cfg.snippet_tokens,
            query,
        )
        try:
            rows = self.conn.execute(sql, params).fetchall()
        except sqlite3.Error as exc:
            raise IndexFailure(f"full-text query {query!r} failed: {exc}") from exc

        hits: List[SearchHit] = []
        for key, text, snippet in rows:
            try:
                book_id, link = decode_key(key)
            except KeyFormatError:
                logger.warning("Skipping paragraph with malformed key %r", key)
                continue
            hits.append(SearchHit(book_id=book_id, source_link=link, text=text, snippet=snippet))
        return hits

    def count(self) -> int:
        try:
            row = self.conn.execute("SELECT COUNT(*) FROM paragraphs").fetchone()
        except sqlite3.Error as exc:
            raise IndexFailure(f"cannot read full-text index: {exc}") from exc
        return int(row[0]) if row else 0

    def close(self) -> None:
        self.conn.close()
