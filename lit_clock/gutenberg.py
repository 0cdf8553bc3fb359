"""Adapters over the Project Gutenberg book cache and text mirror."""

from __future__ import annotations

import logging
import re
import sqlite3
from pathlib import Path
from typing import List, Optional, Sequence

import requests

from .config import FetchConfig
from .errors import FetchFailure, IndexFailure
from .schemas import BookMetadata


logger = logging.getLogger(__name__)

# Tables of the book cache produced by the external cache builder.
CATALOG_SCHEMA = """
CREATE TABLE IF NOT EXISTS books (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    gutenbergbookid INTEGER NOT NULL UNIQUE,
    numdownloads INTEGER DEFAULT 0
);
CREATE TABLE IF NOT EXISTS titles (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT, bookid INTEGER);
CREATE TABLE IF NOT EXISTS authors (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT UNIQUE);
CREATE TABLE IF NOT EXISTS book_authors (id INTEGER PRIMARY KEY AUTOINCREMENT, bookid INTEGER, authorid INTEGER);
CREATE TABLE IF NOT EXISTS languages (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT UNIQUE);
CREATE TABLE IF NOT EXISTS book_languages (id INTEGER PRIMARY KEY AUTOINCREMENT, bookid INTEGER, languageid INTEGER);
CREATE TABLE IF NOT EXISTS bookshelves (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT UNIQUE);
CREATE TABLE IF NOT EXISTS book_bookshelves (id INTEGER PRIMARY KEY AUTOINCREMENT, bookid INTEGER, bookshelfid INTEGER);
CREATE TABLE IF NOT EXISTS downloadtypes (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT UNIQUE);
CREATE TABLE IF NOT EXISTS downloadlinks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT,
    bookid INTEGER,
    downloadtypeid INTEGER
);
"""

START_MARKERS = re.compile(
    r"^\s*\*{3}\s*START OF (THE|THIS) PROJECT GUTENBERG EBOOK.*$",
    re.IGNORECASE | re.MULTILINE,
)
END_MARKERS = re.compile(
    r"^\s*(\*{3}\s*END OF (THE|THIS) PROJECT GUTENBERG EBOOK|End of (the )?Project Gutenberg).*$",
    re.IGNORECASE | re.MULTILINE,
)


def strip_headers(text: str) -> str:
    """Drop the license preamble and trailer around a Gutenberg text."""
    start = START_MARKERS.search(text)
    if start:
        text = text[start.end():]
    end = END_MARKERS.search(text)
    if end:
        text = text[: end.start()]
    return text.strip()


class GutenbergCatalog:
    """Read-only queries against the cached Gutenberg catalog."""

    def __init__(self, db_path: str):
        if not Path(db_path).exists():
            raise FileNotFoundError(f"Gutenberg catalog cache not found: {db_path}")
        self.conn = sqlite3.connect(f"file:{db_path}?mode=ro", uri=True, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row

    def query_books(self, language: str, bookshelves: Sequence[str]) -> List[str]:
        """Gutenberg ids of books in `language` shelved under any of `bookshelves`."""
        if not bookshelves:
            return []
        placeholders = ",".join("?" for _ in bookshelves)
        try:
            rows = self.conn.execute(
                f"""
                SELECT DISTINCT books.gutenbergbookid AS gid
                FROM books
                JOIN book_languages ON book_languages.bookid = books.id
                JOIN languages ON languages.id = book_languages.languageid
                JOIN book_bookshelves ON book_bookshelves.bookid = books.id
                JOIN bookshelves ON bookshelves.id = book_bookshelves.bookshelfid
                WHERE languages.name = ?
                AND bookshelves.name IN ({placeholders})
                ORDER BY books.gutenbergbookid
                """,
                [language, *bookshelves],
            ).fetchall()
        except sqlite3.Error as exc:
            raise IndexFailure(f"catalog query failed: {exc}") from exc
        return [str(row["gid"]) for row in rows]

    def get_download_links(self, book_id: str) -> List[str]:
        """Plain-text download links for a book, UTF-8 variants first."""
        try:
            rows = self.conn.execute(
                """
                SELECT downloadlinks.name AS link, downloadtypes.name AS kind
                FROM downloadlinks
                JOIN books ON books.id = downloadlinks.bookid
                JOIN downloadtypes ON downloadtypes.id = downloadlinks.downloadtypeid
                WHERE books.gutenbergbookid = ?
                AND downloadtypes.name LIKE 'text/plain%'
                ORDER BY CASE WHEN downloadtypes.name LIKE '%utf-8%' THEN 0 ELSE 1 END, downloadlinks.id
                """,
                (int(book_id),),
            ).fetchall()
        except sqlite3.Error as exc:
            raise IndexFailure(f"download link lookup for book {book_id} failed: {exc}") from exc
        return [row["link"] for row in rows]

    def get_metadata(self, book_id: str) -> Optional[BookMetadata]:
        try:
            row = self.conn.execute(
                """
                SELECT titles.name AS title, authors.name AS author
                FROM titles, books, authors, book_authors
                WHERE books.id = book_authors.bookid
                AND authors.id = book_authors.authorid
                AND titles.bookid = books.id
                AND books.gutenbergbookid = ?
                ORDER BY titles.id, book_authors.id
                LIMIT 1
                """,
                (int(book_id),),
            ).fetchone()
        except (sqlite3.Error, ValueError) as exc:
            raise FetchFailure(f"metadata lookup for book {book_id} failed: {exc}") from exc
        if row is None:
            return None
        return BookMetadata(author=row["author"], title=row["title"])

    def close(self) -> None:
        self.conn.close()


class TextFetcher:
    """Downloads raw book texts over HTTP."""

    def __init__(self, config: Optional[FetchConfig] = None, session: Optional[requests.Session] = None):
        self.config = config or FetchConfig()
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = self.config.user_agent

    def get_text(self, book_id: str, link: str) -> str:
        try:
            resp = self.session.get(link, timeout=self.config.timeout_seconds)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise FetchFailure(f"download of book {book_id} from {link} failed: {exc}") from exc
        if "charset" not in (resp.headers.get("Content-Type") or "").lower():
            # requests assumes ISO-8859-1 for text/* without a charset
            resp.encoding = resp.apparent_encoding
        return resp.text
