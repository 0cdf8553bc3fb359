"""Shared fixtures: a small on-disk catalog and an offline text source."""

from __future__ import annotations

import sqlite3
from typing import Dict, Iterable, List, Optional

from lit_clock.errors import FetchFailure
from lit_clock.gutenberg import CATALOG_SCHEMA


def _id_for(conn: sqlite3.Connection, table: str, name: str) -> int:
    conn.execute(f"INSERT OR IGNORE INTO {table} (name) VALUES (?)", (name,))
    return conn.execute(f"SELECT id FROM {table} WHERE name = ?", (name,)).fetchone()[0]


def make_catalog(path: str, books: Iterable[Dict]) -> str:
    """Write a book cache holding `books`.

    Each book is a dict with gid, title, author (optional), language, shelves
    and links as (url, mime type) pairs.
    """
    conn = sqlite3.connect(path)
    conn.executescript(CATALOG_SCHEMA)
    for book in books:
        cur = conn.execute("INSERT INTO books (gutenbergbookid) VALUES (?)", (book["gid"],))
        book_row = cur.lastrowid
        conn.execute("INSERT INTO titles (name, bookid) VALUES (?, ?)", (book["title"], book_row))
        if book.get("author"):
            author_id = _id_for(conn, "authors", book["author"])
            conn.execute(
                "INSERT INTO book_authors (bookid, authorid) VALUES (?, ?)", (book_row, author_id)
            )
        language_id = _id_for(conn, "languages", book.get("language", "en"))
        conn.execute(
            "INSERT INTO book_languages (bookid, languageid) VALUES (?, ?)", (book_row, language_id)
        )
        for shelf in book.get("shelves", []):
            shelf_id = _id_for(conn, "bookshelves", shelf)
            conn.execute(
                "INSERT INTO book_bookshelves (bookid, bookshelfid) VALUES (?, ?)", (book_row, shelf_id)
            )
        for url, kind in book.get("links", []):
            type_id = _id_for(conn, "downloadtypes", kind)
            conn.execute(
                "INSERT INTO downloadlinks (name, bookid, downloadtypeid) VALUES (?, ?, ?)",
                (url, book_row, type_id),
            )
    conn.commit()
    conn.close()
    return path


class FakeFetcher:
    """Serves book texts from memory; links in `failing` raise FetchFailure."""

    def __init__(self, texts: Dict[str, str], failing: Optional[Iterable[str]] = None):
        self.texts = texts
        self.failing = set(failing or [])
        self.calls: List[str] = []

    def get_text(self, book_id: str, link: str) -> str:
        self.calls.append(link)
        if link in self.failing or link not in self.texts:
            raise FetchFailure(f"cannot fetch {link}")
        return self.texts[link]


def gutenberg_text(*paragraphs: str) -> str:
    body = "\r\n\r\n".join(paragraphs)
    return (
        "The Project Gutenberg eBook of Something\r\n\r\n"
        "This eBook is for the use of anyone anywhere in the United States.\r\n\r\n"
        "*** START OF THE PROJECT GUTENBERG EBOOK SOMETHING ***\r\n\r\n"
        f"{body}\r\n\r\n"
        "*** END OF THE PROJECT GUTENBERG EBOOK SOMETHING ***\r\n\r\n"
        "Section 1. General Terms of Use and Redistributing Project Gutenberg electronic works.\r\n"
    )
