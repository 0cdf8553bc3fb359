"""Core data structures shared across modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass(frozen=True)
class Paragraph:
    """One searchable unit of book text."""

    book_id: str
    source_link: str
    text: str


@dataclass(frozen=True)
class BookMetadata:
    author: str
    title: str


@dataclass(frozen=True)
class SearchHit:
    """A full-text match: decoded key, whole paragraph and highlighted excerpt."""

    book_id: str
    source_link: str
    text: str
    snippet: str


@dataclass(frozen=True)
class ClockEntry:
    """Row of the clock table."""

    time_slot: int
    text: str
    author: str
    title: str
    link: str
    snippet: Optional[str] = None


@dataclass(frozen=True)
class DisplayEntry:
    """What a renderer needs to show the literary time."""

    time: str
    paragraph: str
    title: str
    author: str
    link: str


@dataclass
class BuildStats:
    """Counters collected while building the index and the clock table."""

    books_seen: int = 0
    books_indexed: int = 0
    books_skipped: Dict[str, str] = field(default_factory=dict)
    paragraphs_indexed: int = 0
    slots_processed: int = 0
    hits: int = 0
    entries_written: int = 0
    metadata_misses: int = 0
    phrase_mismatches: int = 0
    fts_built: bool = False
    clock_built: bool = False

    def skip_book(self, book_id: str, reason: str) -> None:
        self.books_skipped[book_id] = reason

    def as_dict(self) -> Dict[str, object]:
        return {
            "books_seen": self.books_seen,
            "books_indexed": self.books_indexed,
            "books_skipped": len(self.books_skipped),
            "paragraphs_indexed": self.paragraphs_indexed,
            "slots_processed": self.slots_processed,
            "hits": self.hits,
            "entries_written": self.entries_written,
            "metadata_misses": self.metadata_misses,
            "phrase_mismatches": self.phrase_mismatches,
            "fts_built": self.fts_built,
            "clock_built": self.clock_built,
        }
