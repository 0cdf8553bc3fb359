"""Paragraph extraction from book texts into the full-text index."""

from __future__ import annotations

import logging
import re
from typing import Callable, List, Optional

from .config import CorpusConfig
from .errors import FetchFailure
from .fts import FullTextIndex
from .gutenberg import GutenbergCatalog, TextFetcher, strip_headers
from .progress import ProgressReporter
from .schemas import BuildStats, Paragraph


logger = logging.getLogger(__name__)

BLANK_LINE_RE = re.compile(r"\n[ \t]*\n")


def _normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def split_paragraphs(text: str, min_chars: int = 64) -> List[str]:
    """Split on blank lines, join wrapped lines and drop short paragraphs."""
    paragraphs: List[str] = []
    for block in BLANK_LINE_RE.split(_normalize_newlines(text)):
        paragraph = " ".join(line.strip() for line in block.split("\n") if line.strip())
        if len(paragraph) < min_chars:
            continue
        paragraphs.append(paragraph)
    return paragraphs


class CorpusBuilder:
    """Fetches each candidate book and writes its paragraphs to the index."""

    def __init__(
        self,
        catalog: GutenbergCatalog,
        fetcher: TextFetcher,
        config: CorpusConfig,
        stripper: Callable[[str], str] = strip_headers,
        progress: Optional[ProgressReporter] = None,
    ):
        self.catalog = catalog
        self.fetcher = fetcher
        self.config = config
        self.stripper = stripper
        self.progress = progress or ProgressReporter()

    def candidate_books(self) -> List[str]:
        books = self.catalog.query_books(self.config.language, self.config.bookshelves)
        if self.config.max_books is not None:
            books = books[: self.config.max_books]
        return books

    def book_paragraphs(self, book_id: str, link: str) -> List[Paragraph]:
        raw = self.fetcher.get_text(book_id, link)
        body = self.stripper(raw)
        return [
            Paragraph(book_id=book_id, source_link=link, text=text)
            for text in split_paragraphs(body, self.config.min_paragraph_chars)
        ]

    def build(self, index: FullTextIndex, stats: Optional[BuildStats] = None) -> BuildStats:
        """Index every candidate book; per-book failures are recorded and skipped."""
        stats = stats or BuildStats()
        books = self.candidate_books()
        logger.info("Indexing paragraphs from %d candidate books", len(books))

        self.progress.start("Building full text search db", len(books))
        try:
            for book_id in books:
                stats.books_seen += 1
                self.progress.advance()

                links = self.catalog.get_download_links(book_id)
                if not links:
                    stats.skip_book(book_id, "no text link")
                    logger.info("Skipping book %s: no plain-text link", book_id)
                    continue

                link = links[0]
                try:
                    paragraphs = self.book_paragraphs(book_id, link)
                except FetchFailure as exc:
                    stats.skip_book(book_id, str(exc))
                    logger.warning("Skipping book %s: %s", book_id, exc)
                    continue

                stats.paragraphs_indexed += index.add_paragraphs(paragraphs)
                stats.books_indexed += 1
        finally:
            self.progress.finish()

        logger.info(
            "Indexed %d paragraphs from %d books (%d skipped)",
            stats.paragraphs_indexed,
            stats.books_indexed,
            len(stats.books_skipped),
        )
        return stats
