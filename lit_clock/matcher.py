"""Matches every clock slot against the paragraph index."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, List, Optional

from .clock_table import ClockTable
from .errors import FetchFailure
from .fts import FullTextIndex
from .phrases import all_slots, contains_phrase, phrases_for, time_slot
from .progress import ProgressReporter
from .schemas import BookMetadata, BuildStats, ClockEntry


logger = logging.getLogger(__name__)

MetadataLoader = Callable[[str], Optional[BookMetadata]]


class MetadataCache:
    """Read-through author/title cache for one build.

    Failed lookups are remembered as misses so a book is asked for once.
    """

    def __init__(self, loader: MetadataLoader):
        self.loader = loader
        self._entries: Dict[str, Optional[BookMetadata]] = {}
        self._lock = threading.Lock()
        self.lookups = 0

    def get(self, book_id: str) -> Optional[BookMetadata]:
        with self._lock:
            if book_id in self._entries:
                return self._entries[book_id]
            self.lookups += 1
            try:
                metadata = self.loader(book_id)
            except FetchFailure as exc:
                logger.warning("No metadata for book %s: %s", book_id, exc)
                metadata = None
            self._entries[book_id] = metadata
            return metadata

    def __len__(self) -> int:
        return len(self._entries)


class ClockSlotMatcher:
    """Fills the clock table with one row per (slot, matching paragraph)."""

    def __init__(
        self,
        index: FullTextIndex,
        metadata_loader: MetadataLoader,
        progress: Optional[ProgressReporter] = None,
    ):
        self.index = index
        self.cache = MetadataCache(metadata_loader)
        self.progress = progress or ProgressReporter()

    def entries_for(self, hour: int, minute: int, stats: BuildStats) -> List[ClockEntry]:
        slot = time_slot(hour, minute)
        phrases = phrases_for(hour, minute)
        entries: List[ClockEntry] = []
        for hit in self.index.search(phrases):
            stats.hits += 1
            if not contains_phrase(hit.text, phrases):
                stats.phrase_mismatches += 1
                continue
            metadata = self.cache.get(hit.book_id)
            if metadata is None:
                stats.metadata_misses += 1
                continue
            entries.append(
                ClockEntry(
                    time_slot=slot,
                    text=hit.text,
                    author=metadata.author,
                    title=metadata.title,
                    link=hit.source_link,
                    snippet=hit.snippet,
                )
            )
        return entries

    def build(self, table: ClockTable, stats: Optional[BuildStats] = None) -> BuildStats:
        stats = stats or BuildStats()
        self.progress.start(f"Building clock db {table.db_path}", 12 * 60)
        try:
            for slot, hour, minute in all_slots():
                entries = self.entries_for(hour, minute, stats)
                stats.entries_written += table.insert_entries(entries)
                stats.slots_processed += 1
                self.progress.advance()
                if entries:
                    logger.debug("Slot %d: %d entries", slot, len(entries))
        finally:
            self.progress.finish()
        table.create_time_index()

        logger.info(
            "Clock table holds %d entries over %d slots (%d hits without metadata, %d phrase mismatches)",
            stats.entries_written,
            len(table.available_slots()),
            stats.metadata_misses,
            stats.phrase_mismatches,
        )
        return stats
