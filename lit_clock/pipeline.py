"""Orchestration layer: build the paragraph index and clock table, then look up times."""

from __future__ import annotations

import logging
import os
import random
import time
from datetime import datetime
from pathlib import Path
from typing import Optional

from .clock_table import ClockTable
from .config import AppConfig
from .errors import IndexFailure, NoMatch
from .fts import FullTextIndex
from .gutenberg import GutenbergCatalog, TextFetcher
from .ingest import CorpusBuilder
from .lookup import LookupResolver, format_clock
from .matcher import ClockSlotMatcher
from .progress import ProgressReporter
from .schemas import BuildStats, ClockEntry, DisplayEntry


logger = logging.getLogger(__name__)

PARTIAL_SUFFIX = ".partial"


def _partial_path(path: str) -> str:
    return path + PARTIAL_SUFFIX


def _discard_partial(path: str) -> str:
    partial = _partial_path(path)
    if Path(partial).exists():
        logger.warning("Removing leftover %s from an interrupted build", partial)
        os.remove(partial)
    Path(partial).parent.mkdir(parents=True, exist_ok=True)
    return partial


class LiteraryClockPipeline:
    """High-level pipeline composed of the index, matcher and lookup modules."""

    def __init__(
        self,
        config: AppConfig,
        catalog: Optional[GutenbergCatalog] = None,
        fetcher: Optional[TextFetcher] = None,
        progress: Optional[ProgressReporter] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config
        self._catalog = catalog
        self._fetcher = fetcher
        self.progress = progress or ProgressReporter()
        self.rng = rng
        self._table: Optional[ClockTable] = None

    @property
    def catalog(self) -> GutenbergCatalog:
        if self._catalog is None:
            self._catalog = GutenbergCatalog(self.config.paths.catalog_path)
        return self._catalog

    @property
    def fetcher(self) -> TextFetcher:
        if self._fetcher is None:
            self._fetcher = TextFetcher(self.config.fetch)
        return self._fetcher

    def build(self) -> BuildStats:
        """Build whichever artifacts are missing; present ones are left untouched."""
        stats = BuildStats()
        paths = self.config.paths

        if Path(paths.fts_path).exists():
            logger.info("Full-text index %s exists, skipping", paths.fts_path)
        else:
            self._build_fts(stats)

        if Path(paths.clock_path).exists():
            logger.info("Clock table %s exists, skipping", paths.clock_path)
        else:
            self._build_clock(stats)
        return stats

    def _build_fts(self, stats: BuildStats) -> None:
        target = self.config.paths.fts_path
        partial = _discard_partial(target)
        started = time.monotonic()

        builder = CorpusBuilder(
            catalog=self.catalog,
            fetcher=self.fetcher,
            config=self.config.corpus,
            progress=self.progress,
        )
        index = FullTextIndex(partial, self.config.index, create=True)
        try:
            builder.build(index, stats)
        finally:
            index.close()

        os.replace(partial, target)
        stats.fts_built = True
        logger.info("Published %s in %.1fs", target, time.monotonic() - started)

    def _build_clock(self, stats: BuildStats) -> None:
        target = self.config.paths.clock_path
        partial = _discard_partial(target)
        started = time.monotonic()

        index = FullTextIndex(self.config.paths.fts_path, self.config.index)
        table = ClockTable(partial, create=True)
        try:
            matcher = ClockSlotMatcher(index, self.catalog.get_metadata, progress=self.progress)
            matcher.build(table, stats)
        finally:
            table.close()
            index.close()

        os.replace(partial, target)
        stats.clock_built = True
        logger.info("Published %s in %.1fs", target, time.monotonic() - started)

    @property
    def table(self) -> ClockTable:
        if self._table is None:
            self._table = ClockTable(self.config.paths.clock_path)
        return self._table

    def resolve(self, now: Optional[datetime] = None) -> ClockEntry:
        """Random entry for the latest populated slot at or before `now`; raises NoMatch."""
        resolver = LookupResolver(self.table, rng=self.rng)
        return resolver.resolve(now or datetime.now())

    def current_entry(self, now: Optional[datetime] = None) -> Optional[DisplayEntry]:
        """What to display for `now`, or None when there is nothing to show."""
        now = now or datetime.now()
        try:
            entry = self.resolve(now)
        except NoMatch as exc:
            logger.info("Nothing to display at %s: %s", format_clock(now), exc)
            return None
        except IndexFailure as exc:
            logger.warning("Clock table unavailable at %s: %s", format_clock(now), exc)
            return None
        return DisplayEntry(
            time=format_clock(now),
            paragraph=entry.text,
            title=entry.title,
            author=entry.author,
            link=entry.link,
        )

    def close(self) -> None:
        if self._table is not None:
            self._table.close()
            self._table = None
        if self._catalog is not None and hasattr(self._catalog, "close"):
            self._catalog.close()
