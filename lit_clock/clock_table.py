"""SQLite storage for the time-indexed clock table."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import List

from .errors import IndexFailure
from .fts import BULK_PRAGMAS
from .schemas import ClockEntry


class ClockTable:
    """Persists matched paragraphs keyed by `hour*100+minute` slots."""

    def __init__(self, db_path: str, create: bool = False):
        self.db_path = db_path
        if not create and not Path(db_path).exists():
            raise IndexFailure(f"clock table not found: {db_path}")
        try:
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
            self.conn = sqlite3.connect(db_path, check_same_thread=False)
            self.conn.row_factory = sqlite3.Row
            if create:
                self._init_schema()
        except sqlite3.Error as exc:
            raise IndexFailure(f"cannot open clock table {db_path}: {exc}") from exc

    def _init_schema(self) -> None:
        self.conn.executescript(BULK_PRAGMAS)
        self.conn.execute(
            """
            CREATE TABLE IF NOT EXISTS littime (
                id INTEGER PRIMARY KEY AUTOINCREMENT UNIQUE,
                time INTEGER NOT NULL,
                text TEXT NOT NULL,
                snippet TEXT,
                author TEXT NOT NULL,
                title TEXT NOT NULL,
                link TEXT NOT NULL
            )
            """
        )
        self.conn.commit()

    def insert_entries(self, entries: List[ClockEntry]) -> int:
        if not entries:
            return 0
        payload = [
            (entry.time_slot, entry.text, entry.snippet, entry.author, entry.title, entry.link)
            for entry in entries
        ]
        try:
            self.conn.executemany(
                "INSERT INTO littime (time, text, snippet, author, title, link) VALUES (?, ?, ?, ?, ?, ?)",
                payload,
            )
            self.conn.commit()
        except sqlite3.Error as exc:
            raise IndexFailure(f"cannot write to clock table: {exc}") from exc
        return len(payload)

    def create_time_index(self) -> None:
        try:
            self.conn.execute("CREATE INDEX IF NOT EXISTS time_idx ON littime (time ASC)")
            self.conn.commit()
        except sqlite3.Error as exc:
            raise IndexFailure(f"cannot index clock table: {exc}") from exc

    def available_slots(self) -> List[int]:
        """Distinct slots holding at least one entry, ascending."""
        try:
            rows = self.conn.execute("SELECT DISTINCT time FROM littime ORDER BY time").fetchall()
        except sqlite3.Error as exc:
            raise IndexFailure(f"cannot read clock table: {exc}") from exc
        return [int(row["time"]) for row in rows]

    def entries_for_slot(self, slot: int) -> List[ClockEntry]:
        try:
            rows = self.conn.execute(
                "SELECT time, text, snippet, author, title, link FROM littime WHERE time = ? ORDER BY id",
                (slot,),
            ).fetchall()
        except sqlite3.Error as exc:
            raise IndexFailure(f"cannot read clock table: {exc}") from exc
        return [
            ClockEntry(
                time_slot=int(row["time"]),
                text=row["text"],
                author=row["author"],
                title=row["title"],
                link=row["link"],
                snippet=row["snippet"],
            )
            for row in rows
        ]

    def count(self) -> int:
        try:
            row = self.conn.execute("SELECT COUNT(*) AS n FROM littime").fetchone()
        except sqlite3.Error as exc:
            raise IndexFailure(f"cannot read clock table: {exc}") from exc
        return int(row["n"]) if row else 0

    def close(self) -> None:
        self.conn.close()
