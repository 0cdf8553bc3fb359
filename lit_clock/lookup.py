"""Resolves the current time to a paragraph from the clock table."""

from __future__ import annotations

import random
from bisect import bisect_right
from datetime import datetime
from typing import Optional

from dateutil import parser as dt_parser

from .clock_table import ClockTable
from .errors import InvalidTime, NoMatch
from .schemas import ClockEntry


def hour12(hour: int) -> int:
    return hour % 12 or 12


def slot_for(now: datetime) -> int:
    return hour12(now.hour) * 100 + now.minute


def format_clock(now: datetime) -> str:
    return f"{hour12(now.hour)}:{now.minute:02d}"


def parse_clock_time(value: str, default: Optional[datetime] = None) -> datetime:
    """Parse "7:15", "19:15" or "7:15 pm" onto today's date."""
    base = (default or datetime.now()).replace(second=0, microsecond=0)
    try:
        return dt_parser.parse(value, default=base)
    except (ValueError, OverflowError) as exc:
        raise InvalidTime(f"cannot parse clock time {value!r}") from exc


class LookupResolver:
    """Picks a random entry from the latest populated slot at or before now."""

    def __init__(self, table: ClockTable, rng: Optional[random.Random] = None):
        self.table = table
        self.rng = rng or random.Random()

    def resolve_slot(self, now: datetime) -> int:
        slots = self.table.available_slots()
        if not slots:
            raise NoMatch("the clock table is empty")
        position = bisect_right(slots, slot_for(now))
        if position == 0:
            # Earlier than every slot: the previous one is the last slot of the cycle.
            return slots[-1]
        return slots[position - 1]

    def resolve(self, now: datetime) -> ClockEntry:
        slot = self.resolve_slot(now)
        entries = self.table.entries_for_slot(slot)
        if not entries:
            raise NoMatch(f"no entries for slot {slot}")
        return self.rng.choice(entries)
