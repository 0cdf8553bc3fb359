"""Tests for resolving a clock time to a table entry."""

import os
import random
import tempfile
import unittest
from datetime import datetime

from lit_clock.clock_table import ClockTable
from lit_clock.errors import InvalidTime, NoMatch
from lit_clock.lookup import LookupResolver, format_clock, parse_clock_time, slot_for
from lit_clock.schemas import ClockEntry


def _entry(slot, text, title="T"):
    return ClockEntry(time_slot=slot, text=text, author="A", title=title, link="http://x")


def _at(hour, minute):
    return datetime(2024, 5, 1, hour, minute)


class TestSlotFor(unittest.TestCase):

    def test_twelve_hour_folding(self):
        self.assertEqual(slot_for(_at(0, 5)), 1205)
        self.assertEqual(slot_for(_at(12, 0)), 1200)
        self.assertEqual(slot_for(_at(19, 15)), 715)
        self.assertEqual(slot_for(_at(7, 15)), 715)

    def test_format_clock(self):
        self.assertEqual(format_clock(_at(19, 5)), "7:05")
        self.assertEqual(format_clock(_at(0, 30)), "12:30")

    def test_parse_clock_time(self):
        base = datetime(2024, 5, 1, 10, 0)
        self.assertEqual(parse_clock_time("7:15 pm", default=base), _at(19, 15))
        self.assertEqual(parse_clock_time("07:15", default=base), _at(7, 15))
        with self.assertRaises(InvalidTime):
            parse_clock_time("not a time", default=base)


class TestLookupResolver(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.table = ClockTable(os.path.join(self.tmp.name, "clock.db"), create=True)

    def tearDown(self):
        self.table.close()
        self.tmp.cleanup()

    def _fill(self, entries):
        self.table.insert_entries(entries)
        self.table.create_time_index()

    def test_empty_table_raises_no_match(self):
        with self.assertRaises(NoMatch):
            LookupResolver(self.table).resolve(_at(7, 0))

    def test_exact_slot(self):
        self._fill([_entry(300, "three"), _entry(715, "seven fifteen"), _entry(940, "nine forty")])
        self.assertEqual(LookupResolver(self.table).resolve(_at(7, 15)).text, "seven fifteen")

    def test_between_slots_takes_lower(self):
        self._fill([_entry(300, "three"), _entry(715, "seven fifteen"), _entry(940, "nine forty")])
        resolver = LookupResolver(self.table)
        self.assertEqual(resolver.resolve(_at(9, 39)).text, "seven fifteen")
        self.assertEqual(resolver.resolve(_at(23, 59)).text, "nine forty")

    def test_before_first_slot_wraps_to_last(self):
        self._fill([_entry(300, "three"), _entry(1230, "twelve thirty")])
        resolver = LookupResolver(self.table)
        self.assertEqual(resolver.resolve_slot(_at(1, 0)), 1230)
        self.assertEqual(resolver.resolve(_at(2, 59)).text, "twelve thirty")

    def test_noon_hour_follows_eleven(self):
        self._fill([_entry(1150, "ten to twelve"), _entry(1220, "twenty past twelve")])
        self.assertEqual(LookupResolver(self.table).resolve(_at(12, 5)).text, "ten to twelve")

    def test_random_choice_covers_all_rows_of_slot(self):
        self._fill([_entry(700, "first"), _entry(700, "second")])
        resolver = LookupResolver(self.table, rng=random.Random(7))
        seen = set()
        for minute in range(200):
            entry = resolver.resolve(_at(7 + (minute % 5), minute % 60))
            self.assertEqual(entry.time_slot, 700)
            seen.add(entry.text)
        self.assertEqual(seen, {"first", "second"})


if __name__ == "__main__":
    unittest.main()
