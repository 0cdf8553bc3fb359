"""Tests for spoken-English time phrasing."""

import unittest

from lit_clock.errors import InvalidTime
from lit_clock.phrases import (
    all_slots,
    contains_phrase,
    match_query,
    normalize_text,
    phrases_for,
    split_slot,
)


class TestPhrasesFor(unittest.TestCase):

    def test_known_readings(self):
        self.assertEqual(phrases_for(7, 15), ["quarter past seven"])
        self.assertEqual(phrases_for(3, 0), ["three o'clock"])
        self.assertEqual(phrases_for(12, 45), ["quarter to twelve"])
        self.assertEqual(phrases_for(1, 59), ["one minute to one"])
        self.assertEqual(phrases_for(9, 40), ["twenty minutes to ten"])

    def test_past_the_hour(self):
        self.assertEqual(phrases_for(4, 1), ["one minute past four"])
        self.assertEqual(phrases_for(4, 2), ["two minutes past four"])
        self.assertEqual(phrases_for(4, 29), ["twenty nine minutes past four"])
        self.assertEqual(phrases_for(4, 30), ["half past four"])

    def test_to_the_next_hour_wraps_twelve(self):
        self.assertEqual(phrases_for(12, 31), ["twenty nine minutes to one"])
        self.assertEqual(phrases_for(11, 58), ["two minutes to twelve"])

    def test_every_reading_has_a_phrase(self):
        count = 0
        for _slot, hour, minute in all_slots():
            phrases = phrases_for(hour, minute)
            self.assertTrue(phrases)
            self.assertTrue(all(p.strip() for p in phrases))
            count += 1
        self.assertEqual(count, 720)

    def test_out_of_range(self):
        for hour, minute in [(0, 0), (13, 0), (5, 60), (5, -1), (-1, 10)]:
            with self.assertRaises(InvalidTime):
                phrases_for(hour, minute)

    def test_invalid_time_is_a_value_error(self):
        with self.assertRaises(ValueError):
            phrases_for(12, 99)


class TestSlots(unittest.TestCase):

    def test_slot_universe(self):
        slots = [slot for slot, _h, _m in all_slots()]
        self.assertEqual(len(set(slots)), 720)
        self.assertEqual(min(slots), 100)
        self.assertEqual(max(slots), 1259)

    def test_split_slot(self):
        self.assertEqual(split_slot(715), (7, 15))
        with self.assertRaises(InvalidTime):
            split_slot(1360)


class TestMatching(unittest.TestCase):

    def test_query_strips_apostrophes_and_quotes_phrases(self):
        self.assertEqual(match_query(["three o'clock"]), '"three o clock"')
        self.assertEqual(
            match_query(["quarter past seven", "seven fifteen"]),
            '"quarter past seven" OR "seven fifteen"',
        )

    def test_normalize_text(self):
        self.assertEqual(normalize_text("Three O'Clock,  precisely!"), "three o clock precisely")

    def test_contains_phrase_ignores_case_and_punctuation(self):
        text = "It was Quarter-past Seven\nand the lamps were lit."
        self.assertTrue(contains_phrase(text, ["quarter past seven"]))
        self.assertTrue(contains_phrase("At three o’clock sharp.", ["three o'clock"]))

    def test_contains_phrase_needs_whole_words(self):
        self.assertFalse(contains_phrase("a quarter past seventeen", ["quarter past seven"]))
        self.assertFalse(contains_phrase("nothing here", ["half past two"]))


if __name__ == "__main__":
    unittest.main()
