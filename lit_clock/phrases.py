"""Spoken-English phrasing of clock times."""

from __future__ import annotations

import re
from typing import Iterator, List, Sequence, Tuple

from .errors import InvalidTime


NUMBER_WORDS = [
    "zero",
    "one",
    "two",
    "three",
    "four",
    "five",
    "six",
    "seven",
    "eight",
    "nine",
    "ten",
    "eleven",
    "twelve",
    "thirteen",
    "fourteen",
    "fifteen",
    "sixteen",
    "seventeen",
    "eighteen",
    "nineteen",
    "twenty",
    "twenty one",
    "twenty two",
    "twenty three",
    "twenty four",
    "twenty five",
    "twenty six",
    "twenty seven",
    "twenty eight",
    "twenty nine",
]

_NON_WORD_RE = re.compile(r"[^0-9a-z]+")


def _spoken_time(hour: int, minute: int) -> str:
    hour_words = NUMBER_WORDS[hour]
    if minute == 0:
        return f"{hour_words} o'clock"
    if minute == 1:
        return f"one minute past {hour_words}"
    if minute == 59:
        return f"one minute to {hour_words}"
    if minute == 15:
        return f"quarter past {hour_words}"
    if minute == 30:
        return f"half past {hour_words}"
    if minute == 45:
        return f"quarter to {hour_words}"
    if minute < 30:
        return f"{NUMBER_WORDS[minute]} minutes past {hour_words}"
    next_hour = (hour % 12) + 1
    return f"{NUMBER_WORDS[60 - minute]} minutes to {NUMBER_WORDS[next_hour]}"


def phrases_for(hour: int, minute: int) -> List[str]:
    """Return the spoken phrase variants for a 12-hour clock reading."""
    if not 1 <= hour <= 12:
        raise InvalidTime(f"hour must be in 1..12, got {hour!r}")
    if not 0 <= minute <= 59:
        raise InvalidTime(f"minute must be in 0..59, got {minute!r}")
    return [_spoken_time(hour, minute)]


def time_slot(hour: int, minute: int) -> int:
    return hour * 100 + minute


def split_slot(slot: int) -> Tuple[int, int]:
    hour, minute = divmod(slot, 100)
    if not 1 <= hour <= 12 or not 0 <= minute <= 59:
        raise InvalidTime(f"{slot!r} is not a clock slot")
    return hour, minute


def all_slots() -> Iterator[Tuple[int, int, int]]:
    """Yield (slot, hour, minute) for all 720 readings of a 12-hour clock."""
    for hour in range(1, 13):
        for minute in range(60):
            yield time_slot(hour, minute), hour, minute


def normalize_text(text: str) -> str:
    """Lowercase and collapse punctuation/whitespace runs to single spaces."""
    return " ".join(_NON_WORD_RE.sub(" ", text.lower()).split())


def contains_phrase(text: str, phrases: Sequence[str]) -> bool:
    """True if any phrase occurs in text as whole words, ignoring case and punctuation."""
    haystack = f" {normalize_text(text)} "
    for phrase in phrases:
        needle = normalize_text(phrase)
        if needle and f" {needle} " in haystack:
            return True
    return False


def match_query(phrases: Sequence[str]) -> str:
    """Build an FTS5 disjunction of exact-phrase terms."""
    terms = []
    for phrase in phrases:
        cleaned = " ".join(phrase.replace("'", " ").replace('"', " ").split())
        if cleaned:
            terms.append(f'"{cleaned}"')
    return " OR ".join(terms)
