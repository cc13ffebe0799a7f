"""Utility functions for the anagram ladder engine.

Includes the signature function shared by the dictionary and the graph, and the
scoring helpers used to rank words and candidate letters.
"""

from collections import Counter
from functools import lru_cache
from typing import TypeAlias

from anagramladder.engine.config import EngineConfig
from anagramladder.engine.config import config as engine_config

TIMESTAMP_FMT = "%Y-%m-%d %H:%M:%S.%f %Z%z"

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
VOWELS = frozenset("AEIOU")

RARE_LETTERS = frozenset("JQXZ")
UNCOMMON_LETTERS = frozenset("KVWY")
RARE_LETTER_PENALTY = 1.8
UNCOMMON_LETTER_PENALTY = 0.7
DUPLICATE_LETTER_PENALTY = 0.35

Signature: TypeAlias = str
"""The letters of a word sorted into ascending order, e.g. "ACT" for "CAT"."""


@lru_cache(maxsize=300_000)
def signature(word: str) -> Signature:
    """Return the signature (sorted uppercase letters) of a word.

    Two words are anagrams of each other iff their signatures are equal.
    """
    return "".join(sorted(word.upper()))


@lru_cache(maxsize=300_000)
def get_word_counter(word: str) -> Counter[str]:
    """Return a cached Counter for a word.

    Note: the returned Counter must be treated as immutable.
    """
    return Counter(word)


def letter_penalty(word: str) -> float:
    """Score how obscure a word looks. Lower is more common/easier.

    Each J, Q, X or Z adds 1.8, each K, V, W or Y adds 0.7, and every occurrence of a
    letter beyond its first adds 0.35.
    """
    score = 0.0
    for ch in word.upper():
        if ch in RARE_LETTERS:
            score += RARE_LETTER_PENALTY
        elif ch in UNCOMMON_LETTERS:
            score += UNCOMMON_LETTER_PENALTY

    for count in get_word_counter(word.upper()).values():
        if count > 1:
            score += (count - 1) * DUPLICATE_LETTER_PENALTY

    return score


def quality_sort_key(word: str) -> tuple[float, str]:
    """Key function ordering words from most to least recognizable."""
    return (letter_penalty(word), word)


def vowel_ratio(letters: str) -> float:
    """Return the fraction of `letters` that are vowels (0.0 for an empty string)."""
    if not letters:
        return 0.0
    return sum(1 for ch in letters.upper() if ch in VOWELS) / len(letters)


def vowel_score(ratio: float, *, settings: EngineConfig = engine_config) -> float:
    """Score a vowel ratio by its distance from the ideal band.

    Returns 1.0 inside `[vowel_ratio_min, vowel_ratio_max]`, decaying linearly outside
    of it and floored at 0.
    """
    if settings.vowel_ratio_min <= ratio <= settings.vowel_ratio_max:
        return 1.0
    if ratio < settings.vowel_ratio_min:
        distance = settings.vowel_ratio_min - ratio
    else:
        distance = ratio - settings.vowel_ratio_max
    return max(0.0, 1.0 - distance * settings.vowel_penalty_rate)


def letter_frequency_score(letter: str, *, settings: EngineConfig = engine_config) -> float:
    """Return 1.0 for a high-frequency English letter, else 0.5."""
    if len(letter) != 1:
        return 0.5
    return 1.0 if letter.upper() in frozenset(settings.high_frequency_letters) else 0.5


def added_letter(shorter: str, longer: str) -> str | None:
    """Return the single letter that turns `shorter` into an anagram of `longer`.

    Returns None if `longer` is not exactly `shorter` plus one letter (as multisets).
    """
    if len(longer) != len(shorter) + 1:
        return None
    diff = get_word_counter(longer.upper()) - get_word_counter(shorter.upper())
    if diff.total() != 1:
        return None
    return next(iter(diff))


def time_str(seconds: float) -> str:
    """Convert a time duration in seconds to a human-readable string.

    Args:
        seconds: Time duration in seconds.

    Returns:
        A string formatted as "HH:MM:SS.ss".
    """
    hours, rem = divmod(seconds, 3600)
    minutes, secs = divmod(rem, 60)
    return f"{int(hours):02}:{int(minutes):02}:{secs:05.2f}"


def int_comma(n: int) -> str:
    """Format an integer with commas as thousands separators."""
    return f"{n:,}"
