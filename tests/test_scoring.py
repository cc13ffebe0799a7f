"""Tests for the word and letter scoring helpers."""

import pytest

from anagramladder.engine.config import EngineConfig
from anagramladder.engine.utils import (
    added_letter,
    int_comma,
    letter_frequency_score,
    letter_penalty,
    quality_sort_key,
    signature,
    time_str,
    vowel_ratio,
    vowel_score,
)


class TestSignature:
    """Test cases for signatures."""

    def test_sorted_uppercase(self):
        """A signature is the sorted uppercase letters."""
        assert signature("cat") == "ACT"
        assert signature("MATTRESS") == "AEMRSSTT"

    def test_anagrams_share_signature(self):
        """Same multiset, same signature."""
        assert signature("LISTEN") == signature("SILENT")

    def test_different_multisets_differ(self):
        """Repeated letters count."""
        assert signature("GOD") != signature("GOOD")


class TestLetterPenalty:
    """Test cases for letter_penalty."""

    def test_common_word_is_free(self):
        """Common distinct letters have no penalty."""
        assert letter_penalty("CRATE") == 0.0

    def test_rare_letters(self):
        """Each J, Q, X or Z adds 1.8."""
        assert letter_penalty("QUIT") == pytest.approx(1.8)
        assert letter_penalty("JINX") == pytest.approx(3.6)

    def test_uncommon_letters(self):
        """Each K, V, W or Y adds 0.7."""
        assert letter_penalty("WAY") == pytest.approx(1.4)

    def test_duplicates(self):
        """Each extra occurrence of a letter adds 0.35."""
        assert letter_penalty("GOOD") == pytest.approx(0.35)
        assert letter_penalty("EERIE") == pytest.approx(0.7)

    def test_combined(self):
        """Rare letters and duplicates add up."""
        assert letter_penalty("JAZZ") == pytest.approx(1.8 + 3.6 + 0.35)

    def test_case_insensitive(self):
        """Lowercase words score the same."""
        assert letter_penalty("jazz") == letter_penalty("JAZZ")

    @pytest.mark.parametrize("base, extra", [("CAT", "Z"), ("CAT", "K"), ("CAT", "T"), ("GOOD", "O")])
    def test_monotonic(self, base, extra):
        """Adding a rare/uncommon letter or a duplicate never lowers the penalty."""
        assert letter_penalty(base + extra) > letter_penalty(base)

    def test_quality_sort_key(self):
        """Lower penalty first, then alphabetical."""
        assert sorted(["ZEST", "STEW", "SETS", "REST"], key=quality_sort_key) == [
            "REST", "SETS", "STEW", "ZEST",
        ]


class TestLetterScores:
    """Test cases for vowel and frequency scores."""

    def test_vowel_ratio(self):
        """Fraction of vowels."""
        assert vowel_ratio("CART") == 0.25
        assert vowel_ratio("AEIOU") == 1.0
        assert vowel_ratio("") == 0.0

    def test_vowel_score_in_band(self):
        """Ratios within [0.30, 0.45] score 1.0."""
        settings = EngineConfig(_env_file=None)
        assert vowel_score(0.30, settings=settings) == 1.0
        assert vowel_score(0.40, settings=settings) == 1.0
        assert vowel_score(0.45, settings=settings) == 1.0

    def test_vowel_score_decay(self):
        """Outside the band the score decays at 2.5 per unit, floored at 0."""
        settings = EngineConfig(_env_file=None)
        assert vowel_score(0.25, settings=settings) == pytest.approx(0.875)
        assert vowel_score(0.50, settings=settings) == pytest.approx(0.875)
        assert vowel_score(1.0, settings=settings) == 0.0
        assert vowel_score(0.0, settings=settings) == pytest.approx(0.25)

    def test_letter_frequency_score(self):
        """High-frequency letters score 1.0, others 0.5."""
        assert letter_frequency_score("E") == 1.0
        assert letter_frequency_score("u") == 1.0
        assert letter_frequency_score("M") == 0.5
        assert letter_frequency_score("Z") == 0.5

    def test_letter_frequency_score_single_letters_only(self):
        """Empty strings and runs of letters are not high-frequency letters."""
        assert letter_frequency_score("") == 0.5
        assert letter_frequency_score("ET") == 0.5
        assert letter_frequency_score("ETA") == 0.5


class TestHelpers:
    """Test cases for the remaining helpers."""

    def test_added_letter(self):
        """The letter added between two rungs is found by multiset difference."""
        assert added_letter("CAT", "CART") == "R"
        assert added_letter("MASTERS", "MATTRESS") == "T"
        assert added_letter("DOG", "GOOD") == "O"

    def test_added_letter_not_a_step(self):
        """Words that are not one letter apart give None."""
        assert added_letter("CAT", "DOGS") is None
        assert added_letter("CAT", "CATER") is None

    def test_formatting(self):
        """Durations and counts are human-readable."""
        assert time_str(3725.5) == "01:02:05.50"
        assert int_comma(1234567) == "1,234,567"
