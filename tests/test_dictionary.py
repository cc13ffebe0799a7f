"""Tests for the Dictionary: loading, membership and anagram queries."""

from itertools import permutations

import pytest

from anagramladder.dictionary import MAX_SEARCH_LETTERS, Dictionary, SourceUnavailable, word_list_file
from anagramladder.engine.utils import signature

from .conftest import WORDS


class TestLoading:
    """Test cases for loading word lists."""

    def test_tokens_are_trimmed_and_uppercased(self):
        """Whitespace is trimmed and words are uppercased."""
        dictionary = Dictionary.from_words(["  cat ", "Dog\n", "\tact"])
        assert dictionary.all_words() == ["ACT", "CAT", "DOG"]

    def test_empty_tokens_discarded(self):
        """Blank lines do not become words."""
        dictionary = Dictionary.from_words(["", "   ", "CAT", "\n"])
        assert len(dictionary) == 1

    def test_duplicates_inserted_once(self):
        """Loading the same word twice (in any case) is idempotent."""
        dictionary = Dictionary()
        assert dictionary.load(["CAT", "cat", "Cat"]) == 1
        assert dictionary.load(["CAT"]) == 0
        assert len(dictionary) == 1
        assert dictionary.find_anagrams("CAT") == ["CAT"]

    def test_load_string_splits_lines(self):
        """A plain string is treated as newline-delimited text."""
        dictionary = Dictionary()
        dictionary.load("cat\nact\n\ndog\n")
        assert dictionary.all_words() == ["ACT", "CAT", "DOG"]

    def test_length_filters(self):
        """min_len and max_len restrict the loaded words."""
        dictionary = Dictionary()
        dictionary.load(WORDS, min_len=3, max_len=4)
        assert not dictionary.contains("A")
        assert not dictionary.contains("TRACE")
        assert dictionary.contains("CART")

    def test_load_file(self, word_file):
        """A word list file is loaded in full."""
        dictionary = Dictionary.from_file(word_file)
        assert len(dictionary) == len(set(WORDS))
        assert dictionary.contains("mattress")

    def test_missing_file(self, tmp_path):
        """A missing word list raises SourceUnavailable."""
        with pytest.raises(SourceUnavailable, match="not found"):
            Dictionary.from_file(tmp_path / "nope.txt")

    def test_word_list_file(self, word_file, tmp_path):
        """Word list paths are checked without reading them."""
        assert word_list_file(str(word_file)) == word_file
        with pytest.raises(SourceUnavailable, match="not found"):
            word_list_file(tmp_path / "nope.txt")

    def test_directory_is_not_a_word_list(self, tmp_path):
        """A directory path raises SourceUnavailable."""
        with pytest.raises(SourceUnavailable):
            Dictionary.from_file(tmp_path)

    def test_undecodable_file_leaves_dictionary_unchanged(self, tmp_path):
        """An invalid UTF-8 file fails without a partial load."""
        path = tmp_path / "bad.txt"
        path.write_bytes(b"CAT\nDOG\n\xff\xfe\xfa\nACT\n")
        dictionary = Dictionary.from_words(["EAT"])
        with pytest.raises(SourceUnavailable):
            dictionary.load_file(path)
        assert dictionary.all_words() == ["EAT"]

    def test_source_unavailable_is_an_os_error(self):
        """SourceUnavailable can be handled as an OSError."""
        assert issubclass(SourceUnavailable, OSError)


class TestContains:
    """Test cases for membership."""

    def test_inserted_words_are_contained(self, dictionary):
        """Every inserted word is contained."""
        assert all(dictionary.contains(word) for word in WORDS)

    def test_case_insensitive(self, dictionary):
        """Membership ignores case."""
        assert dictionary.contains("cat")
        assert dictionary.contains("MaTtReSs")
        assert "cart" in dictionary

    def test_empty_word_never_contained(self, dictionary):
        """The empty word is not a word."""
        assert not dictionary.contains("")
        assert "" not in dictionary

    def test_non_word_permutations_not_contained(self, dictionary):
        """Permutations of a word that are not in the list are rejected."""
        for perm in {"".join(p) for p in permutations("CART")}:
            assert dictionary.contains(perm) == (perm == "CART")

    def test_non_string_not_contained(self, dictionary):
        """The `in` operator tolerates non-strings."""
        assert 42 not in dictionary


class TestFindAnagrams:
    """Test cases for exact anagram lookups."""

    def test_cat_example(self, dictionary):
        """CAT and ACT share a signature."""
        assert dictionary.find_anagrams("CAT") == ["ACT", "CAT"]
        assert signature("CAT") == signature("ACT") == "ACT"

    def test_invariant_under_permutation(self, dictionary):
        """Any ordering of the letters gives the same result."""
        expected = dictionary.find_anagrams("TRACE")
        assert expected == ["CATER", "CRATE", "REACT", "TRACE"]
        for perm in permutations("TRACE"):
            assert dictionary.find_anagrams("".join(perm)) == expected

    def test_lowercase_letters(self, dictionary):
        """Letters are case-insensitive."""
        assert dictionary.find_anagrams("tae") == ["ATE", "EAT", "ETA", "TEA"]

    def test_must_use_all_letters(self, dictionary):
        """Subsets are not anagrams."""
        assert "CAT" not in dictionary.find_anagrams("CART")

    def test_no_anagrams(self, dictionary):
        """Unknown signatures give an empty list."""
        assert dictionary.find_anagrams("ZZZ") == []
        assert dictionary.find_anagrams("") == []


class TestFindValidWords:
    """Test cases for subset word search."""

    def test_all_lengths(self, dictionary):
        """Without a length, words of every length are found."""
        assert dictionary.find_valid_words("CART") == [
            "A", "ACT", "ART", "AT", "CART", "CAT", "RAT", "TA", "TAR",
        ]

    def test_fixed_length(self, dictionary):
        """With a length, only words of that length are found."""
        assert dictionary.find_valid_words("cart", 3) == ["ACT", "ART", "CAT", "RAT", "TAR"]

    def test_exact_length_matches_anagrams(self, dictionary):
        """Using all letters is the same as finding anagrams."""
        assert dictionary.find_valid_words("ETARS", 5) == dictionary.find_anagrams("ETARS")

    def test_repeated_letters(self, dictionary):
        """Repeated letters can each be used once."""
        assert dictionary.find_valid_words("DOGO") == ["DOG", "GOD", "GOOD"]
        assert dictionary.find_valid_words("DOG", 4) == []

    def test_eight_letters_allowed(self, dictionary):
        """The longest allowed input still works."""
        assert "MATTRESS" in dictionary.find_valid_words("SSERTTAM", 8)

    def test_out_of_range_length(self, dictionary):
        """Lengths outside 1..len(letters) give no words."""
        assert dictionary.find_valid_words("CAT", 0) == []
        assert dictionary.find_valid_words("CAT", 4) == []

    def test_too_many_letters(self, dictionary):
        """Inputs longer than the search limit are rejected."""
        with pytest.raises(ValueError, match="at most"):
            dictionary.find_valid_words("A" * (MAX_SEARCH_LETTERS + 1))


class TestIntrospection:
    """Test cases for the helper accessors."""

    def test_words_of_length(self, dictionary):
        """Words are bucketed by length."""
        assert dictionary.words_of_length(8) == ["MATTRESS"]
        assert dictionary.words_of_length(12) == []

    def test_signatures_index(self, dictionary):
        """The signature index groups anagrams."""
        index = dictionary.signatures()
        assert index["AEMRST"] == ["MASTER", "STREAM"]
        assert index["DGO"] == ["DOG", "GOD"]

    def test_iteration_sorted(self, dictionary):
        """Iteration is by length, then alphabetical."""
        words = list(dictionary)
        assert words[0] == "A"
        assert words[-1] == "MATTRESS"
        assert words.index("ACT") < words.index("CAT")
