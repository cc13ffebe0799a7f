"""Module for word list management: membership and anagram queries."""

from collections.abc import Iterable, Iterator
from os import PathLike
from pathlib import Path

from bitarray import bitarray
from bitarray.util import zeros
from sortedcontainers import SortedList, SortedSet

from anagramladder.engine.utils import Signature, signature

MAX_SEARCH_LETTERS = 8
"""Longest input accepted by `Dictionary.find_valid_words`.

The search is factorial in the number of letters, so longer inputs are rejected.
"""


class SourceUnavailable(OSError):
    """Raised when the backing word list cannot be obtained or read."""


def word_list_file(path: str | PathLike) -> Path:
    """Return `path` as a Path, raising SourceUnavailable if it is not a file."""
    word_list_path = Path(path)
    if not word_list_path.is_file():
        raise SourceUnavailable(f"Word list file not found: {word_list_path}")
    return word_list_path


class Dictionary:
    """A set of uppercase words indexed for membership and anagram lookups.

    Words are stored in a hash set (membership in time proportional to word length) and
    in a `signature -> words` map, so every anagram query only touches the words sharing
    a signature.  A set of all word prefixes allows the subset search to prune early.
    """

    def __init__(self) -> None:
        self._words: set[str] = set()
        self._by_signature: dict[Signature, SortedSet] = {}
        self._by_length: dict[int, SortedList] = {}
        self._prefixes: set[str] = set()

    @classmethod
    def from_words(cls, words: Iterable[str]) -> "Dictionary":
        """Create a dictionary from an iterable of words."""
        dictionary = cls()
        dictionary.load(words)
        return dictionary

    @classmethod
    def from_file(cls, path: str | PathLike) -> "Dictionary":
        """Create a dictionary from a newline-delimited UTF-8 word list file."""
        dictionary = cls()
        dictionary.load_file(path)
        return dictionary

    # Loading

    def load(
        self,
        lines: Iterable[str],
        *,
        min_len: int = 1,
        max_len: int | None = None,
    ) -> int:
        """Insert every token from `lines` into the dictionary.

        Tokens are whitespace-trimmed and uppercased; empty tokens are discarded and
        duplicates are inserted once.  The whole source is read before anything is
        inserted, so a failing source leaves the dictionary unchanged.

        Args:
            lines: The tokens, one per item.  A plain string is split into lines.
            min_len: Minimum word length to include.
            max_len: Optional maximum word length to include.

        Returns:
            The number of new words inserted.

        Raises:
            SourceUnavailable: If reading from `lines` fails.
        """
        if isinstance(lines, str):
            lines = lines.splitlines()

        staged: set[str] = set()
        try:
            for line in lines:
                word = line.strip().upper()
                if not word:
                    continue
                if len(word) < min_len:
                    continue
                if max_len is not None and len(word) > max_len:
                    continue
                staged.add(word)
        except (OSError, UnicodeDecodeError) as e:
            raise SourceUnavailable(f"Could not read word list: {e}") from e

        new_words = staged - self._words
        for word in new_words:
            self._insert(word)
        return len(new_words)

    def load_file(self, path: str | PathLike, **kwargs: int | None) -> int:
        """Load a newline-delimited UTF-8 word list file.

        Raises:
            SourceUnavailable: If the file is missing, unreadable or not valid UTF-8.
        """
        word_list_path = word_list_file(path)
        try:
            f = word_list_path.open("r", encoding="utf-8")
        except OSError as e:
            raise SourceUnavailable(f"Could not open word list {word_list_path}: {e}") from e
        with f:
            return self.load(f, **kwargs)

    def _insert(self, word: str) -> None:
        self._words.add(word)
        self._by_signature.setdefault(signature(word), SortedSet()).add(word)
        self._by_length.setdefault(len(word), SortedList()).add(word)
        for end in range(1, len(word) + 1):
            self._prefixes.add(word[:end])

    # Lookup

    def contains(self, word: str) -> bool:
        """Return whether `word` is in the dictionary (case-insensitive)."""
        return bool(word) and word.upper() in self._words

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[str]:
        return iter(self.all_words())

    def all_words(self) -> list[str]:
        """Return every word in the dictionary, sorted by length then alphabetically."""
        return [word for length in sorted(self._by_length) for word in self._by_length[length]]

    def words_of_length(self, length: int) -> list[str]:
        """Return all words of the given length, alphabetically."""
        return list(self._by_length.get(length, ()))

    def signatures(self) -> dict[Signature, list[str]]:
        """Return a copy of the `signature -> words` index (words alphabetical)."""
        return {sig: list(words) for sig, words in self._by_signature.items()}

    def find_anagrams(self, letters: str) -> list[str]:
        """Return every word that uses exactly all of `letters`, alphabetically."""
        if not letters:
            return []
        return list(self._by_signature.get(signature(letters), ()))

    def find_valid_words(self, letters: str, length: int | None = None) -> list[str]:
        """Return every word formable from any subset of `letters`.

        Args:
            letters: Available letters (at most `MAX_SEARCH_LETTERS`).
            length: If given, only words of exactly this length are returned; otherwise
                words of any length from 1 to `len(letters)`.

        Returns:
            The matching words, deduplicated and sorted alphabetically.

        Raises:
            ValueError: If `letters` is longer than `MAX_SEARCH_LETTERS`.
        """
        letters = letters.upper()
        n = len(letters)
        if n > MAX_SEARCH_LETTERS:
            raise ValueError(
                f"find_valid_words accepts at most {MAX_SEARCH_LETTERS} letters, got {n}."
            )
        if length is None:
            lengths = range(1, n + 1)
        elif 1 <= length <= n:
            lengths = range(length, length + 1)
        else:
            return []

        pool = sorted(letters)
        results: set[str] = set()
        for target in lengths:
            results.update(self._search(pool, target))
        return sorted(results)

    def _search(self, pool: list[str], target: int) -> set[str]:
        """Iterative backtracking over letter positions, building words of length `target`.

        `pool` must be sorted so that equal letters are adjacent: a letter is only used
        at a given depth if its identical left neighbour is already in use, which visits
        each distinct arrangement once.
        """
        found: set[str] = set()
        stack: list[tuple[str, bitarray]] = [("", zeros(len(pool)))]
        while stack:
            prefix, used = stack.pop()
            if len(prefix) == target:
                if prefix in self._words:
                    found.add(prefix)
                continue
            if prefix and prefix not in self._prefixes:
                continue
            for i, ch in enumerate(pool):
                if used[i]:
                    continue
                if i > 0 and pool[i - 1] == ch and not used[i - 1]:
                    continue
                next_used = used.copy()
                next_used[i] = 1
                stack.append((prefix + ch, next_used))
        return found
