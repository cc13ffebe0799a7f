"""Letter suggestion engine.

Ranks the letters that can be added to a set of letters to form the next rung of a
ladder, and greedily assembles complete ladders from a starting word.
"""

import threading
from concurrent.futures import Executor
from dataclasses import dataclass
from time import monotonic

from anagramladder.chain import AnagramLevel
from anagramladder.dictionary import Dictionary
from anagramladder.engine.config import EngineConfig
from anagramladder.engine.config import config as engine_config
from anagramladder.engine.parallel import map_in_order
from anagramladder.engine.utils import (
    ALPHABET,
    Signature,
    letter_frequency_score,
    signature,
    vowel_ratio,
    vowel_score,
)

GREEN_THRESHOLD = 0.7
YELLOW_THRESHOLD = 0.4


@dataclass(kw_only=True)
class LetterSuggestion:
    """A scored candidate letter for the next level."""

    letter: str
    """The candidate letter."""

    resulting_letters: str
    """The current letters followed by `letter`."""

    valid_words: list[str]
    """Words using all of `resulting_letters`, longest first then alphabetical."""

    viability_score: float
    """Heuristic estimate in [0, 1] of how promising the letter is."""

    next_level_viable: bool
    """Whether at least one sampled word can be extended to a further level."""

    vowel_ratio: float
    """Fraction of vowels in `resulting_letters`."""

    letter_frequency_score: float
    """1.0 for a high-frequency English letter, else 0.5."""

    @property
    def viability_color(self) -> str:
        """Traffic-light bucket of the viability score: "green", "yellow" or "red"."""
        if self.viability_score >= GREEN_THRESHOLD:
            return "green"
        if self.viability_score >= YELLOW_THRESHOLD:
            return "yellow"
        return "red"


def _commonality_key(word: str) -> tuple[int, str]:
    return (-len(word), word)


class SuggestionEngine:
    """Suggests letters to add at each level of a ladder.

    Args:
        dictionary: The dictionary used for anagram lookups.
        settings: Scoring and search settings.
        executor: Optional executor used to score the 26 candidate letters in parallel.
    """

    def __init__(
        self,
        dictionary: Dictionary,
        *,
        settings: EngineConfig = engine_config,
        executor: Executor | None = None,
    ) -> None:
        self.dictionary = dictionary
        self.settings = settings
        self.executor = executor
        self._probe_cache: dict[Signature, bool] = {}
        self._probe_lock = threading.Lock()

    def contains(self, word: str) -> bool:
        """Return whether `word` is in the dictionary."""
        return self.dictionary.contains(word)

    def generate_suggestions(
        self, current_letters: str, target_letter_count: int
    ) -> list[LetterSuggestion]:
        """Score every letter A-Z that forms at least one word when added.

        Args:
            current_letters: Letters of the current level.
            target_letter_count: Letter count of the level being built.

        Returns:
            Suggestions sorted by descending viability score.  Ties keep A-Z order.
        """
        current_letters = current_letters.upper()
        scored = map_in_order(
            self.executor,
            lambda letter: self._score_letter(current_letters, letter, target_letter_count),
            ALPHABET,
        )
        results = [suggestion for suggestion in scored if suggestion is not None]
        results.sort(key=lambda s: s.viability_score, reverse=True)
        return results

    def _score_letter(
        self, current_letters: str, letter: str, target_letter_count: int
    ) -> LetterSuggestion | None:
        settings = self.settings
        new_letters = current_letters + letter

        valid_words = sorted(self.dictionary.find_anagrams(new_letters), key=_commonality_key)
        if not valid_words:
            return None

        ratio = vowel_ratio(new_letters)
        v_score = vowel_score(ratio, settings=settings)
        freq_score = letter_frequency_score(letter, settings=settings)

        # The last level needs no lookahead
        next_level_score = 1.0
        next_level_viable = True
        if target_letter_count < settings.max_length:
            sample = valid_words[: settings.lookahead_sample_size]
            viable_count = sum(1 for word in sample if self.has_viable_next_level(word))
            next_level_score = viable_count / len(sample)
            next_level_viable = viable_count > 0

        viability_score = (
            v_score * settings.vowel_weight
            + next_level_score * settings.next_level_weight
            + freq_score * settings.letter_frequency_weight
        )

        return LetterSuggestion(
            letter=letter,
            resulting_letters=new_letters,
            valid_words=valid_words,
            viability_score=min(1.0, max(0.0, viability_score)),
            next_level_viable=next_level_viable,
            vowel_ratio=ratio,
            letter_frequency_score=freq_score,
        )

    def has_viable_next_level(self, word: str) -> bool:
        """Return whether adding one of the probe letters to `word` forms a word.

        Memoized per signature, since the answer only depends on the letters.
        """
        sig = signature(word)
        cached = self._probe_cache.get(sig)
        if cached is not None:
            return cached

        result = any(
            self.dictionary.find_anagrams(sig + letter) for letter in self.settings.probe_letters
        )
        with self._probe_lock:
            self._probe_cache.setdefault(sig, result)
        return result

    def generate_complete_chain(
        self, start_word: str, *, timeout: float | None = None
    ) -> list[AnagramLevel] | None:
        """Greedily build a full ladder from a starting word.

        At each level the first suggestion (in descending score order) that reaches
        `viability_threshold` is taken, and its first valid word becomes the word for the
        next level.  There is no backtracking: if no suggestion is good enough, the search
        gives up.

        Args:
            start_word: A dictionary word of `min_length` letters.
            timeout: Optional time limit in seconds, checked between levels.

        Returns:
            The levels from `min_length` to `max_length` letters, or None if the start word
            is not acceptable, no viable letter was found, or the time limit was exceeded.
        """
        settings = self.settings
        start_word = start_word.strip().upper()
        if len(start_word) != settings.min_length or not self.dictionary.contains(start_word):
            return None

        deadline = monotonic() + timeout if timeout is not None else None

        levels = [
            AnagramLevel(
                letter_count=settings.min_length,
                starting_letters=start_word,
                suggested_word=start_word,
            )
        ]
        current_word = start_word
        for target_count in range(settings.min_length + 1, settings.max_length + 1):
            if deadline is not None and monotonic() > deadline:
                return None

            suggestions = self.generate_suggestions(current_word, target_count)
            best = next(
                (s for s in suggestions if s.viability_score >= settings.viability_threshold),
                None,
            )
            if best is None:
                return None

            intended_word = best.valid_words[0]
            levels.append(
                AnagramLevel(
                    letter_count=target_count,
                    added_letter=best.letter,
                    suggested_word=intended_word,
                )
            )
            current_word = intended_word

        return levels


def top_suggestions(suggestions: list[LetterSuggestion], count: int) -> list[LetterSuggestion]:
    """Return the first `count` suggestions."""
    return suggestions[:count]


def viable_suggestions(
    suggestions: list[LetterSuggestion], threshold: float = YELLOW_THRESHOLD
) -> list[LetterSuggestion]:
    """Return the suggestions scoring at least `threshold`."""
    return [s for s in suggestions if s.viability_score >= threshold]


def suggestions_by_color(suggestions: list[LetterSuggestion], color: str) -> list[LetterSuggestion]:
    """Return the suggestions in the given traffic-light bucket."""
    return [s for s in suggestions if s.viability_color == color]
