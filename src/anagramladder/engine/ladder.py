"""Ladder search over the signature graph, and conversion of ladders to chains.

Unlike the greedy suggestion engine, the search here only follows edges whose target
can still reach the last rung, so every ladder it returns is complete.
"""

import random
from collections.abc import Iterator
from statistics import mean

from anagramladder.chain import AnagramChain, AnagramLevel, Difficulty
from anagramladder.engine.graph import SignatureGraph
from anagramladder.engine.utils import Signature, added_letter, signature

EASY_MAX_SCORE = 2.0
"""Ladders with a mean signature difficulty below this are rated "easy"."""

MEDIUM_MAX_SCORE = 4.0
"""Ladders with a mean signature difficulty below this (and not easy) are rated "medium"."""


def _viable_children(
    graph: SignatureGraph,
    sig: Signature,
    length: int,
    rng: random.Random | None,
) -> list[Signature]:
    """Children of `sig` that can still reach the last rung, in exploration order.

    Easiest (lowest difficulty score) first, or shuffled if `rng` is given.
    """
    children = [
        child
        for child in graph.next_signatures(sig)
        if graph.can_reach_length(child, length + 1, graph.max_length)
    ]
    if rng is not None:
        rng.shuffle(children)
    else:
        children.sort(key=lambda child: (graph.difficulty_score(child), child))
    return children


def _start_signature(graph: SignatureGraph, start_word: str) -> Signature | None:
    start_word = start_word.strip().upper()
    if len(start_word) != graph.min_length or not graph.dictionary.contains(start_word):
        return None
    return signature(start_word)


def find_ladder(
    graph: SignatureGraph,
    start_word: str,
    *,
    rng: random.Random | None = None,
) -> list[str] | None:
    """Find a complete ladder of words starting from `start_word`.

    Args:
        graph: A built signature graph.
        start_word: A dictionary word of `graph.min_length` letters.
        rng: If given, choose randomly among viable children instead of easiest-first.

    Returns:
        One word per rung, from `min_length` to `max_length` letters, or None if
        `start_word` is not a dictionary word of the right length or has no path to the
        last rung.
    """
    start_sig = _start_signature(graph, start_word)
    if start_sig is None:
        return None
    if not graph.can_reach_length(start_sig, graph.min_length, graph.max_length):
        return None

    words = [start_word.strip().upper()]
    sig = start_sig
    for length in range(graph.min_length, graph.max_length):
        children = _viable_children(graph, sig, length, rng)
        # A reachable signature always has a reachable child
        assert children, f"Reachable signature {sig} has no viable children."
        sig = children[0]
        word = graph.representative_word(sig)
        assert word is not None, f"Signature {sig} has no words."
        words.append(word)
    return words


def iter_ladders(graph: SignatureGraph, start_word: str) -> Iterator[list[Signature]]:
    """Yield every signature path from `start_word` to the last rung.

    Paths are yielded in depth-first order, easiest children first.  The number of paths
    can be large; callers should stop consuming once they have enough.
    """
    start_sig = _start_signature(graph, start_word)
    if start_sig is None:
        return

    path: list[Signature] = [start_sig]
    stack: list[Iterator[Signature]] = [
        iter(_viable_children(graph, start_sig, graph.min_length, None))
    ]
    while stack:
        child = next(stack[-1], None)
        if child is None:
            stack.pop()
            path.pop()
            continue
        if len(child) == graph.max_length:
            yield [*path, child]
            continue
        path.append(child)
        stack.append(iter(_viable_children(graph, child, len(child), None)))


def levels_from_words(words: list[str]) -> list[AnagramLevel]:
    """Convert rung words into levels.

    The first level gets its word as starting letters; every later level gets the letter
    that was added to the previous word (unset if the words are not one letter apart, which
    the chain validation then reports).
    """
    levels: list[AnagramLevel] = []
    for index, word in enumerate(words):
        word = word.upper()
        if index == 0:
            levels.append(
                AnagramLevel(letter_count=len(word), starting_letters=word, suggested_word=word)
            )
        else:
            levels.append(
                AnagramLevel(
                    letter_count=len(word),
                    added_letter=added_letter(words[index - 1], word),
                    suggested_word=word,
                )
            )
    return levels


def estimate_difficulty(graph: SignatureGraph, words: list[str]) -> Difficulty:
    """Rate a ladder from the mean difficulty score of its signatures."""
    if not words:
        return "medium"
    score = mean(graph.difficulty_score(signature(word)) for word in words)
    if score < EASY_MAX_SCORE:
        return "easy"
    if score < MEDIUM_MAX_SCORE:
        return "medium"
    return "hard"


def build_chain(
    words: list[str],
    *,
    name: str | None = None,
    description: str = "",
    difficulty: Difficulty | None = None,
    graph: SignatureGraph | None = None,
) -> AnagramChain:
    """Wrap rung words into an AnagramChain.

    Args:
        words: One word per rung.
        name: Chain name.  Defaults to "Chain from <first word>".
        description: Chain description.
        difficulty: Difficulty rating.  If None, estimated from `graph` when given,
            otherwise "medium".
        graph: Graph used to estimate the difficulty.
    """
    if difficulty is None:
        difficulty = estimate_difficulty(graph, words) if graph is not None else "medium"
    first = words[0].upper() if words else "unknown"
    return AnagramChain(
        name=name or f"Chain from {first}",
        description=description or "Anagram chain",
        difficulty=difficulty,
        levels=levels_from_words(words),
    )
