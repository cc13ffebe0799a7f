"""Precomputed graph of letter multisets connected by single-letter additions.

Vertices are signatures (sorted letters).  An edge `s -> t` exists iff `len(t) ==
len(s) + 1` and deleting one letter from `t` yields `s`.  Since every edge increases
the length by one, the graph is a DAG partitioned by length.
"""

import threading
from time import time
from typing import TextIO, TypeAlias

from anagramladder.dictionary import Dictionary
from anagramladder.engine.config import EngineConfig
from anagramladder.engine.config import config as engine_config
from anagramladder.engine.utils import (
    Signature,
    int_comma,
    letter_penalty,
    quality_sort_key,
    signature,
    time_str,
)

ReachKey: TypeAlias = tuple[Signature, int, int]
"""Reachability cache key: (signature, current_length, target_length)."""


class SignatureGraph:
    """Graph of signatures of length `min_length`..`max_length` built from a Dictionary."""

    def __init__(self, dictionary: Dictionary, *, settings: EngineConfig = engine_config) -> None:
        self.dictionary = dictionary
        self.min_length = settings.min_length
        self.max_length = settings.max_length
        self.deterministic = settings.deterministic

        self.words_by_signature: dict[Signature, list[str]] = {}
        """Signature -> words sharing it, best (lowest letter penalty) first."""

        self.next_by_signature: dict[Signature, list[Signature]] = {}
        """Signature -> signatures reachable by adding one letter."""

        self.signatures_by_length: dict[int, set[Signature]] = {}
        """Length -> distinct signatures of that length (within min/max length)."""

        self.viable_starts: list[Signature] = []
        """All `min_length` signatures with a path to `max_length`, sorted."""

        self._reach_cache: dict[ReachKey, bool] = {}
        self._reach_lock = threading.Lock()
        self._build_lock = threading.Lock()
        self._built = False

    @property
    def is_built(self) -> bool:
        """Whether `build` has completed."""
        return self._built

    def build(self, *, out: TextIO | None = None) -> "SignatureGraph":
        """Build the graph.  Expensive, but only done once; later calls are no-ops.

        Args:
            out: Stream for progress output (stdout if None).

        Returns:
            The graph itself, for chaining.
        """
        with self._build_lock:
            if self._built:
                return self
            self._build(out)
            self._built = True
        return self

    def _build(self, out: TextIO | None) -> None:
        start_time = time()
        print("Building word graph...", file=out, flush=True)
        with self._reach_lock:
            self._reach_cache.clear()

        # Step 1: group words by signature, and signatures by length
        self.signatures_by_length = {
            length: set() for length in range(self.min_length, self.max_length + 1)
        }
        for sig, words in self.dictionary.signatures().items():
            self.words_by_signature[sig] = sorted(words, key=quality_sort_key)
            if len(sig) in self.signatures_by_length:
                self.signatures_by_length[len(sig)].add(sig)

        print(
            f"Dictionary contains {int_comma(len(self.dictionary))} words, "
            f"{int_comma(len(self.words_by_signature))} unique signatures.",
            file=out,
            flush=True,
        )
        for length, sigs in self.signatures_by_length.items():
            print(f"  Length {length}: {int_comma(len(sigs))} signatures", file=out, flush=True)

        # Step 2: connect each signature to the signatures one letter longer
        children: dict[Signature, set[Signature]] = {}
        for length in range(self.min_length, self.max_length):
            parent_sigs = self.signatures_by_length[length]
            for child_sig in self.signatures_by_length[length + 1]:
                for i in range(len(child_sig)):
                    # Deleting either of two equal adjacent letters gives the same parent
                    if i > 0 and child_sig[i] == child_sig[i - 1]:
                        continue
                    parent_sig = child_sig[:i] + child_sig[i + 1 :]
                    if parent_sig in parent_sigs:
                        children.setdefault(parent_sig, set()).add(child_sig)

        self.next_by_signature = {
            parent: sorted(kids) if self.deterministic else list(kids)
            for parent, kids in children.items()
        }
        n_edges = sum(len(kids) for kids in self.next_by_signature.values())
        print(
            f"Built {int_comma(n_edges)} edges from "
            f"{int_comma(len(self.next_by_signature))} signatures.",
            file=out,
            flush=True,
        )

        # Step 3: find the starting signatures with a path to the last rung
        start_sigs = self.signatures_by_length[self.min_length]
        print(
            f"Testing {int_comma(len(start_sigs))} {self.min_length}-letter signatures "
            "for viability...",
            file=out,
            flush=True,
        )
        self.viable_starts = sorted(
            sig
            for sig in start_sigs
            if self.can_reach_length(sig, self.min_length, self.max_length)
        )
        print(
            f"Found {int_comma(len(self.viable_starts))} viable starting signatures.",
            file=out,
            flush=True,
        )
        print(f"Graph built in {time_str(time() - start_time)}", file=out, flush=True)

    # Queries

    def next_signatures(self, sig: Signature) -> list[Signature]:
        """Return the direct children of `sig` (empty if none or unknown)."""
        return list(self.next_by_signature.get(sig, ()))

    def words(self, sig: Signature) -> list[str]:
        """Return all words with signature `sig`, most recognizable first."""
        return list(self.words_by_signature.get(sig, ()))

    def word_count(self, sig: Signature) -> int:
        """Return the number of words with signature `sig`."""
        return len(self.words_by_signature.get(sig, ()))

    def representative_word(self, sig: Signature) -> str | None:
        """Return the best word for `sig`, or None if it has no words."""
        words = self.words_by_signature.get(sig)
        return words[0] if words else None

    def signatures_of_length(self, length: int) -> list[Signature]:
        """Return the signatures of the given length, sorted."""
        return sorted(self.signatures_by_length.get(length, ()))

    def can_reach_length(self, sig: Signature, current_length: int, target_length: int) -> bool:
        """Return whether `sig` (at `current_length`) has a path to `target_length`.

        True iff `current_length == target_length`, or some child of `sig` can reach
        `target_length` from `current_length + 1`.  Results are memoized; recursion depth
        is bounded by `target_length - current_length`.
        """
        key: ReachKey = (sig, current_length, target_length)
        cached = self._reach_cache.get(key)
        if cached is not None:
            return cached

        if current_length == target_length:
            result = True
        elif current_length > target_length:
            result = False
        else:
            result = any(
                self.can_reach_length(child, current_length + 1, target_length)
                for child in self.next_by_signature.get(sig, ())
            )

        with self._reach_lock:
            self._reach_cache.setdefault(key, result)
        return result

    def path_exists(self, start: Signature, target: Signature) -> bool:
        """Return whether `target` can be reached from `start` by adding letters."""
        if start == target:
            return True
        frontier = {start}
        while frontier and len(next(iter(frontier))) < len(target):
            frontier = {
                child for sig in frontier for child in self.next_by_signature.get(sig, ())
            }
        return target in frontier

    def is_viable_start(self, word: str) -> bool:
        """Return whether `word` can start a full ladder (reach `max_length`)."""
        return len(word) == self.min_length and self.can_reach_length(
            signature(word), self.min_length, self.max_length
        )

    def difficulty_score(self, sig: Signature) -> float:
        """Advisory difficulty: fewer words and rarer/duplicated letters score higher."""
        word_count = max(1, self.word_count(sig))
        word = self.representative_word(sig) or sig
        return 10.0 / word_count + letter_penalty(word)

    def stats(self) -> dict[str, object]:
        """Return a summary of the graph, suitable for logging."""
        return {
            "words": len(self.dictionary),
            "signatures": len(self.words_by_signature),
            "signatures_by_length": {
                length: len(sigs) for length, sigs in self.signatures_by_length.items()
            },
            "edges": sum(len(kids) for kids in self.next_by_signature.values()),
            "viable_starts": len(self.viable_starts),
            "cached_reachability": len(self._reach_cache),
        }
