"""Command runners: load the dictionary, build the graph and produce ladders."""

import random
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from pprint import pprint
from time import time
from typing import TextIO

from anagramladder.chain import AnagramChain, Difficulty
from anagramladder.dictionary import Dictionary
from anagramladder.engine.config import EngineConfig
from anagramladder.engine.graph import SignatureGraph
from anagramladder.engine.ladder import build_chain, find_ladder
from anagramladder.engine.parallel import get_executor
from anagramladder.engine.suggestions import LetterSuggestion, SuggestionEngine
from anagramladder.engine.utils import TIMESTAMP_FMT, int_comma, time_str


@dataclass
class Engine:
    """The dictionary and the structures built from it for one run."""

    dictionary: Dictionary
    graph: SignatureGraph
    suggestions: SuggestionEngine


def log_path(settings: EngineConfig, command: str) -> Path:
    """Return a fresh log file path for a command, creating its directory."""
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    logfile = Path(settings.log_dir) / command / f"{stamp}.log"
    logfile.parent.mkdir(parents=True, exist_ok=True)
    return logfile


def load_engine(settings: EngineConfig, *, logf: TextIO | None = None) -> Engine:
    """Load the word list and build the graph and suggestion engine.

    Raises:
        SourceUnavailable: If the word list cannot be read.
    """
    start_time = time()
    print(
        f"Start time: {datetime.fromtimestamp(start_time).astimezone().strftime(TIMESTAMP_FMT)}",
        file=logf,
        flush=True,
    )
    print("Engine config:", file=logf, flush=True)
    pprint(settings.model_dump(), stream=logf, width=120)
    print(f"Loading words from {settings.word_list_path}", file=logf, flush=True)
    dictionary = Dictionary.from_file(settings.word_list_path)
    print(f"Loaded {int_comma(len(dictionary))} words.", file=logf, flush=True)

    graph = SignatureGraph(dictionary, settings=settings).build(out=logf)
    print("Graph stats:", file=logf, flush=True)
    pprint(graph.stats(), stream=logf, width=120)
    engine = SuggestionEngine(
        dictionary,
        settings=settings,
        executor=get_executor(n_workers=settings.max_workers),
    )
    print(f"Engine ready in {time_str(time() - start_time)}", file=logf, flush=True)
    return Engine(dictionary=dictionary, graph=graph, suggestions=engine)


def list_starts(engine: Engine, *, limit: int | None = None) -> list[tuple[str, int, float]]:
    """Return `(word, variants, difficulty)` for each viable starting signature."""
    graph = engine.graph
    starts = graph.viable_starts if limit is None else graph.viable_starts[:limit]
    rows = []
    for sig in starts:
        word = graph.representative_word(sig)
        if word is None:
            continue
        rows.append((word, graph.word_count(sig), graph.difficulty_score(sig)))
    return rows


def suggest(engine: Engine, letters: str, target: int | None = None) -> list[LetterSuggestion]:
    """Return suggestions for the level after `letters` (by default one letter longer)."""
    if target is None:
        target = len(letters) + 1
    return engine.suggestions.generate_suggestions(letters, target)


def make_chain(
    engine: Engine,
    start_word: str,
    *,
    strategy: str,
    seed: int | None = None,
    name: str | None = None,
    difficulty: Difficulty | None = None,
    timeout: float | None = None,
    logf: TextIO | None = None,
) -> AnagramChain | None:
    """Build a chain from a starting word with the given strategy.

    Returns None if no ladder was found (not an error).
    """
    start_time = time()
    print(f"Building {strategy} ladder from {start_word.upper()}...", file=logf, flush=True)

    words: list[str] | None
    if strategy == "greedy":
        levels = engine.suggestions.generate_complete_chain(start_word, timeout=timeout)
        words = [level.suggested_word or "" for level in levels] if levels is not None else None
    elif strategy == "exhaustive":
        rng = random.Random(seed) if seed is not None else None
        words = find_ladder(engine.graph, start_word, rng=rng)
    else:
        raise ValueError(f"Unknown chain strategy: {strategy}")

    elapsed = time_str(time() - start_time)
    if words is None:
        print(f"No ladder found from {start_word.upper()} ({elapsed}).", file=logf, flush=True)
        return None

    print(f"Ladder found: {' -> '.join(words)} ({elapsed})", file=logf, flush=True)
    return build_chain(words, name=name, difficulty=difficulty, graph=engine.graph)
