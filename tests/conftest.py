"""Shared fixtures: a small dictionary with one complete EAT -> MATTRESS ladder."""

import pytest

from anagramladder.dictionary import Dictionary
from anagramladder.engine.config import EngineConfig
from anagramladder.engine.graph import SignatureGraph
from anagramladder.engine.suggestions import SuggestionEngine

WORDS = [
    # Short words, for subset searches
    "A", "AT", "TA",
    # CAT -> CART -> CRATE dead-ends at 5 letters
    "CAT", "ACT", "CART", "TRACE", "CRATE", "CATER", "REACT",
    # EAT -> RATE -> RATES -> MASTER -> MASTERS -> MATTRESS
    "EAT", "TEA", "ATE", "ETA", "ART", "RAT", "TAR",
    "RATE", "TEAR", "RATES", "STARE", "TEARS",
    "MASTER", "STREAM", "MASTERS", "STREAMS", "MATTRESS",
    # Repeated and rare letters
    "DOG", "GOD", "GOOD", "JAZZ", "QUIZ",
]

FULL_LADDER = ["EAT", "RATE", "RATES", "MASTER", "MASTERS", "MATTRESS"]


@pytest.fixture
def settings() -> EngineConfig:
    return EngineConfig(_env_file=None)


@pytest.fixture
def dictionary() -> Dictionary:
    return Dictionary.from_words(WORDS)


@pytest.fixture
def graph(dictionary: Dictionary, settings: EngineConfig, capsys) -> SignatureGraph:
    built = SignatureGraph(dictionary, settings=settings).build()
    capsys.readouterr()  # discard build progress output
    return built


@pytest.fixture
def engine(dictionary: Dictionary, settings: EngineConfig) -> SuggestionEngine:
    return SuggestionEngine(dictionary, settings=settings)


@pytest.fixture
def word_file(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("\n".join(WORDS) + "\n", encoding="utf-8")
    return path
