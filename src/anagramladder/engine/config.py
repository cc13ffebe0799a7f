"""Anagram ladder engine configuration."""

from typing import Literal

from dotenv import find_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine the environment file path, or None if not found
ENV_FILE = find_dotenv() or None


class EngineConfig(BaseSettings):
    """Configuration settings for the anagram ladder engine."""

    word_list_path: str = "words.txt"
    """Path to the newline-delimited word list. Default: "words.txt"."""

    min_length: int = 3
    """Length of the first rung of a ladder. Default: 3."""

    max_length: int = 8
    """Length of the last rung of a ladder. Default: 8."""

    viability_threshold: float = 0.4
    """Minimum viability score accepted by the greedy chain builder. Default: 0.4."""

    lookahead_sample_size: int = 5
    """Number of valid words probed for forward viability per candidate letter. Default: 5."""

    probe_letters: str = "ESRTAIN"
    """Letters appended to a word to test whether the next rung is reachable."""

    high_frequency_letters: str = "ETAOINSHRDLU"
    """Letters that receive the full letter frequency score."""

    vowel_ratio_min: float = 0.30
    """Lower bound of the ideal vowel ratio band. Default: 0.30."""

    vowel_ratio_max: float = 0.45
    """Upper bound of the ideal vowel ratio band. Default: 0.45."""

    vowel_penalty_rate: float = 2.5
    """Linear decay of the vowel score per unit distance from the ideal band. Default: 2.5."""

    vowel_weight: float = 0.35
    next_level_weight: float = 0.45
    letter_frequency_weight: float = 0.20

    max_workers: int | None = None
    """Worker threads used to score candidate letters. If None (default), score sequentially."""

    deterministic: bool = True
    """Whether to keep intermediate collections sorted for reproducible output. Default: True."""

    chain_strategy: Literal["greedy", "exhaustive"] = "greedy"
    """Ladder construction strategy used by the command line. Default: "greedy"."""

    log_dir: str = "logs"
    """Directory for command line run logs. Default: "logs"."""

    model_config = SettingsConfigDict(
        env_prefix="ANAGRAM_",
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )


config = EngineConfig()
