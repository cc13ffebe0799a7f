"""Anagram Ladder Engine.

Builds and checks anagram ladders: six words of 3 to 8 letters where each word adds
one letter to the previous one and rearranges the result.  A graph of letter multisets
("signatures") answers which starting words can reach 8 letters, and a suggestion engine
ranks the letters that can be added at each step.
"""

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path

from anagramladder.chain import DIFFICULTIES, AnagramChain
from anagramladder.dictionary import SourceUnavailable, word_list_file
from anagramladder.engine import builder
from anagramladder.engine.config import EngineConfig
from anagramladder.engine.config import config as engine_config


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="anagramladder",
        description="Build and validate anagram ladders (3 to 8 letters)",
    )
    parser.add_argument("--words", help="Path to the word list (overrides ANAGRAM_WORD_LIST_PATH)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    starts = subparsers.add_parser("starts", help="List starting words that can reach 8 letters")
    starts.add_argument("--limit", type=int, default=20, help="Number of starts to show")

    suggest = subparsers.add_parser("suggest", help="Rank the letters that can be added")
    suggest.add_argument("letters", help="Current letters, e.g. CAT")
    suggest.add_argument("--target", type=int, help="Letter count of the next level")

    chain = subparsers.add_parser("chain", help="Build a complete ladder from a starting word")
    chain.add_argument("start", help="3-letter starting word")
    chain.add_argument(
        "--strategy",
        choices=["greedy", "exhaustive"],
        help="Ladder construction strategy (default: from configuration)",
    )
    chain.add_argument("--seed", type=int, help="Random seed for the exhaustive strategy")
    chain.add_argument("--name", help="Chain name")
    chain.add_argument("--difficulty", choices=DIFFICULTIES, help="Difficulty rating")
    chain.add_argument("--timeout", type=float, help="Time limit in seconds (greedy strategy)")
    chain.add_argument("--output", "-o", help="Path to save the chain JSON")

    validate = subparsers.add_parser("validate", help="Check a chain JSON file")
    validate.add_argument("file", help="Path to the chain JSON file")

    return parser


def _validate(path: str) -> int:
    try:
        chain = AnagramChain.from_json(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError, TypeError, AttributeError) as e:
        print(f"Error reading chain {path}: {e}", file=sys.stderr)
        return 1

    errors = chain.validation_errors()
    print(chain)
    if not errors:
        print("Chain is complete.")
        return 0
    print(f"{len(errors)} problem(s):")
    for error in errors:
        print(f"  - {error}")
    return 1


def _run(args: argparse.Namespace, settings: EngineConfig) -> int:
    # Fail before creating a log file if there is nothing to load
    word_list_file(settings.word_list_path)
    logfile = builder.log_path(settings, args.command)
    print(f"Log file: {logfile}")

    with open(logfile, "w", encoding="utf-8") as logf:
        engine = builder.load_engine(settings, logf=logf)
        try:
            if args.command == "starts":
                rows = builder.list_starts(engine, limit=args.limit)
                print(f"{len(engine.graph.viable_starts)} viable starting signatures.")
                for i, (word, variants, score) in enumerate(rows, start=1):
                    print(f"  {i:3d}. {word}  ({variants} variants, difficulty {score:.2f})")
                return 0

            if args.command == "suggest":
                suggestions = builder.suggest(engine, args.letters, args.target)
                if not suggestions:
                    print(f"No letter can be added to {args.letters.upper()}.")
                    return 0
                for s in suggestions:
                    print(
                        f"  +{s.letter}  {s.viability_score:.2f} {s.viability_color:<6} "
                        f"vowels {s.vowel_ratio:.2f}  {', '.join(s.valid_words[:5])}"
                    )
                return 0

            chain = builder.make_chain(
                engine,
                args.start,
                strategy=args.strategy or settings.chain_strategy,
                seed=args.seed,
                name=args.name,
                difficulty=args.difficulty,
                timeout=args.timeout,
                logf=logf,
            )
            if chain is None:
                print(f"No ladder found from {args.start.upper()}.")
                return 1
            print(chain)
            if args.output:
                output_path = Path(args.output)
                output_path.parent.mkdir(parents=True, exist_ok=True)
                output_path.write_text(chain.to_json(), encoding="utf-8")
                print(f"Chain saved to: {output_path}")
            else:
                print(json.dumps(chain.to_dict(), indent=2, sort_keys=True))
            return 0
        finally:
            if engine.suggestions.executor is not None:
                engine.suggestions.executor.shutdown(wait=False, cancel_futures=True)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the anagram ladder command line."""
    args = _parser().parse_args(argv)

    if args.command == "validate":
        return _validate(args.file)

    settings = engine_config
    if args.words:
        settings = engine_config.model_copy(update={"word_list_path": args.words})

    try:
        return _run(args, settings)
    except SourceUnavailable as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("Interrupted by user.", file=sys.stderr)
        return 1
