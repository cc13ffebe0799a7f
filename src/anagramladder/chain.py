"""Anagram ladder value types: a single rung (level) and a complete chain."""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal
from uuid import UUID, uuid4

Difficulty = Literal["easy", "medium", "hard"]
DIFFICULTIES: tuple[str, ...] = ("easy", "medium", "hard")

CHAIN_LENGTH = 6
"""Number of levels in a complete chain."""

FIRST_LEVEL_LETTERS = 3
"""Letter count of the first level; each later level adds one letter."""

LAST_LEVEL_LETTERS = FIRST_LEVEL_LETTERS + CHAIN_LENGTH - 1


def _upper(value: str | None) -> str | None:
    return value.upper() if value is not None else None


def _letters_field(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _count_field(value: Any) -> int:
    # bool is an int subclass but never a letter count
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return 0


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class AnagramLevel:
    """One rung of an anagram ladder."""

    letter_count: int
    """Number of letters at this level (3-8)."""

    starting_letters: str | None = None
    """The starting letters (first level only), e.g. "CAT"."""

    added_letter: str | None = None
    """The letter added at this level (all levels except the first)."""

    suggested_word: str | None = None
    """Suggested solution word.  Advisory only: any anagram of the letters is accepted."""

    def __post_init__(self) -> None:
        """Normalize letters to uppercase."""
        self.starting_letters = _upper(self.starting_letters)
        self.added_letter = _upper(self.added_letter)
        self.suggested_word = _upper(self.suggested_word)

    def is_valid(self) -> bool:
        """Check that this level is well-formed for its letter count."""
        if not FIRST_LEVEL_LETTERS <= self.letter_count <= LAST_LEVEL_LETTERS:
            return False
        if self.letter_count == FIRST_LEVEL_LETTERS:
            return (
                self.starting_letters is not None
                and len(self.starting_letters) == FIRST_LEVEL_LETTERS
            )
        return self.added_letter is not None and len(self.added_letter) == 1

    def to_dict(self) -> dict[str, Any]:
        """Return the persistence record for this level."""
        ret: dict[str, Any] = {"letterCount": self.letter_count}
        if self.starting_letters is not None:
            ret["startingLetters"] = self.starting_letters
        if self.added_letter is not None:
            ret["addedLetter"] = self.added_letter
        if self.suggested_word is not None:
            ret["suggestedWord"] = self.suggested_word
        return ret

    @classmethod
    def from_dict(cls, data: Any) -> "AnagramLevel":
        """Create a level from its persistence record.

        Missing or mistyped fields are left unset (a letter count of 0) so that
        `AnagramChain.validation_errors` can report them.  A record that is not an object
        gives an empty level.
        """
        if not isinstance(data, dict):
            return cls(letter_count=0)
        return cls(
            letter_count=_count_field(data.get("letterCount")),
            starting_letters=_letters_field(data.get("startingLetters")),
            added_letter=_letters_field(data.get("addedLetter")),
            suggested_word=_letters_field(data.get("suggestedWord")),
        )


@dataclass
class AnagramChain:
    """A complete 6-level anagram progression (3 to 8 letters)."""

    name: str
    """Display name for the chain."""

    description: str = ""
    """Free-text description of the chain."""

    difficulty: Difficulty = "medium"
    """Difficulty rating: "easy", "medium" or "hard"."""

    levels: list[AnagramLevel] = field(default_factory=list)
    """The levels, in order of increasing letter count."""

    id: UUID = field(default_factory=uuid4)
    created_date: datetime = field(default_factory=_now)
    modified_date: datetime = field(default_factory=_now)
    version: str = "1.0"

    def __str__(self) -> str:
        """Return a one-line summary of the chain."""
        words = " -> ".join(level.suggested_word or "?" for level in self.levels)
        return f"{self.name} [{self.difficulty}]: {words}"

    def is_complete(self) -> bool:
        """Return whether every structural invariant of the chain holds."""
        return not self.validation_errors()

    def validation_errors(self) -> list[str]:
        """Return a human-readable description of every violated invariant."""
        errors: list[str] = []

        if self.difficulty not in DIFFICULTIES:
            errors.append(
                f"Difficulty must be one of {', '.join(DIFFICULTIES)} (is '{self.difficulty}')"
            )

        if len(self.levels) != CHAIN_LENGTH:
            errors.append(f"Chain must have exactly {CHAIN_LENGTH} levels (has {len(self.levels)})")

        for index, level in enumerate(self.levels):
            expected_letter_count = index + FIRST_LEVEL_LETTERS
            if level.letter_count != expected_letter_count:
                errors.append(
                    f"Level {index + 1}: Expected {expected_letter_count} letters, "
                    f"has {level.letter_count}"
                )

            if not level.is_valid():
                errors.append(f"Level {index + 1}: Invalid level configuration")

            if index == 0:
                if level.starting_letters is None:
                    errors.append("Level 1: Must have starting letters defined")
            elif level.added_letter is None:
                errors.append(f"Level {index + 1}: Must have addedLetter defined")

        return errors

    def level_with_letter_count(self, letter_count: int) -> AnagramLevel | None:
        """Return the first level with the given letter count, if any."""
        return next((level for level in self.levels if level.letter_count == letter_count), None)

    def progress(self) -> float:
        """Return the fraction (0.0-1.0) of the six levels that are valid."""
        return sum(1 for level in self.levels if level.is_valid()) / CHAIN_LENGTH

    def letters_at(self, index: int) -> str | None:
        """Return the letters available at level `index` (0-based).

        The letters are the starting letters followed by each added letter up to and
        including level `index`.  Returns None if any of them is missing.
        """
        if not 0 <= index < len(self.levels):
            return None
        letters = self.levels[0].starting_letters
        if letters is None:
            return None
        for level in self.levels[1 : index + 1]:
            if level.added_letter is None:
                return None
            letters += level.added_letter
        return letters

    def touch(self) -> None:
        """Mark the chain as modified now."""
        self.modified_date = _now()

    def to_dict(self) -> dict[str, Any]:
        """Return a dictionary representation of the chain for serialization."""
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "difficulty": self.difficulty,
            "levels": [level.to_dict() for level in self.levels],
            "createdDate": self.created_date.isoformat(),
            "modifiedDate": self.modified_date.isoformat(),
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnagramChain":
        """Create a chain from its dictionary representation.

        Optional metadata (`id`, dates, `version`) is generated when absent.  Malformed
        levels are kept as placeholders and a non-list `levels` counts as no levels, so
        both show up in `validation_errors` instead of raising.

        Raises:
            ValueError: If `id` or a date is present but not parseable.
        """
        levels = data.get("levels")
        if not isinstance(levels, list):
            levels = []
        kwargs: dict[str, Any] = {
            "name": data.get("name", ""),
            "description": data.get("description", ""),
            "difficulty": data.get("difficulty", "medium"),
            "levels": [AnagramLevel.from_dict(level) for level in levels],
        }
        if "id" in data:
            kwargs["id"] = UUID(data["id"])
        if "createdDate" in data:
            kwargs["created_date"] = datetime.fromisoformat(data["createdDate"])
        if "modifiedDate" in data:
            kwargs["modified_date"] = datetime.fromisoformat(data["modifiedDate"])
        if "version" in data:
            kwargs["version"] = data["version"]
        return cls(**kwargs)

    def to_json(self) -> str:
        """Encode the chain as pretty-printed JSON with sorted keys."""
        return json.dumps(self.to_dict(), indent=2, sort_keys=True)

    @classmethod
    def from_json(cls, text: str | bytes) -> "AnagramChain":
        """Decode a chain from JSON."""
        return cls.from_dict(json.loads(text))
