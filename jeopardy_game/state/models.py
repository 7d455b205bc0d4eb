"""Dataclasses describing the Jeopardy board and its clues."""

from __future__ import annotations

import random
import re
from dataclasses import dataclass, field
from enum import Enum
from secrets import token_urlsafe
from typing import Any, Callable, Dict, Iterable, List, NamedTuple, Optional, Sequence, Tuple, TypeVar

from ..config import NUM_CATEGORIES, NUM_QUESTIONS_PER_CAT
from ..errors import InsufficientClues, InvalidBoardShape, OutOfBounds

T = TypeVar("T")
Sampler = Callable[[Sequence[T], int], List[T]]

_COORDINATE_PATTERN = re.compile(r"^\s*(-?\d+)\s*[-:,]\s*(-?\d+)\s*$")


def default_sampler(population: Sequence[T], count: int) -> List[T]:
    """Uniform sampling without replacement."""

    return random.sample(list(population), count)


class RevealState(str, Enum):
    """What a board cell is currently showing."""

    HIDDEN = "hidden"
    QUESTION = "question"
    ANSWER = "answer"


_REVEAL_ORDER = tuple(RevealState)


class Coordinate(NamedTuple):
    """Zero-based ``(category_index, clue_index)`` address of a board cell."""

    category_index: int
    clue_index: int

    @classmethod
    def parse(cls, raw: str) -> "Coordinate":
        """Parse ``"2-3"`` style cell identifiers used by the presentation layers."""

        match = _COORDINATE_PATTERN.match(raw or "")
        if not match:
            raise ValueError(f"Invalid board coordinate: {raw!r}")
        return cls(int(match.group(1)), int(match.group(2)))

    def encode(self) -> str:
        return f"{self.category_index}-{self.clue_index}"


@dataclass(slots=True)
class Clue:
    """One question/answer pair and its reveal progress.

    ``question`` and ``answer`` are fixed once the clue is created; only
    ``reveal_state`` changes during play, and it never moves backwards.
    """

    question: str
    answer: str
    reveal_state: RevealState = RevealState.HIDDEN

    def __setattr__(self, name: str, value: object) -> None:
        if name in ("question", "answer") and hasattr(self, name):
            raise AttributeError(f"Clue.{name} is read-only")
        if name == "reveal_state" and hasattr(self, name):
            value = RevealState(value)
            if _REVEAL_ORDER.index(value) < _REVEAL_ORDER.index(self.reveal_state):
                raise ValueError(f"Clue cannot go back from {self.reveal_state.value} to {value.value}")
        object.__setattr__(self, name, value)

    @property
    def showing(self) -> Optional[str]:
        """Text currently displayed for the clue, ``None`` while hidden."""

        if self.reveal_state is RevealState.QUESTION:
            return self.question
        if self.reveal_state is RevealState.ANSWER:
            return self.answer
        return None


@dataclass(frozen=True, slots=True)
class Category:
    """A titled board column with a fixed number of clues."""

    title: str
    clues: Tuple[Clue, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "clues", tuple(self.clues))
        if len(self.clues) != NUM_QUESTIONS_PER_CAT:
            raise InvalidBoardShape(
                f"Category '{self.title}' needs {NUM_QUESTIONS_PER_CAT} clues, got {len(self.clues)}."
            )

    @classmethod
    def create(cls, title: str, clues: Iterable[Clue]) -> "Category":
        return cls(title=title, clues=tuple(clues))

    @classmethod
    def from_payload(cls, payload: Dict[str, Any], sampler: Sampler = default_sampler) -> "Category":
        """Build a category from a provider payload, sampling the clues to show.

        Clues without question or answer text are skipped before sampling.
        """

        title = str(payload.get("title") or "").strip()
        usable: List[Tuple[str, str]] = []
        for raw in payload.get("clues") or []:
            question = str(raw.get("question") or "").strip()
            answer = str(raw.get("answer") or "").strip()
            if question and answer:
                usable.append((question, answer))
        if len(usable) < NUM_QUESTIONS_PER_CAT:
            raise InsufficientClues(title, len(usable), NUM_QUESTIONS_PER_CAT)
        chosen = sampler(usable, NUM_QUESTIONS_PER_CAT)
        return cls.create(title, (Clue(question=q, answer=a) for q, a in chosen))


@dataclass(frozen=True, slots=True)
class Board:
    """Full game state: the categories in column order."""

    categories: Tuple[Category, ...]
    board_id: str = field(default_factory=lambda: token_urlsafe(6))

    def __post_init__(self) -> None:
        object.__setattr__(self, "categories", tuple(self.categories))
        if len(self.categories) != NUM_CATEGORIES:
            raise InvalidBoardShape(
                f"Board needs {NUM_CATEGORIES} categories, got {len(self.categories)}."
            )

    @classmethod
    def create(cls, categories: Iterable[Category]) -> "Board":
        return cls(categories=tuple(categories))

    @property
    def shape(self) -> Tuple[int, int]:
        """``(columns, rows)`` of the grid."""

        return len(self.categories), NUM_QUESTIONS_PER_CAT

    def clue_at(self, coordinate: Coordinate) -> Clue:
        """Return the addressed clue or raise :class:`OutOfBounds`."""

        category_index, clue_index = coordinate
        columns, rows = self.shape
        if not 0 <= category_index < columns or not 0 <= clue_index < rows:
            raise OutOfBounds(
                f"Cell ({category_index}, {clue_index}) is outside the {columns}x{rows} board."
            )
        return self.categories[category_index].clues[clue_index]

    def snapshot(self) -> Dict[str, object]:
        """Serializable view that never leaks unrevealed text."""

        return {
            "board_id": self.board_id,
            "categories": [
                {
                    "title": category.title,
                    "clues": [
                        {"state": clue.reveal_state.value, "showing": clue.showing}
                        for clue in category.clues
                    ],
                }
                for category in self.categories
            ],
        }
