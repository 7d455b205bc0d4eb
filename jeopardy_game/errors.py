"""Exceptions raised by the Jeopardy board core."""

from __future__ import annotations


class JeopardyError(Exception):
    """Base class for all Jeopardy board errors."""


class InvalidBoardShape(JeopardyError, ValueError):
    """The board or one of its categories has the wrong number of entries."""


class InsufficientClues(InvalidBoardShape):
    """A category payload does not carry enough usable clues."""

    def __init__(self, title: str, available: int, required: int) -> None:
        super().__init__(
            f"Category '{title}' has {available} usable clue(s), {required} required."
        )
        self.title = title
        self.available = available
        self.required = required


class ContentUnavailable(JeopardyError):
    """The content provider could not supply categories or clues."""


class OutOfBounds(JeopardyError, IndexError):
    """A reveal request addressed a cell outside the board."""


class GameAlreadyLoading(JeopardyError):
    """A new game was requested while the previous one is still loading."""


__all__ = [
    "JeopardyError",
    "InvalidBoardShape",
    "InsufficientClues",
    "ContentUnavailable",
    "OutOfBounds",
    "GameAlreadyLoading",
]
