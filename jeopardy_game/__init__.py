"""Jeopardy trivia board package."""

from .errors import (
    ContentUnavailable,
    GameAlreadyLoading,
    InsufficientClues,
    InvalidBoardShape,
    JeopardyError,
    OutOfBounds,
)
from .handlers import newgame, quit_cmd, register_handlers, start_cmd
from .services import SESSION_MANAGER, GameSession, SessionListener
from .state import Board, Category, Clue, Coordinate, RevealOutcome, RevealState, reveal


__all__ = [
    "Board",
    "Category",
    "Clue",
    "Coordinate",
    "ContentUnavailable",
    "GameAlreadyLoading",
    "GameSession",
    "InsufficientClues",
    "InvalidBoardShape",
    "JeopardyError",
    "OutOfBounds",
    "RevealOutcome",
    "RevealState",
    "SESSION_MANAGER",
    "SessionListener",
    "newgame",
    "quit_cmd",
    "register_handlers",
    "reveal",
    "start_cmd",
]
