"""Board model and reveal transitions."""

from .models import Board, Category, Clue, Coordinate, RevealState
from .reveal import OutcomeKind, RevealOutcome, reveal

__all__ = [
    "Board",
    "Category",
    "Clue",
    "Coordinate",
    "OutcomeKind",
    "RevealOutcome",
    "RevealState",
    "reveal",
]
