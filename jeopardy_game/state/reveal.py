"""Clue reveal transitions applied to a board cell."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from .models import Board, Coordinate, RevealState

logger = logging.getLogger(__name__)


class OutcomeKind(str, Enum):
    QUESTION = "question"
    ANSWER = "answer"
    NOOP = "noop"


@dataclass(frozen=True, slots=True)
class RevealOutcome:
    """Result of a click on a board cell."""

    coordinate: Coordinate
    kind: OutcomeKind
    text: Optional[str] = None

    @property
    def is_noop(self) -> bool:
        return self.kind is OutcomeKind.NOOP


def reveal(board: Board, coordinate: Union[Coordinate, Tuple[int, int]]) -> RevealOutcome:
    """Advance the addressed clue one step: hidden, question, answer.

    Clicks on a clue that already shows its answer are ignored and reported
    as ``NOOP``. Raises :class:`~jeopardy_game.errors.OutOfBounds` for cells
    outside the board.
    """

    coordinate = Coordinate(*coordinate)
    clue = board.clue_at(coordinate)
    if clue.reveal_state is RevealState.HIDDEN:
        clue.reveal_state = RevealState.QUESTION
        outcome = RevealOutcome(coordinate, OutcomeKind.QUESTION, clue.question)
    elif clue.reveal_state is RevealState.QUESTION:
        clue.reveal_state = RevealState.ANSWER
        outcome = RevealOutcome(coordinate, OutcomeKind.ANSWER, clue.answer)
    else:
        outcome = RevealOutcome(coordinate, OutcomeKind.NOOP)
    logger.debug("Board %s cell %s -> %s", board.board_id, coordinate.encode(), outcome.kind.value)
    return outcome


__all__ = ["OutcomeKind", "RevealOutcome", "reveal"]
