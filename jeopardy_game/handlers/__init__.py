"""Telegram handlers for the Jeopardy board."""

from .gameplay import (
    TelegramBoardPresenter,
    build_board_keyboard,
    help_cmd,
    newgame,
    quit_cmd,
    start_cmd,
    start_game,
)
from .router import register_handlers

__all__ = [
    "TelegramBoardPresenter",
    "build_board_keyboard",
    "register_handlers",
    "start_cmd",
    "start_game",
    "newgame",
    "help_cmd",
    "quit_cmd",
]
