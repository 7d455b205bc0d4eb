"""Rendering facade for the Jeopardy board."""

from .board import PLACEHOLDER, BoardRenderer, BoardRenderTheme, cell_label
from .page import render_board_page

__all__ = ["PLACEHOLDER", "BoardRenderer", "BoardRenderTheme", "cell_label", "render_board_page"]
