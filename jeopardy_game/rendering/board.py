"""Rendering helpers for visualising the Jeopardy board."""

from __future__ import annotations

import html
import io
import textwrap
from dataclasses import dataclass
from typing import List

from PIL import Image, ImageDraw, ImageFont

from ..state import Board, Clue, RevealState

PLACEHOLDER = "?"


@dataclass(slots=True)
class BoardRenderTheme:
    """Container describing the visual configuration of the board."""

    background: str = "#060ce9"
    grid: str = "#000000"
    header_text: str = "#ffffff"
    placeholder_text: str = "#ffcc00"
    question_text: str = "#ffffff"
    answer_text: str = "#7fff7f"


def cell_label(clue: Clue, limit: int = 24) -> str:
    """Short text for a grid cell: the placeholder or a trimmed reveal."""

    text = clue.showing
    if text is None:
        return PLACEHOLDER
    return text if len(text) <= limit else text[: limit - 1].rstrip() + "…"


class BoardRenderer:
    """Render both textual summaries and Pillow images of the board."""

    BOARD_SIZE = (1200, 720)
    HEADER_HEIGHT = 120
    MARGIN = 12
    REGULAR_FONTS = (
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    )
    BOLD_FONTS = (
        "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
    )

    def __init__(self, theme: BoardRenderTheme | None = None) -> None:
        self.theme = theme or BoardRenderTheme()
        self._font_cache: dict[tuple[int, bool], ImageFont.ImageFont] = {}

    def render_category_list(self, board: Board) -> str:
        """Return an HTML-formatted list of column titles for chat messages."""

        lines = [
            f"{index}. <b>{html.escape(category.title.upper())}</b>"
            for index, category in enumerate(board.categories, start=1)
        ]
        return "\n".join(lines)

    def render_board_image(self, board: Board) -> io.BytesIO:
        """Render the board as a PNG stored in an in-memory buffer."""

        image = Image.new("RGB", self.BOARD_SIZE, color=self.theme.grid)
        draw = ImageDraw.Draw(image)
        columns, rows = board.shape
        width, height = self.BOARD_SIZE
        col_width = width / columns
        row_height = (height - self.HEADER_HEIGHT) / rows
        for col, category in enumerate(board.categories):
            left = col * col_width
            self._draw_cell(
                draw,
                (left, 0, left + col_width, self.HEADER_HEIGHT),
                category.title.upper(),
                self._get_font(20, bold=True),
                self.theme.header_text,
            )
            for row, clue in enumerate(category.clues):
                top = self.HEADER_HEIGHT + row * row_height
                box = (left, top, left + col_width, top + row_height)
                if clue.reveal_state is RevealState.HIDDEN:
                    self._draw_cell(draw, box, PLACEHOLDER, self._get_font(56, bold=True), self.theme.placeholder_text)
                elif clue.reveal_state is RevealState.QUESTION:
                    self._draw_cell(draw, box, clue.question, self._get_font(15), self.theme.question_text)
                else:
                    self._draw_cell(draw, box, clue.answer, self._get_font(18, bold=True), self.theme.answer_text)
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        buffer.seek(0)
        return buffer

    def _draw_cell(
        self,
        draw: ImageDraw.ImageDraw,
        box: tuple[float, float, float, float],
        text: str,
        font: ImageFont.ImageFont,
        fill: str,
    ) -> None:
        left, top, right, bottom = box
        m = self.MARGIN / 2
        draw.rectangle((left + m, top + m, right - m, bottom - m), fill=self.theme.background)
        lines = self._wrap(draw, text, font, right - left - 2 * self.MARGIN)
        line_height = self._font_height(font) + 6
        max_lines = max(int((bottom - top - 2 * self.MARGIN) // line_height), 1)
        if len(lines) > max_lines:
            lines = lines[:max_lines]
            lines[-1] = lines[-1].rstrip(" .") + "…"
        y = top + (bottom - top - line_height * len(lines)) / 2
        for line in lines:
            line_width = draw.textlength(line, font=font)
            draw.text((left + (right - left - line_width) / 2, y), line, font=font, fill=fill)
            y += line_height

    def _wrap(
        self, draw: ImageDraw.ImageDraw, text: str, font: ImageFont.ImageFont, max_width: float
    ) -> List[str]:
        for width in range(40, 4, -2):
            lines = textwrap.wrap(text, width=width) or [""]
            if all(draw.textlength(line, font=font) <= max_width for line in lines):
                return lines
        return textwrap.wrap(text, width=4) or [""]

    def _get_font(self, size: int, *, bold: bool = False) -> ImageFont.ImageFont:
        key = (size, bold)
        cached = self._font_cache.get(key)
        if cached:
            return cached
        candidates = self.BOLD_FONTS if bold else self.REGULAR_FONTS
        for path in candidates:
            try:
                font = ImageFont.truetype(path, size=size)
                self._font_cache[key] = font
                return font
            except OSError:
                continue
        fallback = ImageFont.load_default()
        self._font_cache[key] = fallback
        return fallback

    def _font_height(self, font: ImageFont.ImageFont) -> int:
        bbox = font.getbbox("Ag")
        return int(bbox[3] - bbox[1])
