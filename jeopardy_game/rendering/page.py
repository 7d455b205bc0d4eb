"""HTML page for the browser version of the board."""

from __future__ import annotations

import html
from typing import List, Optional

from ..state import Board, RevealState
from .board import PLACEHOLDER

_STYLE = """
body { background: #000; color: #fff; font-family: sans-serif; text-align: center; }
#jeopardy { margin: 1em auto; border-spacing: 6px; }
#jeopardy th, #jeopardy td { background: #060ce9; width: 10em; height: 5em; padding: 0.5em; }
#jeopardy th { text-transform: uppercase; }
#jeopardy td button { background: none; border: 0; color: #ffcc00; font-size: 1em; cursor: pointer; width: 100%; height: 100%; }
#jeopardy td.question button { color: #fff; }
#jeopardy td.answer { color: #7fff7f; }
#jeopardy td.hidden button { font-size: 2.5em; }
.error { color: #ff7f7f; }
"""


def _cell(category_index: int, clue_index: int, state: RevealState, showing: Optional[str]) -> str:
    cell_id = f"{category_index}-{clue_index}"
    if state is RevealState.ANSWER:
        return f'<td id="{cell_id}" class="answer">{html.escape(showing or "")}</td>'
    label = PLACEHOLDER if state is RevealState.HIDDEN else html.escape(showing or "")
    return (
        f'<td id="{cell_id}" class="{state.value}">'
        f'<form method="post" action="/jeopardy/reveal/{category_index}/{clue_index}">'
        f"<button type=\"submit\">{label}</button></form></td>"
    )


def render_board_page(board: Optional[Board], *, error: Optional[str] = None) -> str:
    """Render the full board page, or just the restart control when empty."""

    parts: List[str] = [
        "<!DOCTYPE html>",
        "<html><head><meta charset=\"utf-8\"><title>Jeopardy</title>",
        f"<style>{_STYLE}</style></head><body>",
        "<h1>Jeopardy!</h1>",
    ]
    if error:
        parts.append(f'<p class="error">{html.escape(error)}</p>')
    if board is not None:
        parts.append(f'<table id="jeopardy" data-board="{html.escape(board.board_id)}"><thead><tr>')
        parts.extend(f"<th>{html.escape(category.title)}</th>" for category in board.categories)
        parts.append("</tr></thead><tbody>")
        _, rows = board.shape
        for clue_index in range(rows):
            parts.append("<tr>")
            for category_index, category in enumerate(board.categories):
                clue = category.clues[clue_index]
                parts.append(_cell(category_index, clue_index, clue.reveal_state, clue.showing))
            parts.append("</tr>")
        parts.append("</tbody></table>")
    parts.append(
        '<form method="post" action="/jeopardy/restart">'
        '<button id="startBtn" type="submit">Restart Game</button></form>'
    )
    parts.append("</body></html>")
    return "\n".join(parts)
