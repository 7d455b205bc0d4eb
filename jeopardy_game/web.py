"""FastAPI routes serving the board to a browser."""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from fastapi import APIRouter, HTTPException, Request, Response
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse

from .errors import ContentUnavailable, GameAlreadyLoading, InsufficientClues, OutOfBounds
from .rendering import render_board_page
from .services import SESSION_MANAGER, GameSession, web_key
from .state import Coordinate

logger = logging.getLogger(__name__)

SESSION_COOKIE = "jeopardy_session"

router = APIRouter(prefix="/jeopardy")


def _session_token(request: Request) -> Optional[str]:
    return request.cookies.get(SESSION_COOKIE)


def _attach_cookie(response: Response, token: str) -> Response:
    response.set_cookie(SESSION_COOKIE, token, httponly=True, samesite="lax")
    return response


async def _load(session: GameSession) -> Optional[str]:
    """Start a new game, returning a user-facing error message on failure."""

    try:
        await session.start_new_game()
    except GameAlreadyLoading:
        return "The board is still loading, refresh in a moment."
    except InsufficientClues as exc:
        logger.warning("Browser board could not be built: %s", exc)
        return f"Category '{exc.title}' does not have enough clues. Press Restart Game."
    except ContentUnavailable as exc:
        logger.warning("Trivia content unavailable for browser session: %s", exc)
        return "The trivia service is unavailable right now."
    return None


def _issued_session(request: Request) -> Tuple[str, GameSession]:
    """Return the browser's session, minting a new token for unknown cookies."""

    token = _session_token(request)
    session = SESSION_MANAGER.get(web_key(token)) if token else None
    if session is None:
        return SESSION_MANAGER.issue_web_session()
    return token, session


@router.get("", response_class=HTMLResponse)
async def board_page(request: Request) -> Response:
    token, session = _issued_session(request)
    error = None
    if session.board is None:
        error = await _load(session)
    status_code = 503 if session.board is None and error else 200
    response = HTMLResponse(render_board_page(session.board, error=error), status_code=status_code)
    return _attach_cookie(response, token)


@router.post("/reveal/{category_index}/{clue_index}")
async def reveal_cell(category_index: int, clue_index: int, request: Request) -> Response:
    token = _session_token(request)
    session = SESSION_MANAGER.get(web_key(token)) if token else None
    if session is None or session.board is None:
        raise HTTPException(status_code=409, detail="No board is active for this browser")
    try:
        session.reveal(Coordinate(category_index, clue_index))
    except OutOfBounds as exc:
        logger.error("Browser reveal outside board: %s", exc)
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return RedirectResponse(router.prefix, status_code=303)


@router.post("/restart")
async def restart(request: Request) -> Response:
    token, session = _issued_session(request)
    error = await _load(session)
    if error:
        response: Response = HTMLResponse(render_board_page(session.board, error=error), status_code=503)
    else:
        response = RedirectResponse(router.prefix, status_code=303)
    return _attach_cookie(response, token)


@router.get("/api/board")
async def board_snapshot(request: Request) -> JSONResponse:
    token = _session_token(request)
    session = SESSION_MANAGER.get(web_key(token)) if token else None
    if session is None or session.board is None:
        raise HTTPException(status_code=404, detail="No board is active for this browser")
    return JSONResponse(session.board.snapshot())


__all__ = ["router", "SESSION_COOKIE"]
