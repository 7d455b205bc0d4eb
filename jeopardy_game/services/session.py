"""Game session: loads a fresh board and hands it to the presentation layer."""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

from .. import config
from ..errors import ContentUnavailable, GameAlreadyLoading
from ..state.models import Board, Category, Coordinate, Sampler, default_sampler
from ..state.reveal import RevealOutcome, reveal
from .content import ContentProvider

logger = logging.getLogger(__name__)


class SessionListener:
    """Receiver of session lifecycle notifications.

    Presentation layers subclass this and override the hooks they render.
    """

    async def loading_started(self, session: "GameSession") -> None:
        return None

    async def board_ready(self, session: "GameSession", board: Board) -> None:
        return None

    async def loading_finished(self, session: "GameSession") -> None:
        return None


class GameSession:
    """Owns the current board of one player surface (chat or browser)."""

    def __init__(
        self,
        provider: ContentProvider,
        *,
        sampler: Sampler = default_sampler,
        category_pool_size: int = config.CATEGORY_POOL_SIZE,
        load_timeout: Optional[float] = config.LOAD_TIMEOUT,
    ) -> None:
        self._provider = provider
        self._sampler = sampler
        self._category_pool_size = category_pool_size
        self._load_timeout = load_timeout
        self._board: Optional[Board] = None
        self._loading = False
        self.listeners: List[SessionListener] = []

    @property
    def board(self) -> Optional[Board]:
        return self._board

    @property
    def is_loading(self) -> bool:
        return self._loading

    def subscribe(self, listener: SessionListener) -> SessionListener:
        self.listeners.append(listener)
        return listener

    async def start_new_game(self) -> Board:
        """Load a brand new board and make it the current one.

        The previous board stays in place until the new one has been fully
        assembled; any failure leaves it untouched.
        """

        if self._loading:
            raise GameAlreadyLoading("A board is already being loaded.")
        self._loading = True
        try:
            for listener in list(self.listeners):
                await listener.loading_started(self)
            if self._load_timeout:
                try:
                    board = await asyncio.wait_for(self._build_board(), self._load_timeout)
                except asyncio.TimeoutError as exc:
                    raise ContentUnavailable(
                        f"Board did not load within {self._load_timeout:g}s."
                    ) from exc
            else:
                board = await self._build_board()
            self._board = board
            logger.info("Board %s is ready", board.board_id)
            for listener in list(self.listeners):
                await listener.board_ready(self, board)
            return board
        finally:
            self._loading = False
            for listener in list(self.listeners):
                await listener.loading_finished(self)

    def reveal(self, coordinate: Coordinate) -> RevealOutcome:
        """Apply a click to the current board."""

        if self._board is None:
            raise ContentUnavailable("No board has been loaded yet.")
        return reveal(self._board, coordinate)

    async def _build_board(self) -> Board:
        category_ids = await self._sample_category_ids()
        categories: List[Category] = []
        for category_id in category_ids:
            payload = await self._provider.fetch_category(category_id)
            categories.append(Category.from_payload(payload, self._sampler))
        return Board.create(categories)

    async def _sample_category_ids(self) -> List[int]:
        raw_ids = await self._provider.list_category_ids(self._category_pool_size)
        distinct = list(dict.fromkeys(raw_ids))
        if len(distinct) < config.NUM_CATEGORIES:
            raise ContentUnavailable(
                f"Need {config.NUM_CATEGORIES} distinct categories, provider returned {len(distinct)}."
            )
        chosen = list(dict.fromkeys(self._sampler(distinct, config.NUM_CATEGORIES)))
        if len(chosen) != config.NUM_CATEGORIES:
            raise ContentUnavailable("Category sampling did not yield distinct categories.")
        logger.debug("Sampled categories %s", chosen)
        return chosen


__all__ = ["GameSession", "SessionListener"]
