"""Telegram handlers that load the board and reveal clues."""

from __future__ import annotations

import logging
from typing import List, Optional

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, InputFile, Update
from telegram.error import TelegramError
from telegram.ext import ContextTypes

from ..errors import ContentUnavailable, GameAlreadyLoading, InsufficientClues, OutOfBounds
from ..rendering import BoardRenderer, cell_label
from ..services import SESSION_MANAGER, GameSession, SessionListener, telegram_key
from ..state import Board, Coordinate

logger = logging.getLogger(__name__)

RENDERER = BoardRenderer()
CALLBACK_PREFIX = "jeo"
ALERT_LIMIT = 200
CELL_LABEL_LIMIT = 12


class TelegramBoardPresenter(SessionListener):
    """Shows the loading indicator and the fresh board in one chat."""

    def __init__(self, bot, chat_id: int, thread_id: Optional[int] = None) -> None:
        self.bot = bot
        self.chat_id = chat_id
        self.thread_id = thread_id
        self.loading_message_id: Optional[int] = None

    async def loading_started(self, session: GameSession) -> None:
        if not self.bot:
            return
        try:
            sent = await self.bot.send_message(
                self.chat_id,
                "⏳ Loading the board…",
                message_thread_id=self.thread_id,
            )
        except TelegramError as exc:
            logger.warning("Failed to post loading message in chat %s: %s", self.chat_id, exc)
            return
        self.loading_message_id = getattr(sent, "message_id", None)

    async def board_ready(self, session: GameSession, board: Board) -> None:
        if not self.bot:
            return
        buffer = RENDERER.render_board_image(board)
        try:
            await self.bot.send_photo(
                self.chat_id,
                photo=InputFile(buffer, filename="jeopardy_board.png"),
                message_thread_id=self.thread_id,
            )
        except TelegramError as exc:
            logger.warning("Failed to send board image to chat %s: %s", self.chat_id, exc)
        try:
            await self.bot.send_message(
                self.chat_id,
                _format_board_message(board),
                parse_mode="HTML",
                reply_markup=build_board_keyboard(board),
                message_thread_id=self.thread_id,
            )
        except TelegramError as exc:
            logger.warning("Failed to send board keyboard to chat %s: %s", self.chat_id, exc)

    async def loading_finished(self, session: GameSession) -> None:
        message_id = self.loading_message_id
        self.loading_message_id = None
        if not self.bot or message_id is None:
            return
        try:
            await self.bot.delete_message(self.chat_id, message_id)
        except TelegramError as exc:
            logger.warning("Failed to remove loading message in chat %s: %s", self.chat_id, exc)


def _format_board_message(board: Board) -> str:
    return "\n".join(
        [
            "<b>Jeopardy!</b>",
            RENDERER.render_category_list(board),
            "",
            "Tap a cell once for the question and again for the answer.",
        ]
    )


def build_board_keyboard(board: Board) -> InlineKeyboardMarkup:
    """Inline keyboard grid: column numbers, clue cells, restart button."""

    buttons: List[List[InlineKeyboardButton]] = [
        [
            InlineKeyboardButton(str(index), callback_data=f"{CALLBACK_PREFIX}:col:{board.board_id}:{index - 1}")
            for index in range(1, len(board.categories) + 1)
        ]
    ]
    _, rows = board.shape
    for clue_index in range(rows):
        row: List[InlineKeyboardButton] = []
        for category_index, category in enumerate(board.categories):
            coordinate = Coordinate(category_index, clue_index)
            row.append(
                InlineKeyboardButton(
                    cell_label(category.clues[clue_index], CELL_LABEL_LIMIT),
                    callback_data=f"{CALLBACK_PREFIX}:reveal:{board.board_id}:{coordinate.encode()}",
                )
            )
        buttons.append(row)
    buttons.append([InlineKeyboardButton("🔄 Restart Game", callback_data=f"{CALLBACK_PREFIX}:restart")])
    return InlineKeyboardMarkup(buttons)


def _truncate(text: str, limit: int = ALERT_LIMIT) -> str:
    return text if len(text) <= limit else text[: limit - 1].rstrip() + "…"


def _session_for(chat_id: int, thread_id: Optional[int], context: ContextTypes.DEFAULT_TYPE) -> GameSession:
    return SESSION_MANAGER.get_or_create(
        telegram_key(chat_id, thread_id),
        listener_factory=lambda _session: TelegramBoardPresenter(context.bot, chat_id, thread_id),
    )


async def _send_text(
    context: ContextTypes.DEFAULT_TYPE, chat_id: int, thread_id: Optional[int], text: str
) -> None:
    if context.bot:
        await context.bot.send_message(chat_id, text, message_thread_id=thread_id)


async def start_game(context: ContextTypes.DEFAULT_TYPE, chat_id: int, thread_id: Optional[int]) -> None:
    """Load a fresh board for the chat and report failures there."""

    session = _session_for(chat_id, thread_id, context)
    try:
        await session.start_new_game()
    except GameAlreadyLoading:
        await _send_text(context, chat_id, thread_id, "The board is still loading, please wait.")
    except InsufficientClues as exc:
        logger.warning("Board for chat %s could not be built: %s", chat_id, exc)
        await _send_text(
            context,
            chat_id,
            thread_id,
            f"Category '{exc.title}' does not have enough clues. Try /newgame again.",
        )
    except ContentUnavailable as exc:
        logger.warning("Trivia content unavailable for chat %s: %s", chat_id, exc)
        await _send_text(context, chat_id, thread_id, "The trivia service is unavailable right now. Try again later.")


async def newgame(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    message = update.effective_message
    chat = update.effective_chat
    if not message or not chat:
        return
    thread_id = message.message_thread_id or None
    await start_game(context, chat.id, thread_id)


async def start_cmd(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await newgame(update, context)


async def help_cmd(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    message = update.effective_message
    if not message:
        return
    await message.reply_text(
        "<b>Jeopardy</b>\n"
        "/newgame – deal a fresh board of 6 categories.\n"
        "Tap a <code>?</code> cell to see the question, tap it again for the answer.\n"
        "/quit – drop the current board, /quit all – drop every board in this chat.",
        parse_mode="HTML",
    )


def _query_location(query) -> tuple[Optional[int], Optional[int]]:
    message = getattr(query, "message", None)
    chat = getattr(message, "chat", None) if message else None
    if not chat:
        return None, None
    return chat.id, getattr(message, "message_thread_id", None) or None


async def reveal_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    query = update.callback_query
    if not query:
        return
    data = query.data or ""
    board_id, _, raw_coordinate = data.partition(":reveal:")[2].rpartition(":")
    chat_id, thread_id = _query_location(query)
    try:
        coordinate = Coordinate.parse(raw_coordinate)
    except ValueError:
        logger.error("Malformed reveal callback data %r", data)
        await query.answer()
        return
    session = SESSION_MANAGER.get(telegram_key(chat_id, thread_id)) if chat_id is not None else None
    board = session.board if session else None
    if board is None or board.board_id != board_id:
        await query.answer("This board is no longer active. Use /newgame.", show_alert=True)
        return
    try:
        outcome = session.reveal(coordinate)
    except OutOfBounds:
        logger.exception("Reveal request outside board %s: %s", board_id, data)
        await query.answer()
        return
    if outcome.is_noop:
        await query.answer()
        return
    try:
        await query.edit_message_reply_markup(reply_markup=build_board_keyboard(board))
    except TelegramError as exc:
        logger.warning("Failed to refresh board keyboard: %s", exc)
    await query.answer(_truncate(outcome.text or ""), show_alert=True)


async def column_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    query = update.callback_query
    if not query:
        return
    data = query.data or ""
    board_id, _, raw_index = data.partition(":col:")[2].rpartition(":")
    chat_id, thread_id = _query_location(query)
    session = SESSION_MANAGER.get(telegram_key(chat_id, thread_id)) if chat_id is not None else None
    board = session.board if session else None
    if board is None or board.board_id != board_id or not raw_index.isdigit():
        await query.answer()
        return
    index = int(raw_index)
    if index >= len(board.categories):
        await query.answer()
        return
    await query.answer(_truncate(board.categories[index].title))


async def restart_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    query = update.callback_query
    if not query:
        return
    await query.answer()
    chat_id, thread_id = _query_location(query)
    if chat_id is None:
        return
    await start_game(context, chat_id, thread_id)


async def quit_cmd(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Drop this thread's board, or every board in the chat with ``/quit all``."""

    message = update.effective_message
    chat = update.effective_chat
    if not message or not chat:
        return
    args = getattr(context, "args", None) or []
    if args and args[0].lower() == "all":
        dropped = SESSION_MANAGER.reset_chat(chat.id)
        if not dropped:
            await message.reply_text("No board is active in this chat.")
            return
        await message.reply_text(f"Dropped {dropped} board(s). Send /newgame to play again.")
        return
    thread_id = message.message_thread_id or None
    key = telegram_key(chat.id, thread_id)
    if SESSION_MANAGER.get(key) is None:
        await message.reply_text("No board is active in this chat.")
        return
    SESSION_MANAGER.drop(key)
    await message.reply_text("Board dropped. Send /newgame to play again.")
