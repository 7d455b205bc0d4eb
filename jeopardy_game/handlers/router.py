"""Registration helpers for Jeopardy handlers."""

from __future__ import annotations

from typing import Optional

from telegram.ext import Application, CallbackQueryHandler, CommandHandler

from .gameplay import (
    CALLBACK_PREFIX,
    column_callback,
    help_cmd,
    newgame,
    quit_cmd,
    restart_callback,
    reveal_callback,
    start_cmd,
)


def register_handlers(application: Optional[Application]) -> None:
    """Attach Jeopardy command and callback handlers to the shared application."""

    if not application:
        return

    application.add_handler(CommandHandler("jeopardy", start_cmd))
    application.add_handler(CommandHandler("newgame", newgame))
    application.add_handler(CommandHandler("help", help_cmd, block=False))
    application.add_handler(CommandHandler("quit", quit_cmd, block=False))
    application.add_handler(CallbackQueryHandler(reveal_callback, pattern=f"^{CALLBACK_PREFIX}:reveal:"))
    application.add_handler(CallbackQueryHandler(column_callback, pattern=f"^{CALLBACK_PREFIX}:col:"))
    application.add_handler(CallbackQueryHandler(restart_callback, pattern=f"^{CALLBACK_PREFIX}:restart$"))
