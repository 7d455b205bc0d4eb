"""Service layer for the Jeopardy board."""

from .content import ContentProvider, JServiceProvider, clean_text
from .registry import SESSION_MANAGER, SessionManager, telegram_key, web_key
from .session import GameSession, SessionListener

__all__ = [
    "SESSION_MANAGER",
    "ContentProvider",
    "GameSession",
    "JServiceProvider",
    "SessionListener",
    "SessionManager",
    "clean_text",
    "telegram_key",
    "web_key",
]
