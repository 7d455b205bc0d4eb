"""In-memory registry of game sessions keyed by presentation surface."""

from __future__ import annotations

import logging
from collections import OrderedDict
from secrets import token_urlsafe
from typing import Callable, Hashable, Optional, Tuple

from .. import config
from .content import ContentProvider, JServiceProvider
from .session import GameSession, SessionListener

SessionKey = Hashable
ListenerFactory = Callable[[GameSession], SessionListener]


def telegram_key(chat_id: int, thread_id: Optional[int] = None) -> SessionKey:
    return ("tg", chat_id, thread_id or 0)


def web_key(token: str) -> SessionKey:
    return ("web", token)


def _is_web(key: SessionKey) -> bool:
    return isinstance(key, tuple) and key[:1] == ("web",)


class SessionManager:
    """Store and retrieve the game session bound to a chat or browser.

    Browser sessions are kept in least-recently-used order and the oldest
    ones are evicted once more than ``max_web_sessions`` exist. Chat
    sessions are never evicted.
    """

    def __init__(
        self,
        provider: Optional[ContentProvider] = None,
        session_factory: Optional[Callable[[ContentProvider], GameSession]] = None,
        *,
        max_web_sessions: int = config.WEB_SESSION_LIMIT,
    ) -> None:
        self._logger = logging.getLogger(__name__)
        self.provider: ContentProvider = provider or JServiceProvider()
        self.session_factory = session_factory or GameSession
        self.max_web_sessions = max_web_sessions
        self._sessions: "OrderedDict[SessionKey, GameSession]" = OrderedDict()

    # Lookup helpers ---------------------------------------------------
    def get(self, key: SessionKey) -> Optional[GameSession]:
        """Return the session bound to ``key``, if any."""

        session = self._sessions.get(key)
        if session is not None:
            self._sessions.move_to_end(key)
        return session

    def get_or_create(
        self, key: SessionKey, *, listener_factory: Optional[ListenerFactory] = None
    ) -> GameSession:
        """Return the session for ``key``, creating it on first use.

        ``listener_factory`` only runs when a new session is created.
        """

        session = self.get(key)
        if session is None:
            session = self.session_factory(self.provider)
            if listener_factory is not None:
                session.subscribe(listener_factory(session))
            self._sessions[key] = session
            self._logger.debug("Created game session for %s", key)
            if _is_web(key):
                self._evict_web_sessions()
        return session

    def issue_web_session(self) -> Tuple[str, GameSession]:
        """Mint a fresh browser token and bind a new session to it."""

        token = token_urlsafe(12)
        return token, self.get_or_create(web_key(token))

    @property
    def web_session_count(self) -> int:
        return sum(1 for key in self._sessions if _is_web(key))

    # Mutation helpers -------------------------------------------------
    def _evict_web_sessions(self) -> None:
        web_keys = [key for key in self._sessions if _is_web(key)]
        for key in web_keys[: max(len(web_keys) - self.max_web_sessions, 0)]:
            del self._sessions[key]
            self._logger.info("Evicted least recently used browser session")

    def drop(self, key: SessionKey) -> None:
        self._sessions.pop(key, None)

    def reset_chat(self, chat_id: int) -> int:
        """Drop every Telegram session bound to the chat and return how many."""

        keys = [key for key in self._sessions if isinstance(key, tuple) and key[:2] == ("tg", chat_id)]
        for key in keys:
            self._sessions.pop(key, None)
        return len(keys)

    def reset(self) -> None:
        """Clear all sessions (used in tests)."""

        self._sessions.clear()


SESSION_MANAGER = SessionManager()

__all__ = ["SESSION_MANAGER", "SessionManager", "SessionKey", "telegram_key", "web_key"]
