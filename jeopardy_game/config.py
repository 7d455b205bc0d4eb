"""Environment-driven settings for the Jeopardy board."""

from __future__ import annotations

import os
from typing import Optional

NUM_CATEGORIES = 6
NUM_QUESTIONS_PER_CAT = 5


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


API_BASE_URL = os.environ.get("JEOPARDY_API_BASE_URL", "https://jservice.io/api").rstrip("/")
HTTP_TIMEOUT = _env_float("JEOPARDY_HTTP_TIMEOUT", 10.0)
LOAD_TIMEOUT = _env_float("JEOPARDY_LOAD_TIMEOUT", None)
CATEGORY_POOL_SIZE = max(_env_int("JEOPARDY_CATEGORY_POOL", 100), NUM_CATEGORIES)
USER_AGENT = "jeopardy-board/1.0"
WEB_SESSION_LIMIT = max(_env_int("JEOPARDY_WEB_SESSIONS", 256), 1)

__all__ = [
    "NUM_CATEGORIES",
    "NUM_QUESTIONS_PER_CAT",
    "API_BASE_URL",
    "HTTP_TIMEOUT",
    "LOAD_TIMEOUT",
    "CATEGORY_POOL_SIZE",
    "USER_AGENT",
    "WEB_SESSION_LIMIT",
]
