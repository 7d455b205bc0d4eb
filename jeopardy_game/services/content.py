"""Clients that supply categories and clues for the board."""

from __future__ import annotations

import asyncio
import http.client
import json
import logging
import socket
from typing import Any, Dict, List, Optional, Protocol

from urllib import parse, request
from urllib.error import HTTPError, URLError

from bs4 import BeautifulSoup

from .. import config
from ..errors import ContentUnavailable

logger = logging.getLogger(__name__)


class ContentProvider(Protocol):
    """Source of category identifiers and category clue data."""

    async def list_category_ids(self, count: int) -> List[int]:
        ...

    async def fetch_category(self, category_id: int) -> Dict[str, Any]:
        ...


def clean_text(value: object) -> str:
    """Strip HTML markup and entities from API text and collapse whitespace."""

    if value is None:
        return ""
    text = str(value)
    if "<" in text or "&" in text:
        text = BeautifulSoup(text, "html.parser").get_text(" ")
    text = text.replace("\\'", "'")
    return " ".join(text.split())


class JServiceProvider:
    """jService-compatible HTTP client.

    Requests are made with ``urllib`` in a worker thread so the event loop
    keeps serving updates while the board loads.
    """

    def __init__(
        self,
        base_url: str = config.API_BASE_URL,
        *,
        timeout: Optional[float] = config.HTTP_TIMEOUT,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def list_category_ids(self, count: int) -> List[int]:
        payload = await asyncio.to_thread(self._get_json, "categories", {"count": count})
        if not isinstance(payload, list):
            raise ContentUnavailable("Unexpected categories payload from the API.")
        ids: List[int] = []
        for entry in payload:
            try:
                ids.append(int(entry["id"]))
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed category entry %s", entry)
        return ids

    async def fetch_category(self, category_id: int) -> Dict[str, Any]:
        payload = await asyncio.to_thread(self._get_json, "category", {"id": category_id})
        if not isinstance(payload, dict):
            raise ContentUnavailable(f"Unexpected payload for category {category_id}.")
        clues = payload.get("clues") or []
        if not isinstance(clues, list):
            raise ContentUnavailable(f"Category {category_id} has a malformed clue list.")
        return {
            "title": clean_text(payload.get("title")),
            "clues": [
                {"question": clean_text(clue.get("question")), "answer": clean_text(clue.get("answer"))}
                for clue in clues
                if isinstance(clue, dict)
            ],
        }

    def _get_json(self, endpoint: str, params: Dict[str, Any]) -> Any:
        url = f"{self._base_url}/{endpoint}?{parse.urlencode(params)}"
        req = request.Request(url, headers={"User-Agent": config.USER_AGENT})
        logger.info("Requesting %s", url)
        try:
            with request.urlopen(req, timeout=self._timeout) as resp:  # pragma: no cover - network
                return json.loads(resp.read())
        except HTTPError as e:
            logger.error("Trivia API HTTP error for %s: %s", url, e)
            raise ContentUnavailable(f"Trivia API returned HTTP {e.code}.") from e
        except URLError as e:
            logger.error("Trivia API URL error for %s: %s", url, e.reason)
            raise ContentUnavailable("Trivia API is unreachable.") from e
        except (socket.timeout, TimeoutError) as e:
            logger.error("Trivia API request to %s timed out", url)
            raise ContentUnavailable("Trivia API request timed out.") from e
        except ValueError as e:
            logger.error("Trivia API JSON error for %s: %s", url, e)
            raise ContentUnavailable("Trivia API returned malformed JSON.") from e
        except (OSError, http.client.HTTPException) as e:
            logger.error("Trivia API connection to %s failed: %s", url, e)
            raise ContentUnavailable("Trivia API connection failed.") from e


__all__ = ["ContentProvider", "JServiceProvider", "clean_text"]
