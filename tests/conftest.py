"""Shared fixtures and test doubles for the Jeopardy board tests."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from jeopardy_game.errors import ContentUnavailable
from jeopardy_game.services import SESSION_MANAGER


def first_n(population: Sequence, count: int) -> List:
    """Deterministic sampler: keep the first ``count`` items."""

    return list(population)[:count]


def make_payload(title: str, clue_count: int = 5) -> Dict[str, Any]:
    return {
        "title": title,
        "clues": [
            {"question": f"{title} question {index}", "answer": f"{title} answer {index}"}
            for index in range(clue_count)
        ],
    }


class FakeProvider:
    """In-memory content provider recording every call."""

    def __init__(
        self,
        category_ids: Optional[List[int]] = None,
        payloads: Optional[Dict[int, Dict[str, Any]]] = None,
    ) -> None:
        self.category_ids = category_ids if category_ids is not None else list(range(1, 11))
        self.payloads = payloads or {cid: make_payload(f"Cat {cid}") for cid in self.category_ids}
        self.listed: List[int] = []
        self.fetched: List[int] = []
        self.fail_listing = False

    async def list_category_ids(self, count: int) -> List[int]:
        self.listed.append(count)
        if self.fail_listing:
            raise ContentUnavailable("listing failed")
        return list(self.category_ids)

    async def fetch_category(self, category_id: int) -> Dict[str, Any]:
        self.fetched.append(category_id)
        payload = self.payloads.get(category_id)
        if payload is None:
            raise ContentUnavailable(f"category {category_id} missing")
        return payload


@pytest.fixture
def anyio_backend() -> str:
    """Run AnyIO tests on asyncio only (Telegram handlers use asyncio)."""

    return "asyncio"


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture(autouse=True)
def _reset_session_manager(provider: FakeProvider):
    """Point the singleton manager at the fake provider and clean it between tests."""

    original_provider = SESSION_MANAGER.provider
    original_factory = SESSION_MANAGER.session_factory
    SESSION_MANAGER.reset()
    SESSION_MANAGER.provider = provider
    yield
    SESSION_MANAGER.reset()
    SESSION_MANAGER.provider = original_provider
    SESSION_MANAGER.session_factory = original_factory
