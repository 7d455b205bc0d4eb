"""Tests for the jService HTTP client."""

from __future__ import annotations

import http.client
import io
import json
import socket
from unittest.mock import patch
from urllib.error import HTTPError, URLError

import pytest

from jeopardy_game.errors import ContentUnavailable
from jeopardy_game.services import JServiceProvider, clean_text


class DummyResponse(io.BytesIO):
    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


def _serve(payload, requested: list | None = None):
    body = payload if isinstance(payload, bytes) else json.dumps(payload).encode("utf-8")

    def fake_urlopen(req, timeout=None):
        if requested is not None:
            requested.append((req.full_url, timeout, req.get_header("User-agent")))
        return DummyResponse(body)

    return fake_urlopen


@pytest.mark.anyio
async def test_list_category_ids_requests_pool() -> None:
    requested: list = []
    payload = [{"id": 11, "title": "a"}, {"id": "12", "title": "b"}, {"title": "no id"}]
    provider = JServiceProvider("https://example.test/api/", timeout=3)

    with patch("jeopardy_game.services.content.request.urlopen", _serve(payload, requested)):
        ids = await provider.list_category_ids(100)

    assert ids == [11, 12]
    url, timeout, agent = requested[0]
    assert url == "https://example.test/api/categories?count=100"
    assert timeout == 3
    assert agent.startswith("jeopardy-board")


@pytest.mark.anyio
async def test_fetch_category_cleans_html_and_entities() -> None:
    requested: list = []
    payload = {
        "id": 42,
        "title": "potent  potables",
        "clues": [
            {"question": "Author of <i>Hamlet</i>", "answer": "<i>William Shakespeare</i>"},
            {"question": "Tom &amp; Jerry's  creators", "answer": "Hanna-Barbera"},
            {"question": None, "answer": "orphan"},
            "garbage",
        ],
    }
    provider = JServiceProvider("https://example.test/api")

    with patch("jeopardy_game.services.content.request.urlopen", _serve(payload, requested)):
        category = await provider.fetch_category(42)

    assert requested[0][0] == "https://example.test/api/category?id=42"
    assert category["title"] == "potent potables"
    assert category["clues"][0] == {"question": "Author of Hamlet", "answer": "William Shakespeare"}
    assert category["clues"][1]["question"] == "Tom & Jerry's creators"
    assert category["clues"][2] == {"question": "", "answer": "orphan"}
    assert len(category["clues"]) == 3


@pytest.mark.anyio
@pytest.mark.parametrize(
    "error",
    [
        HTTPError("https://example.test/api/categories", 500, "boom", {}, None),
        URLError("connection refused"),
        socket.timeout("timed out"),
    ],
)
async def test_network_errors_become_content_unavailable(error: Exception) -> None:
    def failing_urlopen(req, timeout=None):
        raise error

    provider = JServiceProvider("https://example.test/api")
    with patch("jeopardy_game.services.content.request.urlopen", failing_urlopen):
        with pytest.raises(ContentUnavailable):
            await provider.list_category_ids(100)


class BrokenResponse(DummyResponse):
    def __init__(self, error: Exception) -> None:
        super().__init__(b"")
        self._error = error

    def read(self, *args):
        raise self._error


@pytest.mark.anyio
@pytest.mark.parametrize(
    "error",
    [ConnectionResetError("reset by peer"), http.client.IncompleteRead(b"[{", 100)],
)
async def test_dropped_connection_becomes_content_unavailable(error: Exception) -> None:
    def urlopen(req, timeout=None):
        return BrokenResponse(error)

    provider = JServiceProvider("https://example.test/api")
    with patch("jeopardy_game.services.content.request.urlopen", urlopen):
        with pytest.raises(ContentUnavailable):
            await provider.list_category_ids(100)


@pytest.mark.anyio
async def test_undecodable_body_becomes_content_unavailable() -> None:
    provider = JServiceProvider("https://example.test/api")
    with patch("jeopardy_game.services.content.request.urlopen", _serve(b"\x80\x81garbage")):
        with pytest.raises(ContentUnavailable):
            await provider.list_category_ids(100)


@pytest.mark.anyio
async def test_malformed_json_becomes_content_unavailable() -> None:
    provider = JServiceProvider("https://example.test/api")
    with patch("jeopardy_game.services.content.request.urlopen", _serve(b"<html>not json</html>")):
        with pytest.raises(ContentUnavailable):
            await provider.fetch_category(1)


@pytest.mark.anyio
async def test_unexpected_shapes_become_content_unavailable() -> None:
    provider = JServiceProvider("https://example.test/api")
    with patch("jeopardy_game.services.content.request.urlopen", _serve({"error": "nope"})):
        with pytest.raises(ContentUnavailable):
            await provider.list_category_ids(100)
    with patch("jeopardy_game.services.content.request.urlopen", _serve([1, 2, 3])):
        with pytest.raises(ContentUnavailable):
            await provider.fetch_category(1)
    with patch("jeopardy_game.services.content.request.urlopen", _serve({"title": "x", "clues": "nope"})):
        with pytest.raises(ContentUnavailable):
            await provider.fetch_category(1)


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, ""),
        ("  plain   text ", "plain text"),
        ("<b>bold</b> move", "bold move"),
        ("rock &amp; roll", "rock & roll"),
        ("it\\'s", "it's"),
    ],
)
def test_clean_text(raw, expected: str) -> None:
    assert clean_text(raw) == expected
