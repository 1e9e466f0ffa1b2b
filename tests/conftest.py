"""Pytest configuration and test helpers."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import httpx
import pytest


# Ensure the application package is importable when running tests without an
# editable install. This mirrors the expected runtime layout where ``app`` sits
# at the project root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.config import Settings  # noqa: E402

BASE_URL = "https://api.example.com"


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO tests to run on asyncio without requiring trio."""

    return "asyncio"


@pytest.fixture
def settings() -> Settings:
    """Return a settings object with defaults suitable for tests."""

    return Settings(_env_file=None, TMDB_API_KEY="test-key")  # type: ignore[call-arg]


class FakeClock:
    """Manually advanced replacement for ``time.monotonic``."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


class FakeTMDB:
    """In-memory stand-in for the TMDB HTTP API, used with ``MockTransport``.

    ``listings`` maps a request path to the records returned for it and
    ``imdb_ids`` maps ``(segment, tmdb_id)`` to the IMDb id served by the
    ``external_ids`` endpoint.
    """

    def __init__(self) -> None:
        self.listings: dict[str, list[dict[str, Any]]] = {}
        self.imdb_ids: dict[tuple[str, int], str | None] = {}
        self.details: dict[str, dict[str, Any]] = {}
        self.status_overrides: dict[str, int] = {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path in self.status_overrides:
            return httpx.Response(self.status_overrides[path], json={"status_message": "boom"})
        if path in self.listings:
            return httpx.Response(200, json={"page": 1, "results": self.listings[path]})
        if path in self.details:
            return httpx.Response(200, json=self.details[path])
        if path.endswith("/external_ids"):
            _, segment, raw_id, _ = path.split("/")
            key = (segment, int(raw_id))
            if key not in self.imdb_ids:
                return httpx.Response(404, json={"status_message": "not found"})
            return httpx.Response(200, json={"id": int(raw_id), "imdb_id": self.imdb_ids[key]})
        return httpx.Response(404, json={"status_message": "unknown path"})

    def calls(self, path: str) -> int:
        return sum(1 for request in self.requests if request.url.path == path)

    def http_client(self, handler: Any = None) -> httpx.AsyncClient:
        """Return a client served by this fake, or by ``handler`` wrapping it."""

        transport = httpx.MockTransport(handler or self)
        return httpx.AsyncClient(transport=transport, base_url=BASE_URL)


@pytest.fixture
def fake_tmdb() -> FakeTMDB:
    return FakeTMDB()


def movie(tmdb_id: int, **fields: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": tmdb_id,
        "title": f"Movie {tmdb_id}",
        "overview": f"Overview {tmdb_id}",
        "release_date": "2001-05-04",
        "vote_average": 7.25,
        "genre_ids": [18],
    }
    record.update(fields)
    return record


def series(tmdb_id: int, **fields: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": tmdb_id,
        "name": f"Series {tmdb_id}",
        "overview": f"Overview {tmdb_id}",
        "first_air_date": "2015-09-01",
        "vote_average": 8.0,
        "genre_ids": [80],
    }
    record.update(fields)
    return record


@pytest.fixture
def make_movie():
    return movie


@pytest.fixture
def make_series():
    return series
