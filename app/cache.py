"""In-memory caches used by the TMDB client."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TTL_SECONDS = 30 * 60


@dataclass(slots=True)
class CacheEntry:
    """A cached value and the clock reading taken when it was computed."""

    value: Any
    created_at: float


class ResponseCache:
    """Time-based memoisation of named upstream fetches.

    Stale entries are never swept; they are treated as absent and replaced
    the next time their key misses. Concurrent misses for the same key each
    run ``compute`` independently.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        entry = self._entries.get(key)  # type: ignore[arg-type]
        return entry is not None and self._is_fresh(entry)

    def _is_fresh(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.created_at < self._ttl

    async def get_or_compute(
        self, key: str, compute: Callable[[], Awaitable[T]]
    ) -> T:
        """Return the fresh cached value for ``key`` or compute and store it."""

        entry = self._entries.get(key)
        if entry is not None and self._is_fresh(entry):
            logger.debug("Cache hit: %s", key)
            return entry.value

        logger.debug("Cache miss: %s", key)
        value = await compute()
        self._entries[key] = CacheEntry(value=value, created_at=self._clock())
        return value

    def clear(self) -> None:
        self._entries.clear()


class IdentifierCache:
    """Process-lifetime map of ``(content_type, tmdb_id)`` to an IMDb id.

    ``None`` is a valid stored value meaning the title is known to have no
    IMDb id; use :meth:`contains` to tell it apart from a missing key.
    """

    def __init__(self) -> None:
        self._entries: dict[tuple[str, int], str | None] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def contains(self, content_type: str, tmdb_id: int) -> bool:
        return (content_type, tmdb_id) in self._entries

    def get(self, content_type: str, tmdb_id: int) -> str | None:
        return self._entries.get((content_type, tmdb_id))

    def store(self, content_type: str, tmdb_id: int, imdb_id: str | None) -> None:
        self._entries[(content_type, tmdb_id)] = imdb_id
