"""Client for The Movie Database (TMDB) with caching and IMDb id resolution."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping

import httpx
from pydantic import ValidationError

from ..cache import IdentifierCache, ResponseCache
from ..config import Settings
from ..models import CatalogMeta, ContentType, TMDBRecord
from ..queries import PAGE_SIZE, CatalogQuery, tmdb_media_segment

logger = logging.getLogger(__name__)


class TMDBError(Exception):
    """Raised when TMDB cannot be reached or answers with an error status."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TMDBClient:
    """Fetches TMDB listings and shapes them into Stremio metas."""

    def __init__(
        self,
        settings: Settings,
        http_client: httpx.AsyncClient,
        *,
        response_cache: ResponseCache | None = None,
        identifier_cache: IdentifierCache | None = None,
    ):
        if not settings.tmdb_api_key:
            raise ValueError("TMDB API key is required when initialising TMDBClient")
        self._settings = settings
        self._client = http_client
        self._api_key = settings.tmdb_api_key
        self._language = settings.tmdb_language
        self._responses = response_cache or ResponseCache(settings.response_cache_seconds)
        self._imdb_ids = identifier_cache or IdentifierCache()
        # Concurrent IMDb lookups, one TMDB page worth.
        self._semaphore = asyncio.Semaphore(PAGE_SIZE)

    @property
    def response_cache(self) -> ResponseCache:
        return self._responses

    @property
    def identifier_cache(self) -> IdentifierCache:
        return self._imdb_ids

    async def _fetch(
        self, endpoint: str, params: Mapping[str, Any] | None = None
    ) -> dict[str, Any]:
        """Perform a GET against TMDB and return the decoded JSON body."""

        query: dict[str, Any] = {
            "api_key": self._api_key,
            "language": self._language,
        }
        for key, value in (params or {}).items():
            if value is not None:
                query[key] = value

        try:
            response = await self._client.get(endpoint, params=query)
        except httpx.HTTPError as exc:
            raise TMDBError(f"TMDB request to {endpoint} failed: {exc}") from exc

        if not response.is_success:
            raise TMDBError(
                f"TMDB API error: {response.status_code}",
                status_code=response.status_code,
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise TMDBError(
                f"TMDB returned invalid JSON for {endpoint}",
                status_code=response.status_code,
            ) from exc
        if not isinstance(payload, dict):
            raise TMDBError(
                f"Unexpected TMDB response structure for {endpoint}",
                status_code=response.status_code,
            )
        return payload

    async def resolve_imdb_id(
        self, content_type: ContentType, tmdb_id: int
    ) -> str | None:
        """Return the IMDb id for a TMDB movie or series.

        Titles without an IMDb id are remembered for the lifetime of the
        client. Upstream failures return ``None`` without being remembered
        so the lookup is attempted again on the next request.
        """

        if self._imdb_ids.contains(content_type, tmdb_id):
            return self._imdb_ids.get(content_type, tmdb_id)

        endpoint = f"/{tmdb_media_segment(content_type)}/{tmdb_id}/external_ids"
        try:
            async with self._semaphore:
                data = await self._fetch(endpoint)
        except TMDBError as exc:
            logger.debug("IMDb id lookup failed for %s %s: %s", content_type, tmdb_id, exc)
            return None

        imdb_id = data.get("imdb_id") or None
        self._imdb_ids.store(content_type, tmdb_id, imdb_id)
        return imdb_id

    async def format_record(
        self, record: Mapping[str, Any] | None, content_type: ContentType
    ) -> CatalogMeta | None:
        """Convert a raw TMDB record into a Stremio meta.

        Returns ``None`` for malformed records and for titles without an
        IMDb id, since Stremio cannot play those.
        """

        if not isinstance(record, Mapping):
            return None
        try:
            parsed = TMDBRecord.model_validate(dict(record))
        except ValidationError:
            logger.debug("Skipping malformed TMDB record: %s", record.get("id"))
            return None
        if not parsed.id:
            return None

        imdb_id = await self.resolve_imdb_id(content_type, parsed.id)
        if not imdb_id:
            logger.debug("No IMDb id for %s %s, skipping", content_type, parsed.id)
            return None
        return CatalogMeta.from_record(parsed, imdb_id=imdb_id, content_type=content_type)

    async def _format_results(
        self, payload: Mapping[str, Any], content_type: ContentType
    ) -> list[CatalogMeta]:
        records = payload.get("results") or []
        if not isinstance(records, list):
            raise TMDBError("TMDB response is missing a results list")
        formatted = await asyncio.gather(
            *(self.format_record(record, content_type) for record in records)
        )
        return [meta for meta in formatted if meta is not None]

    async def fetch_catalog(self, query: CatalogQuery, page: int = 1) -> list[CatalogMeta]:
        """Return one formatted page for a catalog query, cached by query and page."""

        async def _compute() -> list[CatalogMeta]:
            endpoint, params = query.request(page)
            payload = await self._fetch(endpoint, params)
            return await self._format_results(payload, query.content_type)

        return await self._responses.get_or_compute(query.cache_key(page), _compute)

    async def search(
        self, content_type: ContentType, text: str, page: int = 1
    ) -> list[CatalogMeta]:
        """Search TMDB by title. Results are not cached."""

        endpoint = f"/search/{tmdb_media_segment(content_type)}"
        payload = await self._fetch(endpoint, {"query": text, "page": page})
        return await self._format_results(payload, content_type)

    async def get_details(
        self, content_type: ContentType, tmdb_id: int
    ) -> CatalogMeta | None:
        """Return a detailed meta including runtime, director and cast."""

        segment = tmdb_media_segment(content_type)

        async def _compute() -> CatalogMeta | None:
            data = await self._fetch(
                f"/{segment}/{tmdb_id}",
                {"append_to_response": "credits,external_ids"},
            )
            external = data.get("external_ids") or {}
            imdb_id = external.get("imdb_id") or data.get("imdb_id")
            if not imdb_id:
                return None
            self._imdb_ids.store(content_type, tmdb_id, imdb_id)

            try:
                record = TMDBRecord.model_validate(data)
            except ValidationError:
                logger.debug("Skipping malformed TMDB details for %s", tmdb_id)
                return None
            meta = CatalogMeta.from_record(record, imdb_id=imdb_id, content_type=content_type)

            credits = data.get("credits") or {}
            update: dict[str, Any] = {
                "genres": [
                    genre["name"]
                    for genre in data.get("genres") or []
                    if isinstance(genre, dict) and genre.get("name")
                ],
                "cast": [
                    member["name"]
                    for member in (credits.get("cast") or [])[:5]
                    if member.get("name")
                ],
                "runtime": self._runtime(data, content_type),
            }
            if content_type == "movie":
                update["director"] = next(
                    (
                        member.get("name")
                        for member in credits.get("crew") or []
                        if member.get("job") == "Director"
                    ),
                    None,
                )
            return meta.model_copy(update=update)

        return await self._responses.get_or_compute(
            f"{content_type}_details_{tmdb_id}", _compute
        )

    @staticmethod
    def _runtime(data: Mapping[str, Any], content_type: ContentType) -> str | None:
        if content_type == "movie":
            runtime = data.get("runtime")
            return f"{runtime} min" if runtime else None
        episode_runtimes = data.get("episode_run_time") or []
        if episode_runtimes and episode_runtimes[0]:
            return f"{episode_runtimes[0]} min/ep"
        return None
