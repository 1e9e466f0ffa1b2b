"""Catalog request dispatch and manifest generation."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ..catalogs import CatalogDefinition, strip_catalog_prefix
from ..config import Settings
from ..models import CatalogMeta
from ..queries import page_for_skip
from ..utils import parse_skip
from .tmdb import TMDBClient

logger = logging.getLogger(__name__)

MANIFEST_ID = "community.stremio.cataloog-bp"
MANIFEST_VERSION = "1.0.0"
MANIFEST_DESCRIPTION = "Catalogue personnalisé - Asie, Classiques, Thrillers, Policiers"
MANIFEST_LOGO = (
    "https://www.themoviedb.org/assets/2/v4/logos/v2/"
    "blue_square_2-d537fb228cf3edd904ef09b136fe3fec72548ebc1fea3fbbd1ad9e36364db38b.svg"
)
MANIFEST_BACKGROUND = "https://image.tmdb.org/t/p/original/56v2KjBlU4XaOv9rVYEQypROD7P.jpg"


class CatalogService:
    """Resolves Stremio catalog requests against the enabled definitions."""

    def __init__(self, settings: Settings, tmdb: TMDBClient):
        self._settings = settings
        self._tmdb = tmdb
        self._definitions: dict[str, CatalogDefinition] = {
            definition.key: definition for definition in settings.catalog_definitions
        }

    @property
    def definitions(self) -> tuple[CatalogDefinition, ...]:
        return tuple(self._definitions.values())

    def manifest(self) -> dict[str, Any]:
        """Return the Stremio manifest for the enabled catalogs."""

        return {
            "id": MANIFEST_ID,
            "version": MANIFEST_VERSION,
            "name": self._settings.app_name,
            "description": MANIFEST_DESCRIPTION,
            "logo": MANIFEST_LOGO,
            "background": MANIFEST_BACKGROUND,
            "resources": ["catalog"],
            "types": ["movie", "series"],
            "idPrefixes": ["tt"],
            "catalogs": [
                definition.to_manifest_entry() for definition in self._definitions.values()
            ],
        }

    async def get_catalog_payload(
        self,
        content_type: str,
        catalog_id: str,
        extra: Mapping[str, str] | None = None,
    ) -> dict[str, Any]:
        """Return ``{"metas": [...]}`` for a catalog request.

        Unknown catalogs and upstream failures yield an empty list rather
        than an error so Stremio always receives a well-formed response.
        """

        logger.info("Catalog requested: %s (type: %s)", catalog_id, content_type)
        definition = self._definitions.get(strip_catalog_prefix(catalog_id))
        if definition is None:
            logger.info("Unknown catalog: %s", catalog_id)
            return {"metas": []}
        if definition.content_type != content_type:
            logger.info(
                "Catalog %s does not serve %s content", catalog_id, content_type
            )
            return {"metas": []}

        extra = extra or {}
        try:
            metas = await self._fetch(definition, extra)
        except Exception as exc:
            logger.warning("Catalog %s failed: %s", catalog_id, exc)
            return {"metas": []}

        logger.info("%s results for %s", len(metas), definition.title)
        return {"metas": [meta.to_payload() for meta in metas]}

    async def _fetch(
        self, definition: CatalogDefinition, extra: Mapping[str, str]
    ) -> list[CatalogMeta]:
        page = page_for_skip(parse_skip(extra.get("skip")))
        if definition.searchable:
            text = (extra.get("search") or "").strip()
            if not text:
                return []
            return await self._tmdb.search(definition.content_type, text, page)
        if definition.query is None:
            raise ValueError(f"Catalog {definition.key} has no query")
        return await self._tmdb.fetch_catalog(definition.query, page)
