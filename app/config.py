"""Application configuration models."""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Iterable, Literal

from pydantic import Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .catalogs import CATALOGS, DEFAULT_CATALOG_KEYS, CatalogDefinition
from .utils import normalize_catalog_key


ALL_CATALOG_KEYS: tuple[str, ...] = tuple(definition.key for definition in CATALOGS)
CATALOG_KEY_GROUPS: dict[str, tuple[str, ...]] = {
    "default": DEFAULT_CATALOG_KEYS,
    "all": ALL_CATALOG_KEYS,
}


class Settings(BaseSettings):
    """Settings loaded from environment variables or a .env file."""

    app_name: str = Field(default="Cataloog BP", alias="APP_NAME")
    server_host: str = Field(default="0.0.0.0", alias="HOST")
    server_port: int = Field(default=7001, alias="PORT")
    addon_url: HttpUrl | None = Field(default=None, alias="ADDON_URL")

    tmdb_api_key: str | None = Field(default=None, alias="TMDB_API_KEY")
    tmdb_api_url: HttpUrl = Field(
        default="https://api.themoviedb.org/3", alias="TMDB_API_URL"
    )
    tmdb_language: str = Field(default="fr-FR", alias="TMDB_LANGUAGE")
    tmdb_timeout_seconds: float = Field(default=15.0, alias="TMDB_TIMEOUT", gt=0)

    response_cache_seconds: int = Field(default=1_800, alias="CACHE_TTL", ge=60)

    catalog_keys: Annotated[tuple[str, ...], NoDecode] = Field(
        default=DEFAULT_CATALOG_KEYS,
        alias="CATALOG_KEYS",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", alias="LOG_LEVEL"
    )
    environment: Literal["development", "production"] = Field(
        default="development", alias="ENVIRONMENT"
    )

    @field_validator("catalog_keys", mode="before")
    @classmethod
    def _parse_catalog_keys(cls, value: object) -> tuple[str, ...]:
        """Resolve ``CATALOG_KEYS`` into registry keys.

        Accepts a comma separated string or a list. ``default`` and ``all``
        expand to the default lanes and to every registered lane.
        """

        if value is None:
            return DEFAULT_CATALOG_KEYS
        if isinstance(value, str):
            entries = value.split(",")
        elif isinstance(value, Iterable):
            entries = [str(part) for part in value]
        else:
            raise TypeError("CATALOG_KEYS must be a string or iterable of strings")

        selected: dict[str, None] = {}
        unknown: list[str] = []
        for slug in filter(None, map(normalize_catalog_key, entries)):
            expanded = CATALOG_KEY_GROUPS.get(slug, (slug,))
            for key in expanded:
                if key in ALL_CATALOG_KEYS:
                    selected.setdefault(key)
                else:
                    unknown.append(key)
        if unknown:
            raise ValueError(f"Unknown catalog keys configured: {', '.join(unknown)}")
        return tuple(selected) or DEFAULT_CATALOG_KEYS

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @property
    def catalog_definitions(self) -> tuple[CatalogDefinition, ...]:
        """Return the enabled catalog definitions in configured order."""

        definition_map = {definition.key: definition for definition in CATALOGS}
        return tuple(definition_map[key] for key in self.catalog_keys)

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()  # type: ignore[call-arg]


settings = get_settings()
