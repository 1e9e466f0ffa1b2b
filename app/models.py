"""Pydantic models for TMDB records and Stremio meta payloads."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

ContentType = Literal["movie", "series"]

METAHUB_URL = "https://images.metahub.space"
ARTWORK_SIZE = "medium"

# TMDB genre ids for both the movie and TV vocabularies.
GENRE_NAMES: dict[int, str] = {
    28: "Action",
    12: "Adventure",
    16: "Animation",
    35: "Comedy",
    80: "Crime",
    99: "Documentary",
    18: "Drama",
    10751: "Family",
    14: "Fantasy",
    36: "History",
    27: "Horror",
    10402: "Music",
    9648: "Mystery",
    10749: "Romance",
    878: "Sci-Fi",
    10770: "TV Movie",
    53: "Thriller",
    10752: "War",
    37: "Western",
    10759: "Action & Adventure",
    10762: "Kids",
    10763: "News",
    10764: "Reality",
    10765: "Sci-Fi & Fantasy",
    10766: "Soap",
    10767: "Talk",
    10768: "War & Politics",
}


def genre_names(genre_ids: list[int]) -> list[str]:
    """Map TMDB genre ids to display names, dropping unknown ids."""

    return [GENRE_NAMES[genre_id] for genre_id in genre_ids if genre_id in GENRE_NAMES]


def artwork_url(category: str, imdb_id: str) -> str:
    return f"{METAHUB_URL}/{category}/{ARTWORK_SIZE}/{imdb_id}/img"


class TMDBRecord(BaseModel):
    """A movie or series entry as returned by TMDB list endpoints."""

    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    title: str | None = None
    original_title: str | None = None
    name: str | None = None
    original_name: str | None = None
    overview: str | None = None
    release_date: str | None = None
    first_air_date: str | None = None
    vote_average: float | None = None
    genre_ids: list[int] = Field(default_factory=list)

    @field_validator("genre_ids", mode="before")
    @classmethod
    def _default_genres(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, list):
            return [
                genre_id
                for genre_id in value
                if isinstance(genre_id, int) and not isinstance(genre_id, bool)
            ]
        return value

    def display_name(self, content_type: ContentType) -> str | None:
        if content_type == "movie":
            return self.title or self.original_title
        return self.name or self.original_name

    def date(self, content_type: ContentType) -> str | None:
        return self.release_date if content_type == "movie" else self.first_air_date

    def year(self, content_type: ContentType) -> str | None:
        """Return the four digit year, or ``None`` when the date is too short."""

        value = self.date(content_type)
        if not value or len(value) < 4:
            return None
        return value[:4]

    def rating(self) -> str | None:
        """Return the rating with one decimal, rounding halves up."""

        if self.vote_average is None:
            return None
        rounded = Decimal(self.vote_average).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
        return str(rounded)


class CatalogMeta(BaseModel):
    """Stremio meta preview for a title with a resolved IMDb id."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    imdb_id: str
    type: ContentType
    name: str | None = None
    poster: str
    background: str
    logo: str
    description: str | None = None
    release_info: str | None = Field(default=None, serialization_alias="releaseInfo")
    imdb_rating: str | None = Field(default=None, serialization_alias="imdbRating")
    year: str | None = None
    genres: list[str] = Field(default_factory=list)
    runtime: str | None = None
    director: str | None = None
    cast: list[str] | None = None

    @classmethod
    def from_record(
        cls, record: TMDBRecord, *, imdb_id: str, content_type: ContentType
    ) -> "CatalogMeta":
        year = record.year(content_type)
        return cls(
            id=imdb_id,
            imdb_id=imdb_id,
            type=content_type,
            name=record.display_name(content_type),
            poster=artwork_url("poster", imdb_id),
            background=artwork_url("background", imdb_id),
            logo=artwork_url("logo", imdb_id),
            description=record.overview,
            release_info=year,
            imdb_rating=record.rating(),
            year=year,
            genres=genre_names(record.genre_ids),
        )

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-ready Stremio representation."""

        return self.model_dump(by_alias=True, exclude_none=True)
