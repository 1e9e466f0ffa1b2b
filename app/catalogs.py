"""Catalog definitions advertised in the add-on manifest."""

from __future__ import annotations

from dataclasses import dataclass

from . import queries
from .models import ContentType
from .queries import CatalogQuery

CATALOG_ID_PREFIX = "cataloog-bp-"

# TMDB watch provider ids
NETFLIX = 8
PRIME_VIDEO = 119
DISNEY_PLUS = 337
CANAL_PLUS = 381


@dataclass(frozen=True)
class CatalogDefinition:
    """Describes a catalog lane shown in Stremio.

    Search catalogs carry no query; the request's ``search`` extra is used
    instead.
    """

    key: str
    title: str
    content_type: ContentType
    query: CatalogQuery | None = None
    default: bool = True
    searchable: bool = False

    @property
    def catalog_id(self) -> str:
        return f"{CATALOG_ID_PREFIX}{self.key}"

    def to_manifest_entry(self) -> dict[str, object]:
        if self.searchable:
            extra = [{"name": "search", "isRequired": True}]
        else:
            extra = [{"name": "skip", "isRequired": False}]
        return {
            "type": self.content_type,
            "id": self.catalog_id,
            "name": self.title,
            "extra": extra,
        }


CATALOGS: tuple[CatalogDefinition, ...] = (
    # Asia
    CatalogDefinition("kdrama", "🇰🇷 K-Drama", "series", queries.kdramas()),
    CatalogDefinition(
        "korean-romance", "💕 Romance Coréenne", "series", queries.korean_romance()
    ),
    CatalogDefinition(
        "korean-movies", "🇰🇷 Cinéma Coréen", "movie", queries.movies_by_country("KR")
    ),
    CatalogDefinition("jdrama", "🇯🇵 J-Drama", "series", queries.jdramas()),
    CatalogDefinition(
        "japanese-movies", "🇯🇵 Cinéma Japonais", "movie", queries.movies_by_country("JP")
    ),
    CatalogDefinition("asian-drama", "🌏 Drama Asiatique", "series", queries.asian_dramas()),
    CatalogDefinition("chinese-movies", "🇨🇳 Cinéma Chinois", "movie", queries.chinese_movies()),
    # Thriller and crime
    CatalogDefinition("thriller-movies", "🔪 Thriller", "movie", queries.by_genre("movie", 53)),
    # TMDB has no thriller genre for TV; crime is the closest match.
    CatalogDefinition("thriller-series", "🔪 Thriller", "series", queries.by_genre("series", 80)),
    CatalogDefinition("crime-movies", "🔍 Policier", "movie", queries.crime("movie")),
    CatalogDefinition("crime-series", "🔍 Policier", "series", queries.crime("series")),
    # Classics
    CatalogDefinition("classic-movies", "🎬 Films Classiques", "movie", queries.classic_movies()),
    CatalogDefinition("classic-series", "📺 Séries Classiques", "series", queries.classic_series()),
    CatalogDefinition("miniseries", "📺 Mini-séries", "series", queries.miniseries()),
    # Romance and drama
    CatalogDefinition("romance-movies", "💕 Romance", "movie", queries.by_genre("movie", 10749)),
    CatalogDefinition("drama-movies", "📖 Drame", "movie", queries.by_genre("movie", 18)),
    CatalogDefinition("drama-series", "📖 Drame", "series", queries.by_genre("series", 18)),
    # Top rated
    CatalogDefinition("top-movies", "🏆 Top Films", "movie", queries.top_rated("movie")),
    CatalogDefinition("top-series", "🏆 Top Séries", "series", queries.top_rated("series")),
    # Streaming platforms
    CatalogDefinition("netflix-movies", "🔴 Netflix", "movie", queries.by_provider("movie", NETFLIX)),
    CatalogDefinition("netflix-series", "🔴 Netflix", "series", queries.by_provider("series", NETFLIX)),
    CatalogDefinition("prime-movies", "📦 Prime Video", "movie", queries.by_provider("movie", PRIME_VIDEO)),
    CatalogDefinition("prime-series", "📦 Prime Video", "series", queries.by_provider("series", PRIME_VIDEO)),
    CatalogDefinition("disney-movies", "🏰 Disney+", "movie", queries.by_provider("movie", DISNEY_PLUS)),
    CatalogDefinition("disney-series", "🏰 Disney+", "series", queries.by_provider("series", DISNEY_PLUS)),
    CatalogDefinition("canal-movies", "➕ Canal+", "movie", queries.by_provider("movie", CANAL_PLUS)),
    CatalogDefinition("canal-series", "➕ Canal+", "series", queries.by_provider("series", CANAL_PLUS)),
    # Opt-in lanes, enabled through CATALOG_KEYS
    CatalogDefinition(
        "trending-movies-day", "🔥 Tendances du jour", "movie",
        queries.trending("movie", "day"), default=False,
    ),
    CatalogDefinition(
        "trending-movies", "🔥 Tendances", "movie",
        queries.trending("movie", "week"), default=False,
    ),
    CatalogDefinition(
        "trending-series-day", "🔥 Tendances du jour", "series",
        queries.trending("series", "day"), default=False,
    ),
    CatalogDefinition(
        "trending-series", "🔥 Tendances", "series",
        queries.trending("series", "week"), default=False,
    ),
    CatalogDefinition(
        "popular-movies", "⭐ Populaires", "movie", queries.popular_movies(), default=False
    ),
    CatalogDefinition(
        "hidden-gems", "💎 Pépites Cachées", "movie", queries.hidden_gems(), default=False
    ),
    CatalogDefinition(
        "now-playing", "🎟️ Au Cinéma", "movie", queries.now_playing(), default=False
    ),
    CatalogDefinition("upcoming", "📅 Prochainement", "movie", queries.upcoming(), default=False),
    CatalogDefinition("anime", "🎌 Anime", "series", queries.anime(), default=False),
    CatalogDefinition("docuseries", "🎥 Docu-séries", "series", queries.docuseries(), default=False),
    CatalogDefinition(
        "christmas-movies", "🎄 Films de Noël", "movie", queries.christmas_movies(), default=False
    ),
    CatalogDefinition(
        "halloween-movies", "🎃 Halloween", "movie", queries.halloween_movies(), default=False
    ),
    CatalogDefinition(
        "feelgood-movies", "😊 Feel Good", "movie", queries.feel_good_movies(), default=False
    ),
    CatalogDefinition(
        "mindbending-movies", "🌀 Mind-Bending", "movie",
        queries.mind_bending_movies(), default=False,
    ),
    CatalogDefinition("cult-movies", "📼 Films Cultes", "movie", queries.cult_movies(), default=False),
    CatalogDefinition(
        "family-movies", "👨‍👩‍👧 En Famille", "movie", queries.family_movies(), default=False
    ),
    CatalogDefinition(
        "award-winners", "🏅 Chefs-d'œuvre", "movie", queries.award_winners(), default=False
    ),
    CatalogDefinition(
        "search-movies", "🔎 Recherche", "movie", default=False, searchable=True
    ),
    CatalogDefinition(
        "search-series", "🔎 Recherche", "series", default=False, searchable=True
    ),
)


DEFAULT_CATALOG_KEYS: tuple[str, ...] = tuple(
    definition.key for definition in CATALOGS if definition.default
)


def strip_catalog_prefix(catalog_id: str) -> str:
    """Return the registry key for a manifest catalog id."""

    if catalog_id.startswith(CATALOG_ID_PREFIX):
        return catalog_id[len(CATALOG_ID_PREFIX):]
    return catalog_id
