"""Query descriptors describing the TMDB requests behind each catalog."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Literal
from urllib.parse import urlencode

from .models import ContentType

TrendingWindow = Literal["day", "week"]

PAGE_SIZE = 20
DEFAULT_REGION = "FR"

QueryParams = dict[str, str | int | float]


def tmdb_media_segment(content_type: ContentType) -> str:
    """Return the TMDB path segment for a Stremio content type."""

    return "movie" if content_type == "movie" else "tv"


@dataclass(frozen=True)
class CatalogQuery:
    """Base descriptor interpreted by :meth:`TMDBClient.fetch_catalog`."""

    kind: ClassVar[str] = "query"

    name: str
    content_type: ContentType

    def endpoint(self) -> str:
        raise NotImplementedError

    def params(self) -> QueryParams:
        return {}

    def request(self, page: int) -> tuple[str, QueryParams]:
        """Return the endpoint and query parameters for ``page``."""

        return self.endpoint(), {"page": page, **self.params()}

    def cache_key(self, page: int) -> str:
        encoded = urlencode(sorted((key, str(value)) for key, value in self.params().items()))
        return f"{self.kind}:{self.name}:{self.endpoint()}?{encoded}#page={page}"


@dataclass(frozen=True)
class ListingQuery(CatalogQuery):
    """One of TMDB's fixed listings (top rated, popular, now playing...)."""

    kind: ClassVar[str] = "listing"

    listing: str = "popular"
    region: str | None = None

    def endpoint(self) -> str:
        return f"/{tmdb_media_segment(self.content_type)}/{self.listing}"

    def params(self) -> QueryParams:
        if self.region:
            return {"region": self.region}
        return {}


@dataclass(frozen=True)
class TrendingQuery(CatalogQuery):
    """Titles trending over a day or week window."""

    kind: ClassVar[str] = "trending"

    window: TrendingWindow = "week"

    def endpoint(self) -> str:
        return f"/trending/{tmdb_media_segment(self.content_type)}/{self.window}"


@dataclass(frozen=True)
class DiscoverQuery(CatalogQuery):
    """A ``/discover`` request combining filters with a sort order.

    Multi-valued filters use TMDB's syntax: ``|`` means OR and ``,`` means
    AND, e.g. ``"CN|TW|TH"`` or ``"35,10751"``.
    """

    kind: ClassVar[str] = "discover"

    sort_by: str = "popularity.desc"
    with_genres: str | None = None
    without_genres: str | None = None
    with_keywords: str | None = None
    with_origin_country: str | None = None
    with_watch_providers: str | None = None
    watch_region: str | None = None
    released_before: str | None = None
    min_votes: int | None = None
    max_votes: int | None = None
    min_rating: float | None = None

    def endpoint(self) -> str:
        return f"/discover/{tmdb_media_segment(self.content_type)}"

    def params(self) -> QueryParams:
        date_field = (
            "release_date.lte" if self.content_type == "movie" else "first_air_date.lte"
        )
        candidates: dict[str, str | int | float | None] = {
            "sort_by": self.sort_by,
            "with_genres": self.with_genres,
            "without_genres": self.without_genres,
            "with_keywords": self.with_keywords,
            "with_origin_country": self.with_origin_country,
            "with_watch_providers": self.with_watch_providers,
            "watch_region": self.watch_region,
            date_field: self.released_before,
            "vote_count.gte": self.min_votes,
            "vote_count.lte": self.max_votes,
            "vote_average.gte": self.min_rating,
        }
        return {key: value for key, value in candidates.items() if value is not None}


def page_for_skip(skip: int) -> int:
    """Convert a Stremio ``skip`` offset into a 1-based TMDB page."""

    return max(skip, 0) // PAGE_SIZE + 1


# Trending and fixed listings


def trending(content_type: ContentType, window: TrendingWindow = "week") -> TrendingQuery:
    label = "movies" if content_type == "movie" else "series"
    return TrendingQuery(f"trending_{label}_{window}", content_type, window=window)


def top_rated(content_type: ContentType) -> ListingQuery:
    label = "movies" if content_type == "movie" else "series"
    return ListingQuery(f"top_rated_{label}", content_type, listing="top_rated")


def popular_movies() -> ListingQuery:
    return ListingQuery("popular_movies", "movie", listing="popular")


def now_playing(region: str = DEFAULT_REGION) -> ListingQuery:
    return ListingQuery("now_playing", "movie", listing="now_playing", region=region)


def upcoming(region: str = DEFAULT_REGION) -> ListingQuery:
    return ListingQuery("upcoming", "movie", listing="upcoming", region=region)


def hidden_gems() -> DiscoverQuery:
    """Well rated movies that few people have voted on."""

    return DiscoverQuery(
        "hidden_gems",
        "movie",
        sort_by="vote_average.desc",
        min_votes=100,
        max_votes=1000,
        min_rating=7.5,
    )


def award_winners() -> DiscoverQuery:
    # TMDB has no awards endpoint; very popular and very well rated is the proxy.
    return DiscoverQuery(
        "award_winners",
        "movie",
        sort_by="vote_average.desc",
        min_votes=5000,
        min_rating=8,
    )


# Genre, provider and country filters


def by_genre(content_type: ContentType, genre_id: int) -> DiscoverQuery:
    return DiscoverQuery(
        f"{content_type}_genre_{genre_id}",
        content_type,
        with_genres=str(genre_id),
        min_votes=50,
    )


def crime(content_type: ContentType) -> DiscoverQuery:
    label = "movies" if content_type == "movie" else "series"
    return DiscoverQuery(f"crime_{label}", content_type, with_genres="80", min_votes=50)


def by_provider(
    content_type: ContentType, provider_id: int, region: str = DEFAULT_REGION
) -> DiscoverQuery:
    return DiscoverQuery(
        f"{content_type}_provider_{provider_id}_{region}",
        content_type,
        with_watch_providers=str(provider_id),
        watch_region=region,
    )


def movies_by_country(country_code: str) -> DiscoverQuery:
    return DiscoverQuery(
        f"movies_country_{country_code}",
        "movie",
        with_origin_country=country_code,
        min_votes=30,
    )


def chinese_movies() -> DiscoverQuery:
    return DiscoverQuery("chinese_movies", "movie", with_origin_country="CN", min_votes=30)


def kdramas() -> DiscoverQuery:
    return DiscoverQuery(
        "kdramas",
        "series",
        with_origin_country="KR",
        sort_by="vote_average.desc",
        min_votes=100,
    )


def korean_romance() -> DiscoverQuery:
    return DiscoverQuery(
        "korean_romance",
        "series",
        with_origin_country="KR",
        with_genres="18",
        with_keywords="9840",
        sort_by="vote_average.desc",
        min_votes=50,
    )


def jdramas() -> DiscoverQuery:
    """Japanese series excluding animation."""

    return DiscoverQuery(
        "jdramas",
        "series",
        with_origin_country="JP",
        without_genres="16",
        sort_by="vote_average.desc",
        min_votes=50,
    )


def asian_dramas() -> DiscoverQuery:
    return DiscoverQuery(
        "asian_dramas",
        "series",
        with_origin_country="CN|TW|TH",
        sort_by="vote_average.desc",
        min_votes=30,
    )


def anime() -> DiscoverQuery:
    return DiscoverQuery(
        "anime",
        "series",
        with_genres="16",
        with_origin_country="JP",
        sort_by="vote_average.desc",
        min_votes=100,
    )


def docuseries() -> DiscoverQuery:
    return DiscoverQuery(
        "docuseries",
        "series",
        with_genres="99",
        sort_by="vote_average.desc",
        min_votes=50,
    )


def miniseries() -> DiscoverQuery:
    return DiscoverQuery(
        "miniseries",
        "series",
        with_keywords="11162",
        sort_by="vote_average.desc",
        min_votes=100,
    )


# Date boundaries


def classic_movies() -> DiscoverQuery:
    return DiscoverQuery(
        "classic_movies",
        "movie",
        released_before="1989-12-31",
        without_genres="16",
        sort_by="vote_average.desc",
        min_votes=200,
    )


def classic_series() -> DiscoverQuery:
    return DiscoverQuery(
        "classic_series",
        "series",
        released_before="1999-12-31",
        without_genres="16",
        sort_by="vote_average.desc",
        min_votes=100,
    )


# Keyword themes


def movies_by_keyword(keyword_ids: int | str) -> DiscoverQuery:
    return DiscoverQuery(
        f"movies_keyword_{keyword_ids}", "movie", with_keywords=str(keyword_ids)
    )


def christmas_movies() -> DiscoverQuery:
    # 207317 christmas, 13082 christmas eve
    return DiscoverQuery("christmas", "movie", with_keywords="207317|13082")


def halloween_movies() -> DiscoverQuery:
    return DiscoverQuery("halloween", "movie", with_keywords="4565", with_genres="27")


def feel_good_movies() -> DiscoverQuery:
    return DiscoverQuery("feelgood", "movie", with_genres="35,10751", min_rating=6.5)


def mind_bending_movies() -> DiscoverQuery:
    # 4344 twist ending, 256741 mind bending
    return DiscoverQuery(
        "mindbending",
        "movie",
        with_keywords="4344|256741|310",
        sort_by="vote_average.desc",
        min_votes=100,
    )


def cult_movies() -> DiscoverQuery:
    return DiscoverQuery("cult", "movie", with_keywords="818", sort_by="vote_count.desc")


def family_movies() -> DiscoverQuery:
    return DiscoverQuery("family", "movie", with_genres="10751", min_rating=6)
