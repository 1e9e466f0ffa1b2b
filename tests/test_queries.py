"""Tests for catalog query descriptors and pagination."""

from __future__ import annotations

import pytest

from app import queries
from app.queries import DiscoverQuery, ListingQuery, TrendingQuery, page_for_skip


@pytest.mark.parametrize(
    ("skip", "page"),
    [(0, 1), (19, 1), (20, 2), (45, 3), (100, 6), (-5, 1)],
)
def test_page_for_skip_uses_twenty_item_pages(skip: int, page: int) -> None:
    assert page_for_skip(skip) == page


def test_listing_query_request() -> None:
    endpoint, params = queries.now_playing().request(3)

    assert endpoint == "/movie/now_playing"
    assert params == {"page": 3, "region": "FR"}


def test_top_rated_series_uses_tv_segment() -> None:
    query = queries.top_rated("series")

    assert isinstance(query, ListingQuery)
    assert query.request(1) == ("/tv/top_rated", {"page": 1})


def test_trending_query_window() -> None:
    query = queries.trending("series", "day")

    assert isinstance(query, TrendingQuery)
    assert query.endpoint() == "/trending/tv/day"
    assert query.name == "trending_series_day"


def test_discover_query_omits_unset_filters() -> None:
    params = queries.by_genre("movie", 53).params()

    assert params == {
        "sort_by": "popularity.desc",
        "with_genres": "53",
        "vote_count.gte": 50,
    }


def test_classic_date_boundary_depends_on_content_type() -> None:
    movie_params = queries.classic_movies().params()
    series_params = queries.classic_series().params()

    assert movie_params["release_date.lte"] == "1989-12-31"
    assert "first_air_date.lte" not in movie_params
    assert series_params["first_air_date.lte"] == "1999-12-31"
    assert movie_params["without_genres"] == "16"


def test_provider_query_includes_region() -> None:
    endpoint, params = queries.by_provider("series", 8).request(1)

    assert endpoint == "/discover/tv"
    assert params["with_watch_providers"] == "8"
    assert params["watch_region"] == "FR"


def test_keyword_and_country_sets_keep_tmdb_syntax() -> None:
    assert queries.christmas_movies().params()["with_keywords"] == "207317|13082"
    assert queries.asian_dramas().params()["with_origin_country"] == "CN|TW|TH"
    assert queries.feel_good_movies().params()["with_genres"] == "35,10751"
    assert queries.movies_by_keyword(818).params()["with_keywords"] == "818"


def test_hidden_gems_bounds_vote_count() -> None:
    params = queries.hidden_gems().params()

    assert params["vote_count.gte"] == 100
    assert params["vote_count.lte"] == 1000
    assert params["vote_average.gte"] == 7.5


def test_cache_key_is_deterministic_and_page_specific() -> None:
    first = queries.by_provider("movie", 119)
    second = DiscoverQuery(
        "movie_provider_119_FR",
        "movie",
        watch_region="FR",
        with_watch_providers="119",
    )

    assert first.cache_key(1) == second.cache_key(1)
    assert first.cache_key(1) != first.cache_key(2)
    assert "page=1" in first.cache_key(1)


def test_cache_keys_differ_between_filters() -> None:
    korean = queries.movies_by_country("KR").cache_key(1)
    japanese = queries.movies_by_country("JP").cache_key(1)

    assert korean != japanese
