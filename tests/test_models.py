from __future__ import annotations

import pytest

from app.models import GENRE_NAMES, CatalogMeta, TMDBRecord, genre_names


def test_genre_names_drop_unmapped_ids():
    assert genre_names([53, 9999]) == ["Thriller"]
    assert genre_names([10765, 18, 10765]) == ["Sci-Fi & Fantasy", "Drama", "Sci-Fi & Fantasy"]


def test_genre_table_covers_movie_and_tv_vocabularies():
    assert GENRE_NAMES[10749] == "Romance"
    assert GENRE_NAMES[10768] == "War & Politics"
    assert len(GENRE_NAMES) == 27


@pytest.mark.parametrize(
    ("date", "expected"),
    [("1989-12-31", "1989"), ("2024", "2024"), ("198", None), ("", None), (None, None)],
)
def test_record_year(date, expected):
    record = TMDBRecord(id=1, release_date=date)

    assert record.year("movie") == expected


@pytest.mark.parametrize(
    ("vote_average", "expected"),
    [(0, "0.0"), (7.25, "7.3"), (8.25, "8.3"), (6.75, "6.8"), (8.45, "8.4"), (8, "8.0")],
)
def test_record_rating_rounds_halves_up(vote_average, expected):
    assert TMDBRecord(id=1, vote_average=vote_average).rating() == expected


def test_record_rating_missing_is_none():
    assert TMDBRecord(id=1).rating() is None


def test_record_genre_ids_skip_non_integer_entries():
    record = TMDBRecord(id=1, genre_ids=[53, None, "x", 18])

    assert record.genre_ids == [53, 18]


def test_record_display_name_falls_back_to_original():
    record = TMDBRecord(id=1, original_title="Le Samouraï", name="Ignored")

    assert record.display_name("movie") == "Le Samouraï"
    assert record.display_name("series") == "Ignored"


def test_meta_payload_uses_stremio_field_names():
    record = TMDBRecord(id=1, title="Amélie", release_date="2001-04-25", vote_average=7.9)
    meta = CatalogMeta.from_record(record, imdb_id="tt0211915", content_type="movie")

    payload = meta.to_payload()

    assert payload["releaseInfo"] == "2001"
    assert payload["imdbRating"] == "7.9"
    assert "release_info" not in payload
    assert "runtime" not in payload
    assert "cast" not in payload
