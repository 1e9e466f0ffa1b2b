from app.utils import merge_extra, normalize_catalog_key, parse_extra_segment, parse_skip


def test_normalize_catalog_key():
    assert normalize_catalog_key("  Korean_Romance ") == "korean-romance"
    assert normalize_catalog_key("top  movies") == "top-movies"


def test_parse_skip_fallbacks():
    assert parse_skip("40") == 40
    assert parse_skip(20) == 20
    assert parse_skip(None) == 0
    assert parse_skip("twenty") == 0
    assert parse_skip(-3) == 0


def test_parse_extra_segment():
    assert parse_extra_segment("skip=20.json") == {"skip": "20"}
    assert parse_extra_segment("search=le%20fabuleux&skip=0") == {
        "search": "le fabuleux",
        "skip": "0",
    }
    assert parse_extra_segment(None) == {}


def test_merge_extra_prefers_later_sources():
    assert merge_extra({"skip": "0"}, None, {"skip": "20"}) == {"skip": "20"}
