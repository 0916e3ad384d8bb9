"""Tests for turning raw search parameters into a search specification."""

import pytest

from app.schemas.search import ItemFilter, SearchSpec, SortDirection
from app.services.query_builder import build_search_spec, parse_page, parse_sort


class TestBuildSearchSpec:
    def test_defaults_when_everything_absent(self):
        spec = build_search_spec(limit=20)

        assert spec == SearchSpec(filter=ItemFilter(), sort=None, page=1, limit=20)
        assert spec.skip == 0

    def test_full_parameters(self):
        spec = build_search_spec(search="run", category="shoes", price="100", sort="desc", page="3", limit=20)

        assert spec.filter == ItemFilter(name_contains="run", max_price=100.0, category="shoes")
        assert spec.sort is SortDirection.DESC
        assert spec.page == 3
        assert spec.skip == 40

    def test_category_is_not_lowercased(self):
        spec = build_search_spec(category="Shoes", limit=20)

        assert spec.filter.category == "Shoes"

    def test_unparsable_price_is_ignored(self):
        assert build_search_spec(price="cheap", limit=20).filter.max_price is None
        assert build_search_spec(price="nan", limit=20).filter.max_price is None

    def test_blank_values_are_absent(self):
        spec = build_search_spec(search="  ", category="", price="", sort="", page="", limit=20)

        assert spec == SearchSpec(limit=20)

    def test_limit_defaults_to_settings(self, monkeypatch):
        monkeypatch.setenv("APP_PRODUCT_PER_PAGE", "7")
        from app.core.config import get_settings

        get_settings.cache_clear()
        try:
            assert build_search_spec(page="2").skip == 7
        finally:
            get_settings.cache_clear()


@pytest.mark.parametrize(
    "raw, expected",
    [(None, 1), ("", 1), ("abc", 1), ("0", 1), ("-3", 1), ("2.5", 1), ("4", 4), (" 2 ", 2), (5, 5)],
)
def test_parse_page_degrades_to_first_page(raw, expected):
    assert parse_page(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("asc", SortDirection.ASC),
        ("desc", SortDirection.DESC),
        ("ASC", SortDirection.DESC),
        ("price", SortDirection.DESC),
        ("", None),
        (None, None),
    ],
)
def test_parse_sort(raw, expected):
    assert parse_sort(raw) is expected
