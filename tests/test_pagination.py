"""Tests for page arithmetic."""

import pytest

from app.utils.pagination import page_offset, total_pages


@pytest.mark.parametrize(
    "total, limit, expected",
    [(0, 20, 0), (1, 20, 1), (20, 20, 1), (21, 20, 2), (25, 20, 2), (100, 7, 15)],
)
def test_total_pages_is_ceiling(total, limit, expected):
    assert total_pages(total, limit) == expected


def test_page_offset():
    assert page_offset(1, 20) == 0
    assert page_offset(3, 20) == 40


def test_invalid_arguments():
    with pytest.raises(ValueError):
        page_offset(0, 20)
    with pytest.raises(ValueError):
        total_pages(5, 0)


def test_search_spec_skip_uses_page_offset():
    from app.schemas.search import SearchSpec

    assert SearchSpec(page=3, limit=20).skip == page_offset(3, 20) == 40
    assert SearchSpec(limit=5).skip == 0
