"""Tests for the cache invalidation rules."""

import pytest

from app.core.errors import InvalidationFailure
from app.services.invalidation import (
    ADMIN_PRODUCTS_KEY,
    CATEGORIES_KEY,
    LATEST_PRODUCTS_KEY,
    InvalidationCoordinator,
    InvalidationEvent,
    category_products_key,
    product_key,
)
from app.utils.cache import CacheStore

ALL_KEYS = [
    LATEST_PRODUCTS_KEY,
    CATEGORIES_KEY,
    ADMIN_PRODUCTS_KEY,
    product_key("a1"),
    product_key("b2"),
    category_products_key("shoes"),
    category_products_key("Hats"),
]


@pytest.fixture
def warm_cache():
    cache = CacheStore()
    for key in ALL_KEYS:
        cache.set(key, b"[]")
    return cache


def test_key_grammar():
    assert product_key("65f0c1") == "product-65f0c1"
    assert category_products_key("Shoes") == "category-products-Shoes"


def test_product_event_purges_listings_and_every_category(warm_cache):
    report = InvalidationCoordinator(warm_cache).invalidate(InvalidationEvent(product=True))

    assert sorted(warm_cache.keys()) == sorted([ADMIN_PRODUCTS_KEY, product_key("a1"), product_key("b2")])
    assert report.removed == 4


def test_admin_event_purges_admin_listing_only(warm_cache):
    InvalidationCoordinator(warm_cache).invalidate(InvalidationEvent(admin=True))

    assert not warm_cache.has(ADMIN_PRODUCTS_KEY)
    assert len(warm_cache) == len(ALL_KEYS) - 1


def test_product_id_event_leaves_other_products(warm_cache):
    InvalidationCoordinator(warm_cache).invalidate(InvalidationEvent(product_id="a1"))

    assert not warm_cache.has(product_key("a1"))
    assert warm_cache.has(product_key("b2"))


def test_full_write_event(warm_cache):
    InvalidationCoordinator(warm_cache).invalidate(
        InvalidationEvent(product=True, admin=True, product_id="a1")
    )

    assert list(warm_cache.keys()) == [product_key("b2")]


def test_invalidation_is_idempotent(warm_cache):
    coordinator = InvalidationCoordinator(warm_cache)
    event = InvalidationEvent(product=True, admin=True, product_id="b2")

    coordinator.invalidate(event)
    after_once = sorted(warm_cache.keys())
    second = coordinator.invalidate(event)

    assert sorted(warm_cache.keys()) == after_once
    assert second.removed == 0


def test_empty_event_is_noop(warm_cache):
    report = InvalidationCoordinator(warm_cache).invalidate(InvalidationEvent())

    assert report.keys == []
    assert len(warm_cache) == len(ALL_KEYS)


def test_cache_failure_is_wrapped():
    class BrokenCache(CacheStore):
        def delete_matching(self, predicate):
            raise RuntimeError("boom")

    with pytest.raises(InvalidationFailure) as excinfo:
        InvalidationCoordinator(BrokenCache()).invalidate(InvalidationEvent(product=True))

    assert isinstance(excinfo.value.__cause__, RuntimeError)
