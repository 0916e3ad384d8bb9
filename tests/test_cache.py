"""Tests for the in-process cache store."""

import pytest

from app.core.errors import CacheMiss, NotFound
from app.utils.cache import CacheStore, key_prefix


class TestCacheStore:
    def test_get_returns_exact_bytes_last_set(self):
        cache = CacheStore()
        cache.set("latest-products", b'[{"name":"a"}]')
        cache.set("latest-products", b'[{"name":"b"}]')

        assert cache.has("latest-products")
        assert cache.get("latest-products") == b'[{"name":"b"}]'

    def test_get_absent_key_raises_not_found(self):
        cache = CacheStore()

        with pytest.raises(CacheMiss) as excinfo:
            cache.get("product-42")

        assert isinstance(excinfo.value, NotFound)
        assert isinstance(excinfo.value, KeyError)
        assert excinfo.value.key == "product-42"
        assert not cache.has("product-42")

    def test_delete_matching_prefix_counts_removed(self):
        cache = CacheStore()
        for key in ("category-products-shoes", "category-products-Hats", "categories", "product-1"):
            cache.set(key, b"x")

        removed = cache.delete_matching(key_prefix("category-products-"))

        assert removed == 2
        assert sorted(cache.keys()) == ["categories", "product-1"]

    def test_delete_matching_nothing(self):
        cache = CacheStore()
        cache.set("categories", b"[]")

        assert cache.delete_matching(lambda key: False) == 0
        assert len(cache) == 1

    def test_delete_single_key(self):
        cache = CacheStore()
        cache.set("admin-products", b"[]")

        assert cache.delete("admin-products") is True
        assert cache.delete("admin-products") is False

    def test_instances_are_isolated(self):
        first, second = CacheStore(), CacheStore()
        first.set("categories", b"[]")

        assert not second.has("categories")
