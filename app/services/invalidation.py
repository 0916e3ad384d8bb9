"""
services/invalidation.py
------------------------

Cache keys of the catalog and the invalidation rules that keep them
coherent with the item store.

Invalidation is coarse by surface: any product mutation drops the
latest listing, the category list and every category listing, while
admin and single‑product entries are dropped on request. Purging too
much only costs a cache miss; purging too little would serve stale
data, so every write path calls :meth:`InvalidationCoordinator.invalidate`
before reporting success.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from app.core.errors import InvalidationFailure
from app.logging_config import log_event
from app.utils.cache import CacheStore, key_prefix

LATEST_PRODUCTS_KEY = "latest-products"
CATEGORIES_KEY = "categories"
ADMIN_PRODUCTS_KEY = "admin-products"
PRODUCT_KEY_PREFIX = "product-"
CATEGORY_PRODUCTS_KEY_PREFIX = "category-products-"


def product_key(item_id: str) -> str:
    return f"{PRODUCT_KEY_PREFIX}{item_id}"


def category_products_key(category: str) -> str:
    # the category is used as given by the caller, not normalized
    return f"{CATEGORY_PRODUCTS_KEY_PREFIX}{category}"


@dataclass(frozen=True)
class InvalidationEvent:
    """Surfaces touched by a mutation."""

    product: bool = False
    admin: bool = False
    product_id: Optional[str] = None


@dataclass(frozen=True)
class InvalidationReport:
    keys: List[str]
    removed: int


class InvalidationCoordinator:
    """Purges stale keys and counts invalidations.

    ``generation`` increases on every :meth:`invalidate` call, before the
    purge. A reader that saw a different generation before loading from
    the item store must not cache what it loaded.
    """

    def __init__(self, cache: CacheStore) -> None:
        self.cache = cache
        self.generation = 0

    @staticmethod
    def stale_keys(event: InvalidationEvent) -> List[str]:
        """Fixed keys made stale by ``event`` (prefix purges excluded)."""
        keys: List[str] = []
        if event.product:
            keys.extend([LATEST_PRODUCTS_KEY, CATEGORIES_KEY])
        if event.admin:
            keys.append(ADMIN_PRODUCTS_KEY)
        if event.product_id is not None:
            keys.append(product_key(event.product_id))
        return keys

    def invalidate(self, event: InvalidationEvent) -> InvalidationReport:
        """Purge every cache entry that ``event`` may have made stale.

        Already absent keys are a no‑op, so invoking this twice for the
        same event leaves the cache as a single call would.

        :raises InvalidationFailure: if the cache store fails mid‑purge
        """
        self.generation += 1
        keys = self.stale_keys(event)
        try:
            removed = sum(1 for key in keys if self.cache.delete(key))
            if event.product:
                removed += self.cache.delete_matching(key_prefix(CATEGORY_PRODUCTS_KEY_PREFIX))
        except Exception as exc:
            raise InvalidationFailure(f"Cache invalidation failed: {exc}") from exc
        log_event(
            "cache_invalidated",
            logging.DEBUG,
            product=event.product,
            admin=event.admin,
            productId=event.product_id,
            removed=removed,
        )
        return InvalidationReport(keys=keys, removed=removed)
