"""
services/product_service.py
---------------------------

Catalog service: read‑through caching for listings and single products,
uncached filtered search, and write‑through invalidation for
create/update/delete. This is the only module that touches both the
cache store and the item store; route handlers stay thin and delegate
every flow here.

Writes are a two step protocol that is deliberately not atomic: the
item store mutation is committed first and only then are the stale
cache keys purged. If the purge fails the mutation stands, the failure
is logged and reported through :attr:`WriteResult.invalidated`, and
stale reads are possible until the next successful invalidation.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Iterator, List, Optional

import orjson
from pydantic import ValidationError as PydanticValidationError

from app.clients.image_store import LocalImageStore
from app.clients.item_store import ItemStore
from app.core.config import Settings, get_settings
from app.core.errors import CatalogError, InvalidationFailure, NotFound, StoreFailure, ValidationError
from app.logging_config import log_call, log_event
from app.schemas.products import Product, ProductCreate, ProductUpdate
from app.schemas.search import ItemFilter, SortDirection
from app.services.invalidation import (
    ADMIN_PRODUCTS_KEY,
    CATEGORIES_KEY,
    LATEST_PRODUCTS_KEY,
    InvalidationCoordinator,
    InvalidationEvent,
    category_products_key,
    product_key,
)
from app.services.query_builder import build_search_spec
from app.utils.cache import CacheStore
from app.utils.pagination import total_pages

NEWEST_FIRST = (("created_at", True),)

MSG_ADD_PHOTO = "Please Add Photo!"
MSG_ALL_FIELDS = "Please Enter All Fields!"
MSG_NOT_FOUND = "Product Not Found!"


@dataclass(frozen=True)
class WriteResult:
    message: str
    item_id: str
    invalidated: bool = True


@dataclass(frozen=True)
class SearchResult:
    data: List[Dict[str, Any]]
    total_page: int
    total: int


def _present(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Drop absent and blank values, mirroring form semantics."""
    return {
        k: v for k, v in fields.items()
        if v is not None and not (isinstance(v, str) and not v.strip())
    }


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except CatalogError:
        raise
    except Exception as exc:
        log_event("store_failure", logging.ERROR, operation=operation, detalle=str(exc))
        raise StoreFailure(f"Item store {operation} failed") from exc


class CatalogService:
    def __init__(
        self,
        store: ItemStore,
        cache: CacheStore,
        images: LocalImageStore,
        *,
        settings: Optional[Settings] = None,
        invalidator: Optional[InvalidationCoordinator] = None,
    ) -> None:
        self.store = store
        self.cache = cache
        self.images = images
        self.settings = settings or get_settings()
        self.invalidator = invalidator or InvalidationCoordinator(cache)

    # =======================
    # Reads (read-through)
    # =======================

    async def _read_through(self, key: str, load: Callable[[], Awaitable[Any]]) -> Any:
        """Return the cached snapshot for ``key`` or load, cache and return it.

        ``load`` may raise (e.g. :class:`NotFound`); nothing is cached then.
        A snapshot loaded across an invalidation is returned but not cached.
        """
        if self.cache.has(key):
            log_event("cache_hit", logging.DEBUG, key=key)
            return orjson.loads(self.cache.get(key))
        log_event("cache_miss", logging.DEBUG, key=key)
        generation = self.invalidator.generation
        with _store_errors(f"read {key}"):
            data = await load()
        if self.invalidator.generation != generation:
            log_event("cache_fill_skipped", logging.DEBUG, key=key)
            return data
        self.cache.set(key, orjson.dumps(data))
        return data

    async def latest_products(self) -> List[Dict[str, Any]]:
        async def load() -> List[Dict[str, Any]]:
            items = await self.store.find_all(sort=NEWEST_FIRST, limit=self.settings.latest_products_limit)
            return [item.snapshot() for item in items]

        return await self._read_through(LATEST_PRODUCTS_KEY, load)

    async def categories(self) -> List[str]:
        async def load() -> List[str]:
            return [str(value) for value in await self.store.distinct("category")]

        return await self._read_through(CATEGORIES_KEY, load)

    async def admin_products(self) -> List[Dict[str, Any]]:
        async def load() -> List[Dict[str, Any]]:
            return [item.snapshot() for item in await self.store.find_all(sort=NEWEST_FIRST)]

        return await self._read_through(ADMIN_PRODUCTS_KEY, load)

    async def get_product(self, item_id: str) -> Dict[str, Any]:
        async def load() -> Dict[str, Any]:
            item = await self.store.find_by_id(item_id)
            if item is None:
                raise NotFound(MSG_NOT_FOUND)
            return item.snapshot()

        return await self._read_through(product_key(item_id), load)

    async def products_by_category(self, category: str) -> List[Dict[str, Any]]:
        """List one category. The key keeps the caller's spelling; the query is lower‑cased."""
        if not category or not category.strip():
            raise ValidationError("Category parameter is required")

        async def load() -> List[Dict[str, Any]]:
            items = await self.store.find_all(ItemFilter(category=category.lower()))
            return [item.snapshot() for item in items]

        return await self._read_through(category_products_key(category), load)

    @log_call
    async def search_products(
        self,
        search: Any = None,
        category: Any = None,
        price: Any = None,
        sort: Any = None,
        page: Any = None,
    ) -> SearchResult:
        """Filtered, sorted and paginated search. Never cached."""
        spec = build_search_spec(search, category, price, sort, page, limit=self.settings.product_per_page)
        order = [("price", spec.sort is SortDirection.DESC)] if spec.sort is not None else []
        with _store_errors("search"):
            items, total = await asyncio.gather(
                self.store.find_all(spec.filter, sort=order, skip=spec.skip, limit=spec.limit),
                self.store.count(spec.filter),
            )
        return SearchResult(
            data=[item.snapshot() for item in items],
            total_page=total_pages(total, spec.limit),
            total=total,
        )

    # =======================
    # Writes (write-through invalidation)
    # =======================

    def _invalidate(self, event: InvalidationEvent) -> bool:
        try:
            self.invalidator.invalidate(event)
        except InvalidationFailure as exc:
            log_event(
                "cache_invalidation_failed",
                logging.ERROR,
                productId=event.product_id,
                detalle=exc.message,
            )
            return False
        return True

    async def _find_or_404(self, item_id: str) -> Product:
        with _store_errors("find_by_id"):
            item = await self.store.find_by_id(item_id)
        if item is None:
            raise NotFound(MSG_NOT_FOUND)
        return item

    @log_call
    async def create_product(self, fields: Dict[str, Any], photo: Optional[str]) -> WriteResult:
        """Create a product from raw form fields and a stored photo reference.

        A rejected create releases the already stored photo.
        """
        if not photo:
            raise ValidationError(MSG_ADD_PHOTO)
        try:
            data = ProductCreate.model_validate({**_present(fields), "photo": photo})
        except PydanticValidationError:
            await self.images.release(photo)
            raise ValidationError(MSG_ALL_FIELDS) from None
        try:
            with _store_errors("create"):
                item = await self.store.create(data.model_dump())
        except StoreFailure:
            await self.images.release(photo)
            raise
        log_event("product_created", productId=item.id, category=item.category)
        invalidated = self._invalidate(InvalidationEvent(product=True, admin=True))
        return WriteResult("Product Created Successfully!", item.id, invalidated)

    @log_call
    async def update_product(self, item_id: str, fields: Dict[str, Any], photo: Optional[str] = None) -> WriteResult:
        """Apply only the fields present in ``fields``; a new photo replaces the old one."""
        try:
            item = await self._find_or_404(item_id)
            changes = ProductUpdate.model_validate(_present(fields)).changes()
        except (CatalogError, PydanticValidationError) as exc:
            if photo:
                await self.images.release(photo)
            if isinstance(exc, PydanticValidationError):
                raise ValidationError("Invalid product fields") from None
            raise
        old_photo = item.photo
        if photo:
            changes["photo"] = photo
        updated = Product.model_validate({**item.model_dump(by_alias=True), **changes})
        try:
            with _store_errors("save"):
                await self.store.save(updated)
        except StoreFailure:
            if photo:
                await self.images.release(photo)
            raise
        if photo and old_photo != photo:
            await self.images.release(old_photo)
        log_event("product_updated", productId=item_id, fields=sorted(changes))
        invalidated = self._invalidate(InvalidationEvent(product=True, admin=True, product_id=item.id))
        return WriteResult("Product Updated Successfully!", item.id, invalidated)

    @log_call
    async def delete_product(self, item_id: str) -> WriteResult:
        item = await self._find_or_404(item_id)
        with _store_errors("delete"):
            await self.store.delete(item)
        await self.images.release(item.photo)
        log_event("product_deleted", productId=item.id)
        invalidated = self._invalidate(InvalidationEvent(product=True, admin=True, product_id=item.id))
        return WriteResult("Product Deleted Successfully!", item.id, invalidated)
