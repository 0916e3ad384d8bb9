"""
clients/item_store.py
---------------------

Item store collaborator. The catalog never talks to a database
directly: it depends on the :class:`ItemStore` protocol, which offers
filtered lookup, lookup by id, distinct‑value enumeration and
create/save/delete. Any persistence engine can sit behind it.

:class:`InMemoryItemStore` is the implementation used for local runs
and tests. Insertion order is its natural order, sorts are stable and
``createdAt``/``updatedAt`` are maintained here, as a document database
would do with timestamps enabled.
"""

from __future__ import annotations

import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

from app.schemas.products import Product
from app.schemas.search import ItemFilter

# (field, descending)
SortKey = Tuple[str, bool]


class ItemStore(Protocol):
    async def find_all(
        self,
        filter: ItemFilter | None = None,
        *,
        sort: Sequence[SortKey] = (),
        skip: int = 0,
        limit: int | None = None,
    ) -> List[Product]: ...

    async def count(self, filter: ItemFilter | None = None) -> int: ...

    async def find_by_id(self, item_id: str) -> Optional[Product]: ...

    async def distinct(self, field: str) -> List[Any]: ...

    async def create(self, fields: Dict[str, Any]) -> Product: ...

    async def save(self, item: Product) -> None: ...

    async def delete(self, item: Product) -> None: ...


def _new_id() -> str:
    return secrets.token_hex(12)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryItemStore:
    """Dictionary backed :class:`ItemStore`."""

    def __init__(self) -> None:
        self._items: Dict[str, Product] = {}
        self._last_stamp: Optional[datetime] = None

    def _now(self) -> datetime:
        # strictly increasing so newest-first ordering never ties
        now = _utcnow()
        if self._last_stamp is not None and now <= self._last_stamp:
            now = self._last_stamp + timedelta(microseconds=1)
        self._last_stamp = now
        return now

    async def find_all(
        self,
        filter: ItemFilter | None = None,
        *,
        sort: Sequence[SortKey] = (),
        skip: int = 0,
        limit: int | None = None,
    ) -> List[Product]:
        items = [item for item in self._items.values() if filter is None or filter.matches(item)]
        # stable sorts applied last key first give a lexicographic order
        for field, descending in reversed(list(sort)):
            items.sort(key=lambda item: getattr(item, field), reverse=descending)
        items = items[max(skip, 0):]
        if limit is not None:
            items = items[:limit]
        return [item.model_copy(deep=True) for item in items]

    async def count(self, filter: ItemFilter | None = None) -> int:
        return sum(1 for item in self._items.values() if filter is None or filter.matches(item))

    async def find_by_id(self, item_id: str) -> Optional[Product]:
        item = self._items.get(item_id)
        return item.model_copy(deep=True) if item is not None else None

    async def distinct(self, field: str) -> List[Any]:
        seen: Dict[Any, None] = {}
        for item in self._items.values():
            seen.setdefault(getattr(item, field), None)
        return list(seen)

    async def create(self, fields: Dict[str, Any]) -> Product:
        now = self._now()
        item = Product.model_validate({**fields, "_id": _new_id(), "createdAt": now, "updatedAt": now})
        self._items[item.id] = item
        return item.model_copy(deep=True)

    async def save(self, item: Product) -> None:
        if item.id not in self._items:
            raise LookupError(f"Product {item.id} does not exist")
        data = item.model_dump(by_alias=True)
        data["updatedAt"] = self._now()
        self._items[item.id] = Product.model_validate(data)

    async def delete(self, item: Product) -> None:
        self._items.pop(item.id, None)

    def __len__(self) -> int:
        return len(self._items)
