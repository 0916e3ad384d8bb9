"""
schemas/search.py
------------------

Normalized search parameters. ``ItemFilter`` is the store‑facing part
(what to match) and ``SearchSpec`` adds ordering and pagination. Both
are immutable and built by :mod:`app.services.query_builder`; the item
store only ever sees an ``ItemFilter``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from app.schemas.products import Product
from app.utils.pagination import page_offset


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class ItemFilter:
    """Conjunction of optional predicates over a product.

    ``name_contains`` is a literal, case‑insensitive substring.
    ``category`` is compared verbatim with the stored (lower‑case)
    category.
    """

    name_contains: Optional[str] = None
    max_price: Optional[float] = None
    category: Optional[str] = None

    def matches(self, item: Product) -> bool:
        if self.name_contains is not None and self.name_contains.casefold() not in item.name.casefold():
            return False
        if self.max_price is not None and item.price > self.max_price:
            return False
        if self.category is not None and item.category != self.category:
            return False
        return True


@dataclass(frozen=True)
class SearchSpec:
    filter: ItemFilter = field(default_factory=ItemFilter)
    sort: Optional[SortDirection] = None
    page: int = 1
    limit: int = 20

    @property
    def skip(self) -> int:
        return page_offset(self.page, self.limit)
