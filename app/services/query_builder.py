"""
services/query_builder.py
-------------------------

Turns raw, partially present search parameters into a normalized
:class:`~app.schemas.search.SearchSpec`.

Search is advisory, not validating: malformed input never raises. An
absent or unusable page becomes page 1, an unparsable price is
ignored and any present sort token other than ``"asc"`` sorts by
descending price.
The category is passed through untouched; products are stored with a
lower‑cased category, so a mixed‑case category filter matches nothing.
"""

from __future__ import annotations

import math
from typing import Any, Optional

from app.core.config import get_settings
from app.schemas.search import ItemFilter, SearchSpec, SortDirection


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_page(raw: Any) -> int:
    """Return a 1‑indexed page number, defaulting to ``1``."""
    if _blank(raw) or isinstance(raw, bool):
        return 1
    try:
        page = int(str(raw).strip())
    except ValueError:
        return 1
    return page if page >= 1 else 1


def parse_max_price(raw: Any) -> Optional[float]:
    if _blank(raw) or isinstance(raw, bool):
        return None
    try:
        price = float(str(raw).strip())
    except ValueError:
        return None
    return price if math.isfinite(price) else None


def parse_sort(raw: Any) -> Optional[SortDirection]:
    """Exactly ``"asc"`` sorts ascending; any other present token sorts descending."""
    if _blank(raw):
        return None
    return SortDirection.ASC if raw == "asc" else SortDirection.DESC


def build_search_spec(
    search: Any = None,
    category: Any = None,
    price: Any = None,
    sort: Any = None,
    page: Any = None,
    *,
    limit: Optional[int] = None,
) -> SearchSpec:
    """Build a search specification from raw query parameters.

    :param search: free‑text fragment matched anywhere in the name
    :param category: category compared verbatim with the stored one
    :param price: maximum price (inclusive)
    :param sort: ``"asc"`` or ``"desc"`` by price
    :param page: 1‑indexed page number
    :param limit: page size; defaults to ``product_per_page``
    """
    if limit is None:
        limit = get_settings().product_per_page
    item_filter = ItemFilter(
        name_contains=None if _blank(search) else str(search),
        max_price=parse_max_price(price),
        category=None if _blank(category) else str(category),
    )
    return SearchSpec(
        filter=item_filter,
        sort=parse_sort(sort),
        page=parse_page(page),
        limit=limit,
    )
