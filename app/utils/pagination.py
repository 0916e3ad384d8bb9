"""
utils/pagination.py
--------------------

Page arithmetic shared by the query builder and the catalog search.

Pages are 1‑indexed. For a page size ``limit`` the items of page ``p``
start at offset ``(p - 1) * limit`` and the number of pages needed to
show ``n`` items is ``ceil(n / limit)``, which is ``0`` for an empty
result.
"""

from __future__ import annotations

from math import ceil


def page_offset(page: int, limit: int) -> int:
    """Return the number of items to skip to reach ``page``."""
    if page < 1:
        raise ValueError("page must be >= 1")
    if limit < 1:
        raise ValueError("limit must be >= 1")
    return (page - 1) * limit


def total_pages(total_items: int, limit: int) -> int:
    """Return ``ceil(total_items / limit)``."""
    if limit < 1:
        raise ValueError("limit must be >= 1")
    return ceil(total_items / limit) if total_items > 0 else 0
