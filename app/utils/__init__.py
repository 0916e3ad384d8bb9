# app/utils/__init__.py
"""
Exporta las utilidades del catálogo para que ``from app.utils import ...``
funcione de forma estable: el cache en memoria y la aritmética de
paginación.
"""

from __future__ import annotations

from .cache import CacheStore, key_prefix
from .pagination import page_offset, total_pages

__all__ = [
    "CacheStore",
    "key_prefix",
    "page_offset",
    "total_pages",
]
