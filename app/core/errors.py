"""
core/errors.py
--------------

Error taxonomy for the catalog. Every failure the core can report is a
:class:`CatalogError` carrying the HTTP status the transport layer
should answer with and a human‑readable message. The application
registers a single exception handler for the base class (see
:mod:`app.main`) so services never build HTTP responses themselves.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for errors raised by the catalog core."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(CatalogError):
    """A write is missing a required field or the mandatory photo."""

    status_code = 400


class NotFound(CatalogError):
    """Lookup by id found no matching product."""

    status_code = 404


class CacheMiss(NotFound, KeyError):
    """Raised by :meth:`CacheStore.get` when no entry exists for the key."""

    def __init__(self, key: str) -> None:
        super().__init__(f"No cache entry for key '{key}'")
        self.key = key

    def __str__(self) -> str:
        return self.message


class StoreFailure(CatalogError):
    """The item store itself failed (connectivity, constraint violation)."""

    status_code = 500


class InvalidationFailure(CatalogError):
    """Purging stale cache keys failed after a committed write.

    Logged by the catalog service; never undoes the mutation.
    """

    status_code = 500
