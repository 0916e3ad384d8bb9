"""
utils/cache.py
---------------

Simple in‑process cache of serialized snapshots. This cache stores the
responses of catalog reads (latest products, categories, admin
listing, single products and category listings) as bytes under a
deterministic string key.

Entries carry no expiry and the store enforces no size bound: an entry
lives until it is explicitly invalidated or the process exits. The
cache is designed for a single process running a single event loop;
none of its operations await, so no two coroutines can interleave in
the middle of a ``set`` or ``delete_matching`` call.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterator, List

from app.core.errors import CacheMiss


KeyPredicate = Callable[[str], bool]


def key_prefix(prefix: str) -> KeyPredicate:
    """Return a predicate matching every key that starts with ``prefix``."""

    def _matches(key: str) -> bool:
        return key.startswith(prefix)

    return _matches


class CacheStore:
    """In‑memory string‑keyed store of serialized values.

    ``get`` returns exactly the bytes last passed to ``set`` for a key.
    Instances are created once per process by the application lifespan
    and injected wherever they are needed; tests build a fresh instance
    per test.
    """

    def __init__(self) -> None:
        self._store: Dict[str, bytes] = {}

    def has(self, key: str) -> bool:
        """Return ``True`` if a live entry exists for ``key``."""
        return key in self._store

    def get(self, key: str) -> bytes:
        """Return the payload stored under ``key``.

        :raises CacheMiss: if no entry exists for ``key``
        """
        try:
            return self._store[key]
        except KeyError:
            raise CacheMiss(key) from None

    def set(self, key: str, payload: bytes) -> None:
        """Insert or overwrite the entry for ``key``."""
        self._store[key] = bytes(payload)

    def delete(self, key: str) -> bool:
        """Remove a single entry. Absent keys are a no‑op."""
        return self._store.pop(key, None) is not None

    def delete_matching(self, predicate: KeyPredicate) -> int:
        """Remove every entry whose key satisfies ``predicate``.

        :return: number of entries removed
        """
        doomed: List[str] = [key for key in self._store if predicate(key)]
        for key in doomed:
            del self._store[key]
        return len(doomed)

    def keys(self) -> Iterator[str]:
        return iter(list(self._store))

    def clear(self) -> None:
        """Clear all entries from the cache."""
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)
