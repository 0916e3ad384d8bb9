"""
External collaborators of the catalog: the item store that persists
products and the image store that keeps their photos.
"""

from .image_store import LocalImageStore
from .item_store import InMemoryItemStore, ItemStore

__all__ = ["InMemoryItemStore", "ItemStore", "LocalImageStore"]
