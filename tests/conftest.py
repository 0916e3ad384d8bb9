"""
Shared fixtures for the catalog tests.

Every test gets its own cache, item store and upload directory so no
state leaks between tests.
"""

from __future__ import annotations

from typing import Any, Dict

import pytest
from fastapi.testclient import TestClient

from app.clients.image_store import LocalImageStore
from app.clients.item_store import InMemoryItemStore
from app.core.config import Settings
from app.main import create_app
from app.services.product_service import CatalogService
from app.utils.cache import CacheStore


def product_fields(**overrides: Any) -> Dict[str, Any]:
    fields: Dict[str, Any] = {
        "name": "Trail Runner",
        "category": "Shoes",
        "price": "49.90",
        "stock": "12",
        "description": "Lightweight running shoe",
        "size": "M",
        "color": "blue",
    }
    fields.update(overrides)
    return fields


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(product_per_page=20, latest_products_limit=10, upload_dir=str(tmp_path / "uploads"))


@pytest.fixture
def cache() -> CacheStore:
    return CacheStore()


@pytest.fixture
def store() -> InMemoryItemStore:
    return InMemoryItemStore()


@pytest.fixture
def images(settings) -> LocalImageStore:
    return LocalImageStore(settings.upload_dir)


@pytest.fixture
def catalog(store, cache, images, settings) -> CatalogService:
    return CatalogService(store=store, cache=cache, images=images, settings=settings)


@pytest.fixture
def photo(images):
    """Factory storing a small fake photo and returning its reference."""

    async def _photo(name: str = "photo.png") -> str:
        return await images.save(name, b"\x89PNG fake")

    return _photo


@pytest.fixture
def client(catalog):
    with TestClient(create_app(catalog)) as test_client:
        yield test_client
