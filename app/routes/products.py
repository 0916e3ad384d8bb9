"""
routes/products.py
-------------------

API routes of the product catalog. Handlers stay thin: they translate
form fields, query strings and uploaded photos into calls on the
:class:`~app.services.product_service.CatalogService` and wrap results
in the ``{success, data}`` / ``{success, message}`` envelopes. Errors
raised by the service are rendered by the handler registered in
:mod:`app.main`.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status

from app.clients.image_store import LocalImageStore
from app.logging_config import log_event
from app.services.product_service import CatalogService, WriteResult

router = APIRouter(prefix="/api/v1/product", tags=["product"])


def get_catalog(request: Request) -> CatalogService:
    return request.app.state.catalog


async def _store_photo(photo: Optional[UploadFile], images: LocalImageStore) -> Optional[str]:
    if photo is None or not photo.filename:
        return None
    content = await photo.read()
    return await images.save(photo.filename, content)


def _written(result: WriteResult) -> Dict[str, Any]:
    if not result.invalidated:
        log_event("write_with_stale_cache", productId=result.item_id)
    return {"success": True, "message": result.message}


@router.post("/new", status_code=status.HTTP_201_CREATED)
async def new_product(
    name: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    stock: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    size: Optional[str] = Form(None),
    color: Optional[str] = Form(None),
    photo: Optional[UploadFile] = File(None),
    catalog: CatalogService = Depends(get_catalog),
):
    """Crea un producto; la foto es obligatoria."""
    ref = await _store_photo(photo, catalog.images)
    fields = {
        "name": name,
        "category": category,
        "price": price,
        "stock": stock,
        "description": description,
        "size": size,
        "color": color,
    }
    return _written(await catalog.create_product(fields, ref))


@router.get("/all")
async def all_products(
    search: Optional[str] = None,
    category: Optional[str] = None,
    price: Optional[str] = None,
    sort: Optional[str] = None,
    page: Optional[str] = None,
    catalog: CatalogService = Depends(get_catalog),
):
    """Búsqueda filtrada, ordenada y paginada (sin cache)."""
    result = await catalog.search_products(search=search, category=category, price=price, sort=sort, page=page)
    return {"success": True, "data": result.data, "totalPage": result.total_page}


@router.get("/latest")
async def latest_products(catalog: CatalogService = Depends(get_catalog)):
    return {"success": True, "data": await catalog.latest_products()}


@router.get("/categories")
async def all_categories(catalog: CatalogService = Depends(get_catalog)):
    return {"success": True, "data": await catalog.categories()}


@router.get("/admin-products")
async def admin_products(catalog: CatalogService = Depends(get_catalog)):
    return {"success": True, "data": await catalog.admin_products()}


@router.get("/category/{category}")
async def products_by_category(category: str, catalog: CatalogService = Depends(get_catalog)):
    return {"success": True, "data": await catalog.products_by_category(category)}


@router.get("/{item_id}")
async def single_product(item_id: str, catalog: CatalogService = Depends(get_catalog)):
    return {"success": True, "data": await catalog.get_product(item_id)}


@router.put("/{item_id}")
async def update_product(
    item_id: str,
    name: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    stock: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    size: Optional[str] = Form(None),
    color: Optional[str] = Form(None),
    photo: Optional[UploadFile] = File(None),
    catalog: CatalogService = Depends(get_catalog),
):
    """Actualización parcial: solo se aplican los campos enviados."""
    ref = await _store_photo(photo, catalog.images)
    fields = {
        "name": name,
        "category": category,
        "price": price,
        "stock": stock,
        "description": description,
        "size": size,
        "color": color,
    }
    return _written(await catalog.update_product(item_id, fields, ref))


@router.delete("/{item_id}")
async def delete_product(item_id: str, catalog: CatalogService = Depends(get_catalog)):
    return _written(await catalog.delete_product(item_id))
