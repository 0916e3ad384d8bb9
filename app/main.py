# main.py
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.responses import ORJSONResponse

# Import logging utilities early so that the logger configuration is
# applied before any other modules emit log messages.
from app.logging_config import logger, log_event
import logging
import time

from app.clients.image_store import LocalImageStore
from app.clients.item_store import InMemoryItemStore
from app.core.config import Settings, get_settings
from app.core.errors import CatalogError
from app.routes.products import router as products_router
from app.services.product_service import CatalogService
from app.utils.cache import CacheStore


def build_catalog(settings: Settings) -> CatalogService:
    """Wire one cache, item store and image store into a catalog service."""
    return CatalogService(
        store=InMemoryItemStore(),
        cache=CacheStore(),
        images=LocalImageStore(settings.upload_dir),
        settings=settings,
    )


def create_app(catalog: Optional[CatalogService] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # crear y compartir el catálogo (cache de proceso incluido)
        app.state.catalog = catalog or build_catalog(get_settings())
        try:
            yield
        finally:
            app.state.catalog.cache.clear()

    app = FastAPI(default_response_class=ORJSONResponse, lifespan=lifespan)

    # registrar routers
    app.include_router(products_router)

    @app.exception_handler(CatalogError)
    async def catalog_error_handler(request: Request, exc: CatalogError):
        level = logging.ERROR if exc.status_code >= 500 else logging.INFO
        log_event(
            "catalog_error",
            level,
            path=request.url.path,
            status=exc.status_code,
            error=type(exc).__name__,
            detalle=exc.message,
        )
        return ORJSONResponse(status_code=exc.status_code, content={"success": False, "message": exc.message})

    # -----------------------------------------------------------------
    # Middleware de logging de requests
    # -----------------------------------------------------------------
    # Registra el camino, método HTTP, código de respuesta y tiempo de
    # procesado de cada solicitud como una línea JSON.
    @app.middleware("http")  # type: ignore[misc]
    async def log_requests(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        duration_ms = (time.time() - start_time) * 1000
        log_event(
            "http_request",
            path=request.url.path,
            method=request.method,
            status=response.status_code,
            duration_ms=round(duration_ms, 2),
        )
        return response

    logger.debug("catalog application created")
    return app

app = create_app()
