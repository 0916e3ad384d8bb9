"""
core/config.py
----------------

Application configuration module.

Defines strongly‑typed settings loaded from the environment using
``pydantic-settings``. These settings control the catalog page sizes,
the directory used for uploaded product images and the log level.
Having a central place for configuration makes it easier to adjust
behaviour without touching the business logic. The values provided
here are sensible defaults but can be overridden via environment
variables at deployment time.
"""

from __future__ import annotations

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    The settings structure is flat and uses environment variables
    prefixed with ``APP_``.  For example, to change the search page
    size you can set ``APP_PRODUCT_PER_PAGE=50``.

    See :class:`pydantic_settings.BaseSettings` for details on how
    environment variables are mapped onto fields.
    """

    # Catalog listings
    product_per_page: int = Field(20, ge=1, description="Page size used by the filtered product search.")
    latest_products_limit: int = Field(10, ge=1, description="Number of products returned by the latest listing.")

    # Image storage
    upload_dir: str = Field("uploads", description="Directory where uploaded product photos are written.")

    log_level: str = Field("INFO", description="Level applied to the application logger.")

    model_config = SettingsConfigDict(env_prefix="APP_", env_file=None, case_sensitive=False)


@lru_cache()
def get_settings() -> Settings:
    """Return a cached instance of the application settings.

    Using a cache prevents expensive environment parsing on every call.
    Tests that need different values should build a :class:`Settings`
    directly instead of mutating the cached one.
    """
    return Settings()
