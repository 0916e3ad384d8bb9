"""
schemas/products.py
--------------------

Models representing catalog products. ``Product`` is the persisted
entity returned by the item store; ``ProductCreate`` and
``ProductUpdate`` are the validated bodies of the write operations.
The validators enforce the invariants the store relies on: required
fields are non‑empty, price and stock are non‑negative and the
category is always stored trimmed and lower‑cased.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Size(str, Enum):
    XS = "XS"
    S = "S"
    M = "M"
    L = "L"
    XL = "XL"
    XXL = "XXL"
    REGULAR = "regular"


def _normalise_category(v: str) -> str:
    return v.strip().lower()


def _non_empty(v: str) -> str:
    if not v.strip():
        raise ValueError("must not be empty")
    return v


class Product(BaseModel):
    """A catalog entry as persisted by the item store."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    id: str = Field(alias="_id")
    name: str
    category: str
    price: float = Field(ge=0, allow_inf_nan=False)
    stock: int = Field(ge=0)
    description: str
    size: Size = Size.REGULAR
    color: str
    photo: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    def snapshot(self) -> Dict[str, Any]:
        """Plain JSON‑compatible representation used for caching and responses."""
        return self.model_dump(mode="json", by_alias=True)


class ProductCreate(BaseModel):
    """Fields required to create a product. ``photo`` is the stored image reference."""

    model_config = ConfigDict(use_enum_values=True)

    name: str
    category: str
    price: float = Field(ge=0, allow_inf_nan=False)
    stock: int = Field(ge=0)
    description: str
    size: Size = Size.REGULAR
    color: str
    photo: str

    @field_validator("name", "description", "color", "photo")
    @classmethod
    def validar_no_vacio(cls, v: str) -> str:
        return _non_empty(v)

    @field_validator("category")
    @classmethod
    def normalizar_categoria(cls, v: str) -> str:
        return _normalise_category(_non_empty(v))


class ProductUpdate(BaseModel):
    """Partial update: only the fields that are set are applied."""

    model_config = ConfigDict(use_enum_values=True)

    name: Optional[str] = None
    category: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    stock: Optional[int] = Field(default=None, ge=0)
    description: Optional[str] = None
    size: Optional[Size] = None
    color: Optional[str] = None

    @field_validator("name", "description", "color")
    @classmethod
    def validar_no_vacio(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else _non_empty(v)

    @field_validator("category")
    @classmethod
    def normalizar_categoria(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else _normalise_category(_non_empty(v))

    def changes(self) -> Dict[str, Any]:
        """Return only the fields explicitly present in the request."""
        return self.model_dump(exclude_unset=True, exclude_none=True)
