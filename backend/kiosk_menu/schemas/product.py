"""Product schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class ProductBase(BaseModel):
    """Base product schema."""

    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    price: Decimal = Field(default=Decimal("0"), ge=0)


class ProductCreate(ProductBase):
    """Product creation schema."""

    pass


class ProductUpdate(BaseModel):
    """Product update schema. ``active=False`` hides the product everywhere."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0)
    active: Optional[bool] = None


class SoldOutUpdate(BaseModel):
    """Toggle a product's sold-out flag."""

    is_sold_out: bool


class ProductResponse(ProductBase):
    """Product response schema."""

    id: int
    store_id: int
    is_sold_out: bool
    is_kiosk_enabled: bool
    kiosk_order: Optional[int] = None
    active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
