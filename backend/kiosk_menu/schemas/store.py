"""Store schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class KioskOptions(BaseModel):
    """Service modes a store offers on its kiosk."""

    kiosk_dine_in_enabled: bool = False
    kiosk_takeout_enabled: bool = False
    kiosk_delivery_enabled: bool = False


class KioskOptionsUpdate(BaseModel):
    """Partial kiosk options update."""

    kiosk_dine_in_enabled: Optional[bool] = None
    kiosk_takeout_enabled: Optional[bool] = None
    kiosk_delivery_enabled: Optional[bool] = None


class StoreCreate(KioskOptions):
    """Store creation schema."""

    name: str = Field(..., min_length=1, max_length=255)


class StoreResponse(KioskOptions):
    """Store response schema."""

    id: int
    name: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
