"""Kiosk menu editor and customer menu schemas."""

from __future__ import annotations

from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from kiosk_menu.core.config import settings
from kiosk_menu.core.validators import clean_category_name
from kiosk_menu.schemas.store import KioskOptions
from kiosk_menu.services.menu_sequencer import CategoryMarkerEntry, KioskSequence


class KioskEntryResponse(BaseModel):
    """One row of the kiosk editor list: a product or a category divider."""

    type: Literal["item", "category"]
    id: str
    display_order: int
    name: Optional[str] = None
    # Dividers only
    anchor_item_id: Optional[str] = None
    # Products only
    price: Optional[Decimal] = None
    is_sold_out: Optional[bool] = None


class KioskSequenceResponse(BaseModel):
    store_id: int
    entries: List[KioskEntryResponse]
    total: int


class AddItemRequest(BaseModel):
    """Put a catalog product on the kiosk, appended unless ``at_index`` is set."""

    product_id: int = Field(..., gt=0)
    at_index: Optional[int] = None


class AddCategoryRequest(BaseModel):
    """Create a divider at the start, at the end, or right after a product."""

    name: str
    placement: Literal["start", "end", "after"] = "end"
    after_product_id: Optional[int] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return clean_category_name(v, settings.kiosk_max_category_name)

    @model_validator(mode="after")
    def validate_placement(self) -> "AddCategoryRequest":
        if self.placement == "after" and self.after_product_id is None:
            raise ValueError("after_product_id is required when placement is 'after'")
        if self.placement != "after" and self.after_product_id is not None:
            raise ValueError("after_product_id is only allowed when placement is 'after'")
        return self


class RenameCategoryRequest(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return clean_category_name(v, settings.kiosk_max_category_name)


class ReorderRequest(BaseModel):
    """A drag-and-drop gesture: move the entry at ``from_index`` to ``to_index``."""

    from_index: int
    to_index: int


class CustomerMenuChoice(BaseModel):
    id: int
    name: str
    price_impact: Decimal
    is_default: bool


class CustomerMenuOptionGroup(BaseModel):
    id: int
    name: str
    choices: List[CustomerMenuChoice]


class CustomerMenuItem(BaseModel):
    product_id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    is_sold_out: bool
    option_groups: List[CustomerMenuOptionGroup] = []


class CustomerMenuSection(BaseModel):
    category_id: Optional[str] = None
    category_name: Optional[str] = None
    items: List[CustomerMenuItem]


class CustomerMenuResponse(BaseModel):
    """What a customer's kiosk renders: service options and sectioned products."""

    store_id: int
    store_name: str
    options: KioskOptions
    sections: List[CustomerMenuSection]


def sequence_response(store_id: int, seq: KioskSequence) -> KioskSequenceResponse:
    """Serialize a settled sequence for the editor."""
    entries = []
    for entry in seq:
        if isinstance(entry, CategoryMarkerEntry):
            entries.append(KioskEntryResponse(
                type="category",
                id=entry.id,
                display_order=entry.display_order,
                name=entry.name,
                anchor_item_id=entry.anchor_item_id,
            ))
        else:
            entries.append(KioskEntryResponse(
                type="item",
                id=entry.id,
                display_order=entry.display_order,
                name=entry.payload.get("name"),
                price=entry.payload.get("price"),
                is_sold_out=entry.payload.get("is_sold_out"),
            ))
    return KioskSequenceResponse(store_id=store_id, entries=entries, total=len(entries))
