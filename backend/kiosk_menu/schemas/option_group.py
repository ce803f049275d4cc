"""Product option schemas."""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field


class OptionChoiceBase(BaseModel):
    """A choice inside an option group; a negative impact is a discount."""

    name: str = Field(..., min_length=1, max_length=100)
    price_impact: Decimal = Decimal("0")
    is_default: bool = False


class OptionChoiceCreate(OptionChoiceBase):
    pass


class OptionChoiceResponse(OptionChoiceBase):
    id: int
    display_order: int

    model_config = {"from_attributes": True}


class OptionGroupBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    display_order: int = Field(default=0, ge=0)


class OptionGroupCreate(OptionGroupBase):
    """Option group creation; choices keep the order they are sent in."""

    choices: List[OptionChoiceCreate] = Field(default_factory=list)


class OptionGroupUpdate(BaseModel):
    """Partial update. Sending ``choices`` replaces the whole list."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    display_order: Optional[int] = Field(None, ge=0)
    choices: Optional[List[OptionChoiceCreate]] = None


class OptionGroupResponse(OptionGroupBase):
    id: int
    store_id: int
    choices: List[OptionChoiceResponse]

    model_config = {"from_attributes": True}
