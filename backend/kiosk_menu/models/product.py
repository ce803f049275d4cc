"""Product model."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kiosk_menu.db.base import Base, TimestampMixin


class Product(Base, TimestampMixin):
    """Sellable product in a store's catalog."""

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(primary_key=True)
    store_id: Mapped[int] = mapped_column(ForeignKey("stores.id"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=0, nullable=False)
    is_sold_out: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Kiosk placement; kiosk_order is NULL while the product is off the kiosk
    is_kiosk_enabled: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False, index=True)
    kiosk_order: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Relationships
    store: Mapped["Store"] = relationship("Store", back_populates="products")
    option_groups: Mapped[list["OptionGroup"]] = relationship(
        "OptionGroup",
        secondary="product_option_groups",
        back_populates="products",
        order_by="OptionGroup.display_order",
    )


# Forward references
from kiosk_menu.models.option_group import OptionGroup
from kiosk_menu.models.store import Store
