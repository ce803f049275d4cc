"""Store model."""

from __future__ import annotations

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kiosk_menu.db.base import Base, TimestampMixin


class Store(Base, TimestampMixin):
    """A merchant store with its kiosk service options."""

    __tablename__ = "stores"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    # Kiosk service options shown to customers before ordering
    kiosk_dine_in_enabled: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    kiosk_takeout_enabled: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    kiosk_delivery_enabled: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Relationships
    products: Mapped[list["Product"]] = relationship("Product", back_populates="store")
    kiosk_categories: Mapped[list["KioskCategory"]] = relationship(
        "KioskCategory", back_populates="store", cascade="all, delete-orphan"
    )
    option_groups: Mapped[list["OptionGroup"]] = relationship(
        "OptionGroup", back_populates="store", cascade="all, delete-orphan"
    )


# Forward references
from kiosk_menu.models.product import Product
from kiosk_menu.models.kiosk_category import KioskCategory
from kiosk_menu.models.option_group import OptionGroup
