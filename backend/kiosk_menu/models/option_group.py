"""Product option models - store-wide option groups linked to products."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Boolean, Column, ForeignKey, Integer, Numeric, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kiosk_menu.db.base import Base, TimestampMixin

# Which option groups a product offers on the kiosk
product_option_groups = Table(
    "product_option_groups",
    Base.metadata,
    Column("product_id", ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
    Column("option_group_id", ForeignKey("option_groups.id", ondelete="CASCADE"), primary_key=True),
)


class OptionGroup(Base, TimestampMixin):
    """A named set of choices (size, milk, toppings) defined once per store."""

    __tablename__ = "option_groups"

    id: Mapped[int] = mapped_column(primary_key=True)
    store_id: Mapped[int] = mapped_column(ForeignKey("stores.id"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Relationships
    store: Mapped["Store"] = relationship("Store", back_populates="option_groups")
    choices: Mapped[list["OptionChoice"]] = relationship(
        "OptionChoice",
        back_populates="group",
        cascade="all, delete-orphan",
        order_by="OptionChoice.display_order",
    )
    products: Mapped[list["Product"]] = relationship(
        "Product", secondary=product_option_groups, back_populates="option_groups"
    )


class OptionChoice(Base):
    """One selectable choice; ``price_impact`` is added to the product price."""

    __tablename__ = "option_choices"

    id: Mapped[int] = mapped_column(primary_key=True)
    group_id: Mapped[int] = mapped_column(
        ForeignKey("option_groups.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    price_impact: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=0, nullable=False)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    group: Mapped["OptionGroup"] = relationship("OptionGroup", back_populates="choices")


# Forward references
from kiosk_menu.models.product import Product
from kiosk_menu.models.store import Store
