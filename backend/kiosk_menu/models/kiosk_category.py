"""Kiosk category divider model."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kiosk_menu.db.base import Base


class KioskCategory(Base):
    """Named divider on a store's kiosk menu.

    ``position`` shares the integer space of ``Product.kiosk_order``.
    ``after_product_id`` is the product the divider trails, NULL when it
    opens the menu. Rows are replaced wholesale per store on every save.
    """

    __tablename__ = "kiosk_categories"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    store_id: Mapped[int] = mapped_column(ForeignKey("stores.id"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    after_product_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("products.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    # Relationships
    store: Mapped["Store"] = relationship("Store", back_populates="kiosk_categories")


# Forward references
from kiosk_menu.models.store import Store
