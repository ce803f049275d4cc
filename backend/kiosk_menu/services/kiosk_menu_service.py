"""Kiosk Menu Service - loads, edits and saves a store's kiosk menu.

The ordering rules live in ``menu_sequencer``; this service is the storage
side of it. Every editor action follows the same flow:

1. Load the store's kiosk-enabled products and category dividers
2. Build the combined sequence and apply one sequencer operation
3. Save both derived collections in a single commit:
   a. Replace the store's ``kiosk_categories`` rows (delete all, insert all)
   b. Write ``is_kiosk_enabled`` / ``kiosk_order`` on every product of the store

Concurrent editors are last-write-wins; there is no version check.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Union

from sqlalchemy.orm import Session, joinedload

from kiosk_menu.models.kiosk_category import KioskCategory
from kiosk_menu.models.option_group import OptionGroup
from kiosk_menu.models.product import Product
from kiosk_menu.models.store import Store
from kiosk_menu.services.menu_sequencer import (
    CategoryMarkerEntry,
    EntryNotFoundError,
    KioskSequence,
    MenuItemEntry,
    Placement,
    build,
    insert_marker,
    insert_menu_item,
    new_marker_id,
    remove_marker,
    remove_menu_item,
    rename_marker,
    reorder,
    sections,
)

logger = logging.getLogger(__name__)


class KioskMenuService:
    """Persistence collaborator for the kiosk menu sequencer."""

    def __init__(self, db: Session, id_factory: Callable[[], str] = new_marker_id):
        self.db = db
        self.id_factory = id_factory

    # ===== LOADING =====

    def load_sequence(self, store_id: int) -> KioskSequence:
        """Rebuild the store's kiosk sequence from its stored rows."""
        products = (
            self.db.query(Product)
            .filter(
                Product.store_id == store_id,
                Product.is_kiosk_enabled == True,
                Product.active == True,
            )
            .order_by(Product.kiosk_order.is_(None), Product.kiosk_order, Product.id)
            .all()
        )
        categories = (
            self.db.query(KioskCategory)
            .filter(KioskCategory.store_id == store_id)
            .order_by(KioskCategory.position, KioskCategory.created_at)
            .all()
        )

        items = [self._item_entry(p) for p in products]
        markers = [
            CategoryMarkerEntry(id=c.id, name=c.name, display_order=c.position)
            for c in categories
        ]
        return build(items, markers)

    @staticmethod
    def _item_entry(product: Product) -> MenuItemEntry:
        return MenuItemEntry(
            id=str(product.id),
            display_order=product.kiosk_order,
            payload={
                "name": product.name,
                "description": product.description,
                "price": product.price,
                "is_sold_out": product.is_sold_out,
            },
        )

    # ===== SAVING =====

    def save_sequence(self, store_id: int, seq: KioskSequence) -> None:
        """Write the sequence's derived fields back for the whole store."""
        existing = self.db.query(KioskCategory).filter(KioskCategory.store_id == store_id).all()
        for category in existing:
            self.db.delete(category)
        # Flush deletes first so re-inserted divider ids don't collide
        self.db.flush()

        for marker in seq.markers:
            self.db.add(KioskCategory(
                id=marker.id,
                store_id=store_id,
                name=marker.name,
                position=marker.display_order,
                after_product_id=int(marker.anchor_item_id) if marker.anchor_item_id is not None else None,
            ))

        orders = {int(item.id): item.display_order for item in seq.items}
        disabled = 0
        for product in self.db.query(Product).filter(Product.store_id == store_id).all():
            if product.id in orders:
                product.is_kiosk_enabled = True
                product.kiosk_order = orders[product.id]
            elif product.is_kiosk_enabled or product.kiosk_order is not None:
                product.is_kiosk_enabled = False
                product.kiosk_order = None
                disabled += 1

        self.db.commit()
        logger.debug(
            f"Saved kiosk menu for store {store_id}: {len(orders)} products, "
            f"{len(seq.markers)} categories, {disabled} products disabled"
        )

    def _apply(
        self,
        store_id: int,
        action: str,
        operation: Callable[[KioskSequence], KioskSequence],
    ) -> KioskSequence:
        seq = self.load_sequence(store_id)
        updated = operation(seq)
        if updated is seq:
            logger.debug(f"Kiosk menu {action} for store {store_id} was a no-op")
            return seq
        self.save_sequence(store_id, updated)
        logger.info(f"Kiosk menu {action} for store {store_id} ({len(updated)} entries)")
        return updated

    # ===== EDITOR OPERATIONS =====

    def _get_active_product(self, store_id: int, product_id: int) -> Product:
        product = self.db.query(Product).filter(
            Product.id == product_id,
            Product.store_id == store_id,
            Product.active == True,
        ).first()
        if not product:
            raise EntryNotFoundError("product", str(product_id))
        return product

    def add_product(self, store_id: int, product_id: int, at_index: Optional[int] = None) -> KioskSequence:
        """Enable a catalog product on the kiosk at ``at_index`` (default: end)."""
        product = self._get_active_product(store_id, product_id)
        entry = self._item_entry(product)
        return self._apply(
            store_id, "add_product",
            lambda seq: insert_menu_item(seq, entry, at_index),
        )

    def remove_product(self, store_id: int, product_id: int) -> KioskSequence:
        """Take a product off the kiosk; it stays in the catalog."""
        return self._apply(
            store_id, "remove_product",
            lambda seq: remove_menu_item(seq, str(product_id)),
        )

    def add_category(
        self,
        store_id: int,
        name: str,
        after: Union[int, None, Placement],
    ) -> KioskSequence:
        """Insert a divider after product ``after``, at the start (None) or at END."""
        anchor = str(after) if isinstance(after, int) else after
        return self._apply(
            store_id, "add_category",
            lambda seq: insert_marker(seq, name, anchor, self.id_factory),
        )

    def remove_category(self, store_id: int, category_id: str) -> KioskSequence:
        return self._apply(
            store_id, "remove_category",
            lambda seq: remove_marker(seq, category_id),
        )

    def rename_category(self, store_id: int, category_id: str, name: str) -> KioskSequence:
        return self._apply(
            store_id, "rename_category",
            lambda seq: rename_marker(seq, category_id, name),
        )

    def move_entry(self, store_id: int, from_index: int, to_index: int) -> KioskSequence:
        """Apply a drag-and-drop move. Dropping an entry onto itself saves nothing."""
        return self._apply(
            store_id, "move_entry",
            lambda seq: reorder(seq, from_index, to_index),
        )

    # ===== CUSTOMER KIOSK =====

    def set_sold_out(self, store_id: int, product_id: int, is_sold_out: bool) -> Product:
        product = self._get_active_product(store_id, product_id)
        product.is_sold_out = is_sold_out
        self.db.commit()
        self.db.refresh(product)
        logger.info(f"Product {product_id} in store {store_id} sold_out={is_sold_out}")
        return product

    def _option_groups(self, product_ids: List[int]) -> Dict[int, List[Dict[str, Any]]]:
        """Linked option groups per product, groups and choices in display order."""
        if not product_ids:
            return {}
        products = (
            self.db.query(Product)
            .options(joinedload(Product.option_groups).joinedload(OptionGroup.choices))
            .filter(Product.id.in_(product_ids))
            .all()
        )
        return {
            product.id: [
                {
                    "id": group.id,
                    "name": group.name,
                    "choices": [
                        {
                            "id": choice.id,
                            "name": choice.name,
                            "price_impact": choice.price_impact,
                            "is_default": choice.is_default,
                        }
                        for choice in group.choices
                    ],
                }
                for group in product.option_groups
            ]
            for product in products
        }

    def customer_menu(self, store: Store) -> Dict[str, Any]:
        """Sectioned kiosk menu as customers see it, with each product's options."""
        seq = self.load_sequence(store.id)
        options = self._option_groups([int(item.id) for item in seq.items])
        menu_sections: List[Dict[str, Any]] = []
        for section in sections(seq):
            menu_sections.append({
                "category_id": section["category_id"],
                "category_name": section["category_name"],
                "items": [
                    {
                        "product_id": int(item.id),
                        "name": item.payload["name"],
                        "description": item.payload["description"],
                        "price": item.payload["price"],
                        "is_sold_out": item.payload["is_sold_out"],
                        "option_groups": options.get(int(item.id), []),
                    }
                    for item in section["items"]
                ],
            })

        return {
            "store_id": store.id,
            "store_name": store.name,
            "options": {
                "kiosk_dine_in_enabled": store.kiosk_dine_in_enabled,
                "kiosk_takeout_enabled": store.kiosk_takeout_enabled,
                "kiosk_delivery_enabled": store.kiosk_delivery_enabled,
            },
            "sections": menu_sections,
        }
