"""Tests for KioskMenuService - loading and saving the kiosk menu."""

import pytest
from decimal import Decimal

from kiosk_menu.models.kiosk_category import KioskCategory
from kiosk_menu.models.product import Product
from kiosk_menu.services.kiosk_menu_service import KioskMenuService
from kiosk_menu.services.menu_sequencer import (
    END,
    DuplicateEntryError,
    EntryIndexError,
    EntryNotFoundError,
)


@pytest.fixture
def service(db_session, id_sequence):
    return KioskMenuService(db_session, id_factory=id_sequence)


@pytest.fixture
def placed(service, test_store, test_products):
    """All three products on the kiosk with a "Coffee" divider after the first."""
    for product in test_products:
        service.add_product(test_store.id, product.id)
    service.add_category(test_store.id, "Coffee", test_products[0].id)
    return test_products


def _categories(db_session, store_id):
    return (
        db_session.query(KioskCategory)
        .filter(KioskCategory.store_id == store_id)
        .order_by(KioskCategory.position)
        .all()
    )


def _kiosk_orders(db_session, products):
    db_session.expire_all()
    return [db_session.get(Product, p.id).kiosk_order for p in products]


class TestLoadSequence:
    def test_empty_store(self, service, test_store, test_products):
        assert len(service.load_sequence(test_store.id)) == 0

    def test_sparse_stored_orders_load_dense(self, db_session, service, test_store, test_products):
        a, b, c = test_products
        a.is_kiosk_enabled, a.kiosk_order = True, 10
        b.is_kiosk_enabled, b.kiosk_order = True, 30
        c.is_kiosk_enabled, c.kiosk_order = True, None
        db_session.add(KioskCategory(id="legacy", store_id=test_store.id, name="Cakes", position=20))
        db_session.commit()

        seq = service.load_sequence(test_store.id)

        assert [e.id for e in seq] == [str(a.id), "legacy", str(b.id), str(c.id)]
        assert [e.display_order for e in seq] == [0, 1, 2, 3]
        assert seq[1].anchor_item_id == str(a.id)

    def test_inactive_products_are_skipped(self, db_session, service, test_store, placed):
        placed[1].active = False
        db_session.commit()

        seq = service.load_sequence(test_store.id)

        assert str(placed[1].id) not in [item.id for item in seq.items]

    def test_payload_carries_catalog_fields(self, service, test_store, placed):
        seq = service.load_sequence(test_store.id)
        latte = seq[seq.index_of_item(str(placed[1].id))]
        assert latte.payload["name"] == "Latte"
        assert latte.payload["description"] == "Double shot"
        assert Decimal(latte.payload["price"]) == Decimal("5.50")
        assert latte.payload["is_sold_out"] is False


class TestSaveSequence:
    def test_products_get_dense_kiosk_order(self, db_session, test_store, placed):
        assert _kiosk_orders(db_session, placed) == [0, 2, 3]
        assert all(db_session.get(Product, p.id).is_kiosk_enabled for p in placed)

    def test_divider_row_is_written(self, db_session, test_store, placed):
        rows = _categories(db_session, test_store.id)
        assert [(r.id, r.name, r.position, r.after_product_id) for r in rows] == [
            ("cat-1", "Coffee", 1, placed[0].id),
        ]

    def test_category_rows_are_replaced_not_duplicated(self, db_session, service, test_store, placed):
        service.add_category(test_store.id, "Dessert", END)
        service.rename_category(test_store.id, "cat-1", "Hot drinks")

        rows = _categories(db_session, test_store.id)
        assert [(r.id, r.name, r.position) for r in rows] == [
            ("cat-1", "Hot drinks", 1),
            ("cat-2", "Dessert", 4),
        ]

    def test_other_stores_are_untouched(self, db_session, service, test_store, other_store, placed):
        foreign = Product(store_id=other_store.id, name="Bagel", is_kiosk_enabled=True, kiosk_order=0)
        db_session.add(foreign)
        db_session.add(KioskCategory(id="other-cat", store_id=other_store.id, name="Bakery", position=1))
        db_session.commit()

        service.remove_product(test_store.id, placed[2].id)

        db_session.expire_all()
        assert db_session.get(Product, foreign.id).kiosk_order == 0
        assert [r.id for r in _categories(db_session, other_store.id)] == ["other-cat"]


class TestEditorOperations:
    def test_add_product_at_index(self, db_session, service, test_store, test_products):
        a, b, c = test_products
        service.add_product(test_store.id, a.id)
        service.add_product(test_store.id, b.id)
        seq = service.add_product(test_store.id, c.id, at_index=0)

        assert [e.id for e in seq] == [str(c.id), str(a.id), str(b.id)]
        assert _kiosk_orders(db_session, test_products) == [1, 2, 0]

    def test_add_product_twice_is_rejected(self, service, test_store, placed):
        with pytest.raises(DuplicateEntryError):
            service.add_product(test_store.id, placed[0].id)

    def test_add_product_from_other_store(self, db_session, service, test_store, other_store):
        foreign = Product(store_id=other_store.id, name="Bagel")
        db_session.add(foreign)
        db_session.commit()

        with pytest.raises(EntryNotFoundError):
            service.add_product(test_store.id, foreign.id)

    def test_add_inactive_product(self, db_session, service, test_store, test_products):
        test_products[0].active = False
        db_session.commit()

        with pytest.raises(EntryNotFoundError):
            service.add_product(test_store.id, test_products[0].id)

    def test_remove_product_disables_it(self, db_session, service, test_store, placed):
        service.remove_product(test_store.id, placed[0].id)

        db_session.expire_all()
        removed = db_session.get(Product, placed[0].id)
        assert removed.is_kiosk_enabled is False
        assert removed.kiosk_order is None
        assert removed.active is True
        assert _kiosk_orders(db_session, placed[1:]) == [1, 2]

    def test_remove_anchor_product_unanchors_divider(self, db_session, service, test_store, placed):
        service.remove_product(test_store.id, placed[0].id)

        rows = _categories(db_session, test_store.id)
        assert [(r.position, r.after_product_id) for r in rows] == [(0, None)]

    def test_remove_product_not_on_kiosk(self, service, test_store, test_products):
        with pytest.raises(EntryNotFoundError):
            service.remove_product(test_store.id, test_products[0].id)

    def test_add_category_at_start(self, db_session, service, test_store, placed):
        seq = service.add_category(test_store.id, "Specials", None)

        assert seq[0].name == "Specials"
        rows = _categories(db_session, test_store.id)
        assert (rows[0].name, rows[0].position, rows[0].after_product_id) == ("Specials", 0, None)
        assert _kiosk_orders(db_session, placed) == [1, 3, 4]

    def test_add_category_after_unknown_product(self, service, test_store, placed):
        with pytest.raises(EntryNotFoundError):
            service.add_category(test_store.id, "Tea", 99999)

    def test_remove_category(self, db_session, service, test_store, placed):
        service.remove_category(test_store.id, "cat-1")

        assert _categories(db_session, test_store.id) == []
        assert _kiosk_orders(db_session, placed) == [0, 1, 2]

    def test_move_divider_reanchors_row(self, db_session, service, test_store, placed):
        seq = service.move_entry(test_store.id, 1, 3)

        assert seq[3].id == "cat-1"
        row = _categories(db_session, test_store.id)[0]
        assert (row.position, row.after_product_id) == (3, placed[2].id)
        assert _kiosk_orders(db_session, placed) == [0, 1, 2]

    def test_move_onto_itself_skips_save(self, service, test_store, placed, monkeypatch):
        def fail_save(*args, **kwargs):
            raise AssertionError("save_sequence should not be called")

        monkeypatch.setattr(service, "save_sequence", fail_save)
        seq = service.move_entry(test_store.id, 2, 2)
        assert len(seq) == 4

    def test_failed_move_writes_nothing(self, db_session, service, test_store, placed):
        with pytest.raises(EntryIndexError):
            service.move_entry(test_store.id, 0, 4)

        assert _kiosk_orders(db_session, placed) == [0, 2, 3]
        assert _categories(db_session, test_store.id)[0].position == 1

    def test_rename_unknown_category(self, service, test_store, placed):
        with pytest.raises(EntryNotFoundError):
            service.rename_category(test_store.id, "missing", "Tea")


class TestCustomerMenu:
    def test_sold_out_flag(self, db_session, service, test_store, placed):
        product = service.set_sold_out(test_store.id, placed[1].id, True)
        assert product.is_sold_out is True

        menu = service.customer_menu(test_store)
        items = [item for section in menu["sections"] for item in section["items"]]
        assert [i["is_sold_out"] for i in items] == [False, True, False]

    def test_set_sold_out_unknown_product(self, service, test_store):
        with pytest.raises(EntryNotFoundError):
            service.set_sold_out(test_store.id, 99999, True)

    def test_sections_follow_dividers(self, service, test_store, placed):
        service.add_category(test_store.id, "Empty", END)

        menu = service.customer_menu(test_store)

        assert menu["store_name"] == "Corner Cafe"
        assert menu["options"] == {
            "kiosk_dine_in_enabled": True,
            "kiosk_takeout_enabled": True,
            "kiosk_delivery_enabled": False,
        }
        assert [(s["category_name"], [i["name"] for i in s["items"]]) for s in menu["sections"]] == [
            (None, ["Americano"]),
            ("Coffee", ["Latte", "Cheesecake"]),
        ]
