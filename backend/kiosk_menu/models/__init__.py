"""SQLAlchemy models."""

from kiosk_menu.models.store import Store
from kiosk_menu.models.product import Product
from kiosk_menu.models.kiosk_category import KioskCategory
from kiosk_menu.models.option_group import OptionChoice, OptionGroup, product_option_groups

__all__ = ["Store", "Product", "KioskCategory", "OptionGroup", "OptionChoice", "product_option_groups"]
