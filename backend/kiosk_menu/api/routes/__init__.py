"""API routes."""

from fastapi import APIRouter

from kiosk_menu.api.routes import kiosk, kiosk_menu, option_groups, products, stores

api_router = APIRouter()

# Store records and kiosk service options
api_router.include_router(stores.router, prefix="/stores", tags=["stores"])
# Catalog and kiosk editor are nested under /stores/{store_id}
api_router.include_router(products.router, prefix="/stores", tags=["products"])
api_router.include_router(option_groups.router, prefix="/stores", tags=["product-options"])
api_router.include_router(kiosk_menu.router, prefix="/stores", tags=["kiosk-editor"])

# Customer-facing kiosk
api_router.include_router(kiosk.router, prefix="/kiosk", tags=["kiosk"])
