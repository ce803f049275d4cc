"""Customer kiosk routes - the menu a store's kiosk renders."""

from fastapi import APIRouter, Request

from kiosk_menu.api.routes.stores import get_store_or_404
from kiosk_menu.core.config import settings
from kiosk_menu.core.rate_limit import limiter
from kiosk_menu.core.validators import PositiveIntId
from kiosk_menu.db.session import DbSession
from kiosk_menu.schemas.kiosk_menu import CustomerMenuResponse
from kiosk_menu.services.kiosk_menu_service import KioskMenuService

router = APIRouter()


@router.get("/{store_id}/menu", response_model=CustomerMenuResponse)
@limiter.limit(settings.rate_limit_read)
def get_customer_menu(request: Request, store_id: PositiveIntId, db: DbSession):
    """Kiosk menu grouped into category sections, sold-out products flagged."""
    store = get_store_or_404(db, store_id)
    return KioskMenuService(db).customer_menu(store)
