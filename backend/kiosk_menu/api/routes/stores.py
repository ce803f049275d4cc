"""Store routes - store records and kiosk service options."""

from fastapi import APIRouter, HTTPException, Request, status

from kiosk_menu.core.config import settings
from kiosk_menu.core.rate_limit import limiter
from kiosk_menu.core.validators import PositiveIntId
from kiosk_menu.db.session import DbSession
from kiosk_menu.models.store import Store
from kiosk_menu.schemas.store import KioskOptions, KioskOptionsUpdate, StoreCreate, StoreResponse

router = APIRouter()


def get_store_or_404(db: DbSession, store_id: int) -> Store:
    store = db.query(Store).filter(Store.id == store_id).first()
    if not store:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Store not found")
    return store


@router.post("/", response_model=StoreResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.rate_limit_editor)
def create_store(request: Request, data: StoreCreate, db: DbSession):
    """Register a store."""
    store = Store(**data.model_dump())
    db.add(store)
    db.commit()
    db.refresh(store)
    return store


@router.get("/{store_id}", response_model=StoreResponse)
@limiter.limit(settings.rate_limit_read)
def get_store(request: Request, store_id: PositiveIntId, db: DbSession):
    """Get a specific store."""
    return get_store_or_404(db, store_id)


@router.get("/{store_id}/kiosk-options", response_model=KioskOptions)
@limiter.limit(settings.rate_limit_read)
def get_kiosk_options(request: Request, store_id: PositiveIntId, db: DbSession):
    """Get the dine-in / takeout / delivery switches for the store's kiosk."""
    return KioskOptions.model_validate(get_store_or_404(db, store_id), from_attributes=True)


@router.put("/{store_id}/kiosk-options", response_model=KioskOptions)
@limiter.limit(settings.rate_limit_editor)
def update_kiosk_options(request: Request, store_id: PositiveIntId, data: KioskOptionsUpdate, db: DbSession):
    """Update the store's kiosk service options."""
    store = get_store_or_404(db, store_id)

    update_data = data.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in update_data.items():
        setattr(store, field, value)

    db.commit()
    db.refresh(store)
    return KioskOptions.model_validate(store, from_attributes=True)
