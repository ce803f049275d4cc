"""Kiosk menu editor routes.

Every mutation loads the store's current menu, applies one sequencer
operation and saves the result; the response is always the full new
sequence so the editor can re-render from it.
"""

import logging

from fastapi import APIRouter, HTTPException, Request, status

from kiosk_menu.api.routes.stores import get_store_or_404
from kiosk_menu.core.config import settings
from kiosk_menu.core.rate_limit import limiter
from kiosk_menu.core.validators import PositiveIntId
from kiosk_menu.db.session import DbSession
from kiosk_menu.schemas.kiosk_menu import (
    AddCategoryRequest,
    AddItemRequest,
    KioskSequenceResponse,
    RenameCategoryRequest,
    ReorderRequest,
    sequence_response,
)
from kiosk_menu.services.kiosk_menu_service import KioskMenuService
from kiosk_menu.services.menu_sequencer import (
    END,
    DuplicateEntryError,
    EntryNotFoundError,
    MenuSequencerError,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _http_error(store_id: int, exc: MenuSequencerError) -> HTTPException:
    """Translate a sequencer failure into the matching HTTP status."""
    logger.warning(f"Kiosk menu edit rejected for store {store_id}: {exc}")
    if isinstance(exc, EntryNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, DuplicateEntryError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.get("/{store_id}/kiosk-menu", response_model=KioskSequenceResponse)
@limiter.limit(settings.rate_limit_read)
def get_kiosk_menu(request: Request, store_id: PositiveIntId, db: DbSession):
    """Get the combined product/category list in kiosk order."""
    get_store_or_404(db, store_id)
    return sequence_response(store_id, KioskMenuService(db).load_sequence(store_id))


@router.post("/{store_id}/kiosk-menu/items", response_model=KioskSequenceResponse)
@limiter.limit(settings.rate_limit_editor)
def add_kiosk_item(request: Request, store_id: PositiveIntId, data: AddItemRequest, db: DbSession):
    """Put a catalog product on the kiosk."""
    get_store_or_404(db, store_id)
    try:
        seq = KioskMenuService(db).add_product(store_id, data.product_id, data.at_index)
    except MenuSequencerError as e:
        raise _http_error(store_id, e)
    return sequence_response(store_id, seq)


@router.delete("/{store_id}/kiosk-menu/items/{product_id}", response_model=KioskSequenceResponse)
@limiter.limit(settings.rate_limit_editor)
def remove_kiosk_item(request: Request, store_id: PositiveIntId, product_id: PositiveIntId, db: DbSession):
    """Take a product off the kiosk (it stays in the catalog)."""
    get_store_or_404(db, store_id)
    try:
        seq = KioskMenuService(db).remove_product(store_id, product_id)
    except MenuSequencerError as e:
        raise _http_error(store_id, e)
    return sequence_response(store_id, seq)


@router.post(
    "/{store_id}/kiosk-menu/categories",
    response_model=KioskSequenceResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(settings.rate_limit_editor)
def add_kiosk_category(request: Request, store_id: PositiveIntId, data: AddCategoryRequest, db: DbSession):
    """Insert a category divider at the start, at the end, or after a product."""
    get_store_or_404(db, store_id)
    if data.placement == "after":
        after = data.after_product_id
    elif data.placement == "start":
        after = None
    else:
        after = END

    try:
        seq = KioskMenuService(db).add_category(store_id, data.name, after)
    except MenuSequencerError as e:
        raise _http_error(store_id, e)
    return sequence_response(store_id, seq)


@router.patch("/{store_id}/kiosk-menu/categories/{category_id}", response_model=KioskSequenceResponse)
@limiter.limit(settings.rate_limit_editor)
def rename_kiosk_category(
    request: Request,
    store_id: PositiveIntId,
    category_id: str,
    data: RenameCategoryRequest,
    db: DbSession,
):
    """Rename a category divider."""
    get_store_or_404(db, store_id)
    try:
        seq = KioskMenuService(db).rename_category(store_id, category_id, data.name)
    except MenuSequencerError as e:
        raise _http_error(store_id, e)
    return sequence_response(store_id, seq)


@router.delete("/{store_id}/kiosk-menu/categories/{category_id}", response_model=KioskSequenceResponse)
@limiter.limit(settings.rate_limit_editor)
def remove_kiosk_category(request: Request, store_id: PositiveIntId, category_id: str, db: DbSession):
    """Delete a category divider. Products keep their place."""
    get_store_or_404(db, store_id)
    try:
        seq = KioskMenuService(db).remove_category(store_id, category_id)
    except MenuSequencerError as e:
        raise _http_error(store_id, e)
    return sequence_response(store_id, seq)


@router.post("/{store_id}/kiosk-menu/reorder", response_model=KioskSequenceResponse)
@limiter.limit(settings.rate_limit_editor)
def reorder_kiosk_menu(request: Request, store_id: PositiveIntId, data: ReorderRequest, db: DbSession):
    """Apply a drag-and-drop move. Dropping an entry on itself changes nothing."""
    get_store_or_404(db, store_id)
    try:
        seq = KioskMenuService(db).move_entry(store_id, data.from_index, data.to_index)
    except MenuSequencerError as e:
        raise _http_error(store_id, e)
    return sequence_response(store_id, seq)
