"""Product routes - a store's catalog and sold-out switches."""

from fastapi import APIRouter, HTTPException, Query, Request, status

from kiosk_menu.api.routes.stores import get_store_or_404
from kiosk_menu.core.config import settings
from kiosk_menu.core.rate_limit import limiter
from kiosk_menu.core.responses import list_response
from kiosk_menu.core.validators import PositiveIntId
from kiosk_menu.db.session import DbSession
from kiosk_menu.models.product import Product
from kiosk_menu.schemas.product import ProductCreate, ProductResponse, ProductUpdate, SoldOutUpdate
from kiosk_menu.services.kiosk_menu_service import KioskMenuService
from kiosk_menu.services.menu_sequencer import EntryNotFoundError

router = APIRouter()


def get_product_or_404(db: DbSession, store_id: int, product_id: int) -> Product:
    product = db.query(Product).filter(Product.id == product_id, Product.store_id == store_id).first()
    if not product:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return product


@router.get("/{store_id}/products")
@limiter.limit(settings.rate_limit_read)
def list_products(
    request: Request,
    store_id: PositiveIntId,
    db: DbSession,
    kiosk_only: bool = Query(False, description="Only products currently on the kiosk"),
    active_only: bool = Query(True, description="Only show active products"),
):
    """List the store's products, newest first."""
    get_store_or_404(db, store_id)
    query = db.query(Product).filter(Product.store_id == store_id)

    if active_only:
        query = query.filter(Product.active == True)
    if kiosk_only:
        query = query.filter(Product.is_kiosk_enabled == True).order_by(
            Product.kiosk_order.is_(None), Product.kiosk_order, Product.id
        )
    else:
        query = query.order_by(Product.created_at.desc(), Product.id.desc())

    products = query.all()
    return list_response([ProductResponse.model_validate(p).model_dump(mode="json") for p in products])


@router.post("/{store_id}/products", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.rate_limit_editor)
def create_product(request: Request, store_id: PositiveIntId, data: ProductCreate, db: DbSession):
    """Add a product to the catalog. It stays off the kiosk until placed there."""
    get_store_or_404(db, store_id)
    product = Product(store_id=store_id, **data.model_dump())
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


@router.put("/{store_id}/products/{product_id}", response_model=ProductResponse)
@limiter.limit(settings.rate_limit_editor)
def update_product(
    request: Request,
    store_id: PositiveIntId,
    product_id: PositiveIntId,
    data: ProductUpdate,
    db: DbSession,
):
    """Edit a product. Deactivated products drop off the kiosk menu."""
    get_store_or_404(db, store_id)
    product = get_product_or_404(db, store_id, product_id)

    update_data = data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        # Only the description may be cleared
        if value is None and field != "description":
            continue
        setattr(product, field, value)

    db.commit()
    db.refresh(product)
    return product


@router.put("/{store_id}/products/{product_id}/sold-out", response_model=ProductResponse)
@limiter.limit(settings.rate_limit_editor)
def set_sold_out(
    request: Request,
    store_id: PositiveIntId,
    product_id: PositiveIntId,
    data: SoldOutUpdate,
    db: DbSession,
):
    """Mark a product as sold out (or available again)."""
    get_store_or_404(db, store_id)
    try:
        return KioskMenuService(db).set_sold_out(store_id, product_id, data.is_sold_out)
    except EntryNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
