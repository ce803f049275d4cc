"""Product option routes - store option groups and their product links."""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, Request, status

from kiosk_menu.api.routes.products import get_product_or_404
from kiosk_menu.api.routes.stores import get_store_or_404
from kiosk_menu.core.config import settings
from kiosk_menu.core.rate_limit import limiter
from kiosk_menu.core.responses import list_response
from kiosk_menu.core.validators import PositiveIntId
from kiosk_menu.db.session import DbSession
from kiosk_menu.models.option_group import OptionChoice, OptionGroup
from kiosk_menu.schemas.option_group import (
    OptionChoiceCreate,
    OptionGroupCreate,
    OptionGroupResponse,
    OptionGroupUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_group_or_404(db: DbSession, store_id: int, group_id: int) -> OptionGroup:
    group = db.query(OptionGroup).filter(
        OptionGroup.id == group_id,
        OptionGroup.store_id == store_id,
    ).first()
    if not group:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Option group not found")
    return group


def _build_choices(choices: List[OptionChoiceCreate]) -> List[OptionChoice]:
    return [
        OptionChoice(display_order=index, **choice.model_dump())
        for index, choice in enumerate(choices)
    ]


def _serialize(groups) -> list:
    return [OptionGroupResponse.model_validate(g).model_dump(mode="json") for g in groups]


@router.get("/{store_id}/option-groups")
@limiter.limit(settings.rate_limit_read)
def list_option_groups(request: Request, store_id: PositiveIntId, db: DbSession):
    """List the store's option groups with their choices."""
    get_store_or_404(db, store_id)
    groups = (
        db.query(OptionGroup)
        .filter(OptionGroup.store_id == store_id)
        .order_by(OptionGroup.display_order, OptionGroup.id)
        .all()
    )
    return list_response(_serialize(groups))


@router.post("/{store_id}/option-groups", response_model=OptionGroupResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.rate_limit_editor)
def create_option_group(request: Request, store_id: PositiveIntId, data: OptionGroupCreate, db: DbSession):
    """Define an option group once; products opt into it by linking."""
    get_store_or_404(db, store_id)
    group = OptionGroup(
        store_id=store_id,
        name=data.name,
        display_order=data.display_order,
        choices=_build_choices(data.choices),
    )
    db.add(group)
    db.commit()
    db.refresh(group)
    logger.info(f"Option group {group.id} created for store {store_id} ({len(group.choices)} choices)")
    return group


@router.get("/{store_id}/option-groups/{group_id}", response_model=OptionGroupResponse)
@limiter.limit(settings.rate_limit_read)
def get_option_group(request: Request, store_id: PositiveIntId, group_id: PositiveIntId, db: DbSession):
    get_store_or_404(db, store_id)
    return _get_group_or_404(db, store_id, group_id)


@router.put("/{store_id}/option-groups/{group_id}", response_model=OptionGroupResponse)
@limiter.limit(settings.rate_limit_editor)
def update_option_group(
    request: Request,
    store_id: PositiveIntId,
    group_id: PositiveIntId,
    data: OptionGroupUpdate,
    db: DbSession,
):
    """Update an option group. A ``choices`` list replaces every existing choice."""
    get_store_or_404(db, store_id)
    group = _get_group_or_404(db, store_id, group_id)

    update_data = data.model_dump(exclude_unset=True, exclude_none=True)
    choices = update_data.pop("choices", None)
    for field, value in update_data.items():
        setattr(group, field, value)
    if choices is not None:
        group.choices = _build_choices(data.choices)

    db.commit()
    db.refresh(group)
    return group


@router.delete("/{store_id}/option-groups/{group_id}")
@limiter.limit(settings.rate_limit_editor)
def delete_option_group(request: Request, store_id: PositiveIntId, group_id: PositiveIntId, db: DbSession):
    """Delete an option group, its choices and its product links."""
    get_store_or_404(db, store_id)
    group = _get_group_or_404(db, store_id, group_id)
    db.delete(group)
    db.commit()
    logger.info(f"Option group {group_id} deleted from store {store_id}")
    return {"message": "Option group deleted"}


# ===== PRODUCT LINKS =====

@router.get("/{store_id}/products/{product_id}/option-groups")
@limiter.limit(settings.rate_limit_read)
def list_product_option_groups(
    request: Request, store_id: PositiveIntId, product_id: PositiveIntId, db: DbSession
):
    """Option groups a product offers, in group display order."""
    get_store_or_404(db, store_id)
    product = get_product_or_404(db, store_id, product_id)
    return list_response(_serialize(product.option_groups))


@router.put("/{store_id}/products/{product_id}/option-groups/{group_id}")
@limiter.limit(settings.rate_limit_editor)
def link_option_group(
    request: Request,
    store_id: PositiveIntId,
    product_id: PositiveIntId,
    group_id: PositiveIntId,
    db: DbSession,
):
    """Offer an option group on a product. Linking twice is a no-op."""
    get_store_or_404(db, store_id)
    product = get_product_or_404(db, store_id, product_id)
    group = _get_group_or_404(db, store_id, group_id)

    if group not in product.option_groups:
        product.option_groups.append(group)
        db.commit()
        db.refresh(product)
    return list_response(_serialize(product.option_groups))


@router.delete("/{store_id}/products/{product_id}/option-groups/{group_id}")
@limiter.limit(settings.rate_limit_editor)
def unlink_option_group(
    request: Request,
    store_id: PositiveIntId,
    product_id: PositiveIntId,
    group_id: PositiveIntId,
    db: DbSession,
):
    """Stop offering an option group on a product; the group itself stays."""
    get_store_or_404(db, store_id)
    product = get_product_or_404(db, store_id, product_id)
    group = _get_group_or_404(db, store_id, group_id)

    if group not in product.option_groups:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Option group is not linked to product")
    product.option_groups.remove(group)
    db.commit()
    db.refresh(product)
    return list_response(_serialize(product.option_groups))
