"""Product Routes — public catalog reads, admin writes, authenticated reviews.

Invariants:
    - Listing and detail are public
    - Create/delete require admin; review append requires any authenticated user
    - Review author is the principal's display name, never request data
    - Delete always answers {"success": true}, whether or not the product existed

Design Decisions:
    - `cat` accepted as an alias of `category` for clients of the previous API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_admin, get_principal
from app.core.domain_types import Principal, ProductId, SortDirection
from app.infrastructure.database import get_db
from app.schemas.product import (
    ProductCreate, ProductResponse, ReviewCreate, SuccessResponse,
)
from app.services.catalog_store import CatalogStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=list[ProductResponse])
async def list_products(
    category: str | None = Query(None, max_length=100),
    cat: str | None = Query(None, max_length=100, include_in_schema=False),
    sort: SortDirection = Query(SortDirection.DESC),
    db: AsyncSession = Depends(get_db),
):
    """List products, optionally filtered by exact category, sorted by price."""
    products = await CatalogStore(db).list(category or cat, sort)
    return [ProductResponse.model_validate(p) for p in products]


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: UUID, db: AsyncSession = Depends(get_db)):
    product = await CatalogStore(db).get(ProductId(product_id))
    return ProductResponse.model_validate(product)


@router.post(
    "", response_model=ProductResponse, status_code=status.HTTP_201_CREATED,
)
async def create_product(
    body: ProductCreate,
    admin: Principal = Depends(get_admin),
    db: AsyncSession = Depends(get_db),
):
    product = await CatalogStore(db).create(
        model_name=body.model_name,
        price=body.price,
        category=body.category,
        stock=body.stock,
        specs=body.specs.model_dump(),
    )
    await db.commit()
    return ProductResponse.model_validate(product)


@router.delete("/{product_id}", response_model=SuccessResponse)
async def delete_product(
    product_id: UUID,
    admin: Principal = Depends(get_admin),
    db: AsyncSession = Depends(get_db),
):
    """Hard delete. Orders that reference the product are left untouched."""
    existed = await CatalogStore(db).delete(ProductId(product_id))
    await db.commit()
    if not existed:
        logger.info(
            "Delete of unknown product treated as success",
            extra={"product_id": str(product_id)},
        )
    return SuccessResponse()


@router.put("/{product_id}/review", response_model=SuccessResponse)
async def append_review(
    product_id: UUID,
    body: ReviewCreate,
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    await CatalogStore(db).append_review(
        ProductId(product_id), body.rating, body.comment, principal.display_name,
    )
    await db.commit()
    return SuccessResponse()
