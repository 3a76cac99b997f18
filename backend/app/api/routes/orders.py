"""Order Routes — placement (authenticated), listing and status updates (admin).

Invariants:
    - Customer of a new order is always the token's principal
    - Idempotency-Key header (optional) makes placement safe to retry
    - /mine returns only the caller's orders; / returns everyone's (admin)
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_admin, get_principal
from app.config import get_settings
from app.core.domain_types import LineItem, OrderId, Principal, ProductId
from app.infrastructure.database import get_db
from app.schemas.order import (
    OrderCreate, OrderResponse, OrderStatusUpdate, OrderView,
)
from app.schemas.product import SuccessResponse
from app.services.catalog_store import CatalogStore
from app.services.order_coordinator import OrderCoordinator
from app.services.order_store import OrderStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/orders", tags=["orders"])


def _order_store(db: AsyncSession) -> OrderStore:
    return OrderStore(db, strict_status=get_settings().order_status_strict)


@router.post("", response_model=OrderResponse)
async def place_order(
    body: OrderCreate,
    principal: Principal = Depends(get_principal),
    idempotency_key: str | None = Header(None, max_length=100),
    db: AsyncSession = Depends(get_db),
):
    """Place an order; stock is decremented in the same transaction."""
    coordinator = OrderCoordinator(db, CatalogStore(db), _order_store(db))
    order = await coordinator.place_order(
        principal,
        [
            LineItem(product_id=ProductId(i.product_id), quantity=i.quantity)
            for i in body.items
        ],
        declared_total=body.total_amount,
        idempotency_key=idempotency_key,
    )
    return OrderResponse.model_validate(order)


@router.get("", response_model=list[OrderView])
async def list_orders(
    admin: Principal = Depends(get_admin),
    db: AsyncSession = Depends(get_db),
):
    return await _order_store(db).list_with_projection()


@router.get("/mine", response_model=list[OrderView])
async def list_my_orders(
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return await _order_store(db).list_with_projection(principal.user_id)


@router.put("/{order_id}", response_model=SuccessResponse)
async def update_order_status(
    order_id: UUID,
    body: OrderStatusUpdate,
    admin: Principal = Depends(get_admin),
    db: AsyncSession = Depends(get_db),
):
    await _order_store(db).update_status(OrderId(order_id), body.status)
    await db.commit()
    return SuccessResponse()
