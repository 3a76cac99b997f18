"""Order Store — order creation, status updates and projected listings.

Invariants:
    - create() persists header + items as given; product existence and stock are
      the coordinator's concern, not this store's
    - update_status() is permissive unless strict=True (see core/enforce_orders.py)
    - list_with_projection() never fails on a deleted product: the line item
      projects to the "unknown/deleted" sentinel
    - Listings sorted by order_date descending
    - Never commits: the caller owns the transaction
"""

import logging
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import LineItem, OrderId, OrderStatus, UserId
from app.core.enforce_orders import check_status_transition
from app.core.errors import ResourceNotFoundError
from app.core.order_projection import project_order
from app.models.order import Order, OrderItem
from app.models.product import Product

logger = logging.getLogger(__name__)


class OrderStore:
    """Order persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession, strict_status: bool = False):
        self.db = db
        self.strict_status = strict_status

    async def create(
        self,
        customer_id: UserId,
        line_items: Sequence[LineItem],
        total_amount: float,
        idempotency_key: str | None = None,
    ) -> Order:
        order = Order(
            customer_id=customer_id,
            status=OrderStatus.PROCESSING.value,
            total_amount=total_amount,
            idempotency_key=idempotency_key,
            items=[
                OrderItem(
                    position=index,
                    product_id=item.product_id,
                    quantity=item.quantity,
                )
                for index, item in enumerate(line_items)
            ],
        )
        self.db.add(order)
        await self.db.flush()
        return order

    async def get(self, order_id: OrderId) -> Order:
        order = await self.db.get(Order, order_id, populate_existing=True)
        if order is None:
            raise ResourceNotFoundError("Order", str(order_id))
        return order

    async def get_by_idempotency_key(
        self, customer_id: UserId, key: str,
    ) -> Order | None:
        result = await self.db.execute(
            select(Order)
            .where(Order.customer_id == customer_id)
            .where(Order.idempotency_key == key),
        )
        return result.scalar_one_or_none()

    async def update_status(self, order_id: OrderId, status: OrderStatus) -> Order:
        order = await self.get(order_id)
        check_status_transition(
            OrderStatus(order.status), status, self.strict_status,
        )
        order.status = status.value
        await self.db.flush()
        logger.info(
            "Order status updated",
            extra={"order_id": str(order_id), "status": status.value},
        )
        return order

    async def list_with_projection(
        self, customer_id: UserId | None = None,
    ) -> list[dict]:
        query = select(Order).order_by(Order.order_date.desc(), Order.id)
        if customer_id is not None:
            query = query.where(Order.customer_id == customer_id)
        result = await self.db.execute(
            query.execution_options(populate_existing=True),
        )
        orders = result.scalars().all()

        product_ids = {item.product_id for order in orders for item in order.items}
        products: dict = {}
        if product_ids:
            product_rows = await self.db.execute(
                select(Product).where(Product.id.in_(product_ids)),
            )
            products = {p.id: p for p in product_rows.scalars().all()}

        return [project_order(order, order.customer, products) for order in orders]
