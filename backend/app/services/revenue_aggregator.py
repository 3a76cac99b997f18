"""Revenue Aggregator — per-category revenue over orders in a given status.

Invariants:
    - Read-only: never mutates orders or products
    - One SELECT per report: every row comes from the same snapshot
    - Line items whose product was deleted are excluded (inner join)
    - status=None reports over every order
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import OrderStatus
from app.core.revenue import CategoryRevenue, summarize_revenue
from app.models.order import Order, OrderItem
from app.models.product import Product

logger = logging.getLogger(__name__)


class RevenueAggregator:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def revenue_by_category(
        self, status: OrderStatus | None = OrderStatus.DELIVERED,
    ) -> list[CategoryRevenue]:
        query = (
            select(Product.category, Product.price, OrderItem.quantity)
            .select_from(OrderItem)
            .join(Order, Order.id == OrderItem.order_id)
            .join(Product, Product.id == OrderItem.product_id)
        )
        if status is not None:
            query = query.where(Order.status == status.value)
        result = await self.db.execute(query)
        return summarize_revenue(result.tuples().all())
