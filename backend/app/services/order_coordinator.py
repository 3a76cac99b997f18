"""Order Transaction Coordinator — order placement and stock adjustment as one unit.

Invariants:
    - The customer is always the authenticated principal, never request data
    - Totals come from authoritative product prices; a client-declared total is
      advisory (logged when it differs, never stored)
    - Order insert + every stock decrement commit together or not at all
    - No placement leaves stock below zero: pre-checked, then each decrement is
      a conditional UPDATE that aborts the transaction if it loses a race
    - A repeated Idempotency-Key for the same customer returns the original
      order without touching stock
    - A blank Idempotency-Key is treated as absent
    - Stock rows are decremented in product-id order; stored line positions
      keep the submitted order

Design Decisions:
    - Pre-check + atomic apply over create-then-reconcile: no half-applied orders
      to repair later, and the caller sees the stock failure synchronously
    - Depends on CatalogRepository / OrderRepository protocols so failure paths
      can be exercised with fakes
"""

import logging
from typing import Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import LineItem, Principal
from app.core.enforce_orders import (
    check_stock, compute_total, merge_line_items, totals_match,
)
from app.core.errors import (
    ConflictError, InsufficientStockError, ResourceNotFoundError, RigStoreError,
)
from app.core.repository_protocols import (
    CatalogRepository, OrderRecord, OrderRepository,
)

logger = logging.getLogger(__name__)


class OrderCoordinator:
    """Places orders: validate, price, persist and decrement stock in one transaction."""

    def __init__(
        self,
        db: AsyncSession,
        catalog: CatalogRepository,
        orders: OrderRepository,
    ):
        self.db = db
        self.catalog = catalog
        self.orders = orders

    async def place_order(
        self,
        principal: Principal,
        line_items: Sequence[LineItem],
        declared_total: float | None = None,
        idempotency_key: str | None = None,
    ) -> OrderRecord:
        idempotency_key = (idempotency_key or "").strip() or None
        if idempotency_key:
            existing = await self.orders.get_by_idempotency_key(
                principal.user_id, idempotency_key,
            )
            if existing is not None:
                logger.info(
                    "Order replayed from idempotency key",
                    extra={"order_id": str(existing.id)},
                )
                return existing

        items = merge_line_items(line_items)
        products = await self.catalog.get_many([i.product_id for i in items])
        for item in items:
            if item.product_id not in products:
                raise ResourceNotFoundError("Product", str(item.product_id))

        check_stock(items, products)
        total = compute_total(items, products)
        if not totals_match(declared_total, total):
            logger.warning(
                f"Client-declared total {declared_total} ignored, "
                f"server total is {total}",
                extra={"user_id": str(principal.user_id)},
            )

        try:
            order = await self.orders.create(
                principal.user_id, items, total, idempotency_key,
            )
            # product-id order: concurrent orders take row locks in one sequence
            for item in sorted(items, key=lambda i: str(i.product_id)):
                applied = await self.catalog.decrement_stock(
                    item.product_id, item.quantity,
                )
                if not applied:
                    raise InsufficientStockError(
                        str(item.product_id), item.quantity, None,
                    )
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            return await self._replay_after_race(principal, idempotency_key)
        except RigStoreError as e:
            await self.db.rollback()
            logger.info(
                f"Order placement rolled back: {e.message}",
                extra={"user_id": str(principal.user_id), "error_code": e.code},
            )
            raise

        logger.info(
            "Order placed",
            extra={
                "order_id": str(order.id),
                "user_id": str(principal.user_id),
                "total_amount": total,
            },
        )
        return order

    async def _replay_after_race(
        self, principal: Principal, idempotency_key: str | None,
    ) -> OrderRecord:
        """A concurrent request with the same key committed first."""
        if idempotency_key:
            existing = await self.orders.get_by_idempotency_key(
                principal.user_id, idempotency_key,
            )
            if existing is not None:
                return existing
        raise ConflictError("Order could not be placed due to a concurrent update")
