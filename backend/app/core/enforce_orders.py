"""Order Rule Enforcement — pure validation and pricing for order placement.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Raise InvalidInputError subtypes on violation, return normally on success
    - Totals are always computed from authoritative product prices, never from client input
    - Strict mode allows only Processing -> Shipped -> Delivered (one step at a time)

Design Decisions:
    - Exceptions (not error dicts): orders fail as a unit, so the first violation
      aborts the whole placement before anything is written
    - Duplicate product lines merged up front: one stock check and one decrement per product
"""

from typing import Iterable, Mapping

from app.core.domain_types import LineItem, OrderStatus, ProductId
from app.core.errors import (
    InvalidInputError, InsufficientStockError, InvalidStatusTransitionError,
)
from app.core.repository_protocols import ProductRecord


ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
}


def merge_line_items(items: Iterable[LineItem]) -> list[LineItem]:
    """Collapse repeated products into one line, keeping first-seen order."""
    quantities: dict[ProductId, int] = {}
    for item in items:
        if item.quantity < 1:
            raise InvalidInputError(
                f"Quantity for product '{item.product_id}' must be at least 1",
                field="items",
            )
        quantities[item.product_id] = quantities.get(item.product_id, 0) + item.quantity
    if not quantities:
        raise InvalidInputError("Order must contain at least one item", field="items")
    return [LineItem(product_id=pid, quantity=qty) for pid, qty in quantities.items()]


def check_stock(
    items: Iterable[LineItem], products: Mapping[ProductId, ProductRecord],
) -> None:
    """Every line must be coverable by current stock. First shortfall wins."""
    for item in items:
        product = products[item.product_id]
        if product.stock < item.quantity:
            raise InsufficientStockError(
                str(item.product_id), item.quantity, product.stock,
            )


def compute_total(
    items: Iterable[LineItem], products: Mapping[ProductId, ProductRecord],
) -> float:
    """Sum price x quantity over the order, rounded to cents."""
    total = sum(products[item.product_id].price * item.quantity for item in items)
    return round(total, 2)


def totals_match(declared: float | None, computed: float) -> bool:
    """Advisory comparison of a client-declared total against the server total."""
    if declared is None:
        return True
    return abs(declared - computed) < 0.005


def check_status_transition(
    current: OrderStatus, target: OrderStatus, strict: bool,
) -> None:
    """Permissive mode accepts any change; strict mode follows the lifecycle."""
    if not strict or current == target:
        return
    if target not in ALLOWED_TRANSITIONS[current]:
        raise InvalidStatusTransitionError(current.value, target.value)
