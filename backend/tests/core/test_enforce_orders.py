"""Order Rule Enforcement — line item merging, stock checks, totals, status lifecycle.

Tests:
    - merge_line_items rejects quantity < 1 and empty orders, merges duplicates
    - check_stock raises on the first shortfall, accepts exact stock
    - compute_total uses product prices and rounds to cents
    - check_status_transition: permissive by default, lifecycle-only in strict mode
"""

from dataclasses import dataclass
from uuid import uuid4

import pytest

from app.core.domain_types import LineItem, OrderStatus, ProductId
from app.core.enforce_orders import (
    check_status_transition, check_stock, compute_total,
    merge_line_items, totals_match,
)
from app.core.errors import (
    InsufficientStockError, InvalidInputError, InvalidStatusTransitionError,
)


@dataclass
class _Product:
    id: ProductId
    price: float
    stock: int
    model_name: str = "Test"
    category: str | None = "GPU"


def _pid() -> ProductId:
    return ProductId(uuid4())


# --- merge_line_items ---------------------------------------------------------

def test_merge_collapses_duplicate_products_in_first_seen_order():
    a, b = _pid(), _pid()
    merged = merge_line_items([LineItem(a, 1), LineItem(b, 2), LineItem(a, 3)])
    assert merged == [LineItem(a, 4), LineItem(b, 2)]


@pytest.mark.parametrize("quantity", [0, -1])
def test_merge_rejects_non_positive_quantity(quantity):
    with pytest.raises(InvalidInputError) as exc:
        merge_line_items([LineItem(_pid(), quantity)])
    assert exc.value.field == "items"


def test_merge_rejects_empty_order():
    with pytest.raises(InvalidInputError):
        merge_line_items([])


# --- check_stock --------------------------------------------------------------

def test_check_stock_accepts_exact_stock():
    pid = _pid()
    check_stock([LineItem(pid, 3)], {pid: _Product(pid, 10.0, 3)})


def test_check_stock_rejects_shortfall_with_details():
    pid = _pid()
    with pytest.raises(InsufficientStockError) as exc:
        check_stock([LineItem(pid, 2)], {pid: _Product(pid, 10.0, 1)})
    assert exc.value.requested == 2
    assert exc.value.available == 1
    assert exc.value.product_id == str(pid)


# --- compute_total / totals_match ---------------------------------------------

def test_compute_total_sums_price_times_quantity():
    a, b = _pid(), _pid()
    products = {a: _Product(a, 250.0, 5), b: _Product(b, 19.99, 5)}
    assert compute_total([LineItem(a, 2), LineItem(b, 3)], products) == 559.97


def test_compute_total_rounds_to_cents():
    pid = _pid()
    assert compute_total([LineItem(pid, 3)], {pid: _Product(pid, 0.1, 5)}) == 0.3


def test_totals_match_treats_missing_declared_total_as_match():
    assert totals_match(None, 10.0)
    assert totals_match(10.001, 10.0)
    assert not totals_match(1.0, 10.0)


# --- check_status_transition --------------------------------------------------

def test_permissive_mode_allows_any_change():
    check_status_transition(OrderStatus.DELIVERED, OrderStatus.PROCESSING, strict=False)


@pytest.mark.parametrize("current, target", [
    (OrderStatus.PROCESSING, OrderStatus.SHIPPED),
    (OrderStatus.SHIPPED, OrderStatus.DELIVERED),
    (OrderStatus.SHIPPED, OrderStatus.SHIPPED),
])
def test_strict_mode_allows_forward_steps_and_no_ops(current, target):
    check_status_transition(current, target, strict=True)


@pytest.mark.parametrize("current, target", [
    (OrderStatus.DELIVERED, OrderStatus.PROCESSING),
    (OrderStatus.PROCESSING, OrderStatus.DELIVERED),
    (OrderStatus.SHIPPED, OrderStatus.PROCESSING),
])
def test_strict_mode_rejects_backward_and_skipping(current, target):
    with pytest.raises(InvalidStatusTransitionError) as exc:
        check_status_transition(current, target, strict=True)
    assert exc.value.code == "INVALID_STATUS_TRANSITION"
