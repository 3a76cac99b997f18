"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Stores never commit: the caller owns the transaction boundary
    - Implementations provided by shell (app/services) via constructor injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions that consume their results are never async themselves
    - Coordinator depends on these Protocols, not on the concrete stores,
      so its failure paths can be driven by fakes in tests
"""

from typing import Protocol, Sequence

from app.core.domain_types import (
    UserId, ProductId, OrderId, OrderStatus, SortDirection, LineItem,
)


class UserRecord(Protocol):
    id: UserId
    full_name: str
    email: str
    password_hash: str
    role: str


class ProductRecord(Protocol):
    id: ProductId
    model_name: str
    category: str | None
    price: float
    stock: int


class OrderRecord(Protocol):
    id: OrderId
    customer_id: UserId
    status: str
    total_amount: float


class IdentityRepository(Protocol):
    """Contract for user persistence."""
    async def find_by_email(self, email: str) -> UserRecord | None: ...
    async def create(
        self, full_name: str, email: str, password_hash: str, role: str,
    ) -> UserRecord: ...


class CatalogRepository(Protocol):
    """Contract for product persistence."""
    async def list(
        self, category: str | None, sort: SortDirection,
    ) -> Sequence[ProductRecord]: ...
    async def get(self, product_id: ProductId) -> ProductRecord: ...
    async def get_many(
        self, product_ids: Sequence[ProductId],
    ) -> dict[ProductId, ProductRecord]: ...
    async def decrement_stock(
        self, product_id: ProductId, quantity: int,
    ) -> bool: ...


class OrderRepository(Protocol):
    """Contract for order persistence."""
    async def create(
        self,
        customer_id: UserId,
        line_items: Sequence[LineItem],
        total_amount: float,
        idempotency_key: str | None = None,
    ) -> OrderRecord: ...
    async def get_by_idempotency_key(
        self, customer_id: UserId, key: str,
    ) -> OrderRecord | None: ...
    async def update_status(
        self, order_id: OrderId, status: OrderStatus,
    ) -> OrderRecord: ...
