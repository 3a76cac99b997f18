"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, ProductId, OrderId wrap UUIDs — never use bare UUID in domain logic
    - All valid states encoded as Enums — no raw string matching
    - Principal is immutable and travels explicitly with each request

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders; values match the
      stored column strings ("Processing", "customer", ...)
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
ProductId = NewType("ProductId", UUID)
OrderId = NewType("OrderId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """Authorization tier carried in every token."""
    CUSTOMER = "customer"
    ADMIN = "admin"


class OrderStatus(str, Enum):
    """Order lifecycle states — maps to DB `status` column."""
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"


class SortDirection(str, Enum):
    """Price ordering for catalog listing."""
    ASC = "asc"
    DESC = "desc"


# ─── Value Objects ───────────────────────────────────────────────

@dataclass(frozen=True)
class Principal:
    """Authenticated caller, decoded from a verified token."""
    user_id: UserId
    role: Role
    display_name: str

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


@dataclass(frozen=True)
class LineItem:
    """A (product reference, quantity) pair within an order."""
    product_id: ProductId
    quantity: int
