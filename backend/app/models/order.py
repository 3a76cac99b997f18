"""Order ORM — order header and its line items.

Invariants:
    - customer_id always set server-side from the authenticated principal
    - status is one of Processing / Shipped / Delivered (default Processing)
    - total_amount computed server-side from product prices at placement time
    - (customer_id, idempotency_key) unique: a replayed placement finds the original order
    - OrderItem.product_id is a plain reference (no FK): products may be deleted
      while historical orders keep pointing at them

Design Decisions:
    - position column keeps line items in submission order
    - customer loaded with selectin: the admin listing always needs it
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    String, Float, Integer, DateTime, ForeignKey, CheckConstraint,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


class Order(Base):
    """Order header."""
    __tablename__ = "orders"
    __table_args__ = (
        UniqueConstraint(
            "customer_id", "idempotency_key",
            name="uq_orders_customer_idempotency_key",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    order_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="Processing", index=True,
    )
    total_amount: Mapped[float] = mapped_column(Float, nullable=False)
    customer_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True,
    )
    idempotency_key: Mapped[str | None] = mapped_column(
        String(100), nullable=True,
    )

    # Relationships
    customer: Mapped["User"] = relationship("User", lazy="selectin")
    items: Mapped[list["OrderItem"]] = relationship(
        "OrderItem", back_populates="order",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="OrderItem.position",
    )


class OrderItem(Base):
    """Order line item — (product reference, quantity)."""
    __tablename__ = "order_items"
    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_order_items_quantity_positive"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    order_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    product_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    order: Mapped["Order"] = relationship("Order", back_populates="items")
