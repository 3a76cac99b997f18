"""Product ORM — catalog entry with embedded specs and its review list.

Invariants:
    - model_name and price are non-nullable
    - stock >= 0 and price >= 0 enforced by CHECK constraints
    - specs always carries the cpu/gpu/ram/ssd keys (values may be null)
    - reviews ordered by append time; deleted together with the product

Design Decisions:
    - JSON column for specs: fixed small sub-record, never queried by field
    - Composite (category, price) index: serves the filtered + price-sorted listing
    - Reviews in their own table: an append is a single INSERT, so concurrent
      appends to one product cannot overwrite each other
    - Orders are NOT related here: deleting a product leaves order items dangling
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    String, Float, Integer, DateTime, JSON, CheckConstraint, Index,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base

SPEC_KEYS = ("cpu", "gpu", "ram", "ssd")


def empty_specs() -> dict:
    return {key: None for key in SPEC_KEYS}


class Product(Base):
    """Catalog product — owns its reviews."""
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        Index("ix_products_category_price", "category", "price"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    model_name: Mapped[str] = mapped_column(String(200), nullable=False)
    category: Mapped[str | None] = mapped_column(
        String(100), nullable=True, index=True,
    )
    price: Mapped[float] = mapped_column(Float, nullable=False)
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    specs: Mapped[dict] = mapped_column(
        JSON, nullable=False, default=empty_specs,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    reviews: Mapped[list["Review"]] = relationship(
        "Review", back_populates="product",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="Review.date",
    )
