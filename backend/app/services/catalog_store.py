"""Catalog Store — product listing, lookup, create, delete, review append, stock decrement.

Invariants:
    - list() filters by exact category and sorts by price; one query per call, no caching
    - delete() is idempotent: a missing id is not an error
    - append_review() validates 1 <= rating <= 5 before touching the DB and is a
      single INSERT (no read-modify-write of the review list)
    - decrement_stock() is one conditional UPDATE: it either applies the whole
      decrement or matches no row, stock never goes below zero
    - Never commits: the caller owns the transaction

Design Decisions:
    - populate_existing on reads: a product loaded earlier in the same session is
      refreshed, so stock and reviews reflect what was just written
    - Role checks live in the API layer; the store trusts its caller
"""

import logging
from typing import Sequence

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import ProductId, SortDirection
from app.core.enforce_catalog import validate_product_fields, validate_rating
from app.core.errors import ResourceNotFoundError
from app.models.product import Product, SPEC_KEYS
from app.models.review import Review

logger = logging.getLogger(__name__)


class CatalogStore:
    """Product persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(
        self, category: str | None = None,
        sort: SortDirection = SortDirection.DESC,
    ) -> Sequence[Product]:
        price_order = (
            Product.price.asc() if sort == SortDirection.ASC
            else Product.price.desc()
        )
        query = select(Product).order_by(price_order, Product.created_at)
        if category:
            query = query.where(Product.category == category)
        result = await self.db.execute(
            query.execution_options(populate_existing=True),
        )
        return result.scalars().all()

    async def get(self, product_id: ProductId) -> Product:
        product = await self.db.get(
            Product, product_id, populate_existing=True,
        )
        if product is None:
            raise ResourceNotFoundError("Product", str(product_id))
        return product

    async def get_many(
        self, product_ids: Sequence[ProductId],
    ) -> dict[ProductId, Product]:
        if not product_ids:
            return {}
        result = await self.db.execute(
            select(Product)
            .where(Product.id.in_(list(product_ids)))
            .execution_options(populate_existing=True),
        )
        return {ProductId(p.id): p for p in result.scalars().all()}

    async def create(
        self,
        model_name: str,
        price: float,
        category: str | None = None,
        stock: int = 0,
        specs: dict | None = None,
    ) -> Product:
        validate_product_fields(model_name, price, stock)
        specs = specs or {}
        product = Product(
            model_name=model_name.strip(),
            category=category,
            price=price,
            stock=stock,
            specs={key: specs.get(key) for key in SPEC_KEYS},
            reviews=[],
        )
        self.db.add(product)
        await self.db.flush()
        logger.info("Product created", extra={"product_id": str(product.id)})
        return product

    async def delete(self, product_id: ProductId) -> bool:
        """Hard delete; returns whether a row existed. Orders keep their references."""
        # reviews reloaded so the ORM cascade sees every row
        product = await self.db.get(
            Product, product_id, populate_existing=True,
        )
        if product is None:
            return False
        await self.db.delete(product)
        await self.db.flush()
        logger.info("Product deleted", extra={"product_id": str(product_id)})
        return True

    async def append_review(
        self,
        product_id: ProductId,
        rating: int,
        comment: str,
        author_display_name: str,
    ) -> Review:
        validate_rating(rating)
        exists = await self.db.execute(
            select(Product.id).where(Product.id == product_id),
        )
        if exists.scalar_one_or_none() is None:
            raise ResourceNotFoundError("Product", str(product_id))

        review = Review(
            product_id=product_id,
            user=author_display_name,
            rating=rating,
            comment=comment or "",
        )
        self.db.add(review)
        await self.db.flush()
        return review

    async def decrement_stock(self, product_id: ProductId, quantity: int) -> bool:
        """Atomically subtract quantity; False when stock is short or the product is gone."""
        result = await self.db.execute(
            update(Product)
            .where(Product.id == product_id)
            .where(Product.stock >= quantity)
            .values(stock=Product.stock - quantity)
            .returning(Product.stock)
            .execution_options(synchronize_session="fetch"),
        )
        remaining = result.scalar_one_or_none()
        if remaining is None:
            return False
        logger.info(
            "Stock decremented",
            extra={"product_id": str(product_id), "quantity": quantity},
        )
        return True
