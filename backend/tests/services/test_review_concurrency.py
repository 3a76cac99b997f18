"""Concurrent Review Appends — no lost updates when many sessions review one product.

Invariants:
    - N concurrent append_review() calls on one product leave exactly N reviews

Design Decisions:
    - File-backed SQLite under tmp_path: every session gets its own connection,
      unlike the shared in-memory connection used elsewhere
    - BEGIN IMMEDIATE: SQLite writers then queue on the busy timeout instead of
      failing lock upgrades; PostgreSQL needs no equivalent
"""

import asyncio

import pytest
from sqlalchemy import event, func, select
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from app.db.base import Base
from app.models.review import Review
from app.services.catalog_store import CatalogStore

CONCURRENT_REVIEWERS = 10


@pytest.fixture
async def file_session_factory(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'reviews.db'}")

    @event.listens_for(engine.sync_engine, "connect")
    def _autocommit_driver(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


async def test_concurrent_appends_keep_every_review(file_session_factory):
    async with file_session_factory() as db:
        product = await CatalogStore(db).create(model_name="RTX 4070", price=500.0)
        await db.commit()
        product_id = product.id

    async def _review(n: int):
        async with file_session_factory() as db:
            await CatalogStore(db).append_review(product_id, 4, f"review {n}", f"user{n}")
            await db.commit()

    await asyncio.gather(*(_review(n) for n in range(CONCURRENT_REVIEWERS)))

    async with file_session_factory() as db:
        count = await db.scalar(
            select(func.count()).select_from(Review).where(Review.product_id == product_id),
        )
        reloaded = await CatalogStore(db).get(product_id)

    assert count == CONCURRENT_REVIEWERS
    assert {r.user for r in reloaded.reviews} == {
        f"user{n}" for n in range(CONCURRENT_REVIEWERS)
    }
