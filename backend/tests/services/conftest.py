"""Service test fixtures — async DB, FastAPI test client, seeded users and products.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness check sees the test engine
    - Users are inserted directly; tokens are issued by the app's own TokenCodec

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features not exercised here)
    - Seeded users carry a placeholder hash: only auth tests need a real one,
      and they register through the API
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from app.api.dependencies import get_token_codec
from app.core.domain_types import Principal, Role, UserId
from app.db.base import Base
from app.infrastructure.database import get_db, DatabaseSessionManager
from app.models.user import User
from app.services.catalog_store import CatalogStore
import app.infrastructure.database as db_module
from app.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    # Override get_db for route-level dependency injection
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    # Patch db_manager for the readiness check, which uses it directly
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def tokens():
    return get_token_codec()


async def _insert_user(db, full_name: str, email: str, role: Role) -> User:
    user = User(
        full_name=full_name, email=email,
        password_hash="placeholder-not-a-bcrypt-hash", role=role.value,
    )
    db.add(user)
    await db.commit()
    return user


@pytest.fixture
async def customer(test_db):
    return await _insert_user(test_db, "Alice Buyer", "alice@example.com", Role.CUSTOMER)


@pytest.fixture
async def other_customer(test_db):
    return await _insert_user(test_db, "Bob Buyer", "bob@example.com", Role.CUSTOMER)


@pytest.fixture
async def admin(test_db):
    return await _insert_user(test_db, "Ops Admin", "ops@example.com", Role.ADMIN)


@pytest.fixture
def customer_principal(customer):
    return Principal(
        user_id=UserId(customer.id), role=Role.CUSTOMER,
        display_name=customer.full_name,
    )


@pytest.fixture
def customer_headers(customer, tokens):
    token = tokens.issue(UserId(customer.id), Role.CUSTOMER, customer.full_name)
    return {"x-auth-token": token}


@pytest.fixture
def other_customer_headers(other_customer, tokens):
    token = tokens.issue(
        UserId(other_customer.id), Role.CUSTOMER, other_customer.full_name,
    )
    return {"x-auth-token": token}


@pytest.fixture
def admin_headers(admin, tokens):
    token = tokens.issue(UserId(admin.id), Role.ADMIN, admin.full_name)
    return {"x-auth-token": token}


@pytest.fixture
def make_product(test_db):
    """Factory: insert a product and commit it.

    Usage: product = await make_product(price=250.0, stock=3)
    """
    async def _make(
        model_name: str = "RTX 4070",
        category: str | None = "GPU",
        price: float = 500.0,
        stock: int = 10,
        specs: dict | None = None,
    ):
        product = await CatalogStore(test_db).create(
            model_name=model_name, price=price, category=category,
            stock=stock, specs=specs,
        )
        await test_db.commit()
        return product

    return _make
