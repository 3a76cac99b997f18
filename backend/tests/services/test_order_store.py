"""Order Store — creation, status updates and projected listings.

Invariants:
    - Status updates are permissive by default; strict mode follows the lifecycle
    - Unknown order id on update -> ResourceNotFoundError
    - Listings newest first, optionally restricted to one customer
    - A deleted product shows up as the "unknown/deleted" sentinel, order intact
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from app.core.domain_types import LineItem, OrderId, OrderStatus, UserId
from app.core.errors import InvalidStatusTransitionError, ResourceNotFoundError
from app.core.order_projection import UNKNOWN_PRODUCT_NAME
from app.services.catalog_store import CatalogStore
from app.services.order_store import OrderStore


async def _place(db, customer, product, quantity=1, when=None):
    order = await OrderStore(db).create(
        UserId(customer.id), [LineItem(product.id, quantity)],
        product.price * quantity,
    )
    if when is not None:
        order.order_date = when
    await db.commit()
    return order


async def test_create_persists_items_in_order(test_db, customer, make_product):
    a = await make_product(model_name="A")
    b = await make_product(model_name="B")
    order = await OrderStore(test_db).create(
        UserId(customer.id), [LineItem(b.id, 1), LineItem(a.id, 2)], 1500.0,
    )
    await test_db.commit()

    reloaded = await OrderStore(test_db).get(OrderId(order.id))
    assert reloaded.status == "Processing"
    assert reloaded.customer_id == customer.id
    assert [(i.product_id, i.quantity) for i in reloaded.items] == [(b.id, 1), (a.id, 2)]


async def test_update_status_permissive_allows_backwards(test_db, customer, make_product):
    order = await _place(test_db, customer, await make_product())
    store = OrderStore(test_db)

    await store.update_status(OrderId(order.id), OrderStatus.DELIVERED)
    await store.update_status(OrderId(order.id), OrderStatus.PROCESSING)
    await test_db.commit()

    assert (await store.get(OrderId(order.id))).status == "Processing"


async def test_update_status_strict_rejects_backwards(test_db, customer, make_product):
    order = await _place(test_db, customer, await make_product())
    store = OrderStore(test_db, strict_status=True)

    await store.update_status(OrderId(order.id), OrderStatus.SHIPPED)
    await store.update_status(OrderId(order.id), OrderStatus.DELIVERED)
    with pytest.raises(InvalidStatusTransitionError):
        await store.update_status(OrderId(order.id), OrderStatus.PROCESSING)


async def test_update_status_unknown_order_not_found(test_db):
    with pytest.raises(ResourceNotFoundError):
        await OrderStore(test_db).update_status(OrderId(uuid4()), OrderStatus.SHIPPED)


async def test_listing_is_newest_first(test_db, customer, make_product):
    product = await make_product()
    now = datetime.now(timezone.utc)
    old = await _place(test_db, customer, product, when=now - timedelta(days=2))
    new = await _place(test_db, customer, product, when=now)
    mid = await _place(test_db, customer, product, when=now - timedelta(days=1))

    views = await OrderStore(test_db).list_with_projection()
    assert [v["id"] for v in views] == [str(new.id), str(mid.id), str(old.id)]


async def test_listing_projects_customer_and_product(test_db, customer, make_product):
    product = await make_product(model_name="RTX 4070", price=500.0)
    await _place(test_db, customer, product, quantity=2)

    [view] = await OrderStore(test_db).list_with_projection()
    assert view["customer"]["full_name"] == "Alice Buyer"
    assert view["customer"]["email"] == "alice@example.com"
    assert view["items"][0]["model_name"] == "RTX 4070"
    assert view["items"][0]["quantity"] == 2
    assert view["total_amount"] == 1000.0


async def test_listing_restricted_to_customer(
    test_db, customer, other_customer, make_product,
):
    product = await make_product()
    mine = await _place(test_db, customer, product)
    await _place(test_db, other_customer, product)

    views = await OrderStore(test_db).list_with_projection(UserId(customer.id))
    assert [v["id"] for v in views] == [str(mine.id)]


async def test_deleted_product_leaves_order_intact(test_db, customer, make_product):
    product = await make_product(model_name="Discontinued", price=250.0)
    product_id = product.id
    order = await _place(test_db, customer, product, quantity=2)

    await CatalogStore(test_db).delete(product_id)
    await test_db.commit()

    [view] = await OrderStore(test_db).list_with_projection()
    assert view["id"] == str(order.id)
    assert view["total_amount"] == 500.0
    assert view["items"] == [{
        "product_id": str(product_id), "quantity": 2,
        "model_name": UNKNOWN_PRODUCT_NAME, "price": None, "available": False,
    }]
