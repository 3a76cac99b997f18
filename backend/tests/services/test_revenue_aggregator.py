"""Revenue Aggregator — per-category totals over orders in a status.

Invariants:
    - Default report counts Delivered orders only
    - status=None counts every order
    - Line items of deleted products are excluded
    - Read-only
"""

from app.core.domain_types import LineItem, OrderId, OrderStatus, UserId
from app.core.revenue import CategoryRevenue
from app.services.catalog_store import CatalogStore
from app.services.order_store import OrderStore
from app.services.revenue_aggregator import RevenueAggregator


async def _order(db, customer, product, quantity, status):
    store = OrderStore(db)
    order = await store.create(
        UserId(customer.id), [LineItem(product.id, quantity)],
        product.price * quantity,
    )
    if status != OrderStatus.PROCESSING:
        await store.update_status(OrderId(order.id), status)
    await db.commit()
    return order


async def test_delivered_only_by_default(test_db, customer, make_product):
    gpu_a = await make_product(model_name="GPU A", category="GPU", price=250.0)
    gpu_b = await make_product(model_name="GPU B", category="GPU", price=300.0)
    gpu_c = await make_product(model_name="GPU C", category="GPU", price=1000.0)
    await _order(test_db, customer, gpu_a, 2, OrderStatus.DELIVERED)
    await _order(test_db, customer, gpu_b, 1, OrderStatus.DELIVERED)
    await _order(test_db, customer, gpu_c, 1, OrderStatus.PROCESSING)

    report = await RevenueAggregator(test_db).revenue_by_category()

    assert report == [CategoryRevenue("GPU", 800.0, 3)]


async def test_status_none_counts_every_order(test_db, customer, make_product):
    gpu = await make_product(category="GPU", price=100.0)
    laptop = await make_product(category="laptop", price=1200.0)
    await _order(test_db, customer, gpu, 1, OrderStatus.SHIPPED)
    await _order(test_db, customer, laptop, 1, OrderStatus.PROCESSING)

    report = await RevenueAggregator(test_db).revenue_by_category(status=None)

    assert report == [
        CategoryRevenue("laptop", 1200.0, 1),
        CategoryRevenue("GPU", 100.0, 1),
    ]


async def test_specific_status_filter(test_db, customer, make_product):
    gpu = await make_product(category="GPU", price=100.0)
    await _order(test_db, customer, gpu, 3, OrderStatus.SHIPPED)
    await _order(test_db, customer, gpu, 1, OrderStatus.DELIVERED)

    report = await RevenueAggregator(test_db).revenue_by_category(OrderStatus.SHIPPED)

    assert report == [CategoryRevenue("GPU", 300.0, 3)]


async def test_deleted_products_excluded(test_db, customer, make_product):
    kept = await make_product(category="GPU", price=100.0)
    gone = await make_product(category="GPU", price=999.0)
    gone_id = gone.id
    await _order(test_db, customer, kept, 1, OrderStatus.DELIVERED)
    await _order(test_db, customer, gone, 1, OrderStatus.DELIVERED)

    await CatalogStore(test_db).delete(gone_id)
    await test_db.commit()

    report = await RevenueAggregator(test_db).revenue_by_category()
    assert report == [CategoryRevenue("GPU", 100.0, 1)]


async def test_no_orders_empty_report(test_db, make_product):
    await make_product()
    assert await RevenueAggregator(test_db).revenue_by_category() == []
