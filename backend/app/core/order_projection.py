"""Order Projection — pure join of orders with customer and product display fields.

Invariants:
    - A line item whose product no longer exists projects to UNKNOWN_PRODUCT, never raises
    - A missing customer projects to UNKNOWN_CUSTOMER
    - Line items keep their stored order

Design Decisions:
    - Sentinels instead of errors: product deletion does not cascade to orders,
      so historical reads must tolerate dangling references
"""

from typing import Any, Mapping, Sequence

UNKNOWN_PRODUCT_NAME = "unknown/deleted"
UNKNOWN_CUSTOMER_NAME = "unknown"


def project_customer(customer: Any | None) -> dict:
    if customer is None:
        return {"id": None, "full_name": UNKNOWN_CUSTOMER_NAME, "email": None}
    return {
        "id": str(customer.id),
        "full_name": customer.full_name,
        "email": customer.email,
    }


def project_line_item(product_id: Any, quantity: int, product: Any | None) -> dict:
    if product is None:
        return {
            "product_id": str(product_id),
            "quantity": quantity,
            "model_name": UNKNOWN_PRODUCT_NAME,
            "price": None,
            "available": False,
        }
    return {
        "product_id": str(product_id),
        "quantity": quantity,
        "model_name": product.model_name,
        "price": product.price,
        "available": True,
    }


def project_order(
    order: Any,
    customer: Any | None,
    products: Mapping[Any, Any],
) -> dict:
    """Build the admin/customer view of one order."""
    items: Sequence[Any] = order.items
    return {
        "id": str(order.id),
        "order_date": order.order_date,
        "status": order.status,
        "total_amount": order.total_amount,
        "customer": project_customer(customer),
        "items": [
            project_line_item(
                item.product_id, item.quantity, products.get(item.product_id),
            )
            for item in items
        ],
    }
