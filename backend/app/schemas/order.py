"""Order Schemas — placement payload, status update and projected views.

Invariants:
    - OrderCreate has no customer field: the customer is the token's principal
    - OrderCreate.total_amount is advisory only
    - OrderStatusUpdate.status must be a known OrderStatus
    - OrderLineView.available is False (and price None) for deleted products
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.core.domain_types import OrderStatus


class OrderItemIn(BaseModel):
    product_id: UUID
    quantity: int = Field(ge=1)


class OrderCreate(BaseModel):
    items: list[OrderItemIn] = Field(min_length=1)
    total_amount: float | None = Field(None, ge=0)


class OrderItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    product_id: UUID
    quantity: int


class OrderResponse(BaseModel):
    """Order as persisted."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    order_date: datetime
    status: OrderStatus
    total_amount: float
    customer_id: UUID
    items: list[OrderItemResponse]


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class CustomerView(BaseModel):
    id: str | None
    full_name: str
    email: str | None


class OrderLineView(BaseModel):
    product_id: str
    quantity: int
    model_name: str
    price: float | None
    available: bool


class OrderView(BaseModel):
    """Order joined with customer and product display fields."""
    id: str
    order_date: datetime
    status: str
    total_amount: float
    customer: CustomerView
    items: list[OrderLineView]
