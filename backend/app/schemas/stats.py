"""Stats Schemas — revenue report rows."""

from pydantic import BaseModel


class CategoryRevenueResponse(BaseModel):
    category: str | None
    total: float
    count: int
