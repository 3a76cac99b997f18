"""Stats Routes — admin revenue report.

Invariants:
    - Admin only, read-only
    - ?status= selects which orders count (default from settings, "Delivered");
      status=all disables the filter
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_admin
from app.config import get_settings
from app.core.domain_types import OrderStatus, Principal
from app.core.errors import InvalidInputError
from app.infrastructure.database import get_db
from app.schemas.stats import CategoryRevenueResponse
from app.services.revenue_aggregator import RevenueAggregator

router = APIRouter(prefix="/api/stats", tags=["stats"])

ALL_STATUSES = "all"


def _parse_status_filter(value: str | None) -> OrderStatus | None:
    value = value or get_settings().default_revenue_status
    if value.lower() == ALL_STATUSES:
        return None
    try:
        return OrderStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise InvalidInputError(
            f"status must be one of {allowed} or '{ALL_STATUSES}'", field="status",
        )


@router.get("/revenue", response_model=list[CategoryRevenueResponse])
async def revenue_report(
    status: str | None = Query(None, max_length=20),
    admin: Principal = Depends(get_admin),
    db: AsyncSession = Depends(get_db),
):
    """Per-category revenue, highest first."""
    rows = await RevenueAggregator(db).revenue_by_category(
        _parse_status_filter(status),
    )
    return [
        CategoryRevenueResponse(
            category=r.category, total=r.total_revenue, count=r.units_sold,
        )
        for r in rows
    ]
