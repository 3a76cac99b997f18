"""Revenue Reduction — pure per-category aggregation of sold line items.

Invariants:
    - Input rows are (category, unit_price, quantity) for line items whose product still exists
    - total_revenue = sum(unit_price * quantity), units_sold = sum(quantity) per category
    - Output sorted by total_revenue descending, ties broken by category name

Design Decisions:
    - Reduction kept out of SQL: the shell runs one filtered SELECT (one snapshot),
      the grouping is tested here without a database
    - Recomputed per call, no incremental aggregate (known limitation at high order volume)
"""

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class CategoryRevenue:
    category: str | None
    total_revenue: float
    units_sold: int


def summarize_revenue(
    rows: Iterable[tuple[str | None, float, int]],
) -> list[CategoryRevenue]:
    totals: dict[str | None, float] = {}
    units: dict[str | None, int] = {}
    for category, price, quantity in rows:
        totals[category] = totals.get(category, 0.0) + price * quantity
        units[category] = units.get(category, 0) + quantity

    summary = [
        CategoryRevenue(
            category=category,
            total_revenue=round(total, 2),
            units_sold=units[category],
        )
        for category, total in totals.items()
    ]
    summary.sort(key=lambda r: (-r.total_revenue, r.category or ""))
    return summary
