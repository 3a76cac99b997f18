"""Revenue Reduction — per-category grouping, sorting and rounding.

Tests:
    - Totals and unit counts summed per category
    - Sorted by total descending, ties by category name
    - Uncategorized products grouped under None
"""

from app.core.revenue import CategoryRevenue, summarize_revenue


def test_empty_input_gives_empty_report():
    assert summarize_revenue([]) == []


def test_groups_and_sums_per_category():
    rows = [("GPU", 250.0, 2), ("GPU", 300.0, 1), ("laptop", 1000.0, 1)]
    assert summarize_revenue(rows) == [
        CategoryRevenue("laptop", 1000.0, 1),
        CategoryRevenue("GPU", 800.0, 3),
    ]


def test_ties_broken_by_category_name():
    rows = [("ssd", 100.0, 1), ("cpu", 50.0, 2)]
    assert [r.category for r in summarize_revenue(rows)] == ["cpu", "ssd"]


def test_uncategorized_products_grouped_under_none():
    rows = [(None, 10.0, 1), (None, 5.0, 2), ("GPU", 1.0, 1)]
    summary = summarize_revenue(rows)
    assert summary[0] == CategoryRevenue(None, 20.0, 3)


def test_totals_rounded_to_cents():
    rows = [("cables", 0.1, 1), ("cables", 0.2, 1)]
    assert summarize_revenue(rows)[0].total_revenue == 0.3
