"""Catalog Rule Enforcement — pure checks for product records and reviews.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - Rating accepted iff RATING_MIN <= rating <= RATING_MAX
    - Products require a non-blank model name and a non-negative price
"""

from app.core.errors import InvalidInputError

RATING_MIN = 1
RATING_MAX = 5


def validate_rating(rating: int) -> int:
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise InvalidInputError("Rating must be an integer", field="rating")
    if not RATING_MIN <= rating <= RATING_MAX:
        raise InvalidInputError(
            f"Rating must be between {RATING_MIN} and {RATING_MAX}, got {rating}",
            field="rating",
        )
    return rating


def validate_product_fields(
    model_name: str | None, price: float | None, stock: int = 0,
) -> None:
    """Required fields present and in range."""
    if model_name is None or not model_name.strip():
        raise InvalidInputError("model_name is required", field="model_name")
    if price is None:
        raise InvalidInputError("price is required", field="price")
    if price < 0:
        raise InvalidInputError("price must be non-negative", field="price")
    if stock < 0:
        raise InvalidInputError("stock must be non-negative", field="stock")
