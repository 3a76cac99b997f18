"""Catalog Rule Enforcement — rating range and required product fields."""

import pytest

from app.core.enforce_catalog import (
    RATING_MAX, RATING_MIN, validate_product_fields, validate_rating,
)
from app.core.errors import InvalidInputError


@pytest.mark.parametrize("rating", [RATING_MIN, 3, RATING_MAX])
def test_rating_in_range_accepted(rating):
    assert validate_rating(rating) == rating


@pytest.mark.parametrize("rating", [0, 6, -1, 100])
def test_rating_out_of_range_rejected(rating):
    with pytest.raises(InvalidInputError) as exc:
        validate_rating(rating)
    assert exc.value.field == "rating"


@pytest.mark.parametrize("rating", [True, 4.5, "5", None])
def test_rating_must_be_a_plain_int(rating):
    with pytest.raises(InvalidInputError):
        validate_rating(rating)


def test_product_fields_valid():
    validate_product_fields("ThinkPad X1", 1299.0, stock=4)


@pytest.mark.parametrize("model_name", [None, "", "   "])
def test_product_requires_model_name(model_name):
    with pytest.raises(InvalidInputError) as exc:
        validate_product_fields(model_name, 10.0)
    assert exc.value.field == "model_name"


def test_product_requires_price():
    with pytest.raises(InvalidInputError) as exc:
        validate_product_fields("ThinkPad X1", None)
    assert exc.value.field == "price"


def test_product_rejects_negative_price_and_stock():
    with pytest.raises(InvalidInputError):
        validate_product_fields("ThinkPad X1", -1.0)
    with pytest.raises(InvalidInputError) as exc:
        validate_product_fields("ThinkPad X1", 10.0, stock=-1)
    assert exc.value.field == "stock"
