"""Unit tests for the Product aggregate."""

import pytest

from billing.domain.exceptions import InsufficientStockError, ValidationError
from billing.domain.model.product import Product, Variation
from billing.domain.model.value_objects import Money


def _pipe(quantity: int = 10) -> Product:
    return Product.create(id="1", name="Pipe", price=Money.of("25"), quantity=quantity)


class TestProductCreate:

    def test_strips_name(self):
        product = Product.create(id="1", name="  Pipe ", price=Money.of("25"), quantity=1)
        assert product.name == "Pipe"
        assert product.updated_at is not None

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="name is required"):
            Product.create(id="1", name=" ", price=Money.of("25"), quantity=1)

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Product.create(id="1", name="Pipe", price=Money.of("25"), quantity=-1)

    def test_variations_must_sum_to_quantity(self):
        with pytest.raises(ValidationError, match="add up to 10"):
            Product.create(
                id="1", name="Shirt", price=Money.of("300"), quantity=10,
                variations=[Variation("M", Money.of("300"), 4)],
            )

    def test_variations_accepted(self):
        product = Product.create(
            id="1", name="Shirt", price=Money.of("300"), quantity=6,
            variations=[
                Variation("M", Money.of("300"), 4),
                Variation("L", Money.of("320"), 2),
            ],
        )
        assert [v.size for v in product.variations] == ["M", "L"]


class TestApplyStockDelta:

    def test_decrement(self):
        product = _pipe()
        assert product.apply_stock_delta(-4) == 6

    def test_decrement_to_zero(self):
        product = _pipe(3)
        assert product.apply_stock_delta(-3) == 0

    def test_overdraw_rejected_and_untouched(self):
        product = _pipe(3)
        with pytest.raises(InsufficientStockError, match="only 3 available") as info:
            product.apply_stock_delta(-5)
        assert info.value.available == 3
        assert product.quantity == 3

    def test_increment_updates_marker(self):
        product = _pipe()
        before = product.updated_at
        product.apply_stock_delta(2)
        assert product.quantity == 12
        assert product.updated_at >= before


class TestUpdatePrice:

    def test_zero_price_rejected(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            _pipe().update_price(Money.of("0"))
