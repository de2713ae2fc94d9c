"""Application service: Update Product and Restock Product use cases."""

from __future__ import annotations

import logging

from billing.domain.exceptions import ValidationError
from billing.domain.model.product import Product
from billing.domain.model.value_objects import DEFAULT_CURRENCY, Money
from billing.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class UpdateProductHandler:

    def __init__(
        self, product_repo: ProductRepository, currency: str = DEFAULT_CURRENCY
    ) -> None:
        self._product_repo = product_repo
        self._currency = currency

    def handle(self, product_id: str, new_price: str) -> Product:
        """Update a product's price.

        This does NOT affect any existing bills — they hold a price
        snapshot taken at commit time.
        """
        product = self._product_repo.update_price(
            product_id, Money.of(new_price, self._currency)
        )
        logger.info("Product %s price changed to %s", product_id, product.price)
        return product


class RestockProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str, amount: int) -> Product:
        """Add freshly received units to a product's stock."""
        if amount <= 0:
            raise ValidationError("Restock quantity must be positive")
        product = self._product_repo.apply_stock_delta(product_id, amount)
        logger.info(
            "Restocked product %s with %d units, now %d",
            product_id, amount, product.quantity,
        )
        return product
