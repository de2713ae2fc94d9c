"""Domain service: Stock Reservation.

Stock is taken from the catalog the moment a line is added to a cart and
handed back when the line shrinks or goes away. Every call is one atomic
per-product update at the store; a cart that spans several products makes
several independent calls, and there is no cross-product rollback.

``release`` is best effort: a product deleted mid-session, or a store
hiccup, is logged and reported in the returned ``StockRelease`` rather
than raised, so the caller's cart edit still goes through.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from billing.domain.exceptions import DomainException, ValidationError
from billing.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StockRelease:
    """Outcome of a best-effort release."""

    product_id: str
    amount: int
    new_quantity: int | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class StockReservationService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def reserve(self, product_id: str, amount: int) -> int:
        """Take *amount* units of stock and return the new quantity.

        Raises InsufficientStockError (carrying the available quantity) or
        EntityNotFoundError; in both cases nothing is deducted.
        """
        if amount <= 0:
            raise ValidationError("Reservation quantity must be positive")
        product = self._product_repo.apply_stock_delta(product_id, -amount)
        logger.info(
            "Reserved %d of product %s, %d left", amount, product_id, product.quantity
        )
        return product.quantity

    def release(self, product_id: str, amount: int) -> StockRelease:
        """Give *amount* units back to stock. Never raises on store errors."""
        if amount <= 0:
            raise ValidationError("Release quantity must be positive")
        try:
            product = self._product_repo.apply_stock_delta(product_id, amount)
        except DomainException as exc:
            logger.warning(
                "Could not release %d of product %s: %s", amount, product_id, exc
            )
            return StockRelease(product_id, amount, error=str(exc))
        logger.info(
            "Released %d of product %s, %d now in stock",
            amount, product_id, product.quantity,
        )
        return StockRelease(product_id, amount, new_quantity=product.quantity)

    def adjust_reservation(
        self, product_id: str, old_amount: int, new_amount: int
    ) -> StockRelease | int | None:
        """Move a reservation from *old_amount* to *new_amount*.

        Growing reserves the difference (and can raise
        InsufficientStockError), shrinking releases it, equal is a no-op
        returning None.
        """
        delta = new_amount - old_amount
        if delta > 0:
            return self.reserve(product_id, delta)
        if delta < 0:
            return self.release(product_id, -delta)
        return None
