"""Application service: Delete Product use case.

Removes a product from the catalog. Issued bills are unaffected since
they hold their own copy of each line. An open cart that still holds the
product keeps its line; handing that stock back later fails softly and
is reported as a release warning on the cart.
"""

from __future__ import annotations

import logging

from billing.domain.exceptions import EntityNotFoundError
from billing.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class DeleteProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str) -> str:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        self._product_repo.delete(product_id)
        logger.info(
            "Deleted product %s '%s' (%d in stock)",
            product_id, product.name, product.quantity,
        )
        return product.name
