"""Abstract repository for the Product aggregate (the catalog store).

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory) live in the
infrastructure layer and in the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from billing.domain.model.product import Product
from billing.domain.model.value_objects import Money
from billing.domain.repository.observable import ObservableCollection


class ProductRepository(ObservableCollection[Product], ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Return a product by name (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product (catalog management only).

        For an existing product the stored quantity is kept; stock only
        moves through ``apply_stock_delta``.
        """

    @abstractmethod
    def apply_stock_delta(self, product_id: str, delta: int) -> Product:
        """Atomically add *delta* to a product's quantity.

        Read, check and write happen as one step. Raises
        EntityNotFoundError if the product is gone and
        InsufficientStockError if the result would be negative; nothing
        is written in either case.
        """

    @abstractmethod
    def update_price(self, product_id: str, price: Money) -> Product:
        """Change only the price, leaving stock as the store holds it.

        Raises EntityNotFoundError if the product is gone.
        """

    @abstractmethod
    def delete(self, product_id: str) -> None:
        """Remove a product from the catalog.

        Raises EntityNotFoundError if it does not exist.
        """
