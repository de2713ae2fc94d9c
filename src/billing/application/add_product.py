"""Application service: Add Product use case."""

from __future__ import annotations

from billing.domain.exceptions import ValidationError
from billing.domain.model.product import Product, Variation
from billing.domain.model.value_objects import DEFAULT_CURRENCY, Money
from billing.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(
        self, product_repo: ProductRepository, currency: str = DEFAULT_CURRENCY
    ) -> None:
        self._product_repo = product_repo
        self._currency = currency

    def handle(
        self,
        name: str,
        price: str,
        quantity: int,
        category: str = "",
        subcategory: str | None = None,
        variations: list[tuple[str, str, int]] | None = None,
    ) -> Product:
        """Add a new product to the catalog.

        ``variations`` is a list of ``(size, price, quantity)`` tuples.
        """
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        existing = self._product_repo.get_by_name(name.strip())
        if existing is not None:
            raise ValidationError(f"Product '{name}' already exists")

        # Auto-assign ID based on existing products
        all_products = self._product_repo.list_all()
        numeric_ids = [int(p.id) for p in all_products if p.id.isdigit()]
        next_id = str(max(numeric_ids) + 1) if numeric_ids else "1"

        product = Product.create(
            id=next_id,
            name=name,
            price=Money.of(price, self._currency),
            quantity=quantity,
            category=category,
            subcategory=subcategory,
            variations=[
                Variation(size=size, price=Money.of(v_price, self._currency), quantity=qty)
                for size, v_price, qty in variations or []
            ],
        )
        self._product_repo.save(product)
        return product
