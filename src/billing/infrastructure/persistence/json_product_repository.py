"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from billing.domain.exceptions import EntityNotFoundError
from billing.domain.model.product import Product, Variation
from billing.domain.model.value_objects import DEFAULT_CURRENCY, Money
from billing.domain.repository.product_repository import ProductRepository
from billing.infrastructure.persistence.json_file import JsonFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        super().__init__()
        self._file = JsonFile(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        products = self._load()
        return products.get(product_id)

    def get_by_name(self, name: str) -> Product | None:
        for product in self._load().values():
            if product.name.lower() == name.lower():
                return product
        return None

    def list_all(self) -> list[Product]:
        return list(self._load().values())

    def save(self, product: Product) -> None:
        with self._file.locked():
            products = self._load()
            stored = products.get(product.id)
            if stored is not None:
                product.quantity = stored.quantity
            products[product.id] = product
            self._persist(products)
        self._notify()

    def apply_stock_delta(self, product_id: str, delta: int) -> Product:
        with self._file.locked():
            products = self._load()
            product = self._require(products, product_id)
            product.apply_stock_delta(delta)
            self._persist(products)
        self._notify()
        return product

    def update_price(self, product_id: str, price: Money) -> Product:
        with self._file.locked():
            products = self._load()
            product = self._require(products, product_id)
            product.update_price(price)
            self._persist(products)
        self._notify()
        return product

    def delete(self, product_id: str) -> None:
        with self._file.locked():
            products = self._load()
            self._require(products, product_id)
            del products[product_id]
            self._persist(products)
        self._notify()

    @staticmethod
    def _require(products: dict[str, Product], product_id: str) -> Product:
        product = products.get(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return product

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Product]:
        return {item["id"]: self._to_domain(item) for item in self._file.load()}

    def _persist(self, products: dict[str, Product]) -> None:
        self._file.persist([self._to_raw(p) for p in products.values()])

    @staticmethod
    def _to_raw(p: Product) -> dict:
        return {
            "id": p.id,
            "name": p.name,
            "category": p.category,
            "subcategory": p.subcategory,
            "price": str(p.price.amount),
            "currency": p.price.currency,
            "quantity": p.quantity,
            "variations": [
                {"size": v.size, "price": str(v.price.amount), "quantity": v.quantity}
                for v in p.variations
            ],
            "updatedAt": p.updated_at.isoformat() if p.updated_at else None,
        }

    @staticmethod
    def _to_domain(item: dict) -> Product:
        currency = item.get("currency", DEFAULT_CURRENCY)
        updated_at = item.get("updatedAt")
        return Product(
            id=item["id"],
            name=item["name"],
            price=Money(Decimal(item["price"]), currency),
            quantity=int(item.get("quantity", 0)),
            category=item.get("category", ""),
            subcategory=item.get("subcategory"),
            variations=[
                Variation(
                    size=v["size"],
                    price=Money(Decimal(v["price"]), currency),
                    quantity=int(v["quantity"]),
                )
                for v in item.get("variations", [])
            ],
            updated_at=datetime.fromisoformat(updated_at) if updated_at else None,
        )
