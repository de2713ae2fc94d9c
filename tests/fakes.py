"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the JSON repositories
but keep everything in a dict. No file I/O, no side effects.
Failure flags let tests simulate an unreachable store.
"""

from __future__ import annotations

from datetime import datetime, timezone

from billing.domain.exceptions import EntityNotFoundError, StoreUnavailableError
from billing.domain.model.bill import Bill
from billing.domain.model.product import Product
from billing.domain.model.value_objects import Money
from billing.domain.repository.bill_repository import BillRepository
from billing.domain.repository.product_repository import ProductRepository


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        super().__init__()
        self._store: dict[str, Product] = {}
        for p in products or []:
            self._store[p.id] = p
        self.fail_stock_updates = False
        self.stock_updates = 0

    def get_by_id(self, product_id: str) -> Product | None:
        return self._store.get(product_id)

    def get_by_name(self, name: str) -> Product | None:
        for p in self._store.values():
            if p.name.lower() == name.lower():
                return p
        return None

    def list_all(self) -> list[Product]:
        return list(self._store.values())

    def save(self, product: Product) -> None:
        stored = self._store.get(product.id)
        if stored is not None:
            product.quantity = stored.quantity
        self._store[product.id] = product
        self._notify()

    def apply_stock_delta(self, product_id: str, delta: int) -> Product:
        if self.fail_stock_updates:
            raise StoreUnavailableError("Catalog store is offline")
        product = self._store.get(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        product.apply_stock_delta(delta)
        self.stock_updates += 1
        self._notify()
        return product

    def update_price(self, product_id: str, price: Money) -> Product:
        product = self._store.get(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        product.update_price(price)
        self._notify()
        return product

    def delete(self, product_id: str) -> None:
        if product_id not in self._store:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        del self._store[product_id]
        self._notify()


class FakeBillRepository(BillRepository):

    def __init__(self) -> None:
        super().__init__()
        self._store: dict[str, Bill] = {}
        self._retired: list[str] = []
        self._next_id = 1
        self.fail_reads = False
        self.fail_writes = False

    def add(self, bill: Bill) -> str:
        if self.fail_writes:
            raise StoreUnavailableError("Bill ledger is offline")
        bill.id = f"bill-{self._next_id}"
        bill.created_at = datetime.now(timezone.utc)
        self._next_id += 1
        self._store[bill.id] = bill
        self._notify()
        return bill.id

    def get_by_id(self, bill_id: str) -> Bill | None:
        return self._store.get(bill_id)

    def list_all(self) -> list[Bill]:
        if self.fail_reads:
            raise StoreUnavailableError("Bill ledger is offline")
        return sorted(
            self._store.values(), key=lambda b: b.bill_number_value, reverse=True
        )

    def list_issued_numbers(self) -> list[str]:
        if self.fail_reads:
            raise StoreUnavailableError("Bill ledger is offline")
        return [b.bill_number for b in self._store.values()] + self._retired

    def delete(self, bill_id: str) -> None:
        if bill_id not in self._store:
            raise EntityNotFoundError(f"Bill '{bill_id}' not found")
        self._retired.append(self._store.pop(bill_id).bill_number)
        self._notify()
