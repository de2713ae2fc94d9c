"""Application service: Sales Report queries.

Read-only aggregates over the bill ledger and the catalog.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass

from billing.domain.model.value_objects import DEFAULT_CURRENCY, Money
from billing.domain.repository.bill_repository import BillRepository
from billing.domain.repository.product_repository import ProductRepository


@dataclass(frozen=True)
class SalesSummaryDTO:
    total_sales: str
    bill_count: int
    date: str | None = None


@dataclass(frozen=True)
class TopProductDTO:
    product_id: str
    product_name: str
    quantity: int
    revenue: str
    bill_count: int


@dataclass(frozen=True)
class StockValueLineDTO:
    product_name: str
    quantity: int
    unit_price: str
    value: str


@dataclass(frozen=True)
class InventoryValueDTO:
    total_value: str
    products: list[StockValueLineDTO]


class SalesReportHandler:

    def __init__(
        self,
        bill_repo: BillRepository,
        product_repo: ProductRepository,
        currency: str = DEFAULT_CURRENCY,
    ) -> None:
        self._bill_repo = bill_repo
        self._product_repo = product_repo
        self._currency = currency

    def sales_summary(self, on: dt.date | None = None) -> SalesSummaryDTO:
        """Total billed amount, optionally restricted to a single bill date."""
        total = Money.zero(self._currency)
        count = 0
        for bill in self._bill_repo.list_all():
            if on is not None and bill.customer.date != on:
                continue
            total = total + bill.total
            count += 1
        return SalesSummaryDTO(
            total_sales=str(total),
            bill_count=count,
            date=on.isoformat() if on else None,
        )

    def top_selling(self, limit: int = 10) -> list[TopProductDTO]:
        """Catalog products ranked by units sold. Ad-hoc lines are skipped."""
        quantities: dict[str, int] = {}
        revenue: dict[str, Money] = {}
        bills: dict[str, int] = {}
        names: dict[str, str] = {}

        for bill in self._bill_repo.list_all():
            for item in bill.items:
                pid = item.product_id
                if pid is None:
                    continue
                names.setdefault(pid, item.product_name)
                quantities[pid] = quantities.get(pid, 0) + item.quantity
                revenue[pid] = revenue.get(pid, Money.zero(self._currency)) + item.subtotal
                bills[pid] = bills.get(pid, 0) + 1

        ranked = sorted(quantities, key=lambda pid: quantities[pid], reverse=True)
        return [
            TopProductDTO(
                product_id=pid,
                product_name=names[pid],
                quantity=quantities[pid],
                revenue=str(revenue[pid]),
                bill_count=bills[pid],
            )
            for pid in ranked[:limit]
        ]

    def inventory_value(self) -> InventoryValueDTO:
        total = Money.zero(self._currency)
        lines: list[StockValueLineDTO] = []
        for product in self._product_repo.list_all():
            value = product.price * product.quantity
            total = total + value
            lines.append(
                StockValueLineDTO(
                    product_name=product.name,
                    quantity=product.quantity,
                    unit_price=str(product.price),
                    value=str(value),
                )
            )
        return InventoryValueDTO(total_value=str(total), products=lines)

    def low_stock(self, threshold: int = 10) -> list[StockValueLineDTO]:
        """Products at or below *threshold* units, emptiest first."""
        products = [
            p for p in self._product_repo.list_all() if p.quantity <= threshold
        ]
        products.sort(key=lambda p: p.quantity)
        return [
            StockValueLineDTO(
                product_name=p.name,
                quantity=p.quantity,
                unit_price=str(p.price),
                value=str(p.price * p.quantity),
            )
            for p in products
        ]
