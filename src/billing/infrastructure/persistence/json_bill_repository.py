"""JSON-file-backed implementation of BillRepository.

Records use the camelCase layout shared with the invoice renderer::

    {"billNumber": "MPS/00001", "billNumberValue": 1, "fullName": ...,
     "items": [{"productId", "productName", "price", "quantity", "subtotal"}],
     "subtotal", "discount", "gstRate", "gstAmount", "total", "due",
     "createdAt"}

Deleted bills are replaced by a tombstone holding only ``id``,
``billNumber``, ``billNumberValue`` and ``deleted: true``.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from decimal import Decimal
from pathlib import Path

from billing.domain.exceptions import EntityNotFoundError
from billing.domain.model.bill import Bill, BillLineItem, CustomerDetails
from billing.domain.model.value_objects import DEFAULT_CURRENCY, Money
from billing.domain.repository.bill_repository import BillRepository
from billing.infrastructure.persistence.json_file import JsonFile


class JsonBillRepository(BillRepository):

    def __init__(self, file_path: Path) -> None:
        super().__init__()
        self._file = JsonFile(file_path)

    # --- BillRepository interface ---------------------------------------------

    def issuing(self):
        return self._file.locked()

    def add(self, bill: Bill) -> str:
        with self._file.locked():
            records = self._file.load()
            bill.id = uuid.uuid4().hex
            bill.created_at = datetime.now(timezone.utc)
            records.append(self._to_raw(bill))
            self._file.persist(records)
        self._notify()
        return bill.id

    def get_by_id(self, bill_id: str) -> Bill | None:
        for raw in self._live():
            if raw["id"] == bill_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Bill]:
        bills = [self._to_domain(raw) for raw in self._live()]
        bills.sort(key=lambda b: b.bill_number_value, reverse=True)
        return bills

    def list_issued_numbers(self) -> list[str]:
        return [raw.get("billNumber") for raw in self._file.load()]

    def delete(self, bill_id: str) -> None:
        with self._file.locked():
            records = self._file.load()
            for i, raw in enumerate(records):
                if raw["id"] == bill_id and not raw.get("deleted"):
                    records[i] = self._tombstone(raw)
                    break
            else:
                raise EntityNotFoundError(f"Bill '{bill_id}' not found")
            self._file.persist(records)
        self._notify()

    def _live(self) -> list[dict]:
        return [raw for raw in self._file.load() if not raw.get("deleted")]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _tombstone(raw: dict) -> dict:
        """Drop a bill's contents but keep its number so it is never reissued."""
        return {
            "id": raw["id"],
            "billNumber": raw["billNumber"],
            "billNumberValue": raw.get("billNumberValue"),
            "deleted": True,
            "deletedAt": datetime.now(timezone.utc).isoformat(),
        }

    @staticmethod
    def _to_raw(bill: Bill) -> dict:
        return {
            "id": bill.id,
            "billNumber": bill.bill_number,
            "billNumberValue": bill.bill_number_value,
            "fullName": bill.customer.full_name,
            "date": bill.customer.date.isoformat() if bill.customer.date else None,
            "address": bill.customer.address,
            "phone": bill.customer.phone,
            "currency": bill.total.currency,
            "items": [
                {
                    "productId": item.product_id,
                    "productName": item.product_name,
                    "price": str(item.unit_price.amount),
                    "quantity": item.quantity,
                    "subtotal": str(item.subtotal.amount),
                }
                for item in bill.items
            ],
            "subtotal": str(bill.subtotal.amount),
            "discount": str(bill.discount.amount),
            "gstRate": str(bill.gst_rate),
            "gstAmount": str(bill.gst_amount.amount),
            "total": str(bill.total.amount),
            "due": bill.due,
            "createdAt": bill.created_at.isoformat() if bill.created_at else None,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Bill:
        currency = raw.get("currency", DEFAULT_CURRENCY)

        def money(key: str) -> Money:
            return Money(Decimal(str(raw.get(key) or "0")), currency)

        return Bill(
            id=raw["id"],
            bill_number=raw["billNumber"],
            bill_number_value=int(raw.get("billNumberValue", 0)),
            customer=CustomerDetails(
                full_name=raw["fullName"],
                date=date.fromisoformat(raw["date"]) if raw.get("date") else None,
                address=raw.get("address", ""),
                phone=raw.get("phone", ""),
            ),
            items=tuple(
                BillLineItem(
                    product_id=i.get("productId"),
                    product_name=i["productName"],
                    unit_price=Money(Decimal(str(i["price"])), currency),
                    quantity=int(i["quantity"]),
                )
                for i in raw["items"]
            ),
            subtotal=money("subtotal"),
            discount=money("discount"),
            gst_rate=Decimal(str(raw.get("gstRate") or "0")),
            gst_amount=money("gstAmount"),
            total=money("total"),
            due=raw.get("due"),
            created_at=(
                datetime.fromisoformat(raw["createdAt"]) if raw.get("createdAt") else None
            ),
        )
