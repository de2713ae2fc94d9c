"""Bill aggregate — the immutable record of a completed sale.

A Bill owns a value copy of every cart line at commit time. Nothing in
it refers back to a live Product, so later catalog edits can never
change an issued invoice.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
import datetime as dt
from decimal import Decimal

from billing.domain.model.value_objects import Money

DEFAULT_PREFIX = "MPS"
DEFAULT_WIDTH = 5


@dataclass(frozen=True)
class BillNumber:
    """Human-readable invoice identifier, e.g. ``MPS/00001``.

    ``value`` is the underlying sequence number, persisted alongside the
    formatted string so bills can be ordered without re-parsing.
    """

    value: int
    prefix: str = DEFAULT_PREFIX
    width: int = DEFAULT_WIDTH

    def __str__(self) -> str:
        return f"{self.prefix}/{self.value:0{self.width}d}"

    @staticmethod
    def parse_value(text: object, prefix: str = DEFAULT_PREFIX) -> int | None:
        """Return the numeric suffix of *text*, or None if it does not match."""
        if not isinstance(text, str):
            return None
        match = re.fullmatch(rf"{re.escape(prefix)}/(\d+)", text.strip())
        if match is None:
            return None
        return int(match.group(1))


@dataclass(frozen=True)
class CustomerDetails:
    full_name: str
    date: dt.date | None
    address: str = ""
    phone: str = ""


@dataclass(frozen=True)
class BillLineItem:
    """Snapshot of one cart line. ``product_id`` is None for ad-hoc lines."""

    product_id: str | None
    product_name: str
    unit_price: Money
    quantity: int

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity


@dataclass
class Bill:
    """Aggregate root for issued invoices.

    Created once by the commit protocol and never mutated afterwards;
    the ledger only assigns ``id`` and ``created_at`` on insert.
    ``bill_number`` is the formatted string, ``bill_number_value`` the
    integer behind it.
    """

    id: str | None
    bill_number: str
    bill_number_value: int
    customer: CustomerDetails
    items: tuple[BillLineItem, ...]
    subtotal: Money
    discount: Money
    gst_rate: Decimal
    gst_amount: Money
    total: Money
    due: str | None = None
    created_at: dt.datetime | None = None
