"""Cart aggregate — an open billing session.

The cart owns an ordered list of lines and the pending customer details.
It is the only caller of the stock reservation service during a session:
stock is taken when a catalog line is added or grown and handed back when
it is shrunk or removed. Committing turns the reservations into the sale,
so ``clear()`` after a commit must not touch stock.

Mutating operations hold a per-cart re-entrant lock, so two calls on the
same cart never interleave their reserve/update steps.
"""

from __future__ import annotations

import datetime as dt
import functools
import logging
import threading
import uuid
from dataclasses import dataclass, replace
from decimal import Decimal

from billing.domain.exceptions import EntityNotFoundError, ValidationError
from billing.domain.model.bill import CustomerDetails
from billing.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity
from billing.domain.repository.product_repository import ProductRepository
from billing.domain.service.stock_reservation_service import (
    StockRelease,
    StockReservationService,
)

logger = logging.getLogger(__name__)

AD_HOC_PREFIX = "adhoc-"


@dataclass(frozen=True)
class CartLine:
    """One line of an open cart.

    ``ref`` is the product id for catalog lines and a synthetic
    ``adhoc-...`` id for ad-hoc lines. ``unit_price`` is fixed when the
    line is first added.
    """

    ref: str
    name: str
    unit_price: Money
    quantity: int
    product_id: str | None = None

    @property
    def is_ad_hoc(self) -> bool:
        return self.product_id is None

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class ReleaseWarning:
    """Stock that could not be handed back and needs a manual fix."""

    product_id: str
    product_name: str
    amount: int
    reason: str


def _serialized(method):
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)
    return wrapper


class Cart:

    def __init__(
        self,
        product_repo: ProductRepository,
        reservations: StockReservationService | None = None,
        currency: str = DEFAULT_CURRENCY,
    ) -> None:
        self._product_repo = product_repo
        self._reservations = reservations or StockReservationService(product_repo)
        self._currency = currency
        self._lock = threading.RLock()
        self._lines: list[CartLine] = []
        self.warnings: list[ReleaseWarning] = []
        self._reset_details()

    # --- Line management ------------------------------------------------------

    @_serialized
    def add_catalog_line(self, product_id: str, quantity: int) -> CartLine:
        """Add *quantity* units of a catalog product, reserving exactly that.

        A second add for the same product grows the existing line and
        reserves only the new units.
        """
        if not product_id or not str(product_id).strip():
            raise ValidationError("Please select a product")
        Quantity(quantity)

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        self._reservations.reserve(product.id, quantity)

        existing = self._find(product.id)
        if existing is not None:
            line = replace(existing, quantity=existing.quantity + quantity)
            self._replace(existing, line)
        else:
            line = CartLine(
                ref=product.id,
                name=product.name,
                unit_price=product.price,
                quantity=quantity,
                product_id=product.id,
            )
            self._lines.append(line)
        return line

    @_serialized
    def add_ad_hoc_line(self, name: str, quantity: int, price: Money) -> CartLine:
        """Add a line that is not backed by the catalog. Never touches stock.

        Ad-hoc lines with the same name (ignoring case) are merged.
        """
        if not name or not name.strip():
            raise ValidationError("Item name is required")
        Quantity(quantity)
        if price.amount <= 0:
            raise ValidationError("Item price must be greater than zero")

        for existing in self._lines:
            if existing.is_ad_hoc and existing.name.lower() == name.strip().lower():
                line = replace(existing, quantity=existing.quantity + quantity)
                self._replace(existing, line)
                return line

        line = CartLine(
            ref=f"{AD_HOC_PREFIX}{uuid.uuid4().hex[:12]}",
            name=name.strip(),
            unit_price=price,
            quantity=quantity,
        )
        self._lines.append(line)
        return line

    @_serialized
    def update_line_quantity(self, ref: str, new_quantity: int) -> CartLine | None:
        """Set a line's quantity. Zero or less removes the line.

        Returns the updated line, or None when it was removed.
        """
        line = self._get(ref)
        if new_quantity <= 0:
            self.remove_line(ref)
            return None

        if not line.is_ad_hoc:
            outcome = self._reservations.adjust_reservation(
                line.product_id, line.quantity, new_quantity
            )
            if isinstance(outcome, StockRelease):
                self._record(line, outcome)

        updated = replace(line, quantity=new_quantity)
        self._replace(line, updated)
        return updated

    @_serialized
    def remove_line(self, ref: str) -> None:
        """Drop a line, handing its reserved stock back first."""
        line = self._get(ref)
        if not line.is_ad_hoc:
            self._record(line, self._reservations.release(line.product_id, line.quantity))
        self._lines.remove(line)

    @_serialized
    def abandon(self) -> list[ReleaseWarning]:
        """Cancel the session: release every reservation and empty the cart.

        Returns the releases that failed; they are also kept in
        ``warnings``.
        """
        failed: list[ReleaseWarning] = []
        for line in list(self._lines):
            if line.is_ad_hoc:
                continue
            warning = self._record(
                line, self._reservations.release(line.product_id, line.quantity)
            )
            if warning is not None:
                failed.append(warning)
        self._lines.clear()
        self._reset_details()
        return failed

    @_serialized
    def clear(self) -> None:
        """Empty the cart without touching stock. Only valid after a commit."""
        self._lines.clear()
        self._reset_details()

    # --- Customer details -----------------------------------------------------

    @_serialized
    def set_customer(
        self,
        full_name: str,
        date: dt.date | None,
        address: str = "",
        phone: str = "",
    ) -> None:
        self.customer = CustomerDetails(
            full_name=(full_name or "").strip(),
            date=date,
            address=(address or "").strip(),
            phone=(phone or "").strip(),
        )

    @_serialized
    def set_discount(self, amount: Money) -> None:
        if amount.currency != self._currency:
            raise ValidationError(
                f"Discount currency {amount.currency} does not match {self._currency}"
            )
        self._discount = amount

    @_serialized
    def set_gst_rate(self, rate: Decimal) -> None:
        if not Decimal("0") <= rate <= Decimal("100"):
            raise ValidationError("GST rate must be between 0 and 100 percent")
        self.gst_rate = rate

    @_serialized
    def set_due(self, note: str | None) -> None:
        self.due = note.strip() if note and note.strip() else None

    # --- Computed properties --------------------------------------------------

    @property
    def lock(self):
        """The per-cart lock; hold it to run several steps as one."""
        return self._lock

    @property
    def lines(self) -> tuple[CartLine, ...]:
        return tuple(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def currency(self) -> str:
        return self._currency

    @property
    def subtotal(self) -> Money:
        result = Money.zero(self._currency)
        for line in self._lines:
            result = result + line.subtotal
        return result

    @property
    def discount(self) -> Money:
        return self._discount

    @property
    def taxable_amount(self) -> Money:
        return self.subtotal.minus_floor_zero(self._discount)

    @property
    def gst_amount(self) -> Money:
        return self.taxable_amount.percent(self.gst_rate)

    @property
    def final_total(self) -> Money:
        return self.taxable_amount + self.gst_amount

    # --- Internal helpers -----------------------------------------------------

    def _reset_details(self) -> None:
        self.customer: CustomerDetails | None = None
        self._discount = Money.zero(self._currency)
        self.gst_rate = Decimal("0")
        self.due: str | None = None

    def _find(self, ref: str) -> CartLine | None:
        for line in self._lines:
            if line.ref == ref:
                return line
        return None

    def _get(self, ref: str) -> CartLine:
        line = self._find(ref)
        if line is None:
            raise EntityNotFoundError(f"No cart line '{ref}'")
        return line

    def _replace(self, old: CartLine, new: CartLine) -> None:
        self._lines[self._lines.index(old)] = new

    def _record(self, line: CartLine, outcome: StockRelease) -> ReleaseWarning | None:
        if outcome.ok:
            return None
        warning = ReleaseWarning(
            product_id=outcome.product_id,
            product_name=line.name,
            amount=outcome.amount,
            reason=outcome.error or "unknown error",
        )
        self.warnings.append(warning)
        logger.warning(
            "Stock for %s (%d units) was not restored: %s",
            line.name, outcome.amount, warning.reason,
        )
        return warning
