"""Application service: Commit Bill use case.

Turns an open cart into an immutable Bill:

1. validate the cart and customer details,
2. take the next bill number and write the bill, both under the
   ledger's issuing lock so concurrent commits never share a number
   (a single insert; stock was already taken while the cart was
   assembled),
3. hand the bill to the invoice renderer and clear the cart.

If numbering or the write fails the error propagates and the cart is left
exactly as it was, reservations included, so the user can retry.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from billing.application.dto import BillDTO, to_bill_dto
from billing.domain.exceptions import ValidationError
from billing.domain.model.bill import (
    DEFAULT_PREFIX,
    DEFAULT_WIDTH,
    Bill,
    BillNumber,
    BillLineItem,
    CustomerDetails,
)
from billing.domain.model.cart import Cart
from billing.domain.repository.bill_repository import BillRepository
from billing.domain.service.bill_numbering_service import BillNumberingService

logger = logging.getLogger(__name__)

InvoiceRenderer = Callable[[Bill], Any]


class CommitBillHandler:

    def __init__(
        self,
        bill_repo: BillRepository,
        prefix: str = DEFAULT_PREFIX,
        width: int = DEFAULT_WIDTH,
        renderer: InvoiceRenderer | None = None,
    ) -> None:
        self._bill_repo = bill_repo
        self._numbering = BillNumberingService(bill_repo, prefix=prefix, width=width)
        self._renderer = renderer

    def handle(self, cart: Cart) -> BillDTO:
        with cart.lock:
            return self._commit(cart)

    def _commit(self, cart: Cart) -> BillDTO:
        customer = self._validate(cart)

        with self._bill_repo.issuing():
            number = self._numbering.next_number()
            bill = self._snapshot(cart, customer, number)
            self._bill_repo.add(bill)
        logger.info(
            "Committed bill %s for %s, total %s", number, customer.full_name, bill.total
        )

        self._render(bill)
        cart.clear()
        return to_bill_dto(bill)

    @staticmethod
    def _snapshot(cart: Cart, customer: CustomerDetails, number: BillNumber) -> Bill:
        return Bill(
            id=None,
            bill_number=str(number),
            bill_number_value=number.value,
            customer=customer,
            items=tuple(
                BillLineItem(
                    product_id=line.product_id,
                    product_name=line.name,
                    unit_price=line.unit_price,
                    quantity=line.quantity,
                )
                for line in cart.lines
            ),
            subtotal=cart.subtotal,
            discount=cart.discount,
            gst_rate=cart.gst_rate,
            gst_amount=cart.gst_amount,
            total=cart.final_total,
            due=cart.due,
        )

    @staticmethod
    def _validate(cart: Cart) -> CustomerDetails:
        if cart.is_empty:
            raise ValidationError("Please add products to the bill")
        customer = cart.customer
        if customer is None or not customer.full_name.strip():
            raise ValidationError("Customer name is required")
        if customer.date is None:
            raise ValidationError("Bill date is required")
        return customer

    def _render(self, bill: Bill) -> None:
        if self._renderer is None:
            return
        try:
            self._renderer(bill)
        except Exception:
            # rendering sits outside the commit
            logger.exception("Invoice rendering failed for bill %s", bill.bill_number)
