"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from billing.domain.model.bill import Bill


@dataclass(frozen=True)
class BillLineItemDTO:
    """Output: a single bill line as displayed to the user."""

    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "INR 15.00"
    line_total: str


@dataclass(frozen=True)
class BillDTO:
    """Output: a complete bill as displayed to the user."""

    id: str
    bill_number: str
    bill_number_value: int
    customer_name: str
    date: str
    address: str
    phone: str
    items: list[BillLineItemDTO]
    subtotal: str
    discount: str
    gst_rate: str
    gst_amount: str
    total: str
    due: str | None
    created_at: str


def to_bill_dto(bill: Bill) -> BillDTO:
    return BillDTO(
        id=bill.id,  # type: ignore[arg-type]
        bill_number=bill.bill_number,
        bill_number_value=bill.bill_number_value,
        customer_name=bill.customer.full_name,
        date=bill.customer.date.isoformat() if bill.customer.date else "",
        address=bill.customer.address,
        phone=bill.customer.phone,
        items=[
            BillLineItemDTO(
                product_name=item.product_name,
                quantity=item.quantity,
                unit_price=str(item.unit_price),
                line_total=str(item.subtotal),
            )
            for item in bill.items
        ],
        subtotal=str(bill.subtotal),
        discount=str(bill.discount),
        gst_rate=f"{bill.gst_rate}%",
        gst_amount=str(bill.gst_amount),
        total=str(bill.total),
        due=bill.due,
        created_at=(
            bill.created_at.strftime("%Y-%m-%d %H:%M UTC") if bill.created_at else ""
        ),
    )
