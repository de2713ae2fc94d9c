"""Plain-text invoice renderer.

Writes one ``<prefix>-<number>.txt`` file per bill, with the line items
split into pages of ``page_size`` rows.
"""

from __future__ import annotations

import logging
from pathlib import Path

from billing.domain.model.bill import Bill

logger = logging.getLogger(__name__)

_RULE = "-" * 64


class TextInvoiceRenderer:

    def __init__(self, output_dir: Path, page_size: int = 20) -> None:
        self._output_dir = output_dir
        self._page_size = page_size

    def __call__(self, bill: Bill) -> Path:
        self._output_dir.mkdir(parents=True, exist_ok=True)
        path = self._output_dir / f"{bill.bill_number.replace('/', '-')}.txt"
        path.write_text(self.render(bill), encoding="utf-8")
        logger.info("Wrote invoice %s", path)
        return path

    def render(self, bill: Bill) -> str:
        items = list(bill.items)
        pages = [
            items[i:i + self._page_size] for i in range(0, len(items), self._page_size)
        ] or [[]]

        out: list[str] = []
        for number, page in enumerate(pages, start=1):
            out.append("INVOICE".center(64))
            out.append(f"Bill #: {bill.bill_number}")
            out.append(f"Date:   {bill.customer.date or ''}")
            out.append(f"Page {number} of {len(pages)}")
            out.append("")
            out.append("Bill To:")
            out.append(f"  Name:    {bill.customer.full_name}")
            if bill.customer.phone:
                out.append(f"  Phone:   {bill.customer.phone}")
            if bill.customer.address:
                out.append(f"  Address: {bill.customer.address}")
            out.append("")
            out.append(f"{'Product':<28} {'Qty':>5} {'Price':>14} {'Total':>14}")
            out.append(_RULE)
            for item in page:
                out.append(
                    f"{item.product_name[:28]:<28} {item.quantity:>5} "
                    f"{str(item.unit_price):>14} {str(item.subtotal):>14}"
                )
            out.append(_RULE)
            if number < len(pages):
                out.append("Continued on next page")
                out.append("\f")

        out.append(f"{'Subtotal':<48} {str(bill.subtotal):>15}")
        if bill.discount.amount:
            out.append(f"{'Discount':<48} {str(bill.discount):>15}")
        if bill.gst_rate:
            out.append(f"{f'GST ({bill.gst_rate}%)':<48} {str(bill.gst_amount):>15}")
        out.append(f"{'Grand Total':<48} {str(bill.total):>15}")
        if bill.due:
            out.append(f"Due: {bill.due}")
        return "\n".join(out) + "\n"
