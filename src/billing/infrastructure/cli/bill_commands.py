"""CLI commands for building and managing bills."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation

import click

from billing.application.commit_bill import CommitBillHandler
from billing.application.delete_bill import DeleteBillHandler
from billing.application.dto import BillDTO
from billing.application.show_bill import ListBillsHandler, ShowBillHandler
from billing.domain.exceptions import DomainException, EntityNotFoundError
from billing.domain.model.cart import Cart
from billing.domain.model.value_objects import Money
from billing.infrastructure.bootstrap import (
    bill_repository,
    invoice_renderer,
    product_repository,
    settings,
)


def _parse_item(raw: str) -> tuple[str, int]:
    """Parse 'Pipe:4' into ('Pipe', 4)."""
    if ":" not in raw:
        raise click.BadParameter(
            f"Invalid item format '{raw}'. Expected 'ProductName:Quantity'."
        )
    name, qty_str = raw.rsplit(":", 1)
    try:
        qty = int(qty_str)
    except ValueError:
        raise click.BadParameter(
            f"Invalid quantity '{qty_str}' for product '{name}'."
        )
    return name.strip(), qty


def _parse_custom(raw: str) -> tuple[str, int, str]:
    """Parse 'Custom Fitting:2@50' into ('Custom Fitting', 2, '50')."""
    if "@" not in raw:
        raise click.BadParameter(
            f"Invalid custom item '{raw}'. Expected 'Name:Quantity@Price'."
        )
    item, price = raw.rsplit("@", 1)
    name, qty = _parse_item(item)
    return name, qty, price.strip()


def _parse_rate(raw: str) -> Decimal:
    try:
        rate = Decimal(raw.strip().rstrip("%"))
    except InvalidOperation:
        rate = None
    if rate is None or not rate.is_finite():
        raise click.BadParameter(f"Invalid GST rate '{raw}'.")
    return rate


def _fill_cart(cart: Cart, items: tuple[str, ...], customs: tuple[str, ...]) -> None:
    repo = product_repository()
    for name, qty in (_parse_item(raw) for raw in items):
        product = repo.get_by_name(name)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{name}'")
        cart.add_catalog_line(product.id, qty)
    for name, qty, price in (_parse_custom(raw) for raw in customs):
        cart.add_ad_hoc_line(name, qty, Money.of(price, cart.currency))


@click.command("create")
@click.option("--customer", required=True, help="Customer full name.")
@click.option(
    "--date", "bill_date", type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None, help="Bill date (YYYY-MM-DD, defaults to today).",
)
@click.option("--address", default="", help="Customer address.")
@click.option("--phone", default="", help="Customer phone.")
@click.option("--discount", default="0", help="Fixed discount amount.")
@click.option("--gst", default="0", help="GST rate in percent.")
@click.option("--due", default=None, help="Amount-due note printed on the bill.")
@click.option("--item", "items", multiple=True, help="Catalog item as 'Product:Qty'.")
@click.option("--custom", "customs", multiple=True, help="Ad-hoc item as 'Name:Qty@Price'.")
def bill_create(
    customer: str,
    bill_date: datetime | None,
    address: str,
    phone: str,
    discount: str,
    gst: str,
    due: str | None,
    items: tuple[str, ...],
    customs: tuple[str, ...],
) -> None:
    """Reserve stock for the given items and commit a bill."""
    cfg = settings()
    cart = Cart(product_repository(), currency=cfg.currency)
    handler = CommitBillHandler(
        bill_repo=bill_repository(),
        prefix=cfg.bill_prefix,
        width=cfg.bill_number_width,
        renderer=invoice_renderer(),
    )

    committed = False
    try:
        _fill_cart(cart, items, customs)
        cart.set_customer(
            full_name=customer,
            date=bill_date.date() if bill_date else date.today(),
            address=address,
            phone=phone,
        )
        cart.set_discount(Money.of(discount, cfg.currency))
        cart.set_gst_rate(_parse_rate(gst))
        cart.set_due(due)
        dto = handler.handle(cart)
        committed = True
    except DomainException as exc:
        raise click.ClickException(str(exc))
    finally:
        if not committed:
            _abandon(cart)

    _display_bill(dto)


def _abandon(cart: Cart) -> None:
    """Hand every reservation back, reporting stock that could not be returned."""
    for warning in cart.abandon():
        click.echo(
            f"Warning: {warning.amount} x {warning.product_name} could not be "
            f"returned to stock ({warning.reason})",
            err=True,
        )


def _display_bill(dto: BillDTO) -> None:
    """Shared formatting for displaying a bill."""
    click.echo(f"Bill {dto.bill_number}  (id={dto.id})")
    click.echo(f"Customer: {dto.customer_name}")
    click.echo(f"Date:     {dto.date}")
    if dto.phone:
        click.echo(f"Phone:    {dto.phone}")
    if dto.address:
        click.echo(f"Address:  {dto.address}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>14} {'Total':>14}")
    click.echo(f"  {'-'*55}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>14} {item.line_total:>14}"
        )
    click.echo(f"  {'-'*55}")
    click.echo(f"  {'Subtotal':<27} {dto.subtotal:>28}")
    click.echo(f"  {'Discount':<27} {dto.discount:>28}")
    click.echo(f"  {'GST ' + dto.gst_rate:<27} {dto.gst_amount:>28}")
    click.echo(f"  {'Total':<27} {dto.total:>28}")
    if dto.due:
        click.echo(f"  Due: {dto.due}")


@click.command("show")
@click.option("--id", "bill_id", required=True, help="Bill ID to display.")
def bill_show(bill_id: str) -> None:
    """Show details of an existing bill."""
    handler = ShowBillHandler(bill_repo=bill_repository())

    try:
        dto = handler.handle(bill_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_bill(dto)


@click.command("list")
def bill_list() -> None:
    """List all bills, newest first."""
    try:
        bills = ListBillsHandler(bill_repo=bill_repository()).handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not bills:
        click.echo("No bills found.")
        return

    click.echo(f"{'Bill #':<12} {'Date':<11} {'Customer':<20} {'Total':>14}  ID")
    click.echo("-" * 92)
    for b in bills:
        click.echo(
            f"{b.bill_number:<12} {b.date:<11} {b.customer_name:<20} {b.total:>14}  {b.id}"
        )


@click.command("delete")
@click.option("--id", "bill_id", required=True, help="Bill ID to delete.")
@click.confirmation_option(prompt="Delete this bill? Stock is not restored.")
def bill_delete(bill_id: str) -> None:
    """Delete a bill from the ledger (stock is not restored)."""
    handler = DeleteBillHandler(bill_repo=bill_repository())

    try:
        number = handler.handle(bill_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Bill {number} deleted.")
