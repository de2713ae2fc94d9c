"""CLI commands for sales and stock reports."""

from __future__ import annotations

from datetime import datetime

import click

from billing.application.sales_report import SalesReportHandler
from billing.domain.exceptions import DomainException
from billing.infrastructure.bootstrap import bill_repository, product_repository, settings


def _handler() -> SalesReportHandler:
    return SalesReportHandler(
        bill_repo=bill_repository(),
        product_repo=product_repository(),
        currency=settings().currency,
    )


@click.command("sales")
@click.option(
    "--date", "on", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
    help="Only count bills dated YYYY-MM-DD.",
)
def report_sales(on: datetime | None) -> None:
    """Show total sales and bill count."""
    try:
        summary = _handler().sales_summary(on.date() if on else None)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if summary.date:
        click.echo(f"Sales on {summary.date}")
    click.echo(f"Bills:       {summary.bill_count}")
    click.echo(f"Total sales: {summary.total_sales}")


@click.command("top")
@click.option("--limit", default=10, type=int, show_default=True, help="Number of products.")
def report_top(limit: int) -> None:
    """Show the best-selling catalog products by units sold."""
    try:
        rows = _handler().top_selling(limit)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not rows:
        click.echo("No sales recorded.")
        return

    click.echo(f"{'Product':<20} {'Units':>7} {'Bills':>6} {'Revenue':>16}")
    click.echo("-" * 52)
    for row in rows:
        click.echo(
            f"{row.product_name:<20} {row.quantity:>7} {row.bill_count:>6} {row.revenue:>16}"
        )


@click.command("inventory")
@click.option("--threshold", default=None, type=int, help="Low-stock threshold.")
def report_inventory(threshold: int | None) -> None:
    """Show stock value and low-stock products."""
    limit = settings().low_stock_threshold if threshold is None else threshold
    handler = _handler()
    try:
        value = handler.inventory_value()
        low = handler.low_stock(limit)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Inventory value: {value.total_value}")
    click.echo()
    if not low:
        click.echo(f"No products at or below {limit} units.")
        return
    click.echo(f"Low stock (<= {limit}):")
    for line in low:
        click.echo(f"  {line.product_name:<20} {line.quantity:>6}")
