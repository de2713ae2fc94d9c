import logging

import click

from billing.domain.exceptions import DomainException
from billing.infrastructure.bootstrap import settings
from billing.infrastructure.cli.bill_commands import (
    bill_create,
    bill_delete,
    bill_list,
    bill_show,
)
from billing.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_restock,
    product_update,
)
from billing.infrastructure.cli.report_commands import (
    report_inventory,
    report_sales,
    report_top,
)

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Logging verbosity (defaults to BILLING_LOG_LEVEL or WARNING).",
)
def cli(log_level: str | None) -> None:
    """Billing — stock-reserving billing console"""
    try:
        configured = settings().log_level
    except DomainException as exc:
        raise click.ClickException(str(exc))
    level = (log_level or configured).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.group()
def bill() -> None:
    """Create and manage bills."""


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def report() -> None:
    """Sales and stock reports."""


# Register subcommands
bill.add_command(bill_create)
bill.add_command(bill_delete)
bill.add_command(bill_list)
bill.add_command(bill_show)
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_restock)
product.add_command(product_update)
report.add_command(report_inventory)
report.add_command(report_sales)
report.add_command(report_top)
