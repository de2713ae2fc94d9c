"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from billing.application.add_product import AddProductHandler
from billing.application.delete_product import DeleteProductHandler
from billing.application.update_product import RestockProductHandler, UpdateProductHandler
from billing.domain.exceptions import DomainException
from billing.infrastructure.bootstrap import product_repository, settings


def _parse_variation(raw: str) -> tuple[str, str, int]:
    """Parse 'L:120:4' into ('L', '120', 4)."""
    parts = raw.split(":")
    if len(parts) != 3:
        raise click.BadParameter(
            f"Invalid variation '{raw}'. Expected 'Size:Price:Quantity'."
        )
    size, price, qty_str = (p.strip() for p in parts)
    try:
        qty = int(qty_str)
    except ValueError:
        raise click.BadParameter(f"Invalid quantity '{qty_str}' for size '{size}'.")
    return size, price, qty


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--quantity", required=True, type=int, help="Opening stock.")
@click.option("--category", default="", help="Category name.")
@click.option("--subcategory", default=None, help="Subcategory name.")
@click.option("--variation", "variations", multiple=True, help="Size variation as 'Size:Price:Qty'.")
def product_add(
    name: str,
    price: str,
    quantity: int,
    category: str,
    subcategory: str | None,
    variations: tuple[str, ...],
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(
        product_repo=product_repository(), currency=settings().currency
    )

    try:
        product = handler.handle(
            name=name,
            price=price,
            quantity=quantity,
            category=category,
            subcategory=subcategory,
            variations=[_parse_variation(v) for v in variations],
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} '{product.name}' added at {product.price} "
        f"({product.quantity} in stock)"
    )


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    try:
        products = product_repository().list_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Category':<14} {'Price':>14} {'Stock':>7}")
    click.echo("-" * 65)
    for p in products:
        click.echo(
            f"{p.id:<6} {p.name:<20} {p.category:<14} {str(p.price):>14} {p.quantity:>7}"
        )
        for v in p.variations:
            click.echo(f"{'':<6}   size {v.size:<13} {'':<14} {str(v.price):>14} {v.quantity:>7}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", required=True, help="New price (e.g. 29.99).")
def product_update(product_id: str, price: str) -> None:
    """Update a product's price."""
    handler = UpdateProductHandler(
        product_repo=product_repository(), currency=settings().currency
    )

    try:
        handler.handle(product_id=product_id, new_price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} price updated to {price}")


@click.command("restock")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units received.")
def product_restock(product_id: str, quantity: int) -> None:
    """Add received units to a product's stock."""
    handler = RestockProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(product_id=product_id, amount=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' now has {product.quantity} in stock")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.confirmation_option(prompt="Delete this product from the catalog?")
def product_delete(product_id: str) -> None:
    """Remove a product from the catalog (issued bills keep their copy)."""
    handler = DeleteProductHandler(product_repo=product_repository())

    try:
        name = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} '{name}' deleted.")
