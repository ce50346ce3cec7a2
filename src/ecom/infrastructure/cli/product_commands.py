"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from ecom.application.add_product import AddProductHandler
from ecom.domain.exceptions import DomainException, StoreError
from ecom.infrastructure.bootstrap import product_repository


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--quantity", required=True, type=int, help="Units in stock.")
@click.option("--description", default="", help="Free-text description.")
@click.option("--image", default="", help="Image reference.")
def product_add(name: str, price: str, quantity: int, description: str, image: str) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(
            name=name,
            price=price,
            quantity=quantity,
            description=description,
            image=image,
        )
    except (DomainException, StoreError) as exc:
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
    except StoreError as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Price':>10} {'Stock':>8}")
    click.echo("-" * 47)
    for p in products:
        click.echo(f"{p.id:<6} {p.name:<20} {str(p.price):>10} {p.quantity:>8}")
