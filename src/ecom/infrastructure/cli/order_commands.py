"""CLI commands for checkout and orders.

Both commands authenticate with a bearer token, exactly like the HTTP
API, so the CLI cannot act as a user it holds no credential for.
"""

from __future__ import annotations

import click

from ecom.application.authenticate import AuthenticateHandler
from ecom.application.checkout import CheckoutHandler
from ecom.application.dto import CartItem
from ecom.application.show_order import ShowOrderHandler
from ecom.domain.exceptions import DomainException, StoreError
from ecom.infrastructure.bootstrap import (
    order_repository,
    token_service,
    unit_of_work,
    user_repository,
)


def _parse_items(raw: str) -> list[CartItem]:
    """Parse '1:3,2:5' (product ID : quantity) into CartItem list."""
    items: list[CartItem] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductID:Quantity'."
            )
        id_str, qty_str = pair.split(":", 1)
        try:
            items.append(CartItem(product_id=int(id_str), quantity=int(qty_str)))
        except ValueError as exc:
            raise click.BadParameter(
                f"Invalid item '{pair}'. Both parts must be integers."
            ) from exc
    return items


def _authenticate(token: str) -> int:
    handler = AuthenticateHandler(token_service=token_service(), user_repo=user_repository())
    return handler.handle(f"Bearer {token}")


@click.command("checkout")
@click.option("--token", required=True, help="Bearer token (see 'ecom user token').")
@click.option("--items", required=True, help="Items as 'ProductID:Qty,ProductID:Qty'.")
@click.option("--address", default="", help="Shipping address.")
def order_checkout(token: str, items: str, address: str) -> None:
    """Check out a cart and place an order."""
    cart = _parse_items(items)

    try:
        user_id = _authenticate(token)
        result = CheckoutHandler(unit_of_work()).handle(
            user_id=user_id, cart_items=cart, address=address
        )
    except (DomainException, StoreError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{result.order_id} placed  (total=${result.total_price:.2f})")


@click.command("show")
@click.option("--token", required=True, help="Bearer token of the order's owner.")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(token: str, order_id: int) -> None:
    """Show details of one of your orders."""
    try:
        user_id = _authenticate(token)
        dto = ShowOrderHandler(order_repo=order_repository()).handle(order_id, user_id=user_id)
    except (DomainException, StoreError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Created:  {dto.created_at}")
    if dto.address:
        click.echo(f"Ship to:  {dto.address}")
    click.echo()
    click.echo(f"  {'Product':<10} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*38}")
    for item in dto.items:
        click.echo(
            f"  {item.product_id:<10} {item.quantity:>5} {item.price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*38}")
    click.echo(f"  {'Order Total':<17} {dto.total:>21}")
