import click

from ecom.infrastructure import bootstrap
from ecom.infrastructure.cli.order_commands import order_checkout, order_show
from ecom.infrastructure.cli.product_commands import product_add, product_list
from ecom.infrastructure.cli.user_commands import user_register, user_token
from ecom.infrastructure.logging import configure_logging


@click.group()
def cli() -> None:
    """ecom — cart checkout and orders"""
    configure_logging()


@cli.group()
def order() -> None:
    """Check out carts and inspect orders."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def user() -> None:
    """Manage users and credentials."""


@cli.command()
@click.option("--host", default=None, help="Bind address (default: $ECOM_HOST).")
@click.option("--port", default=None, type=int, help="Port (default: $ECOM_PORT).")
def serve(host: str | None, port: int | None) -> None:
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run(
        bootstrap.http_app(),
        host=host or bootstrap.server_host(),
        port=port or bootstrap.server_port(),
        log_config=None,
    )


# Register subcommands
order.add_command(order_checkout)
order.add_command(order_show)
product.add_command(product_add)
product.add_command(product_list)
user.add_command(user_register)
user.add_command(user_token)
