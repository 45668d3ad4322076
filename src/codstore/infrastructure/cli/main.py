import click

from codstore.infrastructure.bootstrap import settings
from codstore.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_update,
)
from codstore.infrastructure.cli.delivery_commands import geo_areas, geo_cities, geo_zones, quote
from codstore.infrastructure.cli.order_commands import checkout, orders_list
from codstore.infrastructure.logging import configure_logging


@click.group()
def cli() -> None:
    """codstore: cash-on-delivery storefront"""
    configure_logging(settings().log_level)


@cli.group()
def cart() -> None:
    """Manage the cart."""


@cli.group()
def geo() -> None:
    """Browse courier cities, zones and areas."""


@cli.group()
def orders() -> None:
    """Read the local order history."""


@cli.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8000, show_default=True, type=int)
def serve(host: str, port: int) -> None:
    """Run the storefront HTTP API."""
    import uvicorn

    uvicorn.run("codstore.infrastructure.api.app:app", host=host, port=port)


# Register subcommands
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_update)
geo.add_command(geo_areas)
geo.add_command(geo_cities)
geo.add_command(geo_zones)
orders.add_command(orders_list)
cli.add_command(checkout)
cli.add_command(quote)
