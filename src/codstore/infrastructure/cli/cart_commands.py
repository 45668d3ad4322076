"""CLI commands for the buyer's cart."""

from __future__ import annotations

import click

from codstore.application.dto import CartDTO
from codstore.application.manage_cart import CartSession
from codstore.domain.exceptions import DomainException
from codstore.infrastructure.bootstrap import cart_repository, settings


def _session() -> CartSession:
    return CartSession(cart_repository(settings()))


def _display_cart(dto: CartDTO) -> None:
    if not dto.lines:
        click.echo("Your cart is empty.")
        return
    click.echo(f"  {'Item':<24} {'Qty':>5} {'Price':>14} {'Total':>14}")
    click.echo(f"  {'-'*60}")
    for line in dto.lines:
        click.echo(
            f"  {line.name:<24} {line.quantity:>5} {line.unit_price:>14} {line.line_total:>14}"
        )
    click.echo(f"  {'-'*60}")
    click.echo(f"  {'Subtotal (' + str(dto.item_count) + ' items)':<30} {dto.subtotal:>30}")


@click.command("add")
@click.option("--id", "item_id", required=True, help="Product id.")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Unit price in Taka.")
@click.option("--quantity", default=1, show_default=True, type=int, help="Units to add.")
def cart_add(item_id: str, name: str, price: str, quantity: int) -> None:
    """Add a product to the cart."""
    try:
        dto = _session().add_item(item_id, name, price, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _display_cart(dto)


@click.command("remove")
@click.option("--id", "item_id", required=True, help="Product id.")
def cart_remove(item_id: str) -> None:
    """Remove a product from the cart."""
    _display_cart(_session().remove_item(item_id))


@click.command("update")
@click.option("--id", "item_id", required=True, help="Product id.")
@click.option("--quantity", required=True, type=int, help="New quantity (0 removes).")
def cart_update(item_id: str, quantity: int) -> None:
    """Change the quantity of a cart line."""
    try:
        dto = _session().update_quantity(item_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _display_cart(dto)


@click.command("show")
def cart_show() -> None:
    """Show the cart."""
    _display_cart(_session().show())


@click.command("clear")
def cart_clear() -> None:
    """Empty the cart."""
    _session().clear()
    click.echo("Cart cleared.")
