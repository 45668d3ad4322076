"""CLI commands for placing orders and reading the local order history."""

from __future__ import annotations

from decimal import Decimal

import click

from codstore.application.dto import ContactDetails
from codstore.application.place_order import PlaceOrderHandler
from codstore.application.quote_delivery import QuoteDeliveryHandler, QuoteTracker
from codstore.application.show_orders import ShowOrderHistoryHandler
from codstore.domain.exceptions import AuditSinkError, DomainException
from codstore.domain.model.geography import DeliveryQuote, GeographySelection
from codstore.infrastructure.bootstrap import (
    cart_repository,
    delivery_provider,
    order_history_repository,
    order_submitter,
    settings,
)


def _lookup_quote(geography: GeographySelection, weight: Decimal) -> DeliveryQuote | None:
    """Best-effort route price; a pricing outage never blocks checkout."""
    tracker = QuoteTracker()
    handler = QuoteDeliveryHandler(delivery_provider(settings()))
    delivery = handler.quote_selection(geography, weight, tracker)
    if delivery is None:
        click.echo(f"Warning: could not load delivery charge ({tracker.error})", err=True)
    return delivery


@click.command("checkout")
@click.option("--email", required=True, help="Buyer email.")
@click.option("--name", "full_name", required=True, help="Recipient full name.")
@click.option("--phone", required=True, help="Recipient mobile number.")
@click.option("--secondary-phone", default=None, help="Alternate mobile number.")
@click.option("--address", required=True, help="House, road, block.")
@click.option("--city-id", required=True, type=int, help="Courier city id.")
@click.option("--city-name", required=True, help="City name.")
@click.option("--zone-id", required=True, type=int, help="Courier zone id.")
@click.option("--zone-name", required=True, help="Zone name.")
@click.option("--area-id", default=None, type=int, help="Courier area id.")
@click.option("--area-name", default=None, help="Area name.")
def checkout(
    email: str,
    full_name: str,
    phone: str,
    secondary_phone: str | None,
    address: str,
    city_id: int,
    city_name: str,
    zone_id: int,
    zone_name: str,
    area_id: int | None,
    area_name: str | None,
) -> None:
    """Place a cash-on-delivery order for the current cart."""
    config = settings()
    cart_repo = cart_repository(config)
    geography = GeographySelection(
        city_id=city_id,
        city_name=city_name,
        zone_id=zone_id,
        zone_name=zone_name,
        area_id=area_id,
        area_name=area_name,
    )
    delivery = _lookup_quote(geography, cart_repo.load().parcel_weight)

    handler = PlaceOrderHandler(
        cart_repo=cart_repo,
        history_repo=order_history_repository(config),
        submitter=order_submitter(config),
    )
    totals = handler.totals(delivery)
    if totals.warning:
        click.echo(f"Warning: {totals.warning}", err=True)

    contact = ContactDetails(
        email=email,
        full_name=full_name,
        phone=phone,
        secondary_phone=secondary_phone,
        address=address,
    )
    try:
        placed = handler.handle(contact, geography, delivery)
    except AuditSinkError as exc:
        raise click.ClickException(f"{exc}. Your order was not placed; please try again.")
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {placed.order_id} placed  (total {placed.total}, cash on delivery)")
    click.echo(f"Shipping: {totals.shipping or 'unresolved'}")
    if placed.consignment_id:
        click.echo(f"Consignment: {placed.consignment_id}")
    if placed.tracking_url:
        click.echo(f"Track: {placed.tracking_url}")
    if placed.pathao_error:
        click.echo(
            "Note: courier booking failed; delivery will be arranged manually "
            f"({placed.pathao_error})."
        )


@click.command("list")
def orders_list() -> None:
    """List orders placed from this machine, newest first."""
    orders = ShowOrderHistoryHandler(order_history_repository(settings())).handle()
    if not orders:
        click.echo("No orders yet.")
        return
    for order in orders:
        click.echo(f"{order.order_id}  {order.date[:10]}  {order.total or '':>14}  {order.items_summary or ''}")
        if order.tracking_url:
            click.echo(f"    track: {order.tracking_url}")
