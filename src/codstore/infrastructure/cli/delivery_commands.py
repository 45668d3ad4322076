"""CLI commands for courier locations and route pricing."""

from __future__ import annotations

import click

from codstore.application.browse_geography import (
    ListAreasHandler,
    ListCitiesHandler,
    ListZonesHandler,
)
from codstore.application.place_order import price_cart, totals_dto
from codstore.application.quote_delivery import QuoteDeliveryHandler, QuoteTracker
from codstore.domain.exceptions import DomainException
from codstore.domain.model.geography import GeographySelection
from codstore.infrastructure.bootstrap import cart_repository, delivery_provider, settings


@click.command("cities")
def geo_cities() -> None:
    """List cities the courier serves."""
    try:
        cities = ListCitiesHandler(delivery_provider(settings())).handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))
    for city in cities:
        click.echo(f"{city.city_id:>6}  {city.city_name}")


@click.command("zones")
@click.option("--city-id", required=True, type=int, help="City id.")
def geo_zones(city_id: int) -> None:
    """List zones inside a city."""
    try:
        zones = ListZonesHandler(delivery_provider(settings())).handle(city_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    for zone in zones:
        click.echo(f"{zone.zone_id:>6}  {zone.zone_name}")


@click.command("areas")
@click.option("--zone-id", required=True, type=int, help="Zone id.")
def geo_areas(zone_id: int) -> None:
    """List areas inside a zone."""
    try:
        areas = ListAreasHandler(delivery_provider(settings())).handle(zone_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    for area in areas:
        home = "home delivery" if area.home_delivery_available else ""
        click.echo(f"{area.area_id:>6}  {area.area_name:<30} {home}")


@click.command("quote")
@click.option("--city-id", required=True, type=int, help="City id.")
@click.option("--zone-id", required=True, type=int, help="Zone id.")
def quote(city_id: int, zone_id: int) -> None:
    """Price the current cart for a route, including the courier's COD fee."""
    config = settings()
    cart = cart_repository(config).load()
    route = GeographySelection(city_id=city_id, zone_id=zone_id)
    tracker = QuoteTracker()
    handler = QuoteDeliveryHandler(delivery_provider(config))
    delivery = handler.quote_selection(route, cart.parcel_weight, tracker)
    if delivery is None:
        raise click.ClickException(str(tracker.error))

    totals = totals_dto(price_cart(cart, delivery))
    click.echo(f"Parcel weight:   {cart.parcel_weight} kg")
    click.echo(f"Courier price:   {delivery.price}  (COD {'on' if delivery.cod_enabled else 'off'})")
    click.echo(f"Subtotal:        {totals.subtotal}")
    click.echo(f"Shipping:        {totals.shipping}")
    click.echo(f"Total to pay:    {totals.total}")
