"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the HTTP / CLI layers and the application
layer without exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ContactDetails:
    """Input: who receives the parcel and where."""

    email: str
    full_name: str
    phone: str
    address: str
    secondary_phone: str | None = None


@dataclass(frozen=True)
class CartLineDTO:
    id: str
    name: str
    quantity: int
    unit_price: str  # formatted, e.g. "Tk 450.00"
    line_total: str


@dataclass(frozen=True)
class CartDTO:
    lines: list[CartLineDTO]
    item_count: int
    subtotal: str


@dataclass(frozen=True)
class CheckoutTotalsDTO:
    subtotal: str
    shipping: str | None  # None while the route price is unknown
    total: str
    warning: str | None = None


@dataclass(frozen=True)
class PlacedOrderDTO:
    order_id: str
    date: str
    consignment_id: str | None
    tracking_url: str | None
    total: str | None
    items_summary: str | None
    pathao_error: str | None = None
