"""Domain service: turn a placed order into a courier consignment request.

The courier rejects recipient addresses shorter than 10 or longer than
220 characters, and item descriptions longer than 220.  Address bounds
are checked here so an out-of-range address is reported without a
network round trip.
"""

from __future__ import annotations

from decimal import Decimal

from codstore.domain.exceptions import DeliveryProviderError
from codstore.domain.gateway.delivery_provider import ConsignmentRequest
from codstore.domain.model.order import OrderRequest
from codstore.domain.model.phone import PhoneNumber

MIN_ADDRESS_LENGTH = 10
MAX_ADDRESS_LENGTH = 220
MAX_DESCRIPTION_LENGTH = 220


def recipient_address(request: OrderRequest) -> str:
    """Detailed address followed by area, zone and city, comma separated."""
    parts = [request.address, *request.geography.address_parts()]
    return ", ".join(part for part in parts if part)


def check_address_length(address: str) -> None:
    if not MIN_ADDRESS_LENGTH <= len(address) <= MAX_ADDRESS_LENGTH:
        raise DeliveryProviderError(
            f"Address length must be between {MIN_ADDRESS_LENGTH} and "
            f"{MAX_ADDRESS_LENGTH} characters for Pathao (got {len(address)})"
        )


def format_weight(weight: Decimal) -> str:
    """``Decimal('1.0')`` -> ``'1'``, ``Decimal('0.5')`` -> ``'0.5'``."""
    return format(weight.normalize(), "f")


def build_consignment_request(
    request: OrderRequest,
    order_id: str,
    store_id: int,
    phone: PhoneNumber,
    secondary_phone: PhoneNumber | None,
) -> ConsignmentRequest:
    address = recipient_address(request)
    check_address_length(address)

    summary = request.items_summary
    description = summary if len(summary) <= MAX_DESCRIPTION_LENGTH else f"Order {order_id}"

    geo = request.geography
    return ConsignmentRequest(
        store_id=store_id,
        merchant_order_id=order_id,
        recipient_name=request.full_name,
        recipient_phone=str(phone),
        recipient_secondary_phone=str(secondary_phone) if secondary_phone else None,
        recipient_address=address,
        recipient_city=int(geo.city_id),  # type: ignore[arg-type]
        recipient_zone=int(geo.zone_id),  # type: ignore[arg-type]
        recipient_area=geo.area_id or None,
        item_weight=format_weight(request.parcel_weight),
        amount_to_collect=request.total.to_whole_taka(),
        item_description=description,
    )
