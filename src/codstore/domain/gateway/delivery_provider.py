"""Port for the courier: geography, route pricing and consignments.

Consignment creation is best-effort.  ``create_consignment`` never
raises for courier-side problems; it returns a ``ConsignmentFailed``
so the caller can carry on and place the order anyway.  Listing and
pricing calls raise RouteResolutionError.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Union

from codstore.domain.model.geography import Area, City, DeliveryQuote, Zone

# Courier enumerations
DELIVERY_TYPE_NORMAL = 48
ITEM_TYPE_PARCEL = 2


@dataclass(frozen=True)
class ConsignmentRequest:
    store_id: int
    merchant_order_id: str
    recipient_name: str
    recipient_phone: str
    recipient_address: str
    recipient_city: int
    recipient_zone: int
    item_weight: str
    amount_to_collect: int
    item_description: str
    recipient_secondary_phone: str | None = None
    recipient_area: int | None = None
    delivery_type: int = DELIVERY_TYPE_NORMAL
    item_type: int = ITEM_TYPE_PARCEL
    item_quantity: int = 1

    def to_payload(self) -> dict:
        payload = {
            "store_id": self.store_id,
            "merchant_order_id": self.merchant_order_id,
            "recipient_name": self.recipient_name,
            "recipient_phone": self.recipient_phone,
            "recipient_address": self.recipient_address,
            "recipient_city": self.recipient_city,
            "recipient_zone": self.recipient_zone,
            "delivery_type": self.delivery_type,
            "item_type": self.item_type,
            "item_quantity": self.item_quantity,
            "item_weight": self.item_weight,
            "amount_to_collect": self.amount_to_collect,
            "item_description": self.item_description,
        }
        if self.recipient_secondary_phone:
            payload["recipient_secondary_phone"] = self.recipient_secondary_phone
        if self.recipient_area:
            payload["recipient_area"] = self.recipient_area
        return payload


@dataclass(frozen=True)
class ConsignmentCreated:
    consignment_id: str
    order_status: str | None = None
    delivery_fee: float | None = None

    @property
    def is_success(self) -> bool:
        return True


@dataclass(frozen=True)
class ConsignmentFailed:
    error: str

    @property
    def is_success(self) -> bool:
        return False


ConsignmentResult = Union[ConsignmentCreated, ConsignmentFailed]


class DeliveryProvider(ABC):

    @abstractmethod
    def list_cities(self) -> list[City]:
        """Every city the courier serves."""

    @abstractmethod
    def list_zones(self, city_id: int) -> list[Zone]:
        """Zones inside *city_id*."""

    @abstractmethod
    def list_areas(self, zone_id: int) -> list[Area]:
        """Areas inside *zone_id*."""

    @abstractmethod
    def quote_price(self, city_id: int, zone_id: int, weight: Decimal) -> DeliveryQuote:
        """Delivery price for a parcel of *weight* kg on this route."""

    @abstractmethod
    def create_consignment(self, request: ConsignmentRequest) -> ConsignmentResult:
        """Register a parcel with the courier."""
