"""OrderRequest and OrderRecord: what the buyer submits and what gets logged.

An OrderRequest is built once per checkout attempt and never mutated.
The server turns it into an OrderRecord by stamping an order id, a
timestamp and the courier consignment id (when one was obtained).
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, Iterable

from codstore.domain.exceptions import ValidationError
from codstore.domain.model.geography import GeographySelection
from codstore.domain.model.phone import normalize_phone
from codstore.domain.model.value_objects import CENT, Money, Quantity

# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
KG_PER_UNIT = Decimal("0.5")
MIN_PARCEL_WEIGHT = Decimal("0.5")
ITEMS_SEPARATOR = " | "
NEW_ORDER_STATUS = "New"
DEFAULT_ORDER_ID_PREFIX = "CR"
_BASE36 = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"


@dataclass(frozen=True)
class OrderItem:
    """A cart line as submitted: price is the buyer-visible unit price."""

    id: str
    name: str
    price: Money
    quantity: Quantity

    @property
    def line_total(self) -> Money:
        return self.price * self.quantity.value


def parcel_weight(quantities: Iterable[int]) -> Decimal:
    """Estimated parcel weight in kg: half a kilo per unit, never below 0.5."""
    total = sum((KG_PER_UNIT * qty for qty in quantities), Decimal("0"))
    return max(MIN_PARCEL_WEIGHT, total)


def items_summary(items: Iterable[OrderItem]) -> str:
    return ITEMS_SEPARATOR.join(f"{item.name} × {item.quantity}" for item in items)


def subtotal_of(items: Iterable[OrderItem]) -> Money:
    result = Money.zero()
    for item in items:
        result = result + item.line_total
    return result.rounded()


@dataclass(frozen=True)
class OrderRequest:
    """The single payload a checkout attempt submits.

    Use ``OrderRequest.create()``; it enforces presence of every required
    field and the subtotal / total arithmetic.  Phones are kept as typed
    here and normalized by the submission pipeline.
    """

    email: str
    full_name: str
    phone: str
    address: str
    geography: GeographySelection
    items: tuple[OrderItem, ...]
    subtotal: Money
    shipping: Money
    total: Money
    secondary_phone: str | None = None

    @staticmethod
    def create(
        email: str | None,
        full_name: str | None,
        phone: str | None,
        address: str | None,
        geography: GeographySelection,
        items: list[OrderItem],
        subtotal: Money,
        total: Money,
        shipping: Money | None = None,
        secondary_phone: str | None = None,
    ) -> OrderRequest:
        """Build a request, enforcing all presence and arithmetic rules."""
        required = {
            "email": email,
            "full_name": full_name,
            "phone": phone,
            "address": address,
        }
        for name, value in required.items():
            if not value or not str(value).strip():
                raise ValidationError(f"Missing required field: {name}", field=name)

        geography.require_route()

        if not items:
            raise ValidationError("Order must contain at least one item", field="items")

        expected = subtotal_of(items)
        if abs(expected.amount - subtotal.rounded().amount) > CENT:
            raise ValidationError(
                f"Subtotal {subtotal} does not match items ({expected})",
                field="subtotal",
            )

        if shipping is None:
            if total.amount < subtotal.amount:
                raise ValidationError(
                    f"Total {total} is below subtotal {subtotal}", field="total"
                )
            shipping = total - subtotal
        elif abs((subtotal + shipping).rounded().amount - total.rounded().amount) > CENT:
            raise ValidationError(
                f"Total {total} must equal subtotal plus shipping", field="total"
            )

        return OrderRequest(
            email=email.strip(),  # type: ignore[union-attr]
            full_name=full_name.strip(),  # type: ignore[union-attr]
            phone=phone.strip(),  # type: ignore[union-attr]
            address=address.strip(),  # type: ignore[union-attr]
            geography=geography,
            items=tuple(items),
            subtotal=subtotal.rounded(),
            shipping=shipping.rounded(),
            total=total.rounded(),
            secondary_phone=(secondary_phone or "").strip() or None,
        )

    @property
    def parcel_weight(self) -> Decimal:
        return parcel_weight(item.quantity.value for item in self.items)

    @property
    def items_summary(self) -> str:
        return items_summary(self.items)


class OrderIdGenerator:
    """Produces ``<PREFIX>-<YYYYMMDD>-<4 base36 chars>`` identifiers.

    Human readable and mostly unique.  Two ids generated on the same day
    differ only in the random suffix, so collisions are possible.
    """

    def __init__(
        self,
        prefix: str = DEFAULT_ORDER_ID_PREFIX,
        clock: Callable[[], datetime] | None = None,
        choice: Callable[[str], str] = secrets.choice,
    ) -> None:
        self._prefix = prefix
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._choice = choice

    def now(self) -> datetime:
        return self._clock()

    def generate(self, at: datetime | None = None) -> str:
        moment = at or self._clock()
        suffix = "".join(self._choice(_BASE36) for _ in range(4))
        return f"{self._prefix}-{moment.strftime('%Y%m%d')}-{suffix}"


@dataclass(frozen=True)
class OrderRecord:
    """The flat, write-once row the audit sink stores."""

    order_id: str
    placed_at: datetime
    request: OrderRequest
    phone: str
    secondary_phone: str
    consignment_id: str | None = None
    status: str = NEW_ORDER_STATUS

    @staticmethod
    def from_request(
        request: OrderRequest,
        order_id: str,
        placed_at: datetime,
        phone: str,
        consignment_id: str | None,
    ) -> OrderRecord:
        secondary = normalize_phone(request.secondary_phone) if request.secondary_phone else ""
        return OrderRecord(
            order_id=order_id,
            placed_at=placed_at,
            request=request,
            phone=phone,
            secondary_phone=secondary,
            consignment_id=consignment_id,
        )

    def to_row(self) -> dict:
        geo = self.request.geography
        return {
            "orderId": self.order_id,
            "date": self.placed_at.isoformat(),
            "email": self.request.email,
            "fullName": self.request.full_name,
            "phone": self.phone,
            "secondaryPhone": self.secondary_phone,
            "address": self.request.address,
            "cityId": geo.city_id,
            "city": geo.city_name,
            "zoneId": geo.zone_id,
            "zone": geo.zone_name,
            "areaId": geo.area_id,
            "area": geo.area_name or "",
            "items": self.request.items_summary,
            "subtotal": self.request.subtotal.to_float(),
            "shipping": self.request.shipping.to_float(),
            "total": self.request.total.to_float(),
            "status": self.status,
            "pathaoConsignmentId": self.consignment_id or "",
        }
