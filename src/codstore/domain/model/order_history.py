"""Local order history: the buyer's own list of placed orders.

This list is advisory.  It is written on every successful submission,
newest first, and is never pruned by the system.  The audit sink, not
this list, is the record of sales.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import urlencode

from codstore.domain.model.phone import NATIONAL_LENGTH, normalize_phone

TRACKING_BASE_URL = "https://merchant.pathao.com/tracking"


@dataclass(frozen=True)
class PlacedOrder:

    order_id: str
    date: str  # ISO-8601
    consignment_id: str | None = None
    order_phone: str | None = None
    total: float | None = None
    items_summary: str | None = None

    @property
    def tracking_url(self) -> str | None:
        """Courier tracking link, or None without both consignment and phone."""
        if not self.consignment_id or not self.order_phone:
            return None
        phone = normalize_phone(self.order_phone)
        if len(phone) != NATIONAL_LENGTH:
            return None
        query = urlencode({"consignment_id": self.consignment_id, "phone": phone})
        return f"{TRACKING_BASE_URL}?{query}"


@dataclass
class OrderHistory:

    _orders: list[PlacedOrder] = field(default_factory=list)

    def record(self, order: PlacedOrder) -> None:
        self._orders.insert(0, order)

    @property
    def orders(self) -> tuple[PlacedOrder, ...]:
        return tuple(self._orders)

    @property
    def count(self) -> int:
        return len(self._orders)
