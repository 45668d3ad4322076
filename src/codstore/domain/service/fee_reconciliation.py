"""Domain service: courier fee reconciliation.

The courier keeps a fixed share of whatever cash it collects on
delivery and remits the rest.  The merchant still has to net the
goods subtotal plus the courier's delivery price, so the amount the
courier collects is grossed up:

    G = (subtotal + delivery_quote) / (1 - handling_rate)

rounded half-up to two decimals.  The buyer sees ``G - subtotal`` as
shipping and ``G`` as the total.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from codstore.domain.model.value_objects import Money

COURIER_HANDLING_RATE = Decimal("0.01")
UNRESOLVED_SHIPPING_WARNING = (
    "Delivery charge could not be calculated for this route; "
    "the total shown excludes shipping."
)


@dataclass(frozen=True)
class FeeBreakdown:
    """Buyer-facing totals for one cart and route.

    ``shipping`` and ``delivery_quote`` are None when the route price is
    unknown; ``total`` then falls back to the subtotal and ``warning``
    explains why.
    """

    subtotal: Money
    delivery_quote: Money | None
    shipping: Money | None
    total: Money
    warning: str | None = None

    @property
    def is_resolved(self) -> bool:
        return self.shipping is not None

    @property
    def amount_to_collect(self) -> Money:
        return self.total


def gross_up(net: Money, handling_rate: Decimal = COURIER_HANDLING_RATE) -> Money:
    """Amount to collect so that *net* remains after the courier's cut."""
    return Money(net.amount / (Decimal("1") - handling_rate), net.currency).rounded()


def reconcile(
    subtotal: Money,
    delivery_quote: Money | None,
    handling_rate: Decimal = COURIER_HANDLING_RATE,
) -> FeeBreakdown:
    subtotal = subtotal.rounded()
    if delivery_quote is None:
        return FeeBreakdown(
            subtotal=subtotal,
            delivery_quote=None,
            shipping=None,
            total=subtotal,
            warning=UNRESOLVED_SHIPPING_WARNING,
        )

    gross = gross_up(subtotal + delivery_quote, handling_rate)
    return FeeBreakdown(
        subtotal=subtotal,
        delivery_quote=delivery_quote,
        shipping=gross - subtotal,
        total=gross,
    )
