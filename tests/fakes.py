"""In-memory fakes for testing.

These implement the same abstract interfaces as the JSON repositories
and the HTTP adapters but keep everything in memory. No file I/O, no
network.
"""

from __future__ import annotations

from decimal import Decimal

from codstore.domain.exceptions import AuditSinkError
from codstore.domain.gateway.audit_sink import AuditSink
from codstore.domain.gateway.delivery_provider import (
    ConsignmentCreated,
    ConsignmentRequest,
    ConsignmentResult,
    DeliveryProvider,
)
from codstore.domain.gateway.order_submitter import OrderSubmitter, SubmissionReceipt
from codstore.domain.model.cart import Cart
from codstore.domain.model.geography import Area, City, DeliveryQuote, GeographySelection, Zone
from codstore.domain.model.order import OrderItem, OrderRecord, OrderRequest
from codstore.domain.model.order_history import OrderHistory
from codstore.domain.model.value_objects import Money, Quantity
from codstore.domain.repository.cart_repository import CartRepository
from codstore.domain.repository.order_history_repository import OrderHistoryRepository


class FakeCartRepository(CartRepository):

    def __init__(self, cart: Cart | None = None) -> None:
        self._lines = list(cart.lines) if cart else []
        self.save_count = 0

    def load(self) -> Cart:
        return Cart(list(self._lines))

    def save(self, cart: Cart) -> None:
        self._lines = list(cart.lines)
        self.save_count += 1


class FakeOrderHistoryRepository(OrderHistoryRepository):

    def __init__(self) -> None:
        self._orders = []

    def load(self) -> OrderHistory:
        return OrderHistory(list(self._orders))

    def save(self, history: OrderHistory) -> None:
        self._orders = list(history.orders)


class FakeDeliveryProvider(DeliveryProvider):
    """Answers from canned data and records every consignment request.

    Set ``consignment_result`` to a ConsignmentFailed, or ``raise_on_create``
    / ``raise_on_lookup`` to an exception, to simulate courier trouble.
    """

    def __init__(
        self,
        price: str = "60",
        cod_enabled: bool = True,
        consignment_result: ConsignmentResult | None = None,
        raise_on_create: Exception | None = None,
        raise_on_lookup: Exception | None = None,
    ) -> None:
        self.price = price
        self.cod_enabled = cod_enabled
        self.consignment_result = consignment_result or ConsignmentCreated(consignment_id="DL121224ABCD")
        self.raise_on_create = raise_on_create
        self.raise_on_lookup = raise_on_lookup
        self.consignments: list[ConsignmentRequest] = []
        self.quotes: list[tuple[int, int, Decimal]] = []

    def list_cities(self) -> list[City]:
        self._maybe_fail()
        return [City(1, "Dhaka"), City(2, "Chattogram")]

    def list_zones(self, city_id: int) -> list[Zone]:
        self._maybe_fail()
        return [Zone(52, "Banani"), Zone(53, "Gulshan")] if city_id == 1 else []

    def list_areas(self, zone_id: int) -> list[Area]:
        self._maybe_fail()
        return [Area(700, "Road 11", home_delivery_available=True, pickup_available=False)]

    def quote_price(self, city_id: int, zone_id: int, weight: Decimal) -> DeliveryQuote:
        self._maybe_fail()
        self.quotes.append((city_id, zone_id, weight))
        return DeliveryQuote(price=Money.of(self.price), cod_enabled=self.cod_enabled)

    def create_consignment(self, request: ConsignmentRequest) -> ConsignmentResult:
        self.consignments.append(request)
        if self.raise_on_create is not None:
            raise self.raise_on_create
        return self.consignment_result

    def _maybe_fail(self) -> None:
        if self.raise_on_lookup is not None:
            raise self.raise_on_lookup


class FakeAuditSink(AuditSink):

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.records: list[OrderRecord] = []

    @property
    def rows(self) -> list[dict]:
        return [record.to_row() for record in self.records]

    def append(self, record: OrderRecord) -> None:
        if self.fail:
            raise AuditSinkError("Failed to save order to sheet")
        self.records.append(record)


class FakeOrderSubmitter(OrderSubmitter):

    def __init__(
        self,
        receipt: SubmissionReceipt | None = None,
        error: Exception | None = None,
    ) -> None:
        self.receipt = receipt or SubmissionReceipt(order_id="CR-20260101-AB12", consignment_id="DL1")
        self.error = error
        self.requests: list[OrderRequest] = []

    def submit(self, request: OrderRequest) -> SubmissionReceipt:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.receipt


# --- Builders -----------------------------------------------------------------


def dhaka_banani(area: bool = False) -> GeographySelection:
    return GeographySelection(
        city_id=1,
        city_name="Dhaka",
        zone_id=52,
        zone_name="Banani",
        area_id=700 if area else None,
        area_name="Road 11" if area else None,
    )


def make_order_request(**overrides) -> OrderRequest:
    """A valid 2 x Tk 450 order to Banani, Dhaka; override any create() argument."""
    fields = dict(
        email="buyer@example.com",
        full_name="Rahim Uddin",
        phone="+880 1712-345678",
        address="House 12, Road 5, Block C",
        geography=dhaka_banani(),
        items=[OrderItem("chili-oil", "Chili Oil", Money.of("450"), Quantity(2))],
        subtotal=Money.of("900"),
        shipping=Money.of("69.70"),
        total=Money.of("969.70"),
    )
    fields.update(overrides)
    return OrderRequest.create(**fields)
