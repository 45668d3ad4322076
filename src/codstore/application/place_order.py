"""Application service: client-side checkout.

Builds an OrderRequest from the persisted cart, the chosen route and
its quote, hands it to the storefront, and on success records the
order in the local history and empties the cart.  When submission
fails the cart and history are left exactly as they were.
"""

from __future__ import annotations

from datetime import datetime, timezone

import structlog

from codstore.application.dto import CheckoutTotalsDTO, ContactDetails, PlacedOrderDTO
from codstore.application.show_orders import to_dto
from codstore.domain.exceptions import ValidationError
from codstore.domain.gateway.order_submitter import OrderSubmitter
from codstore.domain.model.cart import Cart
from codstore.domain.model.geography import DeliveryQuote, GeographySelection
from codstore.domain.model.order import OrderRequest
from codstore.domain.model.order_history import PlacedOrder
from codstore.domain.model.phone import normalize_phone
from codstore.domain.model.value_objects import Money
from codstore.domain.repository.cart_repository import CartRepository
from codstore.domain.repository.order_history_repository import OrderHistoryRepository
from codstore.domain.service.fee_reconciliation import FeeBreakdown, reconcile

logger = structlog.get_logger(__name__)


def price_cart(cart: Cart, quote: DeliveryQuote | None) -> FeeBreakdown:
    return reconcile(cart.subtotal, quote.price if quote else None)


def totals_dto(fees: FeeBreakdown) -> CheckoutTotalsDTO:
    return CheckoutTotalsDTO(
        subtotal=str(fees.subtotal),
        shipping=str(fees.shipping) if fees.shipping is not None else None,
        total=str(fees.total),
        warning=fees.warning,
    )


class PlaceOrderHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        history_repo: OrderHistoryRepository,
        submitter: OrderSubmitter,
    ) -> None:
        self._cart_repo = cart_repo
        self._history_repo = history_repo
        self._submitter = submitter

    def totals(self, quote: DeliveryQuote | None) -> CheckoutTotalsDTO:
        return totals_dto(price_cart(self._cart_repo.load(), quote))

    def handle(
        self,
        contact: ContactDetails,
        geography: GeographySelection,
        quote: DeliveryQuote | None,
    ) -> PlacedOrderDTO:
        """Submit the cart as an order.

        Steps:
        1. Price the cart against the route quote (unresolved is allowed).
        2. Build the OrderRequest; the factory validates every field.
        3. Submit; any failure propagates and nothing local changes.
        4. Record the PlacedOrder, newest first, then clear the cart.
        """
        cart = self._cart_repo.load()
        if cart.is_empty:
            raise ValidationError("Your cart is empty", field="items")

        fees = price_cart(cart, quote)
        if not fees.is_resolved:
            logger.warning("Submitting without a delivery quote", warning=fees.warning)

        request = OrderRequest.create(
            email=contact.email,
            full_name=contact.full_name,
            phone=contact.phone,
            secondary_phone=contact.secondary_phone,
            address=contact.address,
            geography=geography,
            items=cart.to_order_items(),
            subtotal=fees.subtotal,
            shipping=fees.shipping or Money.zero(),
            total=fees.total,
        )

        receipt = self._submitter.submit(request)

        placed = PlacedOrder(
            order_id=receipt.order_id,
            date=datetime.now(timezone.utc).isoformat(),
            consignment_id=receipt.consignment_id,
            order_phone=normalize_phone(request.phone),
            total=fees.total.to_float(),
            items_summary=request.items_summary,
        )
        history = self._history_repo.load()
        history.record(placed)
        self._history_repo.save(history)

        cart.clear()
        self._cart_repo.save(cart)

        return to_dto(placed, pathao_error=receipt.pathao_error)
