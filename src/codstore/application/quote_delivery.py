"""Application service: route price lookups.

Prices are looked up interactively while the buyer picks a city and
zone, so an older lookup can finish after a newer one started.
``QuoteTracker`` keeps only the result for the most recent route.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from codstore.domain.exceptions import RouteResolutionError, ValidationError
from codstore.domain.gateway.delivery_provider import DeliveryProvider
from codstore.domain.model.geography import DeliveryQuote, GeographySelection, RouteKey
from codstore.domain.model.order import MIN_PARCEL_WEIGHT

logger = structlog.get_logger(__name__)


class QuoteDeliveryHandler:

    def __init__(self, provider: DeliveryProvider | None) -> None:
        self._provider = provider

    def handle(
        self,
        city_id: int | None,
        zone_id: int | None,
        weight: Decimal | None = None,
    ) -> DeliveryQuote:
        if city_id is None or zone_id is None:
            raise ValidationError("city_id and zone_id are required", field="city_id")
        if weight is None:
            weight = MIN_PARCEL_WEIGHT
        if weight <= 0:
            raise ValidationError("item_weight must be positive", field="item_weight")
        if self._provider is None:
            raise RouteResolutionError("Delivery pricing is not configured")
        return self._provider.quote_price(city_id, zone_id, weight)

    def quote_selection(
        self,
        geography: GeographySelection,
        weight: Decimal,
        tracker: QuoteTracker,
    ) -> DeliveryQuote | None:
        """Quote the selected route through *tracker*.

        Returns None when the price could not be resolved; ``tracker.error``
        then says why.
        """
        route = tracker.begin(geography.route_key(weight))
        if route is None:
            raise ValidationError("city_id and zone_id are required", field="city_id")
        try:
            quote = self.handle(route.city_id, route.zone_id, route.weight)
        except RouteResolutionError as exc:
            tracker.fail(route, exc)
            return None
        tracker.resolve(route, quote)
        return tracker.quote


class QuoteTracker:
    """Holds the quote for the latest requested route, dropping stale ones."""

    def __init__(self) -> None:
        self._route: RouteKey | None = None
        self._quote: DeliveryQuote | None = None
        self._error: RouteResolutionError | None = None

    def begin(self, route: RouteKey | None) -> RouteKey | None:
        """A new route was selected; forget the previous quote."""
        self._route = route
        self._quote = None
        self._error = None
        return route

    def resolve(self, route: RouteKey, quote: DeliveryQuote) -> bool:
        """Accept *quote* if *route* is still current; return whether it was kept."""
        if route != self._route:
            logger.debug("Discarding stale delivery quote", route=route)
            return False
        self._quote = quote
        return True

    def fail(self, route: RouteKey, error: RouteResolutionError) -> None:
        if route == self._route:
            logger.warning("Delivery quote unavailable", route=route, error=str(error))
            self._quote = None
            self._error = error

    @property
    def quote(self) -> DeliveryQuote | None:
        return self._quote

    @property
    def error(self) -> RouteResolutionError | None:
        """Why the current route has no quote, if its lookup failed."""
        return self._error
