"""Tests for the city / zone / area listing use cases and order history view."""

import pytest

from codstore.application.browse_geography import (
    ListAreasHandler,
    ListCitiesHandler,
    ListZonesHandler,
)
from codstore.application.show_orders import ShowOrderHistoryHandler
from codstore.domain.exceptions import RouteResolutionError, ValidationError
from codstore.domain.model.order_history import OrderHistory, PlacedOrder
from tests.fakes import FakeDeliveryProvider, FakeOrderHistoryRepository


class TestListings:

    def test_cities(self):
        cities = ListCitiesHandler(FakeDeliveryProvider()).handle()
        assert [c.city_name for c in cities] == ["Dhaka", "Chattogram"]

    def test_zones(self):
        zones = ListZonesHandler(FakeDeliveryProvider()).handle(1)
        assert zones[0].zone_name == "Banani"

    def test_areas(self):
        areas = ListAreasHandler(FakeDeliveryProvider()).handle(52)
        assert areas[0].home_delivery_available is True

    def test_zone_requires_city_id(self):
        with pytest.raises(ValidationError, match="city_id is required"):
            ListZonesHandler(FakeDeliveryProvider()).handle(None)

    def test_area_rejects_bad_zone_id(self):
        with pytest.raises(ValidationError, match="Invalid zone_id"):
            ListAreasHandler(FakeDeliveryProvider()).handle(0)

    def test_not_configured(self):
        with pytest.raises(RouteResolutionError, match="not configured"):
            ListCitiesHandler(None).handle()

    def test_upstream_failure(self):
        provider = FakeDeliveryProvider(raise_on_lookup=RouteResolutionError("Could not load cities: 503"))
        with pytest.raises(RouteResolutionError, match="Could not load cities"):
            ListCitiesHandler(provider).handle()


class TestShowOrderHistory:

    def test_lists_newest_first(self):
        repo = FakeOrderHistoryRepository()
        history = OrderHistory()
        history.record(PlacedOrder("CR-1", "2026-03-04T10:00:00+00:00", total=500.0))
        history.record(
            PlacedOrder(
                "CR-2",
                "2026-03-05T10:00:00+00:00",
                consignment_id="DL9",
                order_phone="01712345678",
                total=969.7,
            )
        )
        repo.save(history)

        dtos = ShowOrderHistoryHandler(repo).handle()
        assert [d.order_id for d in dtos] == ["CR-2", "CR-1"]
        assert dtos[0].total == "Tk 969.70"
        assert dtos[0].tracking_url.endswith("consignment_id=DL9&phone=01712345678")
        assert dtos[1].tracking_url is None

    def test_empty(self):
        assert ShowOrderHistoryHandler(FakeOrderHistoryRepository()).handle() == []
