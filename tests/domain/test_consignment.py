"""Unit tests for building the courier consignment request."""

from decimal import Decimal

import pytest

from codstore.domain.exceptions import DeliveryProviderError
from codstore.domain.gateway.delivery_provider import DELIVERY_TYPE_NORMAL, ITEM_TYPE_PARCEL
from codstore.domain.model.order import OrderItem
from codstore.domain.model.phone import PhoneNumber
from codstore.domain.model.value_objects import Money, Quantity
from codstore.domain.service.consignment import (
    build_consignment_request,
    check_address_length,
    format_weight,
    recipient_address,
)
from tests.fakes import dhaka_banani, make_order_request

ORDER_ID = "CR-20260305-AB12"


def _build(request=None, secondary=None):
    return build_consignment_request(
        request=request or make_order_request(),
        order_id=ORDER_ID,
        store_id=12345,
        phone=PhoneNumber("01712345678"),
        secondary_phone=secondary,
    )


class TestRecipientAddress:

    def test_appends_area_zone_city(self):
        req = make_order_request(geography=dhaka_banani(area=True))
        assert recipient_address(req) == "House 12, Road 5, Block C, Road 11, Banani, Dhaka"

    def test_without_area(self):
        assert recipient_address(make_order_request()) == "House 12, Road 5, Block C, Banani, Dhaka"


class TestAddressLength:

    @pytest.mark.parametrize("length", [10, 220])
    def test_bounds_accepted(self, length):
        check_address_length("x" * length)

    @pytest.mark.parametrize("length", [9, 221])
    def test_out_of_bounds_rejected(self, length):
        with pytest.raises(DeliveryProviderError, match=f"got {length}"):
            check_address_length("x" * length)

    def test_long_address_rejected_before_request(self):
        with pytest.raises(DeliveryProviderError):
            _build(make_order_request(address="x" * 215))


class TestFormatWeight:

    def test_whole_number(self):
        assert format_weight(Decimal("1.0")) == "1"
        assert format_weight(Decimal("10")) == "10"
        assert format_weight(Decimal("0.5")) == "0.5"


class TestBuildConsignmentRequest:

    def test_fields(self):
        c = _build()
        assert c.store_id == 12345
        assert c.merchant_order_id == ORDER_ID
        assert c.recipient_name == "Rahim Uddin"
        assert c.recipient_phone == "01712345678"
        assert c.recipient_city == 1
        assert c.recipient_zone == 52
        assert c.recipient_area is None
        assert c.item_weight == "1"
        assert c.item_description == "Chili Oil × 2"

    def test_amount_to_collect_rounds_half_up_to_whole_taka(self):
        assert _build().amount_to_collect == 970

    def test_payload_constants(self):
        payload = _build().to_payload()
        assert payload["delivery_type"] == DELIVERY_TYPE_NORMAL == 48
        assert payload["item_type"] == ITEM_TYPE_PARCEL == 2
        assert payload["item_quantity"] == 1

    def test_payload_omits_absent_area_and_secondary_phone(self):
        payload = _build().to_payload()
        assert "recipient_area" not in payload
        assert "recipient_secondary_phone" not in payload

    def test_payload_includes_area_and_secondary_phone(self):
        c = _build(
            make_order_request(geography=dhaka_banani(area=True)),
            secondary=PhoneNumber("01812345678"),
        )
        payload = c.to_payload()
        assert payload["recipient_area"] == 700
        assert payload["recipient_secondary_phone"] == "01812345678"

    def test_long_summary_falls_back_to_order_id(self):
        items = [OrderItem("x", "Very long product name " * 12, Money.of("10"), Quantity(1))]
        req = make_order_request(items=items, subtotal=Money.of("10"), shipping=None, total=Money.of("70"))
        assert _build(req).item_description == f"Order {ORDER_ID}"
