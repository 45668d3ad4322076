"""Integration tests for the SubmitOrder pipeline.

Uses an in-memory courier and audit sink; no network.
"""

from datetime import datetime, timezone

import pytest

from codstore.application.submit_order import SubmitOrderHandler
from codstore.domain.exceptions import AuditSinkError, ValidationError
from codstore.domain.gateway.delivery_provider import ConsignmentFailed
from codstore.domain.model.order import OrderIdGenerator
from tests.fakes import FakeAuditSink, FakeDeliveryProvider, make_order_request

PLACED_AT = datetime(2026, 3, 5, 14, 30, 0, tzinfo=timezone.utc)


def _setup(
    provider: FakeDeliveryProvider | None = None,
    sink: FakeAuditSink | None = None,
    store_id: int | None = 12345,
    letters: str = "AB12" * 4,
) -> SubmitOrderHandler:
    suffix = iter(letters)
    ids = OrderIdGenerator(clock=lambda: PLACED_AT, choice=lambda alphabet: next(suffix))
    return SubmitOrderHandler(
        delivery_provider=provider,
        audit_sink=sink,
        store_id=store_id,
        id_generator=ids,
    )


class TestSubmitWithCourier:

    def test_consignment_created_and_logged(self):
        provider, sink = FakeDeliveryProvider(), FakeAuditSink()
        receipt = _setup(provider, sink).handle(make_order_request())

        assert receipt.order_id == "CR-20260305-AB12"
        assert receipt.consignment_id == "DL121224ABCD"
        assert receipt.pathao_error is None
        assert sink.rows[0]["pathaoConsignmentId"] == "DL121224ABCD"
        assert sink.rows[0]["orderId"] == receipt.order_id

    def test_consignment_uses_normalized_phone(self):
        provider = FakeDeliveryProvider()
        _setup(provider, FakeAuditSink()).handle(make_order_request(phone="+880 1712-345678"))
        assert provider.consignments[0].recipient_phone == "01712345678"
        assert provider.consignments[0].merchant_order_id == "CR-20260305-AB12"

    def test_audit_row_phone_normalized(self):
        sink = FakeAuditSink()
        _setup(FakeDeliveryProvider(), sink).handle(make_order_request(phone="1712345678"))
        assert sink.rows[0]["phone"] == "01712345678"

    def test_invalid_secondary_phone_dropped_from_consignment(self):
        provider = FakeDeliveryProvider()
        _setup(provider, FakeAuditSink()).handle(make_order_request(secondary_phone="12345"))
        assert provider.consignments[0].recipient_secondary_phone is None
        assert "recipient_secondary_phone" not in provider.consignments[0].to_payload()

    def test_valid_secondary_phone_sent(self):
        provider = FakeDeliveryProvider()
        _setup(provider, FakeAuditSink()).handle(make_order_request(secondary_phone="+8801812345678"))
        assert provider.consignments[0].recipient_secondary_phone == "01812345678"


class TestCourierFailureContinues:

    def test_failed_result_becomes_pathao_error(self):
        provider = FakeDeliveryProvider(
            consignment_result=ConsignmentFailed("Pathao create order failed (422): invalid zone")
        )
        sink = FakeAuditSink()
        receipt = _setup(provider, sink).handle(make_order_request())

        assert receipt.consignment_id is None
        assert receipt.pathao_error == "Pathao create order failed (422): invalid zone"
        assert len(sink.records) == 1
        assert sink.rows[0]["pathaoConsignmentId"] == ""

    def test_exception_becomes_pathao_error(self):
        provider = FakeDeliveryProvider(raise_on_create=RuntimeError("connection reset"))
        sink = FakeAuditSink()
        receipt = _setup(provider, sink).handle(make_order_request())
        assert receipt.pathao_error == "connection reset"
        assert len(sink.records) == 1

    def test_address_too_long_skips_courier(self):
        provider, sink = FakeDeliveryProvider(), FakeAuditSink()
        receipt = _setup(provider, sink).handle(make_order_request(address="x" * 215))
        assert "Address length" in receipt.pathao_error
        assert provider.consignments == []
        assert len(sink.records) == 1


class TestWithoutCourier:

    def test_credentials_absent(self):
        sink = FakeAuditSink()
        receipt = _setup(provider=None, sink=sink).handle(make_order_request())
        assert receipt.consignment_id is None
        assert receipt.pathao_error is None
        assert len(sink.records) == 1

    def test_store_id_absent(self):
        provider = FakeDeliveryProvider()
        receipt = _setup(provider, FakeAuditSink(), store_id=None).handle(make_order_request())
        assert provider.consignments == []
        assert receipt.consignment_id is None

    def test_no_sink_still_places_order(self):
        receipt = _setup(provider=None, sink=None).handle(make_order_request())
        assert receipt.order_id.startswith("CR-20260305-")


class TestAborts:

    def test_invalid_phone_rejected_before_any_side_effect(self):
        provider, sink = FakeDeliveryProvider(), FakeAuditSink()
        with pytest.raises(ValidationError, match="phone: please enter a valid") as exc_info:
            _setup(provider, sink).handle(make_order_request(phone="12345"))
        assert exc_info.value.field == "phone"
        assert provider.consignments == []
        assert sink.records == []

    def test_audit_sink_failure_fails_the_order(self):
        provider = FakeDeliveryProvider()
        with pytest.raises(AuditSinkError, match="Failed to save order to sheet"):
            _setup(provider, FakeAuditSink(fail=True)).handle(make_order_request())
        # The consignment step already ran; it is not rolled back.
        assert len(provider.consignments) == 1


class TestOrderIds:

    def test_same_second_ids_differ_only_in_suffix(self):
        sink = FakeAuditSink()
        handler = _setup(sink=sink, letters="AAAABBBB")
        first = handler.handle(make_order_request()).order_id
        second = handler.handle(make_order_request()).order_id
        assert first == "CR-20260305-AAAA"
        assert second == "CR-20260305-BBBB"

    def test_record_timestamp(self):
        sink = FakeAuditSink()
        _setup(sink=sink).handle(make_order_request())
        assert sink.rows[0]["date"] == "2026-03-05T14:30:00+00:00"
