"""Tests for the HTTP audit sink."""

import json
from datetime import datetime, timezone

import httpx
import pytest

from codstore.domain.exceptions import AuditSinkError
from codstore.domain.model.order import OrderRecord
from codstore.infrastructure.audit.http_audit_sink import HttpAuditSink
from tests.fakes import make_order_request

SINK_URL = "https://script.test/exec"


def _record() -> OrderRecord:
    return OrderRecord.from_request(
        request=make_order_request(),
        order_id="CR-20260305-AB12",
        placed_at=datetime(2026, 3, 5, 14, 30, tzinfo=timezone.utc),
        phone="01712345678",
        consignment_id="DL121224ABCD",
    )


class TestHttpAuditSink:

    def test_posts_row(self):
        received = []

        def handler(request):
            received.append(json.loads(request.content))
            return httpx.Response(200, json={"success": True})

        HttpAuditSink(SINK_URL, transport=httpx.MockTransport(handler)).append(_record())
        assert received[0]["orderId"] == "CR-20260305-AB12"
        assert received[0]["pathaoConsignmentId"] == "DL121224ABCD"
        assert received[0]["status"] == "New"

    def test_follows_redirect(self):
        def handler(request):
            if request.url.path == "/exec":
                return httpx.Response(302, headers={"Location": "https://script.test/echo"})
            return httpx.Response(200, text="ok")

        HttpAuditSink(SINK_URL, transport=httpx.MockTransport(handler)).append(_record())

    def test_non_2xx_fails(self):
        sink = HttpAuditSink(SINK_URL, transport=httpx.MockTransport(lambda r: httpx.Response(500)))
        with pytest.raises(AuditSinkError, match="Failed to save order to sheet"):
            sink.append(_record())

    def test_unreachable_fails(self):
        def handler(request):
            raise httpx.ConnectError("connection refused")

        sink = HttpAuditSink(SINK_URL, transport=httpx.MockTransport(handler))
        with pytest.raises(AuditSinkError):
            sink.append(_record())
