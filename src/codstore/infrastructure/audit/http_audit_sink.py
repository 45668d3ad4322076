"""Audit sink that POSTs each order row to a web endpoint.

The endpoint (a spreadsheet script in production) is the system of
record.  Anything but a 2xx answer means the order was not stored.
"""

from __future__ import annotations

import httpx
import structlog

from codstore.domain.exceptions import AuditSinkError
from codstore.domain.gateway.audit_sink import AuditSink
from codstore.domain.model.order import OrderRecord

logger = structlog.get_logger(__name__)

_SNIPPET = 200


class HttpAuditSink(AuditSink):

    def __init__(
        self,
        url: str,
        timeout: float = 15.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._url = url
        self._http = httpx.Client(
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
            transport=transport,
        )

    def close(self) -> None:
        self._http.close()

    def append(self, record: OrderRecord) -> None:
        try:
            response = self._http.post(self._url, json=record.to_row())
        except httpx.HTTPError as exc:
            logger.error("Audit sink unreachable", order_id=record.order_id, error=str(exc))
            raise AuditSinkError("Failed to save order to sheet") from exc

        if not response.is_success:
            logger.error(
                "Audit sink rejected order",
                order_id=record.order_id,
                status_code=response.status_code,
                body=response.text[:_SNIPPET],
            )
            raise AuditSinkError("Failed to save order to sheet")

        logger.info("Order recorded", order_id=record.order_id)
