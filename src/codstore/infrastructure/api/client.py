"""OrderSubmitter that POSTs to a running storefront's ``/orders`` endpoint."""

from __future__ import annotations

import httpx
import structlog

from codstore.domain.exceptions import AuditSinkError, DomainException, ValidationError
from codstore.domain.gateway.order_submitter import OrderSubmitter, SubmissionReceipt
from codstore.domain.model.order import OrderRequest

logger = structlog.get_logger(__name__)


def order_payload(request: OrderRequest) -> dict:
    """The JSON body ``OrderRequestSchema`` accepts."""
    geo = request.geography
    payload = {
        "email": request.email,
        "fullName": request.full_name,
        "phone": request.phone,
        "address": request.address,
        "city_id": geo.city_id,
        "zone_id": geo.zone_id,
        "area_id": geo.area_id,
        "city_name": geo.city_name,
        "zone_name": geo.zone_name,
        "area_name": geo.area_name,
        "items": [
            {
                "id": item.id,
                "name": item.name,
                "price": item.price.to_float(),
                "quantity": item.quantity.value,
            }
            for item in request.items
        ],
        "subtotal": request.subtotal.to_float(),
        "shipping": request.shipping.to_float(),
        "total": request.total.to_float(),
    }
    if request.secondary_phone:
        payload["secondaryPhone"] = request.secondary_phone
    return payload


class HttpOrderSubmitter(OrderSubmitter):

    def __init__(
        self,
        base_url: str,
        timeout: float = 15.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._http = httpx.Client(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    def close(self) -> None:
        self._http.close()

    def submit(self, request: OrderRequest) -> SubmissionReceipt:
        try:
            response = self._http.post("/orders", json=order_payload(request))
        except httpx.HTTPError as exc:
            logger.error("Storefront unreachable", error=str(exc))
            raise DomainException(f"Could not reach the storefront: {exc}") from exc

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        error = body.get("error")

        if response.status_code == 400:
            raise ValidationError(error or "The storefront rejected the order")
        if response.status_code == 502:
            raise AuditSinkError(error or "The order could not be recorded; please retry")
        if not response.is_success or not body.get("success"):
            raise DomainException(error or f"Order failed (HTTP {response.status_code})")

        return SubmissionReceipt(
            order_id=body["orderId"],
            consignment_id=body.get("consignmentId"),
            pathao_error=body.get("pathaoError"),
        )
