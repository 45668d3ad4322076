"""Pathao Courier merchant API client.

Implements the DeliveryProvider port over httpx.  Every call is
authenticated with a password-grant access token; the token is reused
until shortly before it expires.

Responses share one envelope: ``{"type", "code", "message", "data"}``.
A non-2xx status or ``type != "success"`` is an error.
"""

from __future__ import annotations

import time
from decimal import Decimal
from typing import Any

import httpx
import structlog

from codstore.domain.exceptions import RouteResolutionError
from codstore.domain.gateway.delivery_provider import (
    DELIVERY_TYPE_NORMAL,
    ITEM_TYPE_PARCEL,
    ConsignmentCreated,
    ConsignmentFailed,
    ConsignmentRequest,
    ConsignmentResult,
    DeliveryProvider,
)
from codstore.domain.model.geography import Area, City, DeliveryQuote, Zone
from codstore.domain.model.value_objects import Money

logger = structlog.get_logger(__name__)

TOKEN_PATH = "/aladdin/api/v1/issue-token"
ORDERS_PATH = "/aladdin/api/v1/orders"
PRICE_PLAN_PATH = "/aladdin/api/v1/merchant/price-plan"
CITY_LIST_PATH = "/aladdin/api/v1/city-list"
ZONE_LIST_PATH = "/aladdin/api/v1/cities/{city_id}/zone-list"
AREA_LIST_PATH = "/aladdin/api/v1/zones/{zone_id}/area-list"

_TOKEN_EXPIRY_MARGIN = 60.0
_SNIPPET = 200


class PathaoApiError(Exception):
    """The courier answered, but not with a usable success envelope."""


class PathaoClient(DeliveryProvider):

    def __init__(
        self,
        base_url: str,
        store_id: int,
        client_id: str,
        client_secret: str,
        username: str,
        password: str,
        timeout: float = 15.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._store_id = store_id
        self._credentials = {
            "client_id": client_id,
            "client_secret": client_secret,
            "grant_type": "password",
            "username": username,
            "password": password,
        }
        self._http = httpx.Client(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
            headers={"Content-Type": "application/json"},
            transport=transport,
        )
        self._token: str | None = None
        self._token_expires_at = 0.0

    def close(self) -> None:
        self._http.close()

    # --- Authentication -------------------------------------------------------

    def access_token(self) -> str:
        if self._token and time.monotonic() < self._token_expires_at:
            return self._token

        response = self._http.post(TOKEN_PATH, json=self._credentials)
        if not response.is_success:
            raise PathaoApiError(
                f"Pathao token failed ({response.status_code}): {_error_text(response)}"
            )
        try:
            body = response.json()
        except ValueError as exc:
            raise PathaoApiError("Pathao token response was not valid JSON") from exc

        token = body.get("access_token") if isinstance(body, dict) else None
        if not token:
            raise PathaoApiError("Pathao token response missing access_token")

        expires_in = float(body.get("expires_in") or 0)
        self._token = token
        self._token_expires_at = time.monotonic() + max(0.0, expires_in - _TOKEN_EXPIRY_MARGIN)
        return token

    # --- DeliveryProvider interface -------------------------------------------

    def list_cities(self) -> list[City]:
        rows = self._list(CITY_LIST_PATH, "cities")
        return [City(city_id=int(r["city_id"]), city_name=r["city_name"]) for r in rows]

    def list_zones(self, city_id: int) -> list[Zone]:
        rows = self._list(ZONE_LIST_PATH.format(city_id=city_id), "zones")
        return [Zone(zone_id=int(r["zone_id"]), zone_name=r["zone_name"]) for r in rows]

    def list_areas(self, zone_id: int) -> list[Area]:
        rows = self._list(AREA_LIST_PATH.format(zone_id=zone_id), "areas")
        return [
            Area(
                area_id=int(r["area_id"]),
                area_name=r["area_name"],
                home_delivery_available=r.get("home_delivery_available"),
                pickup_available=r.get("pickup_available"),
            )
            for r in rows
        ]

    def quote_price(self, city_id: int, zone_id: int, weight: Decimal) -> DeliveryQuote:
        body = {
            "store_id": self._store_id,
            "item_type": ITEM_TYPE_PARCEL,
            "delivery_type": DELIVERY_TYPE_NORMAL,
            "item_weight": float(weight),
            "recipient_city": city_id,
            "recipient_zone": zone_id,
        }
        try:
            envelope = self._call("POST", PRICE_PLAN_PATH, "Pathao price", json=body)
        except (PathaoApiError, httpx.HTTPError) as exc:
            logger.warning("Pathao price lookup failed", city_id=city_id, zone_id=zone_id, error=str(exc))
            raise RouteResolutionError(str(exc)) from exc

        data = envelope.get("data")
        if not isinstance(data, dict):
            raise RouteResolutionError("Pathao price response missing data")

        price = data.get("final_price")
        if price is None:
            price = data.get("price") or 0
        return DeliveryQuote(price=Money.of(price), cod_enabled=bool(data.get("cod_enabled")))

    def create_consignment(self, request: ConsignmentRequest) -> ConsignmentResult:
        try:
            envelope = self._call(
                "POST", ORDERS_PATH, "Pathao create order", json=request.to_payload()
            )
        except PathaoApiError as exc:
            return ConsignmentFailed(error=str(exc))
        except httpx.HTTPError as exc:
            return ConsignmentFailed(error=f"Pathao create order failed: {exc}")

        if envelope.get("code") != 200:
            return ConsignmentFailed(
                error=envelope.get("message") or "Pathao order creation returned non-success"
            )

        data = envelope.get("data") or {}
        consignment_id = data.get("consignment_id")
        if not consignment_id:
            return ConsignmentFailed(error="Pathao response missing consignment_id")
        return ConsignmentCreated(
            consignment_id=str(consignment_id),
            order_status=data.get("order_status"),
            delivery_fee=data.get("delivery_fee"),
        )

    # --- Internal helpers -----------------------------------------------------

    def _list(self, path: str, what: str) -> list[dict]:
        try:
            envelope = self._call("GET", path, "Pathao API")
        except (PathaoApiError, httpx.HTTPError) as exc:
            logger.warning("Pathao listing failed", what=what, error=str(exc))
            raise RouteResolutionError(f"Could not load {what}: {exc}") from exc

        payload = envelope.get("data")
        rows = payload.get("data") if isinstance(payload, dict) else None
        return rows if isinstance(rows, list) else []

    def _call(self, method: str, path: str, label: str, json: Any = None) -> dict:
        token = self.access_token()
        response = self._http.request(
            method, path, json=json, headers={"Authorization": f"Bearer {token}"}
        )
        try:
            envelope = response.json()
        except ValueError as exc:
            raise PathaoApiError(
                f"{label} failed ({response.status_code}): {response.text[:_SNIPPET]}"
            ) from exc
        if not isinstance(envelope, dict):
            raise PathaoApiError(f"{label} failed ({response.status_code}): unexpected body")

        if not response.is_success:
            message = (
                envelope.get("message")
                or envelope.get("type")
                or response.reason_phrase
                or response.text[:_SNIPPET]
            )
            raise PathaoApiError(f"{label} failed ({response.status_code}): {message}")
        if envelope.get("type") != "success":
            raise PathaoApiError(envelope.get("message") or f"{label} failed ({response.status_code})")
        return envelope


def _error_text(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict):
        return body.get("message") or body.get("error") or response.text
    return response.text
