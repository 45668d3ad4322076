"""FastAPI dependency providers.

Tests replace these through ``app.dependency_overrides``.
"""

from __future__ import annotations

import secrets

from fastapi import Depends, Header, HTTPException

from codstore.application.browse_geography import (
    ListAreasHandler,
    ListCitiesHandler,
    ListZonesHandler,
)
from codstore.application.quote_delivery import QuoteDeliveryHandler
from codstore.application.submit_order import SubmitOrderHandler
from codstore.domain.gateway.delivery_provider import DeliveryProvider
from codstore.infrastructure import bootstrap
from codstore.infrastructure.config import Settings


def get_settings() -> Settings:
    return bootstrap.settings()


def get_delivery_provider(settings: Settings = Depends(get_settings)) -> DeliveryProvider | None:
    return bootstrap.delivery_provider(settings)


def get_submit_order_handler(settings: Settings = Depends(get_settings)) -> SubmitOrderHandler:
    return bootstrap.submit_order_handler(settings)


def get_list_cities_handler(
    provider: DeliveryProvider | None = Depends(get_delivery_provider),
) -> ListCitiesHandler:
    return ListCitiesHandler(provider)


def get_list_zones_handler(
    provider: DeliveryProvider | None = Depends(get_delivery_provider),
) -> ListZonesHandler:
    return ListZonesHandler(provider)


def get_list_areas_handler(
    provider: DeliveryProvider | None = Depends(get_delivery_provider),
) -> ListAreasHandler:
    return ListAreasHandler(provider)


def get_quote_delivery_handler(
    provider: DeliveryProvider | None = Depends(get_delivery_provider),
) -> QuoteDeliveryHandler:
    return QuoteDeliveryHandler(provider)


def require_admin(
    settings: Settings = Depends(get_settings),
    x_admin_key: str | None = Header(default=None),
    authorization: str | None = Header(default=None),
) -> None:
    """Single shared admin secret, via ``X-Admin-Key`` or a Bearer token."""
    expected = settings.admin_key
    supplied = x_admin_key
    if supplied is None and authorization and authorization.startswith("Bearer "):
        supplied = authorization[len("Bearer "):]
    if not expected or supplied is None or not secrets.compare_digest(supplied.encode(), expected.encode()):
        raise HTTPException(
            status_code=401,
            detail="Unauthorized. Authentication required.",
            headers={"WWW-Authenticate": "Bearer"},
        )
