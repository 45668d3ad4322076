"""FastAPI routes: order submission and courier geography / pricing."""

from __future__ import annotations

from decimal import Decimal

import structlog
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from codstore.application.browse_geography import (
    ListAreasHandler,
    ListCitiesHandler,
    ListZonesHandler,
)
from codstore.application.quote_delivery import QuoteDeliveryHandler
from codstore.application.submit_order import SubmitOrderHandler
from codstore.domain.exceptions import DomainException, ValidationError
from codstore.infrastructure.api.dependencies import (
    get_list_areas_handler,
    get_list_cities_handler,
    get_list_zones_handler,
    get_quote_delivery_handler,
    get_settings,
    get_submit_order_handler,
    require_admin,
)
from codstore.infrastructure.api.schemas import DeliveryPriceRequest, OrderRequestSchema
from codstore.infrastructure.config import Settings

logger = structlog.get_logger(__name__)


def _parse_id(raw: str | None, name: str) -> int:
    if raw is None or not raw.strip():
        raise ValidationError(f"{name} is required", field=name)
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"Invalid {name}", field=name)


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("")
def submit_order(
    body: OrderRequestSchema,
    handler: SubmitOrderHandler = Depends(get_submit_order_handler),
) -> JSONResponse:
    try:
        receipt = handler.handle(body.to_domain())
    except DomainException:
        raise
    except Exception:
        logger.exception("Order API error")
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Failed to place order"},
        )

    content = {
        "success": True,
        "orderId": receipt.order_id,
        "consignmentId": receipt.consignment_id,
    }
    if receipt.pathao_error:
        content["pathaoError"] = receipt.pathao_error
    return JSONResponse(content=content)


# ---------------------------------------------------------------------------
# Delivery geography and pricing
# ---------------------------------------------------------------------------
delivery_router = APIRouter(prefix="/delivery", tags=["delivery"])


@delivery_router.get("/cities")
def list_cities(handler: ListCitiesHandler = Depends(get_list_cities_handler)) -> JSONResponse:
    cities = handler.handle()
    return JSONResponse(
        content={
            "success": True,
            "data": [{"city_id": c.city_id, "city_name": c.city_name} for c in cities],
        }
    )


@delivery_router.get("/zones")
def list_zones(
    city_id: str | None = Query(default=None),
    handler: ListZonesHandler = Depends(get_list_zones_handler),
) -> JSONResponse:
    zones = handler.handle(_parse_id(city_id, "city_id"))
    return JSONResponse(
        content={
            "success": True,
            "data": [{"zone_id": z.zone_id, "zone_name": z.zone_name} for z in zones],
        }
    )


@delivery_router.get("/areas")
def list_areas(
    zone_id: str | None = Query(default=None),
    handler: ListAreasHandler = Depends(get_list_areas_handler),
) -> JSONResponse:
    areas = handler.handle(_parse_id(zone_id, "zone_id"))
    return JSONResponse(
        content={
            "success": True,
            "data": [
                {
                    "area_id": a.area_id,
                    "area_name": a.area_name,
                    "home_delivery_available": a.home_delivery_available,
                    "pickup_available": a.pickup_available,
                }
                for a in areas
            ],
        }
    )


@delivery_router.post("/price")
def delivery_price(
    body: DeliveryPriceRequest,
    handler: QuoteDeliveryHandler = Depends(get_quote_delivery_handler),
) -> JSONResponse:
    if body.city_id is None or body.zone_id is None:
        raise ValidationError("city_id and zone_id are required", field="city_id")
    weight = Decimal(str(body.item_weight)) if body.item_weight is not None else None
    quote = handler.handle(body.city_id, body.zone_id, weight)
    return JSONResponse(
        content={
            "success": True,
            "price": quote.price.to_float(),
            "cod_enabled": quote.cod_enabled,
        }
    )


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------
admin_router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@admin_router.get("/config")
def integration_status(settings: Settings = Depends(get_settings)) -> JSONResponse:
    return JSONResponse(
        content={
            "success": True,
            "pathao_enabled": settings.pathao_enabled,
            "audit_sink_enabled": bool(settings.audit_sink_url),
            "order_id_prefix": settings.order_id_prefix,
        }
    )
