"""Storefront FastAPI application.

Usage:
    uvicorn codstore.infrastructure.api.app:app --host 0.0.0.0 --port 8000
or
    codstore serve
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from codstore.domain.exceptions import (
    AuditSinkError,
    DeliveryProviderError,
    DomainException,
    EntityNotFoundError,
    RouteResolutionError,
    ValidationError,
)
from codstore.infrastructure import bootstrap
from codstore.infrastructure.api.routes import admin_router, delivery_router, order_router
from codstore.infrastructure.logging import configure_logging

logger = structlog.get_logger(__name__)

# Outward status for each domain failure
_STATUS_BY_ERROR: list[tuple[type[DomainException], int]] = [
    (ValidationError, 400),
    (EntityNotFoundError, 404),
    (RouteResolutionError, 502),
    (DeliveryProviderError, 502),
    (AuditSinkError, 502),
]


def _error(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
        headers=headers,
    )


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    status_code = next(
        (code for error_type, code in _STATUS_BY_ERROR if isinstance(exc, error_type)),
        500,
    )
    if status_code >= 500:
        logger.error("Request failed", path=request.url.path, error=str(exc))
    return _error(status_code, str(exc))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query")]
        fields.append(".".join(loc) or err.get("msg", "body"))
    prefix = "Missing or invalid order fields" if request.url.path.startswith("/orders") else "Invalid request"
    return _error(400, f"{prefix}: {', '.join(fields)}")


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


def create_app() -> FastAPI:
    configure_logging(bootstrap.settings().log_level)

    app = FastAPI(
        title="codstore",
        description="Cash-on-delivery order submission and courier pricing",
    )
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    app.include_router(order_router)
    app.include_router(delivery_router)
    app.include_router(admin_router)

    @app.get("/health")
    def health() -> JSONResponse:
        return JSONResponse(content={"status": "ok"})

    return app


app = create_app()
