"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from codstore.application.submit_order import SubmitOrderHandler
from codstore.domain.gateway.audit_sink import AuditSink
from codstore.domain.gateway.delivery_provider import DeliveryProvider
from codstore.domain.gateway.order_submitter import OrderSubmitter
from codstore.domain.model.order import OrderIdGenerator
from codstore.infrastructure.audit.http_audit_sink import HttpAuditSink
from codstore.infrastructure.config import Settings
from codstore.infrastructure.local_submitter import LocalOrderSubmitter
from codstore.infrastructure.pathao.client import PathaoClient
from codstore.infrastructure.persistence.json_cart_repository import JsonCartRepository
from codstore.infrastructure.persistence.json_order_history_repository import (
    JsonOrderHistoryRepository,
)


@lru_cache(maxsize=1)
def settings() -> Settings:
    return Settings.from_env()


@lru_cache(maxsize=4)
def delivery_provider(config: Settings) -> DeliveryProvider | None:
    """The courier client, or None when credentials are incomplete."""
    if not config.pathao_enabled:
        return None
    return PathaoClient(
        base_url=config.pathao_base_url,
        store_id=config.pathao_store_id,  # type: ignore[arg-type]
        client_id=config.pathao_client_id,  # type: ignore[arg-type]
        client_secret=config.pathao_client_secret,  # type: ignore[arg-type]
        username=config.pathao_username,  # type: ignore[arg-type]
        password=config.pathao_password,  # type: ignore[arg-type]
        timeout=config.http_timeout,
    )


@lru_cache(maxsize=4)
def audit_sink(config: Settings) -> AuditSink | None:
    """The order log, or None to fall back to log-only mode."""
    if not config.audit_sink_url:
        return None
    return HttpAuditSink(config.audit_sink_url, timeout=config.http_timeout)


def submit_order_handler(config: Settings) -> SubmitOrderHandler:
    return SubmitOrderHandler(
        delivery_provider=delivery_provider(config),
        audit_sink=audit_sink(config),
        store_id=config.pathao_store_id if config.pathao_enabled else None,
        id_generator=OrderIdGenerator(prefix=config.order_id_prefix),
    )


def cart_repository(config: Settings) -> JsonCartRepository:
    return JsonCartRepository(config.data_dir / "cart.json")


def order_history_repository(config: Settings) -> JsonOrderHistoryRepository:
    return JsonOrderHistoryRepository(config.data_dir / "orders.json")


def order_submitter(config: Settings) -> OrderSubmitter:
    """Submit over HTTP when a storefront URL is set, otherwise in-process."""
    if config.api_url:
        from codstore.infrastructure.api.client import HttpOrderSubmitter

        return HttpOrderSubmitter(config.api_url, timeout=config.http_timeout)
    return LocalOrderSubmitter(submit_order_handler(config))
