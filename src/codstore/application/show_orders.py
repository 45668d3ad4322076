"""Application service: Show Order History use case."""

from __future__ import annotations

from codstore.application.dto import PlacedOrderDTO
from codstore.domain.model.order_history import PlacedOrder
from codstore.domain.model.value_objects import Money
from codstore.domain.repository.order_history_repository import OrderHistoryRepository


class ShowOrderHistoryHandler:

    def __init__(self, history_repo: OrderHistoryRepository) -> None:
        self._history_repo = history_repo

    def handle(self) -> list[PlacedOrderDTO]:
        return [to_dto(order) for order in self._history_repo.load().orders]


def to_dto(order: PlacedOrder, pathao_error: str | None = None) -> PlacedOrderDTO:
    return PlacedOrderDTO(
        order_id=order.order_id,
        date=order.date,
        consignment_id=order.consignment_id,
        tracking_url=order.tracking_url,
        total=str(Money.of(order.total).rounded()) if order.total is not None else None,
        items_summary=order.items_summary,
        pathao_error=pathao_error,
    )
