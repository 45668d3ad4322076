"""JSON-file-backed implementation of OrderHistoryRepository."""

from __future__ import annotations

import json
from pathlib import Path

from codstore.domain.model.order_history import OrderHistory, PlacedOrder
from codstore.domain.repository.order_history_repository import OrderHistoryRepository


class JsonOrderHistoryRepository(OrderHistoryRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- OrderHistoryRepository interface -------------------------------------

    def load(self) -> OrderHistory:
        return OrderHistory([self._to_domain(raw) for raw in self._load_raw()])

    def save(self, history: OrderHistory) -> None:
        self._persist_raw([self._to_raw(order) for order in history.orders])

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: PlacedOrder) -> dict:
        return {
            "orderId": order.order_id,
            "date": order.date,
            "pathaoConsignmentId": order.consignment_id,
            "orderPhone": order.order_phone,
            "total": order.total,
            "itemsSummary": order.items_summary,
        }

    @staticmethod
    def _to_domain(raw: dict) -> PlacedOrder:
        return PlacedOrder(
            order_id=raw["orderId"],
            date=raw["date"],
            consignment_id=raw.get("pathaoConsignmentId"),
            order_phone=raw.get("orderPhone"),
            total=raw.get("total"),
            items_summary=raw.get("itemsSummary"),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, orders: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(orders, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
