"""JSON-file-backed implementation of CartRepository."""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path

from codstore.domain.model.cart import Cart, CartLineItem
from codstore.domain.model.value_objects import Money, Quantity
from codstore.domain.repository.cart_repository import CartRepository


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- CartRepository interface ---------------------------------------------

    def load(self) -> Cart:
        return Cart([self._to_domain(raw) for raw in self._load_raw()])

    def save(self, cart: Cart) -> None:
        self._persist_raw([self._to_raw(line) for line in cart.lines])

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(line: CartLineItem) -> dict:
        return {
            "id": line.id,
            "name": line.name,
            "price": str(line.unit_price.amount),
            "currency": line.unit_price.currency,
            "quantity": line.quantity.value,
        }

    @staticmethod
    def _to_domain(raw: dict) -> CartLineItem:
        return CartLineItem(
            id=raw["id"],
            name=raw["name"],
            unit_price=Money(Decimal(raw["price"]), raw.get("currency", "BDT")),
            quantity=Quantity(raw["quantity"]),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, lines: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(lines, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
