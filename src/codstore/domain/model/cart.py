"""Cart aggregate: the buyer's line items before checkout.

The cart owns its lines.  Lines change only through ``add_item``,
``remove_item``, ``update_quantity`` and ``clear``; callers read
immutable snapshots via ``lines``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from codstore.domain.exceptions import EntityNotFoundError, ValidationError
from codstore.domain.model.order import OrderItem, parcel_weight
from codstore.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class CartLineItem:

    id: str
    name: str
    unit_price: Money
    quantity: Quantity

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value

    def to_order_item(self) -> OrderItem:
        return OrderItem(
            id=self.id,
            name=self.name,
            price=self.unit_price,
            quantity=self.quantity,
        )


@dataclass
class Cart:
    """Aggregate root for the shopping cart.

    Invariants:
    - at most one line per product id
    - every line has a positive quantity
    """

    _lines: list[CartLineItem] = field(default_factory=list)

    # --- Mutations ------------------------------------------------------------

    def add_item(self, item_id: str, name: str, unit_price: Money, quantity: int = 1) -> None:
        """Add *quantity* units, merging into an existing line for the same id."""
        if not item_id or not name:
            raise ValidationError("Cart items need an id and a name")
        added = Quantity(quantity)
        for i, line in enumerate(self._lines):
            if line.id == item_id:
                self._lines[i] = CartLineItem(
                    id=line.id,
                    name=line.name,
                    unit_price=line.unit_price,
                    quantity=Quantity(line.quantity.value + added.value),
                )
                return
        self._lines.append(
            CartLineItem(id=item_id, name=name, unit_price=unit_price, quantity=added)
        )

    def remove_item(self, item_id: str) -> None:
        self._lines = [line for line in self._lines if line.id != item_id]

    def update_quantity(self, item_id: str, quantity: int) -> None:
        """Set a line's quantity; zero or less removes the line."""
        if quantity <= 0:
            self.remove_item(item_id)
            return
        for i, line in enumerate(self._lines):
            if line.id == item_id:
                self._lines[i] = CartLineItem(
                    id=line.id,
                    name=line.name,
                    unit_price=line.unit_price,
                    quantity=Quantity(quantity),
                )
                return
        raise EntityNotFoundError(f"Item '{item_id}' is not in the cart")

    def clear(self) -> None:
        self._lines = []

    # --- Computed properties --------------------------------------------------

    @property
    def lines(self) -> tuple[CartLineItem, ...]:
        return tuple(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def subtotal(self) -> Money:
        result = Money.zero()
        for line in self._lines:
            result = result + line.line_total
        return result.rounded()

    @property
    def item_count(self) -> int:
        return sum(line.quantity.value for line in self._lines)

    @property
    def parcel_weight(self) -> Decimal:
        return parcel_weight(line.quantity.value for line in self._lines)

    def to_order_items(self) -> list[OrderItem]:
        return [line.to_order_item() for line in self._lines]
