"""Application service: the buyer's cart.

``CartSession`` loads the cart once when it is created and saves it
after every mutation, so the persisted cart always matches what the
buyer last saw.
"""

from __future__ import annotations

from codstore.application.dto import CartDTO, CartLineDTO
from codstore.domain.model.cart import Cart
from codstore.domain.model.value_objects import Money
from codstore.domain.repository.cart_repository import CartRepository


class CartSession:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo
        self._cart = cart_repo.load()

    @property
    def cart(self) -> Cart:
        return self._cart

    def add_item(self, item_id: str, name: str, unit_price: str, quantity: int = 1) -> CartDTO:
        self._cart.add_item(item_id, name, Money.of(unit_price), quantity)
        return self._save()

    def remove_item(self, item_id: str) -> CartDTO:
        self._cart.remove_item(item_id)
        return self._save()

    def update_quantity(self, item_id: str, quantity: int) -> CartDTO:
        self._cart.update_quantity(item_id, quantity)
        return self._save()

    def clear(self) -> CartDTO:
        self._cart.clear()
        return self._save()

    def show(self) -> CartDTO:
        return self._to_dto(self._cart)

    # --- Internal helpers -----------------------------------------------------

    def _save(self) -> CartDTO:
        self._cart_repo.save(self._cart)
        return self._to_dto(self._cart)

    @staticmethod
    def _to_dto(cart: Cart) -> CartDTO:
        return CartDTO(
            lines=[
                CartLineDTO(
                    id=line.id,
                    name=line.name,
                    quantity=line.quantity.value,
                    unit_price=str(line.unit_price),
                    line_total=str(line.line_total),
                )
                for line in cart.lines
            ],
            item_count=cart.item_count,
            subtotal=str(cart.subtotal),
        )
