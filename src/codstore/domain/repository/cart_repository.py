"""Abstract repository for the Cart aggregate.

There is exactly one cart per client, so the repository has no ids.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from codstore.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def load(self) -> Cart:
        """Return the persisted cart, or an empty one."""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Persist the cart's current lines."""
