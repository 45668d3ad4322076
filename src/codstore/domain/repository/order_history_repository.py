"""Abstract repository for the local OrderHistory."""

from __future__ import annotations

from abc import ABC, abstractmethod

from codstore.domain.model.order_history import OrderHistory


class OrderHistoryRepository(ABC):

    @abstractmethod
    def load(self) -> OrderHistory:
        """Return the persisted history, or an empty one."""

    @abstractmethod
    def save(self, history: OrderHistory) -> None:
        """Persist every recorded order, newest first."""
