"""Port for the order log that is the system of record for sales."""

from __future__ import annotations

from abc import ABC, abstractmethod

from codstore.domain.model.order import OrderRecord


class AuditSink(ABC):

    @abstractmethod
    def append(self, record: OrderRecord) -> None:
        """Durably store *record*.

        Raises AuditSinkError when the log does not confirm the write.
        """
