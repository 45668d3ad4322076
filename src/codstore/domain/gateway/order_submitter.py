"""Port the client uses to hand a finished OrderRequest to the storefront."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from codstore.domain.model.order import OrderRequest


@dataclass(frozen=True)
class SubmissionReceipt:
    """What the storefront answers when an order is placed."""

    order_id: str
    consignment_id: str | None = None
    pathao_error: str | None = None


class OrderSubmitter(ABC):

    @abstractmethod
    def submit(self, request: OrderRequest) -> SubmissionReceipt:
        """Place the order.

        Raises ValidationError when the storefront rejects the payload and
        AuditSinkError when the order could not be recorded.
        """
