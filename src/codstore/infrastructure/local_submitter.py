"""OrderSubmitter that runs the submission pipeline in-process.

Used by the CLI when no storefront URL is configured.
"""

from __future__ import annotations

from codstore.application.submit_order import SubmitOrderHandler
from codstore.domain.gateway.order_submitter import OrderSubmitter, SubmissionReceipt
from codstore.domain.model.order import OrderRequest


class LocalOrderSubmitter(OrderSubmitter):

    def __init__(self, handler: SubmitOrderHandler) -> None:
        self._handler = handler

    def submit(self, request: OrderRequest) -> SubmissionReceipt:
        return self._handler.handle(request)
