"""Application service: Submit Order use case.

Turns one OrderRequest into a placed order.  The work is an ordered
list of steps, each carrying its own failure policy:

    1. allocate order id          ABORT
    2. create courier consignment CONTINUE (failure becomes pathao_error)
    3. append to the audit sink   ABORT (the order is not placed)

Validation happens before the first step and always aborts.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable

import structlog

from codstore.domain.gateway.audit_sink import AuditSink
from codstore.domain.gateway.delivery_provider import ConsignmentFailed, DeliveryProvider
from codstore.domain.gateway.order_submitter import SubmissionReceipt
from codstore.domain.model.order import OrderIdGenerator, OrderRecord, OrderRequest
from codstore.domain.model.phone import PhoneNumber
from codstore.domain.service.consignment import build_consignment_request

logger = structlog.get_logger(__name__)


class FailurePolicy(Enum):
    CONTINUE = "continue"  # record a warning and run the next step
    ABORT = "abort"  # propagate; nothing after this step runs


@dataclass
class Submission:
    """Mutable working state for one request as it moves through the steps."""

    request: OrderRequest
    phone: PhoneNumber
    secondary_phone: PhoneNumber | None
    order_id: str = ""
    placed_at: datetime | None = None
    consignment_id: str | None = None
    pathao_error: str | None = None

    def to_receipt(self) -> SubmissionReceipt:
        return SubmissionReceipt(
            order_id=self.order_id,
            consignment_id=self.consignment_id,
            pathao_error=self.pathao_error,
        )


@dataclass(frozen=True)
class Step:
    name: str
    run: Callable[[Submission], None]
    policy: FailurePolicy
    on_failure: Callable[[Submission, Exception], None] | None = None


class SubmitOrderHandler:

    def __init__(
        self,
        delivery_provider: DeliveryProvider | None = None,
        audit_sink: AuditSink | None = None,
        store_id: int | None = None,
        id_generator: OrderIdGenerator | None = None,
    ) -> None:
        self._delivery_provider = delivery_provider
        self._audit_sink = audit_sink
        self._store_id = store_id
        self._ids = id_generator or OrderIdGenerator()

    def handle(self, request: OrderRequest) -> SubmissionReceipt:
        """Validate, create the consignment, log the order, answer.

        Raises ValidationError for a bad phone and AuditSinkError when
        the order could not be recorded.
        """
        submission = Submission(
            request=request,
            phone=PhoneNumber.parse(request.phone, field="phone"),
            secondary_phone=PhoneNumber.parse_optional(request.secondary_phone),
        )

        for step in self._steps():
            try:
                step.run(submission)
            except Exception as exc:
                if step.policy is FailurePolicy.ABORT:
                    logger.error(
                        "Order submission aborted",
                        step=step.name,
                        order_id=submission.order_id,
                        error=str(exc),
                    )
                    raise
                logger.warning(
                    "Order submission step failed; continuing",
                    step=step.name,
                    order_id=submission.order_id,
                    error=str(exc),
                )
                if step.on_failure is not None:
                    step.on_failure(submission, exc)

        logger.info(
            "Order placed",
            order_id=submission.order_id,
            consignment_id=submission.consignment_id,
            pathao_error=submission.pathao_error,
        )
        return submission.to_receipt()

    # --- Pipeline -------------------------------------------------------------

    def _steps(self) -> list[Step]:
        return [
            Step("allocate_order_id", self._allocate_order_id, FailurePolicy.ABORT),
            Step(
                "create_consignment",
                self._create_consignment,
                FailurePolicy.CONTINUE,
                on_failure=_record_pathao_error,
            ),
            Step("append_audit_record", self._append_audit_record, FailurePolicy.ABORT),
        ]

    def _allocate_order_id(self, submission: Submission) -> None:
        submission.placed_at = self._ids.now()
        submission.order_id = self._ids.generate(submission.placed_at)

    def _create_consignment(self, submission: Submission) -> None:
        if self._delivery_provider is None or self._store_id is None:
            return

        consignment = build_consignment_request(
            request=submission.request,
            order_id=submission.order_id,
            store_id=self._store_id,
            phone=submission.phone,
            secondary_phone=submission.secondary_phone,
        )
        result = self._delivery_provider.create_consignment(consignment)
        if isinstance(result, ConsignmentFailed):
            submission.pathao_error = result.error
            logger.warning(
                "Consignment not created",
                order_id=submission.order_id,
                error=result.error,
            )
            return

        submission.consignment_id = result.consignment_id
        logger.info(
            "Consignment created",
            order_id=submission.order_id,
            consignment_id=result.consignment_id,
        )

    def _append_audit_record(self, submission: Submission) -> None:
        record = OrderRecord.from_request(
            request=submission.request,
            order_id=submission.order_id,
            placed_at=submission.placed_at,  # type: ignore[arg-type]
            phone=str(submission.phone),
            consignment_id=submission.consignment_id,
        )
        if self._audit_sink is None:
            # No order log configured (local / dev): the log line is the record.
            logger.info("No audit sink configured; order logged", **record.to_row())
            return
        self._audit_sink.append(record)


def _record_pathao_error(submission: Submission, exc: Exception) -> None:
    submission.pathao_error = str(exc) or type(exc).__name__
