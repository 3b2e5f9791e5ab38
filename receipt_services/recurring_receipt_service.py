"""
RecurringReceiptService -- Service wrapper for the recurrence engine.

Composes ``decide_due`` (pure engine) with clock injection, the store
protocol and the active recurrence policy.

Architecture: receipt_services -- imperative shell.
    The store owns the contract and receipt collections.  The service
    reads a fresh snapshot on every call, asks the engine what is due and
    hands each proposed receipt back to the store, which assigns its id.
    There is no module-level state; two services over two stores never
    interact.

Policy:
    Contracts whose recurrence day lies outside the policy's
    ``min_recurrence_day..max_recurrence_day`` never reach the engine.
    They are reported with ``RecurrenceOutcome.OUTSIDE_POLICY``.

Failure handling:
    A ``ReceiptPersistenceError`` raised while saving one receipt is
    logged and reported in ``RecurrenceRunResult.failed``; the remaining
    receipts are still saved.  Any other exception propagates.

Logging:
    Every record emitted during ``run()`` carries the same
    ``correlation_id``: the caller's, when one is bound, else a new uuid4.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from typing import Protocol, runtime_checkable
from uuid import uuid4

from receipt_kernel.domain.clock import Clock, SystemClock
from receipt_kernel.domain.records import Contract, Receipt
from receipt_kernel.exceptions import ReceiptPersistenceError
from receipt_kernel.logging_config import LogContext, get_logger

from receipt_config import RecurrencePolicy, get_active_config
from receipt_engines.recurrence import RecurrenceDecision, RecurrenceOutcome, decide_due

logger = get_logger("services.recurring_receipts")


@runtime_checkable
class ReceiptStore(Protocol):
    """Persistence collaborator supplying snapshots and storing receipts."""

    def list_contracts(self) -> Sequence[Contract]:
        """Current contract snapshot."""
        ...

    def list_receipts(self) -> Sequence[Receipt]:
        """Current receipt snapshot."""
        ...

    def save_receipt(self, receipt: Receipt) -> Receipt:
        """Persist a new receipt and return it with its assigned id.

        Raises:
            ReceiptPersistenceError: If the receipt could not be stored.
        """
        ...


@dataclass(frozen=True)
class FailedReceipt:
    """A proposed receipt the store refused."""

    receipt: Receipt
    error_code: str
    reason: str


@dataclass(frozen=True)
class RecurrenceRunResult:
    """Outcome of one ``RecurringReceiptService.run`` call.

    ``skipped`` holds the decision of every contract that produced no
    receipt, so callers can tell "not due yet" from "already issued" or
    "rejected by policy".
    """

    evaluated_on: date
    created: tuple[Receipt, ...] = ()
    failed: tuple[FailedReceipt, ...] = ()
    skipped: tuple[RecurrenceDecision, ...] = ()

    @property
    def created_count(self) -> int:
        return len(self.created)

    @property
    def has_failures(self) -> bool:
        return bool(self.failed)

    @property
    def skipped_contract_ids(self) -> tuple[str, ...]:
        return tuple(decision.contract_id for decision in self.skipped)


class RecurringReceiptService:
    """Service that generates and stores due recurring receipts.

    Contract:
        - ``evaluate()`` returns one decision per stored contract.
        - ``preview()`` returns what would be generated, saving nothing.
        - ``run()`` generates and saves through the store.

    Non-goals:
        - Does NOT schedule itself; callers invoke it once per tick.
        - Does NOT modify or delete existing contracts or receipts.
    """

    def __init__(
        self,
        store: ReceiptStore,
        clock: Clock | None = None,
        policy: RecurrencePolicy | None = None,
    ) -> None:
        self._store = store
        self._clock = clock or SystemClock()
        self._policy = policy or get_active_config()

    @property
    def policy(self) -> RecurrencePolicy:
        return self._policy

    def _outside_policy(self, contract: Contract) -> bool:
        day = contract.recurrence_day
        if not contract.recurrence_enabled or not day:
            return False
        if self._policy.min_recurrence_day <= day <= self._policy.max_recurrence_day:
            return False
        with LogContext.bind(contract_id=contract.id):
            logger.warning(
                "recurrence_day_out_of_policy",
                extra={
                    "recurrence_day": day,
                    "min_recurrence_day": self._policy.min_recurrence_day,
                    "max_recurrence_day": self._policy.max_recurrence_day,
                },
            )
        return True

    def evaluate(self, today: date | None = None) -> list[RecurrenceDecision]:
        """Decision for every stored contract, in store order, saving nothing.

        Args:
            today: Evaluation date; defaults to the clock's date.
        """
        effective_today = today or self._clock.today()
        contracts = list(self._store.list_contracts())

        rejected = {
            index: RecurrenceDecision(contract.id, RecurrenceOutcome.OUTSIDE_POLICY)
            for index, contract in enumerate(contracts)
            if self._outside_policy(contract)
        }
        engine_decisions = iter(
            decide_due(
                effective_today,
                [c for index, c in enumerate(contracts) if index not in rejected],
                self._store.list_receipts(),
                window_days=self._policy.window_days,
                number_prefix=self._policy.number_prefix,
                payment_method=self._policy.payment_method,
            )
        )
        return [
            rejected[index] if index in rejected else next(engine_decisions)
            for index in range(len(contracts))
        ]

    def preview(self, today: date | None = None) -> list[Receipt]:
        """Receipts that are due, without saving them.

        Args:
            today: Evaluation date; defaults to the clock's date.
        """
        return [d.receipt for d in self.evaluate(today) if d.receipt is not None]

    def run(self, today: date | None = None) -> RecurrenceRunResult:
        """Generate due receipts and save each through the store.

        Args:
            today: Evaluation date; defaults to the clock's date.

        Returns:
            RecurrenceRunResult with stored, refused and skipped contracts.
        """
        correlation_id = LogContext.get_all().get("correlation_id") or str(uuid4())
        with LogContext.bind(correlation_id=correlation_id):
            return self._run(today or self._clock.today())

    def _run(self, effective_today: date) -> RecurrenceRunResult:
        decisions = self.evaluate(effective_today)

        created: list[Receipt] = []
        failed: list[FailedReceipt] = []
        skipped: list[RecurrenceDecision] = []
        for decision in decisions:
            receipt = decision.receipt
            if receipt is None:
                skipped.append(decision)
                continue
            try:
                created.append(self._store.save_receipt(receipt))
            except ReceiptPersistenceError as exc:
                with LogContext.bind(contract_id=decision.contract_id):
                    logger.error(
                        "recurring_receipt_not_saved",
                        exc_info=True,
                        extra={"receipt_number": receipt.number},
                    )
                failed.append(FailedReceipt(receipt, exc.code, exc.reason))

        logger.info(
            "recurring_receipts_generated",
            extra={
                "evaluated_on": effective_today,
                "created_count": len(created),
                "failed_count": len(failed),
                "skipped_count": len(skipped),
            },
        )
        return RecurrenceRunResult(
            evaluated_on=effective_today,
            created=tuple(created),
            failed=tuple(failed),
            skipped=tuple(skipped),
        )
