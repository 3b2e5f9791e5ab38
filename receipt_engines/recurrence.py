"""
Recurrence Decision Engine.

Pure functions with deterministic behavior. No I/O.

Decides which receipts must be created for contracts with monthly
recurrence.  Given "today", the current contract snapshot and the
receipts already issued, it proposes one receipt per contract whose
recurrence day falls within the due window, unless that contract already
has a receipt dated in the current month.

Due window:
    delta = recurrence_day - today.day
    due  <=>  0 <= delta <= window_days      (window_days defaults to 10)

No month rollover is performed: a recurrence day that has already passed
this month, or lies beyond the window, is picked up by a later call once
it falls inside the window.  Callers are expected to evaluate at least
once a day.

Idempotence:
    The engine keeps no memory between calls.  The guarantee of at most
    one receipt per contract per month comes entirely from the
    ``existing_receipts`` snapshot passed in, so calling again with the
    generated receipts included yields nothing new.

Usage:
    from receipt_engines.recurrence import generate_due

    new_receipts = generate_due(
        today=date(2025, 9, 7),
        contracts=contracts,
        existing_receipts=receipts,
    )
    for receipt in new_receipts:
        store.save_receipt(receipt)
"""

from __future__ import annotations

import calendar
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from enum import Enum

from receipt_kernel.domain.records import Contract, Receipt, ReceiptStatus
from receipt_kernel.logging_config import LogContext, get_logger

from receipt_engines.tracer import traced_engine

logger = get_logger("engines.recurrence")


# ============================================================================
# Constants
# ============================================================================

DEFAULT_WINDOW_DAYS = 10
DEFAULT_NUMBER_PREFIX = "RB-AUTO"


class RecurrenceOutcome(str, Enum):
    """Why a contract did or did not produce a receipt."""

    DUE = "due"
    DISABLED = "disabled"
    NO_RECURRENCE_DAY = "no_recurrence_day"
    OUTSIDE_WINDOW = "outside_window"
    DAY_NOT_IN_MONTH = "day_not_in_month"
    ALREADY_ISSUED = "already_issued"
    # Assigned by services whose policy rejects the recurrence day.
    OUTSIDE_POLICY = "outside_policy"


@dataclass(frozen=True)
class RecurrenceDecision:
    """
    Decision for a single contract.

    Attributes:
        contract_id: Contract evaluated
        outcome: Why the contract was or was not due
        receipt: Proposed receipt when outcome is DUE, else None
    """

    contract_id: str
    outcome: RecurrenceOutcome
    receipt: Receipt | None = None


# ============================================================================
# Helpers
# ============================================================================


def occurrence_month(value: date) -> tuple[int, int]:
    """Deduplication key of a date: its (year, month)."""
    return (value.year, value.month)


def is_due(today: date, recurrence_day: int, window_days: int = DEFAULT_WINDOW_DAYS) -> bool:
    """True when ``recurrence_day`` is today or within ``window_days`` ahead,
    counted inside the current month only."""
    delta = recurrence_day - today.day
    return 0 <= delta <= window_days


def auto_receipt_number(
    contract: Contract,
    year: int,
    month: int,
    prefix: str = DEFAULT_NUMBER_PREFIX,
) -> str:
    """Number of a generated receipt: ``RB-AUTO-202509-CONT-001``.

    Falls back to the contract id when the contract has no number.
    """
    return f"{prefix}-{year:04d}{month:02d}-{contract.display_number}"


def _issued_keys(receipts: Iterable[Receipt]) -> set[tuple[str, int, int]]:
    keys: set[tuple[str, int, int]] = set()
    for receipt in receipts:
        if receipt.contract_id is None:
            continue
        keys.add((receipt.contract_id, *occurrence_month(receipt.issue_date)))
    return keys


def _build_receipt(
    contract: Contract,
    issue_date: date,
    number_prefix: str,
    payment_method: str | None,
) -> Receipt:
    return Receipt(
        number=auto_receipt_number(
            contract, issue_date.year, issue_date.month, number_prefix
        ),
        client_name=contract.client_name,
        amount=contract.amount,
        description=contract.description,
        issue_date=issue_date,
        status=ReceiptStatus.ISSUED,
        contract_id=contract.id,
        client_document=contract.client_document,
        payment_method=payment_method,
        signature_id=contract.signature_id,
        issuer_name=contract.issuer_name,
        issuer_document=contract.issuer_document,
    )


def evaluate_contract(
    today: date,
    contract: Contract,
    issued: set[tuple[str, int, int]],
    window_days: int = DEFAULT_WINDOW_DAYS,
    number_prefix: str = DEFAULT_NUMBER_PREFIX,
    payment_method: str | None = None,
) -> RecurrenceDecision:
    """
    Decide whether one contract needs a receipt today.

    Args:
        today: Evaluation date.
        contract: Contract snapshot.
        issued: (contract_id, year, month) keys of receipts already issued.
        window_days: Inclusive lookahead in days.
        number_prefix: Prefix of generated receipt numbers.
        payment_method: Payment method stamped on generated receipts.

    Returns:
        RecurrenceDecision; ``receipt`` is set only when the outcome is DUE.
    """
    if not contract.recurrence_enabled:
        return RecurrenceDecision(contract.id, RecurrenceOutcome.DISABLED)

    day = contract.recurrence_day
    if not day:
        return RecurrenceDecision(contract.id, RecurrenceOutcome.NO_RECURRENCE_DAY)

    if not is_due(today, day, window_days):
        return RecurrenceDecision(contract.id, RecurrenceOutcome.OUTSIDE_WINDOW)

    year, month = occurrence_month(today)
    if day > calendar.monthrange(year, month)[1]:
        return RecurrenceDecision(contract.id, RecurrenceOutcome.DAY_NOT_IN_MONTH)

    if (contract.id, year, month) in issued:
        return RecurrenceDecision(contract.id, RecurrenceOutcome.ALREADY_ISSUED)

    receipt = _build_receipt(
        contract, date(year, month, day), number_prefix, payment_method
    )
    return RecurrenceDecision(contract.id, RecurrenceOutcome.DUE, receipt)


# ============================================================================
# Engine entry points
# ============================================================================


def _decide_all(
    today: date,
    contracts: Iterable[Contract],
    existing_receipts: Iterable[Receipt],
    window_days: int,
    number_prefix: str,
    payment_method: str | None,
) -> list[RecurrenceDecision]:
    issued = _issued_keys(existing_receipts)
    decisions: list[RecurrenceDecision] = []

    for contract in contracts:
        with LogContext.bind(contract_id=contract.id):
            decision = evaluate_contract(
                today,
                contract,
                issued,
                window_days=window_days,
                number_prefix=number_prefix,
                payment_method=payment_method,
            )

            if decision.outcome is RecurrenceOutcome.DAY_NOT_IN_MONTH:
                logger.warning(
                    "recurrence_day_not_in_month",
                    extra={"recurrence_day": contract.recurrence_day, "today": today},
                )
            else:
                logger.debug(
                    "recurrence_decision", extra={"outcome": decision.outcome.value}
                )

        if decision.receipt is not None:
            issued.add((contract.id, *decision.receipt.occurrence_month))
        decisions.append(decision)

    logger.info(
        "recurrence_evaluated",
        extra={
            "today": today,
            "contracts_evaluated": len(decisions),
            "receipts_proposed": sum(d.receipt is not None for d in decisions),
        },
    )
    return decisions


@traced_engine(
    "recurrence",
    "1.0",
    fingerprint_fields=("today", "window_days", "number_prefix"),
)
def decide_due(
    today: date,
    contracts: Iterable[Contract],
    existing_receipts: Iterable[Receipt],
    *,
    window_days: int = DEFAULT_WINDOW_DAYS,
    number_prefix: str = DEFAULT_NUMBER_PREFIX,
    payment_method: str | None = None,
) -> list[RecurrenceDecision]:
    """One RecurrenceDecision per contract, in contract order.

    Same rules and arguments as ``generate_due``; contracts that produce no
    receipt are kept with the outcome explaining why.
    """
    return _decide_all(
        today, contracts, existing_receipts, window_days, number_prefix, payment_method
    )


@traced_engine(
    "recurrence",
    "1.0",
    fingerprint_fields=("today", "window_days", "number_prefix"),
)
def generate_due(
    today: date,
    contracts: Iterable[Contract],
    existing_receipts: Iterable[Receipt],
    *,
    window_days: int = DEFAULT_WINDOW_DAYS,
    number_prefix: str = DEFAULT_NUMBER_PREFIX,
    payment_method: str | None = None,
) -> list[Receipt]:
    """
    Compute the receipts that must be created today.

    Contracts appearing twice in the snapshot produce at most one receipt.
    Neither input collection is modified.

    Args:
        today: Evaluation date supplied by the caller's clock.
        contracts: Current contract snapshot.
        existing_receipts: Receipts already issued.
        window_days: Inclusive lookahead in days.
        number_prefix: Prefix of generated receipt numbers.
        payment_method: Payment method stamped on generated receipts.

    Returns:
        Newly proposed receipts with ``id`` unset, in contract order.
    """
    decisions = _decide_all(
        today, contracts, existing_receipts, window_days, number_prefix, payment_method
    )
    return [d.receipt for d in decisions if d.receipt is not None]
