"""
Records -- Contract and Receipt snapshots exchanged with the store.

Responsibility:
    Typed, immutable views of the rows owned by the persistence
    collaborator.  Engines read ``Contract`` and ``Receipt`` and propose new
    ``Receipt`` values; they never mutate either collection.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - ``Contract.recurrence_day`` is within 1..28 when built through
      ``Contract.from_record`` (the persistence boundary clamps it).
    - Receipt statuses are limited to ``ReceiptStatus``.

Failure modes:
    - KeyError when a record lacks a required key.
    - ValueError for unparsable dates, amounts or statuses.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from receipt_kernel.domain.values import MonetaryAmount

MIN_RECURRENCE_DAY = 1
MAX_RECURRENCE_DAY = 28


class ReceiptStatus(str, Enum):
    """Lifecycle status of a receipt."""

    ISSUED = "issued"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    SUSPENDED = "suspended"
    REVOKED = "revoked"


def clamp_recurrence_day(
    value: Any,
    lower: int = MIN_RECURRENCE_DAY,
    upper: int = MAX_RECURRENCE_DAY,
) -> int | None:
    """Clamp a stored recurrence day into ``lower..upper``.

    Missing, zero or non-numeric values mean "no recurrence day" and
    return None.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        day = int(value)
    except (TypeError, ValueError):
        return None
    if day == 0:
        return None
    return max(lower, min(upper, day))


def _parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        # Stored timestamps ("2025-09-17T00:00:00Z") keep only the day.
        return date.fromisoformat(value.strip()[:10])
    raise ValueError(f"Cannot parse date from {value!r}")


def _parse_amount(value: Any) -> MonetaryAmount:
    if isinstance(value, MonetaryAmount):
        return value
    if value is None or value == "":
        return MonetaryAmount.zero()
    return MonetaryAmount.of(value)


def _optional_str(record: Mapping[str, Any], key: str) -> str | None:
    value = record.get(key)
    if value is None or value == "":
        return None
    return str(value)


@dataclass(frozen=True)
class Contract:
    """
    A contract with optional monthly recurrence.

    Attributes:
        id: Opaque unique identifier assigned by the store
        number: Display code such as "CONT-001"
        client_name: Client display name
        client_document: CPF/CNPJ of the client
        description: Free text shown on receipts
        amount: Recurring billed value
        recurrence_enabled: Whether receipts are generated monthly
        recurrence_day: Day of month (1-28) the receipt falls due
        signature_id: Signature to stamp on generated receipts
        issuer_name: Alternative issuer name
        issuer_document: Alternative issuer CPF/CNPJ
    """

    id: str
    amount: MonetaryAmount
    number: str | None = None
    client_name: str = ""
    client_document: str | None = None
    description: str = ""
    recurrence_enabled: bool = False
    recurrence_day: int | None = None
    signature_id: str | None = None
    issuer_name: str | None = None
    issuer_document: str | None = None

    @property
    def display_number(self) -> str:
        """Contract number, falling back to the id."""
        return self.number or self.id

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Contract:
        """Build a Contract from a plain store row.

        ``amount`` falls back to ``monthly_amount`` for rows that keep the
        recurring value in a separate column.
        """
        raw_amount = record.get("amount")
        if raw_amount is None:
            raw_amount = record.get("monthly_amount")
        return cls(
            id=str(record["id"]),
            amount=_parse_amount(raw_amount),
            number=_optional_str(record, "number"),
            client_name=record.get("client_name") or "",
            client_document=_optional_str(record, "client_document"),
            description=record.get("description") or "",
            recurrence_enabled=bool(record.get("recurrence_enabled", False)),
            recurrence_day=clamp_recurrence_day(record.get("recurrence_day")),
            signature_id=_optional_str(record, "signature_id"),
            issuer_name=_optional_str(record, "issuer_name"),
            issuer_document=_optional_str(record, "issuer_document"),
        )


@dataclass(frozen=True)
class Receipt:
    """
    An issued receipt.

    ``id`` is None until the store persists the receipt.  ``contract_id``
    is a back-reference only; deleting a contract does not own its
    receipts.
    """

    number: str
    client_name: str
    amount: MonetaryAmount
    issue_date: date
    status: ReceiptStatus = ReceiptStatus.ISSUED
    description: str = ""
    contract_id: str | None = None
    id: str | None = None
    client_document: str | None = None
    payment_method: str | None = None
    signature_id: str | None = None
    issuer_name: str | None = None
    issuer_document: str | None = None

    @property
    def occurrence_month(self) -> tuple[int, int]:
        """(year, month) the receipt belongs to."""
        return (self.issue_date.year, self.issue_date.month)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Receipt:
        """Build a Receipt from a plain store row."""
        contract_id = record.get("contract_id")
        return cls(
            id=_optional_str(record, "id"),
            number=str(record["number"]),
            client_name=record.get("client_name") or "",
            amount=_parse_amount(record.get("amount")),
            issue_date=_parse_date(record["issue_date"]),
            status=ReceiptStatus(record.get("status") or ReceiptStatus.ISSUED.value),
            description=record.get("description") or "",
            contract_id=str(contract_id) if contract_id is not None else None,
            client_document=_optional_str(record, "client_document"),
            payment_method=_optional_str(record, "payment_method"),
            signature_id=_optional_str(record, "signature_id"),
            issuer_name=_optional_str(record, "issuer_name"),
            issuer_document=_optional_str(record, "issuer_document"),
        )

    def to_record(self) -> dict[str, Any]:
        """Plain row for the store; ``amount`` is a two-place Decimal."""
        return {
            "id": self.id,
            "number": self.number,
            "client_name": self.client_name,
            "amount": self.amount.amount,
            "issue_date": self.issue_date.isoformat(),
            "status": self.status.value,
            "description": self.description,
            "contract_id": self.contract_id,
            "client_document": self.client_document,
            "payment_method": self.payment_method,
            "signature_id": self.signature_id,
            "issuer_name": self.issuer_name,
            "issuer_document": self.issuer_document,
        }
