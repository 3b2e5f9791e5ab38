"""
Pytest fixtures for the receipt kernel test suite.

Provides:
- Structured logging setup and log capture
- Deterministic clocks
- Contract / receipt builders
- An in-memory ReceiptStore standing in for the persistence collaborator
"""

import json
import logging
from dataclasses import replace
from datetime import date
from io import StringIO
from uuid import uuid4

import pytest

from receipt_kernel.domain.clock import DeterministicClock
from receipt_kernel.domain.records import Contract, Receipt, ReceiptStatus
from receipt_kernel.domain.values import MonetaryAmount
from receipt_kernel.exceptions import ReceiptPersistenceError
from receipt_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)

# Reference date used across the suite: Sunday 7 September 2025.
TODAY = date(2025, 9, 7)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture receipt_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            generate_due(...)
            logs = captured_logs()
            assert any(r["message"] == "recurrence_evaluated" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("receipt_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Clock fixtures
# =============================================================================


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def clock() -> DeterministicClock:
    return DeterministicClock.on(TODAY)


# =============================================================================
# Record builders
# =============================================================================


def make_contract(
    contract_id: str = "c1",
    number: str | None = "CONT-001",
    client_name: str = "Cliente 1",
    amount: str = "100.00",
    recurrence_enabled: bool = True,
    recurrence_day: int | None = 17,
    **kwargs,
) -> Contract:
    return Contract(
        id=contract_id,
        number=number,
        client_name=client_name,
        amount=MonetaryAmount.of(amount),
        recurrence_enabled=recurrence_enabled,
        recurrence_day=recurrence_day,
        **kwargs,
    )


def make_receipt(
    contract_id: str | None = "c1",
    issue_date: date = date(2025, 9, 17),
    number: str = "RB-AUTO-202509-CONT-001",
    amount: str = "100.00",
    **kwargs,
) -> Receipt:
    kwargs.setdefault("client_name", "Cliente 1")
    kwargs.setdefault("status", ReceiptStatus.ISSUED)
    return Receipt(
        number=number,
        amount=MonetaryAmount.of(amount),
        issue_date=issue_date,
        contract_id=contract_id,
        **kwargs,
    )


@pytest.fixture
def contract_factory():
    return make_contract


@pytest.fixture
def receipt_factory():
    return make_receipt


# =============================================================================
# In-memory store
# =============================================================================


class InMemoryReceiptStore:
    """ReceiptStore keeping snapshots in lists; assigns uuid ids on save.

    ``refuse_numbers`` makes ``save_receipt`` raise ReceiptPersistenceError
    for the listed receipt numbers.
    """

    def __init__(self, contracts=(), receipts=(), refuse_numbers=()):
        self.contracts: list[Contract] = list(contracts)
        self.receipts: list[Receipt] = list(receipts)
        self.refuse_numbers = set(refuse_numbers)
        self.save_calls = 0

    def list_contracts(self) -> list[Contract]:
        return list(self.contracts)

    def list_receipts(self) -> list[Receipt]:
        return list(self.receipts)

    def save_receipt(self, receipt: Receipt) -> Receipt:
        self.save_calls += 1
        if receipt.number in self.refuse_numbers:
            raise ReceiptPersistenceError(
                receipt.number, receipt.contract_id, "storage unavailable"
            )
        stored = replace(receipt, id=str(uuid4()))
        self.receipts.append(stored)
        return stored


@pytest.fixture
def store_factory():
    return InMemoryReceiptStore
