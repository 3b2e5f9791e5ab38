"""Pure domain types: monetary amounts, records and clocks."""

from receipt_kernel.domain.clock import (
    Clock,
    DeterministicClock,
    SystemClock,
)
from receipt_kernel.domain.records import (
    MAX_RECURRENCE_DAY,
    MIN_RECURRENCE_DAY,
    Contract,
    Receipt,
    ReceiptStatus,
    clamp_recurrence_day,
)
from receipt_kernel.domain.values import CURRENCY_CODE, MonetaryAmount

__all__ = [
    "CURRENCY_CODE",
    "Clock",
    "Contract",
    "DeterministicClock",
    "MAX_RECURRENCE_DAY",
    "MIN_RECURRENCE_DAY",
    "MonetaryAmount",
    "Receipt",
    "ReceiptStatus",
    "SystemClock",
    "clamp_recurrence_day",
]
