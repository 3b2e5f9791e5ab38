"""
receipt_services -- Package init and public API.

Responsibility:
    Imperative shell that composes the pure engines (receipt_engines/)
    with a clock, the active policy and the persistence collaborator.
    This is the only layer that may read wall-clock time.

Architecture position:
    Dependency direction (enforced by tests/architecture):
        receipt_services/ -> receipt_engines/  (allowed)
        receipt_services/ -> receipt_config/   (allowed)
        receipt_services/ -> receipt_kernel/   (allowed)
        receipt_engines/  -> receipt_services/ (FORBIDDEN)
        receipt_kernel/   -> receipt_services/ (FORBIDDEN)
"""

from receipt_services.recurring_receipt_service import (
    FailedReceipt,
    ReceiptStore,
    RecurrenceRunResult,
    RecurringReceiptService,
)

__all__ = [
    "FailedReceipt",
    "ReceiptStore",
    "RecurrenceRunResult",
    "RecurringReceiptService",
]
