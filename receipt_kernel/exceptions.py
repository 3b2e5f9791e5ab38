"""
Typed exception hierarchy for the receipt kernel.

Every error carries a machine-readable ``code`` class attribute and keeps
its context as attributes, so callers catch by type and report by code
instead of parsing messages.

    ReceiptKernelError (base)
    |
    +-- ConfigurationError
    |   +-- InvalidRecurrencePolicyError
    |
    +-- PersistenceError
        +-- ReceiptPersistenceError

Code                         | When raised
-----------------------------|---------------------------------------------
INVALID_RECURRENCE_POLICY    | Recurrence policy values out of range
RECEIPT_PERSISTENCE_FAILED   | A store could not save a generated receipt

The pure engines (currency codec, spell-out, recurrence) never raise
these: they degrade to safe defaults.  Only the config layer and the
store boundary do.
"""


class ReceiptKernelError(Exception):
    """
    Base exception for all receipt kernel errors.

    All subclasses must have a `code` class attribute.
    """

    code: str = "RECEIPT_KERNEL_ERROR"


# Configuration exceptions


class ConfigurationError(ReceiptKernelError):
    """Base exception for configuration errors."""

    code: str = "CONFIGURATION_ERROR"


class InvalidRecurrencePolicyError(ConfigurationError):
    """A recurrence policy field holds a value outside its allowed range."""

    code: str = "INVALID_RECURRENCE_POLICY"

    def __init__(self, field: str, value: object, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(
            f"Invalid recurrence policy {field}={value!r}: {reason}"
        )


# Persistence exceptions


class PersistenceError(ReceiptKernelError):
    """Base exception for store boundary errors."""

    code: str = "PERSISTENCE_ERROR"


class ReceiptPersistenceError(PersistenceError):
    """A generated receipt could not be saved by the store."""

    code: str = "RECEIPT_PERSISTENCE_FAILED"

    def __init__(self, receipt_number: str, contract_id: str | None, reason: str):
        self.receipt_number = receipt_number
        self.contract_id = contract_id
        self.reason = reason
        super().__init__(
            f"Could not persist receipt {receipt_number} "
            f"(contract {contract_id}): {reason}"
        )
