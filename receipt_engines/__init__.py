"""
Module: receipt_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    engines.  This is the import surface for receipt_services and for
    document renderers.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import receipt_kernel (domain, logging) and sibling engines.
    MUST NOT import receipt_config or receipt_services.

Invariants enforced:
    - Purity: engines NEVER call ``datetime.now()`` or ``date.today()``.
      "Today" is always an explicit parameter.
    - Decimal-only arithmetic: amounts are Decimal or MonetaryAmount,
      floats are converted through ``str`` on entry.
    - Determinism: identical inputs always produce identical outputs.

Audit relevance:
    ``generate_due``, ``decide_due`` and ``amount_to_words`` are wrapped with
    ``@traced_engine`` and emit RECEIPT_ENGINE_TRACE records.
"""

from receipt_engines.currency_codec import (
    amount_to_display,
    digits_to_display,
    display_to_amount,
    format_brl,
)
from receipt_engines.documents import (
    format_cnpj,
    format_cpf,
    format_document,
    receipt_amount_line,
)
from receipt_engines.recurrence import (
    DEFAULT_NUMBER_PREFIX,
    DEFAULT_WINDOW_DAYS,
    RecurrenceDecision,
    RecurrenceOutcome,
    auto_receipt_number,
    decide_due,
    evaluate_contract,
    generate_due,
    is_due,
    occurrence_month,
)
from receipt_engines.spell_out import amount_to_words, integer_to_words
from receipt_engines.tracer import compute_input_fingerprint, traced_engine

__all__ = [
    "DEFAULT_NUMBER_PREFIX",
    "DEFAULT_WINDOW_DAYS",
    "RecurrenceDecision",
    "RecurrenceOutcome",
    "amount_to_display",
    "amount_to_words",
    "auto_receipt_number",
    "compute_input_fingerprint",
    "decide_due",
    "digits_to_display",
    "display_to_amount",
    "evaluate_contract",
    "format_brl",
    "format_cnpj",
    "format_cpf",
    "format_document",
    "generate_due",
    "integer_to_words",
    "is_due",
    "occurrence_month",
    "receipt_amount_line",
    "traced_engine",
]
