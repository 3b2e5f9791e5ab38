"""
BRL Currency Codec.

Pure functions with deterministic behavior. No I/O.

Converts between the three forms a monetary value takes in the receipt
screens:

- the raw digit stream typed into an amount field ("123456"),
- the pt-BR display string ("1.234,56"),
- the numeric amount (``Decimal("1234.56")``).

Grouping and separators are applied by hand, so output never depends on
the runtime locale.

Every function here backs a live-typing input, so none of them raise:
malformed input degrades to ``""``, ``"0,00"`` or ``Decimal("0.00")``.

Usage:
    from receipt_engines.currency_codec import (
        amount_to_display,
        digits_to_display,
        display_to_amount,
    )

    digits_to_display("123456")       # "1.234,56"
    display_to_amount("1.234,56")     # Decimal("1234.56")
    amount_to_display(Decimal("5"))   # "5,00"
"""

from __future__ import annotations

import re
from decimal import Decimal, DecimalException

from receipt_kernel.domain.values import MonetaryAmount, quantize_cents, to_decimal

THOUSANDS_SEPARATOR = "."
DECIMAL_SEPARATOR = ","
CURRENCY_SYMBOL = "R$"

_NON_DIGITS = re.compile(r"[^0-9]")
_ZERO = Decimal("0.00")


def _group_thousands(integer_digits: str) -> str:
    head = len(integer_digits) % 3 or 3
    groups = [integer_digits[:head]]
    groups.extend(
        integer_digits[i:i + 3] for i in range(head, len(integer_digits), 3)
    )
    return THOUSANDS_SEPARATOR.join(groups)


def _format_digits(digits: str) -> str:
    """Render a run of ASCII digits, read as cents, as "1.234,56".

    Works on the text directly, so digit runs of any length are accepted.
    """
    padded = digits.lstrip("0").rjust(3, "0")
    return f"{_group_thousands(padded[:-2])}{DECIMAL_SEPARATOR}{padded[-2:]}"


def _format_cents(cents: int) -> str:
    """Render a non-negative number of cents as "1.234,56"."""
    return _format_digits(str(cents))


def digits_to_display(digits: str | None) -> str:
    """
    Format a raw typed digit stream as a pt-BR amount.

    The last two digits are the centavos.  Non-digit characters are
    discarded first; an input with no digits at all returns ``""`` so a UI
    can tell "nothing typed" apart from zero.

    Examples:
        "" -> ""
        "5" -> "0,05"
        "0" -> "0,00"
        "123456" -> "1.234,56"
    """
    if not digits:
        return ""
    cleaned = _NON_DIGITS.sub("", str(digits))
    if not cleaned:
        return ""
    return _format_digits(cleaned)


def display_to_amount(display: str | None) -> Decimal:
    """
    Parse a pt-BR display string into a Decimal amount.

    Accepts an optional "R$" prefix and surrounding whitespace.  Thousands
    separators are removed and the decimal comma becomes a period.  Any
    input that does not parse to a finite number yields ``Decimal("0.00")``.

    The result is rounded half-up to cents, so
    ``display_to_amount(amount_to_display(a)) == a`` for every amount with
    cent precision.
    """
    if not display:
        return _ZERO
    cleaned = (
        str(display)
        .replace(CURRENCY_SYMBOL, "")
        .strip()
        .replace(THOUSANDS_SEPARATOR, "")
        .replace(DECIMAL_SEPARATOR, ".")
    )
    cleaned = "".join(cleaned.split())
    if not cleaned:
        return _ZERO
    try:
        value = Decimal(cleaned)
        if not value.is_finite():
            return _ZERO
        return quantize_cents(value)
    except DecimalException:
        return _ZERO


def amount_to_display(amount: Decimal | int | float | str | MonetaryAmount) -> str:
    """
    Format a numeric amount as a pt-BR string with two decimals.

    Negative amounts keep a leading "-".  Non-finite or unparsable values
    render as "0,00".

    Examples:
        0 -> "0,00"
        Decimal("1234.5") -> "1.234,50"
    """
    if isinstance(amount, MonetaryAmount):
        return _format_cents(amount.cents)
    try:
        value = to_decimal(amount)
        if not value.is_finite():
            return _format_cents(0)
        cents = int(quantize_cents(value) * 100)
    except (DecimalException, TypeError, ValueError):
        return _format_cents(0)
    if cents < 0:
        return "-" + _format_cents(-cents)
    return _format_cents(cents)


def format_brl(amount: Decimal | int | float | str | MonetaryAmount) -> str:
    """Format an amount with the currency symbol: "R$ 1.234,56"."""
    display = amount_to_display(amount)
    if display.startswith("-"):
        return f"-{CURRENCY_SYMBOL} {display[1:]}"
    return f"{CURRENCY_SYMBOL} {display}"
