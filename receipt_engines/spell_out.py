"""
Spell-Out Converter (valor por extenso).

Pure functions with deterministic behavior. No I/O.

Renders a BRL amount as the written Portuguese phrase required on formal
receipts:

    0      -> "zero real"
    1      -> "um real"
    2      -> "dois reais"
    100    -> "cem reais"
    1.5    -> "um real e cinquenta centavos"
    1500   -> "mil quinhentos reais"
    2e6    -> "dois milhões de reais"

The amount is rounded half-up to cents before it is split, so 1.999 is
spelled as two reais rather than "um real e cem centavos".

Negative and non-finite amounts are outside the contract and are not
validated.

Usage:
    from receipt_engines.spell_out import amount_to_words

    amount_to_words(Decimal("1234.56"))
    # "mil duzentos e trinta e quatro reais e cinquenta e seis centavos"
"""

from __future__ import annotations

from decimal import Decimal

from receipt_kernel.domain.values import MonetaryAmount, quantize_cents, to_decimal

from receipt_engines.tracer import traced_engine

# ============================================================================
# Numeral tables
# ============================================================================

UNITS = ("", "um", "dois", "três", "quatro", "cinco", "seis", "sete", "oito", "nove")

TEENS = (
    "dez", "onze", "doze", "treze", "quatorze",
    "quinze", "dezesseis", "dezessete", "dezoito", "dezenove",
)

TENS = (
    "", "", "vinte", "trinta", "quarenta",
    "cinquenta", "sessenta", "setenta", "oitenta", "noventa",
)

HUNDREDS = (
    "", "cento", "duzentos", "trezentos", "quatrocentos",
    "quinhentos", "seiscentos", "setecentos", "oitocentos", "novecentos",
)

# (scale value, singular, plural), largest first
SCALES = (
    (10**9, "bilhão", "bilhões"),
    (10**6, "milhão", "milhões"),
    (10**3, "mil", "mil"),
)

CONJUNCTION = "e"


# ============================================================================
# Integer rendering
# ============================================================================


def _below_hundred(n: int) -> str:
    if n < 10:
        return UNITS[n]
    if n < 20:
        return TEENS[n - 10]
    tens, units = divmod(n, 10)
    if units:
        return f"{TENS[tens]} {CONJUNCTION} {UNITS[units]}"
    return TENS[tens]


def _block(n: int) -> str:
    """Words for 1..999; empty string for 0."""
    if n == 100:
        return "cem"
    hundreds, rest = divmod(n, 100)
    parts = []
    if hundreds:
        parts.append(HUNDREDS[hundreds])
    if rest:
        parts.append(_below_hundred(rest))
    return f" {CONJUNCTION} ".join(parts)


def integer_to_words(n: int) -> str:
    """
    Spell out a non-negative integer in Portuguese.

    Groups are joined by a space, except that a final remainder below one
    hundred is joined with "e" ("mil e um", "mil quinhentos",
    "mil duzentos e trinta e quatro").
    """
    if n == 0:
        return "zero"

    groups: list[str] = []
    remaining = n
    for value, singular, plural in SCALES:
        count, remaining = divmod(remaining, value)
        if not count:
            continue
        if value == 10**3:
            words = singular if count == 1 else f"{_block(count)} {singular}"
        else:
            # Counts above 999 only occur for the largest scale.
            head = _block(count) if count < 1000 else integer_to_words(count)
            words = f"{head} {singular if count == 1 else plural}"
        groups.append(words)
    if remaining:
        groups.append(_block(remaining))

    phrase = groups[0]
    last_index = len(groups) - 1
    for index, words in enumerate(groups[1:], start=1):
        if index == last_index and 0 < remaining < 100:
            phrase = f"{phrase} {CONJUNCTION} {words}"
        else:
            phrase = f"{phrase} {words}"
    return phrase


# ============================================================================
# Currency phrase
# ============================================================================


def _reais_phrase(reais: int) -> str:
    if reais == 0:
        return "zero real"
    if reais == 1:
        return "um real"
    words = integer_to_words(reais)
    # Whole millions and billions take "de": "um milhão de reais".
    if reais >= 10**6 and reais % 10**6 == 0:
        return f"{words} de reais"
    return f"{words} reais"


def _centavos_phrase(centavos: int) -> str:
    suffix = "centavo" if centavos == 1 else "centavos"
    return f"{integer_to_words(centavos)} {suffix}"


@traced_engine("spell_out", "1.0", fingerprint_fields=("amount",))
def amount_to_words(amount: Decimal | int | float | str | MonetaryAmount) -> str:
    """
    Spell out a BRL amount in Portuguese.

    The integer part takes "real" only when it is exactly one; the
    fractional part takes "centavo" only when it is exactly one.  A zero
    fractional part is omitted entirely.

    Args:
        amount: Non-negative amount in reais.

    Returns:
        Phrase such as "dois reais e cinco centavos".
    """
    if isinstance(amount, MonetaryAmount):
        cents = amount.cents
    else:
        cents = int(quantize_cents(to_decimal(amount)) * 100)
    reais, centavos = divmod(cents, 100)

    phrase = _reais_phrase(reais)
    if centavos:
        phrase = f"{phrase} {CONJUNCTION} {_centavos_phrase(centavos)}"
    return phrase
