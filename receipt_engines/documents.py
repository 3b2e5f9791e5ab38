"""
Document formatters for rendered receipts and contracts.

Pure functions. No I/O.  Inputs that do not have the expected shape are
returned unchanged, never rejected: these helpers only decorate text for
a document renderer.
"""

from __future__ import annotations

import re
from decimal import Decimal

from receipt_kernel.domain.values import MonetaryAmount

from receipt_engines.currency_codec import format_brl
from receipt_engines.spell_out import amount_to_words

_NON_DIGITS = re.compile(r"[^0-9]")

CPF_LENGTH = 11
CNPJ_LENGTH = 14


def _digits(value: str) -> str:
    return _NON_DIGITS.sub("", value)


def format_cpf(cpf: str) -> str:
    """Format an 11-digit CPF as "123.456.789-00"."""
    d = _digits(cpf)
    if len(d) != CPF_LENGTH:
        return cpf
    return f"{d[:3]}.{d[3:6]}.{d[6:9]}-{d[9:]}"


def format_cnpj(cnpj: str) -> str:
    """Format a 14-digit CNPJ as "12.345.678/0001-90"."""
    d = _digits(cnpj)
    if len(d) != CNPJ_LENGTH:
        return cnpj
    return f"{d[:2]}.{d[2:5]}.{d[5:8]}/{d[8:12]}-{d[12:]}"


def format_document(document: str | None) -> str:
    """Format a CPF or CNPJ by digit count; anything else is returned as-is."""
    if not document:
        return ""
    length = len(_digits(document))
    if length == CPF_LENGTH:
        return format_cpf(document)
    if length == CNPJ_LENGTH:
        return format_cnpj(document)
    return document


def receipt_amount_line(amount: Decimal | int | str | MonetaryAmount) -> str:
    """Amount line printed on a receipt: "R$ 1.500,00 (mil quinhentos reais)"."""
    return f"{format_brl(amount)} ({amount_to_words(amount)})"
