"""
Values -- Immutable, self-validating monetary value object.

Responsibility:
    Provides ``MonetaryAmount``, the only monetary type used by records and
    engines.  Amounts are BRL with two fractional digits, stored as an
    integer number of centavos so that repeated arithmetic never drifts.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Imported by records and engines.  No outward dependencies.

Invariants enforced:
    - Amounts are non-negative and finite.
    - Precision is exactly two decimal places (cents); inputs with more
      digits are rounded half-up at construction.

Failure modes:
    - ValueError on construction with negative, non-finite or unparsable
      amounts.
    - TypeError when arithmetic mixes MonetaryAmount with other types.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, DecimalException

CURRENCY_CODE = "BRL"

CENTS = Decimal("0.01")


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """
    Convert a numeric value to Decimal without binary float artefacts.

    Floats go through ``str()`` so that ``1.1`` becomes ``Decimal("1.1")``
    rather than its exact binary expansion.

    Raises:
        InvalidOperation: If a string cannot be parsed.
        TypeError: For unsupported types.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("bool is not a monetary value")
    if isinstance(value, (int, float, str)):
        return Decimal(str(value).strip())
    raise TypeError(f"Cannot convert {type(value).__name__} to Decimal")


def quantize_cents(value: Decimal) -> Decimal:
    """Round a finite Decimal half-up to two decimal places."""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True, slots=True)
class MonetaryAmount:
    """
    BRL monetary amount with cent precision.

    Contract:
        Holds an integer number of centavos.  Callers see a ``Decimal``
        through ``amount``.

    Guarantees:
        - Immutable and hashable (frozen dataclass with slots)
        - ``cents`` is always a non-negative int
        - ``amount`` always has exactly two decimal places

    Non-goals:
        - Does NOT support other currencies
        - Does NOT represent negative balances
    """

    cents: int

    def __post_init__(self) -> None:
        if isinstance(self.cents, bool) or not isinstance(self.cents, int):
            raise TypeError(f"cents must be int, got {type(self.cents).__name__}")
        if self.cents < 0:
            raise ValueError(f"Amount must be non-negative: {self.cents} cents")

    @classmethod
    def of(cls, value: Decimal | int | float | str) -> MonetaryAmount:
        """
        Factory method for creating an amount from a decimal value.

        Args:
            value: Amount in reais, e.g. ``Decimal("1234.5")`` or ``"100"``.

        Returns:
            MonetaryAmount rounded half-up to cents.

        Raises:
            ValueError: If value is negative, non-finite or unparsable.
        """
        try:
            dec = to_decimal(value)
            if not dec.is_finite():
                raise ValueError(f"Amount must be finite: {value!r}")
            cents = int(quantize_cents(dec) * 100)
        except DecimalException as e:
            raise ValueError(f"Invalid amount: {value!r}") from e
        return cls(cents=cents)

    @classmethod
    def from_cents(cls, cents: int) -> MonetaryAmount:
        """Create an amount from an integer number of centavos."""
        return cls(cents=cents)

    @classmethod
    def zero(cls) -> MonetaryAmount:
        """Create a zero amount."""
        return cls(cents=0)

    @property
    def amount(self) -> Decimal:
        """Amount in reais with exactly two decimal places."""
        return Decimal(self.cents).scaleb(-2)

    @property
    def currency(self) -> str:
        return CURRENCY_CODE

    @property
    def reais(self) -> int:
        """Integer part of the amount."""
        return self.cents // 100

    @property
    def centavos(self) -> int:
        """Fractional part of the amount, 0-99."""
        return self.cents % 100

    @property
    def is_zero(self) -> bool:
        return self.cents == 0

    def __add__(self, other: MonetaryAmount) -> MonetaryAmount:
        if not isinstance(other, MonetaryAmount):
            return NotImplemented
        return MonetaryAmount(cents=self.cents + other.cents)

    def __mul__(self, factor: int) -> MonetaryAmount:
        if isinstance(factor, bool) or not isinstance(factor, int):
            return NotImplemented
        return MonetaryAmount(cents=self.cents * factor)

    def __rmul__(self, factor: int) -> MonetaryAmount:
        return self.__mul__(factor)

    def __lt__(self, other: MonetaryAmount) -> bool:
        if not isinstance(other, MonetaryAmount):
            return NotImplemented
        return self.cents < other.cents

    def __le__(self, other: MonetaryAmount) -> bool:
        if not isinstance(other, MonetaryAmount):
            return NotImplemented
        return self.cents <= other.cents

    def __gt__(self, other: MonetaryAmount) -> bool:
        if not isinstance(other, MonetaryAmount):
            return NotImplemented
        return self.cents > other.cents

    def __ge__(self, other: MonetaryAmount) -> bool:
        if not isinstance(other, MonetaryAmount):
            return NotImplemented
        return self.cents >= other.cents

    def __str__(self) -> str:
        return f"{self.amount} {CURRENCY_CODE}"

    def __repr__(self) -> str:
        return f"MonetaryAmount({str(self.amount)!r})"
