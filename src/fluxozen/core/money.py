#!/usr/bin/env python3
"""
Money Primitive Type

Immutable currency value wrapper that uses integer cents internally.
Prevents floating-point errors and provides type-safe currency operations.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from .currency import format_brl, parse_amount


@dataclass(frozen=True)
class Money:
    """
    Immutable money value in cents (BRL).

    Supports both positive (income/inflows) and negative (expense/outflows) amounts.
    Uses integer arithmetic throughout to prevent floating-point errors.

    Examples:
        >>> income = Money.from_cents(123456)
        >>> str(income)
        'R$ 1.234,56'

        >>> expense = Money.parse("-40,00")
        >>> expense.to_cents()
        -4000

        >>> expense.abs()
        Money(cents=4000)
    """

    cents: int

    @classmethod
    def from_cents(cls, cents: int) -> "Money":
        """Create Money from cents."""
        return cls(cents=cents)

    @classmethod
    def zero(cls) -> "Money":
        """Create a zero amount."""
        return cls(cents=0)

    @classmethod
    def from_decimal(cls, value: Decimal | int | str) -> "Money":
        """
        Create Money from a decimal amount in reais.

        Fractions of a cent are rounded half-up.

        Args:
            value: Decimal, integer reais, or plain decimal string ("12.34")

        Returns:
            Money object
        """
        amount = value if isinstance(value, Decimal) else Decimal(value)
        cents = (amount * 100).quantize(Decimal(1), rounding=ROUND_HALF_UP)
        return cls(cents=int(cents))

    @classmethod
    def parse(cls, raw: str) -> "Money | None":
        """
        Parse a locale-ambiguous amount string.

        Returns:
            Money object, or None if the string is not a number
        """
        value = parse_amount(raw)
        if value is None:
            return None
        return cls.from_decimal(value)

    def to_cents(self) -> int:
        """Get value in cents."""
        return self.cents

    def to_decimal(self) -> Decimal:
        """Get value in reais as a Decimal with two places."""
        return Decimal(self.cents) / Decimal(100)

    def abs(self) -> "Money":
        """Return absolute value of Money."""
        return Money(cents=abs(self.cents))

    def is_negative(self) -> bool:
        """Check if amount is below zero."""
        return self.cents < 0

    def __add__(self, other: "Money") -> "Money":
        """Add two Money objects."""
        return Money(cents=self.cents + other.cents)

    def __sub__(self, other: "Money") -> "Money":
        """Subtract two Money objects."""
        return Money(cents=self.cents - other.cents)

    def __neg__(self) -> "Money":
        """Negate Money."""
        return Money(cents=-self.cents)

    def __mul__(self, scalar: int) -> "Money":
        """Multiply Money by integer scalar."""
        return Money(cents=self.cents * scalar)

    def __lt__(self, other: "Money") -> bool:
        return self.cents < other.cents

    def __le__(self, other: "Money") -> bool:
        return self.cents <= other.cents

    def __gt__(self, other: "Money") -> bool:
        return self.cents > other.cents

    def __ge__(self, other: "Money") -> bool:
        return self.cents >= other.cents

    def __str__(self) -> str:
        """Format as BRL string."""
        return format_brl(self.cents)

    def __repr__(self) -> str:
        return f"Money(cents={self.cents})"


def sum_money(amounts) -> Money:
    """Sum an iterable of Money objects (empty sums to zero)."""
    total = 0
    for amount in amounts:
        total += amount.cents
    return Money(cents=total)
