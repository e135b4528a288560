#!/usr/bin/env python3
"""
Amount Parsing and Currency Formatting

Normalizes locale-ambiguous numeric strings from bank statements and receipts
into canonical decimal amounts, and formats integer cents for display.

Currency Systems:
- Statements carry free-form strings: "1.234,56", "1234.56", "R$ 40,00"
- Internal calculations use cents: 100 cents = R$ 1,00
- Display uses BRL strings: "R$ 1.234,56"

Separator Rules (parse_amount):
- Both "." and "," present: "." groups thousands, "," is the decimal point
- Only "," present: "," is the decimal point
- Otherwise: plain decimal ("1.234" stays 1.234, never 1234)

Amounts of 10^15 reais or more are rejected, keeping the conversion to cents
within the default decimal context precision.
"""

import re
from decimal import Decimal, InvalidOperation

CURRENCY_MARKERS = ("R$", "$")

MAX_AMOUNT = Decimal(10) ** 15

_WHITESPACE = re.compile(r"\s+")


def strip_currency_marker(raw: str) -> str:
    """
    Remove currency markers and all whitespace from an amount string.

    Example:
        strip_currency_marker(" R$ 1.234,56 ") -> "1.234,56"
        strip_currency_marker("-R$ 40,00") -> "-40,00"
    """
    clean = str(raw)
    for marker in CURRENCY_MARKERS:
        clean = clean.replace(marker, "")
    return _WHITESPACE.sub("", clean)


def parse_amount(raw: str) -> Decimal | None:
    """
    Parse a locale-ambiguous amount string into a Decimal.

    Args:
        raw: Amount like "1.234,56", "1234.56", "1234,56" or "R$ -40,00"

    Returns:
        Decimal value, or None when the string is not a finite number below
        MAX_AMOUNT in magnitude

    Examples:
        parse_amount("1.234,56") -> Decimal("1234.56")
        parse_amount("1234,56") -> Decimal("1234.56")
        parse_amount("1.234") -> Decimal("1.234")
        parse_amount("Valor") -> None
    """
    clean = strip_currency_marker(raw)
    if not clean:
        return None

    if "," in clean and "." in clean:
        clean = clean.replace(".", "").replace(",", ".")
    elif "," in clean:
        clean = clean.replace(",", ".")

    try:
        value = Decimal(clean)
    except (InvalidOperation, ValueError):
        return None

    if not value.is_finite() or abs(value) >= MAX_AMOUNT:
        return None
    return value


def is_amount(raw: str) -> bool:
    """Check if a string parses as an amount."""
    return parse_amount(raw) is not None


def format_brl_number(cents: int) -> str:
    """
    Format cents with pt-BR grouping and decimal separators, no symbol.

    Example:
        format_brl_number(123456) -> "1.234,56"
        format_brl_number(-4000) -> "-40,00"
    """
    is_negative = cents < 0
    abs_cents = abs(int(cents))

    reais = abs_cents // 100
    remainder = abs_cents % 100

    grouped = f"{reais:,}".replace(",", ".")
    text = f"{grouped},{remainder:02d}"
    return f"-{text}" if is_negative else text


def format_brl(cents: int) -> str:
    """
    Format cents as a BRL currency string.

    Example:
        format_brl(123456) -> "R$ 1.234,56"
        format_brl(-4000) -> "-R$ 40,00"
    """
    if cents < 0:
        return f"-R$ {format_brl_number(-cents)}"
    return f"R$ {format_brl_number(cents)}"
