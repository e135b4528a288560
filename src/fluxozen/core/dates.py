#!/usr/bin/env python3
"""
FinancialDate Primitive Type

Immutable calendar-date wrapper plus the date-token normalizer used by
statement import. Only two token shapes are recognized:

- DD/MM/YYYY (Brazilian bank exports) -> converted to ISO
- YYYY-MM-DD (already ISO)
"""

import calendar
import re
from dataclasses import dataclass
from datetime import date, datetime

_BR_DATE = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")
_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


@dataclass(frozen=True)
class FinancialDate:
    """Immutable financial date wrapper with consistent formatting."""

    date: date

    @classmethod
    def from_string(cls, date_str: str, format: str = "%Y-%m-%d") -> "FinancialDate":
        """
        Parse from string in specified format.

        Args:
            date_str: Date string to parse
            format: Date format (default: ISO format "%Y-%m-%d")

        Returns:
            FinancialDate object
        """
        return cls(date=datetime.strptime(date_str, format).date())

    @classmethod
    def of(cls, year: int, month: int, day: int) -> "FinancialDate":
        """Create from calendar components."""
        return cls(date=date(year, month, day))

    @classmethod
    def today(cls) -> "FinancialDate":
        """Get today's date."""
        return cls(date=date.today())

    @property
    def year(self) -> int:
        return self.date.year

    @property
    def month(self) -> int:
        return self.date.month

    def is_weekend(self) -> bool:
        """Check if date falls on Saturday or Sunday."""
        return self.date.weekday() >= 5

    def same_month(self, other: "FinancialDate | date") -> bool:
        """Check if both dates share calendar month and year."""
        return same_month(self.date, other)

    def add_months(self, months: int) -> "FinancialDate":
        """Shift by whole months, clamping the day to the target month's end."""
        return FinancialDate(date=add_months(self.date, months))

    def to_iso_string(self) -> str:
        """Format as YYYY-MM-DD."""
        return self.date.isoformat()

    def to_br_string(self) -> str:
        """Format as DD/MM/YYYY."""
        return self.date.strftime("%d/%m/%Y")

    def __str__(self) -> str:
        return self.to_iso_string()

    def __lt__(self, other: "FinancialDate") -> bool:
        return self.date < other.date

    def __le__(self, other: "FinancialDate") -> bool:
        return self.date <= other.date

    def __gt__(self, other: "FinancialDate") -> bool:
        return self.date > other.date

    def __ge__(self, other: "FinancialDate") -> bool:
        return self.date >= other.date

    def __repr__(self) -> str:
        return f"FinancialDate(date={self.date!r})"


def looks_like_date(token: str) -> bool:
    """Check if a token has exactly the DD/MM/YYYY or YYYY-MM-DD shape."""
    token = token.strip()
    return bool(_BR_DATE.match(token) or _ISO_DATE.match(token))


def parse_date_token(token: str) -> FinancialDate | None:
    """
    Convert a statement date token into a FinancialDate.

    Args:
        token: "25/12/2025" or "2025-12-25"

    Returns:
        FinancialDate, or None if the token has another shape or is not a
        valid calendar date

    Examples:
        parse_date_token("25/12/2025").to_iso_string() -> "2025-12-25"
        parse_date_token("2025-12-25").to_iso_string() -> "2025-12-25"
        parse_date_token("12/25/2025") -> None
    """
    token = token.strip()

    match = _BR_DATE.match(token)
    if match:
        day, month, year = (int(part) for part in match.groups())
    else:
        match = _ISO_DATE.match(token)
        if not match:
            return None
        year, month, day = (int(part) for part in match.groups())

    try:
        return FinancialDate.of(year, month, day)
    except ValueError:
        return None


def as_date(value: "FinancialDate | date") -> date:
    """Unwrap a FinancialDate, passing plain dates through."""
    if isinstance(value, FinancialDate):
        return value.date
    return value


def same_month(a: "FinancialDate | date", b: "FinancialDate | date") -> bool:
    """Check if two dates share calendar month and year."""
    first, second = as_date(a), as_date(b)
    return first.year == second.year and first.month == second.month


def add_months(value: date, months: int) -> date:
    """
    Shift a date by whole months.

    The day is clamped to the last day of the target month, so January 31st
    plus one month is the last day of February.
    """
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(value.day, last_day))


def parse_month(value: str) -> date:
    """
    Parse a YYYY-MM month string into the first day of that month.

    Raises:
        ValueError: If the string is not a valid YYYY-MM month
    """
    return datetime.strptime(value.strip(), "%Y-%m").date()
