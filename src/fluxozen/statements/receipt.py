#!/usr/bin/env python3
"""
Receipt Scanning

Suggests transaction fields from the raw text of a scanned receipt. Text
recognition itself is delegated to a TextExtractor collaborator; this module
only applies the extraction patterns to the recognized text.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Protocol

from ..core.currency import parse_amount
from ..core.dates import FinancialDate, parse_date_token
from ..core.money import Money

logger = logging.getLogger(__name__)

FALLBACK_DESCRIPTION = "Digital Receipt Scan"

_AMOUNT = re.compile(r"R?\$?\s?(\d{1,3}(?:\.\d{3})*,\d{2})")
_DATE = re.compile(r"(\d{2})/(\d{2})/(\d{4})")
_FISCAL_WORDS = re.compile(r"CNPJ|CPF|NOTA|FISCAL", re.IGNORECASE)

ProgressCallback = Callable[[int], None]


class TextExtractor(Protocol):
    """Recognizes text in a receipt image."""

    def recognize(self, image: bytes, progress: ProgressCallback | None = None) -> str:
        """Return raw text; progress receives percentages 0-100."""
        ...


@dataclass(frozen=True)
class ReceiptScan:
    """Fields suggested from a receipt; any of them may be missing."""

    description: str = FALLBACK_DESCRIPTION
    amount: Money | None = None
    date: FinancialDate | None = None
    raw_text: str = ""


def _largest_amount(text: str) -> Money | None:
    values = [parse_amount(match) for match in _AMOUNT.findall(text)]
    values = [v for v in values if v is not None]
    if not values:
        return None
    return Money.from_decimal(max(values))


def _first_date(text: str) -> FinancialDate | None:
    match = _DATE.search(text)
    if not match:
        return None
    return parse_date_token(match.group(0))


def _description(text: str) -> str:
    for line in text.splitlines():
        if len(line.strip()) > 2:
            cleaned = " ".join(_FISCAL_WORDS.sub("", line).split())
            return cleaned or FALLBACK_DESCRIPTION
    return FALLBACK_DESCRIPTION


def extract_receipt_fields(text: str) -> ReceiptScan:
    """
    Apply the receipt patterns to recognized text.

    - amount: the largest "R$ 1.234,56"-style value (the receipt total)
    - date: the first DD/MM/YYYY occurrence
    - description: first line longer than 2 characters, fiscal words removed

    Example:
        >>> scan = extract_receipt_fields("Padaria Central\\n05/03/2025\\nTOTAL R$ 42,90")
        >>> scan.description, str(scan.amount)
        ('Padaria Central', 'R$ 42,90')
    """
    return ReceiptScan(
        description=_description(text),
        amount=_largest_amount(text),
        date=_first_date(text),
        raw_text=text,
    )


def scan_receipt(
    image: bytes,
    extractor: TextExtractor,
    progress: ProgressCallback | None = None,
) -> ReceiptScan | None:
    """
    Recognize a receipt image and extract its fields.

    Returns:
        ReceiptScan, or None if text recognition failed
    """
    try:
        text = extractor.recognize(image, progress)
    except Exception as e:
        logger.error(f"Receipt text recognition failed: {e}")
        return None

    scan = extract_receipt_fields(text)
    logger.debug(f"Receipt scan: description={scan.description!r} amount={scan.amount} date={scan.date}")
    return scan
