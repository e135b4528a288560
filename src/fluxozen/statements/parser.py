#!/usr/bin/env python3
"""
Bank Statement Parser

Converts raw CSV or OFX statement content into normalized import candidates
with signed amounts (negative = expense). The format is chosen from the file
extension only.

CSV rules:
- separator is ";" when the first line contains one, otherwise ","
- no header when the first field of line 1 looks like a date
- date is column 0; amount is column 1 when it parses, else the last column

OFX rules:
- content is split on <STMTTRN>; the preamble before the first tag is dropped
- each block needs both <DTPOSTED> (YYYYMMDD) and <TRNAMT>

Rows that cannot be parsed are dropped; an empty result is reported through
ParseResult.error so callers can tell "nothing recognized" from success.
"""

import logging
import re
from dataclasses import dataclass, field

from ..core.currency import parse_amount
from ..core.dates import FinancialDate, looks_like_date, parse_date_token
from ..core.money import Money

logger = logging.getLogger(__name__)

IMPORTED_DESCRIPTION = "Imported Transaction"

UNSUPPORTED_FORMAT = "unsupported format"
NO_DATA_RECOGNIZED = "no data recognized in file"

SUPPORTED_EXTENSIONS = (".csv", ".ofx")

_LINE_BREAK = re.compile(r"\r?\n")
_OFX_DATE = re.compile(r"<DTPOSTED>\s*(\d{8})")
_OFX_AMOUNT = re.compile(r"<TRNAMT>\s*([-+]?\d+(?:[.,]\d+)?)\s*(?:<|$)")


@dataclass(frozen=True)
class StatementCandidate:
    """Parsed statement row awaiting category/account assignment."""

    date: FinancialDate
    amount: Money  # Signed: negative is an outflow
    description: str = IMPORTED_DESCRIPTION

    @property
    def is_expense(self) -> bool:
        return self.amount.is_negative()


@dataclass
class ParseResult:
    """Candidates parsed from one statement file."""

    candidates: list[StatementCandidate] = field(default_factory=list)
    error: str | None = None
    dropped_rows: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.candidates)


def decode_statement(content: str | bytes) -> str:
    """
    Decode statement bytes.

    UTF-8 is tried first (a leading BOM is removed); Latin-1 is the fallback
    since many Brazilian bank exports still use it.
    """
    if isinstance(content, str):
        return content.lstrip("\ufeff")
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError:
        return content.decode("latin-1")


def detect_format(filename: str) -> str | None:
    """Return "csv", "ofx", or None for unsupported extensions."""
    lowered = filename.lower()
    for extension in SUPPORTED_EXTENSIONS:
        if lowered.endswith(extension):
            return extension[1:]
    return None


def parse_statement(content: str | bytes, filename: str) -> ParseResult:
    """
    Parse statement file content into import candidates.

    Args:
        content: Raw file content (text or bytes)
        filename: Original file name, used only to select the format

    Returns:
        ParseResult with candidates, or an error of UNSUPPORTED_FORMAT /
        NO_DATA_RECOGNIZED
    """
    file_format = detect_format(filename)
    if file_format is None:
        logger.warning(f"Unsupported statement format: {filename}")
        return ParseResult(error=UNSUPPORTED_FORMAT)

    text = decode_statement(content)
    if file_format == "csv":
        result = parse_csv(text)
    else:
        result = parse_ofx(text)

    logger.info(f"Parsed {len(result.candidates)} candidates from {filename} ({result.dropped_rows} rows dropped)")
    return result


def _select_amount(columns: list[str]) -> Money | None:
    """Amount from column 1 when it parses, otherwise from the last column."""
    for raw in (columns[1], columns[-1]):
        value = parse_amount(raw)
        if value is not None:
            return Money.from_decimal(value)
    return None


def parse_csv(text: str) -> ParseResult:
    """
    Parse delimited statement text.

    Args:
        text: Decoded CSV content

    Returns:
        ParseResult with one candidate per recognized row
    """
    lines = [line for line in _LINE_BREAK.split(text) if line.strip()]
    if not lines:
        return ParseResult(error=NO_DATA_RECOGNIZED)

    separator = ";" if ";" in lines[0] else ","
    start_index = 0 if looks_like_date(lines[0].split(separator)[0]) else 1

    result = ParseResult()
    for line in lines[start_index:]:
        columns = line.split(separator)
        if len(columns) < 2:
            result.dropped_rows += 1
            continue

        amount = _select_amount(columns)
        date = parse_date_token(columns[0])
        if amount is None or date is None:
            logger.debug(f"Dropping unparsable CSV row: {line!r}")
            result.dropped_rows += 1
            continue

        result.candidates.append(StatementCandidate(date=date, amount=amount))

    if not result.candidates:
        result.error = NO_DATA_RECOGNIZED
    return result


def parse_ofx(text: str) -> ParseResult:
    """
    Parse OFX statement text with tag pattern matching.

    Args:
        text: Decoded OFX content (SGML or XML flavour)

    Returns:
        ParseResult with one candidate per complete <STMTTRN> block
    """
    blocks = text.split("<STMTTRN>")[1:]

    result = ParseResult()
    for block in blocks:
        date_match = _OFX_DATE.search(block)
        amount_match = _OFX_AMOUNT.search(block)
        if not date_match or not amount_match:
            result.dropped_rows += 1
            continue

        raw_date = date_match.group(1)
        date = parse_date_token(f"{raw_date[0:4]}-{raw_date[4:6]}-{raw_date[6:8]}")
        value = parse_amount(amount_match.group(1))
        if date is None or value is None:
            logger.debug(f"Dropping unparsable OFX block with DTPOSTED={raw_date}")
            result.dropped_rows += 1
            continue

        result.candidates.append(StatementCandidate(date=date, amount=Money.from_decimal(value)))

    if not result.candidates:
        result.error = NO_DATA_RECOGNIZED
    return result
