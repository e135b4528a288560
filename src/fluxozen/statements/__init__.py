"""
Statements Package

Bank statement parsing (CSV/OFX), reconciliation into ledger drafts, and
receipt text extraction.
"""

from .parser import (
    IMPORTED_DESCRIPTION,
    NO_DATA_RECOGNIZED,
    UNSUPPORTED_FORMAT,
    ParseResult,
    StatementCandidate,
    parse_statement,
)
from .receipt import ReceiptScan, TextExtractor, extract_receipt_fields, scan_receipt
from .reconciler import ImportOutcome, import_statement, reconcile

__all__ = [
    "IMPORTED_DESCRIPTION",
    "ImportOutcome",
    "NO_DATA_RECOGNIZED",
    "ParseResult",
    "ReceiptScan",
    "StatementCandidate",
    "TextExtractor",
    "UNSUPPORTED_FORMAT",
    "extract_receipt_fields",
    "import_statement",
    "parse_statement",
    "reconcile",
    "scan_receipt",
]
