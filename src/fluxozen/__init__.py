"""
FluxoZen - Cash-Flow Engine for Small Businesses

Pure, deterministic financial computations over an in-memory transaction
ledger: balance derivation, monthly aggregation, anomaly detection, and
bank statement import with reconciliation.

Domain Packages:
- core: Money/date primitives, data models, configuration, store protocol
- statements: CSV/OFX statement parsing, import reconciliation, receipt text extraction
- ledger: Ledger object, JSON-backed store, manual entry and installments
- analysis: Balances and monthly metrics, anomaly detection, reports and export
- cli: Command-line interface

Example Usage:
    from fluxozen.ledger import Ledger, JsonLedgerStore
    from fluxozen.analysis import dashboard_metrics, rescan
    from fluxozen.statements import import_statement
"""

__version__ = "0.3.0"
__author__ = "FluxoZen Team"

from .core.currency import format_brl, parse_amount
from .core.dates import FinancialDate, looks_like_date, parse_date_token
from .core.models import Account, Anomaly, Category, Transaction, TransactionType
from .core.money import Money

__all__ = [
    "Account",
    "Anomaly",
    "Category",
    "FinancialDate",
    "Money",
    "Transaction",
    "TransactionType",
    "format_brl",
    "looks_like_date",
    "parse_amount",
    "parse_date_token",
]
