"""
Core Utilities Package

Shared primitives and models used by every FluxoZen package.

This package provides:
- Money (integer cents) and FinancialDate primitives
- Amount and date-token normalizers for statement data
- Ledger data models, anomaly records and operation results
- The LedgerStore persistence protocol
- Environment-based configuration and logging setup
"""

from .config import (
    Config,
    Environment,
    get_config,
    get_data_dir,
    is_development,
    is_production,
    is_test,
    reload_config,
)
from .currency import format_brl, format_brl_number, is_amount, parse_amount, strip_currency_marker
from .datastore import LedgerStore
from .dates import FinancialDate, add_months, looks_like_date, parse_date_token, same_month
from .models import (
    DEFAULT_ACCOUNTS,
    DEFAULT_CATEGORIES,
    Account,
    AccountType,
    Anomaly,
    AnomalyType,
    Category,
    Frequency,
    Installments,
    OperationResult,
    Severity,
    Transaction,
    TransactionType,
)
from .money import Money, sum_money

__all__ = [
    "Account",
    "AccountType",
    "Anomaly",
    "AnomalyType",
    "Category",
    # Configuration
    "Config",
    "DEFAULT_ACCOUNTS",
    "DEFAULT_CATEGORIES",
    "Environment",
    "FinancialDate",
    "Frequency",
    "Installments",
    "LedgerStore",
    "Money",
    "OperationResult",
    "Severity",
    # Data models
    "Transaction",
    "TransactionType",
    "add_months",
    "format_brl",
    "format_brl_number",
    "get_config",
    "get_data_dir",
    "is_amount",
    "is_development",
    "is_production",
    "is_test",
    # Normalizers
    "looks_like_date",
    "parse_amount",
    "parse_date_token",
    "reload_config",
    "same_month",
    "strip_currency_marker",
    "sum_money",
]
