"""
Ledger Package

The ledger owns accounts, categories and transactions for one session and
applies every mutation through a LedgerStore.

Key Components:
- Ledger / LedgerSnapshot: mutations and immutable read views
- JsonLedgerStore: file-backed store implementation
- TransactionForm / generate_installments: manual entry and installment expansion
"""

from .entry import TransactionForm, generate_installments
from .ledger import CATEGORY_IN_USE, STORE_FAILURE, Ledger, LedgerNotLoadedError, LedgerSnapshot
from .store import JsonLedgerStore

__all__ = [
    "CATEGORY_IN_USE",
    "JsonLedgerStore",
    "Ledger",
    "LedgerNotLoadedError",
    "LedgerSnapshot",
    "STORE_FAILURE",
    "TransactionForm",
    "generate_installments",
]
