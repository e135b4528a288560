#!/usr/bin/env python3
"""
LedgerStore Protocol - persistence collaborator for the ledger.

The engine keeps no storage of its own; it calls a table-oriented store (a
hosted SQL table API, or JsonLedgerStore locally) through this interface.
Expected failures are signalled through return values, never exceptions:
insert returns None, update/delete return False.
"""

from typing import Any, Protocol

ACCOUNTS = "accounts"
CATEGORIES = "categories"
TRANSACTIONS = "transactions"

TABLES = (ACCOUNTS, CATEGORIES, TRANSACTIONS)


class LedgerStore(Protocol):
    """
    Protocol for ledger persistence.

    Rows are plain dictionaries as produced by the models' to_dict().
    """

    def load(self) -> dict[str, list[dict[str, Any]]]:
        """
        Load every table.

        Returns:
            Dictionary with 'accounts', 'categories' and 'transactions' row lists
        """
        ...

    def insert(self, table: str, rows: list[dict[str, Any]]) -> list[dict[str, Any]] | None:
        """
        Insert rows as one atomic batch, assigning ids.

        Returns:
            The inserted rows with their ids (same order), or None on failure.
            A failed batch must leave the table unchanged.
        """
        ...

    def update(self, table: str, row: dict[str, Any]) -> bool:
        """
        Replace the row with the same id.

        Returns:
            True on success, False on failure
        """
        ...

    def delete(self, table: str, row_id: str) -> bool:
        """
        Delete the row with the given id.

        Returns:
            True on success, False on failure
        """
        ...
