#!/usr/bin/env python3
"""
JSON Ledger Store

File-backed LedgerStore implementation. Each table lives in its own JSON file
(accounts.json, categories.json, transactions.json) under the store directory;
dismissed anomaly ids are kept next to them in dismissals.json.
"""

import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any

from ..core.datastore import TABLES
from ..core.json_utils import read_json, write_json
from ..core.models import DEFAULT_ACCOUNTS, DEFAULT_CATEGORIES

logger = logging.getLogger(__name__)


def generate_id() -> str:
    """Generate a short random row id."""
    return uuid.uuid4().hex[:12]


class JsonLedgerStore:
    """
    LedgerStore persisting each table to a JSON file.

    Writes are atomic per table; an OSError while writing is reported as a
    failed mutation (None / False) rather than raised.
    """

    def __init__(self, store_dir: Path):
        """
        Initialize JSON ledger store.

        Args:
            store_dir: Directory holding the table files (data/ledger)
        """
        self.store_dir = Path(store_dir)
        self.dismissals_file = self.store_dir / "dismissals.json"

    def _table_file(self, table: str) -> Path:
        if table not in TABLES:
            raise ValueError(f"Unknown ledger table: {table}")
        return self.store_dir / f"{table}.json"

    def _read_table(self, table: str) -> list[dict[str, Any]]:
        data = read_json(self._table_file(table), default=[])
        return data if isinstance(data, list) else []

    def _write_table(self, table: str, rows: list[dict[str, Any]]) -> bool:
        try:
            write_json(self._table_file(table), rows)
        except OSError as e:
            logger.error(f"Failed to write {table} table: {e}")
            return False
        return True

    def exists(self) -> bool:
        """Check if any ledger table file exists."""
        return any(self._table_file(table).exists() for table in TABLES)

    def load(self) -> dict[str, list[dict[str, Any]]]:
        """Load all tables; missing files load as empty tables."""
        return {table: self._read_table(table) for table in TABLES}

    def insert(self, table: str, rows: list[dict[str, Any]]) -> list[dict[str, Any]] | None:
        """Append rows with freshly generated ids."""
        existing = self._read_table(table)
        inserted = [{**row, "id": row.get("id") or generate_id()} for row in rows]
        if not self._write_table(table, existing + inserted):
            return None
        return inserted

    def update(self, table: str, row: dict[str, Any]) -> bool:
        """Replace the row with the same id; unknown ids fail."""
        existing = self._read_table(table)
        if not any(r.get("id") == row.get("id") for r in existing):
            return False
        updated = [dict(row) if r.get("id") == row.get("id") else r for r in existing]
        return self._write_table(table, updated)

    def delete(self, table: str, row_id: str) -> bool:
        """Delete the row with the given id; unknown ids fail."""
        existing = self._read_table(table)
        remaining = [r for r in existing if r.get("id") != row_id]
        if len(remaining) == len(existing):
            return False
        return self._write_table(table, remaining)

    def seed_defaults(self) -> bool:
        """
        Write the default accounts and categories into empty tables.

        Returns:
            True if anything was written
        """
        seeded = False
        if not self._read_table("accounts"):
            seeded |= self._write_table("accounts", [a.to_dict() for a in DEFAULT_ACCOUNTS])
        if not self._read_table("categories"):
            seeded |= self._write_table("categories", [c.to_dict() for c in DEFAULT_CATEGORIES])
        return seeded

    def load_dismissals(self) -> set[str]:
        """Load dismissed anomaly transaction ids."""
        data = read_json(self.dismissals_file, default=[])
        return {str(tx_id) for tx_id in data} if isinstance(data, list) else set()

    def save_dismissals(self, transaction_ids: set[str] | frozenset[str]) -> None:
        """Persist dismissed anomaly transaction ids."""
        write_json(self.dismissals_file, sorted(transaction_ids))

    def last_modified(self) -> datetime | None:
        """Get timestamp of the most recently written table file."""
        files = [self._table_file(table) for table in TABLES if self._table_file(table).exists()]
        if not files:
            return None
        return datetime.fromtimestamp(max(f.stat().st_mtime for f in files))

    def item_count(self) -> int | None:
        """Get count of stored transactions."""
        if not self.exists():
            return None
        return len(self._read_table("transactions"))

    def summary_text(self) -> str:
        """Get human-readable summary of current store state."""
        if not self.exists():
            return f"No ledger data in {self.store_dir}"

        counts = {table: len(self._read_table(table)) for table in TABLES}
        last_mod = self.last_modified()
        updated = last_mod.strftime("%Y-%m-%d %H:%M") if last_mod else "unknown"
        return (
            f"{counts['accounts']} accounts, {counts['categories']} categories, "
            f"{counts['transactions']} transactions (updated {updated})"
        )
