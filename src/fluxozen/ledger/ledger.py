#!/usr/bin/env python3
"""
Ledger - explicit owner of accounts, categories and transactions.

The ledger is the single consistency domain of the engine. Every mutation is
delegated to a LedgerStore and applied to the in-memory view only after the
store confirms it, so a failed store call leaves the ledger unchanged.
Aggregation and anomaly detection read immutable snapshots instead of the
ledger itself.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable

from ..core.datastore import ACCOUNTS, CATEGORIES, TRANSACTIONS, LedgerStore
from ..core.dates import FinancialDate, same_month
from ..core.models import Account, Category, OperationResult, Transaction, TransactionType

logger = logging.getLogger(__name__)

CATEGORY_IN_USE = "This category has linked transactions and cannot be deleted."
STORE_FAILURE = "The change could not be saved. Please try again."


class LedgerNotLoadedError(RuntimeError):
    """Raised when a ledger operation runs before load()."""

    pass


@dataclass(frozen=True)
class LedgerSnapshot:
    """Immutable view of the ledger at one point in time."""

    accounts: tuple[Account, ...] = ()
    categories: tuple[Category, ...] = ()
    transactions: tuple[Transaction, ...] = ()
    category_index: dict[str, Category] = field(default_factory=dict, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not self.category_index:
            object.__setattr__(self, "category_index", {c.id: c for c in self.categories})

    def category(self, category_id: str) -> Category | None:
        return self.category_index.get(category_id)

    def account(self, account_id: str) -> Account | None:
        for account in self.accounts:
            if account.id == account_id:
                return account
        return None


class Ledger:
    """
    In-memory ledger backed by a persistence collaborator.

    Example:
        >>> ledger = Ledger(JsonLedgerStore(store_dir))
        >>> ledger.load()
        >>> result = ledger.delete_category("cat_exp_10")
        >>> result.success
        False
    """

    def __init__(self, store: LedgerStore):
        self.store = store
        self._accounts: list[Account] = []
        self._categories: list[Category] = []
        self._transactions: list[Transaction] = []
        self._loaded = False

    def load(self) -> "Ledger":
        """
        Populate the ledger from the store.

        Returns:
            self, for chaining
        """
        data = self.store.load()
        self._accounts = [Account.from_dict(row) for row in data.get(ACCOUNTS, [])]
        self._categories = [Category.from_dict(row) for row in data.get(CATEGORIES, [])]
        self._transactions = [Transaction.from_dict(row) for row in data.get(TRANSACTIONS, [])]
        self._loaded = True

        logger.info(
            f"Loaded ledger: {len(self._accounts)} accounts, {len(self._categories)} categories, "
            f"{len(self._transactions)} transactions"
        )
        return self

    def _require_loaded(self) -> None:
        if not self._loaded:
            raise LedgerNotLoadedError("Ledger has not been loaded; call load() first")

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def accounts(self) -> tuple[Account, ...]:
        self._require_loaded()
        return tuple(self._accounts)

    @property
    def categories(self) -> tuple[Category, ...]:
        self._require_loaded()
        return tuple(self._categories)

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        self._require_loaded()
        return tuple(self._transactions)

    def snapshot(self) -> LedgerSnapshot:
        """Get an immutable snapshot for aggregation and anomaly scans."""
        self._require_loaded()
        return LedgerSnapshot(
            accounts=tuple(self._accounts),
            categories=tuple(self._categories),
            transactions=tuple(self._transactions),
        )

    def find_transaction(self, transaction_id: str) -> Transaction | None:
        self._require_loaded()
        for tx in self._transactions:
            if tx.id == transaction_id:
                return tx
        return None

    def transactions_for_month(self, month: FinancialDate | date) -> list[Transaction]:
        """Transactions whose date falls in the calendar month of `month`."""
        self._require_loaded()
        return [tx for tx in self._transactions if same_month(tx.date, month)]

    # --- Transactions ---

    def _insert(self, table: str, rows: list[dict[str, Any]]) -> list[dict[str, Any]] | None:
        for row in rows:
            row.pop("id", None)
        inserted = self.store.insert(table, rows)
        if inserted is None or len(inserted) != len(rows):
            logger.error(f"Store rejected insert of {len(rows)} rows into {table}")
            return None
        return inserted

    def add_transaction(self, draft: Transaction) -> OperationResult:
        """
        Commit a single new transaction.

        Returns:
            OperationResult whose records hold the committed transaction
        """
        return self.import_transactions([draft])

    def import_transactions(self, drafts: Iterable[Transaction]) -> OperationResult:
        """
        Commit a batch of transactions as one store mutation.

        Either every draft is committed or none is.

        Returns:
            OperationResult whose records hold the committed transactions
        """
        self._require_loaded()
        drafts = list(drafts)
        if not drafts:
            return OperationResult.ok()

        inserted = self._insert(TRANSACTIONS, [tx.to_dict() for tx in drafts])
        if inserted is None:
            return OperationResult.failed(STORE_FAILURE)

        committed = [draft.with_id(row["id"]) for draft, row in zip(drafts, inserted)]
        self._transactions = committed + self._transactions
        logger.info(f"Committed {len(committed)} transactions")
        return OperationResult.ok(committed)

    def update_transaction(self, tx: Transaction) -> OperationResult:
        self._require_loaded()
        if not self.store.update(TRANSACTIONS, tx.to_dict()):
            logger.error(f"Store rejected update of transaction {tx.id}")
            return OperationResult.failed(STORE_FAILURE)

        self._transactions = [tx if t.id == tx.id else t for t in self._transactions]
        return OperationResult.ok([tx])

    def delete_transaction(self, transaction_id: str) -> Transaction | None:
        """
        Delete a transaction.

        Returns:
            The deleted transaction (kept by callers for undo), or None when
            it does not exist or the store rejected the delete
        """
        self._require_loaded()
        target = self.find_transaction(transaction_id)
        if target is None:
            return None

        if not self.store.delete(TRANSACTIONS, transaction_id):
            logger.error(f"Store rejected delete of transaction {transaction_id}")
            return None

        self._transactions = [t for t in self._transactions if t.id != transaction_id]
        return target

    def restore_transaction(self, tx: Transaction) -> OperationResult:
        """Undo a delete by re-inserting the same content under a new id."""
        return self.add_transaction(tx.with_id(""))

    # --- Accounts ---

    def add_account(self, account: Account) -> OperationResult:
        self._require_loaded()
        inserted = self._insert(ACCOUNTS, [account.to_dict()])
        if inserted is None:
            return OperationResult.failed(STORE_FAILURE)

        created = Account.from_dict({**account.to_dict(), "id": inserted[0]["id"]})
        self._accounts.append(created)
        return OperationResult.ok([created])

    def update_account(self, account: Account) -> OperationResult:
        self._require_loaded()
        if not self.store.update(ACCOUNTS, account.to_dict()):
            return OperationResult.failed(STORE_FAILURE)

        self._accounts = [account if a.id == account.id else a for a in self._accounts]
        return OperationResult.ok([account])

    def delete_account(self, account_id: str) -> OperationResult:
        """
        Delete an account.

        There is no referential check: transactions may keep pointing at the
        deleted account id.
        """
        self._require_loaded()
        if not self.store.delete(ACCOUNTS, account_id):
            return OperationResult.failed(STORE_FAILURE)

        orphaned = sum(1 for t in self._transactions if t.account_id == account_id)
        if orphaned:
            logger.warning(f"Deleted account {account_id} still referenced by {orphaned} transactions")

        self._accounts = [a for a in self._accounts if a.id != account_id]
        return OperationResult.ok()

    # --- Categories ---

    def add_category(self, category: Category) -> OperationResult:
        self._require_loaded()
        inserted = self._insert(CATEGORIES, [category.to_dict()])
        if inserted is None:
            return OperationResult.failed(STORE_FAILURE)

        created = Category.from_dict({**category.to_dict(), "id": inserted[0]["id"]})
        self._categories.append(created)
        return OperationResult.ok([created])

    def update_category(self, category: Category) -> OperationResult:
        self._require_loaded()
        if not self.store.update(CATEGORIES, category.to_dict()):
            return OperationResult.failed(STORE_FAILURE)

        self._categories = [category if c.id == category.id else c for c in self._categories]
        return OperationResult.ok([category])

    def is_category_in_use(self, category_id: str) -> bool:
        self._require_loaded()
        return any(t.category_id == category_id for t in self._transactions)

    def delete_category(self, category_id: str) -> OperationResult:
        """
        Delete a category that no transaction references.

        Returns:
            OperationResult with CATEGORY_IN_USE when the category is referenced
        """
        self._require_loaded()
        if self.is_category_in_use(category_id):
            return OperationResult.failed(CATEGORY_IN_USE)

        if not self.store.delete(CATEGORIES, category_id):
            return OperationResult.failed(STORE_FAILURE)

        self._categories = [c for c in self._categories if c.id != category_id]
        return OperationResult.ok()

    def ensure_import_categories(self, name: str, color: str = "#64748B") -> OperationResult:
        """
        Create the imported-transactions category for INCOME and EXPENSE if missing.

        Returns:
            OperationResult whose records hold the (expense, income) categories
        """
        self._require_loaded()
        found: dict[TransactionType, Category] = {}
        for tx_type in (TransactionType.EXPENSE, TransactionType.INCOME):
            existing = next((c for c in self._categories if c.name == name and c.type == tx_type), None)
            if existing is None:
                category = Category(id="", name=name, type=tx_type, color=color, icon_key="FileSpreadsheet")
                result = self.add_category(category)
                if not result:
                    return result
                existing = result.records[0]
                logger.info(f"Created {tx_type.value} category '{name}' for imports")
            found[tx_type] = existing

        return OperationResult.ok([found[TransactionType.EXPENSE], found[TransactionType.INCOME]])
