"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import copy
import itertools

import pytest

from fluxozen.core import config as config_module
from fluxozen.core.dates import FinancialDate
from fluxozen.core.models import DEFAULT_ACCOUNTS, DEFAULT_CATEGORIES, Transaction, TransactionType
from fluxozen.core.money import Money
from fluxozen.ledger import Ledger


class InMemoryStore:
    """LedgerStore keeping rows in dictionaries; set fail=True to reject every mutation."""

    def __init__(self, accounts=None, categories=None, transactions=None):
        self.tables = {
            "accounts": [copy.deepcopy(r) for r in accounts or []],
            "categories": [copy.deepcopy(r) for r in categories or []],
            "transactions": [copy.deepcopy(r) for r in transactions or []],
        }
        self.fail = False
        self.insert_calls = 0
        self._ids = itertools.count(1)

    def load(self):
        return copy.deepcopy(self.tables)

    def insert(self, table, rows):
        self.insert_calls += 1
        if self.fail:
            return None
        inserted = [{**row, "id": f"{table[:2]}_{next(self._ids)}"} for row in rows]
        self.tables[table].extend(copy.deepcopy(inserted))
        return inserted

    def update(self, table, row):
        if self.fail:
            return False
        for i, existing in enumerate(self.tables[table]):
            if existing["id"] == row["id"]:
                self.tables[table][i] = copy.deepcopy(row)
                return True
        return False

    def delete(self, table, row_id):
        if self.fail:
            return False
        before = len(self.tables[table])
        self.tables[table] = [r for r in self.tables[table] if r["id"] != row_id]
        return len(self.tables[table]) < before


def build_transaction(
    id="",
    description="Office rent",
    amount="100,00",
    date="2025-03-10",
    type=TransactionType.EXPENSE,
    category_id="cat_exp_1",
    account_id="acc_1",
    **kwargs,
) -> Transaction:
    """Transaction with readable defaults; amount is any parse_amount string."""
    return Transaction(
        id=id,
        description=description,
        amount=Money.parse(amount),
        date=FinancialDate.from_string(date),
        type=type,
        category_id=category_id,
        account_id=account_id,
        **kwargs,
    )


@pytest.fixture
def make_tx():
    """Factory fixture for transactions."""
    return build_transaction


@pytest.fixture
def seeded_store() -> InMemoryStore:
    """In-memory store holding the default accounts and categories."""
    return InMemoryStore(
        accounts=[a.to_dict() for a in DEFAULT_ACCOUNTS],
        categories=[c.to_dict() for c in DEFAULT_CATEGORIES],
    )


@pytest.fixture
def empty_store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def ledger(seeded_store) -> Ledger:
    """Loaded ledger over the seeded in-memory store."""
    return Ledger(seeded_store).load()


@pytest.fixture
def sample_ledger(seeded_store) -> Ledger:
    """Seeded ledger with a month of business activity (March 2025)."""
    seeded_store.tables["transactions"] = [
        build_transaction(id="tx_1", description="Consulting invoice", amount="8.000,00", date="2025-03-05",
                          type=TransactionType.INCOME, category_id="cat_inc_1").to_dict(),
        build_transaction(id="tx_2", description="Office rent", amount="2.500,00", date="2025-03-10",
                          is_recurring=True).to_dict(),
        build_transaction(id="tx_3", description="Cloud hosting", amount="300,00", date="2025-03-20",
                          category_id="cat_exp_7", is_recurring=True).to_dict(),
        build_transaction(id="tx_4", description="Card purchase", amount="450,00", date="2025-03-12",
                          category_id="cat_exp_2", account_id="acc_5").to_dict(),
    ]
    return Ledger(seeded_store).load()


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Set up test environment variables."""
    # Ensure tests don't use real ledger data
    monkeypatch.setenv("FLUXOZEN_ENV", "test")
    monkeypatch.setenv("FLUXOZEN_DATA_DIR", str(tmp_path / "data"))
    for variable in (
        "LOG_LEVEL",
        "DEBUG",
        "ANOMALY_CORPORATE_ACCOUNTS",
        "ANOMALY_OUTLIER_HIGH",
        "ANOMALY_OUTLIER_MEDIUM",
        "ANOMALY_CATCH_ALL_CATEGORY",
        "IMPORT_CATEGORY_NAME",
    ):
        monkeypatch.delenv(variable, raising=False)

    monkeypatch.setattr(config_module, "_config", None)
