#!/usr/bin/env python3
"""Tests for the JSON-backed ledger store."""

import pytest

from fluxozen.core.models import DEFAULT_ACCOUNTS, DEFAULT_CATEGORIES
from fluxozen.ledger import JsonLedgerStore, Ledger


@pytest.fixture
def store(tmp_path):
    return JsonLedgerStore(tmp_path / "ledger")


class TestJsonLedgerStore:
    """Test table persistence."""

    def test_empty_store(self, store):
        assert not store.exists()
        assert store.load() == {"accounts": [], "categories": [], "transactions": []}
        assert store.item_count() is None
        assert store.last_modified() is None
        assert "No ledger data" in store.summary_text()

    def test_insert_assigns_ids(self, store):
        inserted = store.insert("transactions", [{"description": "a"}, {"description": "b"}])

        assert len(inserted) == 2
        assert inserted[0]["id"] != inserted[1]["id"]
        assert store.load()["transactions"] == inserted
        assert store.item_count() == 2

    def test_update_and_delete(self, store):
        (row,) = store.insert("categories", [{"name": "Travel"}])

        assert store.update("categories", {**row, "name": "Trips"})
        assert store.load()["categories"][0]["name"] == "Trips"
        assert store.delete("categories", row["id"])
        assert store.load()["categories"] == []

    def test_unknown_ids_fail(self, store):
        assert not store.update("accounts", {"id": "missing"})
        assert not store.delete("accounts", "missing")

    def test_unknown_table_raises(self, store):
        with pytest.raises(ValueError):
            store.insert("budgets", [{}])

    def test_seed_defaults_once(self, store):
        assert store.seed_defaults()
        assert not store.seed_defaults()

        data = store.load()
        assert [row["id"] for row in data["accounts"]] == [a.id for a in DEFAULT_ACCOUNTS]
        assert len(data["categories"]) == len(DEFAULT_CATEGORIES)
        assert "5 accounts, 14 categories, 0 transactions" in store.summary_text()

    def test_dismissals(self, store):
        assert store.load_dismissals() == set()
        store.save_dismissals({"tx_b", "tx_a"})
        assert store.load_dismissals() == {"tx_a", "tx_b"}

    def test_ledger_round_trip(self, store, make_tx):
        """A ledger reloaded from disk sees committed transactions."""
        store.seed_defaults()
        ledger = Ledger(store).load()
        committed = ledger.add_transaction(make_tx(description="Invoice")).records[0]

        reloaded = Ledger(store).load()
        assert reloaded.find_transaction(committed.id) == committed
        assert len(reloaded.accounts) == 5
