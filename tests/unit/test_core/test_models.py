#!/usr/bin/env python3
"""Tests for ledger data models."""

from fluxozen.core.dates import FinancialDate
from fluxozen.core.models import (
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
from fluxozen.core.money import Money


class TestTransaction:
    """Test Transaction model."""

    def test_draft_has_empty_id(self, make_tx):
        draft = make_tx()
        assert draft.is_draft
        assert not draft.with_id("tx_1").is_draft

    def test_signed_amount(self, make_tx):
        assert make_tx(amount="40,00").signed_amount == Money.from_cents(-4000)
        assert make_tx(amount="40,00", type=TransactionType.INCOME).signed_amount == Money.from_cents(4000)

    def test_store_row_round_trip(self):
        tx = Transaction(
            id="tx_9",
            description="Laptop (2/10)",
            amount=Money.from_cents(45000),
            date=FinancialDate.of(2025, 4, 30),
            type=TransactionType.EXPENSE,
            category_id="cat_exp_7",
            account_id="acc_5",
            is_recurring=False,
            frequency=Frequency.MONTHLY,
            installments=Installments(current=2, total=10),
            tags=("CSV Import",),
            is_imported=True,
        )
        row = tx.to_dict()
        assert row["amount"] == 45000
        assert row["date"] == "2025-04-30"
        assert row["installments_current"] == 2
        assert Transaction.from_dict(row) == tx

    def test_from_dict_without_optional_fields(self):
        tx = Transaction.from_dict(
            {
                "id": "tx_1",
                "description": "Coffee",
                "amount": 950,
                "date": "2025-03-01",
                "type": "EXPENSE",
                "category_id": "cat_exp_9",
                "account_id": "acc_4",
            }
        )
        assert tx.installments is None
        assert tx.frequency is None
        assert tx.tags == ()
        assert not tx.is_recurring


class TestAccountAndCategory:
    """Test Account and Category models."""

    def test_account_row_keeps_cents(self):
        account = Account(id="acc_9", name="Vault", type=AccountType.CASH, initial_balance=Money.from_cents(150000))
        row = account.to_dict()
        assert row["initial_balance"] == 150000
        assert Account.from_dict(row) == account

    def test_credit_card_flag(self):
        assert Account(id="a", name="Card", type=AccountType.CREDIT_CARD).is_credit_card
        assert not Account(id="b", name="Bank", type=AccountType.CHECKING).is_credit_card

    def test_category_round_trip(self):
        category = Category("cat_x", "Travel", TransactionType.EXPENSE, "#000000", "Plane")
        assert Category.from_dict(category.to_dict()) == category


class TestSeedData:
    """Test default accounts and categories."""

    def test_corporate_accounts_are_checking(self):
        by_id = {a.id: a for a in DEFAULT_ACCOUNTS}
        assert by_id["acc_1"].type == AccountType.CHECKING
        assert by_id["acc_2"].type == AccountType.CHECKING
        assert by_id["acc_5"].is_credit_card

    def test_category_split(self):
        income = [c for c in DEFAULT_CATEGORIES if c.type == TransactionType.INCOME]
        expense = [c for c in DEFAULT_CATEGORIES if c.type == TransactionType.EXPENSE]
        assert len(income) == 4
        assert len(expense) == 10
        assert any(c.name == "Other" for c in expense)


class TestResults:
    """Test OperationResult and Anomaly."""

    def test_operation_result_truthiness(self):
        assert OperationResult.ok([1])
        failed = OperationResult.failed("nope")
        assert not failed
        assert failed.message == "nope"
        assert failed.records == []

    def test_anomaly_to_dict(self):
        anomaly = Anomaly("dup_tx_1", "tx_1", AnomalyType.DUPLICATE, Severity.HIGH, "Possible duplicate")
        assert anomaly.to_dict()["type"] == "DUPLICATE"
        assert anomaly.to_dict()["severity"] == "HIGH"
