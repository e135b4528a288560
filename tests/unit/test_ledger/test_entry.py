#!/usr/bin/env python3
"""Tests for manual entry validation and installments."""

import pytest

from fluxozen.core.dates import FinancialDate
from fluxozen.core.models import Installments, TransactionType
from fluxozen.core.money import Money
from fluxozen.ledger.entry import (
    ACCOUNT_REQUIRED,
    AMOUNT_REQUIRED,
    CATEGORY_REQUIRED,
    DESCRIPTION_REQUIRED,
    INVALID_AMOUNT,
    INVALID_INSTALLMENTS,
    TransactionForm,
    generate_installments,
)


def form(**overrides):
    values = {
        "description": "New laptop",
        "amount": "3.600,00",
        "date": FinancialDate.of(2025, 1, 31),
        "type": TransactionType.EXPENSE,
        "category_id": "cat_exp_7",
        "account_id": "acc_5",
    }
    values.update(overrides)
    return TransactionForm(**values)


class TestValidation:
    """Test form validation messages."""

    def test_valid_form(self):
        assert form().validate() == []

    def test_missing_fields(self):
        errors = form(description="  ", amount="", category_id="", account_id="").validate()
        assert errors == [DESCRIPTION_REQUIRED, AMOUNT_REQUIRED, CATEGORY_REQUIRED, ACCOUNT_REQUIRED]

    @pytest.mark.parametrize("amount", ["abc", "0", "-10,00", "1e40", "12345678901234567890123456789"])
    def test_invalid_amount(self, amount):
        assert form(amount=amount).validate() == [INVALID_AMOUNT]

    @pytest.mark.parametrize("count", ["1", "0", "x"])
    def test_invalid_installments(self, count):
        assert form(installment_count=count).validate() == [INVALID_INSTALLMENTS]

    def test_to_draft_rejects_invalid_form(self):
        with pytest.raises(ValueError):
            form(amount="").to_draft()


class TestDrafts:
    """Test draft construction."""

    def test_single_draft(self):
        (draft,) = form(description=" New laptop ").to_drafts()

        assert draft.is_draft
        assert draft.description == "New laptop"
        assert draft.amount == Money.from_cents(360000)
        assert draft.installments is None

    def test_installment_drafts(self):
        drafts = form(installment_count="3").to_drafts()

        assert [d.description for d in drafts] == ["New laptop (1/3)", "New laptop (2/3)", "New laptop (3/3)"]
        assert [d.date for d in drafts] == [
            FinancialDate.of(2025, 1, 31),
            FinancialDate.of(2025, 2, 28),
            FinancialDate.of(2025, 3, 31),
        ]
        assert [d.installments for d in drafts] == [Installments(i, 3) for i in (1, 2, 3)]
        assert all(d.amount == Money.from_cents(360000) for d in drafts)


class TestGenerateInstallments:
    """Test installment expansion."""

    def test_crosses_year(self, make_tx):
        drafts = generate_installments(make_tx(description="Chair", date="2025-11-15"), 3)
        assert [d.date.to_iso_string() for d in drafts] == ["2025-11-15", "2025-12-15", "2026-01-15"]

    def test_installments_are_drafts(self, make_tx):
        drafts = generate_installments(make_tx(id="tx_1"), 2)
        assert all(d.is_draft for d in drafts)

    def test_rejects_single_installment(self, make_tx):
        with pytest.raises(ValueError):
            generate_installments(make_tx(), 1)

    def test_commit_installments(self, ledger):
        result = ledger.import_transactions(form(installment_count="12").to_drafts())

        assert len(result.records) == 12
        assert {tx.installments.total for tx in ledger.transactions} == {12}
