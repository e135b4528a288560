#!/usr/bin/env python3
"""
Manual Transaction Entry

Validates raw form input before any ledger mutation and expands installment
purchases into independent monthly drafts.

One logical debt of N installments becomes N materialized transactions; there
is no series entity, only the shared Installments(total) label and the
sequential current index.
"""

from dataclasses import dataclass, replace

from ..core.dates import FinancialDate
from ..core.models import Frequency, Installments, Transaction, TransactionType
from ..core.money import Money

DESCRIPTION_REQUIRED = "Description is required."
AMOUNT_REQUIRED = "Amount is required."
CATEGORY_REQUIRED = "Select a category."
ACCOUNT_REQUIRED = "Select an account."
INVALID_AMOUNT = "Invalid amount: enter a number greater than zero."
INVALID_INSTALLMENTS = "Invalid number of installments: enter 2 or more."


def generate_installments(draft: Transaction, total: int) -> list[Transaction]:
    """
    Expand one purchase into `total` monthly installment drafts.

    Each installment keeps the full draft amount, is dated `i - 1` months
    after the draft date (day clamped to month end) and is described as
    "{description} ({i}/{total})".

    Raises:
        ValueError: If total is below 2
    """
    if total < 2:
        raise ValueError(f"Installment count must be at least 2, got {total}")

    return [
        replace(
            draft,
            id="",
            description=f"{draft.description} ({i}/{total})",
            date=draft.date.add_months(i - 1),
            installments=Installments(current=i, total=total),
        )
        for i in range(1, total + 1)
    ]


@dataclass
class TransactionForm:
    """
    Raw manual-entry input, as typed by the user.

    Amount and installment count are kept as strings until validated.
    """

    description: str
    amount: str
    date: FinancialDate
    type: TransactionType
    category_id: str = ""
    account_id: str = ""
    is_recurring: bool = False
    frequency: Frequency | None = None
    installment_count: str = ""

    @property
    def wants_installments(self) -> bool:
        return bool(self.installment_count.strip())

    def parsed_amount(self) -> Money | None:
        return Money.parse(self.amount)

    def parsed_installments(self) -> int | None:
        try:
            return int(self.installment_count.strip())
        except ValueError:
            return None

    def validate(self) -> list[str]:
        """
        Check the form and return one user-facing message per problem.

        Returns:
            Empty list when the form can be committed
        """
        errors: list[str] = []
        if not self.description.strip():
            errors.append(DESCRIPTION_REQUIRED)
        if not self.amount.strip():
            errors.append(AMOUNT_REQUIRED)
        if not self.category_id:
            errors.append(CATEGORY_REQUIRED)
        if not self.account_id:
            errors.append(ACCOUNT_REQUIRED)

        if self.amount.strip():
            amount = self.parsed_amount()
            if amount is None or amount.to_cents() <= 0:
                errors.append(INVALID_AMOUNT)

        if self.wants_installments:
            count = self.parsed_installments()
            if count is None or count < 2:
                errors.append(INVALID_INSTALLMENTS)

        return errors

    def to_draft(self) -> Transaction:
        """
        Build the single draft transaction described by the form.

        Raises:
            ValueError: If the form does not validate
        """
        errors = self.validate()
        if errors:
            raise ValueError("; ".join(errors))

        return Transaction(
            description=self.description.strip(),
            amount=self.parsed_amount(),
            date=self.date,
            type=self.type,
            category_id=self.category_id,
            account_id=self.account_id,
            is_recurring=self.is_recurring,
            frequency=self.frequency,
        )

    def to_drafts(self) -> list[Transaction]:
        """Build the draft, expanded into installments when requested."""
        draft = self.to_draft()
        if self.wants_installments:
            return generate_installments(draft, self.parsed_installments())
        return [draft]
