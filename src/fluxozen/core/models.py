#!/usr/bin/env python3
"""
Core Data Models for FluxoZen

Ledger entities (accounts, categories, transactions), derived anomaly records,
and the structured result type returned by ledger mutations.

Amounts are stored non-negative on transactions; the sign is carried by
TransactionType. A transaction with an empty id is a draft that has not been
committed to the store yet.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from .dates import FinancialDate
from .money import Money


class TransactionType(Enum):
    """Direction of a transaction."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class AccountType(Enum):
    """Kinds of accounts. Credit card balances are payables."""

    CHECKING = "CHECKING"
    CREDIT_CARD = "CREDIT_CARD"
    CASH = "CASH"
    INVESTMENT = "INVESTMENT"


class Frequency(Enum):
    """Repetition of recurring transactions."""

    MONTHLY = "MONTHLY"
    WEEKLY = "WEEKLY"
    YEARLY = "YEARLY"
    ONE_TIME = "ONE_TIME"


class AnomalyType(Enum):
    DUPLICATE = "DUPLICATE"
    WEEKEND = "WEEKEND"
    OUTLIER = "OUTLIER"


class Severity(Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


@dataclass(frozen=True)
class Account:
    """
    Financial account owned by the ledger.

    The current balance is never stored; it is derived from initial_balance
    and the account's transactions (see analysis.aggregator).
    """

    id: str
    name: str
    type: AccountType
    color_tag: str = "#64748B"
    initial_balance: Money = field(default_factory=Money.zero)
    institution: str | None = None

    @property
    def is_credit_card(self) -> bool:
        return self.type == AccountType.CREDIT_CARD

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for the store boundary."""
        return {
            "id": self.id,
            "name": self.name,
            "institution": self.institution,
            "type": self.type.value,
            "color_tag": self.color_tag,
            "initial_balance": self.initial_balance.to_cents(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Account":
        """Create Account from a store row (initial_balance in cents)."""
        return cls(
            id=data["id"],
            name=data["name"],
            type=AccountType(data["type"]),
            color_tag=data.get("color_tag") or "#64748B",
            initial_balance=Money.from_cents(int(data.get("initial_balance") or 0)),
            institution=data.get("institution"),
        )


@dataclass(frozen=True)
class Category:
    """Transaction category; each category applies to one TransactionType."""

    id: str
    name: str
    type: TransactionType
    color: str = "#64748B"
    icon_key: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "color": self.color,
            "icon_key": self.icon_key,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Category":
        return cls(
            id=data["id"],
            name=data["name"],
            type=TransactionType(data["type"]),
            color=data.get("color") or "#64748B",
            icon_key=data.get("icon_key"),
        )


@dataclass(frozen=True)
class Installments:
    """Position of one installment inside a series (current of total)."""

    current: int
    total: int

    def label(self) -> str:
        return f"{self.current}/{self.total}"


@dataclass(frozen=True)
class Transaction:
    """
    Ledger transaction.

    Created by manual entry, receipt scanning, installment generation or
    statement import. Installments of one purchase are independent records
    linked only by their Installments label.
    """

    description: str
    amount: Money
    date: FinancialDate
    type: TransactionType
    category_id: str
    account_id: str
    id: str = ""
    is_recurring: bool = False
    frequency: Frequency | None = None
    installments: Installments | None = None
    tags: tuple[str, ...] = ()
    is_imported: bool = False

    @property
    def is_draft(self) -> bool:
        """Check if transaction has not been committed yet."""
        return not self.id

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME

    @property
    def signed_amount(self) -> Money:
        """Amount with expenses negative."""
        return -self.amount if self.is_expense else self.amount

    def with_id(self, transaction_id: str) -> "Transaction":
        """Return a copy carrying the given id."""
        return replace(self, id=transaction_id)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for the store boundary (amount in cents)."""
        return {
            "id": self.id,
            "description": self.description,
            "amount": self.amount.to_cents(),
            "date": self.date.to_iso_string(),
            "type": self.type.value,
            "category_id": self.category_id,
            "account_id": self.account_id,
            "is_recurring": self.is_recurring,
            "frequency": self.frequency.value if self.frequency else None,
            "installments_current": self.installments.current if self.installments else None,
            "installments_total": self.installments.total if self.installments else None,
            "tags": list(self.tags),
            "is_imported": self.is_imported,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Transaction":
        """Create Transaction from a store row."""
        installments = None
        if data.get("installments_current"):
            installments = Installments(
                current=int(data["installments_current"]),
                total=int(data["installments_total"]),
            )

        return cls(
            id=data.get("id") or "",
            description=data["description"],
            amount=Money.from_cents(int(data["amount"])),
            date=FinancialDate.from_string(data["date"]),
            type=TransactionType(data["type"]),
            category_id=data["category_id"],
            account_id=data["account_id"],
            is_recurring=bool(data.get("is_recurring", False)),
            frequency=Frequency(data["frequency"]) if data.get("frequency") else None,
            installments=installments,
            tags=tuple(data.get("tags") or ()),
            is_imported=bool(data.get("is_imported", False)),
        )


@dataclass(frozen=True)
class Anomaly:
    """
    Flagged transaction surfaced for manual audit.

    The id is derived from the rule prefix and transaction id so repeated
    scans over unchanged data produce the same ids.
    """

    id: str
    transaction_id: str
    type: AnomalyType
    severity: Severity
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "transaction_id": self.transaction_id,
            "type": self.type.value,
            "severity": self.severity.value,
            "message": self.message,
        }


@dataclass
class OperationResult:
    """
    Outcome of a ledger mutation.

    Business failures (store errors, category in use) are reported here
    instead of raised.
    """

    success: bool
    message: str | None = None
    records: list[Any] = field(default_factory=list)

    @classmethod
    def ok(cls, records: list[Any] | None = None) -> "OperationResult":
        return cls(success=True, records=list(records or []))

    @classmethod
    def failed(cls, message: str) -> "OperationResult":
        return cls(success=False, message=message)

    def __bool__(self) -> bool:
        return self.success


# Seed data: the two CHECKING accounts acc_1/acc_2 are the corporate accounts
# watched by the weekend anomaly rule.
DEFAULT_ACCOUNTS: tuple[Account, ...] = (
    Account(id="acc_1", name="Main Account", institution="Nubank", type=AccountType.CHECKING, color_tag="#8B5CF6"),
    Account(
        id="acc_2",
        name="Business Account",
        institution="Banco do Brasil",
        type=AccountType.CHECKING,
        color_tag="#FBBF24",
    ),
    Account(
        id="acc_3",
        name="Reserve",
        institution="Caixa Econômica",
        type=AccountType.INVESTMENT,
        color_tag="#06B6D4",
    ),
    Account(id="acc_4", name="Petty Cash", institution="Physical Cash", type=AccountType.CASH, color_tag="#10B981"),
    Account(id="acc_5", name="Nubank Credit", institution="Nubank", type=AccountType.CREDIT_CARD, color_tag="#8B5CF6"),
)

DEFAULT_CATEGORIES: tuple[Category, ...] = (
    Category("cat_inc_1", "Services Rendered", TransactionType.INCOME, "#10B981", "Briefcase"),
    Category("cat_inc_2", "Product Sales", TransactionType.INCOME, "#34D399", "ShoppingBag"),
    Category("cat_inc_3", "Refunds", TransactionType.INCOME, "#06B6D4", "RefreshCw"),
    Category("cat_inc_4", "Investment Returns", TransactionType.INCOME, "#6366F1", "TrendingUp"),
    Category("cat_exp_1", "Rent / Condo Fees", TransactionType.EXPENSE, "#F43F5E", "Home"),
    Category("cat_exp_2", "Suppliers", TransactionType.EXPENSE, "#EA580C", "Truck"),
    Category("cat_exp_3", "Payroll", TransactionType.EXPENSE, "#CA8A04", "Users"),
    Category("cat_exp_4", "Taxes", TransactionType.EXPENSE, "#9CA3AF", "FileText"),
    Category("cat_exp_5", "Fuel / Transport", TransactionType.EXPENSE, "#EF4444", "Car"),
    Category("cat_exp_6", "Marketing / Ads", TransactionType.EXPENSE, "#8B5CF6", "Megaphone"),
    Category("cat_exp_7", "Software / IT", TransactionType.EXPENSE, "#3B82F6", "Monitor"),
    Category("cat_exp_8", "Office Supplies", TransactionType.EXPENSE, "#64748B", "Paperclip"),
    Category("cat_exp_9", "Entertainment", TransactionType.EXPENSE, "#EC4899", "Coffee"),
    Category("cat_exp_10", "Other", TransactionType.EXPENSE, "#64748B", "HelpCircle"),
)
