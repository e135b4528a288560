#!/usr/bin/env python3
"""
Ledger Aggregator

Derived financial figures over ledger snapshots: account balances, monthly
totals, fixed cost projection, safe balance, runway, expense ratio and
profit margin, and the dashboard insight cards.

All functions are pure and order-independent: they only filter and sum, so
shuffling the input never changes a result.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable

from ..core.dates import FinancialDate, as_date, same_month
from ..core.models import Account, Category, Transaction
from ..core.money import Money, sum_money
from ..ledger.ledger import LedgerSnapshot


def account_balance(account: Account, transactions: Iterable[Transaction]) -> Money:
    """
    Derive the current balance of one account.

    Regular accounts: initial + income - expense.
    Credit cards hold a payable, so expenses increase the balance:
    initial + expense - income.
    """
    own = [tx for tx in transactions if tx.account_id == account.id]
    income = sum_money(tx.amount for tx in own if tx.is_income)
    expense = sum_money(tx.amount for tx in own if tx.is_expense)

    if account.is_credit_card:
        return account.initial_balance + expense - income
    return account.initial_balance + income - expense


def account_balances(accounts: Iterable[Account], transactions: Iterable[Transaction]) -> dict[str, Money]:
    """Map account id to derived balance."""
    transactions = list(transactions)
    return {account.id: account_balance(account, transactions) for account in accounts}


def total_balance(accounts: Iterable[Account], transactions: Iterable[Transaction]) -> Money:
    """Sum of account balances with credit card balances subtracted."""
    transactions = list(transactions)
    total = Money.zero()
    for account in accounts:
        balance = account_balance(account, transactions)
        total = total - balance if account.is_credit_card else total + balance
    return total


def monthly_income(transactions: Iterable[Transaction], month: FinancialDate | date) -> Money:
    return sum_money(tx.amount for tx in transactions if tx.is_income and same_month(tx.date, month))


def monthly_expense(transactions: Iterable[Transaction], month: FinancialDate | date) -> Money:
    return sum_money(tx.amount for tx in transactions if tx.is_expense and same_month(tx.date, month))


def fixed_cost_projection(transactions: Iterable[Transaction], month: FinancialDate | date) -> Money:
    """Recurring expenses dated in the given month."""
    return sum_money(
        tx.amount for tx in transactions if tx.is_expense and tx.is_recurring and same_month(tx.date, month)
    )


def upcoming_bills(transactions: Iterable[Transaction], today: FinancialDate | date) -> list[Transaction]:
    """Expenses later in the month of `today`, soonest first."""
    today = as_date(today)
    bills = [
        tx for tx in transactions if tx.is_expense and same_month(tx.date, today) and as_date(tx.date) > today
    ]
    return sorted(bills, key=lambda tx: (tx.date, tx.description))


def safe_balance(total: Money, transactions: Iterable[Transaction], today: FinancialDate | date) -> Money:
    """Total balance minus the expenses still due this month."""
    return total - sum_money(tx.amount for tx in upcoming_bills(transactions, today))


def runway_months(total: Money, fixed_costs: Money) -> int:
    """
    Whole months the balance covers the fixed costs.

    Returns:
        floor(total / fixed_costs), or 0 when there are no fixed costs
    """
    if fixed_costs.to_cents() == 0:
        return 0
    return total.to_cents() // fixed_costs.to_cents()


def expense_ratio(income: Money, expense: Money) -> float:
    """
    Share of the month's income consumed by expenses, in percent.

    Returns:
        expense / income * 100, or 100 when there are expenses but no income
        (0 when there are neither)
    """
    if income.to_cents() > 0:
        return expense.to_cents() / income.to_cents() * 100
    return 100.0 if expense.to_cents() > 0 else 0.0


def profit_margin(income: Money, expense: Money) -> float:
    """Net result as a percentage of income, 0 without income."""
    if income.to_cents() <= 0:
        return 0.0
    return (income - expense).to_cents() / income.to_cents() * 100


@dataclass(frozen=True)
class Insight:
    """One dashboard insight card."""

    id: str
    variant: str
    title: str
    text: str


def cash_flow_insight(income: Money, expense: Money) -> Insight | None:
    """
    Cash flow health for the month.

    A deficit warning when expenses exceed a positive income, a positive flow
    notice when there is income otherwise, and nothing without income.
    """
    if income.to_cents() <= 0:
        return None
    if expense > income:
        return Insight(
            id="health",
            variant="warning",
            title="Cash Alert",
            text=f"Expenses exceed income by {expense - income}. Watch your working capital.",
        )
    return Insight(
        id="health",
        variant="success",
        title="Positive Flow",
        text="Income exceeds expenses. A good moment to set reserves aside.",
    )


def top_expense_category(
    transactions: Iterable[Transaction],
    month: FinancialDate | date,
) -> tuple[str, Money] | None:
    """Category id and total of the largest expense category in a month."""
    totals: dict[str, int] = {}
    for tx in transactions:
        if tx.is_expense and same_month(tx.date, month):
            totals[tx.category_id] = totals.get(tx.category_id, 0) + tx.amount.to_cents()
    if not totals:
        return None
    # ties go to the lowest category id
    category_id = max(sorted(totals), key=totals.__getitem__)
    return category_id, Money.from_cents(totals[category_id])


def top_expense_insight(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    month: FinancialDate | date,
) -> Insight | None:
    """Largest expense category with its rounded share of the month's expenses."""
    transactions = list(transactions)
    expense = monthly_expense(transactions, month)
    top = top_expense_category(transactions, month)
    if top is None or expense.to_cents() <= 0:
        return None

    category_id, value = top
    name = next((c.name for c in categories if c.id == category_id), "General")
    # round half up on integer cents
    percent = (200 * value.to_cents() + expense.to_cents()) // (2 * expense.to_cents())
    return Insight(
        id="top_spend",
        variant="info",
        title="Largest Expense",
        text=f"'{name}' is {percent}% of this month's expenses ({value}).",
    )


MONITORING_INSIGHT = Insight(
    id="empty",
    variant="info",
    title="Active Monitoring",
    text="Transactions are being analyzed as they are recorded.",
)


def dashboard_insights(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    month: FinancialDate | date,
) -> list[Insight]:
    """Cash flow health and top expense insights, or the monitoring notice when neither applies."""
    transactions = list(transactions)
    income = monthly_income(transactions, month)
    expense = monthly_expense(transactions, month)

    insights = [
        insight
        for insight in (
            cash_flow_insight(income, expense),
            top_expense_insight(transactions, categories, month),
        )
        if insight is not None
    ]
    return insights or [MONITORING_INSIGHT]


@dataclass(frozen=True)
class DashboardMetrics:
    """Every dashboard figure for one month."""

    month: date
    total_balance: Money
    monthly_income: Money
    monthly_expense: Money
    fixed_costs: Money
    safe_balance: Money
    runway_months: int
    upcoming_bills: tuple[Transaction, ...] = ()
    insights: tuple[Insight, ...] = ()
    account_balances: dict[str, Money] = field(default_factory=dict, compare=False)

    @property
    def monthly_net(self) -> Money:
        return self.monthly_income - self.monthly_expense

    @property
    def expense_ratio(self) -> float:
        return expense_ratio(self.monthly_income, self.monthly_expense)

    @property
    def profit_margin(self) -> float:
        return profit_margin(self.monthly_income, self.monthly_expense)


def dashboard_metrics(
    snapshot: LedgerSnapshot,
    month: FinancialDate | date,
    today: FinancialDate | date,
) -> DashboardMetrics:
    """
    Compute the dashboard figures for a month.

    Args:
        snapshot: Ledger snapshot
        month: Any date inside the month to summarize
        today: Reference day for safe balance and upcoming bills
    """
    transactions = snapshot.transactions
    total = total_balance(snapshot.accounts, transactions)
    fixed = fixed_cost_projection(transactions, month)
    bills = upcoming_bills(transactions, today)

    return DashboardMetrics(
        month=as_date(month).replace(day=1),
        total_balance=total,
        monthly_income=monthly_income(transactions, month),
        monthly_expense=monthly_expense(transactions, month),
        fixed_costs=fixed,
        safe_balance=total - sum_money(tx.amount for tx in bills),
        runway_months=runway_months(total, fixed),
        upcoming_bills=tuple(bills),
        insights=tuple(dashboard_insights(transactions, snapshot.categories, month)),
        account_balances=account_balances(snapshot.accounts, transactions),
    )
