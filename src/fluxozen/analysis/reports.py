#!/usr/bin/env python3
"""
Reports and Export

pandas views over ledger transactions: monthly summaries, category and
account breakdowns, and the semicolon-delimited CSV export.

Money columns in the frames are integer cents so totals stay exact.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Iterable, Sequence

import pandas as pd

from ..core.currency import format_brl_number
from ..core.dates import FinancialDate, as_date
from ..core.models import Account, Category, Transaction, TransactionType

logger = logging.getLogger(__name__)

FRAME_COLUMNS = [
    "id",
    "date",
    "month",
    "description",
    "amount",
    "signed_amount",
    "type",
    "category_id",
    "account_id",
    "is_recurring",
    "installments",
    "is_imported",
]

EXPORT_COLUMNS = ["Date", "Description", "Category", "Account", "Type", "Amount", "Status"]
UNKNOWN_LABEL = "Unknown"


def _month_key(value: FinancialDate | date | str) -> str:
    if isinstance(value, str):
        return value[:7]
    return as_date(value).strftime("%Y-%m")


def transactions_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """
    Build a DataFrame with one row per transaction.

    Returns:
        DataFrame with FRAME_COLUMNS; amount and signed_amount in cents
    """
    rows = [
        {
            "id": tx.id,
            "date": tx.date.to_iso_string(),
            "month": _month_key(tx.date),
            "description": tx.description,
            "amount": tx.amount.to_cents(),
            "signed_amount": tx.signed_amount.to_cents(),
            "type": tx.type.value,
            "category_id": tx.category_id,
            "account_id": tx.account_id,
            "is_recurring": tx.is_recurring,
            "installments": tx.installments.label() if tx.installments else None,
            "is_imported": tx.is_imported,
        }
        for tx in transactions
    ]
    df = pd.DataFrame(rows, columns=FRAME_COLUMNS)
    df["date"] = pd.to_datetime(df["date"])
    return df


def monthly_summary(
    transactions: Iterable[Transaction],
    months: Sequence[FinancialDate | date | str] | None = None,
) -> pd.DataFrame:
    """
    Income, expense, fixed costs and net per calendar month.

    Args:
        transactions: Ledger transactions
        months: Months to report (dates or "YYYY-MM"); defaults to every
            month that has transactions

    Returns:
        DataFrame indexed by "YYYY-MM" with cents columns income, expense,
        fixed_costs and net
    """
    df = transactions_frame(transactions)
    keys = [_month_key(m) for m in months] if months is not None else sorted(df["month"].unique())

    expenses = df[df["type"] == TransactionType.EXPENSE.value]
    summary = pd.DataFrame(
        {
            "income": df[df["type"] == TransactionType.INCOME.value].groupby("month")["amount"].sum(),
            "expense": expenses.groupby("month")["amount"].sum(),
            "fixed_costs": expenses[expenses["is_recurring"].astype(bool)].groupby("month")["amount"].sum(),
        }
    )
    summary = summary.reindex(keys).fillna(0).astype("int64")
    summary["net"] = summary["income"] - summary["expense"]
    summary.index.name = "month"
    return summary


def _breakdown(
    transactions: Iterable[Transaction],
    key_column: str,
    labels: dict[str, str],
    month: FinancialDate | date | str,
    tx_type: TransactionType,
) -> pd.DataFrame:
    df = transactions_frame(transactions)
    selected = df[(df["month"] == _month_key(month)) & (df["type"] == tx_type.value)]

    totals = selected.groupby(key_column)["amount"].sum().astype("int64")
    totals = totals[totals > 0].sort_values(ascending=False, kind="mergesort")

    result = pd.DataFrame(
        {
            key_column: totals.index,
            "name": [labels.get(key, UNKNOWN_LABEL) for key in totals.index],
            "value": totals.values,
        }
    )
    grand_total = int(result["value"].sum())
    result["percent"] = (result["value"] / grand_total * 100).round(1) if grand_total else 0.0
    return result.reset_index(drop=True)


def category_breakdown(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    month: FinancialDate | date | str,
    tx_type: TransactionType = TransactionType.EXPENSE,
) -> pd.DataFrame:
    """
    Share of each category in one month's income or expense.

    Returns:
        DataFrame with category_id, name, value (cents) and percent, sorted by
        value descending; categories with no value are omitted
    """
    return _breakdown(transactions, "category_id", {c.id: c.name for c in categories}, month, tx_type)


def account_breakdown(
    transactions: Iterable[Transaction],
    accounts: Iterable[Account],
    month: FinancialDate | date | str,
    tx_type: TransactionType = TransactionType.EXPENSE,
) -> pd.DataFrame:
    """Share of each account in one month's income or expense."""
    return _breakdown(transactions, "account_id", {a.id: a.name for a in accounts}, month, tx_type)


def _status(tx: Transaction) -> str:
    if tx.is_recurring:
        return "Fixed"
    if tx.installments:
        return f"Inst. {tx.installments.label()}"
    return "Normal"


def export_transactions_csv(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    accounts: Iterable[Account],
    path: Path | None = None,
) -> str:
    """
    Export transactions as a semicolon-delimited spreadsheet.

    Rows are newest first; dates are DD/MM/YYYY and amounts use the Brazilian
    "1.234,56" notation. The file is written as UTF-8 with a BOM so
    spreadsheet tools detect the encoding.

    Args:
        transactions: Transactions to export
        categories: Categories used to resolve names
        accounts: Accounts used to resolve names
        path: Optional output file

    Returns:
        CSV text (without BOM)
    """
    category_names = {c.id: c.name for c in categories}
    account_names = {a.id: a.name for a in accounts}
    ordered = sorted(transactions, key=lambda tx: tx.date, reverse=True)

    df = pd.DataFrame(
        [
            {
                "Date": tx.date.to_br_string(),
                "Description": tx.description,
                "Category": category_names.get(tx.category_id, UNKNOWN_LABEL),
                "Account": account_names.get(tx.account_id, UNKNOWN_LABEL),
                "Type": "Income" if tx.is_income else "Expense",
                "Amount": format_brl_number(tx.amount.to_cents()),
                "Status": _status(tx),
            }
            for tx in ordered
        ],
        columns=EXPORT_COLUMNS,
    )
    text = df.to_csv(sep=";", index=False, lineterminator="\n")

    if path is not None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8-sig")
        logger.info(f"Exported {len(df)} transactions to {path}")

    return text
