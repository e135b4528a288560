#!/usr/bin/env python3
"""
Anomaly Detector

Flags suspicious expenses for manual audit. Three rules run over the
non-dismissed EXPENSE transactions, in this order:

1. DUPLICATE (HIGH): two or more expenses share amount, date and normalized
   description; every member of the group is flagged.
2. WEEKEND (MEDIUM): expense on a Saturday or Sunday from a corporate account.
3. OUTLIER: amount above the high threshold (HIGH), or above the medium
   threshold when filed under the catch-all category (MEDIUM).

A transaction may be flagged by more than one rule. Anomaly ids are derived
from the rule prefix and the transaction id, so rescanning unchanged data
yields identical results.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from ..core.config import AnomalyConfig
from ..core.models import Anomaly, AnomalyType, Category, Severity, Transaction
from ..core.money import Money
from ..ledger.ledger import LedgerSnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DetectionRules:
    """Thresholds and account lists used by the anomaly rules."""

    corporate_account_ids: frozenset[str] = frozenset({"acc_1", "acc_2"})
    outlier_high: Money = field(default_factory=lambda: Money.from_decimal(10000))
    outlier_medium: Money = field(default_factory=lambda: Money.from_decimal(3000))
    catch_all_category: str = "Other"

    @classmethod
    def from_config(cls, config: AnomalyConfig) -> "DetectionRules":
        return cls(
            corporate_account_ids=frozenset(config.corporate_account_ids),
            outlier_high=config.outlier_high,
            outlier_medium=config.outlier_medium,
            catch_all_category=config.catch_all_category,
        )


def _duplicate_key(tx: Transaction) -> tuple[int, str, str]:
    return (tx.amount.to_cents(), tx.date.to_iso_string(), tx.description.strip().lower())


def _find_duplicates(expenses: Sequence[Transaction]) -> list[Anomaly]:
    groups: dict[tuple[int, str, str], list[Transaction]] = defaultdict(list)
    for tx in expenses:
        groups[_duplicate_key(tx)].append(tx)

    anomalies = []
    for tx in expenses:
        group = groups[_duplicate_key(tx)]
        if len(group) > 1:
            anomalies.append(
                Anomaly(
                    id=f"dup_{tx.id}",
                    transaction_id=tx.id,
                    type=AnomalyType.DUPLICATE,
                    severity=Severity.HIGH,
                    message=(
                        f"Possible duplicate: {len(group)} identical expenses of {tx.amount} "
                        f"on {tx.date.to_br_string()}."
                    ),
                )
            )
    return anomalies


def _find_weekend_spending(expenses: Sequence[Transaction], rules: DetectionRules) -> list[Anomaly]:
    return [
        Anomaly(
            id=f"week_{tx.id}",
            transaction_id=tx.id,
            type=AnomalyType.WEEKEND,
            severity=Severity.MEDIUM,
            message=f"Corporate account spending on a weekend ({tx.date.to_br_string()}).",
        )
        for tx in expenses
        if tx.account_id in rules.corporate_account_ids and tx.date.is_weekend()
    ]


def _find_outliers(
    expenses: Sequence[Transaction],
    category_names: dict[str, str],
    rules: DetectionRules,
) -> list[Anomaly]:
    anomalies = []
    for tx in expenses:
        if tx.amount > rules.outlier_high:
            severity = Severity.HIGH
            message = f"Unusually high expense of {tx.amount}."
        elif tx.amount > rules.outlier_medium and category_names.get(tx.category_id) == rules.catch_all_category:
            severity = Severity.MEDIUM
            message = f"Large expense of {tx.amount} filed under '{rules.catch_all_category}'."
        else:
            continue
        anomalies.append(
            Anomaly(
                id=f"out_{tx.id}",
                transaction_id=tx.id,
                type=AnomalyType.OUTLIER,
                severity=severity,
                message=message,
            )
        )
    return anomalies


def rescan(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    dismissed: Iterable[str] = (),
    rules: DetectionRules | None = None,
) -> list[Anomaly]:
    """
    Run every anomaly rule over the ledger.

    Args:
        transactions: Ledger transactions
        categories: Ledger categories (for the catch-all outlier rule)
        dismissed: Transaction ids excluded from every rule
        rules: Detection thresholds (defaults to DetectionRules())

    Returns:
        Duplicates, then weekend anomalies, then outliers
    """
    rules = rules or DetectionRules()
    dismissed = set(dismissed)
    category_names = {c.id: c.name for c in categories}
    expenses = [tx for tx in transactions if tx.is_expense and tx.id not in dismissed]

    anomalies = (
        _find_duplicates(expenses)
        + _find_weekend_spending(expenses, rules)
        + _find_outliers(expenses, category_names, rules)
    )
    logger.debug(f"Anomaly scan over {len(expenses)} expenses found {len(anomalies)} anomalies")
    return anomalies


class AnomalyDetector:
    """
    Anomaly scanner owning the dismissal set.

    Dismissing only hides a transaction from later scans; the ledger is never
    touched and dismissals cannot be undone.
    """

    def __init__(self, rules: DetectionRules | None = None, dismissed: Iterable[str] = ()):
        self.rules = rules or DetectionRules()
        self._dismissed: set[str] = set(dismissed)

    @property
    def dismissed(self) -> frozenset[str]:
        return frozenset(self._dismissed)

    def dismiss_anomaly(self, transaction_id: str) -> None:
        self._dismissed.add(transaction_id)
        logger.info(f"Dismissed anomalies for transaction {transaction_id}")

    def scan(self, snapshot: LedgerSnapshot) -> list[Anomaly]:
        return rescan(snapshot.transactions, snapshot.categories, self._dismissed, self.rules)
