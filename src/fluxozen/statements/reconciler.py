#!/usr/bin/env python3
"""
Import Reconciler

Turns parsed statement candidates into draft ledger transactions bound to a
target account, and runs the end-to-end import flow:

    ensure import categories -> parse -> reconcile -> commit (all or nothing)
"""

import logging
from dataclasses import dataclass
from typing import Sequence

from ..core.models import Category, Transaction, TransactionType
from ..ledger.ledger import Ledger
from .parser import StatementCandidate, parse_statement

logger = logging.getLogger(__name__)


def _pick_category(categories: Sequence[Category], tx_type: TransactionType, import_category_name: str) -> Category:
    """Imported category of the type, else any category of the type, else the first category."""
    same_type = [c for c in categories if c.type == tx_type]
    for category in same_type:
        if category.name == import_category_name:
            return category
    if same_type:
        return same_type[0]
    return categories[0]


def reconcile(
    candidates: Sequence[StatementCandidate],
    target_account_id: str,
    categories: Sequence[Category],
    import_category_name: str,
) -> list[Transaction]:
    """
    Build draft transactions from statement candidates.

    Negative candidates become EXPENSE transactions storing the magnitude;
    everything else becomes INCOME.

    Args:
        candidates: Parsed statement rows
        target_account_id: Account receiving every imported transaction
        categories: Categories currently in the ledger
        import_category_name: Name of the imported-transactions category, also
            used as the import tag

    Returns:
        Draft transactions (empty ids), one per candidate

    Raises:
        ValueError: If no categories exist at all
    """
    if not categories:
        raise ValueError("Cannot reconcile statement candidates without any categories")

    drafts = []
    for candidate in candidates:
        tx_type = TransactionType.EXPENSE if candidate.is_expense else TransactionType.INCOME
        category = _pick_category(categories, tx_type, import_category_name)
        drafts.append(
            Transaction(
                description=candidate.description,
                amount=candidate.amount.abs(),
                date=candidate.date,
                type=tx_type,
                category_id=category.id,
                account_id=target_account_id,
                is_recurring=False,
                tags=(import_category_name,),
                is_imported=True,
            )
        )
    return drafts


@dataclass
class ImportOutcome:
    """Result of importing one statement file."""

    success: bool
    imported: int = 0
    message: str | None = None
    transactions: tuple[Transaction, ...] = ()


def import_statement(
    ledger: Ledger,
    content: str | bytes,
    filename: str,
    account_id: str,
    import_category_name: str = "CSV Import",
) -> ImportOutcome:
    """
    Import a statement file into the ledger.

    Args:
        ledger: Loaded ledger to commit into
        content: Raw statement content
        filename: Original file name (selects CSV or OFX)
        account_id: Target account id
        import_category_name: Imported-transactions category name

    Returns:
        ImportOutcome; nothing is committed unless success is True
    """
    ensured = ledger.ensure_import_categories(import_category_name)
    if not ensured:
        return ImportOutcome(success=False, message=ensured.message)

    parsed = parse_statement(content, filename)
    if not parsed.ok:
        logger.warning(f"Statement {filename} not imported: {parsed.error}")
        return ImportOutcome(success=False, message=parsed.error)

    drafts = reconcile(parsed.candidates, account_id, ledger.categories, import_category_name)
    committed = ledger.import_transactions(drafts)
    if not committed:
        return ImportOutcome(success=False, message=committed.message)

    logger.info(f"Imported {len(committed.records)} transactions from {filename} into {account_id}")
    return ImportOutcome(
        success=True,
        imported=len(committed.records),
        message=f"{len(committed.records)} transactions imported",
        transactions=tuple(committed.records),
    )
