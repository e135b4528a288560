#!/usr/bin/env python3
"""
Main CLI Entry Point for FluxoZen

Command-line interface over a JSON-backed ledger: statement import, monthly
dashboard figures, anomaly audit, CSV export and receipt text extraction.
"""

import logging
import os
from datetime import date
from pathlib import Path

import click

from ..analysis import AnomalyDetector, DetectionRules, dashboard_metrics, export_transactions_csv
from ..core.config import Config, get_config
from ..core.dates import FinancialDate, parse_month
from ..core.json_utils import format_json
from ..core.models import TransactionType
from ..ledger import JsonLedgerStore, Ledger, TransactionForm
from ..statements import extract_receipt_fields, import_statement


def _open_ledger(config: Config) -> tuple[JsonLedgerStore, Ledger]:
    store = JsonLedgerStore(config.ledger.store_dir)
    return store, Ledger(store).load()


def _parse_month_option(value: str | None) -> date:
    if not value:
        return date.today().replace(day=1)
    try:
        return parse_month(value)
    except ValueError:
        raise click.BadParameter(f"expected YYYY-MM, got {value!r}", param_hint="--month")


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    FluxoZen - Small Business Cash Flow Engine

    Tracks accounts and categorized transactions, imports bank statements,
    derives safe balance and runway, and flags suspicious expenses.
    """
    ctx.ensure_object(dict)

    if config_env:
        os.environ["FLUXOZEN_ENV"] = config_env

    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("fluxozen").setLevel(logging.DEBUG)

    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    try:
        ctx.obj["config"] = get_config()
    except ValueError as e:
        raise click.ClickException(str(e))

    if verbose:
        click.echo(f"Environment: {ctx.obj['config'].environment.value}")
        click.echo(f"Data directory: {ctx.obj['config'].data_dir}")

    if debug:
        click.echo("Debug logging enabled")


@main.command()
def version() -> None:
    """Show version information."""
    from fluxozen import __author__, __version__

    click.echo(f"FluxoZen v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Print configuration as JSON")
@click.pass_context
def config(ctx: click.Context, as_json: bool) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]

    if as_json:
        click.echo(format_json(config_obj.to_dict()))
        return

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Data Directory: {config_obj.data_dir}")
    click.echo(f"  Ledger Directory: {config_obj.ledger.store_dir}")
    click.echo(f"  Output Directory: {config_obj.output_dir}")
    click.echo(f"  Corporate Accounts: {', '.join(config_obj.anomaly.corporate_account_ids)}")
    click.echo(f"  Outlier Thresholds: {config_obj.anomaly.outlier_medium} / {config_obj.anomaly.outlier_high}")
    click.echo(f"  Import Category: {config_obj.importing.category_name}")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")


@main.command()
@click.pass_context
def seed(ctx: click.Context) -> None:
    """Create the default accounts and categories in an empty ledger."""
    store = JsonLedgerStore(ctx.obj["config"].ledger.store_dir)
    if store.seed_defaults():
        click.echo("Seeded default accounts and categories.")
    else:
        click.echo("Ledger already has accounts and categories; nothing to seed.")
    click.echo(store.summary_text())


@main.command("import")
@click.argument("statement", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--account", "account_id", required=True, help="Target account id (e.g. acc_1)")
@click.pass_context
def import_cmd(ctx: click.Context, statement: Path, account_id: str) -> None:
    """
    Import a CSV or OFX bank statement into an account.

    Examples:
      fluxozen import extrato.csv --account acc_1
      fluxozen import nubank.ofx --account acc_5
    """
    config_obj = ctx.obj["config"]
    _, ledger = _open_ledger(config_obj)

    if not any(a.id == account_id for a in ledger.accounts):
        raise click.ClickException(f"Unknown account: {account_id}")

    outcome = import_statement(
        ledger,
        statement.read_bytes(),
        statement.name,
        account_id,
        config_obj.importing.category_name,
    )
    if not outcome.success:
        raise click.ClickException(f"Import failed: {outcome.message}")

    click.echo(f"✅ {outcome.message} into {account_id}")
    if ctx.obj.get("verbose"):
        for tx in outcome.transactions:
            sign = "-" if tx.is_expense else "+"
            click.echo(f"   {tx.date.to_br_string()}  {sign}{tx.amount}  {tx.description}")


@main.command()
@click.option("--month", help="Month to summarize (YYYY-MM), defaults to current month")
@click.option("--today", "today_str", help="Reference day for safe balance (YYYY-MM-DD)")
@click.pass_context
def summary(ctx: click.Context, month: str | None, today_str: str | None) -> None:
    """Show balances, monthly totals, safe balance and runway."""
    month_start = _parse_month_option(month)
    try:
        today = FinancialDate.from_string(today_str) if today_str else FinancialDate.today()
    except ValueError:
        raise click.BadParameter(f"expected YYYY-MM-DD, got {today_str!r}", param_hint="--today")

    _, ledger = _open_ledger(ctx.obj["config"])
    snapshot = ledger.snapshot()
    metrics = dashboard_metrics(snapshot, month_start, today)

    click.echo(f"[SUMMARY] {month_start.strftime('%Y-%m')}")
    click.echo(f"   Total Balance: {metrics.total_balance}")
    click.echo(f"   Safe Balance: {metrics.safe_balance}")
    click.echo(f"   Income: {metrics.monthly_income}")
    click.echo(f"   Expenses: {metrics.monthly_expense}")
    click.echo(f"   Net: {metrics.monthly_net}")
    click.echo(f"   Expense Ratio: {metrics.expense_ratio:.1f}%")
    click.echo(f"   Profit Margin: {metrics.profit_margin:.1f}%")
    click.echo(f"   Fixed Costs: {metrics.fixed_costs}")
    click.echo(f"   Runway: {metrics.runway_months} months")

    click.echo("\n[ACCOUNTS]")
    for account in snapshot.accounts:
        click.echo(f"   {account.name}: {metrics.account_balances[account.id]}")

    if metrics.upcoming_bills:
        click.echo("\n[UPCOMING BILLS]")
        for tx in metrics.upcoming_bills:
            click.echo(f"   {tx.date.to_br_string()}  {tx.amount}  {tx.description}")

    click.echo("\n[INSIGHTS]")
    for insight in metrics.insights:
        click.echo(f"   {insight.title}: {insight.text}")


@main.command()
@click.option("--dismiss", "dismiss_ids", multiple=True, help="Dismiss anomalies of a transaction id")
@click.pass_context
def anomalies(ctx: click.Context, dismiss_ids: tuple[str, ...]) -> None:
    """Scan the ledger for suspicious expenses."""
    config_obj = ctx.obj["config"]
    store, ledger = _open_ledger(config_obj)
    detector = AnomalyDetector(DetectionRules.from_config(config_obj.anomaly), store.load_dismissals())

    if dismiss_ids:
        for transaction_id in dismiss_ids:
            detector.dismiss_anomaly(transaction_id)
        store.save_dismissals(detector.dismissed)
        click.echo(f"Dismissed {len(dismiss_ids)} transaction(s).")

    found = detector.scan(ledger.snapshot())
    if not found:
        click.echo("No anomalies found.")
        return

    click.echo(f"[ANOMALIES] {len(found)} found")
    for anomaly in found:
        click.echo(f"   [{anomaly.severity.value}] {anomaly.type.value} {anomaly.transaction_id}: {anomaly.message}")


@main.command()
@click.option("--month", help="Only export one month (YYYY-MM)")
@click.option("--output", type=click.Path(dir_okay=False, path_type=Path), help="Output CSV file")
@click.pass_context
def export(ctx: click.Context, month: str | None, output: Path | None) -> None:
    """Export transactions to a semicolon-delimited CSV file."""
    config_obj = ctx.obj["config"]
    _, ledger = _open_ledger(config_obj)

    if month:
        transactions = ledger.transactions_for_month(_parse_month_option(month))
        default_name = f"transactions_{month}.csv"
    else:
        transactions = list(ledger.transactions)
        default_name = "transactions.csv"

    output_path = output or config_obj.output_dir / default_name
    export_transactions_csv(transactions, ledger.categories, ledger.accounts, output_path)
    click.echo(f"✅ Exported {len(transactions)} transactions to: {output_path}")


@main.command()
@click.argument("text_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--account", "account_id", help="Record the receipt as an expense in this account")
@click.option("--category", "category_id", help="Expense category for the recorded receipt")
@click.pass_context
def receipt(ctx: click.Context, text_file: Path, account_id: str | None, category_id: str | None) -> None:
    """
    Suggest transaction fields from recognized receipt text.

    With --account and --category the suggestion is recorded as an expense.
    """
    scan = extract_receipt_fields(text_file.read_text(encoding="utf-8", errors="replace"))

    click.echo(f"   Description: {scan.description}")
    click.echo(f"   Amount: {scan.amount if scan.amount is not None else 'not found'}")
    click.echo(f"   Date: {scan.date.to_br_string() if scan.date else 'not found'}")

    if not (account_id and category_id):
        return

    form = TransactionForm(
        description=scan.description,
        amount=str(scan.amount.to_decimal()) if scan.amount is not None else "",
        date=scan.date or FinancialDate.today(),
        type=TransactionType.EXPENSE,
        category_id=category_id,
        account_id=account_id,
    )
    errors = form.validate()
    if errors:
        raise click.ClickException(" ".join(errors))

    _, ledger = _open_ledger(ctx.obj["config"])
    result = ledger.add_transaction(form.to_draft())
    if not result:
        raise click.ClickException(result.message or "Could not record receipt")
    click.echo(f"✅ Recorded expense {result.records[0].id}")


if __name__ == "__main__":
    main()
