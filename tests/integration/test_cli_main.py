#!/usr/bin/env python3
"""
Integration tests for CLI Main Entry Point

Tests end-to-end CLI command execution against a JSON ledger in a
temporary data directory.
"""

import json

import pytest
from click.testing import CliRunner

from fluxozen.cli.main import main
from fluxozen.ledger import JsonLedgerStore

STATEMENT = "Data;Valor\n25/12/2025;150,00\n26/12/2025;-40,00\n"


@pytest.fixture
def store_dir(tmp_path):
    return tmp_path / "data" / "ledger"


@pytest.fixture
def statement_file(tmp_path):
    path = tmp_path / "extrato.csv"
    path.write_text(STATEMENT, encoding="utf-8")
    return path


@pytest.mark.integration
class TestCLIMainIntegration:
    """Test main CLI entry point with real command execution."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_help_lists_subcommands(self):
        result = self.runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "FluxoZen" in result.output
        for command in ["version", "config", "seed", "import", "summary", "anomalies", "export", "receipt"]:
            assert command in result.output

    def test_version_command(self):
        result = self.runner.invoke(main, ["version"])

        assert result.exit_code == 0
        assert "FluxoZen v" in result.output
        assert "Author:" in result.output

    def test_config_command(self):
        result = self.runner.invoke(main, ["config"])

        assert result.exit_code == 0
        assert "Current Configuration:" in result.output
        assert "Ledger Directory:" in result.output
        assert "Import Category: CSV Import" in result.output

    def test_config_command_json(self):
        result = self.runner.invoke(main, ["config", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["environment"] == "test"
        assert data["anomaly"]["corporate_account_ids"] == ["acc_1", "acc_2"]

    def test_verbose_and_debug_flags(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "INFO")
        result = self.runner.invoke(main, ["--verbose", "--debug", "--config-env", "test", "version"])

        assert result.exit_code == 0
        assert "Environment: test" in result.output
        assert "Debug logging enabled" in result.output

    def test_invalid_command_shows_error(self):
        result = self.runner.invoke(main, ["nonexistent"])
        assert result.exit_code != 0


@pytest.mark.integration
class TestLedgerCommands:
    """Test commands that read and write the ledger."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_seed(self, store_dir):
        result = self.runner.invoke(main, ["seed"])

        assert result.exit_code == 0
        assert "Seeded default accounts" in result.output
        assert "5 accounts, 14 categories" in result.output
        assert JsonLedgerStore(store_dir).exists()

        again = self.runner.invoke(main, ["seed"])
        assert "nothing to seed" in again.output

    def test_import_and_summary(self, statement_file):
        self.runner.invoke(main, ["seed"])

        imported = self.runner.invoke(main, ["--verbose", "import", str(statement_file), "--account", "acc_1"])
        assert imported.exit_code == 0
        assert "2 transactions imported into acc_1" in imported.output
        assert "25/12/2025  +R$ 150,00" in imported.output

        summary = self.runner.invoke(main, ["summary", "--month", "2025-12", "--today", "2025-12-20"])
        assert summary.exit_code == 0
        assert "Total Balance: R$ 110,00" in summary.output
        assert "Safe Balance: R$ 70,00" in summary.output
        assert "Income: R$ 150,00" in summary.output
        assert "Runway: 0 months" in summary.output
        assert "Expense Ratio: 26.7%" in summary.output
        assert "Profit Margin: 73.3%" in summary.output
        assert "Positive Flow:" in summary.output
        assert "'CSV Import' is 100% of this month's expenses (R$ 40,00)." in summary.output

    def test_import_unknown_account(self, statement_file):
        self.runner.invoke(main, ["seed"])
        result = self.runner.invoke(main, ["import", str(statement_file), "--account", "acc_99"])

        assert result.exit_code != 0
        assert "Unknown account: acc_99" in result.output

    def test_import_unrecognized_file(self, tmp_path):
        self.runner.invoke(main, ["seed"])
        empty = tmp_path / "empty.csv"
        empty.write_text("Data;Valor\n", encoding="utf-8")

        result = self.runner.invoke(main, ["import", str(empty), "--account", "acc_1"])

        assert result.exit_code != 0
        assert "no data recognized in file" in result.output

    def test_summary_rejects_bad_month(self):
        result = self.runner.invoke(main, ["summary", "--month", "12/2025"])
        assert result.exit_code != 0

    def test_anomalies_and_dismiss(self, tmp_path, store_dir):
        self.runner.invoke(main, ["seed"])
        weekend = tmp_path / "weekend.csv"
        weekend.write_text("27/12/2025;-12.000,00\n", encoding="utf-8")
        self.runner.invoke(main, ["import", str(weekend), "--account", "acc_1"])

        result = self.runner.invoke(main, ["anomalies"])
        assert result.exit_code == 0
        assert "[ANOMALIES] 2 found" in result.output
        assert "[MEDIUM] WEEKEND" in result.output
        assert "[HIGH] OUTLIER" in result.output

        tx_id = JsonLedgerStore(store_dir).load()["transactions"][0]["id"]
        dismissed = self.runner.invoke(main, ["anomalies", "--dismiss", tx_id])
        assert "No anomalies found." in dismissed.output

        again = self.runner.invoke(main, ["anomalies"])
        assert "No anomalies found." in again.output

    def test_export(self, statement_file, tmp_path):
        self.runner.invoke(main, ["seed"])
        self.runner.invoke(main, ["import", str(statement_file), "--account", "acc_1"])
        output = tmp_path / "export.csv"

        result = self.runner.invoke(main, ["export", "--month", "2025-12", "--output", str(output)])

        assert result.exit_code == 0
        assert "Exported 2 transactions" in result.output
        lines = output.read_text(encoding="utf-8-sig").splitlines()
        assert lines[0] == "Date;Description;Category;Account;Type;Amount;Status"
        assert lines[1].startswith("26/12/2025;Imported Transaction;CSV Import;Main Account;Expense;40,00")

    def test_export_default_path(self, tmp_path):
        self.runner.invoke(main, ["seed"])
        result = self.runner.invoke(main, ["export"])

        assert result.exit_code == 0
        assert (tmp_path / "data" / "reports" / "transactions.csv").exists()

    def test_receipt(self, tmp_path, store_dir):
        self.runner.invoke(main, ["seed"])
        receipt_file = tmp_path / "receipt.txt"
        receipt_file.write_text("Padaria Central\n05/03/2025\nTOTAL R$ 42,90\n", encoding="utf-8")

        preview = self.runner.invoke(main, ["receipt", str(receipt_file)])
        assert preview.exit_code == 0
        assert "Description: Padaria Central" in preview.output
        assert "Amount: R$ 42,90" in preview.output
        assert "Date: 05/03/2025" in preview.output
        assert JsonLedgerStore(store_dir).load()["transactions"] == []

        recorded = self.runner.invoke(
            main, ["receipt", str(receipt_file), "--account", "acc_4", "--category", "cat_exp_9"]
        )
        assert recorded.exit_code == 0
        (row,) = JsonLedgerStore(store_dir).load()["transactions"]
        assert row["amount"] == 4290
        assert row["date"] == "2025-03-05"
        assert row["type"] == "EXPENSE"
