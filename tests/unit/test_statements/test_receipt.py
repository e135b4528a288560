#!/usr/bin/env python3
"""Tests for receipt text extraction."""

from fluxozen.core.dates import FinancialDate
from fluxozen.core.money import Money
from fluxozen.statements.receipt import FALLBACK_DESCRIPTION, extract_receipt_fields, scan_receipt

RECEIPT_TEXT = """SUPERMERCADO BOM PRECO
CNPJ 12.345.678/0001-90
05/03/2025 14:32
SUBTOTAL R$ 1.200,00
DESCONTO R$ 10,00
TOTAL R$ 1.190,00
"""


class FakeExtractor:
    """Text extractor returning canned text and reporting progress."""

    def __init__(self, text):
        self.text = text
        self.seen_images = []

    def recognize(self, image, progress=None):
        self.seen_images.append(image)
        if progress:
            for pct in (0, 50, 100):
                progress(pct)
        return self.text


class BrokenExtractor:
    def recognize(self, image, progress=None):
        raise RuntimeError("engine crashed")


class TestExtractReceiptFields:
    """Test extraction patterns over recognized text."""

    def test_full_receipt(self):
        scan = extract_receipt_fields(RECEIPT_TEXT)

        assert scan.description == "SUPERMERCADO BOM PRECO"
        assert scan.amount == Money.from_cents(120000)  # largest value on the receipt
        assert scan.date == FinancialDate.of(2025, 3, 5)
        assert scan.raw_text == RECEIPT_TEXT

    def test_fiscal_words_removed_from_description(self):
        scan = extract_receipt_fields("CUPOM FISCAL Padaria Central\nR$ 12,50")
        assert scan.description == "CUPOM Padaria Central"

    def test_short_lines_skipped(self):
        scan = extract_receipt_fields("ok\n\nFarmacia Vida\n")
        assert scan.description == "Farmacia Vida"

    def test_nothing_recognized(self):
        scan = extract_receipt_fields("")

        assert scan.description == FALLBACK_DESCRIPTION
        assert scan.amount is None
        assert scan.date is None

    def test_only_fiscal_words_falls_back(self):
        assert extract_receipt_fields("NOTA FISCAL").description == FALLBACK_DESCRIPTION

    def test_invalid_date_is_ignored(self):
        assert extract_receipt_fields("Loja\n45/13/2025\nR$ 5,00").date is None


class TestScanReceipt:
    """Test the extractor collaborator boundary."""

    def test_progress_is_forwarded(self):
        extractor = FakeExtractor("Posto Shell\n10/02/2025\nR$ 250,00")
        progress = []

        scan = scan_receipt(b"image-bytes", extractor, progress.append)

        assert progress == [0, 50, 100]
        assert extractor.seen_images == [b"image-bytes"]
        assert scan.amount == Money.from_cents(25000)

    def test_extractor_failure_returns_none(self):
        assert scan_receipt(b"image-bytes", BrokenExtractor()) is None
