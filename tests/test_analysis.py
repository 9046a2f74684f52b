"""Tests for receipt and voice analysis handling."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from pocketledger.domain.analysis import (
    UNREADABLE_MERCHANT,
    ReceiptAnalyzer,
    VoiceAnalyzer,
    read_receipt,
    read_voice_command,
    receipt_to_entry,
)
from pocketledger.domain.errors import AnalysisError

TODAY = date(2024, 3, 10)
CATEGORIES = ["Groceries", "Transport", "Other"]


class FakeReceiptAnalyzer(ReceiptAnalyzer):
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error

    def analyze(self, image):
        if self.error:
            raise self.error
        return self.result


class FakeVoiceAnalyzer(VoiceAnalyzer):
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error

    def analyze(self, text, categories):
        if self.error:
            raise self.error
        return self.result


def test_read_receipt():
    analyzer = FakeReceiptAnalyzer(
        {
            "merchant": "Market",
            "date": "2024-03-09",
            "items": [{"name": "Milk", "price": 30, "quantity": "2"}],
            "total": 60,
            "currency": "₺",
        }
    )

    candidate = read_receipt(analyzer, b"image", TODAY)

    assert candidate.merchant == "Market"
    assert candidate.date == date(2024, 3, 9)
    assert candidate.total == Decimal("60")
    assert candidate.items[0].quantity == "2"
    assert not candidate.is_fallback


def test_failed_receipt_returns_fallback():
    analyzer = FakeReceiptAnalyzer(error=AnalysisError("service down"))

    candidate = read_receipt(analyzer, b"image", TODAY)

    assert candidate.is_fallback
    assert candidate.merchant == UNREADABLE_MERCHANT
    assert candidate.total == Decimal("0")
    assert candidate.date == TODAY


def test_receipt_with_bad_total_returns_fallback():
    candidate = read_receipt(FakeReceiptAnalyzer({"total": "n/a"}), b"image", TODAY)

    assert candidate.is_fallback


def test_receipt_entry_defaults_to_groceries():
    candidate = read_receipt(FakeReceiptAnalyzer({"merchant": "Market", "total": 10}), b"", TODAY)

    entry = receipt_to_entry(candidate, "e1", datetime(2024, 3, 10, 12, 0))

    assert entry.category == "Groceries"
    assert entry.date == TODAY


def test_read_voice_command():
    analyzer = FakeVoiceAnalyzer({"merchant": "Taxi", "amount": 120, "category": "Transport"})

    candidate = read_voice_command(analyzer, "taxi 120", CATEGORIES, TODAY)

    assert candidate.amount == Decimal("120")
    assert candidate.category == "Transport"
    assert candidate.date == TODAY


def test_voice_unknown_category_becomes_other():
    analyzer = FakeVoiceAnalyzer({"merchant": "Vet", "amount": 300, "category": "Pets"})

    candidate = read_voice_command(analyzer, "vet 300", CATEGORIES, TODAY)

    assert candidate.category == "Other"


def test_voice_failure_raises():
    with pytest.raises(AnalysisError):
        read_voice_command(FakeVoiceAnalyzer(error=AnalysisError("no")), "x", CATEGORIES, TODAY)

    with pytest.raises(AnalysisError):
        read_voice_command(FakeVoiceAnalyzer({"merchant": "Taxi"}), "x", CATEGORIES, TODAY)
