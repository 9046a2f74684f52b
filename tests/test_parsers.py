"""Tests for date and amount parsing."""

from datetime import date
from decimal import Decimal

import pytest

from pocketledger.utils.amount_parser import parse_amount
from pocketledger.utils.date_parser import parse_date

TODAY = date(2024, 3, 10)  # a Sunday


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    assert parse_date("2024-01-15", TODAY) == date(2024, 1, 15)
    assert parse_date("January 15, 2024", TODAY) == date(2024, 1, 15)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("today", date(2024, 3, 10)),
        ("Yesterday", date(2024, 3, 9)),
        ("tomorrow", date(2024, 3, 11)),
        ("3 days ago", date(2024, 3, 7)),
        ("1 week ago", date(2024, 3, 3)),
        ("2 months ago", date(2024, 1, 10)),
        ("last week", date(2024, 3, 3)),
        ("last month", date(2024, 2, 10)),
        ("last friday", date(2024, 3, 8)),
        ("last sunday", date(2024, 3, 3)),
        ("next month", date(2024, 4, 10)),
        ("next year", date(2025, 3, 10)),
    ],
)
def test_parse_relative_dates(text, expected):
    assert parse_date(text, TODAY) == expected


def test_parse_invalid_date():
    """Test that invalid dates raise ValueError."""
    with pytest.raises(ValueError):
        parse_date("not a date", TODAY)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("123.45", Decimal("123.45")),
        ("₺123.45", Decimal("123.45")),
        ("123.45 TL", Decimal("123.45")),
        ("1,234.56", Decimal("1234.56")),
        ("12,50", Decimal("12.50")),
        ("$1000", Decimal("1000")),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "abc", "-5", "nan", "inf", "Infinity", "-Infinity"])
def test_parse_amount_rejects(text):
    with pytest.raises(ValueError):
        parse_amount(text)
