"""Tests for ledger merging and search."""

from datetime import date
from decimal import Decimal

from pocketledger.domain.ledger import filter_entries, group_by_date, merge_ledger


def test_merge_sorts_newest_first(make_entry):
    older = make_entry(10, date(2024, 3, 1))
    newer = make_entry(20, date(2024, 3, 5))
    virtual = make_entry(30, date(2024, 3, 3))

    merged = merge_ledger([older, newer], [virtual])

    assert merged == [newer, virtual, older]


def test_filter_by_text_category_and_dates(make_entry):
    entries = [
        make_entry(10, date(2024, 3, 1), merchant="Corner Market"),
        make_entry(20, date(2024, 3, 5), category="Transport", merchant="Taxi"),
        make_entry(30, date(2024, 3, 9), merchant="Bakery"),
    ]

    assert [e.merchant for e in filter_entries(entries, search="MARKET")] == ["Corner Market"]
    assert [e.merchant for e in filter_entries(entries, search="transport")] == ["Taxi"]
    assert [e.merchant for e in filter_entries(entries, category="Groceries")] == ["Corner Market", "Bakery"]
    assert [
        e.merchant
        for e in filter_entries(entries, start_date=date(2024, 3, 5), end_date=date(2024, 3, 9))
    ] == ["Taxi", "Bakery"]


def test_group_by_date(make_entry):
    entries = [
        make_entry(10, date(2024, 3, 1)),
        make_entry(20, date(2024, 3, 5)),
        make_entry(30, date(2024, 3, 1), merchant="Cafe"),
    ]

    groups = group_by_date(entries)

    assert [day for day, _ in groups] == [date(2024, 3, 5), date(2024, 3, 1)]
    assert sum(e.total for e in groups[1][1]) == Decimal("40")
