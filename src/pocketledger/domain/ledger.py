"""Merged ledger listing and search."""

from collections import defaultdict
from datetime import date
from typing import Iterable, Optional

from pocketledger.domain.entities import LedgerEntry


def merge_ledger(
    entries: Iterable[LedgerEntry], virtual_entries: Iterable[LedgerEntry]
) -> list[LedgerEntry]:
    """Combine real and virtual entries, newest first by creation time."""
    merged = [*entries, *virtual_entries]
    return sorted(merged, key=lambda entry: entry.created_at, reverse=True)


def filter_entries(
    entries: Iterable[LedgerEntry],
    search: Optional[str] = None,
    category: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> list[LedgerEntry]:
    """Filter entries by text, exact category and inclusive date range.

    The text search is case-insensitive and looks at merchant and category.
    """
    needle = search.lower() if search else None
    result = []
    for entry in entries:
        if needle and needle not in entry.merchant.lower() and needle not in entry.category.lower():
            continue
        if category and entry.category != category:
            continue
        if start_date is not None and entry.date < start_date:
            continue
        if end_date is not None and entry.date > end_date:
            continue
        result.append(entry)
    return result


def group_by_date(entries: Iterable[LedgerEntry]) -> list[tuple[date, list[LedgerEntry]]]:
    """Group entries by day, most recent day first."""
    groups: dict[date, list[LedgerEntry]] = defaultdict(list)
    for entry in entries:
        groups[entry.date].append(entry)
    return sorted(groups.items(), key=lambda item: item[0], reverse=True)
