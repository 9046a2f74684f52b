"""Spend trend reports and chart paths."""

import calendar
from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Sequence

from pocketledger.domain.budget import entries_in_period, match_category
from pocketledger.domain.entities import (
    BillingPeriod,
    Category,
    LedgerEntry,
    TrendMode,
    TrendPoint,
    TrendReport,
)
from pocketledger.domain.periods import add_months, previous_statement_period

CHART_WIDTH = 100
CHART_HEIGHT = 80
# Bins labeled in monthly mode; the last bin is always labeled too
MONTHLY_LABEL_INDEXES = (0, 7, 14, 21)


def percent_change(current: Decimal, previous: Decimal) -> float:
    """Percent change from previous to current.

    100 when there was no previous spend but there is now, 0 when both are 0.
    """
    if previous:
        return float((current - previous) / previous * 100)
    if current:
        return 100.0
    return 0.0


def report_windows(
    mode: TrendMode, today: date, period: BillingPeriod, statement_day: int
) -> tuple[BillingPeriod, BillingPeriod]:
    """Return (current window, previous window) for a reporting mode.

    Weekly covers the 7 days ending today. Monthly is the billing period and
    the one before it. Yearly covers the 12 calendar months ending with the
    current one (up to today) and the 12 months before those.
    """
    if mode == TrendMode.WEEKLY:
        current = BillingPeriod(start=today - timedelta(days=6), end=today)
        previous = BillingPeriod(
            start=today - timedelta(days=13), end=today - timedelta(days=7)
        )
    elif mode == TrendMode.MONTHLY:
        current = period
        previous = previous_statement_period(period, statement_day)
    else:
        start = add_months(today.replace(day=1), -11)
        current = BillingPeriod(start=start, end=today)
        previous = BillingPeriod(
            start=add_months(start, -12), end=start - timedelta(days=1)
        )
    return current, previous


def _day_label(mode: TrendMode, day: date, index: int, count: int) -> str:
    if mode == TrendMode.WEEKLY:
        return calendar.day_abbr[day.weekday()]
    if index in MONTHLY_LABEL_INDEXES or index == count - 1:
        return str(day.day)
    return ""


def bin_entries(
    entries: Sequence[LedgerEntry], mode: TrendMode, window: BillingPeriod
) -> list[TrendPoint]:
    """Bin window entries by calendar month (yearly) or by day.

    Yearly mode yields 12 monthly points, oldest first. Weekly and monthly
    modes yield one point per day of the window.
    """
    totals: dict[date, Decimal] = defaultdict(Decimal)
    if mode == TrendMode.YEARLY:
        for entry in entries:
            totals[entry.date.replace(day=1)] += entry.total
        points = []
        for offset in range(12):
            month_start = add_months(window.start, offset)
            month_end = add_months(month_start, 1) - timedelta(days=1)
            points.append(
                TrendPoint(
                    start=month_start,
                    end=min(month_end, window.end),
                    label=calendar.month_abbr[month_start.month],
                    value=totals[month_start],
                )
            )
        return points

    for entry in entries:
        totals[entry.date] += entry.total
    count = window.days
    points = []
    for index in range(count):
        day = window.start + timedelta(days=index)
        points.append(
            TrendPoint(
                start=day,
                end=day,
                label=_day_label(mode, day, index, count),
                value=totals[day],
            )
        )
    return points


def rank_categories(
    entries: Iterable[LedgerEntry], categories: Sequence[Category]
) -> list[tuple[str, Decimal]]:
    """Total spend per category name, highest first.

    Labels that do not join to a known category are reported as-is.
    """
    totals: dict[str, Decimal] = defaultdict(Decimal)
    for entry in entries:
        category = match_category(entry.category, categories)
        key = category.name if category is not None else entry.category
        totals[key] += entry.total
    return sorted(totals.items(), key=lambda item: item[1], reverse=True)


def _format_coordinate(value: float) -> str:
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def trend_path(
    values: Sequence[Decimal], width: int = CHART_WIDTH, height: int = CHART_HEIGHT
) -> str:
    """Build a smoothed SVG path through the bin values.

    X is spread evenly across ``width``; Y is scaled so the largest value
    reaches 80% of ``height``. Each pair of points is joined with a cubic
    curve whose control points sit halfway between them horizontally.
    """
    if not values:
        return ""
    if len(values) == 1:
        return f"M 0,{height} L {width},{height}"

    peak = float(max(values)) or 100.0
    coords = [
        (
            index / (len(values) - 1) * width,
            height - (float(value) / peak) * height * 0.8,
        )
        for index, value in enumerate(values)
    ]

    fmt = _format_coordinate
    parts = [f"M {fmt(coords[0][0])},{fmt(coords[0][1])}"]
    for (x1, y1), (x2, y2) in zip(coords, coords[1:]):
        mid = x1 + (x2 - x1) * 0.5
        parts.append(
            f"C {fmt(mid)},{fmt(y1)} {fmt(mid)},{fmt(y2)} {fmt(x2)},{fmt(y2)}"
        )
    return " ".join(parts)


def build_trend_report(
    entries: Sequence[LedgerEntry],
    mode: TrendMode,
    today: date,
    period: BillingPeriod,
    statement_day: int,
    categories: Sequence[Category] = (),
) -> TrendReport:
    """Compare spend of the current window against the previous one.

    Args:
        entries: Merged ledger (real and virtual entries)
        mode: Reporting granularity
        today: Reference day
        period: Current billing period
        statement_day: Statement anchor day, used to find the prior period
        categories: Known categories for the per-category ranking

    Returns:
        TrendReport with totals, percent change, chart bins and path
    """
    window, previous_window = report_windows(mode, today, period, statement_day)
    current_entries = entries_in_period(entries, window)
    previous_entries = entries_in_period(entries, previous_window)

    current_total = sum((e.total for e in current_entries), Decimal("0"))
    previous_total = sum((e.total for e in previous_entries), Decimal("0"))
    points = bin_entries(current_entries, mode, window)

    return TrendReport(
        mode=mode,
        window=window,
        previous_window=previous_window,
        current_total=current_total,
        previous_total=previous_total,
        percent_change=percent_change(current_total, previous_total),
        points=tuple(points),
        path=trend_path([p.value for p in points]),
        category_totals=tuple(rank_categories(current_entries, categories)),
    )
