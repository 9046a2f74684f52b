"""Tests for trend reports."""

from datetime import date
from decimal import Decimal

import pytest

from pocketledger.domain.entities import BillingPeriod, TrendMode
from pocketledger.domain.periods import statement_period
from pocketledger.domain.trends import (
    build_trend_report,
    percent_change,
    report_windows,
    trend_path,
)

TODAY = date(2024, 3, 10)
PERIOD = statement_period(TODAY, 15)


@pytest.mark.parametrize(
    "current, previous, expected",
    [
        (Decimal("150"), Decimal("100"), 50.0),
        (Decimal("50"), Decimal("100"), -50.0),
        (Decimal("80"), Decimal("0"), 100.0),
        (Decimal("0"), Decimal("0"), 0.0),
    ],
)
def test_percent_change(current, previous, expected):
    assert percent_change(current, previous) == expected


def test_weekly_windows():
    window, previous = report_windows(TrendMode.WEEKLY, TODAY, PERIOD, 15)

    assert window == BillingPeriod(date(2024, 3, 4), date(2024, 3, 10))
    assert previous == BillingPeriod(date(2024, 2, 26), date(2024, 3, 3))


def test_monthly_windows_follow_billing_periods():
    window, previous = report_windows(TrendMode.MONTHLY, TODAY, PERIOD, 15)

    assert window == BillingPeriod(date(2024, 2, 15), date(2024, 3, 14))
    assert previous == BillingPeriod(date(2024, 1, 15), date(2024, 2, 14))


def test_yearly_windows():
    window, previous = report_windows(TrendMode.YEARLY, TODAY, PERIOD, 15)

    assert window == BillingPeriod(date(2023, 4, 1), date(2024, 3, 10))
    assert previous == BillingPeriod(date(2022, 4, 1), date(2023, 3, 31))


def test_weekly_report(make_entry):
    entries = [
        make_entry(30, date(2024, 3, 4)),
        make_entry(20, date(2024, 3, 10)),
        make_entry(25, date(2024, 3, 1)),
        make_entry(99, date(2024, 3, 11)),
    ]

    report = build_trend_report(entries, TrendMode.WEEKLY, TODAY, PERIOD, 15)

    assert report.current_total == Decimal("50")
    assert report.previous_total == Decimal("25")
    assert report.percent_change == 100.0
    assert len(report.points) == 7
    assert [p.label for p in report.points] == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    assert report.points[0].value == Decimal("30")
    assert report.points[-1].value == Decimal("20")


def test_monthly_bins_label_every_week_and_last_day(make_entry):
    report = build_trend_report([], TrendMode.MONTHLY, TODAY, PERIOD, 15)

    assert len(report.points) == 29
    labeled = [(i, p.label) for i, p in enumerate(report.points) if p.label]
    assert labeled == [(0, "15"), (7, "22"), (14, "29"), (21, "7"), (28, "14")]


def test_yearly_bins_by_month(make_entry):
    entries = [
        make_entry(100, date(2023, 4, 20)),
        make_entry(50, date(2024, 3, 2)),
        make_entry(70, date(2023, 3, 31)),
    ]

    report = build_trend_report(entries, TrendMode.YEARLY, TODAY, PERIOD, 15)

    assert len(report.points) == 12
    assert report.points[0].label == "Apr"
    assert report.points[-1].label == "Mar"
    assert report.points[0].value == Decimal("100")
    assert report.points[-1].value == Decimal("50")
    assert report.previous_total == Decimal("70")


def test_bins_sum_to_current_total(make_entry):
    entries = [make_entry(10 + i, date(2024, 2, 15 + i)) for i in range(10)]

    for mode in TrendMode:
        report = build_trend_report(entries, mode, TODAY, PERIOD, 15)
        assert sum(p.value for p in report.points) == report.current_total


def test_category_ranking(categories, make_entry):
    entries = [
        make_entry(10, date(2024, 3, 9), category="Transport"),
        make_entry(40, date(2024, 3, 9), category="shopping_cart"),
        make_entry(5, date(2024, 3, 9), category="Gadgets"),
    ]

    report = build_trend_report(entries, TrendMode.WEEKLY, TODAY, PERIOD, 15, categories)

    assert report.category_totals == (
        ("Groceries", Decimal("40")),
        ("Transport", Decimal("10")),
        ("Gadgets", Decimal("5")),
    )


def test_trend_path_scales_to_peak():
    path = trend_path([Decimal("0"), Decimal("10")])

    assert path == "M 0,80 C 50,80 50,16 100,16"


def test_trend_path_all_zero_is_flat():
    assert trend_path([Decimal("0")] * 3) == "M 0,80 C 25,80 25,80 50,80 C 75,80 75,80 100,80"


def test_trend_path_degenerate_inputs():
    assert trend_path([]) == ""
    assert trend_path([Decimal("5")]) == "M 0,80 L 100,80"
