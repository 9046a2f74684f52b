"""Billing period and calendar arithmetic."""

from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from pocketledger.domain.entities import BillingPeriod


def add_months(day: date, months: int) -> date:
    """Add months to a date, clamping to the last day of the target month.

    Jan 31 + 1 month is Feb 28 (or 29), never Mar 3.
    """
    return day + relativedelta(months=months)


def add_years(day: date, years: int) -> date:
    """Add years to a date, clamping Feb 29 to Feb 28."""
    return day + relativedelta(years=years)


def rolled_date(year: int, month: int, day: int) -> date:
    """Build a date letting an out-of-range day roll into the next month.

    Day 31 of a 30-day month is the 1st of the following month, and day 0 is
    the last day of the previous month.
    """
    return date(year, month, 1) + timedelta(days=day - 1)


def calendar_month_bounds(day: date) -> tuple[date, date]:
    """Return first and last day of the calendar month containing ``day``."""
    start = day.replace(day=1)
    end = add_months(start, 1) - timedelta(days=1)
    return start, end


def _anchored_period(anchor: date, statement_day: int) -> BillingPeriod:
    """Period opening on ``statement_day`` of the anchor's month."""
    following = add_months(anchor, 1)
    return BillingPeriod(
        start=rolled_date(anchor.year, anchor.month, statement_day),
        end=rolled_date(following.year, following.month, statement_day - 1),
    )


def statement_period(today: date, statement_day: int) -> BillingPeriod:
    """Return the billing period containing ``today``.

    If today is on or after the statement day, the period runs from the
    statement day of this month to the day before it next month; otherwise it
    opened in the previous month. Statement days that do not exist in a month
    roll into the following month.

    Args:
        today: Reference day
        statement_day: Statement anchor day (1-31)

    Returns:
        BillingPeriod with ``start <= today <= end``
    """
    anchor = today.replace(day=1)
    if today.day < statement_day:
        anchor = add_months(anchor, -1)

    period = _anchored_period(anchor, statement_day)
    # A rolled-over start (e.g. the 31st of February) can land after today;
    # today then still belongs to the period opened a month earlier.
    if period.start > today:
        period = _anchored_period(add_months(anchor, -1), statement_day)
    return period


def previous_statement_period(period: BillingPeriod, statement_day: int) -> BillingPeriod:
    """Return the billing period ending the day before ``period`` starts."""
    return statement_period(period.start - timedelta(days=1), statement_day)
