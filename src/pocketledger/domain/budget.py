"""Budget aggregation against category limits."""

from decimal import Decimal
from typing import Iterable, Optional, Sequence

from pocketledger.domain.defaults import (
    DEBTS_CATEGORY_ID,
    DEBTS_CATEGORY_NAME,
    SYNTHETIC_DEBTS_CATEGORY,
)
from pocketledger.domain.entities import (
    BillingPeriod,
    BudgetStatus,
    BudgetSummary,
    Category,
    CategorySpend,
    ChartSegment,
    LedgerEntry,
)

AT_RISK_RATIO = Decimal("0.8")
NEUTRAL_COLOR = "#e5e7eb"


def budget_status(spent: Decimal, limit: Decimal) -> BudgetStatus:
    """Classify spend against a limit.

    100% or more of the limit is over budget, 80% or more is at risk.
    """
    if limit <= 0:
        return BudgetStatus.OVER_BUDGET if spent > 0 else BudgetStatus.UNDER_BUDGET
    if spent >= limit:
        return BudgetStatus.OVER_BUDGET
    if spent >= limit * AT_RISK_RATIO:
        return BudgetStatus.AT_RISK
    return BudgetStatus.UNDER_BUDGET


def entries_in_period(
    entries: Iterable[LedgerEntry], period: BillingPeriod
) -> list[LedgerEntry]:
    """Return entries dated within the period (inclusive)."""
    return [entry for entry in entries if period.contains(entry.date)]


def match_category(label: str, categories: Sequence[Category]) -> Optional[Category]:
    """Join an entry's category label to a category.

    A name match wins over an icon match, so each entry counts towards one
    category only.
    """
    for category in categories:
        if category.name == label:
            return category
    for category in categories:
        if category.icon == label:
            return category
    return None


def _is_debts_category(category: Category) -> bool:
    return category.id == DEBTS_CATEGORY_ID or category.name == DEBTS_CATEGORY_NAME


def aggregate_spend(
    entries: Iterable[LedgerEntry], categories: Sequence[Category]
) -> tuple[list[CategorySpend], Decimal]:
    """Sum spend per category and collect unmatched spend.

    Unmatched spend is merged into the reserved debts category when it
    exists; otherwise a synthetic debts category is appended when there is
    any unmatched spend.

    Returns:
        Tuple of (category spend sorted by spend descending, unmatched total)
    """
    spent = {category.id: Decimal("0") for category in categories}
    unmatched = Decimal("0")
    for entry in entries:
        category = match_category(entry.category, categories)
        if category is None:
            unmatched += entry.total
        else:
            spent[category.id] += entry.total

    debts = next((c for c in categories if _is_debts_category(c)), None)
    if debts is not None:
        spent[debts.id] += unmatched

    result = [
        CategorySpend(
            category=category,
            spent=spent[category.id],
            limit=category.effective_limit,
        )
        for category in categories
    ]
    if debts is None and unmatched > 0:
        result.append(
            CategorySpend(
                category=SYNTHETIC_DEBTS_CATEGORY,
                spent=unmatched,
                limit=SYNTHETIC_DEBTS_CATEGORY.effective_limit,
                is_synthetic=True,
            )
        )

    # sorted() is stable, so ties keep the category order
    result = sorted(result, key=lambda item: item.spent, reverse=True)
    return result, unmatched


def chart_segments(
    spends: Sequence[CategorySpend], total: Decimal
) -> list[ChartSegment]:
    """Convert category spend into cumulative donut arcs (0-360 degrees).

    Arcs follow the order of ``spends``. Zero total spend yields a single
    neutral full circle.
    """
    if total <= 0 or not spends:
        return [ChartSegment(label="", color=NEUTRAL_COLOR, start_angle=0.0, end_angle=360.0)]

    segments = []
    current = 0.0
    for item in spends:
        sweep = 360.0 * float(item.spent / total)
        segments.append(
            ChartSegment(
                label=item.category.name,
                color=item.category.color,
                start_angle=current,
                end_angle=current + sweep,
            )
        )
        current += sweep
    return segments


def summarize_budget(
    entries: Iterable[LedgerEntry],
    categories: Sequence[Category],
    budget: Decimal,
    period: BillingPeriod,
) -> BudgetSummary:
    """Build the budget summary of a billing period.

    Args:
        entries: Merged ledger (real and virtual entries)
        categories: Known categories
        budget: Global budget amount
        period: Billing period to restrict entries to

    Returns:
        BudgetSummary with per-category spend and chart segments
    """
    period_entries = entries_in_period(entries, period)
    total = sum((entry.total for entry in period_entries), Decimal("0"))
    spends, unmatched = aggregate_spend(period_entries, categories)
    return BudgetSummary(
        period=period,
        budget=budget,
        total_spent=total,
        remaining=max(Decimal("0"), budget - total),
        categories=tuple(spends),
        unmatched_spent=unmatched,
        segments=tuple(chart_segments(spends, total)),
    )
