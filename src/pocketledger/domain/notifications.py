"""Notification generation and merging."""

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable, Sequence

from pocketledger.domain.entities import (
    InstallmentPlan,
    LedgerEntry,
    Notification,
    NotificationType,
    Subscription,
)
from pocketledger.domain.installments import next_installment_date
from pocketledger.domain.periods import calendar_month_bounds

DUE_SOON_DAYS = 3
BUDGET_WARNING_RATIO = Decimal("0.9")

SUBSCRIPTIONS_ACTION = "/?view=subscriptions"
PLANS_ACTION = "/?view=plans"
BUDGETS_ACTION = "/?tab=budgets"


def subscription_due_id(subscription_id: str, due: date) -> str:
    """Identity of the due-soon alert for one subscription cycle."""
    return f"sub-due:{subscription_id}:{due.isoformat()}"


def installment_due_id(plan_id: str, due: date) -> str:
    """Identity of the due-soon alert for one plan installment."""
    return f"plan-due:{plan_id}:{due.isoformat()}"


def budget_alert_id(rule: str, month_start: date) -> str:
    """Identity of a budget threshold alert for one calendar month."""
    return f"budget-{rule}:{month_start.strftime('%Y-%m')}"


def _days_phrase(days: int) -> str:
    if days == 0:
        return "due today"
    return f"due in {days} day{'s' if days != 1 else ''}"


def subscription_alerts(
    subscriptions: Iterable[Subscription], today: date, now: datetime
) -> list[Notification]:
    """Alert for active subscriptions due within the next three days."""
    horizon = today + timedelta(days=DUE_SOON_DAYS)
    alerts = []
    for sub in subscriptions:
        if not sub.is_active:
            continue
        due = sub.next_payment_date
        if not today <= due <= horizon:
            continue
        days = (due - today).days
        alerts.append(
            Notification(
                id=subscription_due_id(sub.id, due),
                type=NotificationType.INFO,
                title="Subscription payment",
                message=f"{sub.platform} payment is {_days_phrase(days)}.",
                created_at=now,
                action=SUBSCRIPTIONS_ACTION,
            )
        )
    return alerts


def installment_alerts(
    plans: Iterable[InstallmentPlan], today: date, now: datetime
) -> list[Notification]:
    """Alert for plans whose next installment falls within three days.

    Only the plan's own installments are considered, so a plan whose last
    installment has passed no longer alerts.
    """
    horizon = today + timedelta(days=DUE_SOON_DAYS)
    alerts = []
    for plan in plans:
        due = next_installment_date(plan, today)
        if due is None or due > horizon:
            continue
        days = (due - today).days
        alerts.append(
            Notification(
                id=installment_due_id(plan.id, due),
                type=NotificationType.WARNING,
                title="Installment reminder",
                message=f"{plan.title} installment is {_days_phrase(days)}.",
                created_at=now,
                action=PLANS_ACTION,
            )
        )
    return alerts


def budget_alerts(
    entries: Iterable[LedgerEntry], budget: Decimal, today: date, now: datetime
) -> list[Notification]:
    """Alert when this calendar month's spend passes 90% or 100% of budget.

    Uses plain calendar-month bounds, not the statement-anchored billing
    period used elsewhere.
    """
    month_start, month_end = calendar_month_bounds(today)
    spent = sum(
        (e.total for e in entries if month_start <= e.date <= month_end),
        Decimal("0"),
    )
    if spent > budget:
        return [
            Notification(
                id=budget_alert_id("over", month_start),
                type=NotificationType.ALERT,
                title="Budget exceeded",
                message=f"You have exceeded this month's budget! (Total: {spent:,.2f})",
                created_at=now,
                action=BUDGETS_ACTION,
            )
        ]
    if spent > budget * BUDGET_WARNING_RATIO:
        return [
            Notification(
                id=budget_alert_id("warning", month_start),
                type=NotificationType.WARNING,
                title="Budget almost reached",
                message="You have reached 90% of your budget.",
                created_at=now,
                action=BUDGETS_ACTION,
            )
        ]
    return []


def generate_notifications(
    subscriptions: Iterable[Subscription],
    plans: Iterable[InstallmentPlan],
    entries: Iterable[LedgerEntry],
    budget: Decimal,
    today: date,
    now: datetime,
) -> list[Notification]:
    """Build fresh alert candidates from all rules, unread."""
    return [
        *subscription_alerts(subscriptions, today, now),
        *installment_alerts(plans, today, now),
        *budget_alerts(entries, budget, today, now),
    ]


def merge_notifications(
    previous: Sequence[Notification], fresh: Sequence[Notification]
) -> list[Notification]:
    """Merge fresh candidates against stored notifications by id.

    A stored notification with the same id is kept as is, read flag and
    timestamp included. Stored notifications whose id is not regenerated
    are dropped.
    """
    stored = {n.id: n for n in previous}
    return [stored.get(candidate.id, candidate) for candidate in fresh]
