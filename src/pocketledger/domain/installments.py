"""Installment plan projection and progress."""

from datetime import date, datetime, time
from decimal import Decimal
from typing import Iterable, Iterator, Optional

from pocketledger.domain.entities import (
    DEFAULT_CURRENCY,
    InstallmentPlan,
    LedgerEntry,
    PlanOverview,
    PlanProgress,
    PlanStatus,
)
from pocketledger.domain.periods import add_months


def installment_entry_id(plan_id: str, index: int) -> str:
    """Return the identity of the virtual entry for a plan installment.

    The key is built from the plan id and the zero-based installment index
    only, so projecting the same plan twice yields the same ids.
    """
    return f"plan-{plan_id}-inst-{index + 1}"


def installment_due_date(plan: InstallmentPlan, index: int) -> date:
    """Due date of the zero-based installment ``index``, month-end clamped."""
    return add_months(plan.start_date, index)


def project_installments(
    plans: Iterable[InstallmentPlan], cutoff: date
) -> Iterator[LedgerEntry]:
    """Yield a virtual ledger entry for every installment due on or before cutoff.

    Entries come out plan by plan, in installment order. Nothing is cached
    or persisted; callers sort the merged ledger themselves.

    Args:
        plans: Installment plans to project
        cutoff: Last day to include (typically the billing period end)

    Yields:
        Virtual LedgerEntry instances
    """
    for plan in plans:
        payment = plan.monthly_payment
        for index in range(plan.total_installments):
            due = installment_due_date(plan, index)
            if due > cutoff:
                break
            yield LedgerEntry(
                id=installment_entry_id(plan.id, index),
                merchant=f"{plan.title} (Installment {index + 1}/{plan.total_installments})",
                date=due,
                total=payment,
                category=plan.title,
                created_at=datetime.combine(due, time.min),
                currency=DEFAULT_CURRENCY,
                is_virtual=True,
            )


def next_installment_date(plan: InstallmentPlan, today: date) -> Optional[date]:
    """Return the first installment due on or after today.

    Returns None once every installment lies in the past.
    """
    for index in range(plan.total_installments):
        due = installment_due_date(plan, index)
        if due >= today:
            return due
    return None


def describe_plan(plan: InstallmentPlan, today: date) -> PlanProgress:
    """Compute a plan's progress as of today.

    The current installment counts calendar months since the start date
    (the start month is installment 1) and is 0 before the plan starts.
    """
    payment = plan.monthly_payment
    months_elapsed = (today.year - plan.start_date.year) * 12 + (
        today.month - plan.start_date.month
    )
    current = months_elapsed + 1
    if today < plan.start_date:
        current = 0

    completed = current > plan.total_installments
    if completed:
        current = plan.total_installments

    remaining = max(Decimal("0"), plan.total_amount - current * payment)

    if completed:
        next_payment = plan.start_date
        days_left = 0
    else:
        next_payment = add_months(plan.start_date, max(months_elapsed, 0))
        if next_payment < today:
            next_payment = add_months(plan.start_date, months_elapsed + 1)
        days_left = (next_payment - today).days

    return PlanProgress(
        plan=plan,
        monthly_payment=payment,
        current_installment=current,
        remaining_amount=remaining,
        status=PlanStatus.COMPLETED if completed else PlanStatus.ACTIVE,
        next_payment_date=next_payment,
        days_left=days_left,
    )


def summarize_plans(plans: Iterable[InstallmentPlan], today: date) -> PlanOverview:
    """Aggregate plan progress into outstanding debt and monthly outflow."""
    progress = [describe_plan(plan, today) for plan in plans]
    active = tuple(p for p in progress if p.status == PlanStatus.ACTIVE)
    completed = tuple(p for p in progress if p.status == PlanStatus.COMPLETED)

    upcoming = None
    if active:
        upcoming = min(active, key=lambda p: p.days_left)

    return PlanOverview(
        outstanding_debt=sum((p.remaining_amount for p in active), Decimal("0")),
        monthly_outflow=sum((p.monthly_payment for p in active), Decimal("0")),
        active=active,
        completed=completed,
        upcoming=upcoming,
    )
