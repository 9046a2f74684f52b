"""Recomputation pass over a ledger snapshot.

One pass runs, in order: billing period, subscription renewals, installment
projection, budget summary, trend reports and notifications. Renewals are
applied before anything reads the ledger so every derived value in a pass
sees the same entries.
"""

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional

from pocketledger.domain.budget import summarize_budget
from pocketledger.domain.entities import (
    BillingPeriod,
    BudgetSummary,
    LedgerEntry,
    Snapshot,
    TrendMode,
    TrendReport,
)
from pocketledger.domain.installments import project_installments
from pocketledger.domain.ledger import merge_ledger
from pocketledger.domain.notifications import generate_notifications, merge_notifications
from pocketledger.domain.periods import statement_period
from pocketledger.domain.subscriptions import RenewalResult, SubscriptionRenewalProcessor
from pocketledger.domain.trends import build_trend_report


@dataclass(frozen=True)
class Derived:
    """Values derived from a snapshot; never persisted."""

    period: BillingPeriod
    virtual_entries: tuple[LedgerEntry, ...]
    ledger: tuple[LedgerEntry, ...]
    budget: BudgetSummary
    trends: dict[TrendMode, TrendReport]


@dataclass(frozen=True)
class Recomputation:
    """Result of a recomputation pass.

    ``snapshot`` carries the renewed ledger, advanced subscriptions and
    merged notifications; the host persists it in one step.
    """

    snapshot: Snapshot
    derived: Derived
    renewals: RenewalResult


def recompute(
    snapshot: Snapshot,
    today: date,
    now: Optional[datetime] = None,
    processor: Optional[SubscriptionRenewalProcessor] = None,
) -> Recomputation:
    """Run a full recomputation pass.

    Args:
        snapshot: Current state
        today: Reference day
        now: Timestamp for new entries and notifications (defaults to now)
        processor: Renewal processor (a default one is created if omitted)

    Returns:
        Recomputation with the new snapshot and derived values
    """
    now = now or datetime.now()
    processor = processor or SubscriptionRenewalProcessor(clock=lambda: now)

    period = statement_period(today, snapshot.statement_day)

    renewals = processor.process(snapshot.subscriptions, snapshot.entries, today)
    entries = renewals.entries

    virtual_entries = tuple(project_installments(snapshot.plans, period.end))
    ledger = tuple(merge_ledger(entries, virtual_entries))

    budget = summarize_budget(ledger, snapshot.categories, snapshot.budget, period)
    trends = {
        mode: build_trend_report(
            ledger, mode, today, period, snapshot.statement_day, snapshot.categories
        )
        for mode in TrendMode
    }

    fresh = generate_notifications(
        renewals.subscriptions, snapshot.plans, entries, snapshot.budget, today, now
    )
    notifications = merge_notifications(snapshot.notifications, fresh)

    new_snapshot = replace(
        snapshot,
        entries=entries,
        subscriptions=renewals.subscriptions,
        notifications=tuple(notifications),
    )
    derived = Derived(
        period=period,
        virtual_entries=virtual_entries,
        ledger=ledger,
        budget=budget,
        trends=trends,
    )
    return Recomputation(snapshot=new_snapshot, derived=derived, renewals=renewals)
