"""Subscription renewal processing."""

import logging
import uuid
from dataclasses import dataclass, replace
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Iterable, Optional, Sequence

from pocketledger.domain.defaults import SUBSCRIPTIONS_LABEL
from pocketledger.domain.entities import BillingCycle, LedgerEntry, Subscription
from pocketledger.domain.periods import add_months, add_years

logger = logging.getLogger(__name__)


def advance_due_date(due: date, cycle: BillingCycle) -> date:
    """Move a due date forward by one billing cycle."""
    if cycle == BillingCycle.YEARLY:
        return add_years(due, 1)
    return add_months(due, 1)


def monthly_subscription_cost(subscriptions: Iterable[Subscription]) -> Decimal:
    """Monthly cost of active subscriptions, yearly ones prorated by 12."""
    total = Decimal("0")
    for sub in subscriptions:
        if not sub.is_active:
            continue
        if sub.billing_cycle == BillingCycle.YEARLY:
            total += sub.amount / 12
        else:
            total += sub.amount
    return total


@dataclass(frozen=True)
class RenewalResult:
    """Outcome of one renewal pass."""

    subscriptions: tuple[Subscription, ...]
    entries: tuple[LedgerEntry, ...]
    created: tuple[LedgerEntry, ...]
    advanced: tuple[str, ...] = ()

    @property
    def changed(self) -> bool:
        """True if any subscription moved to a later due date."""
        return bool(self.advanced)


class SubscriptionRenewalProcessor:
    """Post a ledger entry for every due subscription cycle.

    This is the only engine step that produces new persisted state. Each
    subscription is caught up cycle by cycle: one entry per missed cycle,
    then the next-payment date is advanced past today. A cycle that already
    has a matching entry (same merchant, total and date) is advanced
    without posting again.
    """

    def __init__(
        self,
        id_factory: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize processor.

        Args:
            id_factory: Callable producing ids for new entries (uuid4 by default)
            clock: Callable returning the creation timestamp of new entries
        """
        self.id_factory = id_factory or (lambda: str(uuid.uuid4()))
        self.clock = clock or datetime.now

    def is_due(self, subscription: Subscription, today: date) -> bool:
        """Return True if the subscription has an unprocessed cycle."""
        return subscription.is_active and subscription.next_payment_date <= today

    def process(
        self,
        subscriptions: Sequence[Subscription],
        entries: Sequence[LedgerEntry],
        today: date,
    ) -> RenewalResult:
        """Catch every active subscription up to today.

        Args:
            subscriptions: Current subscriptions
            entries: Current real ledger entries
            today: Reference day

        Returns:
            RenewalResult with updated subscriptions, the full ledger and the
            entries created by this pass
        """
        ledger = list(entries)
        updated: list[Subscription] = []
        created: list[LedgerEntry] = []
        advanced: list[str] = []

        for sub in subscriptions:
            if not self.is_due(sub, today):
                updated.append(sub)
                continue
            sub, posted = self._catch_up(sub, ledger, today)
            # Entries and the advanced date are applied together
            ledger.extend(posted)
            created.extend(posted)
            updated.append(sub)
            advanced.append(sub.id)

        return RenewalResult(
            subscriptions=tuple(updated),
            entries=tuple(ledger),
            created=tuple(created),
            advanced=tuple(advanced),
        )

    def _catch_up(
        self, sub: Subscription, ledger: Sequence[LedgerEntry], today: date
    ) -> tuple[Subscription, list[LedgerEntry]]:
        posted: list[LedgerEntry] = []
        due = sub.next_payment_date
        while due <= today:
            if self._already_posted(sub, due, ledger):
                logger.debug(
                    "Cycle %s of subscription %s already posted, advancing",
                    due,
                    sub.id,
                )
            else:
                posted.append(self._build_entry(sub, due))
                logger.info(
                    "Posted renewal of %s for %s (%s)", sub.platform, due, sub.amount
                )
            due = advance_due_date(due, sub.billing_cycle)
        return replace(sub, next_payment_date=due), posted

    def _already_posted(
        self, sub: Subscription, due: date, ledger: Iterable[LedgerEntry]
    ) -> bool:
        return any(
            entry.merchant == sub.platform
            and entry.total == sub.amount
            and entry.date == due
            for entry in ledger
        )

    def _build_entry(self, sub: Subscription, due: date) -> LedgerEntry:
        return LedgerEntry(
            id=self.id_factory(),
            merchant=sub.platform,
            date=due,
            total=sub.amount,
            category=SUBSCRIPTIONS_LABEL,
            created_at=self.clock(),
            currency=sub.currency,
        )
