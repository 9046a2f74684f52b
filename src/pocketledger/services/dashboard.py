"""Recomputation host: load, recompute, persist."""

import logging
from datetime import date
from typing import Optional

from pocketledger.database.base import Store
from pocketledger.database.repository import LedgerRepository
from pocketledger.domain.engine import Recomputation, recompute
from pocketledger.domain.entities import LedgerEntry
from pocketledger.domain.ledger import filter_entries
from pocketledger.domain.subscriptions import SubscriptionRenewalProcessor
from pocketledger.utils.clock import Clock

logger = logging.getLogger(__name__)


class DashboardService:
    """Run recomputation passes against the store.

    Every pass reads the whole state, derives the billing period, budget,
    trends and notifications, and writes renewed subscriptions, posted
    entries and merged notifications back in a single store transaction.
    """

    def __init__(
        self,
        store: Store,
        clock: Optional[Clock] = None,
        processor: Optional[SubscriptionRenewalProcessor] = None,
    ):
        """Initialize dashboard service.

        Args:
            store: Store instance
            clock: Clock providing today and the current time
            processor: Renewal processor (a default one is created if omitted)
        """
        self.repository = LedgerRepository(store)
        self.clock = clock or Clock()
        self.processor = processor

    def refresh(self) -> Recomputation:
        """Run one recomputation pass and persist its results."""
        now = self.clock.now()
        today = self.clock.today()
        snapshot = self.repository.load_snapshot()
        processor = self.processor or SubscriptionRenewalProcessor(clock=lambda: now)

        result = recompute(snapshot, today, now, processor)

        self.repository.save_snapshot(result.snapshot)
        if result.renewals.created:
            logger.info("Posted %d subscription renewals", len(result.renewals.created))
        logger.debug(
            "Recomputed period %s..%s with %d notifications",
            result.derived.period.start,
            result.derived.period.end,
            len(result.snapshot.notifications),
        )
        return result

    def search_ledger(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[LedgerEntry]:
        """Refresh, then filter the merged ledger (real and virtual entries)."""
        ledger = self.refresh().derived.ledger
        return filter_entries(ledger, search, category, start_date, end_date)
