"""Subscription service."""

import uuid
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Optional

from pocketledger.database.base import Store
from pocketledger.database.repository import LedgerRepository
from pocketledger.domain.entities import BillingCycle, DEFAULT_CURRENCY, Subscription
from pocketledger.domain.errors import NotFoundError, subscription_not_found
from pocketledger.domain.subscriptions import monthly_subscription_cost
from pocketledger.utils.clock import Clock


class SubscriptionService:
    """Service for managing subscriptions.

    Renewals are not posted here; they happen during the next
    recomputation pass.
    """

    def __init__(self, store: Store, clock: Optional[Clock] = None):
        """Initialize subscription service.

        Args:
            store: Store instance
            clock: Clock used to default the first payment date
        """
        self.repository = LedgerRepository(store)
        self.clock = clock or Clock()

    def list_subscriptions(self) -> list[Subscription]:
        """List all subscriptions."""
        return self.repository.get_subscriptions()

    def get_subscription(self, subscription_id: str) -> Optional[Subscription]:
        """Get subscription by ID, or None if not found."""
        for sub in self.repository.get_subscriptions():
            if sub.id == subscription_id:
                return sub
        return None

    def create_subscription(
        self,
        platform: str,
        amount: Decimal,
        first_payment_date: Optional[date] = None,
        billing_cycle: BillingCycle = BillingCycle.MONTHLY,
        next_payment_date: Optional[date] = None,
        currency: str = DEFAULT_CURRENCY,
        icon: str = "play_circle",
        color: str = "#8b5cf6",
    ) -> Subscription:
        """Create a subscription.

        The next payment date defaults to the first payment date, so past
        cycles are posted by the next recomputation pass.

        Returns:
            The created Subscription

        Raises:
            ValidationError: If platform is empty, amount negative or cycle unknown
        """
        first_payment = first_payment_date or self.clock.today()

        sub = Subscription(
            id=str(uuid.uuid4()),
            platform=(platform or "").strip(),
            amount=amount,
            first_payment_date=first_payment,
            next_payment_date=next_payment_date or first_payment,
            billing_cycle=billing_cycle,
            currency=currency,
            icon=icon,
            color=color,
        )
        self.repository.save_subscriptions([*self.repository.get_subscriptions(), sub])
        return sub

    def update_subscription(self, subscription_id: str, **updates) -> Subscription:
        """Edit subscription fields (platform, amount, next_payment_date, ...).

        Raises:
            NotFoundError: If the subscription doesn't exist
            ValidationError: If the edited subscription is invalid
        """
        current = self.get_subscription(subscription_id)
        if current is None:
            raise NotFoundError(subscription_not_found(subscription_id))
        updated = replace(current, **{k: v for k, v in updates.items() if v is not None})
        self.repository.save_subscriptions(
            [
                updated if s.id == subscription_id else s
                for s in self.repository.get_subscriptions()
            ]
        )
        return updated

    def set_active(self, subscription_id: str, is_active: bool) -> Subscription:
        """Pause or resume a subscription."""
        return self.update_subscription(subscription_id, is_active=is_active)

    def remove_subscription(self, subscription_id: str) -> None:
        """Delete a subscription. Entries it already posted are kept.

        Raises:
            NotFoundError: If the subscription doesn't exist
        """
        subs = self.repository.get_subscriptions()
        remaining = [s for s in subs if s.id != subscription_id]
        if len(remaining) == len(subs):
            raise NotFoundError(subscription_not_found(subscription_id))
        self.repository.save_subscriptions(remaining)

    def monthly_cost(self) -> Decimal:
        """Monthly cost of active subscriptions."""
        return monthly_subscription_cost(self.repository.get_subscriptions())
