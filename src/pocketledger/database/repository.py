"""Typed access to the entity collections kept in a key-value store."""

from decimal import Decimal
from typing import Any, Callable, Optional

from pocketledger.database.base import Store
from pocketledger.database import mappers
from pocketledger.domain import entities as domain
from pocketledger.domain.defaults import INITIAL_CATEGORIES

ENTRIES_KEY = "expenses"
CATEGORIES_KEY = "categories"
PLANS_KEY = "paymentPlans"
SUBSCRIPTIONS_KEY = "subscriptions"
NOTIFICATIONS_KEY = "notifications"
BUDGET_KEY = "budget"
STATEMENT_DAY_KEY = "statementDay"
THEME_KEY = "theme"
USER_KEY = "user"


class LedgerRepository:
    """Load and save pocketledger collections through a Store."""

    def __init__(self, store: Store):
        """Initialize repository.

        Args:
            store: Store instance
        """
        self.store = store

    def _load_list(self, key: str, from_record: Callable[[dict], Any]) -> list:
        records = self.store.get(key)
        if records is None:
            return []
        return [from_record(record) for record in records]

    def get_entries(self) -> list[domain.LedgerEntry]:
        """Get all real ledger entries."""
        return self._load_list(ENTRIES_KEY, mappers.entry_from_record)

    def save_entries(self, entries: list[domain.LedgerEntry]) -> None:
        """Replace stored ledger entries."""
        self.store.set(ENTRIES_KEY, [mappers.entry_to_record(e) for e in entries])

    def get_categories(self) -> list[domain.Category]:
        """Get categories, falling back to the initial set on first run."""
        if self.store.get(CATEGORIES_KEY) is None:
            return list(INITIAL_CATEGORIES)
        return self._load_list(CATEGORIES_KEY, mappers.category_from_record)

    def save_categories(self, categories: list[domain.Category]) -> None:
        """Replace stored categories."""
        self.store.set(CATEGORIES_KEY, [mappers.category_to_record(c) for c in categories])

    def get_plans(self) -> list[domain.InstallmentPlan]:
        """Get all installment plans."""
        return self._load_list(PLANS_KEY, mappers.plan_from_record)

    def save_plans(self, plans: list[domain.InstallmentPlan]) -> None:
        """Replace stored installment plans."""
        self.store.set(PLANS_KEY, [mappers.plan_to_record(p) for p in plans])

    def get_subscriptions(self) -> list[domain.Subscription]:
        """Get all subscriptions."""
        return self._load_list(SUBSCRIPTIONS_KEY, mappers.subscription_from_record)

    def save_subscriptions(self, subscriptions: list[domain.Subscription]) -> None:
        """Replace stored subscriptions."""
        self.store.set(
            SUBSCRIPTIONS_KEY, [mappers.subscription_to_record(s) for s in subscriptions]
        )

    def get_notifications(self) -> list[domain.Notification]:
        """Get notifications from the last recomputation."""
        return self._load_list(NOTIFICATIONS_KEY, mappers.notification_from_record)

    def save_notifications(self, notifications: list[domain.Notification]) -> None:
        """Replace stored notifications."""
        self.store.set(
            NOTIFICATIONS_KEY, [mappers.notification_to_record(n) for n in notifications]
        )

    def get_budget(self) -> Decimal:
        """Get global budget amount."""
        value = self.store.get(BUDGET_KEY)
        return Decimal(str(value)) if value is not None else domain.DEFAULT_BUDGET

    def save_budget(self, budget: Decimal) -> None:
        self.store.set(BUDGET_KEY, str(budget))

    def get_statement_day(self) -> int:
        """Get statement anchor day."""
        value = self.store.get(STATEMENT_DAY_KEY)
        return int(value) if value is not None else domain.DEFAULT_STATEMENT_DAY

    def save_statement_day(self, day: int) -> None:
        self.store.set(STATEMENT_DAY_KEY, day)

    def get_theme(self) -> domain.Theme:
        value = self.store.get(THEME_KEY)
        return domain.Theme(value) if value else domain.Theme.LIGHT

    def save_theme(self, theme: domain.Theme) -> None:
        self.store.set(THEME_KEY, theme.value)

    def get_user(self) -> Optional[domain.UserProfile]:
        return mappers.user_from_record(self.store.get(USER_KEY))

    def save_user(self, user: Optional[domain.UserProfile]) -> None:
        if user is None:
            self.store.delete(USER_KEY)
        else:
            self.store.set(USER_KEY, mappers.user_to_record(user))

    def load_snapshot(self) -> domain.Snapshot:
        """Load every collection and setting into a Snapshot."""
        return domain.Snapshot(
            entries=tuple(self.get_entries()),
            categories=tuple(self.get_categories()),
            plans=tuple(self.get_plans()),
            subscriptions=tuple(self.get_subscriptions()),
            notifications=tuple(self.get_notifications()),
            budget=self.get_budget(),
            statement_day=self.get_statement_day(),
            theme=self.get_theme(),
            user=self.get_user(),
        )

    def save_snapshot(self, snapshot: domain.Snapshot) -> None:
        """Write every collection and setting in a single store transaction.

        A snapshot without a user profile removes the stored one.
        """
        removed = [USER_KEY] if snapshot.user is None else []
        self.store.set_many(snapshot_to_records(snapshot), delete=removed)


def snapshot_to_records(snapshot: domain.Snapshot) -> dict[str, Any]:
    """Serialize a snapshot to store records keyed by collection name."""
    records: dict[str, Any] = {
        ENTRIES_KEY: [mappers.entry_to_record(e) for e in snapshot.entries],
        CATEGORIES_KEY: [mappers.category_to_record(c) for c in snapshot.categories],
        PLANS_KEY: [mappers.plan_to_record(p) for p in snapshot.plans],
        SUBSCRIPTIONS_KEY: [
            mappers.subscription_to_record(s) for s in snapshot.subscriptions
        ],
        NOTIFICATIONS_KEY: [
            mappers.notification_to_record(n) for n in snapshot.notifications
        ],
        BUDGET_KEY: str(snapshot.budget),
        STATEMENT_DAY_KEY: snapshot.statement_day,
        THEME_KEY: snapshot.theme.value,
    }
    if snapshot.user is not None:
        records[USER_KEY] = mappers.user_to_record(snapshot.user)
    return records
