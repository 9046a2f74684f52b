"""Domain model entities for pocketledger.

These are pure data classes representing business concepts, independent of
how the store serializes them. Persisted entities are immutable; changes are
made by building a new instance with ``dataclasses.replace``.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Optional

from pocketledger.domain.errors import ValidationError

DEFAULT_CURRENCY = "₺"
DEFAULT_CATEGORY_LIMIT = Decimal("1000")


class BillingCycle(str, Enum):
    """Renewal cycle of a subscription."""

    MONTHLY = "monthly"
    YEARLY = "yearly"


class NotificationType(str, Enum):
    """Severity of a notification."""

    INFO = "info"
    WARNING = "warning"
    ALERT = "alert"
    SUCCESS = "success"


class BudgetStatus(str, Enum):
    """Spend status of a category against its limit."""

    UNDER_BUDGET = "under-budget"
    AT_RISK = "at-risk"
    OVER_BUDGET = "over-budget"


class TrendMode(str, Enum):
    """Reporting granularity of the trend report."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class PlanStatus(str, Enum):
    """Progress status of an installment plan."""

    ACTIVE = "active"
    COMPLETED = "completed"


class Theme(str, Enum):
    """Display theme stored with the user settings."""

    LIGHT = "light"
    DARK = "dark"


@dataclass(frozen=True)
class LineItem:
    """Receipt line item. Informational only, never used for totals."""

    name: str
    price: Decimal
    quantity: str = "1"


@dataclass(frozen=True)
class LedgerEntry:
    """Money spent on a given day.

    Real entries are persisted; installment projections share this shape
    with ``is_virtual`` set and are never written to the store.
    """

    id: str
    merchant: str
    date: date
    total: Decimal
    category: str
    created_at: datetime
    items: tuple[LineItem, ...] = ()
    currency: str = DEFAULT_CURRENCY
    is_virtual: bool = False


@dataclass(frozen=True)
class Category:
    """Spending category, joined to entries by name."""

    id: str
    name: str
    icon: str
    color: str
    budget_limit: Optional[Decimal] = None

    @property
    def effective_limit(self) -> Decimal:
        """Monthly limit, falling back to the default when unset."""
        return self.budget_limit or DEFAULT_CATEGORY_LIMIT


@dataclass(frozen=True)
class InstallmentPlan:
    """Purchase paid off in equal monthly installments."""

    id: str
    title: str
    total_amount: Decimal
    total_installments: int
    start_date: date
    icon: str = "credit_card"

    def __post_init__(self):
        if not self.title or not self.title.strip():
            raise ValidationError("Installment plan title is required")
        if self.total_installments <= 0:
            raise ValidationError(
                f"Installment count must be positive, got {self.total_installments}"
            )
        if not self.total_amount.is_finite() or self.total_amount < 0:
            raise ValidationError(
                f"Installment plan amount must be a non-negative number, got {self.total_amount}"
            )

    @property
    def monthly_payment(self) -> Decimal:
        """Exact per-installment amount; rounding is left to display code."""
        return self.total_amount / self.total_installments


@dataclass(frozen=True)
class Subscription:
    """Recurring payment advanced once per billing cycle."""

    id: str
    platform: str
    amount: Decimal
    first_payment_date: date
    next_payment_date: date
    billing_cycle: BillingCycle = BillingCycle.MONTHLY
    currency: str = DEFAULT_CURRENCY
    icon: str = "play_circle"
    color: str = "#8b5cf6"
    is_active: bool = True

    def __post_init__(self):
        if not self.platform or not self.platform.strip():
            raise ValidationError("Subscription platform is required")
        if not self.amount.is_finite() or self.amount < 0:
            raise ValidationError(
                f"Subscription amount must be a non-negative number, got {self.amount}"
            )
        if not isinstance(self.billing_cycle, BillingCycle):
            try:
                object.__setattr__(
                    self, "billing_cycle", BillingCycle(self.billing_cycle)
                )
            except ValueError:
                raise ValidationError(
                    f"Unknown billing cycle '{self.billing_cycle}'"
                ) from None


@dataclass(frozen=True)
class Notification:
    """User-facing alert. ``id`` is derived from the triggering condition."""

    id: str
    type: NotificationType
    title: str
    message: str
    created_at: datetime
    read: bool = False
    action: Optional[str] = None


@dataclass(frozen=True)
class UserProfile:
    """Display profile exported with backups."""

    name: str
    surname: str = ""
    email: str = ""
    avatar: str = ""


@dataclass(frozen=True)
class BillingPeriod:
    """Statement-anchored period, inclusive on both ends."""

    start: date
    end: date

    @property
    def start_at(self) -> datetime:
        return datetime.combine(self.start, time.min)

    @property
    def end_at(self) -> datetime:
        return datetime.combine(self.end, time(23, 59, 59))

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class CategorySpend:
    """Spend of one category within a period."""

    category: Category
    spent: Decimal
    limit: Decimal
    is_synthetic: bool = False

    @property
    def remaining(self) -> Decimal:
        return max(Decimal("0"), self.limit - self.spent)


@dataclass(frozen=True)
class ChartSegment:
    """Donut chart arc, in degrees."""

    label: str
    color: str
    start_angle: float
    end_angle: float


@dataclass(frozen=True)
class BudgetSummary:
    """Budget state of a billing period."""

    period: BillingPeriod
    budget: Decimal
    total_spent: Decimal
    remaining: Decimal
    categories: tuple[CategorySpend, ...]
    unmatched_spent: Decimal = Decimal("0")
    segments: tuple[ChartSegment, ...] = ()


@dataclass(frozen=True)
class TrendPoint:
    """One chart bin. ``label`` is empty for unlabeled bins."""

    start: date
    end: date
    label: str
    value: Decimal


@dataclass(frozen=True)
class TrendReport:
    """Spend of the current window compared to the previous one."""

    mode: TrendMode
    window: BillingPeriod
    previous_window: BillingPeriod
    current_total: Decimal
    previous_total: Decimal
    percent_change: float
    points: tuple[TrendPoint, ...]
    path: str = ""
    category_totals: tuple[tuple[str, Decimal], ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PlanProgress:
    """Installment plan progress as of a given day."""

    plan: InstallmentPlan
    monthly_payment: Decimal
    current_installment: int
    remaining_amount: Decimal
    status: PlanStatus
    next_payment_date: date
    days_left: int


@dataclass(frozen=True)
class PlanOverview:
    """Totals across all installment plans."""

    outstanding_debt: Decimal
    monthly_outflow: Decimal
    active: tuple[PlanProgress, ...]
    completed: tuple[PlanProgress, ...]
    upcoming: Optional[PlanProgress] = None


DEFAULT_BUDGET = Decimal("15000")
DEFAULT_STATEMENT_DAY = 1


@dataclass(frozen=True)
class Snapshot:
    """In-memory copy of every persisted collection and setting."""

    entries: tuple[LedgerEntry, ...] = ()
    categories: tuple[Category, ...] = ()
    plans: tuple[InstallmentPlan, ...] = ()
    subscriptions: tuple[Subscription, ...] = ()
    notifications: tuple[Notification, ...] = ()
    budget: Decimal = DEFAULT_BUDGET
    statement_day: int = DEFAULT_STATEMENT_DAY
    theme: Theme = Theme.LIGHT
    user: Optional[UserProfile] = None
