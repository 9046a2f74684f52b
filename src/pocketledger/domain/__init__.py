"""Domain layer for pocketledger application.

Pure engine components; nothing here touches the store.
"""

from pocketledger.domain.periods import statement_period
from pocketledger.domain.installments import project_installments, describe_plan
from pocketledger.domain.subscriptions import SubscriptionRenewalProcessor
from pocketledger.domain.budget import summarize_budget
from pocketledger.domain.trends import build_trend_report
from pocketledger.domain.notifications import generate_notifications, merge_notifications
from pocketledger.domain.engine import recompute

__all__ = [
    "statement_period",
    "project_installments",
    "describe_plan",
    "SubscriptionRenewalProcessor",
    "summarize_budget",
    "build_trend_report",
    "generate_notifications",
    "merge_notifications",
    "recompute",
]
