"""Host services that read and write the store."""

from pocketledger.services.backup import BackupService
from pocketledger.services.categories import CategoryService
from pocketledger.services.dashboard import DashboardService
from pocketledger.services.entries import EntryService
from pocketledger.services.notifications import NotificationService
from pocketledger.services.plans import PlanService
from pocketledger.services.settings import SettingsService
from pocketledger.services.subscriptions import SubscriptionService

__all__ = [
    "BackupService",
    "CategoryService",
    "DashboardService",
    "EntryService",
    "NotificationService",
    "PlanService",
    "SettingsService",
    "SubscriptionService",
]
