"""Notification service."""

from dataclasses import replace

from pocketledger.database.base import Store
from pocketledger.database.repository import LedgerRepository
from pocketledger.domain.entities import Notification
from pocketledger.domain.errors import NotFoundError, notification_not_found


class NotificationService:
    """Read and acknowledge notifications produced by recomputation."""

    def __init__(self, store: Store):
        self.repository = LedgerRepository(store)

    def list_notifications(self, unread_only: bool = False) -> list[Notification]:
        notifications = self.repository.get_notifications()
        if unread_only:
            return [n for n in notifications if not n.read]
        return notifications

    def unread_count(self) -> int:
        return len(self.list_notifications(unread_only=True))

    def mark_read(self, notification_id: str) -> Notification:
        """Mark one notification read.

        Raises:
            NotFoundError: If no notification has that id
        """
        notifications = self.repository.get_notifications()
        target = next((n for n in notifications if n.id == notification_id), None)
        if target is None:
            raise NotFoundError(notification_not_found(notification_id))
        updated = replace(target, read=True)
        self.repository.save_notifications(
            [updated if n.id == notification_id else n for n in notifications]
        )
        return updated

    def mark_all_read(self) -> int:
        """Mark every notification read; returns how many changed."""
        notifications = self.repository.get_notifications()
        changed = sum(1 for n in notifications if not n.read)
        self.repository.save_notifications([replace(n, read=True) for n in notifications])
        return changed

    def clear(self) -> None:
        """Drop all notifications.

        Alerts whose condition still holds come back unread on the next pass.
        """
        self.repository.save_notifications([])
