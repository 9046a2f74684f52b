"""Ledger entry service."""

import uuid
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from pocketledger.database.base import Store
from pocketledger.database.repository import LedgerRepository
from pocketledger.domain.analysis import (
    ReceiptCandidate,
    VoiceCandidate,
    receipt_to_entry,
    voice_to_entry,
)
from pocketledger.domain.entities import DEFAULT_CURRENCY, LedgerEntry, LineItem
from pocketledger.domain.errors import NotFoundError, ValidationError, entry_not_found
from pocketledger.utils.clock import Clock


class EntryService:
    """Service for managing real ledger entries."""

    def __init__(self, store: Store, clock: Optional[Clock] = None):
        """Initialize entry service.

        Args:
            store: Store instance
            clock: Clock used for creation timestamps
        """
        self.repository = LedgerRepository(store)
        self.clock = clock or Clock()

    def add_entry(
        self,
        merchant: str,
        total: Decimal,
        category: str,
        entry_date: Optional[date] = None,
        items: Sequence[LineItem] = (),
        currency: str = DEFAULT_CURRENCY,
    ) -> LedgerEntry:
        """Record a manual expense.

        Args:
            merchant: Merchant or description
            total: Amount spent
            category: Category label
            entry_date: Day of the expense (defaults to today)
            items: Optional line items
            currency: Display currency symbol

        Returns:
            The created LedgerEntry

        Raises:
            ValidationError: If merchant or category is empty or total is negative
        """
        if not merchant or not merchant.strip():
            raise ValidationError("Merchant is required")
        if not category or not category.strip():
            raise ValidationError("Category is required")
        if not total.is_finite() or total < 0:
            raise ValidationError(f"Amount must be a non-negative number, got {total}")

        entry = LedgerEntry(
            id=str(uuid.uuid4()),
            merchant=merchant.strip(),
            date=entry_date or self.clock.today(),
            total=total,
            category=category,
            created_at=self.clock.now(),
            items=tuple(items),
            currency=currency,
        )
        return self._append(entry)

    def add_from_receipt(
        self, candidate: ReceiptCandidate, category: Optional[str] = None
    ) -> LedgerEntry:
        """Record a confirmed receipt candidate."""
        entry = receipt_to_entry(
            candidate, str(uuid.uuid4()), self.clock.now(), category=category
        )
        return self._append(entry)

    def add_from_voice(self, candidate: VoiceCandidate) -> LedgerEntry:
        """Record a confirmed voice candidate."""
        entry = voice_to_entry(candidate, str(uuid.uuid4()), self.clock.now())
        return self._append(entry)

    def _append(self, entry: LedgerEntry) -> LedgerEntry:
        entries = self.repository.get_entries()
        # Newest first, like the ledger listing
        self.repository.save_entries([entry, *entries])
        return entry

    def get_entry(self, entry_id: str) -> Optional[LedgerEntry]:
        """Get entry by ID, or None if not found."""
        for entry in self.repository.get_entries():
            if entry.id == entry_id:
                return entry
        return None

    def list_entries(self) -> list[LedgerEntry]:
        """List real entries in stored order."""
        return self.repository.get_entries()

    def remove_entry(self, entry_id: str) -> None:
        """Delete an entry.

        Raises:
            NotFoundError: If the entry doesn't exist
        """
        entries = self.repository.get_entries()
        remaining = [entry for entry in entries if entry.id != entry_id]
        if len(remaining) == len(entries):
            raise NotFoundError(entry_not_found(entry_id))
        self.repository.save_entries(remaining)
