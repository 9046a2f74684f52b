"""Budget, statement day, theme and profile settings."""

from dataclasses import replace
from decimal import Decimal
from typing import Optional

from pocketledger.database.base import Store
from pocketledger.database.repository import LedgerRepository
from pocketledger.domain.entities import Theme, UserProfile
from pocketledger.domain.errors import ValidationError, invalid_statement_day


class SettingsService:
    """Service for scalar settings."""

    def __init__(self, store: Store):
        self.repository = LedgerRepository(store)

    def get_budget(self) -> Decimal:
        return self.repository.get_budget()

    def set_budget(self, amount: Decimal) -> None:
        """Set the global budget.

        Raises:
            ValidationError: If amount is negative
        """
        if not amount.is_finite() or amount < 0:
            raise ValidationError(f"Budget must be a non-negative number, got {amount}")
        self.repository.save_budget(amount)

    def get_statement_day(self) -> int:
        return self.repository.get_statement_day()

    def set_statement_day(self, day: int) -> None:
        """Set the statement anchor day.

        Raises:
            ValidationError: If day is outside 1-31
        """
        if not 1 <= day <= 31:
            raise ValidationError(invalid_statement_day(day))
        self.repository.save_statement_day(day)

    def get_theme(self) -> Theme:
        return self.repository.get_theme()

    def toggle_theme(self) -> Theme:
        """Switch between light and dark theme; returns the new theme."""
        theme = Theme.DARK if self.get_theme() == Theme.LIGHT else Theme.LIGHT
        self.repository.save_theme(theme)
        return theme

    def get_user(self) -> Optional[UserProfile]:
        return self.repository.get_user()

    def update_user(self, **updates) -> UserProfile:
        """Update profile fields, creating the profile if needed."""
        current = self.repository.get_user()
        fields = {k: v for k, v in updates.items() if v is not None}
        if current is None:
            if not fields.get("name"):
                raise ValidationError("Profile name is required")
            user = UserProfile(**fields)
        else:
            user = replace(current, **fields)
        self.repository.save_user(user)
        return user
