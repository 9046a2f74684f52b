"""Category service."""

import uuid
from dataclasses import replace
from decimal import Decimal
from typing import Optional

from pocketledger.database.base import Store
from pocketledger.database.repository import LedgerRepository
from pocketledger.domain.entities import Category
from pocketledger.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    category_not_found,
    duplicate_category_name,
)


def _valid_limit(limit: Decimal) -> bool:
    return limit.is_finite() and limit >= 0


class CategoryService:
    """Service for managing categories.

    Removing or renaming a category never touches existing entries; their
    spend becomes unmatched.
    """

    def __init__(self, store: Store):
        """Initialize category service.

        Args:
            store: Store instance
        """
        self.repository = LedgerRepository(store)

    def list_categories(self) -> list[Category]:
        """List all categories."""
        return self.repository.get_categories()

    def get_category(self, category_id: str) -> Optional[Category]:
        """Get category by ID, or None if not found."""
        for category in self.repository.get_categories():
            if category.id == category_id:
                return category
        return None

    def get_category_by_name(self, name: str) -> Optional[Category]:
        """Get category by display name, or None if not found."""
        for category in self.repository.get_categories():
            if category.name == name:
                return category
        return None

    def require_category(self, category_id: str) -> Category:
        """Get category by ID.

        Raises:
            NotFoundError: If category doesn't exist
        """
        category = self.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        return category

    def create_category(
        self,
        name: str,
        icon: str = "sell",
        color: str = "#94a3b8",
        budget_limit: Optional[Decimal] = None,
    ) -> Category:
        """Create a category.

        Args:
            name: Display name, unique across categories
            icon: Icon token
            color: Color token
            budget_limit: Optional monthly limit (1000 when unset)

        Returns:
            The created Category

        Raises:
            ValidationError: If the name is empty or the limit is negative
            ConflictError: If a category with that name exists
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Category name is required")
        if budget_limit is not None and not _valid_limit(budget_limit):
            raise ValidationError(f"Budget limit must be a non-negative number, got {budget_limit}")

        categories = self.repository.get_categories()
        if any(c.name == name for c in categories):
            raise ConflictError(duplicate_category_name(name))

        category = Category(
            id=str(uuid.uuid4()),
            name=name,
            icon=icon,
            color=color,
            budget_limit=budget_limit,
        )
        self.repository.save_categories([*categories, category])
        return category

    def update_category(
        self,
        category_id: str,
        name: Optional[str] = None,
        icon: Optional[str] = None,
        color: Optional[str] = None,
        budget_limit: Optional[Decimal] = None,
    ) -> Category:
        """Rename, recolor or re-limit a category.

        Raises:
            NotFoundError: If category doesn't exist
            ConflictError: If the new name is taken by another category
        """
        categories = self.repository.get_categories()
        current = self.require_category(category_id)

        updates: dict = {}
        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError("Category name is required")
            if any(c.name == name and c.id != category_id for c in categories):
                raise ConflictError(duplicate_category_name(name))
            updates["name"] = name
        if icon is not None:
            updates["icon"] = icon
        if color is not None:
            updates["color"] = color
        if budget_limit is not None:
            if not _valid_limit(budget_limit):
                raise ValidationError(f"Budget limit must be a non-negative number, got {budget_limit}")
            updates["budget_limit"] = budget_limit

        updated = replace(current, **updates)
        self.repository.save_categories(
            [updated if c.id == category_id else c for c in categories]
        )
        return updated

    def remove_category(self, category_id: str) -> None:
        """Delete a category.

        Raises:
            NotFoundError: If category doesn't exist
        """
        categories = self.repository.get_categories()
        remaining = [c for c in categories if c.id != category_id]
        if len(remaining) == len(categories):
            raise NotFoundError(category_not_found(category_id))
        self.repository.save_categories(remaining)
