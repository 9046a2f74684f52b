"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class AnalysisError(DomainError):
    """Receipt or voice analysis collaborator failed."""


class BackupImportError(DomainError):
    """Backup document is malformed and was not applied."""


def entry_not_found(entry_id: str) -> str:
    """Return message for missing ledger entry."""
    return f"Entry {entry_id} not found"


def category_not_found(category_id: str) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def plan_not_found(plan_id: str) -> str:
    """Return message for missing installment plan."""
    return f"Installment plan {plan_id} not found"


def subscription_not_found(subscription_id: str) -> str:
    """Return message for missing subscription."""
    return f"Subscription {subscription_id} not found"


def notification_not_found(notification_id: str) -> str:
    """Return message for missing notification."""
    return f"Notification {notification_id} not found"


def duplicate_category_name(name: str) -> str:
    """Return message when a category name is already taken."""
    return f"Category '{name}' already exists"


def invalid_statement_day(day: int) -> str:
    """Return message for an out-of-range statement day."""
    return f"Statement day must be between 1 and 31, got {day}"
