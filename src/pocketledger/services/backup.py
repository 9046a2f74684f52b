"""Backup export and import."""

import json
import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from pocketledger.database import mappers
from pocketledger.database.base import Store
from pocketledger.database.repository import (
    BUDGET_KEY,
    CATEGORIES_KEY,
    ENTRIES_KEY,
    LedgerRepository,
    PLANS_KEY,
    STATEMENT_DAY_KEY,
    SUBSCRIPTIONS_KEY,
    THEME_KEY,
    USER_KEY,
    snapshot_to_records,
)
from pocketledger.domain.defaults import INITIAL_CATEGORIES
from pocketledger.domain.entities import (
    DEFAULT_BUDGET,
    DEFAULT_STATEMENT_DAY,
    Snapshot,
    Theme,
)
from pocketledger.domain.errors import (
    BackupImportError,
    ValidationError,
    invalid_statement_day,
)

logger = logging.getLogger(__name__)

EXPORTED_KEYS = (
    ENTRIES_KEY,
    CATEGORIES_KEY,
    PLANS_KEY,
    SUBSCRIPTIONS_KEY,
    BUDGET_KEY,
    STATEMENT_DAY_KEY,
    THEME_KEY,
    USER_KEY,
)


def _list_section(document: dict, key: str, required: bool = False) -> list:
    value = document.get(key)
    if value is None:
        if required:
            raise ValidationError(f"Backup is missing '{key}'")
        return []
    if not isinstance(value, list):
        raise ValidationError(f"Backup section '{key}' must be a list")
    return value


def _budget(value: Any) -> Decimal:
    if value is None:
        return DEFAULT_BUDGET
    if isinstance(value, bool):
        raise ValidationError("Backup budget must be a number")
    try:
        budget = Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"Backup budget must be a number, got {value!r}") from None
    if not budget.is_finite():
        raise ValidationError(f"Backup budget must be a finite number, got {value!r}")
    if budget < 0:
        raise ValidationError(f"Backup budget must not be negative, got {budget}")
    return budget


def _statement_day(value: Any) -> int:
    if value is None:
        return DEFAULT_STATEMENT_DAY
    try:
        day = int(value)
    except (TypeError, ValueError):
        raise ValidationError(invalid_statement_day(value)) from None
    if not 1 <= day <= 31:
        raise ValidationError(invalid_statement_day(day))
    return day


def _theme(value: Any) -> Theme:
    if value is None:
        return Theme.LIGHT
    try:
        return Theme(value)
    except ValueError:
        raise ValidationError(f"Unknown theme {value!r}") from None


def parse_backup(document: Any) -> Snapshot:
    """Validate a backup document and build the snapshot it describes.

    Missing optional sections fall back to first-run defaults. Notifications
    are not part of a backup and start empty.

    Raises:
        BackupImportError: If any part of the document is malformed
    """
    try:
        if not isinstance(document, dict):
            raise ValidationError("Backup must be a JSON object")
        entries = _list_section(document, ENTRIES_KEY, required=True)
        categories = (
            _list_section(document, CATEGORIES_KEY)
            if document.get(CATEGORIES_KEY) is not None
            else None
        )
        return Snapshot(
            entries=tuple(mappers.entry_from_record(r) for r in entries),
            categories=(
                tuple(mappers.category_from_record(r) for r in categories)
                if categories is not None
                else tuple(INITIAL_CATEGORIES)
            ),
            plans=tuple(
                mappers.plan_from_record(r) for r in _list_section(document, PLANS_KEY)
            ),
            subscriptions=tuple(
                mappers.subscription_from_record(r)
                for r in _list_section(document, SUBSCRIPTIONS_KEY)
            ),
            notifications=(),
            budget=_budget(document.get(BUDGET_KEY)),
            statement_day=_statement_day(document.get(STATEMENT_DAY_KEY)),
            theme=_theme(document.get(THEME_KEY)),
            user=mappers.user_from_record(document.get(USER_KEY)),
        )
    except (ValidationError, TypeError, AttributeError) as e:
        raise BackupImportError(f"Invalid backup: {e}") from e


class BackupService:
    """Export the whole store to a JSON document and restore it."""

    def __init__(self, store: Store):
        """Initialize backup service.

        Args:
            store: Store instance
        """
        self.store = store
        self.repository = LedgerRepository(store)

    def export_document(self) -> dict[str, Any]:
        """Build the backup document for the current state."""
        records = snapshot_to_records(self.repository.load_snapshot())
        return {key: records[key] for key in EXPORTED_KEYS if key in records}

    def export_to(self, path: str | Path) -> Path:
        """Write the backup document to a JSON file.

        Returns:
            Path the backup was written to
        """
        target = Path(path)
        target.write_text(
            json.dumps(self.export_document(), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        logger.info("Exported backup to %s", target)
        return target

    def import_document(self, document: Any) -> Snapshot:
        """Replace the stored state with a backup document.

        The document is validated in full before anything is written, and
        the replacement happens in one store transaction.

        Raises:
            BackupImportError: If the document is malformed
        """
        try:
            snapshot = parse_backup(document)
        except BackupImportError as e:
            logger.warning("Rejected backup: %s", e)
            raise
        self.repository.save_snapshot(snapshot)
        logger.info(
            "Imported backup with %d entries, %d plans and %d subscriptions",
            len(snapshot.entries),
            len(snapshot.plans),
            len(snapshot.subscriptions),
        )
        return snapshot

    def import_from(self, path: str | Path) -> Snapshot:
        """Read a JSON backup file and import it.

        Raises:
            BackupImportError: If the file cannot be read or is malformed
        """
        try:
            document = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not read backup %s: %s", path, e)
            raise BackupImportError(f"Could not read backup {path}: {e}") from e
        return self.import_document(document)
