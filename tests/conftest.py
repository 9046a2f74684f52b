"""Shared pytest fixtures for pocketledger tests."""

import os
import tempfile
from datetime import date, datetime
from decimal import Decimal

import pytest

from pocketledger.database.factories import create_sqlite_store
from pocketledger.domain.defaults import INITIAL_CATEGORIES
from pocketledger.domain.entities import LedgerEntry
from pocketledger.services import (
    BackupService,
    CategoryService,
    DashboardService,
    EntryService,
    NotificationService,
    PlanService,
    SettingsService,
    SubscriptionService,
)
from pocketledger.utils.clock import FixedClock

TODAY = date(2024, 3, 10)


@pytest.fixture
def temp_store():
    """Create a temporary store for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    store = create_sqlite_store(database_path=db_path)
    store.connect()
    store.initialize_schema()

    yield store

    # Cleanup
    store.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def clock():
    """Clock frozen at 2024-03-10 noon."""
    return FixedClock(TODAY)


@pytest.fixture
def entry_service(temp_store, clock):
    return EntryService(temp_store, clock)


@pytest.fixture
def category_service(temp_store):
    return CategoryService(temp_store)


@pytest.fixture
def plan_service(temp_store, clock):
    return PlanService(temp_store, clock)


@pytest.fixture
def subscription_service(temp_store, clock):
    return SubscriptionService(temp_store, clock)


@pytest.fixture
def settings_service(temp_store):
    return SettingsService(temp_store)


@pytest.fixture
def notification_service(temp_store):
    return NotificationService(temp_store)


@pytest.fixture
def backup_service(temp_store):
    return BackupService(temp_store)


@pytest.fixture
def dashboard_service(temp_store, clock):
    return DashboardService(temp_store, clock)


@pytest.fixture
def categories():
    """The first-run category set."""
    return list(INITIAL_CATEGORIES)


@pytest.fixture
def make_entry():
    """Factory for real ledger entries."""

    def _make(total, day, category="Groceries", merchant="Market", entry_id=None):
        return LedgerEntry(
            id=entry_id or f"e-{merchant}-{day.isoformat()}-{total}",
            merchant=merchant,
            date=day,
            total=Decimal(str(total)),
            category=category,
            created_at=datetime.combine(day, datetime.min.time()),
        )

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
