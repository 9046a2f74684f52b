"""Tests for the key-value store, mappers and repository."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from pocketledger.database import mappers
from pocketledger.database.factories import create_sqlite_store, resolve_database_path
from pocketledger.database.repository import LedgerRepository
from pocketledger.domain.defaults import INITIAL_CATEGORIES
from pocketledger.domain.entities import (
    BillingCycle,
    Category,
    InstallmentPlan,
    LedgerEntry,
    LineItem,
    Notification,
    NotificationType,
    Snapshot,
    Subscription,
    Theme,
    UserProfile,
)
from pocketledger.domain.errors import ValidationError


def test_store_get_set_delete(temp_store):
    assert temp_store.get("missing") is None

    temp_store.set("budget", "1500")
    temp_store.set("expenses", [{"id": "1"}])

    assert temp_store.get("budget") == "1500"
    assert temp_store.get("expenses") == [{"id": "1"}]
    assert temp_store.keys() == ["budget", "expenses"]

    temp_store.delete("budget")
    assert temp_store.get("budget") is None


def test_store_overwrites_value(temp_store):
    temp_store.set("theme", "light")
    temp_store.set("theme", "dark")

    assert temp_store.get("theme") == "dark"


def test_store_keeps_unicode(temp_store):
    temp_store.set("user", {"name": "Şule"})

    assert temp_store.get("user") == {"name": "Şule"}


def test_set_many_is_atomic(temp_store):
    temp_store.set("budget", "100")

    with pytest.raises(TypeError):
        temp_store.set_many({"budget": "200", "broken": object()})

    assert temp_store.get("budget") == "100"
    assert temp_store.get("broken") is None


def test_set_many_removes_keys_in_same_transaction(temp_store):
    temp_store.set_many({"budget": "100", "user": {"name": "Ada"}})

    with pytest.raises(TypeError):
        temp_store.set_many({"broken": object()}, delete=["user"])
    assert temp_store.get("user") == {"name": "Ada"}

    temp_store.set_many({"budget": "200"}, delete=["user", "missing"])

    assert temp_store.get("budget") == "200"
    assert temp_store.keys() == ["budget"]


def test_database_path_prefers_argument_then_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("POCKETLEDGER_DB_PATH", str(tmp_path / "env.db"))

    assert resolve_database_path(str(tmp_path / "arg.db")) == tmp_path / "arg.db"
    assert resolve_database_path() == tmp_path / "env.db"


def test_store_remembers_its_file(tmp_path):
    store = create_sqlite_store(database_path=str(tmp_path / "ledger.db"))

    assert store.database_path == str(tmp_path / "ledger.db")
    assert store.database_url == f"sqlite:///{tmp_path / 'ledger.db'}"


def test_second_store_sees_writes(temp_store):
    temp_store.set("budget", "100")
    other = create_sqlite_store(database_path=temp_store.database_path)
    other.connect()
    try:
        assert other.get("budget") == "100"
        other.set("budget", "300")
    finally:
        other.disconnect()

    assert temp_store.get("budget") == "300"


def test_entry_record_format():
    entry = LedgerEntry(
        id="e1",
        merchant="Market",
        date=date(2024, 3, 1),
        total=Decimal("84.50"),
        category="Groceries",
        created_at=datetime(2024, 3, 1, 9, 30),
        items=(LineItem("Bread", Decimal("12.50"), "2"),),
    )

    record = mappers.entry_to_record(entry)

    assert record["date"] == "2024-03-01"
    assert record["total"] == "84.50"
    assert isinstance(record["timestamp"], int)
    assert record["items"] == [{"name": "Bread", "price": "12.50", "quantity": "2"}]
    assert mappers.entry_from_record(record) == entry


def test_entry_record_accepts_numbers():
    entry = mappers.entry_from_record(
        {
            "id": "e1",
            "merchant": "Cafe",
            "date": "2024-03-01T10:00:00.000Z",
            "total": 42.5,
            "category": "Food & Drink",
            "timestamp": 1709287200000,
        }
    )

    assert entry.total == Decimal("42.5")
    assert entry.date == date(2024, 3, 1)
    assert entry.items == ()


@pytest.mark.parametrize(
    "record",
    [
        {"merchant": "x", "date": "2024-03-01", "total": "1", "timestamp": 0},
        {"id": "1", "merchant": "x", "date": "soon", "total": "1", "timestamp": 0},
        {"id": "1", "merchant": "x", "date": "2024-03-01", "total": "lots", "timestamp": 0},
        {"id": "1", "merchant": "x", "date": "2024-03-01", "total": "NaN", "timestamp": 0},
        {"id": "1", "merchant": "x", "date": "2024-03-01", "total": float("inf"), "timestamp": 0},
        {"id": "1", "merchant": "x", "date": "2024-03-01", "total": "1", "timestamp": 10**20},
        "not a record",
    ],
)
def test_bad_entry_record_raises_validation_error(record):
    with pytest.raises(ValidationError):
        mappers.entry_from_record(record)


def test_category_limit_is_optional():
    category = Category("c1", "Pets", "pets", "#fff")

    record = mappers.category_to_record(category)

    assert "budgetLimit" not in record
    assert mappers.category_from_record(record) == category


def test_plan_record_uses_icon_as_category():
    plan = InstallmentPlan("p1", "Laptop", Decimal("12000"), 12, date(2024, 1, 15), icon="laptop")

    record = mappers.plan_to_record(plan)

    assert record["category"] == "laptop"
    assert record["totalInstallments"] == 12
    assert mappers.plan_from_record(record) == plan


def test_plan_record_rejects_zero_installments():
    with pytest.raises(ValidationError):
        mappers.plan_from_record(
            {"id": "p1", "title": "x", "totalAmount": 10, "totalInstallments": 0, "startDate": "2024-01-01"}
        )


def test_subscription_record_defaults():
    sub = mappers.subscription_from_record(
        {"id": "s1", "platform": "Music", "amount": "59.99", "nextPaymentDate": "2024-04-01"}
    )

    assert sub.billing_cycle == BillingCycle.MONTHLY
    assert sub.first_payment_date == date(2024, 4, 1)
    assert sub.is_active


def test_notification_record_round_trip():
    notification = Notification(
        id="sub-due:s1:2024-03-12",
        type=NotificationType.INFO,
        title="Subscription payment",
        message="Netflix payment is due in 2 days.",
        created_at=datetime(2024, 3, 10, 12, 0),
        read=True,
        action="/?view=subscriptions",
    )

    record = mappers.notification_to_record(notification)

    assert record["actionLink"] == "/?view=subscriptions"
    assert mappers.notification_from_record(record) == notification


def test_user_record_ignores_password():
    user = mappers.user_from_record({"name": "Ada", "email": "ada@example.com", "password": "x"})

    assert user == UserProfile(name="Ada", email="ada@example.com")
    assert "password" not in mappers.user_to_record(user)


def test_repository_first_run_defaults(temp_store):
    repository = LedgerRepository(temp_store)

    snapshot = repository.load_snapshot()

    assert snapshot.entries == ()
    assert snapshot.categories == INITIAL_CATEGORIES
    assert snapshot.budget == Decimal("15000")
    assert snapshot.statement_day == 1
    assert snapshot.theme == Theme.LIGHT
    assert snapshot.user is None


def test_repository_snapshot_round_trip(temp_store):
    repository = LedgerRepository(temp_store)
    snapshot = Snapshot(
        entries=(
            LedgerEntry("e1", "Market", date(2024, 3, 1), Decimal("10"), "Groceries",
                        datetime(2024, 3, 1, 9, 0)),
        ),
        categories=INITIAL_CATEGORIES[:2],
        plans=(InstallmentPlan("p1", "Laptop", Decimal("1200"), 12, date(2024, 1, 15)),),
        subscriptions=(
            Subscription("s1", "Netflix", Decimal("100"), date(2024, 1, 1), date(2024, 4, 1),
                         billing_cycle=BillingCycle.YEARLY),
        ),
        budget=Decimal("2500.50"),
        statement_day=15,
        theme=Theme.DARK,
        user=UserProfile(name="Ada"),
    )

    repository.save_snapshot(snapshot)

    assert repository.load_snapshot() == snapshot
