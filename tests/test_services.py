"""Tests for the store-backed services."""

from datetime import date
from decimal import Decimal

import pytest

from pocketledger.domain.analysis import ReceiptCandidate, VoiceCandidate
from pocketledger.domain.entities import BillingCycle, LineItem, Theme, TrendMode
from pocketledger.domain.errors import ConflictError, NotFoundError, ValidationError


class TestEntryService:
    def test_add_entry_defaults_to_today(self, entry_service, today):
        entry = entry_service.add_entry("Market", Decimal("84.50"), "Groceries")

        assert entry.date == today
        assert entry_service.get_entry(entry.id) == entry

    def test_newest_entry_listed_first(self, entry_service):
        first = entry_service.add_entry("Market", Decimal("10"), "Groceries")
        second = entry_service.add_entry("Cafe", Decimal("5"), "Food & Drink")

        assert [e.id for e in entry_service.list_entries()] == [second.id, first.id]

    @pytest.mark.parametrize(
        "merchant, total, category",
        [
            ("", Decimal("1"), "Groceries"),
            ("Market", Decimal("-1"), "Groceries"),
            ("Market", Decimal("NaN"), "Groceries"),
            ("Market", Decimal("Infinity"), "Groceries"),
            ("Market", Decimal("1"), " "),
        ],
    )
    def test_add_entry_validation(self, entry_service, merchant, total, category):
        with pytest.raises(ValidationError):
            entry_service.add_entry(merchant, total, category)

    def test_remove_entry(self, entry_service):
        entry = entry_service.add_entry("Market", Decimal("10"), "Groceries")

        entry_service.remove_entry(entry.id)

        assert entry_service.list_entries() == []
        with pytest.raises(NotFoundError):
            entry_service.remove_entry(entry.id)

    def test_add_from_receipt_defaults_category(self, entry_service, today):
        candidate = ReceiptCandidate(
            merchant="Market",
            date=today,
            items=(LineItem("Milk", Decimal("30")),),
            total=Decimal("30"),
        )

        entry = entry_service.add_from_receipt(candidate)

        assert entry.category == "Groceries"
        assert entry.items == candidate.items

    def test_add_from_voice(self, entry_service, today):
        candidate = VoiceCandidate("Taxi", Decimal("120"), "Transport", today)

        entry = entry_service.add_from_voice(candidate)

        assert entry.total == Decimal("120")
        assert entry.category == "Transport"


class TestCategoryService:
    def test_first_run_categories(self, category_service):
        names = [c.name for c in category_service.list_categories()]

        assert names[0] == "Groceries"
        assert "Debts & Plans" in names
        assert len(names) == 9

    def test_create_and_update_category(self, category_service):
        category = category_service.create_category("Pets", icon="pets", budget_limit=Decimal("400"))

        updated = category_service.update_category(category.id, name="Pet care")

        assert updated.name == "Pet care"
        assert updated.budget_limit == Decimal("400")
        assert category_service.get_category_by_name("Pet care").id == category.id

    def test_duplicate_name_conflicts(self, category_service):
        with pytest.raises(ConflictError):
            category_service.create_category("Groceries")

        pets = category_service.create_category("Pets")
        with pytest.raises(ConflictError):
            category_service.update_category(pets.id, name="Transport")

    def test_remove_missing_category(self, category_service):
        with pytest.raises(NotFoundError):
            category_service.remove_category("nope")


class TestPlanService:
    def test_create_plan_and_overview(self, plan_service):
        plan_service.create_plan("Laptop", Decimal("12000"), 12, start_date=date(2023, 9, 15))

        overview = plan_service.overview()

        assert overview.outstanding_debt == Decimal("5000")
        assert overview.monthly_outflow == Decimal("1000")

    def test_invalid_plan(self, plan_service):
        with pytest.raises(ValidationError):
            plan_service.create_plan("Laptop", Decimal("12000"), 0)

    def test_update_plan_revalidates(self, plan_service):
        plan = plan_service.create_plan("Laptop", Decimal("1200"), 12)

        updated = plan_service.update_plan(plan.id, total_installments=6)

        assert updated.monthly_payment == Decimal("200")
        with pytest.raises(ValidationError):
            plan_service.update_plan(plan.id, total_installments=0)
        with pytest.raises(NotFoundError):
            plan_service.update_plan("nope", title="x")

    def test_remove_plan(self, plan_service):
        plan = plan_service.create_plan("Laptop", Decimal("1200"), 12)

        plan_service.remove_plan(plan.id)

        assert plan_service.list_plans() == []


class TestSubscriptionService:
    def test_next_payment_defaults_to_first_payment(self, subscription_service):
        sub = subscription_service.create_subscription(
            "Netflix", Decimal("100"), first_payment_date=date(2024, 1, 5)
        )

        assert sub.next_payment_date == date(2024, 1, 5)
        assert sub.billing_cycle == BillingCycle.MONTHLY

    def test_pause_and_resume(self, subscription_service):
        sub = subscription_service.create_subscription("Netflix", Decimal("100"))

        assert not subscription_service.set_active(sub.id, False).is_active
        assert subscription_service.set_active(sub.id, True).is_active

    def test_update_missing_subscription(self, subscription_service):
        with pytest.raises(NotFoundError):
            subscription_service.update_subscription("nope", amount=Decimal("5"))

    def test_monthly_cost(self, subscription_service):
        subscription_service.create_subscription("Netflix", Decimal("100"))
        subscription_service.create_subscription("Cloud", Decimal("600"), billing_cycle="yearly")

        assert subscription_service.monthly_cost() == Decimal("150")


class TestSettingsService:
    def test_budget(self, settings_service):
        settings_service.set_budget(Decimal("2000"))

        assert settings_service.get_budget() == Decimal("2000")
        with pytest.raises(ValidationError):
            settings_service.set_budget(Decimal("-1"))
        with pytest.raises(ValidationError):
            settings_service.set_budget(Decimal("Infinity"))

    @pytest.mark.parametrize("day", [0, 32])
    def test_statement_day_range(self, settings_service, day):
        with pytest.raises(ValidationError):
            settings_service.set_statement_day(day)

    def test_toggle_theme(self, settings_service):
        assert settings_service.toggle_theme() == Theme.DARK
        assert settings_service.toggle_theme() == Theme.LIGHT

    def test_update_user(self, settings_service):
        with pytest.raises(ValidationError):
            settings_service.update_user(email="ada@example.com")

        settings_service.update_user(name="Ada")
        user = settings_service.update_user(surname="Lovelace")

        assert (user.name, user.surname) == ("Ada", "Lovelace")


class TestDashboardService:
    def test_refresh_posts_renewals_once(self, dashboard_service, subscription_service):
        subscription_service.create_subscription(
            "Netflix", Decimal("100"), first_payment_date=date(2024, 1, 30)
        )

        first = dashboard_service.refresh()
        second = dashboard_service.refresh()

        assert len(first.renewals.created) == 2
        assert second.renewals.created == ()
        assert len(second.snapshot.entries) == 2
        stored = subscription_service.list_subscriptions()[0]
        assert stored.next_payment_date == date(2024, 3, 29)

    def test_refresh_stores_notifications(self, dashboard_service, subscription_service, notification_service):
        subscription_service.create_subscription(
            "Netflix", Decimal("100"), first_payment_date=date(2024, 3, 12)
        )

        dashboard_service.refresh()
        [notification] = notification_service.list_notifications()
        notification_service.mark_read(notification.id)
        dashboard_service.refresh()

        assert notification_service.list_notifications()[0].read
        assert notification_service.unread_count() == 0

    def test_virtual_entries_are_not_stored(self, dashboard_service, plan_service, entry_service):
        plan_service.create_plan("Laptop", Decimal("12000"), 12, start_date=date(2023, 9, 15))

        result = dashboard_service.refresh()

        assert len(result.derived.virtual_entries) == 7
        assert entry_service.list_entries() == []

    def test_search_ledger(self, dashboard_service, entry_service, plan_service):
        entry_service.add_entry("Corner Market", Decimal("50"), "Groceries")
        plan_service.create_plan("Laptop", Decimal("1200"), 12, start_date=date(2024, 3, 1))

        assert [e.merchant for e in dashboard_service.search_ledger(search="market")] == ["Corner Market"]
        assert len(dashboard_service.search_ledger(category="Laptop")) == 1

    def test_trend_reports_available(self, dashboard_service, entry_service):
        entry_service.add_entry("Market", Decimal("50"), "Groceries")

        trends = dashboard_service.refresh().derived.trends

        assert trends[TrendMode.WEEKLY].current_total == Decimal("50")


class TestNotificationService:
    def test_mark_missing_notification(self, notification_service):
        with pytest.raises(NotFoundError):
            notification_service.mark_read("nope")

    def test_clear(self, dashboard_service, subscription_service, notification_service):
        subscription_service.create_subscription(
            "Netflix", Decimal("100"), first_payment_date=date(2024, 3, 12)
        )
        dashboard_service.refresh()

        notification_service.clear()

        assert notification_service.list_notifications() == []
