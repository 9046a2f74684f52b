"""Default data and reserved labels."""

from decimal import Decimal

from pocketledger.domain.entities import Category

SUBSCRIPTIONS_LABEL = "Subscriptions"
OTHER_LABEL = "Other"
RECEIPT_DEFAULT_LABEL = "Groceries"

DEBTS_CATEGORY_ID = "9"
DEBTS_CATEGORY_NAME = "Debts & Plans"

# Synthesized when the reserved debts category has been removed or renamed
SYNTHETIC_DEBTS_CATEGORY = Category(
    id="debt-virtual",
    name="Other Debts / Plans",
    icon="credit_card",
    color="#6366f1",
    budget_limit=Decimal("5000"),
)

INITIAL_CATEGORIES: tuple[Category, ...] = (
    Category("1", "Groceries", "shopping_cart", "#13ec80", Decimal("3000")),
    Category("2", "Food & Drink", "restaurant", "#f59e0b", Decimal("1500")),
    Category("3", "Transport", "directions_bus", "#3b82f6", Decimal("1000")),
    Category("4", "Bills", "receipt_long", "#ef4444", Decimal("2000")),
    Category("5", SUBSCRIPTIONS_LABEL, "play_circle", "#8b5cf6", Decimal("500")),
    Category("6", "Health", "medical_services", "#06b6d4", Decimal("1000")),
    Category("7", "Entertainment", "movie", "#ec4899", Decimal("1000")),
    Category("8", OTHER_LABEL, "sell", "#94a3b8", Decimal("500")),
    Category(DEBTS_CATEGORY_ID, DEBTS_CATEGORY_NAME, "credit_card", "#6366f1", Decimal("5000")),
)
