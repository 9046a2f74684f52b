"""Mapper functions to convert between domain entities and stored records.

Records are JSON documents using the field names of the mobile app's backup
files (camelCase, millisecond timestamps), so a store value and a backup
section share one format. Amounts are written as strings to keep Decimal
values exact; numbers are accepted on read.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from pocketledger.domain import entities as domain
from pocketledger.domain.errors import ValidationError


def _require(record: dict, key: str) -> Any:
    if not isinstance(record, dict):
        raise ValidationError(f"Expected an object, got {type(record).__name__}")
    value = record.get(key)
    if value is None:
        raise ValidationError(f"Missing required field '{key}'")
    return value


def _to_decimal(value: Any, key: str) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError(f"Field '{key}' must be a number")
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Field '{key}' must be a number, got {value!r}") from None
    if not amount.is_finite():
        raise ValidationError(f"Field '{key}' must be a finite number, got {value!r}")
    return amount


def _to_date(value: Any, key: str) -> date:
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        raise ValidationError(f"Field '{key}' must be a YYYY-MM-DD date, got {value!r}") from None


def _to_datetime(value: Any, key: str) -> datetime:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000)
        except (OverflowError, OSError, ValueError):
            raise ValidationError(f"Field '{key}' is out of range, got {value!r}") from None
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError(f"Field '{key}' must be a timestamp, got {value!r}") from None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _to_millis(value: datetime) -> int:
    return int(value.timestamp() * 1000)


def _amount(value: Decimal) -> str:
    return str(value)


def line_item_to_record(item: domain.LineItem) -> dict:
    """Convert LineItem entity to a record."""
    return {"name": item.name, "price": _amount(item.price), "quantity": item.quantity}


def line_item_from_record(record: dict) -> domain.LineItem:
    """Convert a record to a LineItem entity."""
    return domain.LineItem(
        name=str(record.get("name") or ""),
        price=_to_decimal(record.get("price", 0), "price"),
        quantity=str(record.get("quantity") or "1"),
    )


def entry_to_record(entry: domain.LedgerEntry) -> dict:
    """Convert LedgerEntry entity to a record."""
    return {
        "id": entry.id,
        "merchant": entry.merchant,
        "date": entry.date.isoformat(),
        "items": [line_item_to_record(item) for item in entry.items],
        "total": _amount(entry.total),
        "category": entry.category,
        "timestamp": _to_millis(entry.created_at),
        "currency": entry.currency,
    }


def entry_from_record(record: dict) -> domain.LedgerEntry:
    """Convert a record to a LedgerEntry entity."""
    entry_id = str(_require(record, "id"))
    items = record.get("items") or []
    if not isinstance(items, list):
        raise ValidationError("Field 'items' must be a list")
    return domain.LedgerEntry(
        id=entry_id,
        merchant=str(_require(record, "merchant")),
        date=_to_date(_require(record, "date"), "date"),
        total=_to_decimal(_require(record, "total"), "total"),
        category=str(record.get("category") or ""),
        created_at=_to_datetime(_require(record, "timestamp"), "timestamp"),
        items=tuple(line_item_from_record(item) for item in items),
        currency=str(record.get("currency") or domain.DEFAULT_CURRENCY),
    )


def category_to_record(category: domain.Category) -> dict:
    """Convert Category entity to a record."""
    record = {
        "id": category.id,
        "name": category.name,
        "icon": category.icon,
        "color": category.color,
    }
    if category.budget_limit is not None:
        record["budgetLimit"] = _amount(category.budget_limit)
    return record


def category_from_record(record: dict) -> domain.Category:
    """Convert a record to a Category entity."""
    category_id = str(_require(record, "id"))
    limit = record.get("budgetLimit")
    return domain.Category(
        id=category_id,
        name=str(_require(record, "name")),
        icon=str(record.get("icon") or "sell"),
        color=str(record.get("color") or "#94a3b8"),
        budget_limit=_to_decimal(limit, "budgetLimit") if limit is not None else None,
    )


def plan_to_record(plan: domain.InstallmentPlan) -> dict:
    """Convert InstallmentPlan entity to a record."""
    return {
        "id": plan.id,
        "title": plan.title,
        "totalAmount": _amount(plan.total_amount),
        "totalInstallments": plan.total_installments,
        "startDate": plan.start_date.isoformat(),
        "category": plan.icon,
    }


def plan_from_record(record: dict) -> domain.InstallmentPlan:
    """Convert a record to an InstallmentPlan entity."""
    count = _require(record, "totalInstallments")
    try:
        count = int(count)
    except (TypeError, ValueError):
        raise ValidationError(f"Field 'totalInstallments' must be an integer, got {count!r}") from None
    return domain.InstallmentPlan(
        id=str(_require(record, "id")),
        title=str(_require(record, "title")),
        total_amount=_to_decimal(_require(record, "totalAmount"), "totalAmount"),
        total_installments=count,
        start_date=_to_date(_require(record, "startDate"), "startDate"),
        icon=str(record.get("category") or "credit_card"),
    )


def subscription_to_record(subscription: domain.Subscription) -> dict:
    """Convert Subscription entity to a record."""
    return {
        "id": subscription.id,
        "platform": subscription.platform,
        "amount": _amount(subscription.amount),
        "currency": subscription.currency,
        "category": subscription.icon,
        "firstPaymentDate": subscription.first_payment_date.isoformat(),
        "nextPaymentDate": subscription.next_payment_date.isoformat(),
        "billingCycle": subscription.billing_cycle.value,
        "color": subscription.color,
        "isActive": subscription.is_active,
    }


def subscription_from_record(record: dict) -> domain.Subscription:
    """Convert a record to a Subscription entity."""
    next_payment = _to_date(_require(record, "nextPaymentDate"), "nextPaymentDate")
    first_payment = record.get("firstPaymentDate")
    return domain.Subscription(
        id=str(_require(record, "id")),
        platform=str(_require(record, "platform")),
        amount=_to_decimal(_require(record, "amount"), "amount"),
        first_payment_date=(
            _to_date(first_payment, "firstPaymentDate") if first_payment else next_payment
        ),
        next_payment_date=next_payment,
        billing_cycle=record.get("billingCycle") or domain.BillingCycle.MONTHLY,
        currency=str(record.get("currency") or domain.DEFAULT_CURRENCY),
        icon=str(record.get("category") or "play_circle"),
        color=str(record.get("color") or "#8b5cf6"),
        is_active=bool(record.get("isActive", True)),
    )


def notification_to_record(notification: domain.Notification) -> dict:
    """Convert Notification entity to a record."""
    record = {
        "id": notification.id,
        "type": notification.type.value,
        "title": notification.title,
        "message": notification.message,
        "date": notification.created_at.isoformat(),
        "read": notification.read,
    }
    if notification.action is not None:
        record["actionLink"] = notification.action
    return record


def notification_from_record(record: dict) -> domain.Notification:
    """Convert a record to a Notification entity."""
    kind = _require(record, "type")
    try:
        kind = domain.NotificationType(kind)
    except ValueError:
        raise ValidationError(f"Unknown notification type '{kind}'") from None
    return domain.Notification(
        id=str(_require(record, "id")),
        type=kind,
        title=str(record.get("title") or ""),
        message=str(record.get("message") or ""),
        created_at=_to_datetime(_require(record, "date"), "date"),
        read=bool(record.get("read", False)),
        action=record.get("actionLink"),
    )


def user_to_record(user: domain.UserProfile) -> dict:
    """Convert UserProfile entity to a record."""
    return {
        "name": user.name,
        "surname": user.surname,
        "email": user.email,
        "avatar": user.avatar,
    }


def user_from_record(record: Optional[dict]) -> Optional[domain.UserProfile]:
    """Convert a record to a UserProfile entity.

    Passwords present in old backups are ignored.
    """
    if not record:
        return None
    return domain.UserProfile(
        name=str(_require(record, "name")),
        surname=str(record.get("surname") or ""),
        email=str(record.get("email") or ""),
        avatar=str(record.get("avatar") or ""),
    )
