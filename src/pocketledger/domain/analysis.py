"""Receipt and voice analysis collaborators.

The analyzers themselves (camera OCR, speech models, hosted AI services)
live outside pocketledger. They only have to return the raw candidate
shape; this module validates it and turns confirmed candidates into ledger
entries.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Sequence

from pocketledger.domain.defaults import OTHER_LABEL, RECEIPT_DEFAULT_LABEL
from pocketledger.domain.entities import DEFAULT_CURRENCY, LedgerEntry, LineItem
from pocketledger.domain.errors import AnalysisError, DomainError

logger = logging.getLogger(__name__)

UNKNOWN_MERCHANT = "Unknown merchant"
UNREADABLE_MERCHANT = "Unreadable receipt"


class ReceiptAnalyzer(ABC):
    """Turns a receipt image into a raw candidate mapping."""

    @abstractmethod
    def analyze(self, image: bytes) -> dict[str, Any]:
        """Return merchant, date, items, total and currency.

        Raises:
            AnalysisError: If the image could not be analyzed
        """
        pass


class VoiceAnalyzer(ABC):
    """Turns a spoken phrase into a raw candidate mapping."""

    @abstractmethod
    def analyze(self, text: str, categories: Sequence[str]) -> dict[str, Any]:
        """Return merchant, amount, category and date.

        Raises:
            AnalysisError: If the phrase could not be understood
        """
        pass


@dataclass(frozen=True)
class ReceiptCandidate:
    """Receipt data awaiting user confirmation."""

    merchant: str
    date: date
    items: tuple[LineItem, ...]
    total: Decimal
    currency: str = DEFAULT_CURRENCY
    is_fallback: bool = False


@dataclass(frozen=True)
class VoiceCandidate:
    """Voice-entered expense awaiting user confirmation."""

    merchant: str
    amount: Decimal
    category: str
    date: date


def _decimal(value: Any, field: str) -> Decimal:
    if value is None or value == "":
        return Decimal("0")
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise AnalysisError(f"Analyzer returned a non-numeric {field}: {value!r}") from None
    if not amount.is_finite():
        raise AnalysisError(f"Analyzer returned a non-numeric {field}: {value!r}")
    return amount


def _date(value: Any, today: date) -> date:
    if not value:
        return today
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        raise AnalysisError(f"Analyzer returned an invalid date: {value!r}") from None


def receipt_fallback(today: date) -> ReceiptCandidate:
    """Placeholder candidate shown when a receipt could not be read."""
    return ReceiptCandidate(
        merchant=UNREADABLE_MERCHANT,
        date=today,
        items=(),
        total=Decimal("0"),
        is_fallback=True,
    )


def read_receipt(
    analyzer: ReceiptAnalyzer, image: bytes, today: date
) -> ReceiptCandidate:
    """Analyze a receipt image.

    Never raises for analyzer failures: a fallback candidate flagged with
    ``is_fallback`` is returned so the user can fill the form by hand.
    """
    try:
        raw = analyzer.analyze(image)
        if not isinstance(raw, dict):
            raise AnalysisError("Analyzer returned no receipt data")
        items = tuple(
            LineItem(
                name=str(item.get("name") or ""),
                price=_decimal(item.get("price"), "price"),
                quantity=str(item.get("quantity") or "1"),
            )
            for item in raw.get("items") or []
            if isinstance(item, dict)
        )
        return ReceiptCandidate(
            merchant=str(raw.get("merchant") or UNKNOWN_MERCHANT),
            date=_date(raw.get("date"), today),
            items=items,
            total=_decimal(raw.get("total"), "total"),
            currency=str(raw.get("currency") or DEFAULT_CURRENCY),
        )
    except DomainError as e:
        logger.warning("Receipt analysis failed: %s", e)
        return receipt_fallback(today)


def read_voice_command(
    analyzer: VoiceAnalyzer, text: str, categories: Sequence[str], today: date
) -> VoiceCandidate:
    """Analyze a spoken expense.

    The category is constrained to ``categories``; anything else becomes
    "Other".

    Raises:
        AnalysisError: If the analyzer fails or returns no amount
    """
    try:
        raw = analyzer.analyze(text, list(categories))
    except AnalysisError:
        logger.warning("Voice analysis failed for %r", text)
        raise

    if not isinstance(raw, dict) or raw.get("amount") is None:
        raise AnalysisError("Could not understand the amount")

    category = str(raw.get("category") or "")
    if category not in categories:
        category = OTHER_LABEL

    return VoiceCandidate(
        merchant=str(raw.get("merchant") or UNKNOWN_MERCHANT),
        amount=_decimal(raw.get("amount"), "amount"),
        category=category,
        date=_date(raw.get("date"), today),
    )


def receipt_to_entry(
    candidate: ReceiptCandidate,
    entry_id: str,
    created_at: datetime,
    category: Optional[str] = None,
) -> LedgerEntry:
    """Build the ledger entry for a confirmed receipt."""
    return LedgerEntry(
        id=entry_id,
        merchant=candidate.merchant,
        date=candidate.date,
        total=candidate.total,
        category=category or RECEIPT_DEFAULT_LABEL,
        created_at=created_at,
        items=candidate.items,
        currency=candidate.currency,
    )


def voice_to_entry(
    candidate: VoiceCandidate, entry_id: str, created_at: datetime
) -> LedgerEntry:
    """Build the ledger entry for a confirmed voice command."""
    return LedgerEntry(
        id=entry_id,
        merchant=candidate.merchant,
        date=candidate.date,
        total=candidate.amount,
        category=candidate.category,
        created_at=created_at,
    )
