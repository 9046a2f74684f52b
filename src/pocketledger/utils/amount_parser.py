"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a non-negative Decimal.

    Handles various formats:
    - "123.45"
    - "₺123.45" or "123.45 TL"
    - "1,234.56"
    - "12,50" (comma as decimal separator)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed or is negative
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    # Remove currency symbols and codes
    cleaned = re.sub(r"[$€£¥₺]|\bTL\b|\bTRY\b", "", amount_str.strip(), flags=re.IGNORECASE)
    cleaned = cleaned.replace(" ", "")

    # A single comma followed by one or two digits is a decimal separator
    if re.fullmatch(r"-?\d+,\d{1,2}", cleaned):
        cleaned = cleaned.replace(",", ".")
    else:
        cleaned = cleaned.replace(",", "")

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'") from None

    if not amount.is_finite():
        raise ValueError(f"Amount must be a finite number, got '{amount_str}'")
    if amount < 0:
        raise ValueError(f"Amount must not be negative, got '{amount_str}'")
    return amount
