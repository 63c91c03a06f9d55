"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re

CENTS = Decimal("0.01")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal rounded to two places.

    Handles various formats:
    - "123.45"
    - "MVR123.45", "MVR 123.45", "123.45 MVR"
    - "-123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount with two fractional digits

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency codes and symbols
    amount_str = re.sub(r"(?i)MVR|USD|[$€£¥]", "", amount_str)

    # Remove thousands separators
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = to_money(Decimal(amount_str))
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}': not a finite number")
    return -amount if is_negative else amount


def to_money(value: Decimal | int | float | str | None) -> Decimal:
    """Convert a numeric value to a two-place Decimal.

    Floats go through their string form so 0.1 stays 0.10. None is zero.
    """
    if value is None:
        return Decimal("0.00")
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    if not value.is_finite():
        return value
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)
