"""Amount parsing utilities."""

import re
from decimal import Decimal, InvalidOperation


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45", "€123.45", "₴123.45"
    - "1,234.56"
    - "1.234,56" and "12,50" (comma as decimal separator)
    - "1 234.56"

    Signs are rejected: transaction direction is given by its type.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = re.sub(r"[\s$€£¥₽₴]", "", amount_str)

    if "," in cleaned and "." in cleaned:
        if cleaned.rfind(",") > cleaned.rfind("."):
            # 1.234,56
            cleaned = cleaned.replace(".", "").replace(",", ".")
        else:
            # 1,234.56
            cleaned = cleaned.replace(",", "")
    elif "," in cleaned:
        parts = cleaned.split(",")
        if len(parts) == 2 and len(parts[1]) == 2:
            cleaned = cleaned.replace(",", ".")
        else:
            cleaned = cleaned.replace(",", "")

    if cleaned.startswith(("-", "+")):
        raise ValueError(f"Amount must not be signed: '{amount_str.strip()}'")

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str.strip()}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str.strip()}'")
    return amount
