"""Currency formatting helpers."""

from decimal import ROUND_HALF_UP, Decimal

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CNY": "¥",
    "RUB": "₽",
    "UAH": "₴",
    "PLN": "zł",
    "INR": "₹",
    "KRW": "₩",
    "TRY": "₺",
    "AZN": "₼",
    "CHF": "CHF",
    "CAD": "CA$",
    "AUD": "A$",
}

CENT = Decimal("0.01")


def currency_symbol(currency_code: str) -> str:
    """Symbol for an ISO 4217 code; unknown codes are returned as-is."""
    return CURRENCY_SYMBOLS.get(currency_code.upper(), currency_code.upper())


def format_currency(
    amount: Decimal, currency_code: str = "USD", show_positive_sign: bool = False
) -> str:
    """Format an amount with its currency symbol and two decimals, e.g. "-$1,234.50"."""
    value = Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ("+" if show_positive_sign and value > 0 else "")
    return f"{sign}{currency_symbol(currency_code)}{abs(value):,.2f}"


def format_compact(amount: Decimal, currency_code: str = "USD") -> str:
    """Short form for large amounts: $1.2K, $3.5M, $1B."""
    value = Decimal(amount)
    magnitude = abs(value)
    sign = "-" if value < 0 else ""
    symbol = currency_symbol(currency_code)

    for threshold, suffix in ((Decimal(10) ** 9, "B"), (Decimal(10) ** 6, "M"), (Decimal(10) ** 3, "K")):
        if magnitude >= threshold:
            scaled = (magnitude / threshold).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
            text = f"{scaled:f}".rstrip("0").rstrip(".")
            return f"{sign}{symbol}{text}{suffix}"
    return format_currency(value, currency_code)


def format_percentage(value: Decimal, show_positive_sign: bool = True) -> str:
    """Format a percentage with one decimal, e.g. "+12.5%"."""
    rounded = Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    sign = "+" if show_positive_sign and rounded > 0 else ""
    return f"{sign}{rounded}%"
