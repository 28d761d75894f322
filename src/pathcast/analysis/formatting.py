"""Display helpers for simulation output."""


def price_digits(value: float) -> int:
    """Decimal places for a price: more precision for sub-dollar assets."""
    if value < 0.001:
        return 7
    if value < 1:
        return 4
    return 2


def format_price(value: float | None) -> str:
    if value is None:
        return "$0.00"
    return f"${value:,.{price_digits(value)}f}"
