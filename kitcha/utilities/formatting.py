"""Display helpers for money, quantities and percentages."""
from decimal import Decimal, ROUND_HALF_UP

from kitcha.utilities.config import CURRENCY_SYMBOL
from kitcha.utilities.constants import QUANTITY_DECIMALS

_QUANTUM = Decimal(1).scaleb(-QUANTITY_DECIMALS)


def format_cents(cents: int, symbol: str = CURRENCY_SYMBOL) -> str:
    """Render an amount of minor units, e.g. 150075 -> '₱1,500.75'."""
    sign = '-' if cents < 0 else ''
    major, minor = divmod(abs(int(cents)), 100)
    return f"{sign}{symbol}{major:,}.{minor:02d}"


def round_quantity(value: Decimal) -> Decimal:
    return Decimal(value).quantize(_QUANTUM, rounding=ROUND_HALF_UP)


def quantity_to_json(value: Decimal):
    """Quantity as a JSON number: int when whole, float with two decimals otherwise."""
    q = round_quantity(value)
    if q == q.to_integral_value():
        return int(q)
    return float(q)


def round_percentage(value: float) -> float:
    return round(value, 2)
