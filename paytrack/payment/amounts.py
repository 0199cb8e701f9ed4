"""
Amount Helpers
Rounding, guarded division and display formatting for money values
"""
import math
from typing import Iterable

from paytrack.payment.types import NamedAmount, OtherDeduction

CURRENCY_SYMBOLS = {
    "INR": "₹",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
}


def round2(value: float) -> float:
    """Round half up to 2 decimal places"""
    return math.floor(value * 100 + 0.5) / 100


def safe_divide(numerator: float, denominator: float) -> float:
    """Divide, returning 0 instead of failing on a zero denominator"""
    if not denominator:
        return 0.0
    return numerator / denominator


def sum_amounts(items: Iterable[NamedAmount]) -> float:
    return sum((item.amount for item in items), 0.0)


def sum_other_deductions(items: Iterable[OtherDeduction], gross_earnings: float) -> float:
    """Fixed amounts as-is, percentage items as a share of gross earnings"""
    total = 0.0
    for item in items:
        if item.is_percentage:
            total += gross_earnings * item.amount / 100
        else:
            total += item.amount
    return total


def _group_digits(whole: str, locale: str) -> str:
    """Thousands grouping, with Indian lakh/crore grouping for -IN locales"""
    if not locale.replace("_", "-").upper().endswith("-IN") or len(whole) <= 3:
        return f"{int(whole):,}"
    head, tail = whole[:-3], whole[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_currency(amount: float, currency: str = "INR", locale: str = "en-IN") -> str:
    """Format an amount for display, e.g. ₹12,34,567.50 (en-IN) or $1,234,567.50 (en-US)"""
    symbol = CURRENCY_SYMBOLS.get(currency, f"{currency} ")
    sign = "-" if amount < 0 else ""
    whole, fraction = f"{abs(round2(amount)):.2f}".split(".")
    return f"{sign}{symbol}{_group_digits(whole, locale)}.{fraction}"
