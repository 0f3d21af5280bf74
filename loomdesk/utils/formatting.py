# loomdesk/utils/formatting.py
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from loomdesk.core.config import settings
from loomdesk.utils.money import ZERO, money2, round_half_up, to_decimal


def _group_en_in(digits: str) -> str:
    """
    Indian digit grouping: last three digits, then pairs.
    Example: "1234567" -> "12,34,567"
    """
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_currency(value: Any, symbol: Optional[str] = None) -> str:
    """
    "₹1,234.50" style amount, always 2 decimals (half-up).
    Missing / NaN / non-numeric input renders as "<symbol>0.00".
    """
    symbol = settings.CURRENCY_SYMBOL if symbol is None else symbol
    try:
        amount = money2(value)
    except (TypeError, ValueError, ArithmeticError):
        amount = money2(ZERO)

    sign = "-" if amount < 0 else ""
    whole, frac = str(amount.copy_abs()).split(".")
    return f"{symbol}{sign}{_group_en_in(whole)}.{frac}"


def format_percentage(value: Any, precision: int = 2) -> str:
    if value is None:
        return "0.00%"
    try:
        d = to_decimal(value)
    except (TypeError, ValueError):
        return "0.00%"
    q = Decimal(1).scaleb(-precision)
    return f"{round_half_up(d, q)}%"


def format_date(value: Any, fmt: str = "DD/MM/YYYY") -> str:
    if not value:
        return ""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return ""
    if not isinstance(value, date):
        return ""

    day = f"{value.day:02d}"
    month = f"{value.month:02d}"
    year = f"{value.year}"

    if fmt == "MM/DD/YYYY":
        return f"{month}/{day}/{year}"
    if fmt == "YYYY-MM-DD":
        return f"{year}-{month}-{day}"
    return f"{day}/{month}/{year}"


def safe_divide(numerator: Any, denominator: Any) -> Decimal:
    """numerator / denominator, or 0 when the division is meaningless."""
    try:
        n = to_decimal(numerator)
        d = to_decimal(denominator)
    except (TypeError, ValueError):
        return ZERO
    if d == 0:
        return ZERO
    return n / d
