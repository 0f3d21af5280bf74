# loomdesk/utils/money.py
from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Any

Q2 = Decimal("0.01")
Q4 = Decimal("0.0001")
ZERO = Decimal("0")


def to_decimal(x: Any) -> Decimal:
    """
    Coerce-to-number-or-zero, applied where challan data enters the system.

    None, "", NaN and infinities become 0. Numbers and numeric strings are
    converted through str() so floats keep their printed value
    (0.1 -> Decimal("0.1"), not the binary expansion).
    Anything else is a programmer error: TypeError / ValueError propagate.
    """
    if x is None:
        return ZERO
    if isinstance(x, bool):
        raise TypeError("booleans are not amounts")
    if isinstance(x, Decimal):
        d = x
    elif isinstance(x, (int, float)):
        d = Decimal(str(x))
    elif isinstance(x, str):
        s = x.strip().replace(",", "")
        if not s:
            return ZERO
        try:
            d = Decimal(s)
        except InvalidOperation:
            raise ValueError(f"not a number: {x!r}") from None
    else:
        raise TypeError(f"expected a number, got {type(x).__name__}")

    if not d.is_finite():
        return ZERO
    return d


def round_half_up(x: Any, q: Decimal) -> Decimal:
    """
    Quantize to the exponent of `q`, half-up.

    The context precision is raised to fit every integer digit of the
    result, so very large amounts round instead of raising
    InvalidOperation.
    """
    d = to_decimal(x)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, d.adjusted() - q.as_tuple().exponent + 2)
        return d.quantize(q, rounding=ROUND_HALF_UP)


def money2(x: Any) -> Decimal:
    return round_half_up(x, Q2)


def qty4(x: Any) -> Decimal:
    return round_half_up(x, Q4)
