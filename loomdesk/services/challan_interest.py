# loomdesk/services/challan_interest.py
from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Mapping, Optional, Union

from loomdesk.core.config import settings
from loomdesk.schemas.challan import Challan, InterestType
from loomdesk.utils.money import ZERO, money2, to_decimal
from loomdesk.utils.timezone import as_local_datetime, now_local

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)
HUNDRED = Decimal("100")

ChallanLike = Union[Challan, Mapping[str, Any], None]


# ---------------------------------------------------------------------------
# Overdue days
# ---------------------------------------------------------------------------


def days_overdue(due_date: Optional[Union[date, datetime]],
                 now: Optional[Union[date, datetime]] = None) -> int:
    """
    Whole 24h periods elapsed since the due date; 0 on or before it.

    A bare date means local midnight of that day. Pass `now` explicitly
    when the result must be reproducible.
    """
    if due_date is None:
        return 0
    # elapsed time, not wall-clock difference: compare in UTC across DST
    due = as_local_datetime(due_date).astimezone(timezone.utc)
    current = as_local_datetime(
        now if now is not None else now_local()).astimezone(timezone.utc)

    if current <= due:
        return 0
    return (current - due) // ONE_DAY


# ---------------------------------------------------------------------------
# Interest strategies
# ---------------------------------------------------------------------------


def calculate_simple_interest(principal, rate_percent_per_day,
                              days: int) -> Decimal:
    """I = P * r * t, rounded once to 2 dp (half-up)."""
    rate = to_decimal(rate_percent_per_day)
    if days <= 0 or rate <= 0:
        return money2(ZERO)

    interest = to_decimal(principal) * (rate / HUNDRED) * Decimal(days)
    return money2(interest)


def calculate_compound_interest(principal, rate_percent_per_day,
                                days: int) -> Decimal:
    """I = P * ((1 + r)^t - 1), compounded daily, rounded once to 2 dp."""
    rate = to_decimal(rate_percent_per_day)
    if days <= 0 or rate <= 0:
        return money2(ZERO)

    growth = (Decimal(1) + rate / HUNDRED)**int(days)
    interest = to_decimal(principal) * (growth - Decimal(1))
    return money2(interest)


def calculate_interest(principal,
                       rate_percent_per_day,
                       days: int,
                       interest_type: Union[InterestType, str,
                                            None] = None) -> Decimal:
    kind = InterestType(interest_type or settings.DEFAULT_INTEREST_TYPE)
    if kind == InterestType.SIMPLE:
        return calculate_simple_interest(principal, rate_percent_per_day,
                                         days)
    return calculate_compound_interest(principal, rate_percent_per_day,
                                       days)


# ---------------------------------------------------------------------------
# Live interest
# ---------------------------------------------------------------------------


def as_challan(challan: ChallanLike) -> Optional[Challan]:
    if challan is None or isinstance(challan, Challan):
        return challan
    return Challan.model_validate(challan)


def challan_days_overdue(challan: ChallanLike,
                         now: Optional[datetime] = None) -> int:
    """Overdue days as shown on a challan; Paid/Cancelled never count."""
    ch = as_challan(challan)
    if ch is None or ch.is_terminal:
        return 0
    return days_overdue(ch.due_date, now)


def live_interest(challan: ChallanLike,
                  now: Optional[datetime] = None) -> Decimal:
    """
    Interest owed on a challan at `now`. Never persisted: callers
    re-evaluate it on every refresh and once more before settlement.
    """
    ch = as_challan(challan)
    if ch is None or ch.is_terminal:
        return money2(ZERO)

    days = days_overdue(ch.due_date, now)
    if days <= 0:
        return money2(ZERO)

    tracking = ch.interest_tracking
    principal = None
    rate = ZERO
    interest_type = None
    if tracking is not None:
        principal = tracking.principal_amount
        rate = tracking.interest_rate_percent_per_day
        interest_type = tracking.interest_type

    if principal is None:
        principal = ch.totals.subtotal_amount if ch.totals else ZERO

    interest = calculate_interest(principal, rate, days, interest_type
                                  or InterestType.COMPOUND)
    logger.debug("live interest challan=%s days=%s type=%s -> %s",
                 ch.challan_number, days, interest_type, interest)
    return interest
