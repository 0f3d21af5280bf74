# FILE: loomdesk/services/challan_settlement.py
from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Union

from loomdesk.core.config import settings
from loomdesk.schemas.challan import (
    Challan,
    ChallanStatus,
    MarkPaidResult,
    Payment,
    SettlementSummary,
)
from loomdesk.schemas.party import Party
from loomdesk.services.challan_interest import (
    ChallanLike,
    as_challan,
    challan_days_overdue,
    live_interest,
)
from loomdesk.utils.money import ZERO, money2, round_half_up, to_decimal
from loomdesk.utils.timezone import as_local_datetime, now_local

logger = logging.getLogger(__name__)

Q1 = Decimal("0.1")
FINAL_PAYMENT_NOTE = "Final payment - Marked as paid"


# -------------------------
# Errors
# -------------------------
class ChallanError(RuntimeError):
    pass


class SettlementStateError(ChallanError):
    pass


# -------------------------
# Due date
# -------------------------
def compute_due_date(issue_date: Union[date, datetime, None] = None,
                     payment_terms_days: Optional[int] = None,
                     party: Optional[Party] = None) -> Union[date, datetime]:
    """
    Issue date + payment terms. Terms come from the request, then the
    party, then the configured default; 0 is treated as "not given".
    """
    issued = issue_date if issue_date is not None else now_local()
    terms = (payment_terms_days or (party.payment_terms_days if party else 0)
             or settings.DEFAULT_PAYMENT_TERMS_DAYS)
    return issued + timedelta(days=int(terms))


# -------------------------
# Payment figures
# -------------------------
def total_paid(payments: Iterable[Payment]) -> Decimal:
    paid = ZERO
    for p in payments or []:
        paid += to_decimal(p.amount)
    return money2(paid)


def _subtotal(ch: Challan) -> Decimal:
    return ch.totals.subtotal_amount if ch.totals else ZERO


def total_payable(challan: ChallanLike,
                  now: Optional[datetime] = None) -> Decimal:
    return settlement_summary(challan, now).total_payable


def remaining_amount(challan: ChallanLike,
                     now: Optional[datetime] = None) -> Decimal:
    # can go negative when a party has over-paid
    return settlement_summary(challan, now).remaining_amount


def payment_progress(challan: ChallanLike,
                     now: Optional[datetime] = None) -> Decimal:
    return settlement_summary(challan, now).payment_progress


def settlement_summary(challan: ChallanLike,
                       now: Optional[datetime] = None) -> SettlementSummary:
    ch = as_challan(challan)
    if ch is None:
        return SettlementSummary()

    # evaluate the clock-dependent part once so all figures agree
    now = now if now is not None else now_local()
    interest = live_interest(ch, now)
    payable = money2(_subtotal(ch) + interest)
    paid = total_paid(ch.payments)
    progress = ZERO
    if payable > 0:
        progress = paid / payable * Decimal("100")

    return SettlementSummary(
        subtotal_amount=money2(_subtotal(ch)),
        live_interest=interest,
        days_overdue=challan_days_overdue(ch, now),
        total_payable=payable,
        total_paid=paid,
        remaining_amount=money2(payable - paid),
        payment_progress=round_half_up(progress, Q1),
    )


# -------------------------
# State changes
# -------------------------
def _ensure_open(ch: Challan) -> None:
    if ch.is_terminal:
        logger.warning("rejected payment on %s challan %s", ch.status.value,
                       ch.challan_number)
        raise SettlementStateError(
            f"Challan is {ch.status.value}; no further payments accepted")


def record_payment(challan: ChallanLike, payment: Payment) -> Challan:
    """
    Append a payment. Once payments cover the subtotal the challan is Paid.
    Returns a new Challan; the input is not mutated.
    """
    ch = as_challan(challan)
    if ch is None:
        raise ChallanError("Challan not found")
    _ensure_open(ch)

    payments = list(ch.payments) + [payment]
    status = ch.status
    if total_paid(payments) >= money2(_subtotal(ch)):
        status = ChallanStatus.PAID

    logger.info("payment recorded challan=%s amount=%s status=%s",
                ch.challan_number, payment.amount, status.value)
    return ch.model_copy(update={"payments": payments, "status": status})


def mark_as_paid(challan: ChallanLike,
                 now: Union[date, datetime, None] = None,
                 method: str = "Cash") -> MarkPaidResult:
    """
    Settle a challan in full: live interest is evaluated one last time,
    folded into a final payment for whatever is still owed, and the
    challan is closed as Paid (so its live interest is 0 from here on).
    """
    ch = as_challan(challan)
    if ch is None:
        raise ChallanError("Challan not found")
    _ensure_open(ch)

    now = now if now is not None else now_local()
    interest = live_interest(ch, now)
    owed = max(money2(_subtotal(ch) + interest - total_paid(ch.payments)),
               money2(ZERO))

    final_payment = Payment(
        amount=owed,
        date=as_local_datetime(now).date(),
        method=method,
        reference="",
        notes=FINAL_PAYMENT_NOTE,
    )
    settled = ch.model_copy(
        update={
            "payments": list(ch.payments) + [final_payment],
            "status": ChallanStatus.PAID,
        })

    logger.info("challan %s marked paid: final=%s interest=%s",
                ch.challan_number, owed, interest)
    return MarkPaidResult(challan=settled,
                          payment=final_payment,
                          settled_interest=interest)
