# FILE: loomdesk/api/routes_challans.py
from __future__ import annotations

from fastapi import APIRouter, HTTPException

from loomdesk.api.response import ok
from loomdesk.schemas.challan import (
    ChallanAtIn,
    ComputedItemsOut,
    InterestCalcIn,
    ItemsIn,
    LiveInterestOut,
    MarkPaidIn,
    RecordPaymentIn,
    StatsIn,
)
from loomdesk.schemas.challan_draft import ChallanDraftIn
from loomdesk.schemas.party import DueDateIn
from loomdesk.services.challan_draft import prepare_challan
from loomdesk.services.challan_interest import (
    calculate_interest,
    challan_days_overdue,
    live_interest,
)
from loomdesk.services.challan_math import aggregate_totals, apply_item_totals
from loomdesk.services.challan_settlement import (
    compute_due_date,
    mark_as_paid,
    record_payment,
    settlement_summary,
)
from loomdesk.services.challan_stats import challan_stats, enrich_challans
from loomdesk.utils.timezone import now_local

router = APIRouter()

# ---------------------------------------------------------------------------
# Items / totals (new-challan form)
# ---------------------------------------------------------------------------


@router.post("/items/compute")
def compute_items(payload: ItemsIn):
    if not payload.items:
        raise HTTPException(status_code=400,
                            detail="At least one item is required")
    items = apply_item_totals(payload.items)
    return ok(ComputedItemsOut(items=items, totals=aggregate_totals(items)))


@router.post("/totals")
def compute_totals(payload: ItemsIn):
    return ok(aggregate_totals(payload.items))


@router.post("/due-date")
def due_date(payload: DueDateIn):
    return ok({
        "dueDate":
        compute_due_date(payload.issue_date, payload.payment_terms_days,
                         payload.party)
    })


@router.post("/draft")
def challan_draft(payload: ChallanDraftIn):
    if payload.party is None or not payload.party.active_status:
        raise HTTPException(status_code=404,
                            detail="Party not found or inactive")
    if not payload.items:
        raise HTTPException(status_code=400,
                            detail="At least one item is required")
    draft = prepare_challan(payload.items,
                            payload.party,
                            payload.issue_date,
                            payload.payment_terms_days,
                            party_id=payload.party_id,
                            challan_number=payload.challan_number,
                            notes=payload.notes,
                            now=payload.now)
    return ok(draft)


# ---------------------------------------------------------------------------
# Interest
# ---------------------------------------------------------------------------


@router.post("/interest")
def challan_interest(payload: ChallanAtIn):
    now = payload.now or now_local()
    return ok(
        LiveInterestOut(
            live_interest=live_interest(payload.challan, now),
            days_overdue=challan_days_overdue(payload.challan, now),
        ))


@router.post("/interest/calculate")
def interest_calculate(payload: InterestCalcIn):
    interest = calculate_interest(payload.principal,
                                  payload.rate_percent_per_day,
                                  payload.days_overdue, payload.interest_type)
    return ok({"interest": interest})


# ---------------------------------------------------------------------------
# Settlement
# ---------------------------------------------------------------------------


@router.post("/settlement")
def settlement(payload: ChallanAtIn):
    if payload.challan is None:
        raise HTTPException(status_code=404, detail="Challan not found")
    return ok(settlement_summary(payload.challan, payload.now))


@router.post("/mark-paid")
def challan_mark_paid(payload: MarkPaidIn):
    result = mark_as_paid(payload.challan, payload.now, payload.method)
    return ok(result)


@router.post("/payments")
def challan_record_payment(payload: RecordPaymentIn):
    return ok(record_payment(payload.challan, payload.payment))


# ---------------------------------------------------------------------------
# Lists / stats
# ---------------------------------------------------------------------------


@router.post("/list")
def challan_list(payload: StatsIn):
    now = payload.now or now_local()
    return ok(enrich_challans(payload.challans, now),
              meta={"count": len(payload.challans)})


@router.post("/stats")
def stats(payload: StatsIn):
    return ok(challan_stats(payload.challans, payload.now))
