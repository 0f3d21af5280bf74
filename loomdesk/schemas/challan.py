# FILE: loomdesk/schemas/challan.py
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from loomdesk.utils.money import ZERO, to_decimal

DateLike = Union[datetime, date]
# date first: a date-only value stays a calendar date
CalendarDateLike = Union[date, datetime]


class ChallanStatus(str, Enum):
    OPEN = "Open"
    PAID = "Paid"
    OVERDUE = "Overdue"
    CANCELLED = "Cancelled"


TERMINAL_STATUSES = frozenset({ChallanStatus.PAID, ChallanStatus.CANCELLED})


class InterestType(str, Enum):
    SIMPLE = "simple"
    COMPOUND = "compound"


def coerce_amount(v: Any) -> Decimal:
    """Boundary coercion for numeric fields; bad types become validation errors."""
    try:
        return to_decimal(v)
    except TypeError as e:
        raise ValueError(str(e)) from e


def _alias(*names: str) -> dict:
    # first name is the JSON (camelCase) key used on output
    return {
        "validation_alias": AliasChoices(*names),
        "serialization_alias": names[0],
    }


class ChallanBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


# ---------------------------------------------------------------------------
# Line items / totals
# ---------------------------------------------------------------------------


class LineItem(ChallanBase):
    """
    One challan line. Quantity is in meters, weight in kg per meter,
    price in currency per meter.
    """
    quality_name: Optional[str] = Field(
        None, **_alias("qualityName", "quality_name"))
    ordered_quantity: Decimal = Field(
        ZERO, **_alias("orderedQuantity", "orderedMeters", "ordered_quantity"))
    weight_per_unit: Decimal = Field(
        ZERO, **_alias("weightPerUnit", "weightPerMeter", "weight_per_unit"))
    price_per_unit: Decimal = Field(
        ZERO, **_alias("pricePerUnit", "pricePerMeter", "price_per_unit"))
    calculated_weight: Decimal = Field(
        ZERO, **_alias("calculatedWeight", "calculated_weight"))
    calculated_amount: Decimal = Field(
        ZERO, **_alias("calculatedAmount", "calculated_amount"))

    @field_validator("ordered_quantity",
                     "weight_per_unit",
                     "price_per_unit",
                     "calculated_weight",
                     "calculated_amount",
                     mode="before")
    @classmethod
    def _num(cls, v):
        return coerce_amount(v)


class ItemTotals(ChallanBase):
    calculated_weight: Decimal = Field(
        ZERO, **_alias("calculatedWeight", "calculated_weight"))
    calculated_amount: Decimal = Field(
        ZERO, **_alias("calculatedAmount", "calculated_amount"))


class ChallanTotals(ChallanBase):
    total_meters: Decimal = Field(ZERO,
                                  **_alias("totalMeters", "total_meters"))
    total_weight: Decimal = Field(ZERO,
                                  **_alias("totalWeight", "total_weight"))
    subtotal_amount: Decimal = Field(
        ZERO, **_alias("subtotalAmount", "subtotal_amount"))

    @field_validator("total_meters",
                     "total_weight",
                     "subtotal_amount",
                     mode="before")
    @classmethod
    def _num(cls, v):
        return coerce_amount(v)


# ---------------------------------------------------------------------------
# Interest / payments
# ---------------------------------------------------------------------------


class InterestTracking(ChallanBase):
    # None means "not set": the orchestrator falls back to the subtotal
    principal_amount: Optional[Decimal] = Field(
        None, **_alias("principalAmount", "principal_amount"))
    interest_rate_percent_per_day: Decimal = Field(
        ZERO,
        **_alias("interestRatePercentPerDay", "interestRate",
                 "interest_rate_percent_per_day"))
    interest_type: Optional[InterestType] = Field(
        None, **_alias("interestType", "interest_type"))
    interest_accrued: Decimal = Field(
        ZERO, **_alias("interestAccrued", "interest_accrued"))
    last_calculated_at: Optional[datetime] = Field(
        None, **_alias("lastCalculatedAt", "last_calculated_at"))

    @field_validator("principal_amount", mode="before")
    @classmethod
    def _principal(cls, v):
        if v is None:
            return None
        return coerce_amount(v)

    @field_validator("interest_rate_percent_per_day",
                     "interest_accrued",
                     mode="before")
    @classmethod
    def _num(cls, v):
        return coerce_amount(v)


class Payment(ChallanBase):
    amount: Decimal = ZERO
    date: Optional[CalendarDateLike] = None
    method: Optional[str] = None
    reference: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("amount", mode="before")
    @classmethod
    def _num(cls, v):
        return coerce_amount(v)


# ---------------------------------------------------------------------------
# Challan
# ---------------------------------------------------------------------------


class Challan(ChallanBase):
    challan_number: Optional[str] = Field(
        None, **_alias("challanNumber", "challan_number"))
    party_id: Optional[str] = Field(None, **_alias("partyId", "party_id"))
    issue_date: Optional[DateLike] = Field(
        None, **_alias("issueDate", "issue_date"))
    due_date: Optional[DateLike] = Field(None,
                                         **_alias("dueDate", "due_date"))
    status: ChallanStatus = ChallanStatus.OPEN
    items: List[LineItem] = Field(default_factory=list)
    totals: Optional[ChallanTotals] = None
    interest_tracking: Optional[InterestTracking] = Field(
        None, **_alias("interestTracking", "interest_tracking"))
    payments: List[Payment] = Field(default_factory=list)
    notes: Optional[str] = None

    @field_validator("party_id", mode="before")
    @classmethod
    def _party_ref(cls, v):
        # populated party documents carry their id under "_id"
        if isinstance(v, dict):
            v = v.get("_id") or v.get("id")
        return None if v is None else str(v)

    @field_validator("items", "payments", mode="before")
    @classmethod
    def _list_or_empty(cls, v):
        return [] if v is None else v

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES


class ChallanView(Challan):
    """Challan as shown in lists / detail screens, with live figures."""
    current_interest: Decimal = Field(
        ZERO, **_alias("currentInterest", "current_interest"))
    days_overdue: int = Field(0, **_alias("daysOverdue", "days_overdue"))
    total_payable: Decimal = Field(
        ZERO, **_alias("totalPayable", "total_payable"))


# ---------------------------------------------------------------------------
# Settlement / stats outputs
# ---------------------------------------------------------------------------


class SettlementSummary(ChallanBase):
    subtotal_amount: Decimal = Field(
        ZERO, **_alias("subtotalAmount", "subtotal_amount"))
    live_interest: Decimal = Field(ZERO,
                                   **_alias("liveInterest", "live_interest"))
    days_overdue: int = Field(0, **_alias("daysOverdue", "days_overdue"))
    total_payable: Decimal = Field(
        ZERO, **_alias("totalPayable", "total_payable"))
    total_paid: Decimal = Field(ZERO, **_alias("totalPaid", "total_paid"))
    remaining_amount: Decimal = Field(
        ZERO, **_alias("remainingAmount", "remaining_amount"))
    payment_progress: Decimal = Field(
        ZERO, **_alias("paymentProgress", "payment_progress"))


class MarkPaidResult(ChallanBase):
    challan: Challan
    payment: Payment
    settled_interest: Decimal = Field(
        ZERO, **_alias("settledInterest", "settled_interest"))


class StatusStats(ChallanBase):
    status: ChallanStatus
    count: int = 0
    total_amount: Decimal = Field(ZERO,
                                  **_alias("totalAmount", "total_amount"))
    total_meters: Decimal = Field(ZERO,
                                  **_alias("totalMeters", "total_meters"))
    total_weight: Decimal = Field(ZERO,
                                  **_alias("totalWeight", "total_weight"))


class ChallanStats(ChallanBase):
    stats: List[StatusStats] = Field(default_factory=list)
    overdue_count: int = Field(0, **_alias("overdueCount", "overdue_count"))


# ---------------------------------------------------------------------------
# Request bodies
# ---------------------------------------------------------------------------


class ItemsIn(ChallanBase):
    items: List[LineItem] = Field(default_factory=list)


class ComputedItemsOut(ChallanBase):
    items: List[LineItem]
    totals: ChallanTotals


class ChallanAtIn(ChallanBase):
    challan: Optional[Challan] = None
    now: Optional[datetime] = None


class LiveInterestOut(ChallanBase):
    live_interest: Decimal = Field(ZERO,
                                   **_alias("liveInterest", "live_interest"))
    days_overdue: int = Field(0, **_alias("daysOverdue", "days_overdue"))


class InterestCalcIn(ChallanBase):
    principal: Decimal = ZERO
    rate_percent_per_day: Decimal = Field(
        ZERO, **_alias("ratePercentPerDay", "rate_percent_per_day"))
    days_overdue: int = Field(0, **_alias("daysOverdue", "days_overdue"))
    interest_type: InterestType = Field(
        InterestType.COMPOUND, **_alias("interestType", "interest_type"))

    @field_validator("principal", "rate_percent_per_day", mode="before")
    @classmethod
    def _num(cls, v):
        return coerce_amount(v)


class MarkPaidIn(ChallanBase):
    challan: Challan
    now: Optional[datetime] = None
    method: str = "Cash"


class RecordPaymentIn(ChallanBase):
    challan: Challan
    payment: Payment


class StatsIn(ChallanBase):
    challans: List[Challan] = Field(default_factory=list)
    now: Optional[datetime] = None
