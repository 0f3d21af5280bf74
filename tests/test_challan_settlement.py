"""
Payment figures, mark-as-paid settlement, payment recording and due dates.

Fixture challan: subtotal 8000, principal 10000 at 1%/day simple,
so ten days late it owes 1000 interest and 9000 in total.
"""

from datetime import date, datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from loomdesk.schemas.challan import Challan, ChallanStatus, Payment
from loomdesk.schemas.party import Party
from loomdesk.services.challan_interest import live_interest
from loomdesk.services.challan_settlement import (
    FINAL_PAYMENT_NOTE,
    ChallanError,
    SettlementStateError,
    compute_due_date,
    mark_as_paid,
    payment_progress,
    record_payment,
    remaining_amount,
    settlement_summary,
    total_paid,
    total_payable,
)

IST = ZoneInfo("Asia/Kolkata")


@pytest.fixture
def part_paid(challan_json):
    challan_json["payments"] = [{"amount": 3000, "date": "2025-01-05", "method": "UPI"}]
    return Challan.model_validate(challan_json)


class TestPaymentFigures:

    def test_total_paid(self):
        payments = [Payment(amount=Decimal("1000.10")), Payment(amount=Decimal("0.905"))]
        assert total_paid(payments) == Decimal("1001.01")
        assert total_paid([]) == Decimal("0")

    def test_summary_when_overdue(self, part_paid, ten_days_late):
        summary = settlement_summary(part_paid, ten_days_late)

        assert summary.subtotal_amount == Decimal("8000.00")
        assert summary.live_interest == Decimal("1000.00")
        assert summary.days_overdue == 10
        assert summary.total_payable == Decimal("9000.00")
        assert summary.total_paid == Decimal("3000.00")
        assert summary.remaining_amount == Decimal("6000.00")
        assert summary.payment_progress == Decimal("33.3")

    def test_helpers_agree_with_summary(self, part_paid, ten_days_late):
        assert total_payable(part_paid, ten_days_late) == Decimal("9000.00")
        assert remaining_amount(part_paid, ten_days_late) == Decimal("6000.00")
        assert payment_progress(part_paid, ten_days_late) == Decimal("33.3")

    def test_before_due_no_interest(self, part_paid):
        summary = settlement_summary(part_paid, datetime(2024, 12, 25, tzinfo=IST))
        assert summary.live_interest == 0
        assert summary.total_payable == Decimal("8000.00")
        assert summary.remaining_amount == Decimal("5000.00")

    def test_zero_payable_progress(self, challan_json, ten_days_late):
        challan_json["totals"] = None
        challan_json["interestTracking"] = None
        assert payment_progress(challan_json, ten_days_late) == Decimal("0.0")

    def test_absent_challan(self, ten_days_late):
        assert settlement_summary(None, ten_days_late).total_payable == 0


class TestMarkAsPaid:

    def test_final_payment_covers_interest(self, part_paid, ten_days_late):
        result = mark_as_paid(part_paid, ten_days_late)

        assert result.settled_interest == Decimal("1000.00")
        assert result.payment.amount == Decimal("6000.00")
        assert result.payment.method == "Cash"
        assert result.payment.notes == FINAL_PAYMENT_NOTE
        assert result.payment.date == date(2025, 1, 11)
        assert result.challan.status == ChallanStatus.PAID
        assert total_paid(result.challan.payments) == Decimal("9000.00")

    def test_accepts_a_bare_date(self, part_paid):
        result = mark_as_paid(part_paid, date(2025, 1, 11))

        assert result.settled_interest == Decimal("1000.00")
        assert result.payment.amount == Decimal("6000.00")
        assert result.payment.date == date(2025, 1, 11)
        assert result.challan.status == ChallanStatus.PAID

    def test_interest_stops_after_payment(self, part_paid, ten_days_late):
        result = mark_as_paid(part_paid, ten_days_late)
        much_later = datetime(2026, 6, 1, tzinfo=IST)
        assert live_interest(result.challan, much_later) == 0

    def test_input_challan_is_untouched(self, part_paid, ten_days_late):
        mark_as_paid(part_paid, ten_days_late, method="NEFT")
        assert part_paid.status == ChallanStatus.OPEN
        assert len(part_paid.payments) == 1

    def test_overpaid_challan_settles_with_zero(self, part_paid, ten_days_late):
        part_paid.payments.append(Payment(amount=Decimal("7000")))
        result = mark_as_paid(part_paid, ten_days_late)
        assert result.payment.amount == Decimal("0.00")

    @pytest.mark.parametrize("status", ["Paid", "Cancelled"])
    def test_terminal_challan_rejected(self, challan_json, ten_days_late, status):
        challan_json["status"] = status
        with pytest.raises(SettlementStateError):
            mark_as_paid(challan_json, ten_days_late)

    def test_missing_challan(self, ten_days_late):
        with pytest.raises(ChallanError):
            mark_as_paid(None, ten_days_late)


class TestRecordPayment:

    def test_partial_payment_keeps_open(self, challan_json):
        updated = record_payment(challan_json, Payment(amount=Decimal("2500")))
        assert updated.status == ChallanStatus.OPEN
        assert total_paid(updated.payments) == Decimal("2500.00")

    def test_covering_subtotal_marks_paid(self, part_paid):
        updated = record_payment(part_paid, Payment(amount=Decimal("5000")))
        assert updated.status == ChallanStatus.PAID
        assert part_paid.status == ChallanStatus.OPEN

    def test_payment_date_stays_a_calendar_date(self):
        payment = Payment.model_validate({"amount": 10, "date": "2025-01-05"})
        assert type(payment.date) is date
        assert payment.date == date(2025, 1, 5)

        stamped = Payment.model_validate({"amount": 10, "date": "2025-01-05T10:30:00+05:30"})
        assert stamped.date == datetime(2025, 1, 5, 10, 30, tzinfo=IST)

    def test_cancelled_rejects_payment(self, challan_json):
        challan_json["status"] = "Cancelled"
        with pytest.raises(SettlementStateError):
            record_payment(challan_json, Payment(amount=Decimal("1")))


class TestComputeDueDate:

    def test_explicit_terms(self):
        assert compute_due_date(date(2025, 1, 1), 15) == date(2025, 1, 16)

    def test_party_terms(self):
        party = Party(payment_terms_days=45)
        assert compute_due_date(date(2025, 1, 1), None, party) == date(2025, 2, 15)

    def test_default_terms(self):
        assert compute_due_date(date(2025, 1, 1)) == date(2025, 1, 31)
        assert compute_due_date(date(2025, 1, 1), 0) == date(2025, 1, 31)

    def test_keeps_time_of_day(self):
        issued = datetime(2025, 3, 1, 14, 0, tzinfo=IST)
        assert compute_due_date(issued, 7) == datetime(2025, 3, 8, 14, 0, tzinfo=IST)
