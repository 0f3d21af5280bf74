"""
Overdue days, interest strategies and the live interest orchestrator.
Every time-dependent case injects `now`.
"""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from loomdesk.core.config import settings
from loomdesk.schemas.challan import Challan, InterestType
from loomdesk.services.challan_interest import (
    calculate_compound_interest,
    calculate_interest,
    calculate_simple_interest,
    challan_days_overdue,
    days_overdue,
    live_interest,
)

IST = ZoneInfo("Asia/Kolkata")


class TestDaysOverdue:

    def test_zero_on_or_before_due(self, due):
        assert days_overdue(due, datetime(2024, 12, 20, tzinfo=IST)) == 0
        assert days_overdue(due, datetime(2025, 1, 1, 0, 0, tzinfo=IST)) == 0

    def test_partial_day_is_not_counted(self, due):
        assert days_overdue(due, datetime(2025, 1, 1, 23, 59, tzinfo=IST)) == 0
        assert days_overdue(due, datetime(2025, 1, 2, 23, 59, tzinfo=IST)) == 1

    def test_increases_by_one_per_full_day(self, due):
        start = datetime(2025, 1, 1, 9, 30, tzinfo=IST)
        for n in range(0, 40):
            assert days_overdue(due, start + timedelta(days=n)) == n

    def test_naive_now_is_local_time(self, due):
        assert days_overdue(due, datetime(2025, 1, 3, 12, 0)) == 2

    def test_aware_utc_now(self, due):
        # local midnight of 1 Jan is 18:30 UTC on 31 Dec
        now = datetime(2025, 1, 2, 18, 30, tzinfo=timezone.utc)
        assert days_overdue(due, now) == 2

    def test_date_now(self, due):
        assert days_overdue(due, date(2025, 1, 31)) == 30

    def test_missing_due_date(self):
        assert days_overdue(None, datetime(2025, 1, 1, tzinfo=IST)) == 0

    def test_counts_elapsed_hours_across_dst(self, monkeypatch):
        monkeypatch.setattr(settings, "TIMEZONE", "Europe/London")
        london = ZoneInfo("Europe/London")
        due = date(2025, 3, 30)  # clocks go forward at 01:00 on this day

        # 23.5 hours after midnight GMT
        assert days_overdue(due, datetime(2025, 3, 31, 0, 30, tzinfo=london)) == 0
        assert days_overdue(due, datetime(2025, 3, 31, 1, 0, tzinfo=london)) == 1

    def test_defaults_to_wall_clock(self):
        assert days_overdue(date(2000, 1, 1)) > 9000
        assert days_overdue(date.today() + timedelta(days=5)) == 0


class TestSimpleInterest:

    def test_ten_days_at_one_percent(self):
        assert calculate_simple_interest(10000, 1, 10) == Decimal("1000.00")

    @pytest.mark.parametrize("p,r", [(10000, 1), (0, 5), (123.45, 0.25)])
    def test_zero_days(self, p, r):
        assert calculate_simple_interest(p, r, 0) == 0
        assert calculate_simple_interest(p, r, -3) == 0

    @pytest.mark.parametrize("p,d", [(10000, 10), (1, 1), (99999.99, 365)])
    def test_zero_or_negative_rate(self, p, d):
        assert calculate_simple_interest(p, 0, d) == 0
        assert calculate_simple_interest(p, -1, d) == 0

    def test_half_paisa_rounds_up(self):
        # 0.5 * 1% * 1 day = 0.005
        assert calculate_simple_interest(Decimal("0.5"), 1, 1) == Decimal("0.01")


class TestCompoundInterest:

    def test_ten_days_at_one_percent(self):
        assert calculate_compound_interest(10000, 1, 10) == Decimal("1046.22")

    @pytest.mark.parametrize("p,r", [(10000, 1), (0, 5), (123.45, 0.25)])
    def test_zero_days(self, p, r):
        assert calculate_compound_interest(p, r, 0) == 0

    @pytest.mark.parametrize("p,d", [(10000, 10), (1, 1), (99999.99, 365)])
    def test_zero_rate(self, p, d):
        assert calculate_compound_interest(p, 0, d) == 0

    def test_one_day_equals_simple(self):
        assert calculate_compound_interest(5000, 2, 1) == calculate_simple_interest(5000, 2, 1)

    def test_long_overdue_keeps_two_places(self):
        interest = calculate_compound_interest(10000, 1, 6000)
        assert interest > Decimal("1E+29")
        assert interest.as_tuple().exponent == -2

    @pytest.mark.parametrize("p", [1, 850, 10000, 123456.78])
    @pytest.mark.parametrize("r", [0.01, 0.5, 1, 3])
    @pytest.mark.parametrize("d", [1, 2, 30, 180])
    def test_compounding_dominates(self, p, r, d):
        assert calculate_compound_interest(p, r, d) >= calculate_simple_interest(p, r, d)


class TestCalculateInterest:

    def test_dispatch(self):
        assert calculate_interest(10000, 1, 10, "simple") == Decimal("1000.00")
        assert calculate_interest(10000, 1, 10, InterestType.COMPOUND) == Decimal("1046.22")

    def test_default_is_compound(self):
        assert calculate_interest(10000, 1, 10) == Decimal("1046.22")

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            calculate_interest(10000, 1, 10, "monthly")


class TestLiveInterest:

    def test_absent_challan(self, ten_days_late):
        assert live_interest(None, ten_days_late) == 0

    @pytest.mark.parametrize("status", ["Paid", "Cancelled"])
    def test_terminal_statuses_never_accrue(self, challan_json, status):
        challan_json["status"] = status
        far_future = datetime(2030, 1, 1, tzinfo=IST)
        assert live_interest(challan_json, far_future) == 0
        assert challan_days_overdue(challan_json, far_future) == 0

    def test_simple_from_tracking(self, challan_json, ten_days_late):
        assert live_interest(challan_json, ten_days_late) == Decimal("1000.00")

    def test_overdue_status_still_accrues(self, challan_json, ten_days_late):
        challan_json["status"] = "Overdue"
        assert live_interest(challan_json, ten_days_late) == Decimal("1000.00")

    def test_not_yet_due(self, challan_json):
        assert live_interest(challan_json, datetime(2024, 12, 31, tzinfo=IST)) == 0

    def test_interest_type_defaults_to_compound(self, challan_json, ten_days_late):
        del challan_json["interestTracking"]["interestType"]
        assert live_interest(challan_json, ten_days_late) == Decimal("1046.22")

    def test_principal_falls_back_to_subtotal(self, challan_json, ten_days_late):
        del challan_json["interestTracking"]["principalAmount"]
        # 8000 * 1% * 10
        assert live_interest(challan_json, ten_days_late) == Decimal("800.00")

    def test_null_principal_falls_back_to_subtotal(self, challan_json, ten_days_late):
        challan_json["interestTracking"]["principalAmount"] = None
        assert live_interest(challan_json, ten_days_late) == Decimal("800.00")

    def test_no_principal_and_no_totals(self, challan_json, ten_days_late):
        challan_json["interestTracking"]["principalAmount"] = None
        challan_json["totals"] = None
        assert live_interest(challan_json, ten_days_late) == 0

    def test_missing_tracking_means_no_rate(self, challan_json, ten_days_late):
        challan_json["interestTracking"] = None
        assert live_interest(challan_json, ten_days_late) == 0

    def test_accepts_model_and_snake_case_rate(self, challan_json, ten_days_late):
        tracking = challan_json.pop("interestTracking")
        challan_json["interest_tracking"] = {
            "principal_amount": tracking["principalAmount"],
            "interest_rate_percent_per_day": 1,
            "interest_type": "compound",
        }
        challan = Challan.model_validate(challan_json)
        assert live_interest(challan, ten_days_late) == Decimal("1046.22")

    def test_repeated_evaluation_is_stable(self, challan_json, ten_days_late):
        first = live_interest(challan_json, ten_days_late)
        assert all(live_interest(challan_json, ten_days_late) == first for _ in range(5))
