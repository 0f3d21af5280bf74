# loomdesk/services/challan_draft.py
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Iterable, Optional, Union

from loomdesk.core.config import settings
from loomdesk.schemas.challan import (
    Challan,
    ChallanStatus,
    ChallanTotals,
    InterestTracking,
    InterestType,
)
from loomdesk.schemas.challan_draft import ChallanDraft
from loomdesk.schemas.party import Party
from loomdesk.services.challan_math import (
    ItemLike,
    aggregate_totals,
    apply_item_totals,
)
from loomdesk.services.challan_settlement import ChallanError, compute_due_date
from loomdesk.utils.money import ZERO, money2
from loomdesk.utils.timezone import now_local

logger = logging.getLogger(__name__)


def build_interest_tracking(party: Optional[Party],
                            totals: ChallanTotals,
                            now: Optional[datetime] = None
                            ) -> InterestTracking:
    """
    Interest terms fixed onto a new challan.

    The subtotal becomes the principal; rate and type are copied from the
    party so later changes to the party master do not touch issued
    challans.
    """
    if party is not None:
        rate = party.interest_percent_per_day
        kind = party.interest_type
    else:
        rate = ZERO
        kind = InterestType(settings.DEFAULT_INTEREST_TYPE)

    return InterestTracking(
        principal_amount=totals.subtotal_amount,
        interest_rate_percent_per_day=rate,
        interest_type=kind,
        interest_accrued=money2(ZERO),
        last_calculated_at=now if now is not None else now_local(),
    )


def prepare_challan(items: Iterable[ItemLike],
                    party: Party,
                    issue_date: Union[date, datetime, None] = None,
                    payment_terms_days: Optional[int] = None,
                    *,
                    party_id: Optional[str] = None,
                    challan_number: Optional[str] = None,
                    notes: Optional[str] = None,
                    now: Optional[datetime] = None) -> ChallanDraft:
    """
    Build an Open challan from the ordered lines: line totals, challan
    totals, due date from the payment terms and interest tracking from
    the party. The returned party carries the increased outstanding.
    """
    if not party.active_status:
        raise ChallanError("Party is inactive")
    lines = apply_item_totals(items or [])
    if not lines:
        raise ChallanError("At least one item is required")

    now = now if now is not None else now_local()
    issued = issue_date if issue_date is not None else now
    totals = aggregate_totals(lines)

    challan = Challan(
        challan_number=challan_number,
        party_id=party_id,
        issue_date=issued,
        due_date=compute_due_date(issued, payment_terms_days, party),
        status=ChallanStatus.OPEN,
        items=lines,
        totals=totals,
        interest_tracking=build_interest_tracking(party, totals, now),
        notes=notes,
    )
    outstanding = money2(party.current_outstanding + totals.subtotal_amount)

    logger.info("challan draft %s party=%s subtotal=%s due=%s",
                challan_number, party.party_name, totals.subtotal_amount,
                challan.due_date)
    return ChallanDraft(
        challan=challan,
        party=party.model_copy(update={"current_outstanding": outstanding}),
    )
