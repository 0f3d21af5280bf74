# loomdesk/services/challan_stats.py
from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, List, Optional

from loomdesk.schemas.challan import (
    Challan,
    ChallanStats,
    ChallanStatus,
    ChallanView,
    StatusStats,
)
from loomdesk.services.challan_interest import (
    ChallanLike,
    as_challan,
    challan_days_overdue,
    live_interest,
)
from loomdesk.utils.money import money2, qty4
from loomdesk.utils.timezone import as_local_datetime, now_local

_UNPAID = (ChallanStatus.OPEN, ChallanStatus.OVERDUE)


def enrich_challan(challan: ChallanLike,
                   now: Optional[datetime] = None) -> Optional[ChallanView]:
    ch = as_challan(challan)
    if ch is None:
        return None
    now = now if now is not None else now_local()

    interest = live_interest(ch, now)
    subtotal = ch.totals.subtotal_amount if ch.totals else 0
    return ChallanView.model_validate({
        **dict(ch),
        "current_interest": interest,
        "days_overdue": challan_days_overdue(ch, now),
        "total_payable": money2(subtotal + interest),
    })


def enrich_challans(challans: Iterable[ChallanLike],
                    now: Optional[datetime] = None) -> List[ChallanView]:
    """Enriched views in input order; missing entries are skipped."""
    now = now if now is not None else now_local()
    views = (enrich_challan(c, now) for c in challans)
    return [v for v in views if v is not None]


def is_past_due(ch: Challan, now: datetime) -> bool:
    if ch.status not in _UNPAID or ch.due_date is None:
        return False
    return as_local_datetime(ch.due_date) < as_local_datetime(now)


def challan_stats(challans: Iterable[ChallanLike],
                  now: Optional[datetime] = None) -> ChallanStats:
    """Per-status counts and totals, plus how many unpaid challans are past due."""
    now = now if now is not None else now_local()
    groups: Dict[ChallanStatus, StatusStats] = {}
    overdue = 0

    for raw in challans:
        ch = as_challan(raw)
        if ch is None:
            continue
        g = groups.setdefault(ch.status, StatusStats(status=ch.status))
        g.count += 1
        if ch.totals is not None:
            g.total_amount += ch.totals.subtotal_amount
            g.total_meters += ch.totals.total_meters
            g.total_weight += ch.totals.total_weight
        if is_past_due(ch, now):
            overdue += 1

    stats = []
    for status in ChallanStatus:
        g = groups.get(status)
        if g is None:
            continue
        g.total_amount = money2(g.total_amount)
        g.total_meters = money2(g.total_meters)
        g.total_weight = qty4(g.total_weight)
        stats.append(g)

    return ChallanStats(stats=stats, overdue_count=overdue)
