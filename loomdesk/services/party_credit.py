# loomdesk/services/party_credit.py
from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping, Union

from loomdesk.core.config import settings
from loomdesk.schemas.party import Party, PartyCreditState
from loomdesk.utils.money import ZERO, money2, round_half_up, to_decimal


def available_credit(party: Party) -> Decimal:
    return money2(party.credit_limit - party.current_outstanding)


def credit_utilization(party: Party) -> Decimal:
    """Outstanding as % of the credit limit, 1 dp; 0 when no limit is set."""
    limit = to_decimal(party.credit_limit)
    if limit <= 0:
        return Decimal("0.0")
    pct = to_decimal(party.current_outstanding) / limit * Decimal("100")
    return round_half_up(pct, Decimal("0.1"))


def party_credit_state(
        party: Union[Party, Mapping[str, Any]]) -> PartyCreditState:
    if not isinstance(party, Party):
        party = Party.model_validate(party)

    available = available_credit(party)
    utilization = credit_utilization(party)
    warn_at = Decimal(str(settings.CREDIT_WARNING_PERCENT))

    return PartyCreditState(
        credit_limit=money2(party.credit_limit),
        current_outstanding=money2(party.current_outstanding),
        available_credit=available,
        display_available=max(available, money2(ZERO)),
        credit_utilization=utilization,
        is_near_credit_limit=utilization > warn_at,
        is_over_credit_limit=party.current_outstanding > party.credit_limit,
    )
