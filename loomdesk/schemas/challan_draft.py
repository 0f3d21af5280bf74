# FILE: loomdesk/schemas/challan_draft.py
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, Field

from loomdesk.schemas.challan import Challan, ChallanBase, DateLike, LineItem
from loomdesk.schemas.party import Party


class ChallanDraftIn(ChallanBase):
    """New-challan form: the party master plus the ordered lines."""
    party: Optional[Party] = None
    party_id: Optional[str] = Field(
        None, validation_alias=AliasChoices("partyId", "party_id"))
    challan_number: Optional[str] = Field(
        None, validation_alias=AliasChoices("challanNumber", "challan_number"))
    issue_date: Optional[DateLike] = Field(
        None, validation_alias=AliasChoices("issueDate", "issue_date"))
    payment_terms_days: Optional[int] = Field(
        None,
        ge=0,
        validation_alias=AliasChoices("paymentTermsDays",
                                      "payment_terms_days"))
    items: List[LineItem] = Field(default_factory=list)
    notes: Optional[str] = None
    now: Optional[datetime] = None


class ChallanDraft(ChallanBase):
    challan: Challan
    # party with the new subtotal added to its outstanding
    party: Party
