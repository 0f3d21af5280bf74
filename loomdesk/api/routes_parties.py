# FILE: loomdesk/api/routes_parties.py
from fastapi import APIRouter

from loomdesk.api.response import ok
from loomdesk.schemas.party import Party
from loomdesk.services.party_credit import party_credit_state

router = APIRouter()


@router.post("/credit")
def party_credit(payload: Party):
    return ok(party_credit_state(payload))
